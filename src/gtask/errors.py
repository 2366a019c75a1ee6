"""
Error taxonomy and exit codes

Every failure a command can hit is one of four families, each mapped to
exactly one exit code. Commands raise; the dispatcher prints the single
`error: ` line and returns the code.
"""

EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1
EXIT_AUTH_ERROR = 2
EXIT_BACKEND_ERROR = 3


class GtaskError(Exception):
    """Base class for all errors reported to the user"""

    exit_code = EXIT_USER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class UserError(GtaskError):
    """Input the user can fix by rephrasing the command"""

    exit_code = EXIT_USER_ERROR


class AuthError(GtaskError):
    """Missing or invalid credentials"""

    exit_code = EXIT_AUTH_ERROR


class ConfigError(GtaskError):
    """Unreadable or invalid configuration"""

    exit_code = EXIT_AUTH_ERROR


class BackendError(GtaskError):
    """Network, timeout or provider failure"""

    exit_code = EXIT_BACKEND_ERROR

    def __init__(self, detail: str):
        super().__init__(f"backend error: {detail}")
        self.detail = detail


class ListFetchError(BackendError):
    """A list could not be fetched while rendering the overview"""

    def __init__(self, title: str, detail: str):
        super().__init__(detail)
        self.title = title
        self.message = f"failed to fetch list: {title}: {detail}"


# ==================== User errors ====================

class InvalidReference(UserError):
    def __init__(self, token: str):
        super().__init__(f"invalid task reference: {token}")
        self.token = token


class ReferenceRequired(UserError):
    def __init__(self):
        super().__init__("task reference required")


class TooManyLists(UserError):
    def __init__(self):
        super().__init__("too many lists (max 26)")


class OutOfRange(UserError):
    def __init__(self, number: int):
        super().__init__(f"task number out of range: {number}")
        self.number = number


class ListLetterNotFound(UserError):
    def __init__(self, letter: str):
        super().__init__(f"list letter not found: {letter}")
        self.letter = letter


class ListNotFound(UserError):
    def __init__(self, name: str):
        super().__init__(f"list not found: {name}")
        self.name = name


class AmbiguousList(UserError):
    def __init__(self, name: str):
        super().__init__(f"ambiguous list name: {name}")
        self.name = name


class UnknownCommand(UserError):
    def __init__(self, token: str):
        super().__init__(f"unknown command: {token}")
        self.token = token


class UnknownFlag(UserError):
    def __init__(self, token: str):
        super().__init__(f"unknown flag: {token}")
        self.token = token


class FlagNeedsArgument(UserError):
    def __init__(self, flag: str):
        super().__init__(f"flag needs an argument: {flag}")
        self.flag = flag


class InvalidFlagValue(UserError):
    def __init__(self, flag: str, value: str):
        super().__init__(f'invalid value "{value}" for flag {flag}')
        self.flag = flag
        self.value = value
