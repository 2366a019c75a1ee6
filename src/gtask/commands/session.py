"""
Session commands: login, logout
"""

from ..errors import AuthError
from ..integrations.google_tasks import run_login_flow, save_token, token_is_valid
from ..registry import Command, Invocation


class LoginCommand(Command):
    name = 'login'
    synopsis = 'Authenticate with Google'
    usage = 'gtask login [common flags]'
    requires_auth = False

    def run(self, inv: Invocation) -> None:
        config = inv.config

        if not config.has_oauth_client():
            raise AuthError(f"oauth_client.json not found in {config.dir}")

        if config.has_token() and token_is_valid(config.token_path):
            inv.say('already logged in')
            return

        credentials = run_login_flow(config)

        try:
            config.ensure_dir()
            save_token(config.token_path, credentials)
        except OSError as e:
            raise AuthError(f"failed to save token: {e}") from e

        inv.say('ok')


class LogoutCommand(Command):
    name = 'logout'
    synopsis = 'Remove stored credentials'
    usage = 'gtask logout [common flags]'
    requires_auth = False

    def run(self, inv: Invocation) -> None:
        if not inv.config.has_token():
            inv.say('not logged in')
            return

        try:
            inv.config.remove_token()
        except OSError as e:
            raise AuthError(f"failed to remove token: {e}") from e

        inv.say('ok')
