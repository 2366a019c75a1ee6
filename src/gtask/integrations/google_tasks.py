"""
Google Tasks Integration

Talks to the Google Tasks REST API through a google-auth AuthorizedSession.

Architecture:
- `gtask login` runs the installed-app OAuth flow and stores token.json
- Every other command loads token.json, refreshing it when expired
- Each HTTP call carries the configured timeout; nothing is retried
"""

import os
import json
import errno
import functools
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from google.auth.exceptions import GoogleAuthError, RefreshError, TransportError
from google.auth.transport.requests import AuthorizedSession, Request
from google.oauth2.credentials import Credentials

from ..config import Config
from ..errors import AuthError, BackendError
from ..source import DEFAULT_LIST_ID, PAGE_SIZE, Task, TaskList, TaskSource

TASKS_BASE_URL = 'https://tasks.googleapis.com/tasks/v1'
TASKS_SCOPES = ['https://www.googleapis.com/auth/tasks']

REAUTH_HINT = 'token expired or revoked (run: gtask login)'

# Local callback ports tried by `gtask login`
OAUTH_START_PORT = 8085
OAUTH_MAX_PORT_ATTEMPTS = 5

# Seconds `gtask login` waits for the browser callback
OAUTH_CALLBACK_TIMEOUT = 300


class GoogleTasksClient(TaskSource):
    """Task source backed by Google Tasks"""

    def __init__(self, session: AuthorizedSession, timeout: float = 5.0):
        """
        Initialize Google Tasks client

        Args:
            session: Authorized HTTP session
            timeout: Seconds allowed for each HTTP call
        """
        self.session = session
        self.timeout = timeout
        self.logger = logging.getLogger("gtask.GoogleTasks")

    @classmethod
    def from_config(cls, config: Config) -> 'GoogleTasksClient':
        """Build a client from the stored token and configured timeout"""
        timeout = config.timeout
        credentials = load_credentials(config.token_path, timeout=timeout)
        return cls(AuthorizedSession(credentials), timeout=timeout)

    # ==================== Lists ====================

    def list_collections(self) -> List[TaskList]:
        """
        Get all task lists in API order

        The default list is reported with id `@default` so commands never
        need its real id.
        """
        default = self._request('GET', '/users/@me/lists/@default')
        default_real_id = default.get('id')

        lists = []
        page_token = None
        while True:
            params = {'maxResults': 100}
            if page_token:
                params['pageToken'] = page_token

            response = self._request('GET', '/users/@me/lists', params=params)

            for item in response.get('items', []):
                is_default = item.get('id') == default_real_id
                lists.append(TaskList(
                    id=DEFAULT_LIST_ID if is_default else item['id'],
                    title=item.get('title', ''),
                    is_default=is_default
                ))

            page_token = response.get('nextPageToken')
            if not page_token:
                break

        self.logger.debug(f"Found {len(lists)} task lists")
        return lists

    def create_list(self, title: str) -> None:
        self._request('POST', '/users/@me/lists', body={'title': title})

    def delete_list(self, list_id: str) -> None:
        self._request('DELETE', f"/users/@me/lists/{_quote(list_id)}")

    # ==================== Tasks ====================

    def open_tasks_page(self, list_id: str, page: int) -> List[Task]:
        """
        Get one page of open tasks

        The API pages with tokens, not numbers, so earlier pages are walked
        to reach the requested one.

        Args:
            list_id: List to read
            page: 1-based page number

        Returns:
            Tasks in API order, empty when the page does not exist
        """
        path = f"/lists/{_quote(list_id)}/tasks"
        params = _open_task_params(PAGE_SIZE)

        page_token = None
        for _ in range(page - 1):
            response = self._request('GET', path, params=_with_token(params, page_token))
            page_token = response.get('nextPageToken')
            if not page_token:
                return []

        response = self._request('GET', path, params=_with_token(params, page_token))
        return self._parse_tasks(response.get('items', []))

    def has_open_tasks(self, list_id: str) -> bool:
        response = self._request(
            'GET',
            f"/lists/{_quote(list_id)}/tasks",
            params=_open_task_params(1)
        )
        return bool(response.get('items'))

    def create_task(self, list_id: str, title: str) -> None:
        self._request('POST', f"/lists/{_quote(list_id)}/tasks", body={'title': title})

    def complete_task(self, list_id: str, task_id: str) -> None:
        self._request(
            'PATCH',
            f"/lists/{_quote(list_id)}/tasks/{_quote(task_id)}",
            body={'status': 'completed'}
        )

    def delete_task(self, list_id: str, task_id: str) -> None:
        self._request('DELETE', f"/lists/{_quote(list_id)}/tasks/{_quote(task_id)}")

    # ==================== HTTP ====================

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Perform one API call

        Returns:
            Decoded JSON body ({} for empty responses)

        Raises:
            AuthError: Credentials rejected or refresh failed
            BackendError: Timeout, network or provider failure
        """
        url = TASKS_BASE_URL + path
        self.logger.debug(f"{method} {path} {params or ''}")

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=body,
                timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            raise BackendError('request timed out') from None
        except RefreshError as e:
            raise AuthError(REAUTH_HINT) from e
        except TransportError as e:
            raise BackendError(str(e)) from e
        except GoogleAuthError as e:
            raise AuthError(str(e)) from e
        except requests.exceptions.RequestException as e:
            raise BackendError(str(e)) from e

        status = response.status_code
        self.logger.debug(f"{method} {path} -> {status}")

        if status in (401, 403):
            raise AuthError(REAUTH_HINT)
        if status == 404:
            raise BackendError('not found')
        if status >= 400:
            raise BackendError(f"HTTP {status}: {_error_message(response)}")

        if status == 204 or not response.content:
            return {}

        try:
            return response.json()
        except ValueError:
            raise BackendError(f"invalid response from {method} {path}") from None

    def _parse_tasks(self, items: List[Dict[str, Any]]) -> List[Task]:
        """
        Parse API task resources into Task objects

        Order is kept exactly as returned.
        """
        return [
            Task(
                id=item['id'],
                title=item.get('title', ''),
                status=item.get('status', 'needsAction'),
                position=item.get('position', '')
            )
            for item in items
        ]


def _quote(value: str) -> str:
    return quote(value, safe='@')


def _open_task_params(max_results: int) -> Dict[str, Any]:
    return {
        'maxResults': max_results,
        'showCompleted': 'false',
        'showDeleted': 'false',
        'showHidden': 'false'
    }


def _with_token(params: Dict[str, Any], page_token: Optional[str]) -> Dict[str, Any]:
    if not page_token:
        return params
    return dict(params, pageToken=page_token)


def _error_message(response: requests.Response) -> str:
    """Pull the human-readable message out of an API error body"""
    try:
        payload = response.json()
    except ValueError:
        return response.text.strip() or response.reason or 'request failed'

    error = payload.get('error') if isinstance(payload, dict) else None
    if isinstance(error, dict) and error.get('message'):
        return error['message']
    if isinstance(error, str):
        return error
    return response.reason or 'request failed'


# ==================== Credentials ====================

def load_credentials(token_path: Path, timeout: float = 5.0) -> Credentials:
    """
    Load stored credentials, refreshing and rewriting them when expired

    Args:
        token_path: Path of token.json
        timeout: Seconds allowed for the refresh call

    Raises:
        AuthError: token.json unreadable or refresh rejected
        BackendError: Refresh failed on the network
    """
    try:
        credentials = Credentials.from_authorized_user_file(str(token_path), scopes=TASKS_SCOPES)
    except (OSError, ValueError) as e:
        raise AuthError(f"invalid token.json: {e}") from e

    if credentials.expired and credentials.refresh_token:
        try:
            credentials.refresh(functools.partial(Request(), timeout=timeout))
        except RefreshError as e:
            raise AuthError(REAUTH_HINT) from e
        except TransportError as e:
            raise BackendError(str(e)) from e
        save_token(token_path, credentials)

    return credentials


def connect(config: Config) -> GoogleTasksClient:
    """
    Build the authenticated task source for a command

    Raises:
        AuthError: oauth_client.json or token.json missing or invalid
        ConfigError: config.yaml invalid
    """
    if not config.has_oauth_client():
        raise AuthError(f"oauth_client.json not found in {config.dir}")
    if not config.has_token():
        raise AuthError("not logged in (run: gtask login)")
    return GoogleTasksClient.from_config(config)


def token_is_valid(token_path: Path) -> bool:
    """A token is usable when it parses and carries a refresh token"""
    try:
        with open(token_path, 'r') as f:
            data = json.load(f)
    except (OSError, ValueError):
        return False
    return isinstance(data, dict) and bool(data.get('refresh_token'))


def save_token(token_path: Path, credentials: Credentials) -> None:
    """Write credentials as JSON, readable by the owner only"""
    token_path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    fd = os.open(str(token_path), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, 'w') as f:
        f.write(credentials.to_json())


def run_login_flow(config: Config) -> Credentials:
    """
    Run the installed-app OAuth flow

    Prints the consent URL and waits for the browser to hit the local
    callback server. Callback ports are tried in order until one binds.

    Returns:
        Credentials with a refresh token

    Raises:
        AuthError: No port could be bound, the callback never arrived, or
            the code exchange failed
    """
    from google_auth_oauthlib.flow import InstalledAppFlow

    logger = logging.getLogger("gtask.GoogleTasks")

    try:
        flow = InstalledAppFlow.from_client_secrets_file(
            str(config.oauth_client_path),
            scopes=TASKS_SCOPES
        )
    except (OSError, ValueError) as e:
        raise AuthError(f"invalid oauth_client.json: {e}") from e

    for port in range(OAUTH_START_PORT, OAUTH_START_PORT + OAUTH_MAX_PORT_ATTEMPTS):
        try:
            credentials = flow.run_local_server(
                host='localhost',
                port=port,
                open_browser=False,
                authorization_prompt_message='Open this URL in your browser:\n{url}',
                success_message='Authentication successful. You may close this window.',
                timeout_seconds=OAUTH_CALLBACK_TIMEOUT,
                access_type='offline',
                prompt='consent'
            )
        except OSError as e:
            if e.errno != errno.EADDRINUSE:
                raise AuthError(f"failed to exchange code for token: {e}") from e
            logger.debug(f"Port {port} in use, trying next")
            continue
        except AttributeError as e:
            # The server returns without a request URI when the wait times out
            raise AuthError("oauth callback timed out") from e
        except Exception as e:
            raise AuthError(f"failed to exchange code for token: {e}") from e

        logger.debug(f"OAuth callback received on localhost:{port}")
        return credentials

    raise AuthError("could not bind to local port for OAuth callback")
