"""
Configuration directory, settings and logging

The config directory holds:
- oauth_client.json  OAuth client credentials downloaded from Google
- token.json         Stored user token (written by `gtask login`)
- config.yaml        Optional settings, e.g. `timeout: 10`
"""

import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError

APP_NAME = 'gtask'
OAUTH_CLIENT_FILE = 'oauth_client.json'
TOKEN_FILE = 'token.json'
SETTINGS_FILE = 'config.yaml'

DEFAULT_SETTINGS = {
    'timeout': 5.0,
}


def setup_logging(debug: bool = False) -> logging.Logger:
    """
    Setup logging for gtask

    Log lines go to stderr only. Without --debug only warnings are shown.

    Args:
        debug: Enable DEBUG level

    Returns:
        The `gtask` logger
    """
    logger = logging.getLogger(APP_NAME)

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - gtask - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    return logger


def default_config_dir() -> Path:
    """Return $XDG_CONFIG_HOME/gtask, falling back to ~/.config/gtask"""
    xdg = os.environ.get('XDG_CONFIG_HOME')
    if xdg:
        return Path(xdg) / APP_NAME
    try:
        return Path.home() / '.config' / APP_NAME
    except RuntimeError:
        # Home directory cannot be determined
        return Path(APP_NAME)


class Config:
    """Paths and settings for one invocation"""

    def __init__(self, config_dir: Optional[str] = None, quiet: bool = False, debug: bool = False):
        """
        Initialize config

        Args:
            config_dir: Override for the config directory (--config)
            quiet: Suppress informational output
            debug: Print debug logs to stderr
        """
        self.dir = Path(config_dir).expanduser() if config_dir else default_config_dir()
        self.quiet = quiet
        self.debug = debug
        self._settings: Optional[Dict[str, Any]] = None

    @property
    def oauth_client_path(self) -> Path:
        return self.dir / OAUTH_CLIENT_FILE

    @property
    def token_path(self) -> Path:
        return self.dir / TOKEN_FILE

    @property
    def settings_path(self) -> Path:
        return self.dir / SETTINGS_FILE

    def ensure_dir(self) -> None:
        """Create the config directory (mode 0700) if missing"""
        self.dir.mkdir(mode=0o700, parents=True, exist_ok=True)

    def has_oauth_client(self) -> bool:
        return self.oauth_client_path.exists()

    def has_token(self) -> bool:
        return self.token_path.exists()

    def remove_token(self) -> None:
        self.token_path.unlink()

    @property
    def settings(self) -> Dict[str, Any]:
        """Settings from config.yaml merged over the defaults, loaded once"""
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    @property
    def timeout(self) -> float:
        return self.settings['timeout']

    def _load_settings(self) -> Dict[str, Any]:
        """Load settings from YAML file"""
        settings = dict(DEFAULT_SETTINGS)

        if not self.settings_path.exists():
            return settings

        try:
            with open(self.settings_path, 'r') as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"invalid {SETTINGS_FILE}: {e}") from e

        if loaded is None:
            return settings
        if not isinstance(loaded, dict):
            raise ConfigError(f"invalid {SETTINGS_FILE}: expected a mapping")

        settings.update(loaded)

        timeout = settings['timeout']
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError(f"invalid {SETTINGS_FILE}: timeout must be a positive number")
        settings['timeout'] = float(timeout)

        logging.getLogger("gtask.Config").debug(f"Loaded settings from {self.settings_path}")
        return settings
