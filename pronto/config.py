"""
Settings

Runtime settings read from the environment, with an optional .env file in
the working directory underneath it.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

from pronto.constants import (
    APP_NAME,
    DEFAULT_API_URL,
    DEFAULT_LOG_DIR,
    ENV_API_URL,
    ENV_CONFIG_DIR,
    ENV_HTTP_TIMEOUT,
    ENV_LOG_DIR,
)
from pronto.exceptions import ConfigurationError


def default_config_dir(env: Mapping[str, str]) -> Path:
    """Directory configstore uses: $XDG_CONFIG_HOME/configstore or ~/.config/configstore."""
    xdg = env.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else Path.home() / ".config"
    return base / "configstore"


@dataclass
class Settings:
    """Resolved settings for one run."""

    api_url: str = DEFAULT_API_URL
    config_dir: Optional[Path] = None
    log_dir: Path = Path(DEFAULT_LOG_DIR).expanduser()
    http_timeout: Optional[float] = None
    app_name: str = APP_NAME

    @property
    def config_path(self) -> Path:
        """JSON file backing the credential store."""
        directory = self.config_dir or default_config_dir(os.environ)
        return directory / f"{self.app_name}.json"


def _find_env_file(cwd: Optional[Path] = None) -> Optional[Path]:
    path = (cwd or Path.cwd()) / ".env"
    return path if path.exists() else None


def load_settings(
    environ: Optional[Mapping[str, str]] = None, cwd: Optional[Path] = None
) -> Settings:
    """
    Build Settings from .env values overlaid by the process environment.

    Args:
        environ: Environment mapping (defaults to os.environ)
        cwd: Directory searched for a .env file (defaults to the working directory)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If a value cannot be parsed
    """
    env: Dict[str, str] = {}
    env_file = _find_env_file(cwd)
    if env_file:
        env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
    env.update(os.environ if environ is None else environ)

    settings = Settings()

    api_url = env.get(ENV_API_URL)
    if api_url:
        settings.api_url = api_url.rstrip("/")

    config_dir = env.get(ENV_CONFIG_DIR)
    settings.config_dir = (
        Path(config_dir).expanduser() if config_dir else default_config_dir(env)
    )

    log_dir = env.get(ENV_LOG_DIR)
    if log_dir:
        settings.log_dir = Path(log_dir).expanduser()

    timeout = env.get(ENV_HTTP_TIMEOUT)
    if timeout:
        try:
            settings.http_timeout = float(timeout)
        except ValueError:
            raise ConfigurationError(
                f"Invalid {ENV_HTTP_TIMEOUT}: {timeout!r}",
                context="Expected a number of seconds",
            )
        if settings.http_timeout <= 0:
            raise ConfigurationError(
                f"Invalid {ENV_HTTP_TIMEOUT}: {timeout!r}",
                context="Timeout must be positive",
            )

    return settings
