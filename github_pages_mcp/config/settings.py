"""
Runtime configuration for the GitHub Pages MCP server.

Settings are read from environment variables once at process start and
passed explicitly into the server and the GitHub client. Nothing in the
package reads the environment after startup.

Environment Variables:
    GITHUB_TOKEN        - Token used to authenticate GitHub API calls
    GITHUB_API_URL      - Base URL of the GitHub REST API
                          (default: https://api.github.com)
    GITHUB_API_TIMEOUT  - Per-request timeout in seconds (default: 30)
    LOG_LEVEL           - Logging level name (default: INFO)

A missing token does not prevent startup. The first GitHub API call fails
with an authentication error instead.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_LOG_LEVEL = "INFO"

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigurationError(ValueError):
    """Raised when an environment variable holds an unusable value."""
    pass


@dataclass(frozen=True)
class Settings:
    """Immutable server settings."""
    github_token: Optional[str] = None
    api_url: str = DEFAULT_API_URL
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def has_token(self) -> bool:
        """Check if a GitHub token is configured."""
        return bool(self.github_token)

    @property
    def log_level_value(self) -> int:
        """Numeric logging level for ``logging.basicConfig``."""
        return getattr(logging, self.log_level)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from environment variables.

    Args:
        environ: Mapping to read from (default: ``os.environ``)

    Returns:
        Settings instance

    Raises:
        ConfigurationError: If the timeout or log level cannot be parsed

    Example:
        >>> load_settings({"GITHUB_TOKEN": "ghp_x", "LOG_LEVEL": "debug"}).log_level
        'DEBUG'
    """
    if environ is None:
        environ = os.environ

    token = environ.get("GITHUB_TOKEN", "").strip() or None
    api_url = environ.get("GITHUB_API_URL", "").strip() or DEFAULT_API_URL

    raw_timeout = environ.get("GITHUB_API_TIMEOUT", "").strip()
    if raw_timeout:
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(
                f"GITHUB_API_TIMEOUT must be a number of seconds, got '{raw_timeout}'"
            )
        if timeout <= 0:
            raise ConfigurationError(
                f"GITHUB_API_TIMEOUT must be positive, got '{raw_timeout}'"
            )
    else:
        timeout = DEFAULT_TIMEOUT_SECONDS

    log_level = (environ.get("LOG_LEVEL", "").strip() or DEFAULT_LOG_LEVEL).upper()
    if log_level not in VALID_LOG_LEVELS:
        available = ', '.join(VALID_LOG_LEVELS)
        raise ConfigurationError(
            f"Unknown LOG_LEVEL: '{log_level}'. "
            f"Available levels: {available}"
        )

    return Settings(
        github_token=token,
        api_url=api_url.rstrip("/"),
        timeout=timeout,
        log_level=log_level,
    )
