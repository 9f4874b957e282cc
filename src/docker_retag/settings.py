"""
Settings and configuration for docker-retag.

Centralizes configuration values and provides validation with fail-fast behavior.
Loads settings from environment variables when the CLI starts.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Optional

__all__ = ["Settings", "create_settings_from_env", "DEFAULT_REGISTRY"]

DEFAULT_REGISTRY = "https://index.docker.io/"

REGISTRY_ENV = "DOCKER_REGISTRY"
USERNAME_ENV = "DOCKER_USER"
PASSWORD_ENV = "DOCKER_PASS"
TIMEOUT_ENV = "DOCKER_RETAG_TIMEOUT"


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for docker-retag.

    Attributes:
        registry_url: Registry base URL, http:// or https://
        username: Username for registry authentication (empty = anonymous)
        password: Password for registry authentication (empty = anonymous)
        http_timeout_s: HTTP timeout in seconds; None imposes no deadline
    """
    registry_url: str
    username: str = ""
    password: str = ""
    http_timeout_s: Optional[float] = None

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.registry_url:
            raise ValueError("registry_url is required")

        url_pattern = r"^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$"
        if not re.match(url_pattern, self.registry_url):
            raise ValueError(f"Invalid registry_url format: {self.registry_url}")

        if self.http_timeout_s is not None and self.http_timeout_s <= 0:
            raise ValueError(f"http_timeout_s must be positive, got {self.http_timeout_s}")


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - DOCKER_REGISTRY (default: https://index.docker.io/)
        - DOCKER_USER (optional, may be empty)
        - DOCKER_PASS (optional, may be empty)
        - DOCKER_RETAG_TIMEOUT (optional, seconds)

    Returns:
        Settings object with validated configuration

    Raises:
        ValueError: If configuration is invalid

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    registry_url = os.getenv(REGISTRY_ENV) or DEFAULT_REGISTRY
    username = os.getenv(USERNAME_ENV, "")
    password = os.getenv(PASSWORD_ENV, "")

    timeout = os.getenv(TIMEOUT_ENV)
    try:
        http_timeout_s = float(timeout) if timeout else None
    except ValueError:
        raise ValueError(f"{TIMEOUT_ENV} must be a number of seconds, got {timeout!r}")

    return Settings(
        registry_url=registry_url,
        username=username,
        password=password,
        http_timeout_s=http_timeout_s,
    )
