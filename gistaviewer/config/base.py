"""
Base configuration for gistaviewer.

Shared settings and helper functions for the API client and its hosts.
"""

from __future__ import annotations

import os
import pathlib
from typing import TypeVar

import lazy_object_proxy
import pydantic
import pydantic_settings

T = TypeVar('T', bound='BaseGistaSettings')


class BaseGistaSettings(pydantic_settings.BaseSettings):
    """Shared configuration for everything that talks to the GitHub API."""

    model_config = pydantic_settings.SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,  # Fail fast on misconfiguration
        extra='forbid',  # Reject unknown environment variables
    )

    # Application metadata
    APP_NAME: str = 'gistaviewer'
    VERSION: str = '0.1.0'

    # GitHub REST API
    GITHUB_API_URL: str = 'https://api.github.com'
    GITHUB_API_VERSION: str = '2022-11-28'
    USER_AGENT: str = 'gistaviewer/0.1.0'
    REQUEST_TIMEOUT: float = 10.0  # seconds, per request

    @pydantic.field_validator('GITHUB_API_URL')
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not v.startswith(('http://', 'https://')):
            raise ValueError('GITHUB_API_URL must start with http:// or https://')
        return v.rstrip('/')

    @pydantic.field_validator('REQUEST_TIMEOUT')
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError('REQUEST_TIMEOUT must be positive')
        return v


def get_settings(settings_class: type[T], env_file: str | None = None) -> T:
    """
    Build settings, optionally from an explicit env file.

    The file comes from env_file, else from LOAD_ENV_FILE. With neither,
    values come from the process environment and ./.env.

    Raises:
        FileNotFoundError: If the chosen env file is missing
    """
    chosen = env_file or os.getenv('LOAD_ENV_FILE')
    if not chosen:
        return settings_class()

    path = pathlib.Path(chosen).resolve()
    if not path.is_file():
        raise FileNotFoundError(f'Environment file not found: {path}')
    return settings_class(_env_file=path)


def lazy_settings(settings_class: type[T]) -> T:
    """Proxy that builds the settings on first attribute access, so importing never reads the environment."""
    return lazy_object_proxy.Proxy(lambda: get_settings(settings_class))
