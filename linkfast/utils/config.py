"""Utility functions for application configuration management.

Configuration lives in YAML files, one per application environment (`APP_ENV`):

    config/
    ├── local.yml
    └── prod.yml

A configuration document looks like this (every key is optional; missing keys
fall back to the built-in defaults in DEFAULT_CONFIG):

    app:
      base_url: https://links.example.com
    redis:
      host: localhost
      port: 6379
      db: 0
      connect_timeout: 1.0
    cache:
      ttl: 300
      cleanup_interval: 600
      maxsize: 100000
    shortener:
      max_attempts: 5
    clicks:
      max_workers: 1

Environment variables:
    APP_ENV           – Application environment, selects config/<APP_ENV>.yml ('local' by default).
    APP_NAME          – Application name, used to namespace store keys.
    PROJECT_ROOT      – Directory holding the `config/` folder.
    LINKFAST_CONFIG   – Explicit path to a configuration file (takes precedence).
    BASE_URL          – Overrides `app.base_url`.

Typical usage:
    >>> from linkfast.utils.config import load_config
    >>> config = load_config()
    >>> config['redis']['host']
    'localhost'
"""

import os
import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from linkfast.types import AppConfiguration
from linkfast.constants import ENV, TTL, Defaults, ShortCode
from linkfast.exceptions import BadConfigurationError


logger = logging.getLogger(__name__)


DEFAULT_CONFIG: AppConfiguration = {
    'app': {
        'base_url': None,
    },
    'redis': {
        'host': 'localhost',
        'port': 6379,
        'db': 0,
        'username': None,
        'password': None,
        'connect_timeout': Defaults.REDIS_CONNECT_TIMEOUT,
    },
    'cache': {
        'ttl': TTL.CACHE_DEFAULT,
        'cleanup_interval': TTL.CACHE_CLEANUP,
        'maxsize': Defaults.CACHE_MAXSIZE,
    },
    'shortener': {
        'max_attempts': ShortCode.MAX_ATTEMPTS,
    },
    'clicks': {
        'max_workers': Defaults.CLICK_WORKERS,
    },
}


def app_env() -> str:
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def project_root() -> Path:
    return Path(os.environ.get(ENV.App.PROJECT_ROOT, Path(__file__).resolve().parents[2]))


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'linkfast'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'linkfast:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def config_path() -> tuple[Path, bool]:
    """Return the configuration file path and whether it was given explicitly"""
    explicit = os.environ.get(ENV.App.CONFIG_PATH)
    if explicit:
        return Path(explicit), True
    return project_root() / 'config' / f'{app_env()}.yml', False


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config() -> AppConfiguration:
    """Load the application configuration

    Built-in defaults are deep-merged with the YAML document found at
    `LINKFAST_CONFIG` (or `<project root>/config/<APP_ENV>.yml`), then
    environment variable overrides are applied.

    Returns:
        dict: The merged configuration.

    Raises:
        BadConfigurationError:
            If an explicitly configured file is missing, the YAML is invalid,
            or the document (or one of its sections) is not a mapping.
    """
    path, explicit = config_path()

    document: dict[str, Any] = {}
    if path.is_file():
        try:
            with path.open(encoding='utf-8') as f:
                document = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise BadConfigurationError(f'Invalid YAML in configuration file {path}.') from e
        logger.debug('Loaded configuration file.', extra={'configPath': str(path), 'appEnv': app_env()})
    elif explicit:
        raise BadConfigurationError(f'Configuration file {path} does not exist.')
    else:
        logger.debug('No configuration file found, using defaults.', extra={'configPath': str(path)})

    if not isinstance(document, dict):
        raise BadConfigurationError(f'Configuration file {path} must contain a mapping (got {type(document).__name__}).')
    for section, value in document.items():
        if section in DEFAULT_CONFIG and not isinstance(value, dict):
            raise BadConfigurationError(f"Configuration section '{section}' must be a mapping.")

    config = _deep_merge(DEFAULT_CONFIG, document)

    if base_url_override := os.environ.get(ENV.App.BASE_URL):
        config['app']['base_url'] = base_url_override

    return config
