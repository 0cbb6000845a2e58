"""Utility functions for application configuration management.

The configuration document has the following structure:

    {
        "active_backend": "file",
        "configs": {
            "file": {"path": "/tmp/tinifier"},
            "memory": {},
            "redis": {"host": "localhost", "port": 6379, "db": 0}
        }
    }

Built-in defaults (see DEFAULT_CONFIG) are used as-is unless a YAML file is
given through `TINIFIER_CONFIG`, in which case its `active_backend` and the
per-backend sections are merged over the defaults. Environment variables
override the document:

    TINIFIER_BACKEND  – name of the active backend
    TINIFIER_FILE     – path of the entry file used by the file backend

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to 'local'.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the key prefix for Redis, or None if `APP_NAME` is not set.

    load_document() -> dict
        Return the full configuration document.

    load_config(backend: str | None = None) -> dict
        Return the active backend's section as {<backend>: {...}}.

Example:
    >>> os.environ['TINIFIER_BACKEND'] = 'redis'
    >>> load_config()
    {'redis': {'host': 'localhost', 'port': 6379, 'db': 0}}
"""

import os
import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from tinifier.constants import ENV, Backend, DEFAULT_FILE_LOCATION
from tinifier.exceptions import BadConfigurationError
from tinifier.utils.helpers import load_yaml


logger = logging.getLogger(__name__)

# fmt: off
DEFAULT_CONFIG: dict[str, Any] = {
    'active_backend': Backend.FILE.value,
    'configs': {
        Backend.FILE.value: {'path': DEFAULT_FILE_LOCATION},
        Backend.MEMORY.value: {},
        Backend.REDIS.value: {'host': 'localhost', 'port': 6379, 'db': 0},
    },
}
# fmt: on


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'"""
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for Redis keys

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'tinifier'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'tinifier:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def _config_path() -> Path | None:
    path = os.environ.get(ENV.Tinifier.CONFIG)
    return Path(path).expanduser() if path else None


def load_document() -> dict[str, Any]:
    """Return the configuration document, defaults merged with the YAML file

    Returns:
        dict[str, Any]: Configuration document (see module docstring).

    Raises:
        FileNotFoundError:
            If `TINIFIER_CONFIG` points to a missing file.
        BadConfigurationError:
            If the YAML file can't be parsed or has an unexpected structure.
    """
    document = copy.deepcopy(DEFAULT_CONFIG)

    path = _config_path()
    if path is None:
        return document

    try:
        loaded = load_yaml(path)
    except yaml.YAMLError as e:
        raise BadConfigurationError(f'Configuration file {path} is not valid YAML.') from e

    configs = loaded.get('configs') or {} if isinstance(loaded, dict) else None
    if not isinstance(configs, dict):
        raise BadConfigurationError(f'Configuration file {path} must be a mapping with a "configs" mapping.')

    if 'active_backend' in loaded:
        document['active_backend'] = loaded['active_backend']
    for backend, options in configs.items():
        if options is not None and not isinstance(options, dict):
            raise BadConfigurationError(f'Configuration for backend "{backend}" must be a mapping.')
        document['configs'].setdefault(backend, {}).update(options or {})

    logger.debug('Loaded configuration file.', extra={'configPath': str(path)})
    return document


def load_config(backend: str | None = None) -> dict[str, dict[str, Any]]:
    """Load the configuration of the active persistence backend

    The active backend is, in order of precedence: the `backend` argument,
    `TINIFIER_BACKEND`, then the document's `active_backend`.

    Args:
        backend (str | None):
            Name of the backend to use instead of the configured one.

    Returns:
        dict: {<backend name>: <backend options>}

    Raises:
        BadConfigurationError:
            If the active backend is unknown.

    Example:
        >>> load_config('memory')
        {'memory': {}}
    """
    document = load_document()
    active = backend or os.environ.get(ENV.Tinifier.BACKEND) or document['active_backend']
    if active not in set(Backend):
        supported = ', '.join(f"'{name}'" for name in Backend)
        raise BadConfigurationError(f"Unknown backend '{active}' (supported: {supported}).")

    options = dict(document['configs'].get(active) or {})
    if active == Backend.FILE and os.environ.get(ENV.Tinifier.FILE):
        options['path'] = os.environ[ENV.Tinifier.FILE]

    logger.debug('Loaded backend configuration.', extra={'backend': str(active)})
    return {str(active): options}
