from enum import StrEnum


# Author recorded on entries when no identity is available
DEFAULT_AUTHOR = 'SYSTEM'

# Default location of the append-only entry file
DEFAULT_FILE_LOCATION = '/tmp/tinifier'  # noqa: S108


class Backend(StrEnum):
    """Names of the available persistence backends."""

    MEMORY = 'memory'
    FILE = 'file'
    REDIS = 'redis'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'
        LOG_FORMAT = 'LOG_FORMAT'  # rich | json
        USER = 'USER'

    class Tinifier(StrEnum):
        CONFIG = 'TINIFIER_CONFIG'  # path to an optional YAML config file
        BACKEND = 'TINIFIER_BACKEND'
        FILE = 'TINIFIER_FILE'
