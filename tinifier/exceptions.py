from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tinifier.models import UrlEntry


class TinifierError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:tinifier_error'


class EntryParseError(TinifierError):
    """Raised when a persisted line does not match the entry grammar."""

    error_code = 'model:entry_parse_error'

    def __init__(self, message: str, line: str | None = None):
        super().__init__(message)
        self.message = message
        self.line = line


class ShortCodeCollisionError(TinifierError):
    """Raised when a generated short code is already taken in the store."""

    error_code = 'app:short_code_collision_error'

    def __init__(self, short_url: str, long_url: str, existing: 'UrlEntry | None' = None):
        super().__init__(f"Short URL '{short_url}' for '{long_url}' is already taken.")
        self.short_url = short_url
        self.long_url = long_url
        self.existing = existing


class ConfigurationError(TinifierError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
