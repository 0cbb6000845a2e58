import functools
from typing import Any, TypeVar
from collections.abc import Callable

from tinifier.dao.exceptions import DataStoreError


__all__ = []


F = TypeVar("F", bound=Callable[..., Any])


def handle_file_error(method: F) -> F:
    """Wrap file-interacting DAO methods to handle OS errors

    Args:
        method (Callable[..., Any]):
            DAO method performing file operations which may raise OSError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on file access issues.

    Example:
        >>> @handle_file_error
        ... def read_lines(self):
        ...     return self.path.read_text().splitlines()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except OSError as e:
            raise DataStoreError(f"Can't access entry file at {self.path}.") from e

    return wrapper


def line_key(line: str) -> str:
    """Return the short code field of a persisted line (text before the first colon)."""
    return line.split(':', 1)[0]
