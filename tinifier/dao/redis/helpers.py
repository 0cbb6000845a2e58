import functools
from typing import Any, TypeVar
from collections.abc import Callable

import redis

from tinifier.dao.exceptions import DataStoreError


__all__ = []


F = TypeVar("F", bound=Callable[..., Any])


def redis_location(client: redis.Redis) -> str:
    """Describe where a client connects to, as <host>:<port>/<db>."""
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_connection_error(method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connection errors

    Args:
        method (Callable[..., Any]):
            DAO method sending Redis commands, which may raise redis.exceptions.ConnectionError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError instead.

    Example:
        >>> @handle_redis_connection_error
        ... def count(self):
        ...     return self.redis.dbsize()
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except redis.exceptions.ConnectionError as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e

    return wrapper
