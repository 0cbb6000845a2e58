"""Shared Redis client setup for Redis-backed DAOs.

Classes:
    RedisClientMixin:
        Builds (or adopts) the Redis client, the key schema and checks
        connectivity once on initialization.

Example:
    >>> class UrlEntryRedisDAO(RedisClientMixin, UrlEntryBaseDAO):
    ...     pass
    ...
    >>> dao = UrlEntryRedisDAO(redis_url='redis://localhost:6379/0', prefix='tinifier:local')
    >>> dao.keys.link_entry_key('b7fK2a')
    'tinifier:local:links:b7fK2a:entry'
"""

import logging
from typing import Optional

import redis

from tinifier.dao.redis.redis_key_schema import RedisKeySchema
from tinifier.dao.redis.helpers import redis_location
from tinifier.dao.exceptions import DataStoreError


logger = logging.getLogger(__name__)


class RedisClientMixin:
    """Mixin holding the Redis client and key schema of a DAO.

    Attributes:
        redis (redis.Redis):
            Client used by subclasses for every command.
        keys (RedisKeySchema):
            Key schema, namespaced with the given prefix.
    """

    def __init__(
        self,
        redis_host: Optional[str] = 'localhost',
        redis_port: Optional[int] = 6379,
        redis_db: Optional[int] = 0,
        redis_decode_responses: Optional[bool] = True,
        redis_username: Optional[str] = None,
        redis_password: Optional[str] = None,
        redis_url: Optional[str] = None,
        redis_client: Optional[redis.Redis] = None,
        prefix: Optional[str] = None,
    ):
        """Set up the client and PING the server

        A pre-initialized `redis_client` wins over `redis_url`, which wins
        over the individual connection parameters. The parameter names match
        the keys of the `redis` configuration section, prefixed with `redis_`.

        Raises:
            DataStoreError:
                If the server doesn't answer the PING.
        """
        if redis_client is not None:
            self.redis = redis_client
        elif redis_url is not None:
            self.redis = redis.Redis.from_url(redis_url, decode_responses=redis_decode_responses)
        else:
            # fmt: off
            self.redis = redis.Redis(host=redis_host,
                                     port=int(redis_port),
                                     db=int(redis_db),
                                     decode_responses=redis_decode_responses,
                                     username=redis_username,
                                     password=redis_password)
            # fmt: on

        self.keys = RedisKeySchema(prefix=prefix)
        self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """PING Redis

        Returns:
            bool: True if Redis answered. False only when `raise_error` is off.

        Raises:
            DataStoreError:
                If Redis is unreachable and `raise_error` is on.
        """
        try:
            self.redis.ping()
        except redis.exceptions.ConnectionError as e:
            location = redis_location(self.redis)
            if raise_error:
                raise DataStoreError(f"Can't connect to Redis at {location}. Check the redis configuration section.") from e
            logger.warning('Redis healthcheck failed.', extra={'redis': location})
            return False

        logger.debug('Redis healthcheck passed.')
        return True
