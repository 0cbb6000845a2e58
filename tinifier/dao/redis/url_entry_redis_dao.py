"""Data Access Object (DAO) implementation for managing URL entries in Redis

This module provides a Redis-based implementation of UrlEntryBaseDAO. Every
entry is stored as its codec line (see tinifier.models.codec) under
`<prefix>:links:<short_url>:entry`, so entries read back from Redis follow the
same rules as entries loaded from the entry file.

Classes:
    UrlEntryRedisDAO:
        DAO for storing and retrieving UrlEntry in a Redis datastore.

Example:
    >>> from tinifier.models import UrlEntry
    >>> from tinifier.dao.redis import UrlEntryRedisDAO

    >>> dao = UrlEntryRedisDAO(prefix='tinifier:local')
    >>> dao.insert('b7fK2a', UrlEntry.create('https://example.com', 'b7fK2a'))
    UrlEntry(long_url='https://example.com', short_url='b7fK2a', ...)
    >>> dao.contains_key('b7fK2a')
    True
    >>> dao.remove('b7fK2a').long_url
    'https://example.com'
"""

from beartype import beartype

from tinifier.exceptions import EntryParseError
from tinifier.models import UrlEntry, to_line, parse_line
from tinifier.dao.base import UrlEntryBaseDAO
from tinifier.dao.redis.mixins import RedisClientMixin
from tinifier.dao.redis.helpers import handle_redis_connection_error
from tinifier.dao.exceptions import DataStoreError, UrlEntryAlreadyExistsError


class UrlEntryRedisDAO(RedisClientMixin, UrlEntryBaseDAO):
    """Redis-based Data Access Object (DAO) for managing URL entries

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        insert(short_url: str, entry: UrlEntry, **kwargs) -> UrlEntry:
            Store the entry's line with SET NX.
            Raises UrlEntryAlreadyExistsError when the short code is taken.
            Raises DataStoreError on connectivity issues with Redis.

        get(short_url: str, **kwargs) -> UrlEntry | None:
            Retrieve and parse the entry's line.

        remove(short_url: str, **kwargs) -> UrlEntry | None:
            Atomically GET and DEL the entry's line.

        contains_key(short_url: str, **kwargs) -> bool:
            EXISTS on the entry key.

        count(**kwargs) -> int:
            Number of entry keys under the prefix.
    """

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: str, entry: UrlEntry, **kwargs) -> UrlEntry:
        self._check_key(short_url, entry)
        created = self.redis.set(self.keys.link_entry_key(short_url), to_line(entry), nx=True)
        if not created:
            raise UrlEntryAlreadyExistsError(f"Short URL with code '{short_url}' already exists.")
        return entry

    @handle_redis_connection_error
    @beartype
    def get(self, short_url: str, **kwargs) -> UrlEntry | None:
        line = self.redis.get(self.keys.link_entry_key(short_url))
        return None if line is None else self._parse(short_url, line)

    @handle_redis_connection_error
    @beartype
    def remove(self, short_url: str, **kwargs) -> UrlEntry | None:
        link_entry_key = self.keys.link_entry_key(short_url)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(link_entry_key)
            pipe.delete(link_entry_key)
            line, _ = pipe.execute()

        return None if line is None else self._parse(short_url, line)

    @handle_redis_connection_error
    @beartype
    def contains_key(self, short_url: str, **kwargs) -> bool:
        return bool(self.redis.exists(self.keys.link_entry_key(short_url)))

    @handle_redis_connection_error
    def count(self, **kwargs) -> int:
        return sum(1 for _ in self.redis.scan_iter(match=self.keys.link_entry_key('*')))

    def _parse(self, short_url: str, line: str | bytes) -> UrlEntry:
        if isinstance(line, bytes):
            line = line.decode('utf-8')
        try:
            return parse_line(line)
        except EntryParseError as e:
            raise DataStoreError(f"Entry stored for short URL '{short_url}' is malformed.") from e
