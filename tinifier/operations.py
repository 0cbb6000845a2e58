"""Operations composing the encoder, the entry model and a persistence backend

Functions:
    create_store(config) -> UrlEntryBaseDAO
        Build the persistence backend described by a load_config() result.
    add_url(long_url, store, author) -> UrlEntry
        Shorten a URL and store the new entry.
    add_entry(entry, store) -> UrlEntry
        Store a prebuilt entry under the short code of its long URL.
    edit_entry(short_url, request, store, reassign_author) -> UrlEntry | None
        Apply a partial update to a stored entry and persist it.
    get_url(short_url, store) -> UrlEntry | None
        Look up an entry.
    remove_url(short_url, store) -> UrlEntry | None
        Remove an entry.

Example:
    >>> from tinifier.dao import UrlEntryMemoryDAO
    >>> store = UrlEntryMemoryDAO()
    >>> entry = add_url('https://example.com', store, author='alice')
    >>> get_url(entry.short_url, store) == entry
    True
"""

import logging
from dataclasses import replace
from datetime import datetime, UTC
from typing import Any

from tinifier.constants import DEFAULT_AUTHOR, Backend
from tinifier.exceptions import BadConfigurationError, ShortCodeCollisionError
from tinifier.models import UrlEntry, UrlEntryRequest, to_line
from tinifier.dao import UrlEntryBaseDAO, UrlEntryMemoryDAO, UrlEntryFileDAO
from tinifier.utils.config import app_prefix
from tinifier.utils.shortener import generate_shortcode


logger = logging.getLogger(__name__)


def create_store(config: dict[str, dict[str, Any]]) -> UrlEntryBaseDAO:
    """Build the persistence backend described by a load_config() result

    Args:
        config (dict):
            {<backend name>: <backend options>}, as returned by load_config().

    Returns:
        UrlEntryBaseDAO: The initialized backend.

    Raises:
        BadConfigurationError:
            If the config doesn't name exactly one known backend.
        DataStoreError:
            If the backend can't reach its data store.

    Example:
        >>> create_store({'file': {'path': '/tmp/tinifier'}})
        <tinifier.dao.file.url_entry_file_dao.UrlEntryFileDAO object at ...>
    """
    if len(config) != 1:
        raise BadConfigurationError(f'Expected exactly one backend configuration (given: {sorted(config)}).')

    backend, options = next(iter(config.items()))
    options = options or {}

    match backend:
        case Backend.MEMORY:
            return UrlEntryMemoryDAO()
        case Backend.FILE:
            return UrlEntryFileDAO(options['path']) if 'path' in options else UrlEntryFileDAO()
        case Backend.REDIS:
            from tinifier.dao.redis import UrlEntryRedisDAO

            redis_config = {f'redis_{k}': v for k, v in options.items()}
            return UrlEntryRedisDAO(**redis_config, prefix=app_prefix())
        case _:
            raise BadConfigurationError(f"Unknown backend '{backend}'.")


def _shortcode_for(long_url: str) -> str:
    short_url = generate_shortcode(long_url)
    if not short_url:
        # Only a hash value of 0 encodes to an empty code
        raise ValueError(f"Long URL '{long_url}' hashes to 0 and has no usable short code.")
    return short_url


def add_url(long_url: str, store: UrlEntryBaseDAO, author: str = DEFAULT_AUTHOR) -> UrlEntry:
    """Shorten a URL and store the new entry

    Args:
        long_url (str):
            The URL to shorten. It is not validated.
        store (UrlEntryBaseDAO):
            Persistence backend.
        author (str):
            Identity recorded as the entry's author.

    Returns:
        UrlEntry: The stored entry.

    Raises:
        ShortCodeCollisionError:
            If the URL's short code is already taken, including by an
            earlier add_url() of the same URL. Nothing is written.
        ValueError:
            If the URL's short code is empty.
        DataStoreError:
            If the backend fails to store the entry.
    """
    short_url = _shortcode_for(long_url)
    if store.contains_key(short_url):
        existing = store.get(short_url)
        logger.info('Short URL collision.', extra={'shortUrl': short_url, 'longUrl': long_url})
        raise ShortCodeCollisionError(short_url=short_url, long_url=long_url, existing=existing)

    entry = store.insert(short_url, UrlEntry.create(long_url, short_url, author=author))
    logger.info('Added short URL.', extra={'shortUrl': short_url, 'longUrl': long_url})
    return entry


def add_entry(entry: UrlEntry, store: UrlEntryBaseDAO) -> UrlEntry:
    """Store a prebuilt entry under the short code of its long URL

    The short code set on `entry` is ignored and the creation date is reset
    to now. Expiration date and author are kept. Unlike add_url() there is
    no collision check beforehand, so a taken short code surfaces as the
    backend's UrlEntryAlreadyExistsError.

    Args:
        entry (UrlEntry):
            The entry to store.
        store (UrlEntryBaseDAO):
            Persistence backend.

    Returns:
        UrlEntry: The stored entry.
    """
    short_url = _shortcode_for(entry.long_url)
    return store.insert(short_url, replace(entry, short_url=short_url, creation_date=datetime.now(UTC)))


def edit_entry(
    short_url: str,
    request: UrlEntryRequest,
    store: UrlEntryBaseDAO,
    reassign_author: bool = False,
) -> UrlEntry | None:
    """Apply a partial update to a stored entry and persist the result

    By default the request is merged (UrlEntry.merge_with), which keeps the
    entry's author. With `reassign_author` the request is associated
    (UrlEntry.associate_with) and its author replaces the current one.

    The updated entry replaces the stored one (remove, then insert). An update
    that can't be written as a line is refused before anything is removed. If
    the insert fails, the previous entry is put back before the error
    propagates.

    Args:
        short_url (str):
            Short code of the entry to edit.
        request (UrlEntryRequest):
            Fields to update.
        store (UrlEntryBaseDAO):
            Persistence backend.
        reassign_author (bool):
            If True, the request's author becomes the entry's author.

    Returns:
        UrlEntry | None: The updated entry, or None if the short code isn't stored.

    Raises:
        ValueError:
            If the updated entry can't be persisted (see tinifier.models.codec).
            The stored entry is left untouched.
        DataStoreError:
            If the backend fails to store the updated entry.
    """
    current = store.get(short_url)
    if current is None:
        return None

    updated = current.associate_with(request) if reassign_author else current.merge_with(request)
    if updated == current:
        return current

    # Refuse entries that can't be persisted before the current one is removed
    to_line(updated)

    store.remove(short_url)
    try:
        entry = store.insert(short_url, updated)
    except Exception:
        logger.error('Failed to store edited entry, restoring previous version.', extra={'shortUrl': short_url})
        store.insert(short_url, current)
        raise

    logger.info('Edited short URL.', extra={'shortUrl': short_url})
    return entry


def get_url(short_url: str, store: UrlEntryBaseDAO) -> UrlEntry | None:
    return store.get(short_url)


def remove_url(short_url: str, store: UrlEntryBaseDAO) -> UrlEntry | None:
    entry = store.remove(short_url)
    if entry is not None:
        logger.info('Removed short URL.', extra={'shortUrl': short_url})
    return entry
