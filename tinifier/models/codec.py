"""Line codec for persisting UrlEntry records

Each entry is stored as a single line:

    <short_url>:<long_url>,<expiration_date>,<creation_date>,<author>

Timestamps are written as ISO-8601 text and an absent expiration date as
`None`. The short code must be alphanumeric, the author non-empty text without
commas. The long URL is everything between the first colon and the last three
comma separated fields, so URL punctuation (including commas) survives, but it
can't be empty. to_line() refuses entries parse_line() would reject.

NOTE:
    Timestamps are not durable. parse_line() does not read them back: the
    parsed entry never expires and its creation date is the moment of
    parsing. Only short code, long URL and author are restored.

Functions:
    to_line(entry: UrlEntry) -> str
        Serialize an entry into its line representation (without newline).
    parse_line(line: str) -> UrlEntry
        Parse a line back into an entry. Raises EntryParseError.

Example:
    >>> line = to_line(UrlEntry.create('https://example.com', 'b7fK2a', author='alice'))
    >>> line
    'b7fK2a:https://example.com,None,2026-10-17T09:30:00.123456+00:00,alice'
    >>> parse_line(line).long_url
    'https://example.com'
"""

import re
from datetime import datetime

from tinifier.exceptions import EntryParseError
from tinifier.models.url_entry_model import UrlEntry


LINE_PATTERN = re.compile(
    r'^(?P<short>[a-zA-Z0-9]+):(?P<long>.+),(?P<expiration>[^,]*),(?P<creation>[^,]*),(?P<author>[^,]+)$'
)
LINE_GRAMMAR = '<short_url>:<long_url>,<expiration_date>,<creation_date>,<author>'
SHORT_URL_PATTERN = re.compile(r'[a-zA-Z0-9]+')
AUTHOR_PATTERN = re.compile(r'[^,]+')


def _format_timestamp(value: datetime | None) -> str:
    return 'None' if value is None else value.isoformat()


def to_line(entry: UrlEntry) -> str:
    """Serialize an entry into a single persisted line

    Args:
        entry (UrlEntry):
            The entry to serialize.

    Returns:
        str: The line, without a trailing newline.

    Raises:
        ValueError:
            If a field contains a line break (one record per line), or the
            line wouldn't parse back: non-alphanumeric short code, empty long
            URL, empty author or an author containing a comma.
    """
    fields = (entry.short_url, entry.long_url, entry.author)
    if any('\n' in value or '\r' in value for value in fields):
        raise ValueError(f"Entry '{entry.short_url}' contains a line break and can't be stored on a single line.")
    if not SHORT_URL_PATTERN.fullmatch(entry.short_url):
        raise ValueError(f"Short URL '{entry.short_url}' must be alphanumeric.")
    if not entry.long_url:
        raise ValueError(f"Entry '{entry.short_url}' has an empty long URL.")
    if not AUTHOR_PATTERN.fullmatch(entry.author):
        raise ValueError(f"Author '{entry.author}' of entry '{entry.short_url}' must be non-empty and can't contain commas.")

    expiration = _format_timestamp(entry.expiration_date)
    creation = _format_timestamp(entry.creation_date)
    return f'{entry.short_url}:{entry.long_url},{expiration},{creation},{entry.author}'


def parse_line(line: str) -> UrlEntry:
    """Parse a persisted line into an entry

    Args:
        line (str):
            A line as produced by to_line(). A trailing newline is ignored.

    Returns:
        UrlEntry:
            The parsed entry with expiration_date=None and creation_date
            set to the current time.

    Raises:
        EntryParseError:
            If the line doesn't follow the entry grammar.
    """
    line = line.rstrip('\r\n')
    match = LINE_PATTERN.match(line)
    if match is None:
        raise EntryParseError(f"Line does not match '{LINE_GRAMMAR}'.", line=line)

    return UrlEntry.create(
        long_url=match.group('long'),
        short_url=match.group('short'),
        author=match.group('author'),
    )
