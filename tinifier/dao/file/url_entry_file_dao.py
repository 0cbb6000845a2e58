"""Data Access Object (DAO) implementation for managing URL entries in a flat file

This module provides a file-based implementation of UrlEntryBaseDAO. Entries
live in an in-memory read cache which mirrors an append-only, line-oriented
file (one codec line per entry, see tinifier.models.codec).

Responsibilities:
    - Load the read cache from the file on initialization;
    - Append inserted entries to the file (write-through);
    - Rewrite the file without the removed entry's lines on removal;
    - Serve lookups from the read cache only.

Classes:
    UrlEntryFileDAO:
        DAO for storing and retrieving UrlEntry in an append-only file.

Example:
    >>> from tinifier.models import UrlEntry
    >>> from tinifier.dao.file import UrlEntryFileDAO

    >>> dao = UrlEntryFileDAO('/tmp/tinifier')
    >>> dao.insert('b7fK2a', UrlEntry.create('https://example.com', 'b7fK2a'))
    UrlEntry(long_url='https://example.com', short_url='b7fK2a', ...)

    >>> # In a later process
    >>> UrlEntryFileDAO('/tmp/tinifier').get('b7fK2a').long_url
    'https://example.com'

NOTE:
    - Timestamps are not restored on load (see tinifier.models.codec).
    - The file is assumed to be used by a single process. There is no file
      locking: concurrent processes can interleave appends or lose a removal
      to a concurrent rewrite.
"""

import os
import logging
import tempfile
from pathlib import Path

from beartype import beartype

from tinifier.constants import DEFAULT_FILE_LOCATION
from tinifier.exceptions import EntryParseError
from tinifier.models import UrlEntry, to_line, parse_line
from tinifier.dao.base import UrlEntryBaseDAO
from tinifier.dao.exceptions import DataStoreError, UrlEntryAlreadyExistsError
from tinifier.dao.file.helpers import handle_file_error, line_key


logger = logging.getLogger(__name__)


class UrlEntryFileDAO(UrlEntryBaseDAO):
    """File-based Data Access Object (DAO) with an in-memory read cache

    Attributes:
        path (Path):
            Location of the entry file. Created on the first insert.
        entries (dict[str, UrlEntry]):
            Read cache, mapping short codes to entries.
        skipped_lines (list[tuple[int, str]]):
            (line number, reason) of every line that failed to parse on load.

    Methods:
        insert(short_url: str, entry: UrlEntry, **kwargs) -> UrlEntry:
            Cache the entry, then append its line to the file.
            Rolls back the cache and raises DataStoreError if the write fails.
            Raises UrlEntryAlreadyExistsError when the short code is taken.

        get(short_url: str, **kwargs) -> UrlEntry | None:
            Look up an entry in the read cache.

        remove(short_url: str, **kwargs) -> UrlEntry | None:
            Rewrite the file without every line keyed by the short code,
            then drop the entry from the read cache.

        contains_key(short_url: str, **kwargs) -> bool:
            Check the read cache for the short code.
    """

    def __init__(self, path: str | os.PathLike = DEFAULT_FILE_LOCATION):
        """Initialize the DAO and load the read cache from `path`

        Lines that don't parse are skipped, recorded in `skipped_lines` and
        reported with a single warning. When a short code appears on several
        lines, the last one wins.

        Args:
            path (str | os.PathLike):
                Location of the entry file. Defaults to '/tmp/tinifier'.

        Raises:
            DataStoreError:
                If the file exists but can't be read.
        """
        self.path = Path(path)
        self.entries: dict[str, UrlEntry] = {}
        self.skipped_lines: list[tuple[int, str]] = []

        self._load()

    @handle_file_error
    def _load(self) -> None:
        if not self.path.exists():
            logger.debug('Entry file does not exist yet.', extra={'path': str(self.path)})
            return

        with self.path.open('r', encoding='utf-8') as f:
            for line_number, line in enumerate(f, start=1):
                if not line.strip():
                    continue
                try:
                    entry = parse_line(line)
                except EntryParseError as e:
                    self.skipped_lines.append((line_number, e.message))
                    continue
                self.entries[entry.short_url] = entry

        if self.skipped_lines:
            # fmt: off
            logger.warning('Skipped malformed lines in entry file.',
                           extra={'path': str(self.path),
                                  'skipped': len(self.skipped_lines),
                                  'lineNumbers': [number for number, _ in self.skipped_lines]})
            # fmt: on

    @beartype
    def insert(self, short_url: str, entry: UrlEntry, **kwargs) -> UrlEntry:
        """Insert an entry into the read cache and append it to the file

        Args:
            short_url (str):
                Key of the entry. Must equal entry.short_url.
            entry (UrlEntry):
                The entry to store.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            UrlEntry: The entry now resident in the read cache.

        Raises:
            UrlEntryAlreadyExistsError:
                If the short code is already taken.
            DataStoreError:
                If the line can't be appended. The cache is rolled back first.
        """
        self._check_key(short_url, entry)
        if short_url in self.entries:
            raise UrlEntryAlreadyExistsError(f"Short URL with code '{short_url}' already exists.")

        line = to_line(entry)
        self.entries[short_url] = entry
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self.path.open('a', encoding='utf-8') as f:
                f.write(line + '\n')
        except OSError as e:
            del self.entries[short_url]
            raise DataStoreError(f"Couldn't write entry '{short_url}' to {self.path}.") from e

        return self.entries[short_url]

    @beartype
    def get(self, short_url: str, **kwargs) -> UrlEntry | None:
        return self.entries.get(short_url)

    @handle_file_error
    @beartype
    def remove(self, short_url: str, **kwargs) -> UrlEntry | None:
        """Remove an entry from the file and the read cache

        Only lines whose short code field equals `short_url` are dropped.
        Other lines, including unparseable ones, are kept verbatim.

        Args:
            short_url (str):
                The short code to remove.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            UrlEntry | None:
                The removed entry, or None if the short code isn't stored
                (the file is left untouched).

        Raises:
            DataStoreError:
                If the file can't be read or rewritten. The read cache keeps the entry.
        """
        if short_url not in self.entries:
            return None

        if self.path.exists():
            with self.path.open('r', encoding='utf-8') as f:
                kept = [line if line.endswith('\n') else line + '\n' for line in f if line_key(line) != short_url]
            self._rewrite(kept)

        return self.entries.pop(short_url)

    @beartype
    def contains_key(self, short_url: str, **kwargs) -> bool:
        return short_url in self.entries

    def count(self, **kwargs) -> int:
        return len(self.entries)

    def _rewrite(self, lines: list[str]) -> None:
        """Replace the file's content with `lines`

        The content is written to a temporary file in the same directory,
        which then replaces the entry file in a single rename.
        """
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f'.{self.path.name}.', suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.writelines(lines)
            os.replace(tmp_path, self.path)
        except OSError:
            Path(tmp_path).unlink(missing_ok=True)
            raise
