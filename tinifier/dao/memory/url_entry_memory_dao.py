from collections.abc import Mapping

from beartype import beartype

from tinifier.models import UrlEntry
from tinifier.dao.base import UrlEntryBaseDAO
from tinifier.dao.exceptions import UrlEntryAlreadyExistsError


class UrlEntryMemoryDAO(UrlEntryBaseDAO):
    """Dictionary-backed DAO. Nothing survives the process.

    Attributes:
        entries (dict[str, UrlEntry]):
            Mapping from short code to entry.
    """

    def __init__(self, entries: Mapping[str, UrlEntry] | None = None):
        self.entries: dict[str, UrlEntry] = dict(entries or {})

    @beartype
    def insert(self, short_url: str, entry: UrlEntry, **kwargs) -> UrlEntry:
        self._check_key(short_url, entry)
        if short_url in self.entries:
            raise UrlEntryAlreadyExistsError(f"Short URL with code '{short_url}' already exists.")

        self.entries[short_url] = entry
        return self.entries[short_url]

    @beartype
    def get(self, short_url: str, **kwargs) -> UrlEntry | None:
        return self.entries.get(short_url)

    @beartype
    def remove(self, short_url: str, **kwargs) -> UrlEntry | None:
        return self.entries.pop(short_url, None)

    @beartype
    def contains_key(self, short_url: str, **kwargs) -> bool:
        return short_url in self.entries

    def count(self, **kwargs) -> int:
        return len(self.entries)
