import re
from dataclasses import dataclass, field, replace
from datetime import datetime, UTC
from typing import Optional

from tinifier.constants import DEFAULT_AUTHOR


# Letters and digits only. Typical URL characters (':', '/', '.') do not pass.
VALID_URL_PATTERN = re.compile(r'^[A-Za-z0-9]+$')


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True)
class UrlEntryRequest:
    """Describe a partial update of a UrlEntry.

    Attributes:
        author (str):
            Identity of whoever requests the update. Only associate_with()
            applies it, merge_with() ignores it.
        long_url (Optional[str]):
            Replacement destination URL, None keeps the current one.
        short_url (Optional[str]):
            Carried for completeness, never applied by an update.
        expiration_date (Optional[datetime]):
            Replacement expiration date, None keeps the current one.
    """

    author: str
    long_url: Optional[str] = None
    short_url: Optional[str] = None
    expiration_date: Optional[datetime] = None


@dataclass(frozen=True)
class UrlEntry:
    """Represent a single short code to long URL mapping.

    Instances are immutable: updates produce new instances, so entries handed
    out by a store can't be used to mutate its state.

    Attributes:
        long_url (str):
            The destination URL supplied by the user.
        short_url (str):
            The short code. Unique key of the entry in a store.
        expiration_date (Optional[datetime]):
            Moment the entry expires. None means it never expires.
        creation_date (datetime):
            Moment the entry was constructed (UTC). Never changed by updates.
        author (str):
            Identity of the entry's creator.

    Example:
        >>> entry = UrlEntry.create('https://example.com', 'b7fK2a', author='alice')
        >>> entry.expiration_date is None
        True
        >>> request = UrlEntryRequest(author='bob', long_url='https://example.org')
        >>> entry.merge_with(request).long_url
        'https://example.org'
        >>> entry.merge_with(request).author
        'alice'
        >>> entry.associate_with(request).author
        'bob'
    """

    long_url: str
    short_url: str
    expiration_date: Optional[datetime] = None
    creation_date: datetime = field(default_factory=_utcnow)
    author: str = DEFAULT_AUTHOR

    @classmethod
    def create(cls, long_url: str, short_url: str, author: str = DEFAULT_AUTHOR) -> 'UrlEntry':
        """Construct a new, non-expiring entry stamped with the current time."""
        return cls(
            long_url=long_url,
            short_url=short_url,
            expiration_date=None,
            creation_date=_utcnow(),
            author=author,
        )

    def merge_with(self, request: UrlEntryRequest) -> 'UrlEntry':
        """Apply the request's long URL and expiration date, if supplied.

        Short code, creation date and author are never changed.
        """
        return replace(
            self,
            long_url=self.long_url if request.long_url is None else request.long_url,
            expiration_date=self.expiration_date if request.expiration_date is None else request.expiration_date,
        )

    def associate_with(self, request: UrlEntryRequest) -> 'UrlEntry':
        """Same as merge_with(), but the request's author always replaces the current one."""
        return replace(self.merge_with(request), author=request.author)

    def has_valid_url(self) -> bool:
        return VALID_URL_PATTERN.match(self.long_url) is not None
