"""Abstract base class for UrlEntry data access objects (DAOs).

This class establishes a consistent contract for all UrlEntry DAO implementations,
regardless of the underlying storage mechanism (in-memory, flat file, Redis).

Responsibilities:
    - Provide an interface for inserting, retrieving and removing UrlEntry objects.
    - Provide a real membership query on short codes.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from tinifier.models import UrlEntry
        >>> from tinifier.dao import UrlEntryFileDAO

        >>> dao = UrlEntryFileDAO('/tmp/tinifier')

        >>> entry = UrlEntry.create('https://example.com/blog/article-123', 'b7fK2a')
        >>> dao.insert('b7fK2a', entry)
        UrlEntry(long_url='https://example.com/blog/article-123', short_url='b7fK2a', ...)

        >>> dao.contains_key('b7fK2a')
        True

        >>> dao.get('b7fK2a').long_url
        'https://example.com/blog/article-123'

        >>> dao.remove('b7fK2a').short_url
        'b7fK2a'

        >>> print(dao.get('b7fK2a'))
        None
"""

from abc import ABC, abstractmethod

from tinifier.models import UrlEntry


class UrlEntryBaseDAO(ABC):
    """Interface for UrlEntry data access objects (DAOs).

    Methods:
        insert(short_url: str, entry: UrlEntry, **kwargs) -> UrlEntry:
            Store a new entry under its short code and return the stored entry.
            Raises UrlEntryAlreadyExistsError if the short code is taken.
            Raises DataStoreError on write failure.

        get(short_url: str, **kwargs) -> UrlEntry | None:
            Retrieve an entry by short code. Returns None if not found.

        remove(short_url: str, **kwargs) -> UrlEntry | None:
            Delete an entry and return it. Returns None if not found.

        contains_key(short_url: str, **kwargs) -> bool:
            Check whether a short code is taken.

        count(**kwargs) -> int:
            Return the number of stored entries.

    Subclassing:
        Datastore-specific implementations (e.g., UrlEntryFileDAO or
        UrlEntryRedisDAO) must extend this class and implement all
        abstract methods.

    NOTE:
        - A miss is not an error: get() and remove() return None.
        - Returned entries are immutable, so callers can't change stored
          state without going through insert() and remove().
    """

    @abstractmethod
    def insert(self, short_url: str, entry: UrlEntry, **kwargs) -> UrlEntry:
        """Insert a new UrlEntry into the data store.

        Args:
            short_url (str):
                Key to store the entry under. Must equal entry.short_url.

            entry (UrlEntry):
                The UrlEntry instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlEntry: The entry now resident in the data store.

        Raises:
            ValueError:
                If short_url differs from entry.short_url.

            UrlEntryAlreadyExistsError:
                If an entry with the same short code already exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, short_url: str, **kwargs) -> UrlEntry | None:
        """Retrieve a UrlEntry from the data store by its short code.

        Args:
            short_url (str):
                The short code of the UrlEntry to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlEntry | None: The UrlEntry instance if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def remove(self, short_url: str, **kwargs) -> UrlEntry | None:
        """Remove a UrlEntry from the data store by its short code.

        Args:
            short_url (str):
                The short code of the UrlEntry to be removed.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            UrlEntry | None: The removed UrlEntry if it existed, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def contains_key(self, short_url: str, **kwargs) -> bool:
        """Check whether a UrlEntry is stored under the given short code.

        Args:
            short_url (str):
                The short code to look up.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if the short code is taken.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def count(self, **kwargs) -> int:
        """Return the number of entries in the data store.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    def __contains__(self, short_url: object) -> bool:
        return isinstance(short_url, str) and self.contains_key(short_url)

    def __len__(self) -> int:
        return self.count()

    @staticmethod
    def _check_key(short_url: str, entry: UrlEntry) -> None:
        if short_url != entry.short_url:
            raise ValueError(f"Key '{short_url}' does not match the entry's short URL '{entry.short_url}'.")
