"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    UrlEntryAlreadyExistsError:
        Raised when attempting to insert an entry under a short code that is already taken.

    DataStoreError:
        Raised when there is an error in the data store (e.g., unwritable file, connection issues, etc.).

Example:
    >>> from tinifier.dao.exceptions import DataStoreError
    >>> raise DataStoreError("Couldn't write entry 'b7fK2a' to /tmp/tinifier.")
    Traceback (most recent call last):
        ...
    tinifier.dao.exceptions.DataStoreError: Couldn't write entry 'b7fK2a' to /tmp/tinifier.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    pass


class UrlEntryAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a UrlEntry that already exists in the data store."""

    pass


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. unwritable files, connection issues, timeouts, etc.
    """

    pass
