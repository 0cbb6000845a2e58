from tinifier.dao.base import UrlEntryBaseDAO
from tinifier.dao.memory import UrlEntryMemoryDAO
from tinifier.dao.file import UrlEntryFileDAO


__all__ = [
    'UrlEntryBaseDAO',
    'UrlEntryMemoryDAO',
    'UrlEntryFileDAO',
]
