from tinifier.dao.memory.url_entry_memory_dao import UrlEntryMemoryDAO


__all__ = [
    'UrlEntryMemoryDAO',
]
