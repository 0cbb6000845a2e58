from tinifier.dao.file.url_entry_file_dao import UrlEntryFileDAO


__all__ = [
    'UrlEntryFileDAO',
]
