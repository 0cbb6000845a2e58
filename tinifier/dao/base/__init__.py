from tinifier.dao.base.url_entry_base_dao import UrlEntryBaseDAO


__all__ = [
    'UrlEntryBaseDAO',
]
