from tinifier.models.url_entry_model import UrlEntry, UrlEntryRequest
from tinifier.models.codec import to_line, parse_line


__all__ = [
    'UrlEntry',
    'UrlEntryRequest',
    'to_line',
    'parse_line',
]
