from tinifier.utils.config import app_env, app_name, app_prefix, load_config
from tinifier.utils.helpers import resolve_author, load_yaml
from tinifier.utils.shortener import ALPHABET, hash_url, encode_hash, generate_shortcode
from tinifier.utils.logging import initialize_logging


__all__ = [
    'ALPHABET',
    'hash_url',
    'encode_hash',
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'resolve_author',
    'load_yaml',
    'initialize_logging',
]
