"""Short code generation utility

This module turns a long URL into a short, deterministic code: the URL is
hashed into a 64-bit unsigned integer, which is then written out in base 62
over a fixed alphabet.

Functions:
    hash_url(long_url) -> int
        Hash a URL into a 64-bit unsigned integer.
    encode_hash(value) -> str
        Encode an integer over the 62-symbol alphabet.
    generate_shortcode(long_url) -> str
        Hash and encode a URL in one step.

Example:
    >>> from tinifier.utils import generate_shortcode
    >>> generate_shortcode('https://example.com') == generate_shortcode('https://example.com')
    True

NOTE:
    - The alphabet is order-significant: codes are only comparable across
      versions as long as it stays the same.
    - Digits are emitted least significant first and never padded. Leading
      "zero" digits are dropped at the high end, so a code is not reversible
      without knowing the hash width.
    - encode_hash(0) returns an empty string. Callers must treat an empty
      code as unusable.
"""

import string

import xxhash


# 0-9 without '7', then a-z, then A-Z. That's 61 symbols, '7' closes the alphabet as the 62nd.
ALPHABET = string.digits.replace('7', '') + string.ascii_lowercase + string.ascii_uppercase + '7'
BASE = 62


def hash_url(long_url: str) -> int:
    """Hash a URL into a 64-bit unsigned integer.

    Uses xxhash's XXH64, a fast non-cryptographic hash. Equal inputs always
    produce equal hashes. Near-duplicates (e.g. transposed characters) hash
    differently with overwhelming probability.

    Args:
        long_url (str):
            The URL to hash.

    Returns:
        int: Hash value in range [0, 2**64).

    Example:
        >>> hash_url('blob') != hash_url('bolb')
        True
    """
    if not isinstance(long_url, str):
        raise TypeError(f'URL must be of type string (given type: {type(long_url)}).')
    return xxhash.xxh64_intdigest(long_url)


def encode_hash(value: int) -> str:
    """Encode a non-negative integer over the 62-symbol alphabet.

    Repeatedly takes `value % 62`, appends the matching alphabet symbol and
    divides by 62 until the value reaches zero.

    Args:
        value (int):
            Non-negative integer, usually the output of hash_url().

    Returns:
        str: The encoded short code. Empty for value 0.

    Example:
        >>> encode_hash(0)
        ''
        >>> encode_hash(62)
        '01'
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f'Value must be of type integer (given type: {type(value)}).')
    if value < 0:
        raise ValueError(f'Value must be a non-negative integer (given value: {value}).')

    encoded = []
    while value > 0:
        value, remainder = divmod(value, BASE)
        encoded.append(ALPHABET[remainder])
    return ''.join(encoded)


def generate_shortcode(long_url: str) -> str:
    """Generate the short code for a URL (see hash_url() and encode_hash())."""
    return encode_hash(hash_url(long_url))
