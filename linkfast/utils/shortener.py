"""Shortcode generation utility

This module provides a helper function for deriving short, non-sequential
codes from a URL and a high-resolution timestamp.

Functions:
    generate_shortcode(url, timestamp_ns, length=8):
        Derive a Base62 short code suitable for use as a URL slug.

Example:
    >>> from linkfast.utils import generate_shortcode
    >>> generate_shortcode('https://example.com', 1_700_000_000_000_000_000)
    'r25h7cPM'
"""

import hashlib

from linkfast.constants import ShortCode


ALPHABET = ShortCode.ALPHABET
BASE = ShortCode.BASE
DIGEST_SIZE = 16  # MD5 produces 128-bit digests


def generate_shortcode(url: str, timestamp_ns: int, length: int = ShortCode.LENGTH) -> str:
    """Derive a Base62 short code from a URL and a timestamp.

    The URL and the decimal timestamp are concatenated and hashed with MD5.
    Each of the first `length` digest bytes is mapped onto the alphabet via
    `byte % 62`. Mixing in the timestamp means retrying with a fresh timestamp
    yields a fresh code for the same URL.

    Args:
        url (str):
            Original URL being shortened.

        timestamp_ns (int):
            High-resolution timestamp (nanoseconds) mixed into the hash.

        length (int, optional):
            Length of the resulting code. Defaults to 8.
            Must be between 1 and 16 (the digest size).

    Returns:
        str: A short alphanumeric code derived from the URL and timestamp.

    NOTE:
        - The output is deterministic for a given (url, timestamp_ns) pair.
        - Uniqueness is NOT guaranteed by this function. Callers must check the
          code against the data store (see ShortcodeGenerator).
        - `byte % 62` is slightly biased towards the first 8 alphabet symbols
          (256 is not a multiple of 62). That's fine for a slug.
    """
    if not isinstance(url, str):
        raise TypeError(f'URL must be of type string (given type: {type(url)}).')
    if not isinstance(timestamp_ns, int):
        raise TypeError(f'Timestamp must be of type integer (given type: {type(timestamp_ns)}).')
    if not 1 <= length <= DIGEST_SIZE:
        raise ValueError(f'Length must be between 1 and {DIGEST_SIZE} (given value: {length}).')

    digest = hashlib.md5(f'{url}{timestamp_ns}'.encode(), usedforsecurity=False).digest()
    return ''.join(ALPHABET[byte % BASE] for byte in digest[:length])
