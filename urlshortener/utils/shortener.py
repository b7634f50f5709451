"""Shortcode generation utility

Generate short, deterministic, non-sequential codes from a numeric counter
and a secret salt value.

Example:
    >>> from urlshortener.utils import generate_shortcode
    >>> generate_shortcode(12345, salt='my_secret')
    'Gh71WPT'
"""

import math
import string

import xxhash


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # base62: 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(counter: int, salt: str = 'default_salt', length: int = 7, mult: int = 1315423911) -> str:
    """Generate a short, deterministic URL code from a counter and salt.

    The counter is scrambled with an affine permutation over the fixed
    Base62 space (BASE**length) and then encoded as a fixed-width Base62
    string. This guarantees:
    - 1:1 mapping (bijective) while `counter < BASE**length`
    - Deterministic output
    - No visible sequential patterns
    - Constant-time execution

    Args:
        counter (int):
            Unique non-negative integer value identifying the URL.

        salt (str, optional):
            Secret string used to offset the output space.
            Highly recommended to set a custom salt.

        length (int, optional):
            Exact length of the resulting code. Defaults to 7.

        mult (int, optional):
            Multiplicative factor for the permutation.
            Must be coprime with BASE**length.

    Returns:
        str: A Base62 code of exactly `length` characters.

    Raises:
        TypeError: If counter is not an int or salt is not a str.
        ValueError: If counter is negative, salt is empty or mult is not coprime with BASE**length.

    NOTE:
        - Collisions only occur once the counter wraps around the modulo space.
          Short links expire long before that, and the shorten handler retries
          with the next counter value if a code is still taken.
        - This is obfuscation, not encryption.
    """
    if not isinstance(counter, int) or isinstance(counter, bool):
        raise TypeError(f'Counter must be of type integer (given type: {type(counter)}).')
    if counter < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {counter}).')
    if not isinstance(salt, str):
        raise TypeError(f'Salt must be of type string (given type: {type(salt)}).')
    if not salt:
        raise ValueError(f'Salt must be a non-empty string (given value: {salt}).')
    if math.gcd(mult, BASE**length) != 1:
        raise ValueError(f'Multiplicative factor must be coprime with mod ({BASE**length}) (given value: mult={mult}).')

    modulo_space = BASE**length
    salt_hash = xxhash.xxh64_intdigest(salt) % modulo_space
    permuted = (counter * mult + salt_hash) % modulo_space

    # Fixed-width base62 encoding, most significant digit first
    return ''.join(reversed([ALPHABET[(permuted // BASE**i) % BASE] for i in range(length)]))
