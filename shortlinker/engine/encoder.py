"""Short code encoding utility

This module provides a deterministic, reversible mapping between a
non-negative counter value and a short Base62 string.

Functions:
    encode(n) -> str:
        Encode a counter value into its Base62 representation.
    decode(s) -> int:
        Decode a Base62 representation back into the counter value.

Example:
    >>> from shortlinker.engine.encoder import encode, decode
    >>> encode(125)
    '21'
    >>> decode('21')
    125
"""

import string

from shortlinker.constants import MAX_COUNTER


# Symbol order is part of the contract: codes issued in the past must keep decoding to the same values
ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
BASE = len(ALPHABET)
INDEX = {symbol: value for value, symbol in enumerate(ALPHABET)}


def encode(n: int) -> str:
    """Encode a non-negative integer as a Base62 string.

    The encoding is positional with the most significant symbol first and
    carries no leading zero symbols, except for 0 itself which encodes to '0'.
    Every value up to 2**64 - 1 fits in at most 11 symbols.

    Args:
        n (int):
            Counter value to encode.

    Returns:
        str: Base62 representation of n over [0-9a-zA-Z].

    Raises:
        TypeError: if n is not an integer.
        ValueError: if n is negative or above 2**64 - 1.

    Example:
        >>> encode(0)
        '0'
        >>> encode(61)
        'Z'
        >>> encode(62)
        '10'
    """
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f'Counter must be of type integer (given type: {type(n)}).')
    if n < 0:
        raise ValueError(f'Counter must be a non-negative integer (given value: {n}).')
    if n > MAX_COUNTER:
        raise ValueError(f'Counter exceeds the maximum supported value {MAX_COUNTER} (given value: {n}).')

    if n == 0:
        return ALPHABET[0]

    symbols = []
    while n:
        n, remainder = divmod(n, BASE)
        symbols.append(ALPHABET[remainder])
    return ''.join(reversed(symbols))


def decode(s: str) -> int:
    """Decode a Base62 string produced by encode().

    Args:
        s (str):
            Base62 representation.

    Returns:
        int: The counter value s encodes.

    Raises:
        TypeError: if s is not a string.
        ValueError: if s is empty, contains symbols outside the alphabet,
                    has a leading zero symbol or encodes a value above 2**64 - 1.

    Example:
        >>> decode('10')
        62
    """
    if not isinstance(s, str):
        raise TypeError(f'Short code must be of type string (given type: {type(s)}).')
    if not s:
        raise ValueError('Short code must be a non-empty string.')
    if len(s) > 1 and s[0] == ALPHABET[0]:
        raise ValueError(f'Short code must not have leading zero symbols (given value: {s!r}).')

    n = 0
    for symbol in s:
        try:
            n = n * BASE + INDEX[symbol]
        except KeyError:
            raise ValueError(f'Short code contains a symbol outside the Base62 alphabet (given value: {s!r}).') from None

    if n > MAX_COUNTER:
        raise ValueError(f'Short code exceeds the maximum supported value {MAX_COUNTER} (given value: {s!r}).')
    return n
