"""
Crockford base32 codec used by the ULID text format.

The alphabet excludes I, L, O and U. Values are encoded big-endian in
fixed-width fields; the leftmost symbol is the most significant digit.
"""

from __future__ import annotations

import os
import string
from typing import Dict

from ulidgen.errors import EncodeRangeError, InvalidCharacterError
from ulidgen.logging_setup import get_logger

logger = get_logger()

ENCODE = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
BASE = len(ENCODE)
MIN_SYMBOL = ENCODE[0]
MAX_SYMBOL = ENCODE[-1]
ULID_LEN = 26

DECODE: Dict[str, int] = {char: index for index, char in enumerate(ENCODE)}

# Crockford aliases, only applied when explicitly enabled
AMBIGUOUS = {"O": "0", "I": "1", "L": "1"}

# ASCII-only case folding keeps length and positions aligned with the input
UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


def normalize(
    value: str, case_insensitive: bool = True, map_ambiguous: bool = False
) -> str:
    """Return the canonical form of ``value`` for lookup in ``DECODE``."""
    if not case_insensitive:
        return value
    value = value.translate(UPPER)
    if map_ambiguous:
        value = "".join(AMBIGUOUS.get(char, char) for char in value)
    return value


def encode_int(value: int, width: int) -> str:
    """Encode a non-negative integer as exactly ``width`` base32 symbols."""
    if value < 0:
        raise EncodeRangeError(f"Cannot encode negative value {value}")
    if value >= BASE**width:
        raise EncodeRangeError(
            f"Value {value} does not fit into {width} base32 characters"
        )
    chars = []
    for _ in range(width):
        value, rem = divmod(value, BASE)
        chars.append(ENCODE[rem])
    chars.reverse()
    return "".join(chars)


def decode_int(
    value: str, case_insensitive: bool = True, map_ambiguous: bool = False
) -> int:
    """Decode a base32 string into an unsigned integer."""
    acc = 0
    for position, char in enumerate(normalize(value, case_insensitive, map_ambiguous)):
        index = DECODE.get(char)
        if index is None:
            raise InvalidCharacterError(value[position], position)
        acc = acc * BASE + index
    return acc


def encode_random(width: int = 16) -> str:
    """
    Return ``width`` symbols drawn from the OS CSPRNG.

    Each symbol uses one random byte masked to 5 bits. 256 is a multiple of
    32, so every symbol is uniform over the alphabet.
    """
    return "".join(ENCODE[byte & 31] for byte in os.urandom(width))


def increment_digits(value: str) -> str:
    """
    Add one to ``value`` treated as a big-endian base32 counter.

    When every digit is already the maximum symbol the counter cannot grow
    within its width. In that case a fresh random string of the same width
    is returned instead of raising, so generation stays available at the cost
    of ordering for that single identifier.
    """
    for position, char in enumerate(value):
        if char not in DECODE:
            raise InvalidCharacterError(char, position)

    digits = list(value)
    for position in range(len(digits) - 1, -1, -1):
        if digits[position] != MAX_SYMBOL:
            digits[position] = ENCODE[DECODE[digits[position]] + 1]
            return "".join(digits)
        digits[position] = MIN_SYMBOL

    logger.warning(
        f"Base32 counter of width {len(value)} overflowed; substituting fresh randomness"
    )
    return encode_random(len(value))


def is_valid(value: str) -> bool:
    """Check that ``value`` is a canonical 26 character ULID string."""
    return len(value) == ULID_LEN and all(char in DECODE for char in value)
