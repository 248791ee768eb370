"""
ULID generation and parsing.

A ULID is a 48-bit millisecond timestamp followed by 80 bits of randomness,
encoded as 26 Crockford base32 characters (10 for the time, 16 for the
randomness) so that string order matches creation order.

Usage:
    >>> result = generate_standard()
    >>> len(result.ulid)
    26
    >>> parse("01FR9EZ700RPB9GR0NVWG3MYFY").timestamp
    1640995200000
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from threading import Lock
from typing import Any, Dict, Optional

from ulidgen.base32 import (
    ULID_LEN,
    decode_int,
    encode_int,
    encode_random,
    increment_digits,
    is_valid,
    normalize,
)
from ulidgen.errors import InvalidLengthError, TimeRangeError
from ulidgen.logging_setup import get_logger

logger = get_logger()

# Constants
NANOSECS_IN_MILLISECS = 1000000
MIN_TIMESTAMP = 0
MAX_TIMESTAMP = 2**48 - 1
TIMESTAMP_LEN = 10
RANDOMNESS_LEN = 16

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

__all__ = [
    "GenerationResult",
    "ParseResult",
    "MonotonicSequencer",
    "encode_time",
    "decode_time",
    "encode_random",
    "default_sequencer",
    "generate_standard",
    "generate_seeded",
    "generate_monotonic",
    "parse",
]


@dataclass(frozen=True)
class GenerationResult:
    ulid: str
    timestamp: int
    randomness: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ulid": self.ulid,
            "timestamp": self.timestamp,
            "randomness": self.randomness,
        }


@dataclass(frozen=True)
class ParseResult:
    ulid: str
    timestamp_part: str
    randomness_part: str
    timestamp: int
    date: Optional[datetime]

    def to_dict(self) -> Dict[str, Any]:
        date = None
        if self.date is not None:
            date = self.date.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        return {
            "ulid": self.ulid,
            "timestamp_part": self.timestamp_part,
            "randomness_part": self.randomness_part,
            "timestamp": self.timestamp,
            "date": date,
        }


def _now_ms() -> int:
    return time.time_ns() // NANOSECS_IN_MILLISECS


def _check_timestamp(value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Timestamp must be an integer, got {type(value).__name__}")
    if value < MIN_TIMESTAMP or value > MAX_TIMESTAMP:
        raise TimeRangeError(
            f"Timestamp {value} outside [{MIN_TIMESTAMP}, {MAX_TIMESTAMP}]"
        )
    return value


def encode_time(value: int) -> str:
    """Encode a millisecond timestamp into the 10 character time field."""
    return encode_int(_check_timestamp(value), TIMESTAMP_LEN)


def decode_time(
    value: str, case_insensitive: bool = True, map_ambiguous: bool = False
) -> int:
    """Decode the 10 character time field back into milliseconds."""
    if len(value) != TIMESTAMP_LEN:
        raise InvalidLengthError(
            f"Time field must be {TIMESTAMP_LEN} characters, got {len(value)}"
        )
    timestamp = decode_int(value, case_insensitive, map_ambiguous)
    if timestamp > MAX_TIMESTAMP:
        raise TimeRangeError(f"Decoded timestamp {timestamp} exceeds {MAX_TIMESTAMP}")
    return timestamp


def _to_datetime(timestamp: int) -> Optional[datetime]:
    try:
        return EPOCH + timedelta(milliseconds=timestamp)
    except OverflowError:
        # 2**48 ms reaches past datetime.max (year 9999)
        return None


def _build(timestamp: int, randomness: str) -> GenerationResult:
    return GenerationResult(
        ulid=encode_time(timestamp) + randomness,
        timestamp=timestamp,
        randomness=randomness,
    )


class MonotonicSequencer:
    """
    Thread-safe monotonic ULID generator.

    Identifiers produced for the same millisecond increment the previous
    randomness field by one, so they sort strictly after each other. A new
    millisecond reseeds the randomness from the OS CSPRNG.

    Monotonicity only holds within one instance. Callers sharing an instance
    share its ordering domain.
    """

    def __init__(self, seed_time: Optional[int] = None) -> None:
        self.lock = Lock()
        self.seed_time = seed_time
        self._last_time = MIN_TIMESTAMP
        self._last_random = ""

    @property
    def last_time(self) -> int:
        return self._last_time

    @property
    def last_random(self) -> str:
        return self._last_random

    def generate(self, seed_time: Optional[int] = None) -> GenerationResult:
        with self.lock:
            if seed_time is None:
                seed_time = self.seed_time
            if seed_time is None:
                seed_time = _now_ms()
            timestamp = _check_timestamp(seed_time)

            if timestamp == self._last_time and self._last_random:
                randomness = increment_digits(self._last_random)
            else:
                logger.debug(f"Reseeding monotonic sequencer at {timestamp}")
                randomness = encode_random(RANDOMNESS_LEN)
                self._last_time = timestamp
            self._last_random = randomness
        return _build(timestamp, randomness)

    def reset(self, seed_time: Optional[int] = None) -> None:
        with self.lock:
            self.seed_time = seed_time
            self._last_time = MIN_TIMESTAMP
            self._last_random = ""
        logger.debug(f"Monotonic sequencer reset (seed_time={seed_time})")

    def __repr__(self) -> str:
        return f"MonotonicSequencer(seed_time={self.seed_time!r})"


_default_sequencer: Optional[MonotonicSequencer] = None
_default_lock = Lock()


def default_sequencer() -> MonotonicSequencer:
    """
    Return the process-wide sequencer used when no instance is passed.

    Every caller that relies on it shares one monotonicity domain.
    """
    global _default_sequencer
    with _default_lock:
        if _default_sequencer is None:
            _default_sequencer = MonotonicSequencer()
        return _default_sequencer


def generate_standard() -> GenerationResult:
    """Generate a ULID for the current time with fresh randomness."""
    return _build(_now_ms(), encode_random(RANDOMNESS_LEN))


def generate_seeded(seed_time: Optional[int] = None) -> GenerationResult:
    """
    Generate a ULID for ``seed_time`` (or now) with fresh randomness.

    Repeated calls with the same seed share the time field but carry no
    ordering guarantee between each other.
    """
    if seed_time is None:
        seed_time = _now_ms()
    return _build(_check_timestamp(seed_time), encode_random(RANDOMNESS_LEN))


def generate_monotonic(
    seed_time: Optional[int] = None, sequencer: Optional[MonotonicSequencer] = None
) -> GenerationResult:
    """Generate a monotonic ULID from ``sequencer`` or the default one."""
    if sequencer is None:
        sequencer = default_sequencer()
    return sequencer.generate(seed_time)


def parse(
    value: str, case_insensitive: bool = True, map_ambiguous: bool = False
) -> ParseResult:
    """
    Split a ULID into its fields and decode the timestamp.

    Input is upper-cased before lookup unless ``case_insensitive`` is False.
    ``map_ambiguous`` additionally maps O to 0 and I/L to 1.
    """
    if len(value) != ULID_LEN:
        raise InvalidLengthError(
            f"Invalid ULID length: expected {ULID_LEN}, got {len(value)}"
        )
    canonical = normalize(value, case_insensitive, map_ambiguous)
    timestamp_part = canonical[:TIMESTAMP_LEN]
    randomness_part = canonical[TIMESTAMP_LEN:]

    if not is_valid(canonical):
        # Raises with the offending character and its position
        decode_int(canonical, case_insensitive=False)
    timestamp = decode_time(timestamp_part, case_insensitive=False)

    return ParseResult(
        ulid=canonical,
        timestamp_part=timestamp_part,
        randomness_part=randomness_part,
        timestamp=timestamp,
        date=_to_datetime(timestamp),
    )
