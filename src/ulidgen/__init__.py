__version__ = "0.1.0"

from ulidgen.errors import (
    ULIDError,
    TimeRangeError,
    InvalidLengthError,
    InvalidCharacterError,
    EncodeRangeError,
)
from ulidgen.ulid import (
    GenerationResult,
    ParseResult,
    MonotonicSequencer,
    default_sequencer,
    generate_standard,
    generate_seeded,
    generate_monotonic,
    parse,
)

__all__ = [
    "__version__",
    "ULIDError",
    "TimeRangeError",
    "InvalidLengthError",
    "InvalidCharacterError",
    "EncodeRangeError",
    "GenerationResult",
    "ParseResult",
    "MonotonicSequencer",
    "default_sequencer",
    "generate_standard",
    "generate_seeded",
    "generate_monotonic",
    "parse",
]
