class ULIDError(ValueError):
    """Base class for all ULID codec and generation errors."""


class TimeRangeError(ULIDError):
    """Timestamp outside [0, 2**48 - 1]."""


class InvalidLengthError(ULIDError):
    """Input string does not have the expected length."""


class InvalidCharacterError(ULIDError):
    """A character outside the Crockford base32 alphabet was found."""

    def __init__(self, char: str, position: int) -> None:
        super().__init__(f"Invalid character {char!r} at position {position}")
        self.char = char
        self.position = position


class EncodeRangeError(ULIDError):
    """Integer too large (or negative) for the requested encoded width."""


class ConfigError(RuntimeError):
    """Configuration file could not be read or parsed."""
