"""Core data types for the BITBUFFER storage engine."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class RangeCode(enum.IntEnum):
    """Configuration codes selecting the value range of a buffer.

    Codes with bit 0 set carry the maximum value directly.  Codes with
    bit 0 clear describe ranges above 255: the remaining bits shifted
    right by one give the high byte of the maximum, whose low byte is
    always ``0xFF``.
    """

    RANGE2 = 0x01
    RANGE4 = 0x03
    RANGE8 = 0x07
    RANGE16 = 0x0F
    RANGE32 = 0x1F
    RANGE64 = 0x3F
    RANGE128 = 0x7F
    RANGE256 = 0xFF
    RANGE512 = 0x02
    RANGE1024 = 0x06
    RANGE2048 = 0x0E
    RANGE4096 = 0x1E
    RANGE8192 = 0x3E
    RANGE16384 = 0x7E
    RANGE32768 = 0xFE

    @property
    def value_count(self) -> int:
        """Number of distinct values (max value + 1)."""
        return int(self.name[len("RANGE"):])

    @classmethod
    def from_value_count(cls, count: int) -> RangeCode:
        """Look up the code for a power-of-two value count (2..32768).

        Accepts ints and integral strings such as ``"512"``.  Fractional
        numbers, booleans and ``None`` are rejected rather than truncated.
        """
        error = ValueError(
            f"Unsupported value range {count!r}: expected a power of two "
            f"between 2 and 32768"
        )
        if isinstance(count, bool) or (isinstance(count, float) and not count.is_integer()):
            raise error
        try:
            return cls[f"RANGE{int(count)}"]
        except (KeyError, TypeError, ValueError):
            raise error from None


class OverflowPolicy(enum.Enum):
    """Handling of pushed values above the configured maximum."""

    CLAMP_TO_MAX = "clamp_max"  # store max_value instead
    CLAMP_TO_MIN = "clamp_min"  # store 0 instead
    REJECT = "reject"  # drop the value, push() returns False


@dataclass(frozen=True)
class RangeSpec:
    """Resolved range: largest storable value and bits per value."""

    max_value: int
    bit_width: int

    @property
    def value_count(self) -> int:
        return self.max_value + 1


@dataclass(frozen=True)
class SlotInfo:
    """One physical slot of a buffer, as seen by diagnostics."""

    bit_offset: int
    value: int
    popped: bool = False  # written but no longer addressable
    next_write: bool = False  # slot the next push lands on
