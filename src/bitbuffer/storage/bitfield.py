"""Bit-addressable byte storage.

A ``bytearray`` treated as one flat bit address space.  Fields of 1..16
bits are packed MSB-first and may start at any bit offset, so a single
field touches one, two or three consecutive bytes.  Writes only modify
the bits belonging to the field; neighbouring fields sharing a byte are
preserved.
"""

from __future__ import annotations

MAX_FIELD_BITS = 16


def field_span(bit_offset: int, bit_width: int) -> int:
    """Number of bytes touched by a field (1, 2 or 3 for widths <= 16)."""
    return ((bit_offset & 7) + bit_width + 7) // 8


class BitStorage:
    """Fixed-size byte array addressed by bit offset."""

    __slots__ = ("_data",)

    def __init__(self, nbytes: int) -> None:
        if nbytes < 1:
            raise ValueError(f"nbytes must be >= 1, got {nbytes}")
        self._data = bytearray(nbytes)

    @classmethod
    def for_fields(cls, bit_width: int, count: int) -> BitStorage:
        """Allocate room for *count* fields of *bit_width* bits.

        One slack byte is added beyond the packed size so a field ending
        in the last partial byte never runs off the array.
        """
        _check_width(bit_width)
        packed = (bit_width * count + 7) // 8
        return cls(packed + 1)

    # ------------------------------------------------------------------

    @property
    def nbytes(self) -> int:
        return len(self._data)

    @property
    def bit_length(self) -> int:
        return len(self._data) * 8

    def to_bytes(self) -> bytes:
        """Immutable copy of the raw array."""
        return bytes(self._data)

    # ------------------------------------------------------------------

    def write_field(self, bit_offset: int, bit_width: int, value: int) -> None:
        """Write the low *bit_width* bits of *value* at *bit_offset* (MSB first)."""
        if value < 0:
            raise ValueError(f"Unsigned value must be >= 0, got {value}")
        self._check_bounds(bit_offset, bit_width)

        start = bit_offset >> 3
        span = field_span(bit_offset, bit_width)
        tail = span * 8 - (bit_offset & 7) - bit_width  # unused bits after the field
        mask = ((1 << bit_width) - 1) << tail

        word = self._gather(start, span)
        word = (word & ~mask) | ((value << tail) & mask)
        self._scatter(start, span, word)

    def read_field(self, bit_offset: int, bit_width: int) -> int:
        """Read a *bit_width*-bit field at *bit_offset*, right-aligned."""
        self._check_bounds(bit_offset, bit_width)

        start = bit_offset >> 3
        span = field_span(bit_offset, bit_width)
        tail = span * 8 - (bit_offset & 7) - bit_width

        word = self._gather(start, span)
        return (word >> tail) & ((1 << bit_width) - 1)

    # ------------------------------------------------------------------

    def _gather(self, start: int, span: int) -> int:
        # big-endian assembly: first byte holds the most significant bits
        word = 0
        for i in range(span):
            word = (word << 8) | self._data[start + i]
        return word

    def _scatter(self, start: int, span: int, word: int) -> None:
        for i in range(span - 1, -1, -1):
            self._data[start + i] = word & 0xFF
            word >>= 8

    def _check_bounds(self, bit_offset: int, bit_width: int) -> None:
        _check_width(bit_width)
        if bit_offset < 0:
            raise ValueError(f"bit_offset must be >= 0, got {bit_offset}")
        if bit_offset + bit_width > self.bit_length:
            raise ValueError(
                f"Field of {bit_width} bits at offset {bit_offset} exceeds "
                f"storage of {self.bit_length} bits"
            )


def _check_width(bit_width: int) -> None:
    if not 1 <= bit_width <= MAX_FIELD_BITS:
        raise ValueError(
            f"bit_width must be in 1..{MAX_FIELD_BITS}, got {bit_width}"
        )
