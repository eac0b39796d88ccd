"""Bit-addressable storage for packed unsigned fields."""

from bitbuffer.storage.bitfield import MAX_FIELD_BITS, BitStorage, field_span

__all__ = [
    "BitStorage",
    "MAX_FIELD_BITS",
    "field_span",
]
