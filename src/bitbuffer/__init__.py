"""BITBUFFER: fixed-capacity FIFO storing integers in the minimum number of bits.

Values in a configured power-of-two range are packed back to back in a
byte array, so a buffer of 0..511 values costs 9 bits per entry instead
of a machine word.
"""

from bitbuffer.core.ranges import resolve
from bitbuffer.core.types import OverflowPolicy, RangeCode, RangeSpec, SlotInfo
from bitbuffer.fifo.buffer import BitBuffer
from bitbuffer.fifo.config import BufferConfig
from bitbuffer.storage.bitfield import BitStorage

__all__ = [
    "BitBuffer",
    "BitStorage",
    "BufferConfig",
    "OverflowPolicy",
    "RangeCode",
    "RangeSpec",
    "SlotInfo",
    "resolve",
]
