"""BitBuffer: bit-packed fixed-capacity FIFO of unsigned integers."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import numpy as np

from bitbuffer.core.ranges import resolve
from bitbuffer.core.types import OverflowPolicy, RangeCode, SlotInfo
from bitbuffer.storage.bitfield import BitStorage

logger = logging.getLogger(__name__)


class BitBuffer:
    """Fixed-capacity FIFO storing each value in the minimum number of bits.

    Values are written at a bit cursor that advances by ``bit_width`` per
    push and wraps to zero once ``capacity`` slots have been written.
    After the first wrap the buffer is full and each push overwrites the
    oldest slot in place.

    ``pop()`` and ``peek()`` return ``0`` when nothing is available, which
    is indistinguishable from a stored zero: check :attr:`value_count`
    first, or use :meth:`try_pop` / :meth:`try_peek`.

    Not thread-safe.  Concurrent callers must serialize access.
    """

    def __init__(
        self,
        range_code: RangeCode | int,
        capacity: int,
        overflow: OverflowPolicy = OverflowPolicy.REJECT,
    ) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        spec = resolve(range_code)
        self._range_code = RangeCode(range_code)
        self._max_value = spec.max_value
        self._bit_width = spec.bit_width
        self._capacity = capacity
        self._overflow = OverflowPolicy(overflow)

        self._storage: BitStorage | None = BitStorage.for_fields(
            self._bit_width, capacity
        )
        self._write_bit_index = 0
        self._popped_count = 0
        self._full = False

        logger.debug(
            "BitBuffer allocated %d bytes for %d x %d-bit values",
            self._storage.nbytes,
            capacity,
            self._bit_width,
        )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def range_code(self) -> RangeCode:
        return self._range_code

    @property
    def max_value(self) -> int:
        return self._max_value

    @property
    def bit_width(self) -> int:
        return self._bit_width

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def overflow_policy(self) -> OverflowPolicy:
        return self._overflow

    @overflow_policy.setter
    def overflow_policy(self, policy: OverflowPolicy) -> None:
        self._overflow = OverflowPolicy(policy)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def value_count(self) -> int:
        """Number of values currently addressable."""
        written = (
            self._capacity if self._full else self._write_bit_index // self._bit_width
        )
        return written - self._popped_count

    def __len__(self) -> int:
        return self.value_count

    @property
    def is_full(self) -> bool:
        """True once the cursor has wrapped at least once."""
        return self._full

    @property
    def nbytes(self) -> int:
        """Size of the backing byte array."""
        return self._live_storage().nbytes

    @property
    def closed(self) -> bool:
        return self._storage is None

    # ------------------------------------------------------------------
    # FIFO operations
    # ------------------------------------------------------------------

    def push(self, value: int) -> bool:
        """Append *value* as the newest entry.

        Returns ``False`` only when the value is out of range and the
        overflow policy is :attr:`OverflowPolicy.REJECT`.
        """
        storage = self._live_storage()
        value = int(value)
        if value < 0:
            raise ValueError(f"Value must be >= 0, got {value}")

        if value > self._max_value:
            if self._overflow is OverflowPolicy.CLAMP_TO_MAX:
                value = self._max_value
            elif self._overflow is OverflowPolicy.CLAMP_TO_MIN:
                value = 0
            else:
                logger.debug(
                    "Rejected value %d above range maximum %d", value, self._max_value
                )
                return False

        # Tail bits past the last whole slot are never used
        if self._write_bit_index + self._bit_width > self._slot_bits:
            if not self._full:
                logger.debug("BitBuffer wrapped after %d values", self._capacity)
            self._write_bit_index = 0
            self._full = True

        storage.write_field(self._write_bit_index, self._bit_width, value)
        self._write_bit_index += self._bit_width

        if self._popped_count > 0:
            self._popped_count -= 1
        return True

    def pop(self) -> int:
        """Remove and return the oldest value, or ``0`` if empty."""
        self._live_storage()
        if self.value_count <= 0:
            return 0
        value = self.peek(1)
        self._popped_count += 1
        return value

    def peek(self, index: int) -> int:
        """Return the value at FIFO *index* (1 = oldest) without removing it.

        Returns ``0`` for an index outside ``1..value_count``.
        """
        storage = self._live_storage()
        count = self.value_count
        if index < 1 or index > count:
            return 0
        return storage.read_field(self._offset_of(index, count), self._bit_width)

    def try_pop(self) -> int | None:
        """Like :meth:`pop` but returns *None* when the buffer is empty."""
        self._live_storage()
        if self.value_count <= 0:
            return None
        return self.pop()

    def try_peek(self, index: int) -> int | None:
        """Like :meth:`peek` but returns *None* for an unavailable index."""
        self._live_storage()
        if index < 1 or index > self.value_count:
            return None
        return self.peek(index)

    def extend(self, values: Iterable[int]) -> int:
        """Push every value in order.  Returns how many were stored."""
        self._live_storage()
        stored = 0
        for v in values:
            if self.push(int(v)):
                stored += 1
        return stored

    def to_array(self) -> np.ndarray:
        """Return the addressable values, oldest first, as ``uint16``."""
        self._live_storage()
        count = self.value_count
        out = np.empty(count, dtype=np.uint16)
        for i in range(count):
            out[i] = self.peek(i + 1)
        return out

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    def snapshot(self) -> list[SlotInfo]:
        """Describe every physically written slot in storage order."""
        storage = self._live_storage()
        count = self.value_count
        live = {self._offset_of(i, count) for i in range(1, count + 1)}
        written = self._capacity if self._full else self._write_bit_index // self._bit_width
        next_offset = (
            0 if self._write_bit_index + self._bit_width > self._slot_bits
            else self._write_bit_index
        )

        slots = []
        for slot in range(written):
            offset = slot * self._bit_width
            slots.append(
                SlotInfo(
                    bit_offset=offset,
                    value=storage.read_field(offset, self._bit_width),
                    popped=offset not in live,
                    next_write=offset == next_offset,
                )
            )
        return slots

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Release the backing storage.  Further use raises RuntimeError."""
        if self._storage is None:
            return
        logger.debug("BitBuffer released %d bytes", self._storage.nbytes)
        self._storage = None

    def __enter__(self) -> BitBuffer:
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{self.value_count}/{self._capacity}"
        return (
            f"BitBuffer({self._range_code.name}, {state}, "
            f"{self._bit_width} bits/value)"
        )

    # ------------------------------------------------------------------

    @property
    def _slot_bits(self) -> int:
        return self._capacity * self._bit_width

    def _offset_of(self, index: int, count: int) -> int:
        bit_delta = (count - index + 1) * self._bit_width
        if bit_delta <= self._write_bit_index:
            return self._write_bit_index - bit_delta
        # value sits behind the cursor after a wrap
        return self._slot_bits - bit_delta + self._write_bit_index

    def _live_storage(self) -> BitStorage:
        if self._storage is None:
            raise RuntimeError("BitBuffer is closed")
        return self._storage
