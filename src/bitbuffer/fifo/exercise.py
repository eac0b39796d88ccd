"""Randomized fill / drain / refill exercise checked against a reference FIFO.

The buffer is always filled past capacity before draining, so a
``deque(maxlen=capacity)`` models it exactly.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field

import numpy as np

from bitbuffer.core.types import OverflowPolicy, RangeCode
from bitbuffer.fifo.buffer import BitBuffer
from bitbuffer.fifo.diagnostics import format_slots

logger = logging.getLogger(__name__)


@dataclass
class ExerciseReport:
    """Outcome of one :func:`run_exercise` call."""

    range_code: RangeCode
    capacity: int
    pushed: int = 0
    popped: int = 0
    mismatches: list[str] = field(default_factory=list)
    dump: str = ""

    @property
    def ok(self) -> bool:
        return not self.mismatches


def run_exercise(
    range_code: RangeCode,
    capacity: int,
    rng: np.random.Generator,
) -> ExerciseReport:
    """Fill, partially drain and refill a buffer, comparing every read."""
    report = ExerciseReport(range_code=RangeCode(range_code), capacity=capacity)
    reference: deque[int] = deque(maxlen=capacity)

    with BitBuffer(range_code, capacity, overflow=OverflowPolicy.REJECT) as buf:
        span = buf.max_value + 1
        logger.debug(
            "Exercise %s: max=%d capacity=%d", report.range_code.name, buf.max_value, capacity
        )

        # Fill: count down from max_value, always at least one full lap
        n_fill = capacity + int(rng.integers(0, capacity))
        for i in range(n_fill):
            v = buf.max_value - i % span
            _push(buf, reference, v, report)
        logger.debug("After fill (%d): %s", n_fill, format_slots(buf.snapshot()))

        n_pop = int(rng.integers(0, capacity))
        for _ in range(n_pop):
            got = buf.pop()
            want = reference.popleft() if reference else 0
            report.popped += 1
            if got != want:
                report.mismatches.append(f"pop #{report.popped}: got {got}, expected {want}")
        logger.debug("After pop (%d): %s", n_pop, format_slots(buf.snapshot()))

        n_refill = int(rng.integers(0, capacity))
        for i in range(n_refill):
            _push(buf, reference, i % span, report)
        report.dump = format_slots(buf.snapshot())
        logger.debug("After refill (%d): %s", n_refill, report.dump)

        if buf.value_count != len(reference):
            report.mismatches.append(
                f"value_count {buf.value_count}, expected {len(reference)}"
            )
        contents = buf.to_array().tolist()
        if contents != list(reference):
            report.mismatches.append(f"contents {contents}, expected {list(reference)}")

    return report


def _push(buf: BitBuffer, reference: deque[int], value: int, report: ExerciseReport) -> None:
    if not buf.push(value):
        report.mismatches.append(f"push of in-range value {value} rejected")
        return
    reference.append(value)
    report.pushed += 1
