"""Bit-packed FIFO buffer, its configuration and diagnostics."""

from bitbuffer.fifo.buffer import BitBuffer
from bitbuffer.fifo.config import BufferConfig, ExerciseConfig
from bitbuffer.fifo.diagnostics import format_slots
from bitbuffer.fifo.exercise import ExerciseReport, run_exercise

__all__ = [
    "BitBuffer",
    "BufferConfig",
    "ExerciseConfig",
    "ExerciseReport",
    "format_slots",
    "run_exercise",
]
