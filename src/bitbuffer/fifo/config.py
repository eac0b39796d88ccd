"""Buffer and exercise configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from omegaconf import DictConfig, OmegaConf

from bitbuffer.core.types import OverflowPolicy, RangeCode
from bitbuffer.fifo.buffer import BitBuffer


def _to_dict(cfg: Any) -> dict:
    if isinstance(cfg, DictConfig):
        cfg = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(cfg, dict):
        cfg = dict(cfg)
    return cfg


@dataclass
class BufferConfig:
    """Construction parameters for a :class:`BitBuffer`."""

    range_code: RangeCode = RangeCode.RANGE256
    capacity: int = 64
    overflow: OverflowPolicy = OverflowPolicy.REJECT

    @classmethod
    def from_omegaconf(cls, cfg: Any) -> BufferConfig:
        """Build from OmegaConf dict or plain dict.

        ``range`` is the number of distinct values (e.g. ``512``).  Unlike
        most settings, bad values raise instead of falling back to defaults.
        """
        if cfg is None:
            return cls()
        cfg = _to_dict(cfg)

        capacity = int(cfg.get("capacity", 64))
        if capacity < 1:
            raise ValueError(f"buffer.capacity must be >= 1, got {capacity}")

        overflow_str = str(cfg.get("overflow", "reject")).lower()
        try:
            overflow = OverflowPolicy(overflow_str)
        except ValueError:
            raise ValueError(
                f"Unknown overflow policy {overflow_str!r}; expected one of "
                f"{[p.value for p in OverflowPolicy]}"
            ) from None

        return cls(
            range_code=RangeCode.from_value_count(cfg.get("range", 256)),
            capacity=capacity,
            overflow=overflow,
        )

    def build(self) -> BitBuffer:
        """Construct a buffer with these parameters."""
        return BitBuffer(self.range_code, self.capacity, overflow=self.overflow)


@dataclass
class ExerciseConfig:
    """Randomized exercise settings for ``python -m bitbuffer``."""

    seed: int | None = 42
    max_capacity: int = 18
    ranges: list[RangeCode] = field(default_factory=lambda: list(RangeCode))

    @classmethod
    def from_omegaconf(cls, cfg: Any) -> ExerciseConfig:
        """Build from OmegaConf dict or plain dict."""
        if cfg is None:
            return cls()
        cfg = _to_dict(cfg)

        seed = cfg.get("seed", 42)
        raw_ranges = cfg.get("ranges") or []
        if not isinstance(raw_ranges, (list, tuple)):
            raise ValueError(
                f"exercise.ranges must be a list of value counts, got {raw_ranges!r}"
            )
        ranges = [RangeCode.from_value_count(n) for n in raw_ranges]
        return cls(
            seed=None if seed is None else int(seed),
            max_capacity=max(2, int(cfg.get("max_capacity", 18))),
            ranges=ranges or list(RangeCode),
        )
