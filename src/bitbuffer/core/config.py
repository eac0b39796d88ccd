"""YAML configuration loading using OmegaConf."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from omegaconf import DictConfig, OmegaConf

if TYPE_CHECKING:
    from bitbuffer.fifo.config import BufferConfig, ExerciseConfig

ROOT_KEY = "bitbuffer"


class BitBufferConfig:
    """Loads the ``bitbuffer`` YAML tree and hands out typed sections.

    Dotlist overrides (``"bitbuffer.buffer.capacity=8"``) are merged on top
    of the file before validation, so they are checked like file values.
    """

    def __init__(self, config_path: str | Path = "config/default.yaml"):
        self._config_path = Path(config_path)
        self._config: DictConfig | None = None

    def load(self, validate: bool = False, overrides: list[str] | None = None) -> DictConfig:
        """Load the config file and merge *overrides* on top.

        Args:
            validate: If True, validate the merged config against the
                Pydantic schema and raise ``pydantic.ValidationError``
                on invalid values.
            overrides: ``key=value`` strings in OmegaConf dotlist form.
        """
        if not self._config_path.exists():
            raise FileNotFoundError(f"Config not found: {self._config_path}")

        base = OmegaConf.load(self._config_path)
        assert isinstance(base, DictConfig)
        if overrides:
            base = OmegaConf.merge(base, OmegaConf.from_dotlist(list(overrides)))

        if validate or OmegaConf.select(base, f"{ROOT_KEY}.system.validate_config", default=False):
            from bitbuffer.core.config_schema import validate_config

            validate_config(OmegaConf.to_container(base, resolve=True))

        self._config = base
        return self._config

    def override(self, dotpath: str, value: Any) -> None:
        """Override a config value using dot notation.

        Example: config.override("bitbuffer.buffer.capacity", 128)
        """
        OmegaConf.update(self.cfg, dotpath, value)

    @property
    def cfg(self) -> DictConfig:
        if self._config is None:
            raise RuntimeError("Config not loaded yet. Call load() first.")
        return self._config

    def section(self, name: str) -> DictConfig:
        """Return ``bitbuffer.<name>``, or an empty node when it is absent."""
        node = OmegaConf.select(self.cfg, f"{ROOT_KEY}.{name}", default=None)
        if node is None:
            return OmegaConf.create({})
        if not isinstance(node, DictConfig):
            raise ValueError(f"{ROOT_KEY}.{name} must be a mapping, got {node!r}")
        return node

    def buffer_config(self) -> BufferConfig:
        from bitbuffer.fifo.config import BufferConfig

        return BufferConfig.from_omegaconf(self.section("buffer"))

    def exercise_config(self) -> ExerciseConfig:
        from bitbuffer.fifo.config import ExerciseConfig

        return ExerciseConfig.from_omegaconf(self.section("exercise"))
