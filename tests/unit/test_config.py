"""Tests for the configuration loader."""

import pytest
from omegaconf import DictConfig
from pydantic import ValidationError

from bitbuffer.core.config import BitBufferConfig
from bitbuffer.core.types import RangeCode


class TestBitBufferConfig:
    def test_load_default(self, config_path):
        config = BitBufferConfig(config_path)
        cfg = config.load()
        assert isinstance(cfg, DictConfig)
        assert cfg.bitbuffer.system.name == "BITBUFFER"

    def test_load_missing_file(self, tmp_path):
        config = BitBufferConfig(tmp_path / "nonexistent.yaml")
        with pytest.raises(FileNotFoundError):
            config.load()

    def test_override(self, config_path):
        config = BitBufferConfig(config_path)
        config.load()
        config.override("bitbuffer.buffer.capacity", 128)
        assert config.cfg.bitbuffer.buffer.capacity == 128

    def test_override_before_load(self, config_path):
        config = BitBufferConfig(config_path)
        with pytest.raises(RuntimeError):
            config.override("bitbuffer.buffer.capacity", 128)

    def test_cfg_before_load(self, config_path):
        with pytest.raises(RuntimeError):
            _ = BitBufferConfig(config_path).cfg

    def test_buffer_defaults(self, config_path):
        cfg = BitBufferConfig(config_path).load()
        buf = cfg.bitbuffer.buffer
        assert buf.range == 512
        assert buf.capacity == 64
        assert buf.overflow == "reject"

    def test_load_with_validation(self, config_path):
        cfg = BitBufferConfig(config_path).load(validate=True)
        assert cfg.bitbuffer.exercise.seed == 42

    def test_validation_flag_in_file(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "bitbuffer:\n"
            "  system:\n"
            "    validate_config: true\n"
            "  buffer:\n"
            "    range: 300\n"
        )
        with pytest.raises(ValidationError):
            BitBufferConfig(path).load()

    def test_invalid_file_loads_without_validation(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("bitbuffer:\n  buffer:\n    range: 300\n")
        cfg = BitBufferConfig(path).load()
        assert cfg.bitbuffer.buffer.range == 300

    def test_dotlist_overrides(self, config_path):
        cfg = BitBufferConfig(config_path).load(
            overrides=["bitbuffer.buffer.capacity=8", "bitbuffer.exercise.ranges=[8,16]"]
        )
        assert cfg.bitbuffer.buffer.capacity == 8
        assert list(cfg.bitbuffer.exercise.ranges) == [8, 16]
        assert cfg.bitbuffer.buffer.range == 512

    def test_dotlist_overrides_validated(self, config_path):
        with pytest.raises(ValidationError):
            BitBufferConfig(config_path).load(
                validate=True, overrides=["bitbuffer.buffer.range=300"]
            )


class TestBitBufferConfigSections:
    def test_buffer_config(self, config_path):
        config = BitBufferConfig(config_path)
        config.load()
        buf = config.buffer_config()
        assert buf.range_code is RangeCode.RANGE512
        assert buf.capacity == 64
        assert buf.build().nbytes == 73

    def test_exercise_config_follows_override(self, config_path):
        config = BitBufferConfig(config_path)
        config.load()
        config.override("bitbuffer.exercise.ranges", [32])
        assert config.exercise_config().ranges == [RangeCode.RANGE32]

    def test_missing_section_is_empty(self, tmp_path):
        path = tmp_path / "bare.yaml"
        path.write_text("other: 1\n")
        config = BitBufferConfig(path)
        config.load()
        assert len(config.section("buffer")) == 0
        assert config.buffer_config().capacity == 64

    def test_non_mapping_section_raises(self, tmp_path):
        path = tmp_path / "flat.yaml"
        path.write_text("bitbuffer:\n  buffer: 12\n")
        config = BitBufferConfig(path)
        config.load()
        with pytest.raises(ValueError, match="must be a mapping"):
            config.section("buffer")

    def test_section_before_load(self, config_path):
        with pytest.raises(RuntimeError):
            BitBufferConfig(config_path).section("buffer")
