"""
Unit tests for the detection config loader.
"""

from pathlib import Path

import pytest
import yaml

from src.detection.config_loader import (
    DEFAULT_CONFIG_PATH,
    get_default_config,
    load_config,
)
from src.detection.types import DetectionConfig


def write_config(tmp_path: Path, **overrides) -> Path:
    """Copy the bundled config with ``section__key=value`` overrides applied."""
    raw = yaml.safe_load(DEFAULT_CONFIG_PATH.read_text())
    for dotted, value in overrides.items():
        section, key = dotted.split("__")
        raw[section][key] = value
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(raw))
    return path


class TestLoadConfig:
    """Tests for load_config function."""

    def test_default_config_values(self):
        config = get_default_config()

        assert isinstance(config, DetectionConfig)
        assert config.extraction.min_area_ratio == 0.0005
        assert config.extraction.max_area_ratio == 0.5
        assert config.extraction.approx_epsilon == 0.02
        assert config.extraction.threshold == 0
        assert config.extraction.blur_kernel_size == 5
        assert config.extraction.adaptive_block_size == 11
        assert config.extraction.adaptive_c == 2
        assert config.selection.ideal_size_fraction == 0.25
        assert config.selection.expected_aspect_ratio == 1.0

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_missing_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"extraction": {}}))

        with pytest.raises(ValueError, match="Invalid configuration file"):
            load_config(path)

    def test_threshold_defaults_to_adaptive(self, tmp_path):
        raw = yaml.safe_load(DEFAULT_CONFIG_PATH.read_text())
        del raw["extraction"]["threshold"]
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump(raw))

        assert load_config(path).extraction.threshold == 0

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"extraction__min_area_ratio": 0.6}, "must be less than"),
            ({"extraction__max_area_ratio": 1.5}, "max_area_ratio"),
            ({"extraction__approx_epsilon": 0}, "approx_epsilon"),
            ({"extraction__threshold": 300}, "threshold"),
            ({"extraction__blur_kernel_size": 4}, "blur_kernel_size"),
            ({"extraction__adaptive_block_size": 1}, "adaptive_block_size"),
            ({"selection__ideal_size_fraction": 0}, "ideal_size_fraction"),
            ({"selection__corner_sum_tolerance": -1}, "corner_sum_tolerance"),
        ],
    )
    def test_invalid_values(self, tmp_path, overrides, message):
        path = write_config(tmp_path, **overrides)

        with pytest.raises(ValueError, match=message):
            load_config(path)
