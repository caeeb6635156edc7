"""
Configuration loader for the Detection module.

Loads and validates configuration from config.yaml file.
"""

import logging
from pathlib import Path
from typing import Any, Dict

from src.detection.types import DetectionConfig, ExtractionConfig, SelectionConfig
from src.utils.io import load_yaml

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> DetectionConfig:
    """
    Load detection configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated DetectionConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config is invalid or missing required fields.

    Example:
        >>> config = load_config()
        >>> print(config.extraction.min_area_ratio)
        0.0005
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading detection config from {config_path}")

    raw_config = load_yaml(config_path)

    try:
        config = _parse_config(raw_config)
        _validate_config(config)
        logger.info("Successfully loaded detection configuration")
        return config
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Invalid configuration file: {e}") from e


def _parse_config(raw: Dict[str, Any]) -> DetectionConfig:
    """Parse raw dictionary into structured config objects."""
    extraction = raw["extraction"]
    selection = raw["selection"]

    return DetectionConfig(
        extraction=ExtractionConfig(
            min_area_ratio=float(extraction["min_area_ratio"]),
            max_area_ratio=float(extraction["max_area_ratio"]),
            approx_epsilon=float(extraction["approx_epsilon"]),
            threshold=int(extraction.get("threshold", 0)),
            blur_kernel_size=int(extraction["blur_kernel_size"]),
            adaptive_block_size=int(extraction["adaptive_block_size"]),
            adaptive_c=float(extraction["adaptive_c"]),
        ),
        selection=SelectionConfig(
            ideal_size_fraction=float(selection["ideal_size_fraction"]),
            corner_sum_tolerance=float(selection["corner_sum_tolerance"]),
            expected_aspect_ratio=float(selection["expected_aspect_ratio"]),
        ),
    )


def _validate_config(config: DetectionConfig) -> None:
    """
    Validate configuration values for logical consistency.

    Raises:
        ValueError: If any configuration value is invalid.
    """
    ext = config.extraction
    if not 0 < ext.min_area_ratio < 1:
        raise ValueError("min_area_ratio must be in (0, 1)")
    if not 0 < ext.max_area_ratio <= 1:
        raise ValueError("max_area_ratio must be in (0, 1]")
    if ext.min_area_ratio >= ext.max_area_ratio:
        raise ValueError(
            f"min_area_ratio ({ext.min_area_ratio}) must be less than "
            f"max_area_ratio ({ext.max_area_ratio})"
        )
    if ext.approx_epsilon <= 0:
        raise ValueError("approx_epsilon must be positive")
    if not 0 <= ext.threshold <= 255:
        raise ValueError("threshold must be in [0, 255]")

    for name in ("blur_kernel_size", "adaptive_block_size"):
        value = getattr(ext, name)
        if value < 3 or value % 2 == 0:
            raise ValueError(f"{name} must be an odd integer >= 3, got {value}")

    sel = config.selection
    if sel.ideal_size_fraction <= 0:
        raise ValueError("ideal_size_fraction must be positive")
    if sel.corner_sum_tolerance < 0:
        raise ValueError("corner_sum_tolerance cannot be negative")
    if sel.expected_aspect_ratio <= 0:
        raise ValueError("expected_aspect_ratio must be positive")

    logger.debug("Configuration validation passed")


def get_default_config() -> DetectionConfig:
    """Load the bundled config.yaml."""
    return load_config(DEFAULT_CONFIG_PATH)
