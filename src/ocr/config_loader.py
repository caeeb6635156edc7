"""Pydantic configuration for the OCR engine and the orientation sweep.

The bundled config.yaml holds the OCR section without a top-level ``ocr``
key; ``load_config`` wraps it into the root ``Config``.
"""

from pathlib import Path
from typing import List

from pydantic import BaseModel, Field, field_validator

from src.utils.io import load_yaml

RIGHT_ANGLES = (0, 90, 180, 270)


class OCREngineConfig(BaseModel):
    """OCR engine configuration.

    Attributes:
        type: Engine type (currently only "tesseract" supported)
        lang: Tesseract language code
        psm: Tesseract page segmentation mode (0-13)
    """

    type: str = "tesseract"
    lang: str = "eng"
    psm: int = Field(default=3, ge=0, le=13)


class OrientationConfig(BaseModel):
    """Orientation sweep configuration.

    Attributes:
        rotations: Clockwise rotations to try, in tie-breaking priority order
        parallel: Run the attempts concurrently instead of one after another
        max_workers: Thread pool size when parallel is enabled
    """

    rotations: List[int] = Field(default_factory=lambda: [0, 90, 270, 180])
    parallel: bool = False
    max_workers: int = Field(default=4, ge=1)

    @field_validator("rotations")
    @classmethod
    def _validate_rotations(cls, v: List[int]) -> List[int]:
        if not v:
            raise ValueError("At least one rotation must be configured")
        for degrees in v:
            if degrees not in RIGHT_ANGLES:
                raise ValueError(
                    f"Rotation {degrees} is not one of {list(RIGHT_ANGLES)}"
                )
        if len(set(v)) != len(v):
            raise ValueError(f"Duplicate rotations in {v}")
        return v


class PreprocessingConfig(BaseModel):
    """Preprocessing configuration.

    Attributes:
        grayscale: Convert color images to grayscale before recognition
        auto_resize: Upscale images shorter than min_height
        min_height: Minimum height for OCR (resize smaller images)
    """

    grayscale: bool = True
    auto_resize: bool = True
    min_height: int = Field(default=600, ge=1)


class OCRModuleConfig(BaseModel):
    """Complete OCR module configuration."""

    engine: OCREngineConfig = Field(default_factory=OCREngineConfig)
    orientation: OrientationConfig = Field(default_factory=OrientationConfig)
    preprocessing: PreprocessingConfig = Field(default_factory=PreprocessingConfig)


class Config(BaseModel):
    """Root configuration container.

    Attributes:
        ocr: OCR module configuration
    """

    ocr: OCRModuleConfig = Field(default_factory=OCRModuleConfig)


def load_config(config_path: Path) -> Config:
    """Load an OCR config file.

    Keys missing from the file take the model defaults.

    Raises:
        FileNotFoundError: If config file does not exist
        pydantic.ValidationError: If a value is out of range (e.g. rotations
            that are not right angles)

    Example:
        >>> config = load_config(Path("src/ocr/config.yaml"))
        >>> config.ocr.orientation.rotations
        [0, 90, 270, 180]
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"OCR config not found: {config_path}")

    return Config(ocr=OCRModuleConfig(**load_yaml(config_path)))


def get_default_config() -> Config:
    """Bundled config.yaml, or model defaults if it is not installed."""
    bundled = Path(__file__).parent / "config.yaml"
    if not bundled.exists():
        return Config()
    return load_config(bundled)
