"""Orientation resolution and OCR.

Runs OCR on a rectified registration frame at a fixed set of rotations and
keeps the most confident reading.

Core Components:
    - engine: OCR capability interface (OCREngine, OCREngineResult)
    - engine_tesseract: Default Tesseract-backed engine
    - rotation: Clockwise image rotation with angle normalization
    - orientation: OrientationResolver (the orientation sweep)
    - config_loader: Configuration loading with Pydantic validation

Example:
    >>> from src.ocr import OrientationResolver
    >>> resolver = OrientationResolver()
    >>> result = resolver.resolve(rectified_image)
    >>> print(result.text)
"""

from .config_loader import (
    Config,
    OCREngineConfig,
    OCRModuleConfig,
    OrientationConfig,
    PreprocessingConfig,
    get_default_config,
    load_config,
)
from .engine import OCREngine, OCREngineResult
from .engine_tesseract import TesseractEngine
from .orientation import OrientationResolver
from .rotation import normalize_degrees, rotate_image
from .types import OrientationAttempt, OrientationResult

__all__ = [
    # Types
    "OrientationAttempt",
    "OrientationResult",
    "OCREngineResult",
    # Engines
    "OCREngine",
    "TesseractEngine",
    # Orientation
    "OrientationResolver",
    "normalize_degrees",
    "rotate_image",
    # Configuration
    "Config",
    "OCRModuleConfig",
    "OCREngineConfig",
    "OrientationConfig",
    "PreprocessingConfig",
    "load_config",
    "get_default_config",
]
