"""
Common types and errors shared across all modules.

Provides the geometry value types passed between detection, alignment and
display collaborators, and the terminal error taxonomy of the pipeline.
"""

from src.common.errors import (
    CertScanError,
    OCRExhaustedError,
    ParseError,
    RectificationError,
)
from src.common.types import Point, Quadrilateral

__all__ = [
    "Point",
    "Quadrilateral",
    "CertScanError",
    "OCRExhaustedError",
    "ParseError",
    "RectificationError",
]
