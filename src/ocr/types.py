"""Type definitions for the orientation sweep.

Each rotation tried on the rectified frame produces an ``OrientationAttempt``;
the resolver returns the most confident one wrapped in an
``OrientationResult``.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np


@dataclass
class OrientationAttempt:
    """One OCR run against a specific rotation of the rectified image.

    Attributes:
        rotation_degrees: Clockwise rotation applied (0, 90, 270 or 180)
        recognized_text: OCR text ("" if the attempt failed)
        confidence: Engine confidence; 0 when the attempt failed
        error: Failure message if the engine raised, None otherwise
    """

    rotation_degrees: int
    recognized_text: str
    confidence: float
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        """True if the engine produced a result (even an empty one)."""
        return self.error is None


@dataclass
class OrientationResult:
    """Winning attempt plus the full sweep for diagnostics.

    Attributes:
        best: Attempt with the strictly highest confidence (first wins ties)
        attempts: Every attempt in priority order
        oriented_image: Rectified image rotated by the winning rotation
    """

    best: OrientationAttempt
    attempts: List[OrientationAttempt] = field(default_factory=list)
    oriented_image: Optional[np.ndarray] = None

    @property
    def rotation_degrees(self) -> int:
        return self.best.rotation_degrees

    @property
    def text(self) -> str:
        return self.best.recognized_text

    @property
    def confidence(self) -> float:
        return self.best.confidence
