"""OCR capability interface.

The orientation sweep only needs ``recognize(image, language)`` returning
text plus a scalar confidence. Keeping the engine behind this interface lets
tests inject scripted engines instead of a real Tesseract install.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List

import numpy as np


@dataclass
class OCREngineResult:
    """Result from one OCR engine recognition run.

    Attributes:
        text: Recognized text, lines separated by newlines.
        confidence: Mean word confidence in [0, 1]; 0 means nothing usable.
        word_confidences: Per-word confidence scores in [0, 1].
    """

    text: str
    confidence: float
    word_confidences: List[float] = field(default_factory=list)


class OCREngine(ABC):
    """Interface for OCR recognition engines.

    Implementations may raise on failure; callers decide whether a failure
    is fatal.
    """

    @abstractmethod
    def recognize(self, image: np.ndarray, language: str = "eng") -> OCREngineResult:
        raise NotImplementedError
