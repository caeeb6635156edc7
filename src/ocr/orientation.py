"""Orientation resolver: trial OCR at several rotations of the rectified frame.

The rectified frame may be upright, sideways or upside down. The resolver
runs OCR on each configured rotation (default priority 0, 90, 270, 180,
since upright and sideways captures are far more common than upside-down
ones) and keeps the attempt with the strictly highest confidence. Earlier
rotations win ties, including when attempts run concurrently.

Example:
    >>> resolver = OrientationResolver(TesseractEngine())
    >>> result = resolver.resolve(rectified)
    >>> print(result.rotation_degrees, result.confidence)
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

import numpy as np

from src.common.errors import OCRExhaustedError

from .config_loader import Config, OrientationConfig, get_default_config
from .engine import OCREngine
from .engine_tesseract import TesseractEngine
from .rotation import rotate_image
from .types import OrientationAttempt, OrientationResult

logger = logging.getLogger(__name__)


class OrientationResolver:
    """Picks the rotation of a rectified image that OCRs most confidently.

    Args:
        engine: OCR capability. Defaults to a configured TesseractEngine.
        config: OCR configuration. Defaults to the bundled config.yaml.

    Attributes:
        engine: OCR engine used for every attempt
        orientation: Rotation order and concurrency settings
        language: Language passed to the engine
    """

    def __init__(
        self,
        engine: Optional[OCREngine] = None,
        config: Optional[Config] = None,
    ):
        config = config or get_default_config()
        self.orientation: OrientationConfig = config.ocr.orientation
        self.language = config.ocr.engine.lang
        if engine is None:
            engine = TesseractEngine(
                config=config.ocr.engine, preprocessing=config.ocr.preprocessing
            )
            if not engine.is_available():
                logger.error(
                    "Tesseract binary not found; every OCR attempt will fail"
                )
        self.engine = engine

    def _attempt(self, image: np.ndarray, degrees: int) -> OrientationAttempt:
        """Run one OCR attempt; an engine failure becomes a zero-confidence attempt."""
        try:
            rotated = rotate_image(image, degrees)
            result = self.engine.recognize(rotated, self.language)
        except Exception as e:
            logger.warning(f"OCR attempt at {degrees} degrees failed: {e}")
            return OrientationAttempt(
                rotation_degrees=degrees,
                recognized_text="",
                confidence=0.0,
                error=str(e),
            )

        logger.info(
            f"OCR attempt at {degrees} degrees: confidence={result.confidence:.3f}"
        )
        return OrientationAttempt(
            rotation_degrees=degrees,
            recognized_text=result.text,
            confidence=float(result.confidence),
        )

    def _run_attempts(self, image: np.ndarray) -> List[OrientationAttempt]:
        rotations = self.orientation.rotations
        if not self.orientation.parallel:
            return [self._attempt(image, degrees) for degrees in rotations]

        workers = min(self.orientation.max_workers, len(rotations))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self._attempt, image, d) for d in rotations]
            # Collected in priority order, not completion order
            return [future.result() for future in futures]

    def resolve(self, image: np.ndarray) -> OrientationResult:
        """Run the orientation sweep and return the best attempt.

        Args:
            image: Rectified registration frame. Never modified.

        Returns:
            OrientationResult with the best attempt, every attempt, and the
            image rotated by the winning rotation.

        Raises:
            ValueError: If the image is None or empty.
            OCRExhaustedError: If every attempt raised.
        """
        if image is None or image.size == 0:
            raise ValueError("Invalid input image: image is None or empty")

        attempts = self._run_attempts(image)

        best: Optional[OrientationAttempt] = None
        for attempt in attempts:
            if not attempt.succeeded:
                continue
            if best is None or attempt.confidence > best.confidence:
                best = attempt

        if best is None:
            logger.error("OCR failed at all orientations")
            raise OCRExhaustedError(attempts)

        logger.info(
            f"Best orientation: {best.rotation_degrees} degrees "
            f"(confidence={best.confidence:.3f})"
        )

        return OrientationResult(
            best=best,
            attempts=attempts,
            oriented_image=rotate_image(image, best.rotation_degrees),
        )
