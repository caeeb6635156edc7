"""Tesseract OCR engine wrapper for certification text recognition.

This module provides the default OCR capability: it runs Tesseract on a
rectified registration frame and rebuilds the page text line by line, with a
blank line between paragraphs, together with a mean word confidence.

Example:
    >>> from src.ocr import TesseractEngine
    >>> engine = TesseractEngine()
    >>> result = engine.recognize(image, "eng")
    >>> print(result.text, result.confidence)
"""

import logging
from typing import Dict, List, Optional, Tuple

import cv2
import numpy as np
import pytesseract

from .config_loader import OCREngineConfig, PreprocessingConfig
from .engine import OCREngine, OCREngineResult

logger = logging.getLogger(__name__)


class TesseractEngine(OCREngine):
    """Wrapper for Tesseract OCR.

    Args:
        config: OCR engine configuration.
        preprocessing: Image preprocessing configuration.

    Example:
        >>> engine = TesseractEngine(OCREngineConfig(psm=6))
        >>> result = engine.recognize(cv2.imread("frame.png"))
        >>> print(f"Confidence: {result.confidence:.2f}")
    """

    def __init__(
        self,
        config: Optional[OCREngineConfig] = None,
        preprocessing: Optional[PreprocessingConfig] = None,
    ):
        self.config = config or OCREngineConfig()
        self.preprocessing = preprocessing or PreprocessingConfig()

        logger.info(
            f"TesseractEngine initialized: lang={self.config.lang}, "
            f"psm={self.config.psm}"
        )

    def is_available(self) -> bool:
        """Check if the Tesseract binary can be found."""
        try:
            version = pytesseract.get_tesseract_version()
            logger.debug(f"Tesseract version {version}")
            return True
        except (pytesseract.TesseractNotFoundError, OSError):
            return False

    def preprocess(self, image: np.ndarray) -> np.ndarray:
        """Convert to grayscale and upscale short images, as configured."""
        if self.preprocessing.grayscale and image.ndim == 3:
            if image.shape[2] == 3:
                image = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
            elif image.shape[2] == 4:
                image = cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
            elif image.shape[2] == 1:
                image = image[:, :, 0]

        h, w = image.shape[:2]
        min_height = self.preprocessing.min_height
        if self.preprocessing.auto_resize and h < min_height:
            scale = min_height / h
            image = cv2.resize(
                image,
                (max(1, int(round(w * scale))), min_height),
                interpolation=cv2.INTER_CUBIC,
            )
            logger.debug(f"Upscaled image from {w}x{h} by {scale:.2f}")

        return image

    def recognize(
        self, image: np.ndarray, language: Optional[str] = None
    ) -> OCREngineResult:
        """Recognize text in an image.

        Args:
            image: Image as numpy array (H, W) or (H, W, C).
            language: Tesseract language code; defaults to the configured one.

        Returns:
            OCREngineResult with reconstructed text and mean confidence.
            An image without any words yields empty text and confidence 0.

        Raises:
            ValueError: If the image is None or empty.
            RuntimeError: If Tesseract itself fails.
        """
        if image is None or image.size == 0:
            raise ValueError("Invalid image: empty or None")

        lang = language or self.config.lang
        prepared = self.preprocess(image)
        tesseract_config = f"--psm {self.config.psm}"

        logger.debug(f"Running Tesseract lang={lang} config='{tesseract_config}'")

        try:
            data = pytesseract.image_to_data(
                prepared,
                lang=lang,
                config=tesseract_config,
                output_type=pytesseract.Output.DICT,
            )
        except (pytesseract.TesseractError, pytesseract.TesseractNotFoundError) as e:
            raise RuntimeError(f"Tesseract recognition failed: {e}") from e

        text, confidences = assemble_text(data)

        if not confidences:
            logger.warning("Tesseract returned no words")
            return OCREngineResult(text="", confidence=0.0)

        avg_confidence = float(np.mean(confidences))

        logger.debug(
            f"Tesseract recognized {len(confidences)} words, "
            f"confidence={avg_confidence:.2f}"
        )

        return OCREngineResult(
            text=text,
            confidence=avg_confidence,
            word_confidences=confidences,
        )


def assemble_text(data: Dict[str, list]) -> Tuple[str, List[float]]:
    """Rebuild page text from ``pytesseract.image_to_data`` output.

    Words sharing (block, paragraph, line) are joined by single spaces;
    lines are joined by newlines, with a blank line between paragraphs.

    Returns:
        Tuple of (text, per-word confidences in [0, 1]).
    """
    lines: List[str] = []
    confidences: List[float] = []
    current_key = None
    current_paragraph = None
    words: List[str] = []

    def flush():
        if words:
            lines.append(" ".join(words))

    for i in range(len(data["text"])):
        word = str(data["text"][i]).strip()
        conf = float(data["conf"][i])
        if not word or conf < 0:
            continue

        paragraph = (data["block_num"][i], data["par_num"][i])
        key = paragraph + (data["line_num"][i],)
        if key != current_key:
            flush()
            words = []
            if current_paragraph is not None and paragraph != current_paragraph:
                lines.append("")
            current_key = key
            current_paragraph = paragraph

        words.append(word)
        confidences.append(conf / 100.0)

    flush()

    return "\n".join(lines), confidences
