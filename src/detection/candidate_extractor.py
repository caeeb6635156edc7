"""
Candidate Extractor

Finds convex four-cornered contours in a photograph that could be the
printed registration frame. Detection is purely classical (OpenCV):

1. Grayscale + Gaussian blur to suppress sensor noise
2. Binarize (adaptive Gaussian by default, fixed threshold if configured)
3. Contour search (all contours, simple chain approximation)
4. Polygon approximation at ``approx_epsilon * perimeter``
5. Keep 4-vertex convex polygons whose area ratio is inside the window
"""

import logging
from typing import List, Optional

import cv2
import numpy as np

from src.detection.config_loader import get_default_config
from src.detection.types import Candidate, ExtractionConfig

logger = logging.getLogger(__name__)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a BGR, BGRA or single-channel image to 2D grayscale."""
    if image.ndim == 2:
        return image
    if image.ndim == 3 and image.shape[2] == 1:
        return image[:, :, 0]
    if image.ndim == 3 and image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if image.ndim == 3 and image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    raise ValueError(f"Unsupported image shape: {image.shape}")


class CandidateExtractor:
    """
    Contour-based quadrilateral finder.

    Example:
        >>> extractor = CandidateExtractor()
        >>> image = cv2.imread("certificate.jpg")
        >>> candidates = extractor.find_candidates(image)
        >>> print(f"{len(candidates)} candidate frames")
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config if config is not None else get_default_config().extraction

    def binarize(self, image: np.ndarray) -> np.ndarray:
        """Grayscale, blur and threshold an image into a 0/255 mask."""
        gray = to_grayscale(image)
        k = self.config.blur_kernel_size
        blurred = cv2.GaussianBlur(gray, (k, k), 0)

        if self.config.threshold > 0:
            _, bw = cv2.threshold(
                blurred, self.config.threshold, 255, cv2.THRESH_BINARY
            )
        else:
            bw = cv2.adaptiveThreshold(
                blurred,
                255,
                cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
                cv2.THRESH_BINARY,
                self.config.adaptive_block_size,
                self.config.adaptive_c,
            )
        return bw

    def find_candidates(self, image: np.ndarray) -> List[Candidate]:
        """
        Extract convex quadrilateral candidates from an image.

        Args:
            image: Source image (H, W, C) or (H, W). Never modified.

        Returns:
            List of Candidates, possibly empty. An empty list is a valid
            "nothing found" result, not an error.

        Raises:
            ValueError: If the image is None or empty.
        """
        if image is None or image.size == 0:
            raise ValueError("Invalid input image: image is None or empty")

        img_h, img_w = image.shape[:2]
        image_area = float(img_w * img_h)

        bw = self.binarize(image)
        contours, _ = cv2.findContours(bw, cv2.RETR_LIST, cv2.CHAIN_APPROX_SIMPLE)

        candidates: List[Candidate] = []
        for contour in contours:
            perimeter = cv2.arcLength(contour, True)
            approx = cv2.approxPolyDP(
                contour, self.config.approx_epsilon * perimeter, True
            )
            if len(approx) != 4 or not cv2.isContourConvex(approx):
                continue

            area_ratio = cv2.contourArea(approx) / image_area
            if self.config.min_area_ratio < area_ratio < self.config.max_area_ratio:
                candidates.append(
                    Candidate(
                        points=approx.reshape(4, 2).astype(np.float32),
                        area_ratio=float(area_ratio),
                    )
                )

        logger.debug(
            f"Extracted {len(candidates)} quadrilateral candidates "
            f"from {len(contours)} contours ({img_w}x{img_h})"
        )

        return candidates
