"""
Main processor for the Detection module.

Orchestrates the registration-frame stages:
1. Candidate extraction (contours -> convex quads)
2. Candidate selection (score -> canonical corners)
3. Perspective rectification (warp to upright rectangle)

A missing frame is a normal, recoverable result (``ok=False``); a failing
warp raises ``RectificationError``.
"""

import logging
from pathlib import Path
from typing import List, Optional

import numpy as np

from src.alignment.geometric_validator import is_convex_quadrilateral
from src.alignment.image_rectification import warp_to_rectangle
from src.common.errors import RectificationError
from src.common.types import Quadrilateral
from src.detection.candidate_extractor import CandidateExtractor
from src.detection.candidate_selector import select_registration_corners
from src.detection.config_loader import load_config
from src.detection.types import Candidate, DetectionConfig, DetectionResult

logger = logging.getLogger(__name__)

NO_FRAME_ERROR = "No registration square detected"


class DetectionProcessor:
    """
    Locates and rectifies the registration frame in a photograph.

    Args:
        config: Pre-loaded configuration object. If None, will load from file.
        config_path: Path to config file. If None, uses default location.
        extractor: Object with ``find_candidates(image) -> List[Candidate]``.
            Defaults to the OpenCV ``CandidateExtractor``.

    Example:
        >>> processor = DetectionProcessor()
        >>> image = cv2.imread("certificate.jpg")
        >>> result = processor.process(image)
        >>> if result.ok:
        ...     cv2.imwrite("frame.png", result.rectified_image)
    """

    def __init__(
        self,
        config: Optional[DetectionConfig] = None,
        config_path: Optional[Path] = None,
        extractor=None,
    ):
        if config is not None:
            self.config = config
            logger.info("Using provided configuration")
        else:
            self.config = load_config(config_path) if config_path else load_config()
            logger.info("Loaded configuration from file")

        self.extractor = (
            extractor
            if extractor is not None
            else CandidateExtractor(self.config.extraction)
        )

    def process(self, image: np.ndarray) -> DetectionResult:
        """
        Run extraction, selection and rectification on one image.

        Args:
            image: Captured photograph (H, W, C) or (H, W).

        Returns:
            DetectionResult; ``ok`` is False when no frame was found.

        Raises:
            ValueError: If the image is None or empty.
            RectificationError: If the selected corners are not convex or
                the perspective warp fails.
        """
        if image is None or image.size == 0:
            raise ValueError("Invalid input image: image is None or empty")

        img_h, img_w = image.shape[:2]

        logger.info("[Stage 1/3] Candidate Extraction")
        candidates: List[Candidate] = self.extractor.find_candidates(image)
        logger.info(f"Found {len(candidates)} candidate quadrilaterals")

        logger.info("[Stage 2/3] Candidate Selection")
        corners = select_registration_corners(
            candidates, img_w, img_h, self.config.selection
        )
        if corners is None:
            logger.warning(f"Detection failed: {NO_FRAME_ERROR}")
            return DetectionResult(ok=False, error=NO_FRAME_ERROR, candidates=candidates)

        logger.info("[Stage 3/3] Perspective Rectification")
        if not is_convex_quadrilateral(corners):
            raise RectificationError(
                "Selected corners do not form a convex quadrilateral"
            )
        rectified = warp_to_rectangle(image, corners)

        return DetectionResult(
            ok=True,
            quadrilateral=Quadrilateral.from_numpy(corners),
            rectified_image=rectified,
            candidates=candidates,
        )


def detect_registration_frame(
    image: np.ndarray, config: Optional[DetectionConfig] = None
) -> DetectionResult:
    """
    Convenience function for one-shot detection.

    Example:
        >>> result = detect_registration_frame(cv2.imread("certificate.jpg"))
        >>> print(result.get_error_message())
    """
    return DetectionProcessor(config=config).process(image)
