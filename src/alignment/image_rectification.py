"""
Image Rectification

Perspective-warps the registration frame into an upright rectangle for OCR.
The frame corners must already be in canonical order [TL, TR, BR, BL]
(see ``src.detection.candidate_selector``).
"""

import logging
from typing import Union

import cv2
import numpy as np

from src.alignment.geometric_validator import calculate_predicted_dimensions
from src.common.errors import RectificationError

logger = logging.getLogger(__name__)


def warp_to_rectangle(
    image: np.ndarray,
    corners: Union[np.ndarray, list],
    interpolation: int = cv2.INTER_LINEAR,
) -> np.ndarray:
    """
    Rectify the quadrilateral bounded by ``corners`` to a top-down rectangle.

    The output width is the longer of the top and bottom edges, the height the
    longer of the left and right edges. Source corners TL, TR, BR, BL map to
    (0, 0), (W, 0), (W, H), (0, H).

    Args:
        image: Source image (H, W, C) or (H, W). Never modified.
        corners: 4 corner points in canonical order, shape (4, 2).
        interpolation: OpenCV interpolation flag for the warp.

    Returns:
        New rectified image of shape (H, W[, C]).

    Raises:
        ValueError: If image is empty or corners are not 4 points.
        RectificationError: If the frame is degenerate or OpenCV fails.

    Example:
        >>> image = cv2.imread("certificate.jpg")
        >>> frame = [[120, 180], [450, 165], [470, 490], [100, 470]]
        >>> rectified = warp_to_rectangle(image, frame)
    """
    if image is None or image.size == 0:
        raise ValueError("Invalid input image: image is None or empty")

    src = np.asarray(corners, dtype=np.float32)
    if src.shape != (4, 2):
        raise ValueError(
            f"Expected exactly 4 corner points with shape (4, 2), got shape {src.shape}"
        )

    width, height = calculate_predicted_dimensions(src)
    if width < 1 or height < 1:
        raise RectificationError(
            f"Degenerate registration frame: width={width}, height={height}"
        )

    dst = np.array(
        [
            [0, 0],
            [width, 0],
            [width, height],
            [0, height],
        ],
        dtype=np.float32,
    )

    try:
        M = cv2.getPerspectiveTransform(src, dst)
        rectified = cv2.warpPerspective(image, M, (width, height), flags=interpolation)
    except cv2.error as e:
        raise RectificationError(f"Perspective warp failed: {e}") from e

    logger.info(f"Rectified registration frame to {width}x{height} rectangle")

    return rectified
