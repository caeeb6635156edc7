"""Image rotation for the orientation sweep.

Rotations are clockwise on screen. Right angles use ``cv2.rotate`` so no
pixels are resampled; other angles rotate about the center on a canvas of
the original size.
"""

import logging

import cv2
import numpy as np

logger = logging.getLogger(__name__)

_RIGHT_ANGLE_CODES = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


def normalize_degrees(degrees: float) -> float:
    """Map any angle into [0, 360): ``((d % 360) + 360) % 360``."""
    return ((degrees % 360) + 360) % 360


def rotate_image(image: np.ndarray, degrees: float) -> np.ndarray:
    """Return a new image rotated clockwise by ``degrees``.

    For 90 and 270 the output width and height are swapped; for 0 and 180
    they are unchanged. The source image is never modified.

    Args:
        image: Image (H, W) or (H, W, C).
        degrees: Rotation angle; any value, normalized into [0, 360).

    Returns:
        Rotated copy of the image.

    Example:
        >>> img = np.zeros((100, 200), dtype=np.uint8)
        >>> rotate_image(img, -90).shape
        (200, 100)
    """
    if image is None or image.size == 0:
        raise ValueError("Invalid input image: image is None or empty")

    degrees = normalize_degrees(degrees)

    if degrees == 0:
        return image.copy()

    code = _RIGHT_ANGLE_CODES.get(int(degrees)) if float(degrees).is_integer() else None
    if code is not None:
        return cv2.rotate(image, code)

    h, w = image.shape[:2]
    # OpenCV angles are counter-clockwise
    M = cv2.getRotationMatrix2D((w / 2.0, h / 2.0), -degrees, 1.0)
    logger.debug(f"Rotating {w}x{h} image by non-right angle {degrees}")
    return cv2.warpAffine(image, M, (w, h))
