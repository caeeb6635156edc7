"""
Geometric measurements of ordered quadrilaterals.

Shared by the candidate selector (scoring) and the rectifier (output size).
All functions expect corners in canonical order [TL, TR, BR, BL].
"""

import logging
from typing import Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)


def _as_quad(keypoints: Union[np.ndarray, list]) -> np.ndarray:
    keypoints = np.asarray(keypoints, dtype=np.float64)
    if keypoints.shape != (4, 2):
        raise ValueError(
            f"Expected 4 keypoints with shape (4, 2), got {keypoints.shape}"
        )
    return keypoints


def calculate_edge_lengths(
    keypoints: Union[np.ndarray, list],
) -> Tuple[float, float, float, float]:
    """
    Calculate the length of all 4 edges of a quadrilateral.

    Args:
        keypoints: 4 corner points in order [TL, TR, BR, BL].
                  Shape (4, 2) where each point is [x, y].

    Returns:
        Tuple of (top_edge, right_edge, bottom_edge, left_edge) lengths.

    Example:
        >>> points = np.array([[100, 100], [400, 100], [400, 200], [100, 200]])
        >>> top, right, bottom, left = calculate_edge_lengths(points)
        >>> print(f"Width: {top:.0f}, Height: {right:.0f}")
        Width: 300, Height: 100
    """
    tl, tr, br, bl = _as_quad(keypoints)

    top_edge = float(np.hypot(*(tr - tl)))
    right_edge = float(np.hypot(*(br - tr)))
    bottom_edge = float(np.hypot(*(bl - br)))
    left_edge = float(np.hypot(*(tl - bl)))

    logger.debug(
        f"Edge lengths - Top: {top_edge:.1f}, Right: {right_edge:.1f}, "
        f"Bottom: {bottom_edge:.1f}, Left: {left_edge:.1f}"
    )

    return top_edge, right_edge, bottom_edge, left_edge


def calculate_average_dimensions(
    keypoints: Union[np.ndarray, list],
) -> Tuple[float, float]:
    """
    Mean width (top, bottom) and mean height (left, right) of the quadrilateral.

    Used for scoring, where the frame's apparent size matters more than the
    lossless output size.
    """
    top, right, bottom, left = calculate_edge_lengths(keypoints)
    return (top + bottom) / 2.0, (left + right) / 2.0


def calculate_predicted_dimensions(
    keypoints: Union[np.ndarray, list],
) -> Tuple[int, int]:
    """
    Calculate the integer width and height of the rectified image.

    Uses the longer of each pair of opposite edges so no content is lost
    during the perspective warp.

    Returns:
        Tuple of (width, height), each rounded to the nearest integer.

    Example:
        >>> points = np.array([[100, 150], [450, 100], [470, 300], [80, 320]])
        >>> calculate_predicted_dimensions(points)
        (391, 201)
    """
    top, right, bottom, left = calculate_edge_lengths(keypoints)

    width = int(round(max(top, bottom)))
    height = int(round(max(left, right)))

    logger.debug(f"Predicted dimensions: {width} x {height}")

    return width, height


def calculate_aspect_ratio(keypoints: Union[np.ndarray, list]) -> float:
    """
    Calculate the aspect ratio (mean width / mean height).

    Raises:
        ValueError: If the quadrilateral has zero height.
    """
    width, height = calculate_average_dimensions(keypoints)

    if height == 0:
        raise ValueError("Height is zero, cannot calculate aspect ratio")

    return width / height


def is_convex_quadrilateral(keypoints: Union[np.ndarray, list]) -> bool:
    """
    Check if 4 ordered points form a convex, non-self-intersecting quadrilateral.

    All cross products of consecutive edges must share the same sign.
    """
    rect = _as_quad(keypoints)
    cross_products = []
    for i in range(4):
        v1 = rect[(i + 1) % 4] - rect[i]
        v2 = rect[(i + 2) % 4] - rect[(i + 1) % 4]
        cross_products.append(v1[0] * v2[1] - v1[1] * v2[0])

    signs = [cp > 1e-6 for cp in cross_products]
    is_convex = all(signs) or not any(cp > -1e-6 for cp in cross_products)

    if not is_convex:
        logger.debug(f"Non-convex quadrilateral. Cross products: {cross_products}")

    return is_convex
