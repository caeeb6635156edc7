"""
Visualization Utilities

Debug overlays for detection results.
"""

from typing import Sequence, Tuple, Union

import cv2
import numpy as np

CORNER_LABELS = ("TL", "TR", "BR", "BL")


def draw_quadrilateral(
    image: np.ndarray,
    corners: Union[np.ndarray, Sequence[Sequence[float]]],
    color: Tuple[int, int, int] = (0, 255, 0),
    thickness: int = 2,
    label_corners: bool = True,
) -> np.ndarray:
    """
    Draw a quadrilateral outline (and corner labels) on a copy of the image.

    Args:
        image: BGR or grayscale image. Not modified.
        corners: 4 points in TL, TR, BR, BL order.
        color: BGR outline color.
        thickness: Line thickness in pixels.
        label_corners: Annotate each corner with its label.

    Returns:
        New BGR image with the overlay.
    """
    canvas = image.copy()
    if canvas.ndim == 2:
        canvas = cv2.cvtColor(canvas, cv2.COLOR_GRAY2BGR)

    pts = np.round(np.asarray(corners, dtype=np.float64)).astype(np.int32)
    cv2.polylines(canvas, [pts.reshape(-1, 1, 2)], True, color, thickness)

    if label_corners:
        for label, (x, y) in zip(CORNER_LABELS, pts):
            cv2.circle(canvas, (int(x), int(y)), thickness + 3, (0, 0, 255), -1)
            cv2.putText(
                canvas,
                label,
                (int(x) + 6, int(y) - 6),
                cv2.FONT_HERSHEY_SIMPLEX,
                0.5,
                (0, 0, 255),
                1,
            )

    return canvas
