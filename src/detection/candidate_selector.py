"""
Candidate Selector

Scores quadrilateral candidates against the prior that the registration
frame is roughly square, roughly centered and about a quarter of the image's
shorter side across, then labels the winner's corners TL, TR, BR, BL.

Corner labeling assumption: after a clockwise polar sort around the centroid,
the corner with the smallest ``x + y`` is the top-left. This holds for
axis-aligned and moderately skewed frames. ``order_corners_validated`` adds
a fallback for frames where two corner sums are nearly equal (e.g. a frame
photographed close to 45 degrees).
"""

import logging
import math
from typing import Optional, Sequence, Union

import numpy as np

from src.alignment.geometric_validator import (
    calculate_average_dimensions,
    calculate_edge_lengths,
)
from src.detection.types import Candidate, ScoredCandidate, SelectionConfig

logger = logging.getLogger(__name__)

CandidateLike = Union[Candidate, np.ndarray, Sequence[Sequence[float]]]

DEFAULT_IDEAL_SIZE_FRACTION = 0.25


def _candidate_points(candidate: CandidateLike) -> np.ndarray:
    if isinstance(candidate, Candidate):
        candidate = candidate.points
    return np.asarray(candidate, dtype=np.float64).reshape(-1, 2)


def order_corners(points: Union[np.ndarray, list]) -> np.ndarray:
    """
    Order 4 points as Top-Left, Top-Right, Bottom-Right, Bottom-Left.

    Points are sorted by polar angle around their centroid (ascending, which
    is clockwise on screen because the y axis points down), then the cyclic
    sequence is rotated so the point with the smallest ``x + y`` comes first.
    The result does not depend on the order of the input points.

    Args:
        points: Array-like of shape (4, 2).

    Returns:
        Ordered numpy array of shape (4, 2), dtype float32.

    Raises:
        ValueError: If input does not contain exactly 4 points.

    Example:
        >>> order_corners([[10, 10], [0, 10], [0, 0], [10, 0]])
        array([[ 0.,  0.],
               [10.,  0.],
               [10., 10.],
               [ 0., 10.]], dtype=float32)
    """
    pts = np.asarray(points, dtype=np.float64)
    if pts.shape != (4, 2):
        raise ValueError(
            f"Expected exactly 4 points with shape (4, 2), got shape {pts.shape}"
        )

    cx, cy = pts.mean(axis=0)
    angles = np.arctan2(pts[:, 1] - cy, pts[:, 0] - cx)
    clockwise = pts[np.argsort(angles, kind="stable")]

    # argmin returns the first minimum, so equal sums keep polar order
    start = int(np.argmin(clockwise.sum(axis=1)))
    ordered = np.roll(clockwise, -start, axis=0)

    return ordered.astype(np.float32)


def order_corners_validated(
    points: Union[np.ndarray, list],
    corner_sum_tolerance: float = 0.02,
    expected_aspect_ratio: float = 1.0,
) -> np.ndarray:
    """
    ``order_corners`` with a fallback for an ambiguous top-left corner.

    When another corner's ``x + y`` lies within ``corner_sum_tolerance`` times
    the perimeter of the minimum, each ambiguous corner is tried as the
    top-left. The labeling whose width/height ratio is closest to
    ``expected_aspect_ratio`` wins, then the one whose first corner is
    topmost.

    Returns:
        Ordered numpy array of shape (4, 2), dtype float32.
    """
    ordered = order_corners(points).astype(np.float64)

    sums = ordered.sum(axis=1)
    perimeter = sum(calculate_edge_lengths(ordered))
    tolerance = corner_sum_tolerance * perimeter
    ambiguous = [i for i in range(4) if sums[i] - sums[0] <= tolerance]

    if len(ambiguous) == 1:
        return ordered.astype(np.float32)

    def labeling_key(start: int):
        labeled = np.roll(ordered, -start, axis=0)
        width, height = calculate_average_dimensions(labeled)
        deviation = abs(width / height - expected_aspect_ratio) if height else math.inf
        return (round(deviation, 3), labeled[0][1], start)

    best_start = min(ambiguous, key=labeling_key)
    if best_start != 0:
        logger.info(
            f"Ambiguous top-left corner (sums within {tolerance:.1f}px); "
            f"relabeled starting at corner {best_start}"
        )

    return np.roll(ordered, -best_start, axis=0).astype(np.float32)


def score_candidate(
    candidate: CandidateLike,
    img_w: int,
    img_h: int,
    ideal_size_fraction: float = DEFAULT_IDEAL_SIZE_FRACTION,
) -> ScoredCandidate:
    """
    Score one candidate, keeping the three sub-scores.

    - area: ``exp(-|area - ideal| / ideal)`` with
      ``ideal = (min(img_w, img_h) * ideal_size_fraction) ** 2``
    - center: ``exp(-(dx**2 + dy**2))`` with the centroid offset from the
      image center normalized to [-1, 1] per axis
    - ratio: ``exp(-|width / height - 1|)``

    Raises:
        ValueError: If the candidate does not have 4 points or has zero height.
    """
    pts = _candidate_points(candidate)
    ordered = order_corners(pts).astype(np.float64)

    width, height = calculate_average_dimensions(ordered)
    if height == 0:
        raise ValueError("Degenerate candidate: zero height")

    area = width * height
    ideal = (min(img_w, img_h) * ideal_size_fraction) ** 2
    area_score = math.exp(-abs(area - ideal) / ideal)

    cx, cy = ordered.mean(axis=0)
    dx = (cx - img_w / 2) / (img_w / 2)
    dy = (cy - img_h / 2) / (img_h / 2)
    center_score = math.exp(-(dx * dx + dy * dy))

    ratio_score = math.exp(-abs(width / height - 1))

    if not isinstance(candidate, Candidate):
        candidate = Candidate(
            points=pts.astype(np.float32), area_ratio=area / (img_w * img_h)
        )

    return ScoredCandidate(
        candidate=candidate,
        score=area_score * center_score * ratio_score,
        area_score=area_score,
        center_score=center_score,
        ratio_score=ratio_score,
    )


def score_square_candidate(
    candidate: CandidateLike,
    img_w: int,
    img_h: int,
    ideal_size_fraction: float = DEFAULT_IDEAL_SIZE_FRACTION,
) -> float:
    """Combined score in (0, 1] of one candidate (see ``score_candidate``)."""
    return score_candidate(candidate, img_w, img_h, ideal_size_fraction).score


def select_registration_corners(
    candidates: Optional[Sequence[CandidateLike]],
    img_w: int,
    img_h: int,
    config: Optional[SelectionConfig] = None,
) -> Optional[np.ndarray]:
    """
    Pick the best-scoring candidate and return its canonically ordered corners.

    Candidates without exactly 4 points, or degenerate ones that cannot be
    scored, are skipped. Ties keep the first-seen candidate.

    Args:
        candidates: Candidates or raw (4, 2) point arrays.
        img_w: Image width in pixels.
        img_h: Image height in pixels.
        config: Selection parameters; defaults match the bundled config.

    Returns:
        Corners of shape (4, 2) in TL, TR, BR, BL order, or None.
    """
    if not candidates:
        return None

    ideal_size_fraction = (
        config.ideal_size_fraction if config else DEFAULT_IDEAL_SIZE_FRACTION
    )

    best: Optional[ScoredCandidate] = None
    for candidate in candidates:
        pts = _candidate_points(candidate)
        if pts.shape != (4, 2):
            continue
        try:
            scored = score_candidate(candidate, img_w, img_h, ideal_size_fraction)
        except ValueError as e:
            logger.debug(f"Skipping candidate: {e}")
            continue

        logger.debug(
            f"Candidate score={scored.score:.4f} (area={scored.area_score:.3f}, "
            f"center={scored.center_score:.3f}, ratio={scored.ratio_score:.3f})"
        )
        if best is None or scored.score > best.score:
            best = scored

    if best is None:
        logger.warning("No candidate survived scoring")
        return None

    logger.info(f"Selected registration frame with score {best.score:.4f}")

    if config is None:
        return order_corners_validated(best.candidate.points)
    return order_corners_validated(
        best.candidate.points,
        corner_sum_tolerance=config.corner_sum_tolerance,
        expected_aspect_ratio=config.expected_aspect_ratio,
    )
