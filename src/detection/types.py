"""
Data types for the registration-frame detection module.

Provides type-safe containers for configuration, candidates and results.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from src.common.types import Quadrilateral


@dataclass
class ExtractionConfig:
    """Configuration for contour-based candidate extraction."""

    min_area_ratio: float  # Lower bound (exclusive) of quad area / image area
    max_area_ratio: float  # Upper bound (exclusive) of quad area / image area
    approx_epsilon: float  # approxPolyDP epsilon as a fraction of perimeter
    threshold: int  # Fixed binary threshold; 0 selects adaptive thresholding
    blur_kernel_size: int
    adaptive_block_size: int
    adaptive_c: float


@dataclass
class SelectionConfig:
    """Configuration for candidate scoring and corner labeling."""

    ideal_size_fraction: float  # Ideal frame side as a fraction of min(W, H)
    corner_sum_tolerance: float  # Ambiguous-TL tolerance, fraction of perimeter
    expected_aspect_ratio: float  # Frame width / height used by the fallback


@dataclass
class DetectionConfig:
    """Complete detection module configuration."""

    extraction: ExtractionConfig
    selection: SelectionConfig


@dataclass
class Candidate:
    """
    Raw convex quadrilateral found by the extractor.

    Attributes:
        points: Corner points in contour order (unordered), shape (4, 2).
        area_ratio: Polygon area as a fraction of the full image area.
    """

    points: np.ndarray
    area_ratio: float


@dataclass
class ScoredCandidate:
    """
    Candidate with its selection score and sub-scores.

    ``score = area_score * center_score * ratio_score``, each in (0, 1].
    """

    candidate: Candidate
    score: float
    area_score: float
    center_score: float
    ratio_score: float


@dataclass
class DetectionResult:
    """
    Output of one detection + rectification pass.

    Attributes:
        ok: True when a registration frame was found and rectified.
        quadrilateral: Selected frame corners in canonical order.
        rectified_image: Upright crop of the frame (None if not ok).
        error: Human-readable reason when not ok.
        candidates: Every candidate the extractor produced.
    """

    ok: bool
    quadrilateral: Optional[Quadrilateral] = None
    rectified_image: Optional[np.ndarray] = None
    error: Optional[str] = None
    candidates: List[Candidate] = field(default_factory=list)

    def get_error_message(self) -> str:
        """Get human-readable status message."""
        if self.ok:
            return "Registration frame detected"
        return self.error or "Detection failed"
