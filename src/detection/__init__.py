"""
Registration-frame detection.

Finds the printed four-cornered frame in a photograph, picks the most
plausible candidate and rectifies it into an upright image.

Pipeline stages:
1. Candidate extraction (OpenCV contours)
2. Candidate selection (area, centering and squareness priors)
3. Perspective rectification
"""

from src.detection.candidate_extractor import CandidateExtractor
from src.detection.candidate_selector import (
    order_corners,
    order_corners_validated,
    score_candidate,
    score_square_candidate,
    select_registration_corners,
)
from src.detection.config_loader import get_default_config, load_config
from src.detection.processor import DetectionProcessor, detect_registration_frame
from src.detection.types import (
    Candidate,
    DetectionConfig,
    DetectionResult,
    ExtractionConfig,
    ScoredCandidate,
    SelectionConfig,
)

__all__ = [
    "CandidateExtractor",
    "DetectionProcessor",
    "detect_registration_frame",
    "order_corners",
    "order_corners_validated",
    "score_candidate",
    "score_square_candidate",
    "select_registration_corners",
    "load_config",
    "get_default_config",
    "Candidate",
    "ScoredCandidate",
    "DetectionConfig",
    "DetectionResult",
    "ExtractionConfig",
    "SelectionConfig",
]
