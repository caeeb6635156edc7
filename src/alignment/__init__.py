"""
Rectifier: perspective correction of the registration frame.

Maps the selected quadrilateral to an upright rectangle sized by its longest
opposite edges, ready for the orientation sweep.
"""

from src.alignment.geometric_validator import (
    calculate_aspect_ratio,
    calculate_average_dimensions,
    calculate_edge_lengths,
    calculate_predicted_dimensions,
    is_convex_quadrilateral,
)
from src.alignment.image_rectification import warp_to_rectangle

__all__ = [
    "warp_to_rectangle",
    "calculate_edge_lengths",
    "calculate_average_dimensions",
    "calculate_predicted_dimensions",
    "calculate_aspect_ratio",
    "is_convex_quadrilateral",
]
