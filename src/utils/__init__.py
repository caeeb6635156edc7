"""
Shared Utilities

Common functions used across all modules.
"""

from src.utils.io import load_image, load_json, load_yaml, save_image, save_json
from src.utils.visualization import draw_quadrilateral

__all__ = [
    "draw_quadrilateral",
    "load_image",
    "load_json",
    "load_yaml",
    "save_image",
    "save_json",
]
