"""
Unit tests for image_rectification module.
"""

import cv2
import numpy as np
import pytest

from src.alignment.image_rectification import warp_to_rectangle
from src.common.errors import RectificationError


@pytest.fixture
def quadrant_image():
    """200x300 image with four flat-colored quadrants around (150, 100)."""
    image = np.zeros((200, 300, 3), dtype=np.uint8)
    image[:100, :150] = (255, 0, 0)
    image[:100, 150:] = (0, 255, 0)
    image[100:, 150:] = (0, 0, 255)
    image[100:, :150] = (255, 255, 0)
    return image


class TestWarpToRectangle:
    """Tests for warp_to_rectangle function."""

    def test_axis_aligned_crop(self, quadrant_image):
        """An axis-aligned frame yields a crop of the same size and content."""
        corners = np.array([[50, 40], [250, 40], [250, 160], [50, 160]])
        rectified = warp_to_rectangle(quadrant_image, corners)

        assert rectified.shape == (120, 200, 3)
        # Quadrant colors land in the matching output corners
        np.testing.assert_array_equal(rectified[10, 10], (255, 0, 0))
        np.testing.assert_array_equal(rectified[10, 190], (0, 255, 0))
        np.testing.assert_array_equal(rectified[110, 190], (0, 0, 255))
        np.testing.assert_array_equal(rectified[110, 10], (255, 255, 0))

    def test_output_size_uses_longest_edges(self, sample_test_image):
        """Width and height come from the longer opposite edges."""
        image, _ = sample_test_image
        corners = np.array([[100, 150], [450, 100], [470, 300], [80, 320]])

        rectified = warp_to_rectangle(image, corners)

        assert rectified.shape[:2] == (201, 391)

    def test_grayscale_input(self, quadrant_image):
        """Single-channel images are supported."""
        gray = cv2.cvtColor(quadrant_image, cv2.COLOR_BGR2GRAY)
        corners = [[0, 0], [100, 0], [100, 50], [0, 50]]

        rectified = warp_to_rectangle(gray, corners)

        assert rectified.shape == (50, 100)

    def test_source_image_unchanged(self, quadrant_image):
        """The source image is never modified."""
        before = quadrant_image.copy()
        warp_to_rectangle(quadrant_image, [[10, 10], [90, 20], [80, 90], [20, 80]])

        np.testing.assert_array_equal(quadrant_image, before)

    def test_degenerate_frame_raises(self, quadrant_image):
        """All corners collapsed to one point cannot be rectified."""
        corners = np.array([[50, 50]] * 4)

        with pytest.raises(RectificationError, match="Degenerate"):
            warp_to_rectangle(quadrant_image, corners)

    def test_wrong_number_of_corners(self, quadrant_image):
        """Three corners are rejected before warping."""
        with pytest.raises(ValueError, match="4 corner points"):
            warp_to_rectangle(quadrant_image, [[0, 0], [10, 0], [10, 10]])

    def test_empty_image(self):
        """Empty input image is rejected."""
        with pytest.raises(ValueError, match="Invalid input image"):
            warp_to_rectangle(np.array([]), [[0, 0], [10, 0], [10, 10], [0, 10]])
