"""Unit tests for image rotation."""

import numpy as np
import pytest

from src.ocr.rotation import normalize_degrees, rotate_image


@pytest.fixture
def marked_image():
    """4x6 image with a single marker pixel in the top-left corner."""
    image = np.zeros((4, 6), dtype=np.uint8)
    image[0, 0] = 255
    return image


def marker_position(image):
    return tuple(np.argwhere(image == 255)[0])


class TestNormalizeDegrees:
    """Test angle normalization."""

    @pytest.mark.parametrize(
        "degrees, expected",
        [(0, 0), (90, 90), (360, 0), (450, 90), (-90, 270), (-360, 0), (-450, 270)],
    )
    def test_normalization(self, degrees, expected):
        assert normalize_degrees(degrees) == expected


class TestRotateImage:
    """Test clockwise rotation."""

    def test_zero_returns_copy(self, marked_image):
        rotated = rotate_image(marked_image, 0)

        np.testing.assert_array_equal(rotated, marked_image)
        assert rotated is not marked_image

    def test_90_is_clockwise(self, marked_image):
        """Top-left moves to top-right; width and height swap."""
        rotated = rotate_image(marked_image, 90)

        assert rotated.shape == (6, 4)
        assert marker_position(rotated) == (0, 3)

    def test_180(self, marked_image):
        rotated = rotate_image(marked_image, 180)

        assert rotated.shape == (4, 6)
        assert marker_position(rotated) == (3, 5)

    def test_270_is_counter_clockwise(self, marked_image):
        rotated = rotate_image(marked_image, 270)

        assert rotated.shape == (6, 4)
        assert marker_position(rotated) == (5, 0)

    def test_equivalent_angles(self, marked_image):
        """360 == 0 and -90 == 270."""
        np.testing.assert_array_equal(rotate_image(marked_image, 360), marked_image)
        np.testing.assert_array_equal(
            rotate_image(marked_image, -90), rotate_image(marked_image, 270)
        )

    def test_color_image(self):
        image = np.zeros((10, 20, 3), dtype=np.uint8)

        assert rotate_image(image, 270).shape == (20, 10, 3)

    def test_non_right_angle_keeps_canvas(self):
        image = np.zeros((40, 60), dtype=np.uint8)

        assert rotate_image(image, 30).shape == (40, 60)

    def test_source_unchanged(self, marked_image):
        before = marked_image.copy()
        rotate_image(marked_image, 90)

        np.testing.assert_array_equal(marked_image, before)

    def test_empty_image(self):
        with pytest.raises(ValueError, match="Invalid input image"):
            rotate_image(np.array([]), 90)
