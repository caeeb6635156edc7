"""
Unit tests for candidate_selector module.
"""

import itertools
import math

import numpy as np
import pytest

from src.detection.candidate_selector import (
    order_corners,
    order_corners_validated,
    score_candidate,
    score_square_candidate,
    select_registration_corners,
)
from src.detection.types import Candidate, SelectionConfig

IMG_W, IMG_H = 800, 600


def square(cx, cy, side):
    """Axis-aligned square as unordered contour points."""
    h = side / 2.0
    return np.array(
        [[cx + h, cy + h], [cx - h, cy - h], [cx - h, cy + h], [cx + h, cy - h]],
        dtype=np.float32,
    )


class TestOrderCorners:
    """Tests for order_corners function."""

    def test_unit_square(self):
        """Points given in BR, BL, TL, TR order come back TL, TR, BR, BL."""
        ordered = order_corners([[10, 10], [0, 10], [0, 0], [10, 0]])

        np.testing.assert_array_equal(ordered, [[0, 0], [10, 0], [10, 10], [0, 10]])

    def test_skewed_quadrilateral(self, sample_quadrilateral_points):
        """Moderately skewed frame is labeled correctly."""
        ordered = order_corners(sample_quadrilateral_points)

        np.testing.assert_array_equal(
            ordered, [[100, 200], [300, 150], [320, 400], [80, 380]]
        )

    def test_independent_of_input_order(self, sample_quadrilateral_points):
        """Every permutation of the input produces the same output."""
        expected = order_corners(sample_quadrilateral_points)

        for perm in itertools.permutations(range(4)):
            ordered = order_corners(sample_quadrilateral_points[list(perm)])
            np.testing.assert_array_equal(ordered, expected)

    def test_output_dtype_and_shape(self):
        ordered = order_corners(np.array([[1, 1], [5, 1], [5, 5], [1, 5]]))

        assert ordered.shape == (4, 2)
        assert ordered.dtype == np.float32

    @pytest.mark.parametrize("count", [3, 5])
    def test_wrong_point_count(self, count):
        """Anything but 4 points is rejected."""
        with pytest.raises(ValueError, match="Expected exactly 4 points"):
            order_corners(np.zeros((count, 2)))


class TestOrderCornersValidated:
    """Tests for the ambiguous top-left fallback."""

    # 2:1 rectangle rotated 45 degrees; two corners share the smallest x + y
    ROTATED = np.array([[100, 200], [200, 100], [250, 150], [150, 250]])

    def test_unambiguous_matches_order_corners(self, sample_quadrilateral_points):
        np.testing.assert_array_equal(
            order_corners_validated(sample_quadrilateral_points),
            order_corners(sample_quadrilateral_points),
        )

    def test_ambiguous_prefers_square_labeling_by_default(self):
        """With the square prior both labelings deviate; the closer one wins."""
        ordered = order_corners_validated(self.ROTATED)

        np.testing.assert_array_equal(ordered[0], [200, 100])

    def test_ambiguous_uses_expected_aspect_ratio(self):
        """A 2:1 prior picks the labeling whose top edge is the long side."""
        ordered = order_corners_validated(self.ROTATED, expected_aspect_ratio=2.0)

        np.testing.assert_array_equal(
            ordered, [[100, 200], [200, 100], [250, 150], [150, 250]]
        )

    def test_diamond_keeps_topmost_corner(self):
        """For a square diamond both labelings tie; the topmost start wins."""
        diamond = np.array([[0, 50], [50, 100], [100, 50], [50, 0]])

        ordered = order_corners_validated(diamond)

        np.testing.assert_array_equal(ordered[0], [50, 0])


class TestScoreCandidate:
    """Tests for score_candidate and score_square_candidate."""

    def test_ideal_candidate_scores_one(self):
        """Centered square a quarter of the short side across scores 1."""
        scored = score_candidate(square(400, 300, 150), IMG_W, IMG_H)

        assert scored.area_score == pytest.approx(1.0)
        assert scored.center_score == pytest.approx(1.0)
        assert scored.ratio_score == pytest.approx(1.0)
        assert scored.score == pytest.approx(1.0)

    def test_score_is_product_of_sub_scores(self):
        scored = score_candidate(square(250, 200, 90), IMG_W, IMG_H)

        assert scored.score == pytest.approx(
            scored.area_score * scored.center_score * scored.ratio_score
        )
        assert 0 < scored.score < 1

    def test_small_centered_square(self):
        """Area ratio 0.01 centered: only the area term is penalized."""
        side = math.sqrt(0.01 * IMG_W * IMG_H)
        scored = score_candidate(square(400, 300, side), IMG_W, IMG_H)

        ideal = 150.0**2
        expected = math.exp(-abs(side * side - ideal) / ideal)
        assert scored.score == pytest.approx(expected, rel=1e-4)
        assert scored.score == pytest.approx(score_square_candidate(
            square(400, 300, side), IMG_W, IMG_H
        ))

    def test_center_score_decreases_off_center(self):
        centered = score_square_candidate(square(400, 300, 150), IMG_W, IMG_H)
        corner = score_square_candidate(square(700, 500, 150), IMG_W, IMG_H)

        assert corner < centered
        assert corner == pytest.approx(math.exp(-(0.75**2 + (200 / 300) ** 2)))

    def test_ratio_score_penalizes_rectangles(self):
        rect = np.array([[325, 262.5], [475, 262.5], [475, 337.5], [325, 337.5]])

        scored = score_candidate(rect, IMG_W, IMG_H)

        assert scored.ratio_score == pytest.approx(math.exp(-1.0))

    def test_ideal_size_fraction(self):
        """A larger ideal size moves the area optimum."""
        big = square(400, 300, 300)

        assert score_square_candidate(big, IMG_W, IMG_H, 0.5) == pytest.approx(1.0)
        assert score_square_candidate(big, IMG_W, IMG_H) < 1.0

    def test_keeps_candidate_object(self):
        candidate = Candidate(points=square(400, 300, 150), area_ratio=0.047)

        assert score_candidate(candidate, IMG_W, IMG_H).candidate is candidate

    def test_zero_height_raises(self):
        with pytest.raises(ValueError, match="zero height"):
            score_candidate(np.array([[5, 5]] * 4), IMG_W, IMG_H)


class TestSelectRegistrationCorners:
    """Tests for select_registration_corners function."""

    def test_empty_inputs(self):
        assert select_registration_corners([], IMG_W, IMG_H) is None
        assert select_registration_corners(None, IMG_W, IMG_H) is None

    def test_single_candidate_is_ordered(self):
        corners = select_registration_corners([square(400, 300, 150)], IMG_W, IMG_H)

        np.testing.assert_array_equal(
            corners, [[325, 225], [475, 225], [475, 375], [325, 375]]
        )

    def test_picks_highest_score(self):
        small_corner = square(100, 100, 40)
        ideal = square(400, 300, 150)

        corners = select_registration_corners([small_corner, ideal], IMG_W, IMG_H)

        np.testing.assert_array_equal(corners[0], [325, 225])

    def test_ties_keep_first_seen(self):
        """Mirror-image candidates score equally; the first one wins."""
        left = square(300, 300, 150)
        right = square(500, 300, 150)
        assert score_square_candidate(left, IMG_W, IMG_H) == pytest.approx(
            score_square_candidate(right, IMG_W, IMG_H)
        )

        corners = select_registration_corners([left, right], IMG_W, IMG_H)

        np.testing.assert_array_equal(corners[0], [225, 225])

    def test_skips_non_quadrilaterals_and_degenerates(self):
        triangle = np.array([[400, 200], [500, 350], [300, 350]])
        collapsed = np.array([[400, 300]] * 4)
        good = square(400, 300, 100)

        corners = select_registration_corners(
            [triangle, collapsed, good], IMG_W, IMG_H
        )

        np.testing.assert_array_equal(corners[0], [350, 250])

    def test_only_invalid_candidates(self):
        triangle = np.array([[400, 200], [500, 350], [300, 350]])

        assert select_registration_corners([triangle], IMG_W, IMG_H) is None

    def test_uses_config(self):
        """The configured size prior changes which candidate wins."""
        medium = square(400, 300, 150)
        large = square(400, 300, 300)
        config = SelectionConfig(
            ideal_size_fraction=0.5,
            corner_sum_tolerance=0.02,
            expected_aspect_ratio=1.0,
        )

        corners = select_registration_corners([medium, large], IMG_W, IMG_H, config)

        np.testing.assert_array_equal(corners[0], [250, 150])
