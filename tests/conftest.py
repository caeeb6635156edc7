"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules.
"""

import pytest


@pytest.fixture
def sample_quadrilateral_points():
    """Fixture providing 4 unordered corner points of a skewed frame."""
    import numpy as np

    return np.array(
        [
            [300, 150],  # Top-right area
            [100, 200],  # Top-left area
            [320, 400],  # Bottom-right area
            [80, 380],  # Bottom-left area
        ],
        dtype=np.float32,
    )


@pytest.fixture
def sample_test_image():
    """Fixture providing a photo-like image with a square registration frame.

    The frame is a thick dark outline, 150 px on a side, centered in an
    800x600 white page, so it matches the selector's size prior exactly.
    """
    import cv2
    import numpy as np

    # Create white background
    image = np.ones((600, 800, 3), dtype=np.uint8) * 255

    corners = np.array([[325, 225], [475, 225], [475, 375], [325, 375]])
    cv2.rectangle(image, (325, 225), (475, 375), (30, 30, 30), 8)
    cv2.putText(
        image,
        "Cert",
        (360, 310),
        cv2.FONT_HERSHEY_SIMPLEX,
        1.0,
        (30, 30, 30),
        2,
    )

    return image, corners.astype(np.float32)


@pytest.fixture
def sample_ocr_text():
    """Fixture providing OCR output of a certification document."""
    return (
        "Unseen University\n"
        "Department of Applied Certification\n"
        "\n"
        "This certifies that the bearer\n"
        "h t t p s ://verify.example.org/cert\n"
    )
