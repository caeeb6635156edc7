"""
Error taxonomy for the certification scanning pipeline.

Detection misses and verification misses are ordinary result values
(``DetectionResult.ok`` / ``VerificationOutcome.verified``). The classes here
cover the stages that terminate a capture cycle.
"""

from typing import List, Optional


class CertScanError(RuntimeError):
    """Base class for terminal pipeline errors."""


class RectificationError(CertScanError):
    """Perspective warp of the selected quadrilateral failed."""


class OCRExhaustedError(CertScanError):
    """Every orientation attempt raised; no OCR text is available."""

    def __init__(self, attempts: Optional[List] = None):
        super().__init__("OCR failed at all orientations")
        self.attempts = attempts or []


class ParseError(ValueError):
    """OCR text does not have the expected body + https URL layout.

    Attributes:
        kind: ``"no_text"`` or ``"not_https"``.
    """

    NO_TEXT = "no_text"
    NOT_HTTPS = "not_https"

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
