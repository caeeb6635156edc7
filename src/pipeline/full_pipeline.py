"""
Full End-to-End Pipeline

Runs one capture/verify cycle:
image -> registration frame -> rectified image -> oriented OCR text
-> (URL, body) -> normalized body -> fingerprint -> verdict.

Each cycle is independent; no state is carried between calls except the
read-only hash database held by a local verifier.
"""

import argparse
import json
import logging
import sys
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np

from src.common.errors import OCRExhaustedError, ParseError, RectificationError
from src.detection.processor import DetectionProcessor
from src.detection.types import DetectionResult
from src.ocr.orientation import OrientationResolver
from src.ocr.types import OrientationResult
from src.utils.io import load_image, save_image
from src.utils.visualization import draw_quadrilateral
from src.verification.config_loader import VerificationConfig, get_default_config
from src.verification.fingerprint import sha256_hex
from src.verification.hash_database import HashDatabase
from src.verification.normalizer import normalize_text
from src.verification.text_parser import parse_document
from src.verification.types import ParsedDocument, VerificationOutcome
from src.verification.verifier import LocalVerifier, RemoteVerifier

logger = logging.getLogger(__name__)


class PipelineStage(Enum):
    """Stage at which a cycle terminated early."""

    DETECTION = "detection"
    RECTIFICATION = "rectification"
    OCR = "ocr"
    PARSE = "parse"


@dataclass
class PipelineResult:
    """Everything produced by one capture/verify cycle.

    Fields after the failing stage are None. ``outcome`` is set only when the
    cycle reached verification.
    """

    detection: Optional[DetectionResult] = None
    orientation: Optional[OrientationResult] = None
    parsed: Optional[ParsedDocument] = None
    normalized_body: Optional[str] = None
    fingerprint: Optional[str] = None
    outcome: Optional[VerificationOutcome] = None
    failed_stage: Optional[PipelineStage] = None
    error: Optional[str] = None
    processing_time_ms: float = 0.0

    def is_verified(self) -> bool:
        return self.outcome is not None and self.outcome.verified

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly summary (images omitted)."""
        summary: Dict[str, Any] = {
            "verified": self.is_verified(),
            "failed_stage": self.failed_stage.value if self.failed_stage else None,
            "error": self.error,
            "processing_time_ms": round(self.processing_time_ms, 1),
        }
        if self.detection is not None and self.detection.quadrilateral is not None:
            summary["corners"] = self.detection.quadrilateral.to_list()
        if self.orientation is not None:
            summary["rotation_degrees"] = self.orientation.rotation_degrees
            summary["ocr_confidence"] = self.orientation.confidence
            summary["raw_text"] = self.orientation.text
        if self.parsed is not None:
            summary["verification_url"] = self.parsed.verification_url
            summary["certification_body"] = self.parsed.certification_body
        if self.normalized_body is not None:
            summary["normalized_body"] = self.normalized_body
            summary["fingerprint"] = self.fingerprint
        if self.outcome is not None:
            summary["reason"] = self.outcome.reason.value
            summary["detail"] = self.outcome.detail
            summary["status"] = self.outcome.status
            summary["url"] = self.outcome.url
            if self.outcome.record is not None:
                summary["timestamp"] = self.outcome.record.timestamp
        return summary


def build_verifier(config: VerificationConfig):
    """Create the verifier selected by ``config.mode``."""
    if config.mode == "local":
        database = None
        if config.hash_database is not None:
            database = HashDatabase.from_json(config.hash_database)
        return LocalVerifier(database)
    return RemoteVerifier(config=config.remote)


class CertificationPipeline:
    """Composes detection, orientation, parsing and verification.

    Args:
        detector: DetectionProcessor (default: bundled config).
        resolver: OrientationResolver (default: Tesseract, bundled config).
        verifier: Object with ``verify(url, fingerprint) -> VerificationOutcome``.
        verification_config: Used to build the verifier when none is given.

    Example:
        >>> with CertificationPipeline() as pipeline:
        ...     result = pipeline.process(cv2.imread("certificate.jpg"))
        >>> print(result.is_verified(), result.error or result.outcome.detail)
    """

    def __init__(
        self,
        detector: Optional[DetectionProcessor] = None,
        resolver: Optional[OrientationResolver] = None,
        verifier=None,
        verification_config: Optional[VerificationConfig] = None,
    ):
        self.detector = detector or DetectionProcessor()
        self.resolver = resolver or OrientationResolver()
        self.verifier = verifier or build_verifier(
            verification_config or get_default_config()
        )

    def close(self):
        """Release the verifier's network resources, if it holds any."""
        close = getattr(self.verifier, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def process(self, image: np.ndarray) -> PipelineResult:
        """Run one full capture/verify cycle on a photograph."""
        start_time = time.perf_counter()
        result = PipelineResult()

        try:
            logger.info("[Stage 1/3] Registration frame detection")
            try:
                result.detection = self.detector.process(image)
            except RectificationError as e:
                return self._fail(result, PipelineStage.RECTIFICATION, e, start_time)

            if not result.detection.ok:
                return self._fail(
                    result,
                    PipelineStage.DETECTION,
                    result.detection.get_error_message(),
                    start_time,
                )

            logger.info("[Stage 2/3] Orientation sweep")
            try:
                result.orientation = self.resolver.resolve(
                    result.detection.rectified_image
                )
            except OCRExhaustedError as e:
                return self._fail(result, PipelineStage.OCR, e, start_time)

            logger.info("[Stage 3/3] Parsing and verification")
            return self._verify_text(result, result.orientation.text, start_time)
        finally:
            result.processing_time_ms = (time.perf_counter() - start_time) * 1000

    def process_text(self, raw_text: str) -> PipelineResult:
        """Run parsing, fingerprinting and verification on OCR text."""
        start_time = time.perf_counter()
        result = self._verify_text(PipelineResult(), raw_text, start_time)
        result.processing_time_ms = (time.perf_counter() - start_time) * 1000
        return result

    def _verify_text(
        self, result: PipelineResult, raw_text: str, start_time: float
    ) -> PipelineResult:
        try:
            result.parsed = parse_document(raw_text)
        except ParseError as e:
            return self._fail(result, PipelineStage.PARSE, e, start_time)

        result.normalized_body = normalize_text(result.parsed.certification_body)
        result.fingerprint = sha256_hex(result.normalized_body)
        logger.info(f"Fingerprint: {result.fingerprint}")

        result.outcome = self.verifier.verify(
            result.parsed.verification_url, result.fingerprint
        )
        logger.info(
            f"Verdict: {'VERIFIED' if result.outcome.verified else 'FAILS VERIFICATION'}"
            f" ({result.outcome.detail})"
        )
        return result

    @staticmethod
    def _fail(
        result: PipelineResult, stage: PipelineStage, error, start_time: float
    ) -> PipelineResult:
        result.failed_stage = stage
        result.error = str(error)
        result.processing_time_ms = (time.perf_counter() - start_time) * 1000
        logger.warning(f"Pipeline stopped at {stage.value}: {result.error}")
        return result


def write_debug_images(image: np.ndarray, result: PipelineResult, debug_dir: Path):
    """Save the corner overlay and the oriented frame for inspection."""
    if result.detection is not None and result.detection.quadrilateral is not None:
        overlay = draw_quadrilateral(image, result.detection.quadrilateral.to_numpy())
        save_image(overlay, debug_dir / "corners.png")
    if result.orientation is not None and result.orientation.oriented_image is not None:
        save_image(result.orientation.oriented_image, debug_dir / "oriented.png")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Verify a photographed certification document"
    )
    parser.add_argument("--input", type=str, required=True, help="Input image")
    parser.add_argument(
        "--mode",
        choices=["remote", "local"],
        default=None,
        help="Verification protocol (default: from config)",
    )
    parser.add_argument(
        "--hash-db", type=str, default=None, help="hashes.json for local mode"
    )
    parser.add_argument(
        "--debug-dir", type=str, default=None, help="Write debug images here"
    )
    parser.add_argument("--json", action="store_true", help="Print JSON summary")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = get_default_config()
    if args.mode:
        config.mode = args.mode
    if args.hash_db:
        config.hash_database = Path(args.hash_db)

    image = load_image(Path(args.input))
    with CertificationPipeline(verification_config=config) as pipeline:
        result = pipeline.process(image)

    if args.debug_dir:
        write_debug_images(image, result, Path(args.debug_dir))

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    elif result.failed_stage is not None:
        print(f"ERROR ({result.failed_stage.value}): {result.error}")
    else:
        print(f"Fingerprint: {result.fingerprint}")
        print("VERIFIED" if result.is_verified() else "FAILS VERIFICATION")
        print(result.outcome.detail)

    if result.failed_stage is not None:
        return 2
    return 0 if result.is_verified() else 1


if __name__ == "__main__":
    sys.exit(main())
