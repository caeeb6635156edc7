"""Text parsing, normalization, fingerprinting and verification.

Turns the winning OCR text into a (URL, body) pair, fingerprints the
normalized body with SHA-256, and evaluates a verdict either against a local
hash database or by fetching the URL printed on the document.

Example:
    >>> from src.verification import parse_document, fingerprint, RemoteVerifier
    >>> doc = parse_document(ocr_text)
    >>> fp = fingerprint(doc.certification_body)
    >>> outcome = RemoteVerifier().verify(doc.verification_url, fp)
    >>> print(outcome.verified, outcome.detail)
"""

from .config_loader import (
    RemoteConfig,
    VerificationConfig,
    get_default_config,
    load_config,
)
from .fingerprint import fingerprint, hash_matches_url, sha256_hex
from .hash_database import HashDatabase
from .normalizer import normalize_display_text, normalize_text, substitute_characters
from .text_parser import extract_cert_text, extract_verification_url, parse_document
from .types import (
    ParsedDocument,
    VerificationOutcome,
    VerificationReason,
    VerificationRecord,
    VerificationStatus,
)
from .verifier import (
    HttpFetcher,
    HttpResponse,
    HttpxFetcher,
    LocalVerifier,
    RemoteVerifier,
    build_full_url,
)

__all__ = [
    # Types
    "ParsedDocument",
    "VerificationOutcome",
    "VerificationReason",
    "VerificationRecord",
    "VerificationStatus",
    # Parsing
    "extract_verification_url",
    "extract_cert_text",
    "parse_document",
    # Normalization and fingerprints
    "normalize_text",
    "normalize_display_text",
    "substitute_characters",
    "sha256_hex",
    "fingerprint",
    "hash_matches_url",
    # Verification
    "HashDatabase",
    "LocalVerifier",
    "RemoteVerifier",
    "HttpFetcher",
    "HttpResponse",
    "HttpxFetcher",
    "build_full_url",
    # Configuration
    "RemoteConfig",
    "VerificationConfig",
    "load_config",
    "get_default_config",
]
