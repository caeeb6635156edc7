"""SHA-256 fingerprints of normalized certification text."""

import hashlib

from .normalizer import normalize_text


def sha256_hex(text: str) -> str:
    """Lowercase hex SHA-256 of the UTF-8 encoding of ``text``.

    Example:
        >>> sha256_hex("Hello World")
        'a591a6d40bf420404a011733cfb7b190d62c65bf0bcda32b57b277d9ad9f146e'
    """
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def fingerprint(certification_body: str) -> str:
    """Fingerprint of a certification body: ``sha256_hex(normalize_text(body))``."""
    return sha256_hex(normalize_text(certification_body))


def hash_matches_url(claimed_url: str, computed_hash: str) -> bool:
    """True if ``computed_hash`` occurs literally (case-sensitive) in the URL."""
    return computed_hash in claimed_url
