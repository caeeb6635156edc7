"""Parsing of OCR text into a certification body and a verification URL.

Layout rule: the last non-blank line inside the registration frame is the
verification URL; everything above it is the certification body.
"""

import logging
import re
from typing import List, Tuple

from src.common.errors import ParseError

from .types import ParsedDocument

logger = logging.getLogger(__name__)

NO_TEXT_MESSAGE = "No text found in image"
NOT_HTTPS_MESSAGE = (
    "Bottom line inside the marks must be a verification URL starting with https"
)

_WHITESPACE = re.compile(r"\s+")


def _trimmed_lines(raw_text: str) -> List[str]:
    return [line.strip() for line in raw_text.split("\n")]


def extract_verification_url(raw_text: str) -> Tuple[str, int]:
    """Extract the verification URL from the last non-blank line.

    All whitespace is removed from that line, since OCR often inserts
    spaces inside URLs (sometimes between every letter).

    Args:
        raw_text: Raw OCR text.

    Returns:
        Tuple of (url, url_line_index).

    Raises:
        ParseError: ``no_text`` if every line is blank, ``not_https`` if the
            line does not start with "https" (case-insensitive).

    Example:
        >>> extract_verification_url("Unseen University\\n\\nh t t p s://example.com/c")
        ('https://example.com/c', 2)
    """
    lines = _trimmed_lines(raw_text)

    url_line_index = -1
    for i in range(len(lines) - 1, -1, -1):
        if lines[i]:
            url_line_index = i
            break

    if url_line_index == -1:
        raise ParseError(ParseError.NO_TEXT, NO_TEXT_MESSAGE)

    url = _WHITESPACE.sub("", lines[url_line_index])

    if not url.lower().startswith("https"):
        logger.warning(f"Last line is not an https URL: '{url}'")
        raise ParseError(ParseError.NOT_HTTPS, NOT_HTTPS_MESSAGE)

    return url, url_line_index


def extract_cert_text(raw_text: str, url_line_index: int) -> str:
    """Return every trimmed line above the URL line.

    Trailing blank lines are removed; interior blank lines are kept.

    Example:
        >>> extract_cert_text("Line 1\\n\\nLine 3\\nhttps://x", 3)
        'Line 1\\n\\nLine 3'
    """
    cert_lines = _trimmed_lines(raw_text)[:url_line_index]

    while cert_lines and cert_lines[-1] == "":
        cert_lines.pop()

    return "\n".join(cert_lines)


def parse_document(raw_text: str) -> ParsedDocument:
    """Split OCR text into a ParsedDocument.

    Raises:
        ParseError: See ``extract_verification_url``.
    """
    url, url_line_index = extract_verification_url(raw_text)
    body = extract_cert_text(raw_text, url_line_index)

    logger.debug(
        f"Parsed document: url='{url}', body has {len(body.splitlines())} lines"
    )

    return ParsedDocument(
        certification_body=body,
        verification_url=url,
        url_line_index=url_line_index,
    )
