"""Deterministic text normalization.

``normalize_text`` is the canonical normalization used for fingerprints.
``normalize_display_text`` is a lighter variant for showing raw OCR text; it
keeps blank lines and does no character substitution, and must never be
used to compute a fingerprint.
"""

import re

# OCR-produced typographic characters mapped to their ASCII forms
CHARACTER_SUBSTITUTIONS = (
    (re.compile("[\u201c\u201d\u201e]"), '"'),
    (re.compile("[\u2018\u2019]"), "'"),
    (re.compile("[\u00ab\u00bb]"), '"'),
    (re.compile("[\u2013\u2014]"), "-"),
    (re.compile("\u00a0"), " "),
    (re.compile("\u2026"), "..."),
)

_WHITESPACE_RUN = re.compile(r"\s+")


def substitute_characters(text: str) -> str:
    """Replace curly/angle quotes, dashes, NBSP and ellipsis with ASCII."""
    for pattern, replacement in CHARACTER_SUBSTITUTIONS:
        text = pattern.sub(replacement, text)
    return text


def _normalize_line(line: str) -> str:
    return _WHITESPACE_RUN.sub(" ", line.strip())


def normalize_text(text: str) -> str:
    """Canonical normalization for fingerprinting.

    1. Character substitution (see ``substitute_characters``)
    2. Per line: trim both ends, collapse whitespace runs to one space
    3. Drop blank lines, join with newlines, no trailing newline

    Example:
        >>> normalize_text("  Hello    World  \\n\\n\\u201cQuoted\\u201d")
        'Hello World\\n"Quoted"'
    """
    text = substitute_characters(text)
    lines = (_normalize_line(line) for line in text.split("\n"))
    return "\n".join(line for line in lines if line)


def normalize_display_text(text: str) -> str:
    """Per-line trim and whitespace collapse that keeps blank lines.

    For on-screen display only.
    """
    return "\n".join(_normalize_line(line) for line in text.split("\n"))
