"""Type definitions for parsing and verification.

Results are plain dataclasses; ``VerificationRecord`` is a Pydantic model
because it is validated when the hash database is loaded from JSON.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class VerificationStatus(str, Enum):
    """Statuses a published record may carry."""

    VERIFIED = "verified"
    DENIED = "denied"
    REVOKED = "revoked"
    UNKNOWN = "unknown"


class VerificationReason(Enum):
    """Why a verification produced its verdict."""

    # Local protocol
    VERIFIED = "verified"
    DENIED = "denied"
    REVOKED = "revoked"
    UNKNOWN_STATUS = "unknown_status"
    NOT_FOUND = "not_found"
    DATABASE_NOT_LOADED = "database_not_loaded"
    # Remote protocol
    REMOTE_OK = "remote_ok"
    HASH_NOT_IN_URL = "hash_not_in_url"
    HTTP_STATUS = "http_status"
    MISSING_OK = "missing_ok"
    NETWORK_ERROR = "network_error"


@dataclass
class ParsedDocument:
    """OCR text split into certification body and verification URL.

    Attributes:
        certification_body: Trimmed lines above the URL line
        verification_url: Whitespace-stripped URL line
        url_line_index: Index of the URL line in the OCR text
    """

    certification_body: str
    verification_url: str
    url_line_index: int


class VerificationRecord(BaseModel):
    """Published status of one fingerprint.

    ``status`` is kept as free text: values outside VerificationStatus are
    surfaced verbatim as an unknown status.
    """

    status: str
    message: Optional[str] = None
    timestamp: Optional[str] = None


@dataclass
class VerificationOutcome:
    """Terminal verdict of the pipeline.

    Attributes:
        verified: True only for a verified local record or a remote "OK"
        reason: Machine-readable reason
        detail: Human-readable explanation
        record: Local record when one was found
        url: URL that was fetched (remote protocol)
    """

    verified: bool
    reason: VerificationReason
    detail: Optional[str] = None
    record: Optional[VerificationRecord] = None
    url: Optional[str] = None

    @property
    def status(self) -> Optional[str]:
        """Record status for local lookups, None otherwise."""
        return self.record.status if self.record else None
