"""Verification protocols.

Both protocols take a ``(verification_url, fingerprint)`` pair and return a
``VerificationOutcome`` value; a failed verification is never an exception.

- Local: look the fingerprint up in a preloaded HashDatabase (no network).
- Remote: GET ``<verification_url>/<fingerprint>`` and require HTTP 200 with
  a body containing "OK". Every failure folds to ``verified=False`` while
  the specific reason is kept for diagnostics.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx

from .config_loader import RemoteConfig
from .fingerprint import hash_matches_url
from .hash_database import HashDatabase
from .types import VerificationOutcome, VerificationReason, VerificationStatus

logger = logging.getLogger(__name__)

_STATUS_DETAILS = {
    VerificationStatus.VERIFIED.value: (
        True,
        VerificationReason.VERIFIED,
        "VERIFIED - Document is authentic",
    ),
    VerificationStatus.DENIED.value: (
        False,
        VerificationReason.DENIED,
        "DENIED - Check OCR accuracy and retry",
    ),
    VerificationStatus.REVOKED.value: (
        False,
        VerificationReason.REVOKED,
        "REVOKED - Product recalled or certification revoked",
    ),
}


class LocalVerifier:
    """Fingerprint lookup against a published hash database.

    Args:
        database: Loaded table, or None if it could not be loaded.
    """

    def __init__(self, database: Optional[HashDatabase]):
        self.database = database

    def verify(self, verification_url: str, fp: str) -> VerificationOutcome:
        if self.database is None:
            logger.error("Hash database not loaded")
            return VerificationOutcome(
                verified=False,
                reason=VerificationReason.DATABASE_NOT_LOADED,
                detail="ERROR - Database not loaded",
            )

        record = self.database.lookup(fp)
        if record is None:
            logger.warning(f"Hash {fp[:16]}... not found in database")
            return VerificationOutcome(
                verified=False,
                reason=VerificationReason.NOT_FOUND,
                detail="NOT FOUND - Hash not in database",
            )

        logger.info(f"Hash found - Status: {record.status}")

        if record.status in _STATUS_DETAILS:
            verified, reason, detail = _STATUS_DETAILS[record.status]
            if record.message:
                detail = f"{detail} - {record.message}"
        else:
            verified = False
            reason = VerificationReason.UNKNOWN_STATUS
            detail = f"UNKNOWN STATUS - {record.status}"

        return VerificationOutcome(
            verified=verified, reason=reason, detail=detail, record=record
        )


@dataclass
class HttpResponse:
    """Minimal HTTP response seen by the remote protocol."""

    status: int
    body: str


class HttpFetcher(ABC):
    """HTTP GET capability. May raise on network failure."""

    @abstractmethod
    def get(self, url: str) -> HttpResponse:
        raise NotImplementedError

    def close(self):
        """Release any held connections."""


class HttpxFetcher(HttpFetcher):
    """HttpFetcher backed by an ``httpx.Client``.

    Args:
        config: Remote settings (timeout, user agent).
        client: Pre-built client, e.g. with a mock transport in tests.
    """

    def __init__(
        self,
        config: Optional[RemoteConfig] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.config = config or RemoteConfig()
        self.client = client or httpx.Client(
            timeout=self.config.timeout_s,
            headers={"User-Agent": self.config.user_agent},
            follow_redirects=True,
        )

    def get(self, url: str) -> HttpResponse:
        resp = self.client.get(url)
        return HttpResponse(status=resp.status_code, body=resp.text)

    def close(self):
        self.client.close()


def build_full_url(verification_url: str, fp: str) -> str:
    """``<verification_url>/<fingerprint>``."""
    return f"{verification_url}/{fp}"


class RemoteVerifier:
    """Fetch-and-match verification against the URL printed on the document.

    Args:
        fetcher: HTTP capability. Defaults to HttpxFetcher.
        config: Remote settings (the OK marker in particular).
    """

    def __init__(
        self,
        fetcher: Optional[HttpFetcher] = None,
        config: Optional[RemoteConfig] = None,
    ):
        self.config = config or RemoteConfig()
        self.fetcher = fetcher or HttpxFetcher(self.config)

    def close(self):
        self.fetcher.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def verify(self, verification_url: str, fp: str) -> VerificationOutcome:
        full_url = build_full_url(verification_url, fp)

        if not hash_matches_url(full_url, fp):
            logger.warning("Hash mismatch: computed hash not in claimed URL")
            return VerificationOutcome(
                verified=False,
                reason=VerificationReason.HASH_NOT_IN_URL,
                detail=f"Hash not found at claimed URL: {full_url}",
                url=full_url,
            )

        logger.info(f"Verifying against {full_url}")

        # Malformed IDNA hosts fail with UnicodeError before any request
        try:
            response = self.fetcher.get(full_url)
        except (httpx.HTTPError, httpx.InvalidURL, OSError, UnicodeError) as e:
            logger.error(f"Could not fetch URL: {e}")
            return VerificationOutcome(
                verified=False,
                reason=VerificationReason.NETWORK_ERROR,
                detail=f"CANNOT VERIFY - Could not fetch URL: {e}",
                url=full_url,
            )

        if response.status != 200:
            logger.warning(f"Verification failed: HTTP {response.status}")
            return VerificationOutcome(
                verified=False,
                reason=VerificationReason.HTTP_STATUS,
                detail=f"NOT FOUND - URL returned status {response.status}",
                url=full_url,
            )

        marker = self.config.ok_marker
        if marker not in response.body:
            logger.warning(
                f'Verification failed: response does not contain "{marker}"'
            )
            return VerificationOutcome(
                verified=False,
                reason=VerificationReason.MISSING_OK,
                detail=f'INVALID - URL does not contain "{marker}"',
                url=full_url,
            )

        return VerificationOutcome(
            verified=True,
            reason=VerificationReason.REMOTE_OK,
            detail="VERIFIED - Certification confirmed",
            url=full_url,
        )
