"""Read-only fingerprint -> VerificationRecord table.

The persisted format is a flat JSON object keyed by lowercase 64-character
hex SHA-256 strings::

    {"a591...146e": {"status": "verified", "message": "...", "timestamp": "..."}}
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional

from pydantic import ValidationError

from src.utils.io import load_json

from .fingerprint import fingerprint
from .types import VerificationRecord

logger = logging.getLogger(__name__)

_FINGERPRINT_KEY = re.compile(r"^[0-9a-f]{64}$")


class HashDatabase:
    """In-memory lookup table of published fingerprints.

    Example:
        >>> db = HashDatabase.from_json(Path("hashes.json"))
        >>> record = db.lookup(fp)
        >>> if record:
        ...     print(record.status)
    """

    def __init__(self, records: Optional[Mapping[str, VerificationRecord]] = None):
        self._records: Dict[str, VerificationRecord] = {}
        for key, record in (records or {}).items():
            self._records[_validate_key(key)] = record

    @classmethod
    def from_dict(cls, raw: Mapping[str, Mapping]) -> "HashDatabase":
        """Build from a decoded JSON mapping.

        Raises:
            ValueError: If a key is not a lowercase 64-hex string or a record
                is malformed.
        """
        if not isinstance(raw, Mapping):
            raise ValueError(f"Hash database must be a JSON object, got {type(raw)}")

        records = {}
        for key, value in raw.items():
            try:
                records[_validate_key(key)] = VerificationRecord.model_validate(value)
            except ValidationError as e:
                raise ValueError(f"Invalid record for {key}: {e}") from e
        return cls(records)

    @classmethod
    def from_json(cls, path: Path) -> "HashDatabase":
        """Load a hash database file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the content is invalid.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Hash database not found: {path}")

        database = cls.from_dict(load_json(path))
        logger.info(f"Loaded {len(database)} hashes from {path}")
        return database

    def lookup(self, fp: str) -> Optional[VerificationRecord]:
        """Return the record for a fingerprint, or None if absent."""
        return self._records.get(fp)

    def add(
        self,
        text: str,
        status: str = "verified",
        message: str = "",
        timestamp: Optional[str] = None,
    ) -> str:
        """Register certification text, returning its fingerprint."""
        fp = fingerprint(text)
        self._records[fp] = VerificationRecord(
            status=status,
            message=message,
            timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
        )
        logger.debug(f"Added {fp[:16]}... [{status}]")
        return fp

    def to_dict(self) -> Dict[str, dict]:
        """Serialize to the persisted JSON shape."""
        return {key: record.model_dump() for key, record in self._records.items()}

    def __contains__(self, fp: object) -> bool:
        return fp in self._records

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __len__(self) -> int:
        return len(self._records)


def _validate_key(key: str) -> str:
    if not isinstance(key, str) or not _FINGERPRINT_KEY.match(key):
        raise ValueError(f"Invalid fingerprint key: {key!r}")
    return key
