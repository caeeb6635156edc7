"""Unit tests for the hash database."""

import json

import pytest

from src.verification.fingerprint import fingerprint, sha256_hex
from src.verification.hash_database import HashDatabase

HELLO = sha256_hex("Hello World")


@pytest.fixture
def hashes_file(tmp_path):
    path = tmp_path / "hashes.json"
    path.write_text(
        json.dumps(
            {
                HELLO: {
                    "status": "verified",
                    "message": "Organic cotton, lot 42",
                    "timestamp": "2024-03-01T12:00:00Z",
                },
                sha256_hex("recalled"): {"status": "revoked"},
            }
        )
    )
    return path


class TestHashDatabase:
    """Tests for HashDatabase."""

    def test_from_json(self, hashes_file):
        db = HashDatabase.from_json(hashes_file)

        assert len(db) == 2
        assert HELLO in db
        record = db.lookup(HELLO)
        assert record.status == "verified"
        assert record.message == "Organic cotton, lot 42"
        assert record.timestamp == "2024-03-01T12:00:00Z"

    def test_optional_fields(self, hashes_file):
        record = HashDatabase.from_json(hashes_file).lookup(sha256_hex("recalled"))

        assert record.status == "revoked"
        assert record.message is None

    def test_lookup_missing(self, hashes_file):
        assert HashDatabase.from_json(hashes_file).lookup(sha256_hex("other")) is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            HashDatabase.from_json(tmp_path / "hashes.json")

    @pytest.mark.parametrize(
        "key", ["abc", HELLO.upper(), HELLO + "0", "g" * 64]
    )
    def test_invalid_keys(self, key):
        with pytest.raises(ValueError, match="Invalid fingerprint key"):
            HashDatabase.from_dict({key: {"status": "verified"}})

    def test_record_without_status(self):
        with pytest.raises(ValueError, match="Invalid record"):
            HashDatabase.from_dict({HELLO: {"message": "no status"}})

    def test_not_an_object(self):
        with pytest.raises(ValueError, match="JSON object"):
            HashDatabase.from_dict(["not", "a", "mapping"])

    def test_add_and_to_dict(self, tmp_path):
        db = HashDatabase()

        fp = db.add("  Hello   World\n\n", message="first", timestamp="t0")

        assert fp == HELLO == fingerprint("Hello World")
        assert list(db) == [HELLO]
        assert db.to_dict() == {
            HELLO: {"status": "verified", "message": "first", "timestamp": "t0"}
        }

    def test_add_sets_timestamp(self):
        db = HashDatabase()
        fp = db.add("text", status="denied")

        assert db.lookup(fp).status == "denied"
        assert db.lookup(fp).timestamp

    def test_serialized_round_trip(self, tmp_path):
        from src.utils.io import save_json

        db = HashDatabase()
        db.add("one", timestamp="t1")
        path = tmp_path / "out" / "hashes.json"
        save_json(db.to_dict(), path)

        assert HashDatabase.from_json(path).to_dict() == db.to_dict()
