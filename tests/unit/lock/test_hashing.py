from __future__ import annotations

import hashlib
from pathlib import Path

import pytest

from datalock.errors import FileReadError
from datalock.lock import FileRecord, hash_file, sha256_bytes

ABC_SHA256 = "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_hash_file_reports_known_digest_and_size(tmp_path: Path) -> None:
    target = tmp_path / "abc.txt"
    target.write_bytes(b"abc")

    record = hash_file(target, display_path="data/abc.txt")

    assert record == FileRecord(path="data/abc.txt", sha256=ABC_SHA256, bytes=3)


def test_hash_file_handles_empty_file(tmp_path: Path) -> None:
    target = tmp_path / "empty.json"
    target.write_bytes(b"")

    record = hash_file(target)

    assert record.sha256 == EMPTY_SHA256
    assert record.bytes == 0
    assert record.path == target.as_posix()


def test_hash_matches_independent_digest_for_binary_content(tmp_path: Path) -> None:
    payload = bytes(range(256)) * 17 + "naïve\r\n".encode("utf-8")
    target = tmp_path / "blob.bin"
    target.write_bytes(payload)

    record = hash_file(target)

    assert record.sha256 == hashlib.sha256(payload).hexdigest()
    assert record.bytes == len(payload)
    assert record.sha256 == record.sha256.lower()
    assert len(record.sha256) == 64


def test_sha256_bytes_is_lowercase_hex() -> None:
    assert sha256_bytes(b"abc") == ABC_SHA256


def test_missing_file_raises_file_read_error(tmp_path: Path) -> None:
    with pytest.raises(FileReadError) as error:
        hash_file(tmp_path / "missing.json", display_path="marketing/data/missing.json")

    assert isinstance(error.value, OSError)
    assert error.value.path == "marketing/data/missing.json"
    assert error.value.code == "FILE_UNREADABLE"
    assert "marketing/data/missing.json" in str(error.value)
    assert "file not found" in str(error.value)


def test_directory_raises_file_read_error(tmp_path: Path) -> None:
    (tmp_path / "folder").mkdir()

    with pytest.raises(FileReadError):
        hash_file(tmp_path / "folder")
