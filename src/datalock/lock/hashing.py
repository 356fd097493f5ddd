"""SHA-256 digests of whole files."""

from __future__ import annotations

import hashlib
from pathlib import Path

from datalock.errors import FileReadError
from datalock.lock.models import FileRecord


def sha256_bytes(data: bytes) -> str:
    """Return the lowercase hex SHA-256 digest of ``data``."""
    return hashlib.sha256(data).hexdigest()


def read_file_bytes(path: Path, display_path: str | None = None) -> bytes:
    """Read a whole file, mapping OS failures to FileReadError."""
    label = display_path if display_path is not None else path.as_posix()
    try:
        return path.read_bytes()
    except FileNotFoundError as error:
        raise FileReadError(label, "file not found") from error
    except IsADirectoryError as error:
        raise FileReadError(label, "is a directory") from error
    except PermissionError as error:
        raise FileReadError(label, "permission denied") from error
    except OSError as error:
        raise FileReadError(label, error.strerror or str(error)) from error


def hash_file(path: Path, display_path: str | None = None) -> FileRecord:
    """Hash a file and return its record.

    The whole file is read into memory before hashing. ``display_path`` is the
    path reported in the record; it defaults to ``path`` in POSIX form.
    """
    label = display_path if display_path is not None else path.as_posix()
    data = read_file_bytes(path, display_path=label)
    return FileRecord(path=label, sha256=sha256_bytes(data), bytes=len(data))
