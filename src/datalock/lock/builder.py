"""Lock record assembly."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from datalock.lock.hashing import hash_file
from datalock.lock.models import LOCK_GENERATOR, LOCK_SCHEMA_VERSION, FileRecord, LockRecord
from datalock.logging import utc_timestamp
from datalock.security import resolve_repo_path


def build_lock(
    repo_root: Path,
    paths: Iterable[str],
    now: datetime | None = None,
) -> LockRecord:
    """Hash every path in code point order and return the lock record.

    The first unreadable file aborts the build; no partial record is returned.
    """
    files: list[FileRecord] = []
    for relative in sorted(paths):
        full_path = resolve_repo_path(repo_root, relative)
        files.append(hash_file(full_path, display_path=relative))
    return LockRecord(
        schema_version=LOCK_SCHEMA_VERSION,
        generated_at=utc_timestamp(now),
        generator=LOCK_GENERATOR,
        files=tuple(files),
    )
