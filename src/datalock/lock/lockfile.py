"""Canonical lockfile rendering, persistence, and comparison."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path

from datalock.errors import LockMismatchError, LockParseError, MissingLockError
from datalock.lock.models import LockComparison, LockRecord


def render_lock(record: LockRecord) -> str:
    """Render the record with natural key order, 2-space indent, trailing newline."""
    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False) + "\n"


def write_lock(path: Path, record: LockRecord) -> None:
    """Persist the rendered record, replacing any existing lockfile."""
    text = render_lock(record)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp.open("w", encoding="utf-8", newline="\n") as handle:
            handle.write(text)
        tmp.replace(path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def read_lock_files(path: Path) -> list[dict[str, object]]:
    """Load the persisted ``files`` array."""
    label = path.as_posix()
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = json.load(handle)
    except FileNotFoundError as error:
        raise MissingLockError(label) from error
    except OSError as error:
        raise LockParseError(label, error.strerror or str(error)) from error
    except UnicodeDecodeError as error:
        raise LockParseError(label, "not valid UTF-8") from error
    except json.JSONDecodeError as error:
        raise LockParseError(
            label, f"{error.msg} at line {error.lineno}, column {error.colno}"
        ) from error
    if not isinstance(payload, dict):
        raise LockParseError(label, "expected a JSON object")
    files = payload.get("files")
    if not isinstance(files, list):
        raise LockParseError(label, "'files' must be an array")
    for position, entry in enumerate(files):
        if not isinstance(entry, dict):
            raise LockParseError(label, f"'files[{position}]' must be an object")
    return files


def compare_files(
    expected: list[dict[str, object]], found: list[dict[str, object]]
) -> LockComparison:
    """Compare file arrays entry by entry, in order and field by field.

    Entries are compared by their JSON rendering, so a stored ``true`` does not
    equal a computed ``1``.
    """
    changed: set[str] = set()
    for position in range(max(len(expected), len(found))):
        fresh = expected[position] if position < len(expected) else None
        stored = found[position] if position < len(found) else None
        if _canonical(fresh) == _canonical(stored):
            continue
        for entry in (fresh, stored):
            if entry is not None:
                changed.add(str(entry.get("path")))
    return LockComparison(
        expected=expected,
        found=found,
        changed_paths=tuple(sorted(changed)),
        matches=not changed,
    )


def check_lock(path: Path, record: LockRecord) -> LockComparison:
    """Raise LockMismatchError unless the persisted file array equals the record's."""
    comparison = compare_files(record.files_payload(), read_lock_files(path))
    if not comparison.matches:
        raise LockMismatchError(
            path=path.as_posix(),
            expected=comparison.expected,
            found=comparison.found,
            changed_paths=comparison.changed_paths,
        )
    return comparison


def format_file_line(entry: Mapping[str, object]) -> str:
    """Return the ``<sha256> <bytes> <path>`` listing line for one entry."""
    return f"{entry.get('sha256')} {entry.get('bytes')} {entry.get('path')}"


def _canonical(entry: Mapping[str, object] | None) -> str | None:
    if entry is None:
        return None
    return json.dumps(entry, sort_keys=True, ensure_ascii=False)
