"""Index document parsing and lock path discovery."""

from __future__ import annotations

import json

from datalock.config import LockConfig
from datalock.errors import IndexParseError, IndexSchemaError
from datalock.lock.hashing import read_file_bytes
from datalock.lock.models import IndexEntry

INDEX_GROUPS = ("audiences", "tools", "campaigns")


def parse_index(text: str, source: str) -> list[IndexEntry]:
    """Parse index JSON into entries, in group order then document order.

    Missing groups are treated as empty. Duplicate refs are kept.
    """
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as error:
        raise IndexParseError(source, error.lineno, error.colno, error.msg) from error
    if not isinstance(payload, dict):
        raise IndexSchemaError(source, "document root", "expected a JSON object")

    entries: list[IndexEntry] = []
    for group in INDEX_GROUPS:
        raw_group = payload.get(group)
        if raw_group is None:
            continue
        if not isinstance(raw_group, list):
            raise IndexSchemaError(source, f"'{group}'", "expected an array of entries")
        for position, raw_entry in enumerate(raw_group):
            location = f"'{group}[{position}]'"
            if not isinstance(raw_entry, dict):
                raise IndexSchemaError(source, location, "expected an object")
            if "ref" not in raw_entry:
                raise IndexSchemaError(source, location, "missing required field 'ref'")
            ref = raw_entry["ref"]
            if not isinstance(ref, str) or not ref:
                raise IndexSchemaError(source, f"{location}.ref", "expected a non-empty string")
            entries.append(IndexEntry(group=group, position=position, ref=ref))
    return entries


def ref_to_path(data_dir: str, entry: IndexEntry) -> str:
    """Map an entry ref to its repo-relative path under the data directory.

    The ref is kept verbatim so locked paths stay stable across releases.
    """
    return f"{data_dir}/{entry.ref}"


def resolve_paths(config: LockConfig) -> list[str]:
    """Return every path to lock, in discovery order.

    The schema and index come first, then each index ref, then the evidence
    manifest. No deduplication is performed.
    """
    paths = config.paths
    resolved = [paths.schema, paths.index]
    raw = read_file_bytes(config.index_file, display_path=paths.index)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as error:
        line = raw.count(b"\n", 0, error.start) + 1
        column = error.start - (raw.rfind(b"\n", 0, error.start) + 1) + 1
        raise IndexParseError(paths.index, line, column, "invalid UTF-8") from error
    for entry in parse_index(text, source=paths.index):
        resolved.append(ref_to_path(paths.data_dir, entry))
    resolved.append(paths.evidence_manifest)
    return resolved
