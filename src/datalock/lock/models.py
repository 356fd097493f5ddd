"""Typed models for lock state."""

from __future__ import annotations

from dataclasses import dataclass

LOCK_SCHEMA_VERSION = "1.0.0"
LOCK_GENERATOR = "datalock-gen"


@dataclass(slots=True, frozen=True)
class FileRecord:
    """Digest and size of one locked file."""

    path: str
    sha256: str
    bytes: int

    def to_dict(self) -> dict[str, object]:
        return {"path": self.path, "sha256": self.sha256, "bytes": self.bytes}


@dataclass(slots=True, frozen=True)
class LockRecord:
    """Complete lock payload for one run.

    ``files`` is sorted by path. ``generated_at`` is the only field expected to
    differ between two runs over identical content.
    """

    schema_version: str
    generated_at: str
    generator: str
    files: tuple[FileRecord, ...]

    def files_payload(self) -> list[dict[str, object]]:
        """Return the file array in its persisted shape."""
        return [record.to_dict() for record in self.files]

    def to_dict(self) -> dict[str, object]:
        """Return the persisted shape in natural field order."""
        return {
            "schemaVersion": self.schema_version,
            "generatedAt": self.generated_at,
            "generator": self.generator,
            "files": self.files_payload(),
        }


@dataclass(slots=True, frozen=True)
class IndexEntry:
    """One validated entry of an index group."""

    group: str
    position: int
    ref: str


@dataclass(slots=True, frozen=True)
class LockComparison:
    """Result of comparing a fresh file array against the persisted one."""

    expected: list[dict[str, object]]
    found: list[dict[str, object]]
    changed_paths: tuple[str, ...]
    matches: bool
