"""Lock generation and verification package."""

from .builder import build_lock
from .hashing import hash_file, read_file_bytes, sha256_bytes
from .lockfile import (
    check_lock,
    compare_files,
    format_file_line,
    read_lock_files,
    render_lock,
    write_lock,
)
from .models import (
    LOCK_GENERATOR,
    LOCK_SCHEMA_VERSION,
    FileRecord,
    IndexEntry,
    LockComparison,
    LockRecord,
)
from .resolver import INDEX_GROUPS, parse_index, ref_to_path, resolve_paths

__all__ = [
    "FileRecord",
    "INDEX_GROUPS",
    "IndexEntry",
    "LOCK_GENERATOR",
    "LOCK_SCHEMA_VERSION",
    "LockComparison",
    "LockRecord",
    "build_lock",
    "check_lock",
    "compare_files",
    "format_file_line",
    "hash_file",
    "parse_index",
    "read_file_bytes",
    "read_lock_files",
    "ref_to_path",
    "render_lock",
    "resolve_paths",
    "sha256_bytes",
    "write_lock",
]
