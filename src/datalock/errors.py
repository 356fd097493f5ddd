"""Error taxonomy shared by the lock pipeline and its entry points."""

from __future__ import annotations


class DataLockError(Exception):
    """Base class for failures that end a lock run with a non-zero exit."""

    code = "DATALOCK_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class FileReadError(DataLockError, OSError):
    """Raised when a locked file cannot be opened or read."""

    code = "FILE_UNREADABLE"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read '{path}': {reason}")
        self.path = path
        self.reason = reason


class IndexParseError(DataLockError):
    """Raised when the index document is not valid JSON."""

    code = "INDEX_PARSE_ERROR"

    def __init__(self, path: str, line: int, column: int, detail: str) -> None:
        super().__init__(f"Malformed index '{path}' at line {line}, column {column}: {detail}")
        self.path = path
        self.line = line
        self.column = column


class IndexSchemaError(DataLockError):
    """Raised when the index document is missing a required structure or field."""

    code = "INDEX_SCHEMA_ERROR"

    def __init__(self, path: str, location: str, detail: str) -> None:
        super().__init__(f"Invalid index '{path}' at {location}: {detail}")
        self.path = path
        self.location = location


class MissingLockError(DataLockError):
    """Raised in check mode when no lockfile has been generated yet."""

    code = "LOCK_MISSING"

    def __init__(self, path: str) -> None:
        super().__init__(
            f"Lockfile does not exist: {path}. Run datalock-gen to create it."
        )
        self.path = path


class LockParseError(DataLockError):
    """Raised when the persisted lockfile cannot be interpreted."""

    code = "LOCK_PARSE_ERROR"

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Unreadable lockfile '{path}': {detail}")
        self.path = path


class LockMismatchError(DataLockError):
    """Raised in check mode when persisted and recomputed file arrays diverge."""

    code = "LOCK_MISMATCH"

    def __init__(
        self,
        path: str,
        expected: list[dict[str, object]],
        found: list[dict[str, object]],
        changed_paths: tuple[str, ...],
    ) -> None:
        super().__init__("Lockfile is out of date. Run datalock-gen to update it.")
        self.path = path
        self.expected = expected
        self.found = found
        self.changed_paths = changed_paths
