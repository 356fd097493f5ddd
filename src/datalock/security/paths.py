"""Path resolution helpers for repository-scoped access."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Final

from datalock.errors import DataLockError

WINDOWS_ABSOLUTE_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[a-zA-Z]:[\\/]")


class PathBlockedError(DataLockError):
    """Raised when a requested path violates sandbox policy."""

    code = "PATH_BLOCKED"

    def __init__(self, reason: str, hint: str) -> None:
        super().__init__(reason)
        self.reason = reason
        self.hint = hint


def _normalize_relative_input(candidate: str) -> tuple[str, bool]:
    """Normalize path separators and detect absolute-style inputs."""
    normalized = candidate.replace("\\", "/")
    if normalized.startswith("/"):
        return normalized, True
    if WINDOWS_ABSOLUTE_PATTERN.match(normalized):
        return normalized, True
    return normalized, False


def normalize_relative_path(candidate: str) -> str:
    """Return a clean POSIX repo-relative path or raise PathBlockedError."""
    normalized, is_absolute_style = _normalize_relative_input(candidate)
    if not normalized.strip():
        raise PathBlockedError(
            reason="Path is empty.",
            hint="Provide a repository-relative path such as 'marketing/data/tools/a.json'.",
        )
    if is_absolute_style:
        raise PathBlockedError(
            reason="Absolute paths are not allowed.",
            hint="Use a path relative to the repository root.",
        )
    parts = [part for part in normalized.split("/") if part not in ("", ".")]
    if any(part == ".." for part in parts):
        raise PathBlockedError(
            reason="Path traversal is blocked.",
            hint="Remove '..' segments and use a repository-relative path.",
        )
    if not parts:
        raise PathBlockedError(
            reason="Path is empty.",
            hint="Provide a repository-relative path such as 'marketing/data/tools/a.json'.",
        )
    return "/".join(parts)


def resolve_repo_path(repo_root: Path, candidate: str) -> Path:
    """Resolve a repo-relative path against the repo root with sandbox enforcement.

    `..` segments are allowed as long as the result stays under the root.
    """
    root = repo_root.resolve()
    normalized, is_absolute_style = _normalize_relative_input(candidate)
    if not normalized.strip():
        raise PathBlockedError(
            reason="Path is empty.",
            hint="Provide a repository-relative path such as 'marketing/data/tools/a.json'.",
        )
    if is_absolute_style:
        raise PathBlockedError(
            reason="Absolute paths are not allowed.",
            hint="Use a path relative to the repository root.",
        )
    resolved = (root / normalized).resolve(strict=False)
    if not resolved.is_relative_to(root):
        raise PathBlockedError(
            reason="Resolved path escapes repo_root.",
            hint="Use a path located under the configured repository root.",
        )
    return resolved
