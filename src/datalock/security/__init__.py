"""Path safety primitives."""

from .paths import PathBlockedError, normalize_relative_path, resolve_repo_path

__all__ = [
    "PathBlockedError",
    "normalize_relative_path",
    "resolve_repo_path",
]
