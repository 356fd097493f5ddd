"""Configuration loading and deterministic merge order."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from datalock.security import PathBlockedError, normalize_relative_path

CONFIG_FILE_NAME = "datalock.toml"

DEFAULT_SCHEMA_PATH = "marketing/schema/marketing.schema.json"
DEFAULT_INDEX_PATH = "marketing/data/marketing.index.json"
DEFAULT_DATA_DIR = "marketing/data"
DEFAULT_EVIDENCE_MANIFEST_PATH = "marketing/manifests/evidence.manifest.json"
DEFAULT_LOCKFILE_PATH = "marketing/manifests/marketing.lock.json"
DEFAULT_AUDIT_PATH = ".datalock/audit.jsonl"

_KNOWN_SECTIONS = ("paths", "audit")
_PATH_FIELDS = ("schema", "index", "data_dir", "evidence_manifest", "lockfile")


@dataclass(slots=True, frozen=True)
class PathsConfig:
    """Repository-relative locations of every file the lock tool touches."""

    schema: str
    index: str
    data_dir: str
    evidence_manifest: str
    lockfile: str


@dataclass(slots=True, frozen=True)
class AuditConfig:
    """JSONL audit log settings."""

    enabled: bool
    path: str


@dataclass(slots=True, frozen=True)
class LockConfig:
    """Fully merged lock tool configuration."""

    repo_root: Path
    paths: PathsConfig
    audit: AuditConfig

    @property
    def index_file(self) -> Path:
        return self.repo_root / self.paths.index

    @property
    def lockfile(self) -> Path:
        return self.repo_root / self.paths.lockfile

    @property
    def audit_file(self) -> Path:
        return self.repo_root / self.audit.path

    def to_public_dict(self) -> dict[str, object]:
        """Return serializable config snapshot."""
        return {
            "repo_root": str(self.repo_root),
            "paths": {
                "schema": self.paths.schema,
                "index": self.paths.index,
                "data_dir": self.paths.data_dir,
                "evidence_manifest": self.paths.evidence_manifest,
                "lockfile": self.paths.lockfile,
            },
            "audit": {
                "enabled": self.audit.enabled,
                "path": self.audit.path,
            },
        }


@dataclass(slots=True, frozen=True)
class CliOverrides:
    """Optional startup overrides applied at highest precedence."""

    audit_enabled: bool | None = None


def default_config(repo_root: Path) -> LockConfig:
    """Build default config for a given repository root."""
    return LockConfig(
        repo_root=repo_root.resolve(),
        paths=PathsConfig(
            schema=DEFAULT_SCHEMA_PATH,
            index=DEFAULT_INDEX_PATH,
            data_dir=DEFAULT_DATA_DIR,
            evidence_manifest=DEFAULT_EVIDENCE_MANIFEST_PATH,
            lockfile=DEFAULT_LOCKFILE_PATH,
        ),
        audit=AuditConfig(enabled=False, path=DEFAULT_AUDIT_PATH),
    )


def load_repo_config_file(repo_root: Path) -> dict[str, object]:
    """Load optional datalock.toml from repo root."""
    config_path = repo_root / CONFIG_FILE_NAME
    if not config_path.exists():
        return {}
    try:
        with config_path.open("rb") as handle:
            payload = tomllib.load(handle)
    except tomllib.TOMLDecodeError as error:
        raise ValueError(f"{CONFIG_FILE_NAME} is not valid TOML: {error}") from error
    except OSError as error:
        reason = error.strerror or str(error)
        raise ValueError(f"{CONFIG_FILE_NAME} cannot be read: {reason}") from error
    return payload


def _get_table(payload: dict[str, object], key: str) -> dict[str, object]:
    value = payload.get(key, {})
    if not isinstance(value, dict):
        raise ValueError(f"Config section '{key}' must be a table.")
    return value


def _relative_path_field(value: object, name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"Config field '{name}' must be a string.")
    try:
        return normalize_relative_path(value)
    except PathBlockedError as error:
        raise ValueError(f"Config field '{name}' is invalid: {error.reason}") from error


def merge_config(
    base: LockConfig, repo_payload: dict[str, object], overrides: CliOverrides
) -> LockConfig:
    """Merge defaults, repo config, then CLI overrides."""
    for section in sorted(repo_payload.keys()):
        if section not in _KNOWN_SECTIONS:
            raise ValueError(f"Unknown config section '{section}'.")
    paths_payload = _get_table(repo_payload, "paths")
    audit_payload = _get_table(repo_payload, "audit")

    for field in sorted(paths_payload.keys()):
        if field not in _PATH_FIELDS:
            raise ValueError(f"Unknown config field 'paths.{field}'.")
    resolved_paths: dict[str, str] = {}
    for field in _PATH_FIELDS:
        if field in paths_payload:
            resolved_paths[field] = _relative_path_field(paths_payload[field], f"paths.{field}")
        else:
            resolved_paths[field] = getattr(base.paths, field)

    enabled = base.audit.enabled
    if "enabled" in audit_payload:
        raw_enabled = audit_payload["enabled"]
        if not isinstance(raw_enabled, bool):
            raise ValueError("Config field 'audit.enabled' must be a boolean.")
        enabled = raw_enabled
    audit_path = base.audit.path
    if "path" in audit_payload:
        audit_path = _relative_path_field(audit_payload["path"], "audit.path")

    merged = LockConfig(
        repo_root=base.repo_root,
        paths=PathsConfig(**resolved_paths),
        audit=AuditConfig(enabled=enabled, path=audit_path),
    )
    return apply_cli_overrides(merged, overrides)


def apply_cli_overrides(config: LockConfig, overrides: CliOverrides) -> LockConfig:
    """Apply startup overrides at highest precedence."""
    if overrides.audit_enabled is None:
        return config
    return LockConfig(
        repo_root=config.repo_root,
        paths=config.paths,
        audit=AuditConfig(enabled=overrides.audit_enabled, path=config.audit.path),
    )


def load_effective_config(repo_root: Path, overrides: CliOverrides | None = None) -> LockConfig:
    """Load effective config using merge order defaults -> repo config -> overrides."""
    resolved_root = repo_root.resolve()
    base = default_config(resolved_root)
    payload = load_repo_config_file(resolved_root)
    return merge_config(base, payload, overrides or CliOverrides())
