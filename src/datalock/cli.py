"""Command-line entrypoints for lock generation and single-file hashing."""

from __future__ import annotations

import argparse
import json
import sys
import uuid
from pathlib import Path

from datalock.config import CliOverrides, LockConfig, load_effective_config
from datalock.errors import DataLockError, LockMismatchError
from datalock.lock import (
    LockRecord,
    build_lock,
    check_lock,
    format_file_line,
    hash_file,
    resolve_paths,
    write_lock,
)
from datalock.logging import AuditEvent, JsonlAuditLogger, utc_timestamp


def build_gen_lock_parser() -> argparse.ArgumentParser:
    """Build argument parser for the lock tool."""
    parser = argparse.ArgumentParser(
        prog="datalock-gen",
        description="Generate the data lockfile, or verify it with --check.",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Fail if the persisted lockfile differs from the current file contents.",
    )
    parser.add_argument("--repo-root", default=".", help="Repository root. Defaults to cwd.")
    parser.add_argument(
        "--audit",
        choices=("true", "false"),
        default=None,
        help="Override the audit.enabled setting from datalock.toml.",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )
    parser.add_argument(
        "--audit-tail",
        type=int,
        default=None,
        metavar="N",
        help="Print the last N audit events as JSON lines and exit.",
    )
    return parser


def build_hash_file_parser() -> argparse.ArgumentParser:
    """Build argument parser for the single-file hash tool."""
    parser = argparse.ArgumentParser(
        prog="datalock-hash",
        description="Print sha256 and byte length of one file as JSON.",
    )
    parser.add_argument("path", nargs="?", default=None, help="File to hash.")
    return parser


def _print_listing(entries: list[dict[str, object]]) -> None:
    for entry in entries:
        print(f"  {format_file_line(entry)}", file=sys.stderr)


def _report_mismatch(error: LockMismatchError) -> None:
    print(error.message, file=sys.stderr)
    print("\nExpected:", file=sys.stderr)
    _print_listing(error.expected)
    print("\nFound in lock:", file=sys.stderr)
    _print_listing(error.found)


def _run(config: LockConfig, check: bool) -> LockRecord:
    record = build_lock(config.repo_root, resolve_paths(config))
    if check:
        check_lock(config.lockfile, record)
    else:
        write_lock(config.lockfile, record)
    return record


def _audit(
    logger: JsonlAuditLogger | None,
    *,
    run_id: str,
    mode: str,
    error_code: str | None,
    metadata: dict[str, object],
) -> None:
    if logger is None:
        return
    logger.append(
        AuditEvent(
            timestamp=utc_timestamp(),
            run_id=run_id,
            command="datalock-gen",
            mode=mode,
            ok=error_code is None,
            error_code=error_code,
            metadata=metadata,
        )
    )


def gen_lock_main(argv: list[str] | None = None) -> int:
    """Entrypoint for lockfile generation and verification."""
    try:
        args = build_gen_lock_parser().parse_args(argv)
    except SystemExit as exit_request:
        return 0 if exit_request.code in (0, None) else 1
    mode = "check" if args.check else "write"
    audit_enabled: bool | None = None
    if args.audit is not None:
        audit_enabled = args.audit == "true"
    try:
        config = load_effective_config(
            Path(args.repo_root), CliOverrides(audit_enabled=audit_enabled)
        )
    except ValueError as error:
        print(f"Invalid configuration: {error}", file=sys.stderr)
        return 1

    if args.print_config:
        print(json.dumps(config.to_public_dict(), indent=2))
        return 0
    if args.audit_tail is not None:
        for event in JsonlAuditLogger(config.audit_file).read(limit=args.audit_tail):
            print(json.dumps(event, sort_keys=True))
        return 0

    logger = JsonlAuditLogger(config.audit_file) if config.audit.enabled else None
    run_id = uuid.uuid4().hex
    metadata: dict[str, object] = {"lockfile": config.paths.lockfile}
    try:
        record = _run(config, check=args.check)
    except LockMismatchError as error:
        _report_mismatch(error)
        metadata["changed_paths"] = list(error.changed_paths)
        _audit(logger, run_id=run_id, mode=mode, error_code=error.code, metadata=metadata)
        return 1
    except DataLockError as error:
        print(error.message, file=sys.stderr)
        _audit(logger, run_id=run_id, mode=mode, error_code=error.code, metadata=metadata)
        return 1
    except OSError as error:
        print(f"Cannot write lockfile '{config.paths.lockfile}': {error}", file=sys.stderr)
        _audit(
            logger, run_id=run_id, mode=mode, error_code="LOCK_WRITE_FAILED", metadata=metadata
        )
        return 1

    metadata["file_count"] = len(record.files)
    _audit(logger, run_id=run_id, mode=mode, error_code=None, metadata=metadata)
    if args.check:
        print("Lockfile is up to date.")
        return 0
    print(f"Lockfile written: {config.paths.lockfile}")
    for file_record in record.files:
        print(f"  {format_file_line(file_record.to_dict())}")
    return 0


def hash_file_main(argv: list[str] | None = None) -> int:
    """Entrypoint for hashing one file."""
    parser = build_hash_file_parser()
    args, _ = parser.parse_known_args(argv)
    if args.path is None:
        print("Usage: datalock-hash <path>", file=sys.stderr)
        return 1
    try:
        record = hash_file(Path(args.path).resolve(), display_path=args.path)
    except DataLockError as error:
        print(error.message, file=sys.stderr)
        return 1
    print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
    return 0


def main() -> None:
    raise SystemExit(gen_lock_main())


def hash_main() -> None:
    raise SystemExit(hash_file_main())
