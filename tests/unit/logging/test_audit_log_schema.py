from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

from datalock.logging import AuditEvent, JsonlAuditLogger, utc_timestamp


def _event(run_id: str, timestamp: str) -> AuditEvent:
    return AuditEvent(
        timestamp=timestamp,
        run_id=run_id,
        command="datalock-gen",
        mode="check",
        ok=True,
        error_code=None,
        metadata={"file_count": 3},
    )


def test_audit_log_writes_jsonl_schema(tmp_path: Path) -> None:
    audit_path = tmp_path / "logs" / "audit.jsonl"
    logger = JsonlAuditLogger(audit_path)
    logger.append(_event("run-1", "2026-02-08T00:00:00.000Z"))

    lines = audit_path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    event = json.loads(lines[0])
    assert set(event.keys()) == {
        "command",
        "error_code",
        "metadata",
        "mode",
        "ok",
        "run_id",
        "timestamp",
    }
    assert event["run_id"] == "run-1"
    assert event["metadata"] == {"file_count": 3}


def test_logger_does_not_create_file_until_first_append(tmp_path: Path) -> None:
    logger = JsonlAuditLogger(tmp_path / "logs" / "audit.jsonl")

    assert logger.read() == []
    assert not (tmp_path / "logs").exists()


def test_read_returns_most_recent_events_oldest_first(tmp_path: Path) -> None:
    logger = JsonlAuditLogger(tmp_path / "audit.jsonl")
    logger.append(_event("run-1", "2026-02-08T00:00:00.000Z"))
    logger.append(_event("run-2", "2026-02-09T00:00:00.000Z"))
    logger.append(_event("run-3", "2026-02-10T00:00:00.000Z"))

    assert [entry["run_id"] for entry in logger.read()] == ["run-1", "run-2", "run-3"]
    assert [entry["run_id"] for entry in logger.read(limit=2)] == ["run-2", "run-3"]
    assert logger.read(limit=0) == []


def test_utc_timestamp_uses_millisecond_z_format() -> None:
    moment = datetime(2026, 1, 2, 3, 4, 5, 678901, tzinfo=UTC)

    assert utc_timestamp(moment) == "2026-01-02T03:04:05.678Z"
