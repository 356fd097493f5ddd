from __future__ import annotations

import json
from pathlib import Path

import pytest

INDEX = {
    "audiences": [{"ref": "audiences/ops.json"}, {"ref": "audiences/dev.json"}],
    "tools": [{"ref": "tools/zeta.json", "title": "Zeta"}],
    "campaigns": [{"ref": "campaigns/launch.json"}],
}


def write_marketing_repo(root: Path, index: dict[str, object] | None = None) -> Path:
    """Lay out schema, index, referenced data files, and evidence manifest."""
    payload = INDEX if index is None else index
    files = {
        "marketing/schema/marketing.schema.json": '{"type": "object"}\n',
        "marketing/data/marketing.index.json": json.dumps(payload, indent=2) + "\n",
        "marketing/manifests/evidence.manifest.json": '{"evidence": []}\n',
    }
    for group in ("audiences", "tools", "campaigns"):
        for entry in payload.get(group, []):
            files[f"marketing/data/{entry['ref']}"] = f'{{"ref": "{entry["ref"]}"}}\n'
    for rel, content in files.items():
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def marketing_repo(tmp_path: Path) -> Path:
    return write_marketing_repo(tmp_path)


@pytest.fixture
def make_marketing_repo(tmp_path: Path):
    def _make(index: dict[str, object]) -> Path:
        return write_marketing_repo(tmp_path, index)

    return _make
