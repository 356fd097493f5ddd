from __future__ import annotations

from pathlib import Path

from datalock.security import normalize_relative_path, resolve_repo_path


def test_windows_separator_path_normalizes_to_same_file(tmp_path: Path) -> None:
    data_dir = tmp_path / "marketing" / "data"
    data_dir.mkdir(parents=True)
    data_file = data_dir / "tools.json"
    data_file.write_text("{}\n", encoding="utf-8")

    resolved = resolve_repo_path(repo_root=tmp_path, candidate=r"marketing\data\tools.json")

    assert resolved == data_file.resolve()


def test_redundant_segments_are_collapsed() -> None:
    assert normalize_relative_path("./marketing//data/./a.json") == "marketing/data/a.json"
    assert normalize_relative_path("tools/a.json") == "tools/a.json"
