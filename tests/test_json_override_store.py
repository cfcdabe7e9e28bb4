from __future__ import annotations

import json
import os

import pytest

from adapters.json_override_store import JsonOverrideStore
from core.models import UserOverride


def test_missing_file_gives_empty_override_and_creates_directory(tmp_path) -> None:
    path = tmp_path / "data" / "user-sites.json"
    store = JsonOverrideStore(str(path))

    assert store.load() == UserOverride()
    assert path.parent.is_dir()
    assert not path.exists()


def test_save_then_load(tmp_path) -> None:
    path = tmp_path / "user-sites.json"
    store = JsonOverrideStore(str(path))

    store.save(UserOverride(added=["example.com"], removed=["nytimes.com"]))

    assert json.loads(path.read_text(encoding="utf-8")) == {
        "added": ["example.com"],
        "removed": ["nytimes.com"],
    }
    assert store.load() == UserOverride(added=["example.com"], removed=["nytimes.com"])
    assert [p.name for p in tmp_path.iterdir()] == ["user-sites.json"]


def test_malformed_fields_default_to_empty(tmp_path) -> None:
    path = tmp_path / "user-sites.json"
    path.write_text(
        json.dumps({"added": "example.com", "removed": ["WWW.FT.com", 3, ""]}),
        encoding="utf-8",
    )

    assert JsonOverrideStore(str(path)).load() == UserOverride(added=[], removed=["ft.com"])


def test_invalid_json_gives_empty_override(tmp_path) -> None:
    path = tmp_path / "user-sites.json"
    path.write_text("{not json", encoding="utf-8")
    assert JsonOverrideStore(str(path)).load() == UserOverride()

    path.write_text("[]", encoding="utf-8")
    assert JsonOverrideStore(str(path)).load() == UserOverride()


def test_failed_save_keeps_previous_file(tmp_path, monkeypatch) -> None:
    path = tmp_path / "user-sites.json"
    store = JsonOverrideStore(str(path))
    store.save(UserOverride(added=["example.com"]))
    before = path.read_text(encoding="utf-8")

    def failing_replace(src, dst) -> None:
        raise OSError("read-only file system")

    monkeypatch.setattr(os, "replace", failing_replace)
    with pytest.raises(OSError):
        store.save(UserOverride(added=["example.com", "other.com"]))

    assert path.read_text(encoding="utf-8") == before
    assert [p.name for p in tmp_path.iterdir()] == ["user-sites.json"]
