"""Tests for the JSON file store."""

from __future__ import annotations

import json

from poke_teams.storage import TEAMS_KEY, JsonTeamStore


def test_missing_file_loads_nothing(tmp_path) -> None:
    store = JsonTeamStore(tmp_path / "teams.json")
    assert store.load(TEAMS_KEY) is None


def test_save_then_load_keeps_other_keys(tmp_path) -> None:
    path = tmp_path / "nested" / "teams.json"
    store = JsonTeamStore(path)

    store.save("settings", {"theme": "dark"})
    store.save(TEAMS_KEY, [{"id": "a", "name": "Alpha", "members": []}])

    assert store.load(TEAMS_KEY) == [{"id": "a", "name": "Alpha", "members": []}]
    assert json.loads(path.read_text(encoding="utf-8"))["settings"] == {"theme": "dark"}
    # no temp files are left behind
    assert [p.name for p in path.parent.iterdir()] == ["teams.json"]


def test_save_replaces_whole_value(tmp_path) -> None:
    store = JsonTeamStore(tmp_path / "teams.json")
    store.save(TEAMS_KEY, [1, 2, 3])
    store.save(TEAMS_KEY, [4])
    assert store.load(TEAMS_KEY) == [4]


def test_unreadable_file_is_backed_up(tmp_path) -> None:
    path = tmp_path / "teams.json"
    path.write_text("{not json", encoding="utf-8")
    messages: list[str] = []
    store = JsonTeamStore(path, debug_logger=messages.append)

    assert store.load(TEAMS_KEY) is None
    backups = list(tmp_path.glob("teams.json.corrupt.*"))
    assert len(backups) == 1
    assert backups[0].read_text(encoding="utf-8") == "{not json"
    assert any("Unreadable store" in message for message in messages)


def test_non_object_document_is_ignored(tmp_path) -> None:
    path = tmp_path / "teams.json"
    path.write_text("[1, 2]", encoding="utf-8")
    store = JsonTeamStore(path)

    store.save(TEAMS_KEY, [])
    assert json.loads(path.read_text(encoding="utf-8")) == {TEAMS_KEY: []}
