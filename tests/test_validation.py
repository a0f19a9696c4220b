"""Tests for persisted team record validation."""

from __future__ import annotations

from poke_teams.storage import validate_team_record


def _record(**member_overrides) -> dict:
    member = {
        "entity": {
            "id": 25,
            "name": "pikachu",
            "types": ["electric"],
            "stats": {"hp": 35, "attack": 55},
        },
        "form": "normal",
    }
    member.update(member_overrides)
    return {"id": "abc", "name": "Sparks", "members": [member]}


def test_valid_record() -> None:
    result = validate_team_record(_record())
    assert result.valid
    assert result.reason is None


def test_legacy_form_names_are_accepted() -> None:
    assert validate_team_record(_record(form="gigantamax"))
    assert validate_team_record(_record(form="mega"))


def test_non_mapping_record() -> None:
    result = validate_team_record(["not", "a", "team"])
    assert not result
    assert result.reason == "Team record is not an object"


def test_missing_team_fields() -> None:
    assert not validate_team_record({"id": "abc", "members": []})
    result = validate_team_record({"id": "abc", "name": "x"})
    assert "members" in result.reason


def test_member_problems_are_numbered() -> None:
    record = _record()
    record["members"].append({"entity": {"id": 1, "name": "bulbasaur", "types": []}})

    result = validate_team_record(record)
    assert result.reason == "Member 2: corrupt type data"


def test_member_checks() -> None:
    broken_stats = _record()
    broken_stats["members"][0]["entity"]["stats"] = {}
    assert validate_team_record(broken_stats).reason == "Member 1: corrupt stat data"

    string_id = _record()
    string_id["members"][0]["entity"]["id"] = "25"
    assert validate_team_record(string_id).reason == "Member 1: entity id is not a number"

    assert validate_team_record(_record(entity=None)).reason == "Member 1: incomplete entity data"
    assert "unknown form" in validate_team_record(_record(form="shiny")).reason


def test_type_stat_and_variant_values() -> None:
    shadow = _record()
    shadow["members"][0]["entity"]["types"] = ["electric", "shadow"]
    assert validate_team_record(shadow).reason == "Member 1: unknown type 'shadow'"

    bad_stat = _record()
    bad_stat["members"][0]["entity"]["stats"]["attack"] = "abc"
    assert validate_team_record(bad_stat).reason == "Member 1: stat 'attack' is not a number"

    string_stat = _record()
    string_stat["members"][0]["entity"]["stats"]["attack"] = "55"
    assert validate_team_record(string_stat)

    variant = {"id": 10080, "name": "pikachu-rock-star", "form": "alternate-boost", "types": ["electric"]}
    assert validate_team_record(_record(variant=variant))
    assert validate_team_record(_record(variant="mega")).reason == "Member 1: variant: not an object"
    assert validate_team_record(_record(variant={**variant, "types": ["cosmic"]})).reason == (
        "Member 1: variant: unknown type 'cosmic'"
    )
