"""Tests for the TeamAnalyzer aggregation and balance scoring."""

from __future__ import annotations

import pytest

from poke_teams.analysis.recommendations import RecommendationRule
from poke_teams.analysis.team_analyzer import TeamAnalyzer
from poke_teams.data.forms import Form
from poke_teams.data.roles import PVP
from poke_teams.models import Entity, StatBlock, Team, TeamMember


def _member(entity_id: int, name: str, types: list[str], stat: int = 150, **kwargs) -> TeamMember:
    stats = StatBlock(stat, stat, stat, stat, stat, stat)
    return TeamMember(entity=Entity(id=entity_id, name=name, types=types, stats=stats), **kwargs)


def _balanced_team() -> Team:
    return Team(
        id="t1",
        name="Balanced",
        members=[
            _member(6, "charizard", ["fire", "flying"]),
            _member(9, "blastoise", ["water"]),
            _member(3, "venusaur", ["grass", "poison"]),
            _member(26, "raichu", ["electric"]),
            _member(302, "sableye", ["ghost", "dark"]),
            _member(303, "mawile", ["steel", "fairy"]),
        ],
    )


def test_empty_team_returns_default_analysis() -> None:
    analysis = TeamAnalyzer().analyze(Team(id="empty", name="Empty"))

    assert analysis.balance_score == 5
    assert analysis.type_counts == {}
    assert analysis.weaknesses == {}
    assert analysis.team_roles == {}
    assert analysis.recommendations == []


def test_balanced_six_member_team_scores_high() -> None:
    analysis = TeamAnalyzer().analyze(_balanced_team())

    assert len(analysis.type_counts) == 10
    assert analysis.critical_weaknesses() == []
    assert analysis.missing_roles == []
    assert analysis.balance_score >= 8
    assert any("excellent balance" in rec for rec in analysis.recommendations)


def test_team_weaknesses_rank_shared_weak_points() -> None:
    analysis = TeamAnalyzer().analyze(_balanced_team())
    ranked = {w.type: w for w in analysis.team_weaknesses}

    assert set(ranked) == {"fire", "electric", "ground"}
    assert all(w.count == 2 and w.severity == 3 for w in ranked.values())
    # ties keep chart order
    assert [w.type for w in analysis.team_weaknesses] == ["fire", "electric", "ground"]


def test_stacked_weakness_is_critical_and_penalized() -> None:
    team = Team(
        id="t2",
        name="Leafy",
        members=[
            _member(1, "bulbasaur", ["grass"]),
            _member(152, "chikorita", ["grass"]),
            _member(252, "treecko", ["grass"]),
        ],
    )
    analysis = TeamAnalyzer().analyze(team)

    fire = next(w for w in analysis.team_weaknesses if w.type == "fire")
    assert fire.count == 3
    assert fire.severity == 5
    assert [w.type for w in analysis.critical_weaknesses()][0] in {"fire", "ice", "poison", "flying", "bug"}
    assert any(rec.startswith("Warning!") for rec in analysis.recommendations)
    # capped at 5 for three members, +1 for strengths, -2 for the critical weakness
    assert analysis.balance_score == 4


def test_single_member_scores_low() -> None:
    team = Team(id="t3", name="Solo", members=[_member(25, "pikachu", ["electric"])])
    analysis = TeamAnalyzer().analyze(team)

    assert analysis.balance_score <= 2
    assert len(analysis.coverage) == 17
    assert "electric" not in analysis.coverage


def test_alternate_form_without_variant_keeps_base_types() -> None:
    team = Team(
        id="t4",
        name="Mega",
        members=[_member(6, "charizard", ["fire", "flying"], form=Form.ALTERNATE_BOOST)],
    )
    analysis = TeamAnalyzer().analyze(team)
    # no variant supplied, so the base types are kept
    assert analysis.type_counts == {"fire": 1, "flying": 1}


def test_member_analysis_lists_coverage_move_types() -> None:
    team = Team(id="t5", name="Water", members=[_member(9, "blastoise", ["water"])])
    analysis = TeamAnalyzer().analyze(team)

    member = analysis.member_analyses[0]
    assert member.name == "blastoise"
    assert member.recommended_move_types == ["fire", "ground", "rock"]


def test_game_mode_filters_roles_and_rules() -> None:
    team = _balanced_team()
    team.game_mode = PVP
    analysis = TeamAnalyzer().analyze(team)

    assert "Sweeper PvE" not in analysis.missing_roles
    assert any("Tera" in rec for rec in analysis.recommendations)
    assert not any("Water-Fire-Grass" in rec for rec in analysis.recommendations)


def test_custom_rules_replace_defaults() -> None:
    rules = [RecommendationRule("always", lambda ctx: [f"{len(ctx.members)} members"])]
    analysis = TeamAnalyzer(rules=rules).analyze(_balanced_team())

    assert analysis.recommendations == ["6 members"]


def test_legacy_chart_changes_defensive_counts() -> None:
    team = Team(id="t6", name="Dragons", members=[_member(147, "dratini", ["dragon"])])

    canonical = TeamAnalyzer().analyze(team)
    legacy = TeamAnalyzer(defensive_chart="legacy").analyze(team)

    assert set(canonical.resistances) == {"fire", "water", "electric", "grass"}
    # the legacy table has no resistances listed for dragon
    assert legacy.resistances == {}


def test_unknown_chart_is_rejected() -> None:
    with pytest.raises(ValueError):
        TeamAnalyzer(defensive_chart="modern")
