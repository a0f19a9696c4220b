"""Tests for the advisory rule list."""

from __future__ import annotations

from poke_teams.analysis.recommendations import (
    DEFAULT_RULES,
    INCINEROAR_HINT,
    MAX_MOVE_FIELD_HINT,
    AnalysisContext,
    attack_balance_rule,
    core_types_rule,
    max_hp_boost_rule,
    powerful_pairs_rule,
    run_rules,
    team_size_rule,
    weather_rule,
)
from poke_teams.analysis.team_analyzer import TeamAnalyzer
from poke_teams.data.forms import Form
from poke_teams.data.roles import PVE, PVP
from poke_teams.models import Entity, StatBlock, Team, TeamAnalysis, TeamMember


def _member(entity_id: int, name: str, types: list[str], abilities: list[str] | None = None, **kwargs) -> TeamMember:
    stats = StatBlock(hp=90, attack=110, defense=80, special_attack=70, special_defense=80, speed=100)
    entity = Entity(id=entity_id, name=name, types=types, stats=stats, abilities=abilities or [])
    return TeamMember(entity=entity, **kwargs)


def _context(members: list[TeamMember], game_mode: str = PVP) -> AnalysisContext:
    team = Team(id="t", name="Test", members=members, game_mode=game_mode)
    analysis = TeamAnalyzer(rules=()).analyze(team)
    return AnalysisContext(team=team, analysis=analysis, game_mode=game_mode)


def test_team_size_rule() -> None:
    ctx = _context([_member(1, "bulbasaur", ["grass"])])
    assert team_size_rule(ctx) == ["Your team has 1 members. A complete team should have 6."]


def test_powerful_pairs_suggest_missing_partner() -> None:
    ctx = _context([_member(1004, "Chi-Yu", ["dark", "fire"])])
    [message] = powerful_pairs_rule(ctx)
    assert "Flutter Mane" in message


def test_powerful_pairs_fall_back_to_incineroar() -> None:
    ctx = _context([_member(977, "dondozo", ["water"]), _member(978, "tatsugiri", ["dragon", "water"])])
    assert powerful_pairs_rule(ctx) == [INCINEROAR_HINT]

    ctx = _context([_member(727, "incineroar", ["fire", "dark"])])
    assert powerful_pairs_rule(ctx) == []


def test_max_hp_boost_rule_lists_candidates_and_signature_forms() -> None:
    ctx = _context([_member(6, "charizard", ["fire", "flying"]), _member(149, "dragonite", ["dragon", "flying"])])
    messages = max_hp_boost_rule(ctx)

    assert "charizard, dragonite" in messages[0]
    assert messages[1] == MAX_MOVE_FIELD_HINT
    assert messages[2].startswith("charizard can take a signature max-HP form")


def test_max_hp_boost_rule_skips_teams_using_forms() -> None:
    ctx = _context([_member(6, "charizard", ["fire", "flying"], form=Form.ALTERNATE_BOOST)])
    assert max_hp_boost_rule(ctx) == []


def test_weather_rule_needs_a_weather_ability() -> None:
    assert weather_rule(_context([_member(6, "charizard", ["fire", "flying"])])) == []
    ctx = _context([_member(324, "torkoal", ["fire"], abilities=["drought"])])
    assert len(weather_rule(ctx)) == 1


def test_attack_balance_rule_reads_role_counts() -> None:
    ctx = _context([_member(6, "charizard", ["fire", "flying"])])
    ctx.analysis.team_roles = {"Physical Attacker": 3, "Special Attacker": 0}
    assert "physical" in attack_balance_rule(ctx)[0]

    ctx.analysis.team_roles = {"Physical Attacker": 2, "Special Attacker": 2}
    assert attack_balance_rule(ctx) == []


def test_core_types_rule_names_missing_types() -> None:
    ctx = _context([_member(9, "blastoise", ["water"])], game_mode=PVE)
    assert core_types_rule(ctx)[0].endswith("Fire, Grass.")


def test_rules_are_filtered_by_game_mode() -> None:
    pvp_only = {rule.name for rule in DEFAULT_RULES if not rule.applies_to(PVE)}
    assert {"max-hp-boost", "tera", "weather"} <= pvp_only
    assert all(rule.applies_to(PVP) for rule in DEFAULT_RULES if rule.name in {"team-size", "balance-summary"})


def test_run_rules_keeps_rule_order() -> None:
    ctx = _context([_member(6, "charizard", ["fire", "flying"])], game_mode=PVE)
    ctx.analysis = TeamAnalysis(type_counts=ctx.analysis.type_counts, balance_score=2)

    messages = run_rules(ctx)
    assert messages[0].startswith("Your team has 1 members")
    assert messages[-1].startswith("Your team has a low balance score (2/10)")
