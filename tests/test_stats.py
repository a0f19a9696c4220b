"""Tests for form and held-item stat adjustments."""

from __future__ import annotations

from poke_teams.analysis.stats import (
    adjust_for_alternate_boost,
    adjust_for_max_hp_boost,
    apply_held_item,
    derive_member_stats,
    round_half_up,
)
from poke_teams.data.forms import Form
from poke_teams.models import Entity, FormVariant, StatBlock

BASE = StatBlock(hp=100, attack=100, defense=100, special_attack=100, special_defense=100, speed=90)


def _entity(fully_evolved: bool = True) -> Entity:
    return Entity(id=6, name="charizard", types=["fire", "flying"], stats=BASE, fully_evolved=fully_evolved)


def test_round_half_up_breaks_ties_away_from_zero() -> None:
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(-2.5) == -3
    assert round_half_up(2.4) == 2


def test_alternate_boost_multipliers() -> None:
    boosted = adjust_for_alternate_boost(BASE)

    assert boosted.attack == 130
    assert boosted.defense == 120
    assert boosted.special_attack == 130
    assert boosted.speed == 99
    assert boosted.hp == 100


def test_alternate_boost_uses_variant_stats_with_fallback() -> None:
    boosted = adjust_for_alternate_boost(BASE, {"attack": 130, "special-attack": 159, "speed": 100})

    assert boosted.attack == 130
    assert boosted.special_attack == 159
    assert boosted.speed == 100
    assert boosted.defense == 100


def test_max_hp_boost() -> None:
    boosted = adjust_for_max_hp_boost(BASE)

    assert boosted.hp == 200
    assert boosted.speed == 90
    assert boosted.attack == 110


def test_held_items_boost_one_stat() -> None:
    assert apply_held_item(BASE, "Choice Band").attack == 150
    assert apply_held_item(BASE, "choice-specs").special_attack == 150
    assert apply_held_item(BASE, "choice-scarf").speed == 135
    assert apply_held_item(BASE, "assault-vest").special_defense == 150
    assert apply_held_item(BASE, "leftovers") == BASE


def test_eviolite_only_applies_before_final_stage() -> None:
    assert apply_held_item(BASE, "eviolite", fully_evolved=True) == BASE

    boosted = apply_held_item(BASE, "eviolite", fully_evolved=False)
    assert boosted.defense == 150
    assert boosted.special_defense == 150


def test_item_boost_does_not_stack() -> None:
    once = apply_held_item(BASE, "choice-band", base=BASE)
    twice = apply_held_item(once, "choice-band", base=BASE)
    assert twice.attack == 150


def test_derive_member_stats_combines_form_and_item() -> None:
    stats = derive_member_stats(_entity(), Form.ALTERNATE_BOOST, None, "choice-band")

    # the item works from the declared base, the form boost stays on other stats
    assert stats.attack == 150
    assert stats.defense == 120


def test_derive_member_stats_with_variant() -> None:
    variant = FormVariant(
        id=10034,
        name="charizard-mega-x",
        form=Form.ALTERNATE_BOOST,
        types=["fire", "dragon"],
        stats={"attack": 130, "defense": 111},
    )
    stats = derive_member_stats(_entity(), "mega", variant)

    assert stats.attack == 130
    assert stats.defense == 111
    assert stats.hp == 100
