"""Role archetypes used when classifying team members by their stats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

PVE = "pve"
PVP = "pvp"
GAME_MODES = (PVE, PVP)


@dataclass(frozen=True)
class RoleDefinition:
    name: str
    description: str
    stats_priority: Tuple[str, ...]

    @property
    def mode(self) -> str | None:
        """Game mode the role is restricted to, or ``None`` for both."""

        if "PvE" in self.name:
            return PVE
        if "PvP" in self.name:
            return PVP
        return None

    def applies_to(self, game_mode: str) -> bool:
        return self.mode is None or self.mode == game_mode


ROLE_CATALOG: Tuple[RoleDefinition, ...] = (
    RoleDefinition(
        "Physical Attacker",
        "High physical attack to deal fast damage",
        ("attack", "speed"),
    ),
    RoleDefinition(
        "Special Attacker",
        "High special attack to deal fast damage",
        ("special-attack", "speed"),
    ),
    RoleDefinition(
        "Physical Tank",
        "High physical bulk to absorb hits",
        ("hp", "defense"),
    ),
    RoleDefinition(
        "Special Tank",
        "High special bulk to absorb hits",
        ("hp", "special-defense"),
    ),
    RoleDefinition(
        "Sweeper PvE",
        "Can sweep entire AI teams",
        ("attack", "special-attack", "speed"),
    ),
    RoleDefinition(
        "Setup Sweeper",
        "Boosts itself and then sweeps the opposing team",
        ("speed", "attack", "special-attack"),
    ),
    RoleDefinition(
        "Revenge Killer",
        "Fast enough to finish off weakened opponents",
        ("speed", "attack", "special-attack"),
    ),
    RoleDefinition(
        "Wall Breaker",
        "Hits hard enough to break through defensive walls",
        ("attack", "special-attack"),
    ),
    RoleDefinition(
        "Support",
        "Backs the team up with status moves",
        ("hp", "defense", "special-defense"),
    ),
)

ROLES_BY_NAME = {role.name: role for role in ROLE_CATALOG}
