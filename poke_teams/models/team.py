"""Core dataclasses shared across the team builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional

from ..data.forms import Form
from ..data.roles import PVE

STAT_NAMES = ("hp", "attack", "defense", "special-attack", "special-defense", "speed")
MAX_TEAM_SIZE = 6


def _attr(stat_name: str) -> str:
    return stat_name.replace("-", "_")


@dataclass(slots=True)
class StatBlock:
    """Six base (or derived) stat values keyed by the provider's stat names."""

    hp: int = 0
    attack: int = 0
    defense: int = 0
    special_attack: int = 0
    special_defense: int = 0
    speed: int = 0

    def get(self, stat_name: str) -> int:
        return getattr(self, _attr(stat_name))

    def replace(self, **overrides: int) -> "StatBlock":
        values = self.as_dict()
        for stat_name, value in overrides.items():
            values[stat_name.replace("_", "-")] = value
        return StatBlock.from_mapping(values)

    def as_dict(self) -> Dict[str, int]:
        return {name: self.get(name) for name in STAT_NAMES}

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "StatBlock":
        kwargs = {}
        for name in STAT_NAMES:
            raw = values.get(name, values.get(_attr(name), 0))
            kwargs[_attr(name)] = int(raw or 0)
        return cls(**kwargs)


@dataclass(slots=True)
class Entity:
    """Species data as returned by the data provider."""

    id: int
    name: str
    types: List[str]
    stats: StatBlock
    abilities: List[str] = field(default_factory=list)
    moves: List[str] = field(default_factory=list)
    sprite: Optional[str] = None
    fully_evolved: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "types": list(self.types),
            "stats": self.stats.as_dict(),
            "abilities": list(self.abilities),
            "moves": list(self.moves),
            "sprite": self.sprite,
            "fully_evolved": self.fully_evolved,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Entity":
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            types=[str(t) for t in data["types"]],
            stats=StatBlock.from_mapping(data["stats"]),
            abilities=list(data.get("abilities") or []),
            moves=list(data.get("moves") or []),
            sprite=data.get("sprite"),
            fully_evolved=bool(data.get("fully_evolved", True)),
        )


@dataclass(slots=True)
class FormVariant:
    """An alternate form with its own stat and type overrides."""

    id: int
    name: str
    form: Form
    types: List[str] = field(default_factory=list)
    stats: Dict[str, int] = field(default_factory=dict)
    sprite: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "form": self.form.value,
            "types": list(self.types),
            "stats": dict(self.stats),
            "sprite": self.sprite,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FormVariant":
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            form=Form.parse(data.get("form")),
            types=list(data.get("types") or []),
            stats={k: int(v) for k, v in (data.get("stats") or {}).items()},
            sprite=data.get("sprite"),
        )


@dataclass(slots=True)
class TeamMember:
    """An entity placed in a team, with its chosen form, role and item."""

    entity: Entity
    form: Form = Form.NORMAL
    variant: Optional[FormVariant] = None
    role: Optional[str] = None
    item: Optional[str] = None
    adjusted_stats: StatBlock = field(default_factory=StatBlock)

    def __post_init__(self) -> None:
        self.form = Form.parse(self.form)
        self.recompute_stats()

    @property
    def types(self) -> List[str]:
        """Types after applying the chosen form."""

        if self.form is Form.ALTERNATE_BOOST and self.variant and self.variant.types:
            return list(self.variant.types)
        return list(self.entity.types)

    @property
    def display_name(self) -> str:
        if self.form is Form.ALTERNATE_BOOST:
            return f"{self.entity.name} (Alternate Boost)"
        if self.form is Form.MAX_HP_BOOST:
            return f"{self.entity.name} (Max HP Boost)"
        return self.entity.name

    def recompute_stats(self) -> None:
        # imported lazily: analysis.stats depends on this module
        from ..analysis.stats import derive_member_stats

        self.adjusted_stats = derive_member_stats(self.entity, self.form, self.variant, self.item)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entity": self.entity.to_dict(),
            "form": self.form.value,
            "variant": self.variant.to_dict() if self.variant else None,
            "role": self.role,
            "item": self.item,
            "adjusted_stats": self.adjusted_stats.as_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TeamMember":
        variant = data.get("variant")
        return cls(
            entity=Entity.from_dict(data["entity"]),
            form=Form.parse(data.get("form")),
            variant=FormVariant.from_dict(variant) if variant else None,
            role=data.get("role"),
            item=data.get("item"),
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if value:
        try:
            return datetime.fromisoformat(str(value))
        except ValueError:
            pass
    return _utcnow()


@dataclass(slots=True)
class Team:
    """Collection of team members, persisted as a single record."""

    id: str
    name: str
    members: List[TeamMember] = field(default_factory=list)
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    game_mode: str = PVE
    is_corrupt: bool = False
    corruption_reason: Optional[str] = None
    raw: Any = None

    def is_empty(self) -> bool:
        return not self.members

    def is_full(self) -> bool:
        return len(self.members) >= MAX_TEAM_SIZE

    def find_member(self, entity_id: int) -> Optional[TeamMember]:
        for member in self.members:
            if member.entity.id == entity_id:
                return member
        return None

    def touch(self) -> None:
        self.updated_at = _utcnow()

    def to_dict(self) -> Dict[str, Any]:
        if self.is_corrupt and self.raw is not None:
            return self.raw
        return {
            "id": self.id,
            "name": self.name,
            "members": [member.to_dict() for member in self.members],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
            "game_mode": self.game_mode,
        }

    def summary(self) -> Dict[str, Any]:
        """Listing view that also works for corrupt records."""

        return {
            "id": self.id,
            "name": self.name,
            "size": len(self.members),
            "game_mode": self.game_mode,
            "updated_at": self.updated_at.isoformat(),
            "is_corrupt": self.is_corrupt,
            "corruption_reason": self.corruption_reason,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Team":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            members=[TeamMember.from_dict(m) for m in data.get("members") or []],
            created_at=_parse_timestamp(data.get("created_at")),
            updated_at=_parse_timestamp(data.get("updated_at")),
            game_mode=str(data.get("game_mode") or PVE),
        )

    @classmethod
    def corrupt(cls, data: Any, reason: str) -> "Team":
        record = data if isinstance(data, dict) else {}
        return cls(
            id=str(record.get("id") or ""),
            name=str(record.get("name") or ""),
            game_mode=str(record.get("game_mode") or PVE),
            updated_at=_parse_timestamp(record.get("updated_at")),
            is_corrupt=True,
            corruption_reason=reason,
            raw=data,
        )


