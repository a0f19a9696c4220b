"""Team CRUD, member mutations and the analysis entry point."""

from __future__ import annotations

import uuid
from typing import Any, Callable, List, Optional, Protocol

from ..analysis import TeamAnalyzer
from ..data.forms import Form, supports_form
from ..data.roles import GAME_MODES, PVE
from ..models import MAX_TEAM_SIZE, Entity, FormVariant, Team, TeamAnalysis, TeamMember
from ..storage import TEAMS_KEY, ValidationResult, validate_team_record


class TeamStore(Protocol):
    def load(self, key: str) -> Optional[Any]: ...

    def save(self, key: str, value: Any) -> None: ...


class TeamServiceError(ValueError):
    """Base class for rejected team operations."""


class TeamNotFoundError(TeamServiceError):
    def __init__(self, team_id: str) -> None:
        super().__init__(f"Team {team_id!r} not found")
        self.team_id = team_id


class MemberNotFoundError(TeamServiceError):
    def __init__(self, team_id: str, entity_id: int) -> None:
        super().__init__(f"Entity {entity_id} is not a member of team {team_id!r}")
        self.team_id = team_id
        self.entity_id = entity_id


class CorruptTeamError(TeamServiceError):
    def __init__(self, team: Team) -> None:
        super().__init__(
            f"Team {team.id!r} is corrupt ({team.corruption_reason}); it can only be deleted"
        )
        self.team_id = team.id


class TeamCapacityError(TeamServiceError):
    def __init__(self, team: Team) -> None:
        super().__init__(f"Team {team.name!r} already has {MAX_TEAM_SIZE} members (maximum)")
        self.team_id = team.id


class DuplicateMemberError(TeamServiceError):
    def __init__(self, team: Team, entity: Entity) -> None:
        super().__init__(f"{entity.name} is already in team {team.name!r}")
        self.team_id = team.id
        self.entity_id = entity.id


class UnsupportedFormError(TeamServiceError):
    def __init__(self, entity: Entity, form: Form) -> None:
        super().__init__(f"{entity.name} cannot use the {form.value} form")
        self.entity_id = entity.id
        self.form = form


class TeamService:
    """Owns the in-memory team list and writes all of it back after each change."""

    def __init__(
        self,
        *,
        store: TeamStore,
        analyzer: Optional[TeamAnalyzer] = None,
        id_factory: Optional[Callable[[], str]] = None,
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.store = store
        self.analyzer = analyzer or TeamAnalyzer()
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._debug_logger = debug_logger
        self._teams: Optional[List[Team]] = None

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    # ------------------------------------------------------------------
    # Loading & saving
    # ------------------------------------------------------------------
    @property
    def teams(self) -> List[Team]:
        if self._teams is None:
            self._teams = self._load()
        return self._teams

    def refresh(self) -> List[Team]:
        self._teams = self._load()
        return list(self._teams)

    def _load(self) -> List[Team]:
        records = self.store.load(TEAMS_KEY)
        if records is None:
            return []
        if not isinstance(records, list):
            self._debug(f"Ignoring stored teams: expected a list, got {type(records).__name__}")
            return []

        teams: List[Team] = []
        for record in records:
            teams.append(self._load_record(record))
        self._debug(f"Loaded {len(teams)} team(s)")
        return teams

    def _load_record(self, record: Any) -> Team:
        result = validate_team_record(record)
        if result.valid:
            try:
                return Team.from_dict(record)
            except (KeyError, TypeError, ValueError) as exc:
                result = ValidationResult.invalid(f"Unreadable team data: {exc}")
        self._debug(f"Flagging corrupt team record: {result.reason}")
        return Team.corrupt(record, result.reason or "Corrupt team data")

    def _save(self) -> None:
        self.store.save(TEAMS_KEY, [team.to_dict() for team in self.teams])

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------
    def list_teams(self) -> List[Team]:
        return list(self.teams)

    def get_team(self, team_id: str) -> Optional[Team]:
        return next((team for team in self.teams if team.id == team_id), None)

    def create_team(self, name: str, game_mode: str = PVE) -> Team:
        team = Team(
            id=self._id_factory(),
            name=self._clean_name(name),
            game_mode=self._check_game_mode(game_mode),
        )
        self.teams.append(team)
        self._save()
        return team

    def rename_team(self, team_id: str, name: str) -> Team:
        team = self._require_mutable(team_id)
        team.name = self._clean_name(name)
        return self._commit(team)

    def set_game_mode(self, team_id: str, game_mode: str) -> Team:
        team = self._require_mutable(team_id)
        team.game_mode = self._check_game_mode(game_mode)
        return self._commit(team)

    def delete_team(self, team_id: str) -> None:
        """Remove a team; also the only operation allowed on corrupt teams."""

        team = self._require(team_id)
        self._teams = [t for t in self.teams if t is not team]
        self._save()

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------
    def add_member(
        self,
        team_id: str,
        entity: Entity,
        *,
        form: Form | str = Form.NORMAL,
        variant: Optional[FormVariant] = None,
        role: Optional[str] = None,
        item: Optional[str] = None,
    ) -> Team:
        team = self._require_mutable(team_id)
        if team.is_full():
            raise TeamCapacityError(team)
        if team.find_member(entity.id) is not None:
            raise DuplicateMemberError(team, entity)
        form = self._check_form(entity, form, variant)

        team.members.append(
            TeamMember(entity=entity, form=form, variant=variant, role=role, item=item)
        )
        self._debug(f"Added {entity.name} to team {team.id}")
        return self._commit(team)

    def remove_member(self, team_id: str, entity_id: int) -> Team:
        team = self._require_mutable(team_id)
        member = self._require_member(team, entity_id)
        team.members.remove(member)
        return self._commit(team)

    def set_member_form(
        self,
        team_id: str,
        entity_id: int,
        form: Form | str,
        variant: Optional[FormVariant] = None,
    ) -> Team:
        team = self._require_mutable(team_id)
        member = self._require_member(team, entity_id)
        member.form = self._check_form(member.entity, form, variant)
        member.variant = variant if member.form is not Form.NORMAL else None
        member.recompute_stats()
        return self._commit(team)

    def set_member_item(self, team_id: str, entity_id: int, item: Optional[str]) -> Team:
        team = self._require_mutable(team_id)
        member = self._require_member(team, entity_id)
        member.item = item or None
        member.recompute_stats()
        return self._commit(team)

    def set_member_role(self, team_id: str, entity_id: int, role: Optional[str]) -> Team:
        team = self._require_mutable(team_id)
        member = self._require_member(team, entity_id)
        member.role = role or None
        return self._commit(team)

    # ------------------------------------------------------------------
    # Analysis
    # ------------------------------------------------------------------
    def analyze_team(self, team_id: str) -> TeamAnalysis:
        team = self._require_mutable(team_id)
        return self.analyzer.analyze(team)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _commit(self, team: Team) -> Team:
        team.touch()
        self._save()
        return team

    def _require(self, team_id: str) -> Team:
        team = self.get_team(team_id)
        if team is None:
            raise TeamNotFoundError(team_id)
        return team

    def _require_mutable(self, team_id: str) -> Team:
        team = self._require(team_id)
        if team.is_corrupt:
            raise CorruptTeamError(team)
        return team

    @staticmethod
    def _require_member(team: Team, entity_id: int) -> TeamMember:
        member = team.find_member(entity_id)
        if member is None:
            raise MemberNotFoundError(team.id, entity_id)
        return member

    @staticmethod
    def _check_form(entity: Entity, form: Form | str, variant: Optional[FormVariant]) -> Form:
        try:
            form = Form.parse(form)
        except ValueError as exc:
            raise TeamServiceError(str(exc)) from exc
        if form is Form.NORMAL:
            return form
        if supports_form(entity.id, form) or (variant is not None and variant.form is form):
            return form
        raise UnsupportedFormError(entity, form)

    @staticmethod
    def _clean_name(name: str) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise TeamServiceError("Team name must not be empty")
        return cleaned

    @staticmethod
    def _check_game_mode(game_mode: str) -> str:
        mode = (game_mode or "").strip().lower()
        if mode not in GAME_MODES:
            raise TeamServiceError(
                f"Unknown game mode {game_mode!r}; expected one of {', '.join(GAME_MODES)}"
            )
        return mode
