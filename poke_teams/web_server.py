"""FastAPI web server exposing browsing, team management and analysis via REST."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from .analysis import calculate_weaknesses
from .analysis.items import item_category, recommend_items
from .clients import PokeAPIClient, PokeAPIClientError
from .config import Settings
from .data.forms import Form
from .data.roles import PVE
from .data.type_chart import UnknownTypeError
from .models import FormVariant, Team
from .services import (
    CorruptTeamError,
    DuplicateMemberError,
    MemberNotFoundError,
    TeamCapacityError,
    TeamNotFoundError,
    TeamService,
    TeamServiceError,
)

NOT_FOUND_ERRORS = (TeamNotFoundError, MemberNotFoundError)
CONFLICT_ERRORS = (CorruptTeamError, TeamCapacityError, DuplicateMemberError)


# Pydantic models for request bodies
class CreateTeamRequest(BaseModel):
    name: str
    game_mode: str = PVE


class UpdateTeamRequest(BaseModel):
    name: Optional[str] = None
    game_mode: Optional[str] = None


class AddMemberRequest(BaseModel):
    """Entity to add, by name or dex number, with its optional set-up."""

    identifier: str = Field(..., description="Species name or dex number (e.g. 'charizard' or '6')")
    form: str = Form.NORMAL.value
    variant: Optional[str] = Field(None, description="Variant name when several exist for a form")
    role: Optional[str] = None
    item: Optional[str] = None


class UpdateMemberRequest(BaseModel):
    form: Optional[str] = None
    variant: Optional[str] = None
    role: Optional[str] = None
    item: Optional[str] = None


def _team_payload(team: Team) -> Dict[str, Any]:
    if team.is_corrupt:
        return team.summary()
    payload = team.to_dict()
    payload["is_corrupt"] = False
    return payload


def create_app(
    service: Optional[TeamService] = None,
    client: Optional[PokeAPIClient] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    if service is None or client is None:
        settings = settings or Settings.from_env()
    service = service or settings.make_team_service()
    client = client or settings.make_client()

    app = FastAPI(
        title="Poke Teams Web API",
        description="REST API for browsing Pokémon data and analyzing teams",
        version="0.1.0",
    )

    @app.exception_handler(TeamServiceError)
    async def _team_error(request: Request, exc: TeamServiceError) -> JSONResponse:
        status = 400
        if isinstance(exc, NOT_FOUND_ERRORS):
            status = 404
        elif isinstance(exc, CONFLICT_ERRORS):
            status = 409
        return JSONResponse(status_code=status, content={"detail": str(exc)})

    @app.exception_handler(UnknownTypeError)
    async def _type_error(request: Request, exc: UnknownTypeError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(PokeAPIClientError)
    async def _upstream_error(request: Request, exc: PokeAPIClientError) -> JSONResponse:
        return JSONResponse(status_code=502, content={"detail": f"Upstream request failed: {exc}"})

    def _resolve_variant(entity_id: int, form: Form, name: Optional[str]) -> Optional[FormVariant]:
        if form is Form.NORMAL:
            return None
        candidates = client.get_variants(entity_id).get(form, [])
        if name:
            return next((v for v in candidates if v.name == name.strip().lower()), None)
        return candidates[0] if candidates else None

    def _parse_form(value: str) -> Form:
        try:
            return Form.parse(value)
        except ValueError as exc:
            raise TeamServiceError(str(exc)) from exc

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------
    @app.get("/api/pokemon")
    def list_pokemon(
        offset: int = Query(0, ge=0),
        limit: int = Query(20, ge=1, le=200),
    ) -> Dict[str, Any]:
        """Paged list of species names, as returned by the provider."""
        return client.list_pokemon(offset, limit)

    @app.get("/api/pokemon/search")
    def search_pokemon(q: str = Query(..., min_length=1)) -> List[Dict[str, str]]:
        return client.search_pokemon(q)

    @app.get("/api/pokemon/{identifier}")
    def get_pokemon(identifier: str) -> Dict[str, Any]:
        return client.get_entity(identifier, resolve_evolution=True).to_dict()

    @app.get("/api/pokemon/{identifier}/weaknesses")
    def get_pokemon_weaknesses(identifier: str) -> Dict[str, Any]:
        entity = client.get_entity(identifier)
        return {"name": entity.name, "types": entity.types, **asdict(calculate_weaknesses(entity.types))}

    @app.get("/api/pokemon/{identifier}/variants")
    def get_pokemon_variants(identifier: str) -> Dict[str, Any]:
        entity = client.get_entity(identifier)
        variants = client.get_variants(entity.id)
        return {form.value: [variant.to_dict() for variant in found] for form, found in variants.items()}

    @app.get("/api/pokemon/{identifier}/items")
    def get_recommended_items(identifier: str) -> Dict[str, Any]:
        """Held items suggested for the species' stat spread."""
        entity = client.get_entity(identifier)
        items = recommend_items(entity, client.get_held_items())
        return {"category": item_category(entity), "items": items}

    @app.get("/api/types/{type_names}/weaknesses")
    def get_type_weaknesses(type_names: str) -> Dict[str, Any]:
        """Defensive profile of a comma-separated type combination (e.g. ``fire,water``)."""
        types = [t for t in type_names.split(",") if t.strip()]
        return {"types": types, **asdict(calculate_weaknesses(types))}

    # ------------------------------------------------------------------
    # Teams
    # ------------------------------------------------------------------
    @app.get("/api/teams")
    def list_teams() -> List[Dict[str, Any]]:
        return [team.summary() for team in service.list_teams()]

    @app.post("/api/teams", status_code=201)
    def create_team(request: CreateTeamRequest) -> Dict[str, Any]:
        return _team_payload(service.create_team(request.name, request.game_mode))

    @app.get("/api/teams/{team_id}")
    def get_team(team_id: str) -> Dict[str, Any]:
        team = service.get_team(team_id)
        if team is None:
            raise TeamNotFoundError(team_id)
        return _team_payload(team)

    @app.patch("/api/teams/{team_id}")
    def update_team(team_id: str, request: UpdateTeamRequest) -> Dict[str, Any]:
        if request.name is not None:
            service.rename_team(team_id, request.name)
        if request.game_mode is not None:
            service.set_game_mode(team_id, request.game_mode)
        return get_team(team_id)

    @app.delete("/api/teams/{team_id}", status_code=204)
    def delete_team(team_id: str) -> None:
        service.delete_team(team_id)

    @app.post("/api/teams/{team_id}/members", status_code=201)
    def add_member(team_id: str, request: AddMemberRequest) -> Dict[str, Any]:
        if service.get_team(team_id) is None:
            raise TeamNotFoundError(team_id)
        form = _parse_form(request.form)
        entity = client.get_entity(request.identifier, resolve_evolution=True)
        team = service.add_member(
            team_id,
            entity,
            form=form,
            variant=_resolve_variant(entity.id, form, request.variant),
            role=request.role,
            item=request.item,
        )
        return _team_payload(team)

    @app.patch("/api/teams/{team_id}/members/{entity_id}")
    def update_member(team_id: str, entity_id: int, request: UpdateMemberRequest) -> Dict[str, Any]:
        changed = request.model_fields_set
        team = service.get_team(team_id)
        if team is None:
            raise TeamNotFoundError(team_id)
        if "form" in changed and request.form is not None:
            form = _parse_form(request.form)
            service.set_member_form(
                team_id, entity_id, form, _resolve_variant(entity_id, form, request.variant)
            )
        if "item" in changed:
            service.set_member_item(team_id, entity_id, request.item)
        if "role" in changed:
            service.set_member_role(team_id, entity_id, request.role)
        return get_team(team_id)

    @app.delete("/api/teams/{team_id}/members/{entity_id}")
    def remove_member(team_id: str, entity_id: int) -> Dict[str, Any]:
        return _team_payload(service.remove_member(team_id, entity_id))

    @app.get("/api/teams/{team_id}/analysis")
    def analyze_team(team_id: str) -> Dict[str, Any]:
        return asdict(service.analyze_team(team_id))

    return app


def run(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Entry point for running the web server."""
    import uvicorn

    print(f"[poke-teams-web] Starting web server at http://{host}:{port}")
    print("[poke-teams-web] Press Ctrl+C to stop.")
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    run()
