"""Lightweight wrapper around PokeAPI for species, item and berry data."""

from __future__ import annotations

import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence

import requests

from ..data.forms import Form
from ..models import Entity, FormVariant, StatBlock
from .cache import DEFAULT_TTL, ResponseCache


class PokeAPIClientError(RuntimeError):
    """Raised when the PokeAPI request fails."""


@dataclass(frozen=True)
class Generation:
    id: int
    name: str
    region: str
    range_start: int
    range_end: int

    @property
    def size(self) -> int:
        return self.range_end - self.range_start + 1


GENERATIONS: tuple[Generation, ...] = (
    Generation(1, "generation-i", "Kanto", 1, 151),
    Generation(2, "generation-ii", "Johto", 152, 251),
    Generation(3, "generation-iii", "Hoenn", 252, 386),
    Generation(4, "generation-iv", "Sinnoh", 387, 493),
    Generation(5, "generation-v", "Unova", 494, 649),
    Generation(6, "generation-vi", "Kalos", 650, 721),
    Generation(7, "generation-vii", "Alola", 722, 809),
    Generation(8, "generation-viii", "Galar", 810, 898),
    Generation(9, "generation-ix", "Paldea", 899, 1010),
)

TYPE_LISTING_LIMIT = 100
MULTI_TYPE_RESULT_LIMIT = 20
SEARCH_RESULT_LIMIT = 20
SEARCH_INDEX_SIZE = 1000


class PokeAPIClient:
    """Small helper client with an explicit TTL response cache.

    List-style helpers fetch details concurrently in batches and degrade to an
    empty list when any request in the batch fails; single lookups raise
    :class:`PokeAPIClientError`.
    """

    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        base_url: Optional[str] = None,
        cache: Optional[ResponseCache] = None,
        cache_ttl: float = DEFAULT_TTL,
        timeout: float = 10,
        batch_size: int = 20,
        user_agent: str = "poke-teams/0.1 (+https://pokeapi.co/)",
        debug_logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.session = session or requests.Session()
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.cache = cache if cache is not None else ResponseCache(ttl=cache_ttl)
        self.timeout = timeout
        self.batch_size = max(1, batch_size)
        self.user_agent = user_agent
        self._debug_logger = debug_logger

    # ------------------------------------------------------------------
    # Species
    # ------------------------------------------------------------------
    def list_pokemon(self, offset: int = 0, limit: int = 20) -> Dict[str, Any]:
        return self._get_json(f"pokemon?limit={limit}&offset={offset}")

    def get_pokemon(self, identifier: str | int) -> Dict[str, Any]:
        return self._get_json(f"pokemon/{self._slugify_name(str(identifier))}")

    def get_entity(self, identifier: str | int, *, resolve_evolution: bool = False) -> Entity:
        payload = self.get_pokemon(identifier)
        fully_evolved = True
        if resolve_evolution:
            fully_evolved = self._is_fully_evolved(payload)
        return self._to_entity(payload, fully_evolved=fully_evolved)

    def get_species(self, species_id: str | int) -> Dict[str, Any]:
        return self._get_json(f"pokemon-species/{self._slugify_name(str(species_id))}")

    def get_evolution_chain(self, url: str) -> Dict[str, Any]:
        return self._get_json(url)

    def evolution_line(self, identifier: str | int) -> List[Dict[str, Any]]:
        """Flatten the evolution chain of ``identifier`` in depth-first order."""

        species = self.get_species(identifier)
        chain_url = (species.get("evolution_chain") or {}).get("url")
        if not chain_url:
            return [{"name": species.get("name"), "stage": 0, "condition": None, "evolves": False}]
        chain = self.get_evolution_chain(chain_url).get("chain") or {}
        line: List[Dict[str, Any]] = []
        self._walk_chain(chain, None, 0, line)
        return line

    def get_type(self, type_name: str) -> Dict[str, Any]:
        return self._get_json(f"type/{self._slugify_type(type_name)}")

    def get_pokemon_by_type(self, type_name: str, limit: int = TYPE_LISTING_LIMIT) -> List[Entity]:
        try:
            payload = self.get_type(type_name)
            names = [entry["pokemon"]["name"] for entry in payload.get("pokemon", [])][:limit]
            return self._fetch_entities(names)
        except PokeAPIClientError as exc:
            self._debug(f"Failed to list Pokémon of type {type_name}: {exc}")
            return []

    def get_pokemon_by_types(self, types: Sequence[str]) -> List[Entity]:
        """Entities that carry every type in ``types``."""

        if not types:
            try:
                listing = self.list_pokemon(0, MULTI_TYPE_RESULT_LIMIT)
                return self._fetch_entities(r["name"] for r in listing.get("results", []))
            except PokeAPIClientError as exc:
                self._debug(f"Failed to list default Pokémon: {exc}")
                return []

        matching = self.get_pokemon_by_type(types[0])
        for type_name in types[1:]:
            ids = {entity.id for entity in self.get_pokemon_by_type(type_name)}
            matching = [entity for entity in matching if entity.id in ids]
        return matching[:MULTI_TYPE_RESULT_LIMIT]

    def get_pokemon_by_generation(self, generation_id: int) -> List[Entity]:
        generation = next((g for g in GENERATIONS if g.id == generation_id), None)
        if generation is None:
            self._debug(f"Generation {generation_id} not found")
            return []
        return self.get_pokemon_by_range(generation.range_start, generation.size)

    def get_pokemon_by_range(self, start: int, limit: int) -> List[Entity]:
        try:
            return self._fetch_entities(range(start, start + limit))
        except PokeAPIClientError as exc:
            self._debug(f"Failed to fetch Pokémon {start}..{start + limit - 1}: {exc}")
            return []

    def search_pokemon(self, query: str) -> List[Dict[str, str]]:
        """Basic ``{"name", "url"}`` records matching a name fragment or dex number."""

        query = query.strip().lower()
        if not query:
            return []
        try:
            if query.isdigit():
                payload = self.get_pokemon(query)
                return [{"name": payload["name"], "url": f"{self.base_url}/pokemon/{payload['id']}/"}]
            listing = self.list_pokemon(0, SEARCH_INDEX_SIZE)
        except PokeAPIClientError as exc:
            self._debug(f"Search for {query!r} failed: {exc}")
            return []
        results = [r for r in listing.get("results", []) if query in r["name"].lower()]
        return results[:SEARCH_RESULT_LIMIT]

    def get_variants(self, species_id: int) -> Dict[Form, List[FormVariant]]:
        """Alternate-boost and max-HP-boost varieties declared by a species."""

        variants: Dict[Form, List[FormVariant]] = {Form.ALTERNATE_BOOST: [], Form.MAX_HP_BOOST: []}
        try:
            species = self.get_species(species_id)
            for variety in species.get("varieties", []):
                name = variety["pokemon"]["name"]
                if "-mega" in name:
                    form = Form.ALTERNATE_BOOST
                elif "-gmax" in name:
                    form = Form.MAX_HP_BOOST
                else:
                    continue
                variants[form].append(self._to_variant(self.get_pokemon(name), form))
        except PokeAPIClientError as exc:
            self._debug(f"Failed to load variants for {species_id}: {exc}")
            return {Form.ALTERNATE_BOOST: [], Form.MAX_HP_BOOST: []}
        return variants

    # ------------------------------------------------------------------
    # Items & berries
    # ------------------------------------------------------------------
    def get_item(self, identifier: str | int) -> Dict[str, Any]:
        return self._get_json(f"item/{self._slugify_name(str(identifier))}")

    def list_items(self, offset: int = 0, limit: int = 20) -> Dict[str, Any]:
        return self._get_json(f"item?offset={offset}&limit={limit}")

    def get_item_category(self, category: str) -> Dict[str, Any]:
        return self._get_json(f"item-category/{category}")

    def search_items(self, query: str) -> List[Dict[str, Any]]:
        slug = query.strip().lower()
        if not slug:
            return []
        try:
            exact = self._get_json(f"item/{self._slugify_name(slug)}", allow_404=True)
            if exact is not None:
                return [exact]
            listing = self.list_items(0, 100)
            names = [r["name"] for r in listing.get("results", []) if slug in r["name"]]
            return self._fetch_many(names, self.get_item)
        except PokeAPIClientError as exc:
            self._debug(f"Item search for {query!r} failed: {exc}")
            return []

    def get_held_items(self) -> List[Dict[str, Any]]:
        try:
            category = self.get_item_category("held-items")
            return self._fetch_many([i["name"] for i in category.get("items", [])], self.get_item)
        except PokeAPIClientError as exc:
            self._debug(f"Failed to load held items: {exc}")
            return []

    def get_berry(self, identifier: str | int) -> Dict[str, Any]:
        return self._get_json(f"berry/{self._slugify_name(str(identifier))}")

    def get_berries(self, offset: int = 0, limit: int = 40) -> List[Dict[str, Any]]:
        """Berry item records, each tagged with ``is_berry`` and its ``berry_info``."""

        try:
            listing = self._get_json(f"berry?offset={offset}&limit={limit}")
        except PokeAPIClientError as exc:
            self._debug(f"Failed to list berries: {exc}")
            return []

        def load(name: str) -> Optional[Dict[str, Any]]:
            try:
                berry = self.get_berry(name)
                item = dict(self.get_item(f"{name}-berry"))
            except PokeAPIClientError as exc:
                self._debug(f"Skipping berry {name}: {exc}")
                return None
            item["is_berry"] = True
            item["berry_info"] = berry
            return item

        loaded = self._fetch_many([r["name"] for r in listing.get("results", [])], load)
        return [item for item in loaded if item is not None]

    # ------------------------------------------------------------------
    # Cache control
    # ------------------------------------------------------------------
    def clear_cache(self) -> None:
        self.cache.clear()

    def clear_pokemon_cache(self, identifier: str | int) -> bool:
        return self.cache.invalidate(self._build_url(f"pokemon/{self._slugify_name(str(identifier))}"))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get_json(self, endpoint: str, *, allow_404: bool = False) -> Optional[Dict[str, Any]]:
        url = self._build_url(endpoint)
        cached = self.cache.get(url)
        if cached is not None:
            return cached

        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
            if response.status_code == 404 and allow_404:
                return None
            response.raise_for_status()
        except requests.RequestException as exc:
            raise PokeAPIClientError(str(exc)) from exc

        payload = response.json()
        self.cache.set(url, payload)
        return payload

    def _build_url(self, endpoint: str) -> str:
        if endpoint.startswith(("http://", "https://")):
            return endpoint
        endpoint = endpoint.lstrip("/")
        return f"{self.base_url}/{endpoint}"

    def _fetch_many(self, identifiers: Iterable[Any], fetch: Callable[[Any], Any]) -> List[Any]:
        """Run ``fetch`` over ``identifiers`` in concurrent batches, keeping order.

        Any exception raised by ``fetch`` propagates and fails the whole call.
        """

        pending = list(identifiers)
        results: List[Any] = []
        if not pending:
            return results
        with ThreadPoolExecutor(max_workers=self.batch_size) as executor:
            for start in range(0, len(pending), self.batch_size):
                batch = pending[start : start + self.batch_size]
                self._debug(f"Fetching batch of {len(batch)} starting at {start}")
                results.extend(executor.map(fetch, batch))
        return results

    def _fetch_entities(self, identifiers: Iterable[Any]) -> List[Entity]:
        payloads = self._fetch_many(identifiers, self.get_pokemon)
        return [self._to_entity(payload) for payload in payloads]

    def _is_fully_evolved(self, payload: Dict[str, Any]) -> bool:
        species_name = (payload.get("species") or {}).get("name") or payload.get("name")
        try:
            line = self.evolution_line(species_name)
        except PokeAPIClientError as exc:
            self._debug(f"Evolution lookup for {species_name} failed: {exc}")
            return True
        for entry in line:
            if entry["name"] == species_name:
                return not entry["evolves"]
        return True

    def _walk_chain(
        self,
        node: Dict[str, Any],
        details: Optional[Dict[str, Any]],
        stage: int,
        line: List[Dict[str, Any]],
    ) -> None:
        children = node.get("evolves_to") or []
        line.append(
            {
                "name": (node.get("species") or {}).get("name"),
                "stage": stage,
                "condition": self._evolution_condition(details) if details else None,
                "evolves": bool(children),
            }
        )
        for child in children:
            child_details = (child.get("evolution_details") or [None])[0]
            self._walk_chain(child, child_details, stage + 1, line)

    @staticmethod
    def _evolution_condition(details: Dict[str, Any]) -> str:
        item = (details.get("item") or {}).get("name")
        trigger = (details.get("trigger") or {}).get("name")
        if details.get("min_level"):
            return f"Level {details['min_level']}"
        if item and trigger != "use-item":
            return f"Using {item}"
        if trigger == "trade":
            return "Trade"
        if trigger == "use-item":
            return f"Use {item or 'item'}"
        if details.get("min_happiness"):
            return f"Happiness >= {details['min_happiness']}"
        if details.get("held_item"):
            return f"Holding {details['held_item']['name']}"
        return "Special evolution"

    @staticmethod
    def _to_entity(payload: Dict[str, Any], *, fully_evolved: bool = True) -> Entity:
        stats = {entry["stat"]["name"]: entry["base_stat"] for entry in payload.get("stats", [])}
        sprites = payload.get("sprites") or {}
        return Entity(
            id=int(payload["id"]),
            name=payload["name"],
            types=[slot["type"]["name"] for slot in payload.get("types", [])],
            stats=StatBlock.from_mapping(stats),
            abilities=[a["ability"]["name"] for a in payload.get("abilities", [])],
            moves=[m["move"]["name"] for m in payload.get("moves", [])],
            sprite=sprites.get("front_default"),
            fully_evolved=fully_evolved,
        )

    @staticmethod
    def _to_variant(payload: Dict[str, Any], form: Form) -> FormVariant:
        sprites = payload.get("sprites") or {}
        artwork = ((sprites.get("other") or {}).get("official-artwork") or {}).get("front_default")
        sprite = sprites.get("front_default")
        if form is Form.MAX_HP_BOOST:
            sprite = artwork or sprite
        return FormVariant(
            id=int(payload["id"]),
            name=payload["name"],
            form=form,
            types=[slot["type"]["name"] for slot in payload.get("types", [])],
            stats={entry["stat"]["name"]: entry["base_stat"] for entry in payload.get("stats", [])},
            sprite=sprite,
        )

    def _debug(self, message: str) -> None:
        if self._debug_logger:
            self._debug_logger(message)

    @staticmethod
    def _slugify_name(name: str) -> str:
        slug = name.strip().lower()
        slug = re.sub(r"[\s\.]+", "-", slug)
        slug = re.sub(r"[^a-z0-9\-]", "", slug)
        return slug

    @staticmethod
    def _slugify_type(type_name: str) -> str:
        return type_name.strip().lower().replace(" ", "-")
