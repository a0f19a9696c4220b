"""External data clients used by the team builder."""

from .cache import ResponseCache
from .pokeapi import GENERATIONS, Generation, PokeAPIClient, PokeAPIClientError

__all__ = [
    "GENERATIONS",
    "Generation",
    "PokeAPIClient",
    "PokeAPIClientError",
    "ResponseCache",
]
