"""Pokémon team building and analysis utilities."""

from .analysis.team_analyzer import TeamAnalyzer
from .analysis.weakness import calculate_weaknesses

__all__ = [
    "TeamAnalyzer",
    "calculate_weaknesses",
]
