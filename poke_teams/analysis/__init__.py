"""Analysis utilities for team building."""

from .recommendations import DEFAULT_RULES, AnalysisContext, RecommendationRule
from .roles import applicable_roles, classify
from .team_analyzer import TeamAnalyzer
from .weakness import WeaknessBuckets, calculate_weaknesses

__all__ = [
    "DEFAULT_RULES",
    "AnalysisContext",
    "RecommendationRule",
    "TeamAnalyzer",
    "WeaknessBuckets",
    "applicable_roles",
    "calculate_weaknesses",
    "classify",
]
