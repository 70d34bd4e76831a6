"""Planning and recommendation engine boundaries."""

from .engine import ActionKind, HeuristicRecommendationEngine, Recommendation, RecommendationEngine, recommend_moves
from .scoring import NEVER_RECOMMEND, ScoringContext, ScoringWeights

__all__ = [
    "ActionKind",
    "HeuristicRecommendationEngine",
    "NEVER_RECOMMEND",
    "Recommendation",
    "RecommendationEngine",
    "ScoringContext",
    "ScoringWeights",
    "recommend_moves",
]
