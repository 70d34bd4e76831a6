"""Core planning contracts and the heuristic engine that ranks candidate moves."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from colony_advisor.catalog import affordable_buildings
from colony_advisor.models import GameState, ResourceType, Role
from colony_advisor.preferences import PreferenceKey, PreferenceMemory

from . import explanations, scoring
from .scoring import DEFAULT_WEIGHTS, ScoringContext, ScoringWeights


class ActionKind(str, Enum):
    CLAIM_RESOURCE = "claim_resource"
    CLAIM_DISCOUNT_TOKEN = "claim_discount_token"
    TAKE_ROLE = "take_role"
    PURCHASE_BUILDING = "purchase_building"
    NO_BUILDING = "no_building"


@dataclass(frozen=True, slots=True)
class Recommendation:
    """A scored, explained move for the player."""

    kind: ActionKind
    title: str
    explanation: str
    score: float
    role: Role
    resource: ResourceType | None = None
    building: str | None = None

    @property
    def preference_key(self) -> PreferenceKey:
        return PreferenceKey.for_move(self.role, self.resource, self.building)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "score": round(self.score, 3),
            "title": self.title,
            "explanation": self.explanation,
            "role": self.role.value,
        }
        if self.resource is not None:
            payload["plantation"] = self.resource.value
        if self.building is not None:
            payload["building"] = self.building
        return payload


class RecommendationEngine(Protocol):
    """Transforms a game state into ranked candidate moves."""

    def suggest(self, state: GameState, preferences: PreferenceMemory | None = None) -> list[Recommendation]:
        """Return recommendations ordered best first."""


class HeuristicRecommendationEngine:
    """Single-ply heuristic ranking over every move the current round still allows."""

    def __init__(self, *, weights: ScoringWeights = DEFAULT_WEIGHTS, preference_weight: float = 0.3) -> None:
        self._weights = weights
        self._preference_weight = preference_weight

    def suggest(self, state: GameState, preferences: PreferenceMemory | None = None) -> list[Recommendation]:
        candidates = [
            *self._settler_candidates(state),
            *self._builder_candidates(state),
            *self._role_candidates(state),
        ]
        if preferences is not None:
            candidates = [self._with_preference(candidate, preferences) for candidate in candidates]
        # sorted() is stable, so equal scores keep enumeration order.
        return sorted(candidates, key=lambda candidate: candidate.score, reverse=True)

    def _settler_candidates(self, state: GameState) -> list[Recommendation]:
        if not state.round_state.is_available(Role.SETTLER):
            return []

        you, opponent = state.you, state.opponent
        context = ScoringContext(turn_number=state.turn_number)
        found: list[Recommendation] = []
        for resource in state.round_state.face_up_resources:
            if resource is None or resource is ResourceType.QUARRY:
                continue
            label = "an unrecognised tile" if resource is ResourceType.UNKNOWN else resource.value
            found.append(
                Recommendation(
                    kind=ActionKind.CLAIM_RESOURCE,
                    title=f"Take Settler → choose {label}",
                    explanation=explanations.explain_plantation_choice(resource, you, opponent, context, self._weights),
                    score=scoring.score_plantation_choice(resource, you, opponent, context, self._weights),
                    role=Role.SETTLER,
                    resource=resource,
                )
            )

        if state.round_state.discount_tokens_remaining > 0:
            found.append(
                Recommendation(
                    kind=ActionKind.CLAIM_DISCOUNT_TOKEN,
                    title="Take Settler → take a Quarry",
                    explanation=explanations.explain_quarry_choice(you, opponent, context, self._weights),
                    score=scoring.score_quarry_choice(you, opponent, context, self._weights),
                    role=Role.SETTLER,
                    resource=ResourceType.QUARRY,
                )
            )
        return found

    def _builder_candidates(self, state: GameState) -> list[Recommendation]:
        if not state.round_state.is_available(Role.BUILDER):
            return []

        you, opponent = state.you, state.opponent
        context = ScoringContext(turn_number=state.turn_number)
        options = affordable_buildings(you.money, you.owned_buildings)
        if not options:
            return [
                Recommendation(
                    kind=ActionKind.NO_BUILDING,
                    title="Take Builder (nothing worth buying)",
                    explanation=explanations.explain_no_building(you, opponent, context, self._weights),
                    score=scoring.score_no_building(you, opponent, context, self._weights),
                    role=Role.BUILDER,
                )
            ]

        return [
            Recommendation(
                kind=ActionKind.PURCHASE_BUILDING,
                title=f"Take Builder → buy {spec.name}",
                explanation=explanations.explain_building_choice(spec, you, opponent, context, self._weights),
                score=scoring.score_building_choice(spec, you, opponent, context, self._weights),
                role=Role.BUILDER,
                building=spec.name,
            )
            for spec in options
        ]

    def _role_candidates(self, state: GameState) -> list[Recommendation]:
        you, opponent = state.you, state.opponent
        context = ScoringContext(turn_number=state.turn_number)
        return [
            Recommendation(
                kind=ActionKind.TAKE_ROLE,
                title=f"Take {role.value}",
                explanation=explanations.explain_role(role, you, opponent, context, self._weights),
                score=scoring.score_role(role, you, opponent, context, self._weights),
                role=role,
            )
            for role in state.round_state.available_roles
            if role not in (Role.SETTLER, Role.BUILDER)
        ]

    def _with_preference(self, candidate: Recommendation, preferences: PreferenceMemory) -> Recommendation:
        count = preferences.count(candidate.preference_key)
        if count == 0:
            return candidate
        return Recommendation(
            kind=candidate.kind,
            title=candidate.title,
            explanation=f"{candidate.explanation} {explanations.explain_preference(count)}",
            score=candidate.score + self._preference_weight * count,
            role=candidate.role,
            resource=candidate.resource,
            building=candidate.building,
        )


def recommend_moves(
    state: GameState,
    preferences: PreferenceMemory | None = None,
    *,
    preference_weight: float = 0.3,
) -> list[Recommendation]:
    """Rank every candidate move for ``state``, best first."""
    engine = HeuristicRecommendationEngine(preference_weight=preference_weight)
    return engine.suggest(state, preferences)
