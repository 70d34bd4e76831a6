"""Heuristic desirability scores for each kind of candidate move.

All functions here are pure and total: they accept any reachable board, treat
untabulated names as worth nothing and never raise.
"""

from __future__ import annotations

from dataclasses import dataclass

from colony_advisor.catalog import WEAK_STARTING_RESOURCES, BuildingCategory, BuildingSpec, resource_value
from colony_advisor.models import PlayerBoard, ResourceType, Role

NEVER_RECOMMEND = -1000.0


@dataclass(frozen=True, slots=True)
class ScoringContext:
    turn_number: int


@dataclass(frozen=True, slots=True)
class ScoringWeights:
    early_turn_threshold: int = 2

    # Plantation claims
    strong_match_bonus: float = 0.8
    weak_match_bonus: float = 0.5
    diversify_bonus: float = 0.4
    deny_bonus: float = 0.4
    plantation_early_bonus: float = 0.5

    # Quarry claims
    quarry_base: float = 3.2
    quarry_early_bonus: float = 0.5
    first_quarry_bonus: float = 0.8
    second_quarry_bonus: float = 0.3
    extra_quarry_penalty: float = 0.6

    # Building purchases
    held_production_bonus: float = 1.0
    held_production_step: float = 0.3
    starting_production_bonus: float = 0.6
    market_bonus: float = 0.7
    market_min_distinct: int = 2
    settlement_early_bonus: float = 0.5
    per_quarry_building_bonus: float = 0.25
    cost_penalty: float = 0.15
    no_building_score: float = 0.1

    # Secondary roles
    prospector_base: float = 2.0
    prospector_low_money: int = 2
    prospector_low_money_bonus: float = 0.7
    prospector_early_penalty: float = 0.2
    mayor_base: float = 0.6
    mayor_building_bonus: float = 0.4
    craftsman_base: float = 0.4
    craftsman_variety_bonus: float = 0.3
    trader_base: float = 0.3
    trader_variety_bonus: float = 0.2
    captain_base: float = 0.2


DEFAULT_WEIGHTS = ScoringWeights()


def is_early(context: ScoringContext, weights: ScoringWeights = DEFAULT_WEIGHTS) -> bool:
    return context.turn_number <= weights.early_turn_threshold


def plantation_synergy_bonus(
    resource: ResourceType, you: PlayerBoard, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> float:
    bonus = 0.0
    if resource is you.starting_resource:
        if resource in WEAK_STARTING_RESOURCES:
            bonus += weights.weak_match_bonus
        else:
            bonus += weights.strong_match_bonus
    if resource not in you.distinct_resources():
        bonus += weights.diversify_bonus
    return bonus


def plantation_deny_bonus(
    resource: ResourceType, opponent: PlayerBoard, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> float:
    return weights.deny_bonus if resource is opponent.starting_resource else 0.0


def score_plantation_choice(
    resource: ResourceType,
    you: PlayerBoard,
    opponent: PlayerBoard,
    context: ScoringContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    base = resource_value(resource).or_zero()
    synergy = plantation_synergy_bonus(resource, you, weights)
    deny = plantation_deny_bonus(resource, opponent, weights)
    early = weights.plantation_early_bonus if is_early(context, weights) else 0.0
    return base + synergy + deny + early


def quarry_ownership_adjustment(owned: int, weights: ScoringWeights = DEFAULT_WEIGHTS) -> float:
    if owned <= 0:
        return weights.first_quarry_bonus
    if owned == 1:
        return weights.second_quarry_bonus
    return -weights.extra_quarry_penalty * (owned - 2)


def score_quarry_choice(
    you: PlayerBoard,
    opponent: PlayerBoard,
    context: ScoringContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    score = weights.quarry_base
    if is_early(context, weights):
        score += weights.quarry_early_bonus
    return score + quarry_ownership_adjustment(you.discount_tokens, weights)


def production_synergy_bonus(
    spec: BuildingSpec, you: PlayerBoard, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> float:
    if spec.resource is None:
        return 0.0
    held = you.count_extra(spec.resource)
    if held > 0:
        return weights.held_production_bonus + weights.held_production_step * (held - 1)
    if spec.resource is you.starting_resource:
        return weights.starting_production_bonus
    return 0.0


def category_bonus(
    spec: BuildingSpec, you: PlayerBoard, context: ScoringContext, weights: ScoringWeights = DEFAULT_WEIGHTS
) -> float:
    if spec.category is BuildingCategory.MARKET:
        if len(you.distinct_resources()) >= weights.market_min_distinct:
            return weights.market_bonus
    elif spec.category is BuildingCategory.SETTLEMENT:
        if is_early(context, weights):
            return weights.settlement_early_bonus
    return 0.0


def score_building_choice(
    spec: BuildingSpec,
    you: PlayerBoard,
    opponent: PlayerBoard,
    context: ScoringContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    if you.owns(spec.name):
        return NEVER_RECOMMEND
    return (
        spec.base_value
        + production_synergy_bonus(spec, you, weights)
        + category_bonus(spec, you, context, weights)
        + weights.per_quarry_building_bonus * you.discount_tokens
        - weights.cost_penalty * spec.cost
    )


def score_no_building(
    you: PlayerBoard,
    opponent: PlayerBoard,
    context: ScoringContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    return weights.no_building_score


def score_role(
    role: Role,
    you: PlayerBoard,
    opponent: PlayerBoard,
    context: ScoringContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> float:
    """Score a role taken for its own sake (not Settler or Builder)."""
    variety = len(you.distinct_resources()) >= 2
    if role is Role.PROSPECTOR:
        score = weights.prospector_base
        if you.money <= weights.prospector_low_money:
            score += weights.prospector_low_money_bonus
        if is_early(context, weights):
            score -= weights.prospector_early_penalty
        return score
    if role is Role.MAYOR:
        return weights.mayor_base + (weights.mayor_building_bonus if you.owned_buildings else 0.0)
    if role is Role.CRAFTSMAN:
        return weights.craftsman_base + (weights.craftsman_variety_bonus if variety else 0.0)
    if role is Role.TRADER:
        return weights.trader_base + (weights.trader_variety_bonus if variety else 0.0)
    if role is Role.CAPTAIN:
        return weights.captain_base
    return 0.0
