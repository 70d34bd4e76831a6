"""Plain-language rationale paired with each scoring function.

Each ``explain_*`` takes the same inputs as its ``score_*`` counterpart and adds
one clause per bonus that the score applied, so the text never contradicts the
number next to it.
"""

from __future__ import annotations

from colony_advisor.catalog import WEAK_STARTING_RESOURCES, BuildingCategory, BuildingSpec
from colony_advisor.models import PlayerBoard, ResourceType, Role

from .scoring import (
    DEFAULT_WEIGHTS,
    ScoringContext,
    ScoringWeights,
    category_bonus,
    is_early,
    production_synergy_bonus,
)

_ROLE_OPENERS: dict[Role, str] = {
    Role.MAYOR: "Mayor can help place colonists, but very early you usually have few buildings or plantations to staff.",
    Role.CRAFTSMAN: "Craftsman is rarely strong in the very first round before a bigger production engine is online.",
    Role.TRADER: "Trader tends to be low-impact in the opening when there are few goods to sell.",
    Role.CAPTAIN: (
        "Captain is almost never ideal this early; shipments are limited and you don't want to "
        "prematurely clear goods."
    ),
}


def explain_plantation_choice(
    resource: ResourceType,
    you: PlayerBoard,
    opponent: PlayerBoard,
    context: ScoringContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> str:
    parts: list[str] = []

    if resource is ResourceType.CORN:
        parts.append(
            "Corn is extremely strong early because it produces without a building and gives fast "
            "shipping pressure in 2-player."
        )
    elif resource is ResourceType.INDIGO:
        parts.append("Indigo is solid early and sets up for cheap early production buildings.")
    elif resource is ResourceType.UNKNOWN:
        parts.append(
            "This tile name was not recognised and is not in the value table, so it is scored on board fit alone."
        )
    else:
        parts.append(f"{resource.value} is a higher-value export that pays off once production buildings are online.")

    if resource is you.starting_resource:
        if resource in WEAK_STARTING_RESOURCES:
            parts.append(
                "It matches your starting plantation, though a second copy of this crop adds less than "
                "doubling a stronger one."
            )
        else:
            parts.append("It matches your starting plantation, reinforcing your main production line.")
    if resource not in you.distinct_resources():
        parts.append("It diversifies your plantations, giving you more flexibility later.")
    if resource is opponent.starting_resource:
        parts.append("It also denies the opponent another copy of their starting crop.")
    if is_early(context, weights):
        parts.append("Early picks in the round shape your engine the most.")

    return " ".join(parts)


def explain_quarry_choice(
    you: PlayerBoard,
    opponent: PlayerBoard,
    context: ScoringContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> str:
    parts = ["A quarry lowers the cost of every building you buy for the rest of the game."]
    if is_early(context, weights):
        parts.append("Taking it early means more purchases benefit from the discount.")

    owned = you.discount_tokens
    if owned <= 0:
        parts.append("Your first quarry is the most valuable one.")
    elif owned == 1:
        parts.append("A second quarry still helps, but less than the first.")
    elif owned > 2:
        parts.append(f"You already hold {owned} quarries, so each extra one adds less.")
    return " ".join(parts)


def explain_building_choice(
    spec: BuildingSpec,
    you: PlayerBoard,
    opponent: PlayerBoard,
    context: ScoringContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> str:
    if you.owns(spec.name):
        return f"You already own {spec.name}."

    parts = [f"{spec.name} costs {spec.cost} doubloon{'s' if spec.cost != 1 else ''}."]

    if production_synergy_bonus(spec, you, weights) > 0 and spec.resource is not None:
        held = you.count_extra(spec.resource)
        if held > 0:
            parts.append(
                f"You already grow {spec.resource.value} ({held} extra plantation{'s' if held != 1 else ''}), "
                "so it starts producing right away."
            )
        else:
            parts.append(f"It processes {spec.resource.value}, your starting crop.")

    if category_bonus(spec, you, context, weights) > 0:
        if spec.category is BuildingCategory.MARKET:
            parts.append("With several crop types on your board you will have goods worth selling.")
        elif spec.category is BuildingCategory.SETTLEMENT:
            parts.append("Settlement boosts pay off most when bought early in the game.")

    if you.discount_tokens > 0:
        parts.append(f"Your {you.discount_tokens} quarr{'ies' if you.discount_tokens != 1 else 'y'} make building cheaper.")

    if spec.cost > 0:
        parts.append("The price is weighed against other uses for your money.")
    return " ".join(parts)


def explain_no_building(
    you: PlayerBoard,
    opponent: PlayerBoard,
    context: ScoringContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> str:
    return (
        f"With {you.money} doubloon{'s' if you.money != 1 else ''} there is no useful building you can afford; "
        "Builder would mostly deny the opponent a discount."
    )


def explain_role(
    role: Role,
    you: PlayerBoard,
    opponent: PlayerBoard,
    context: ScoringContext,
    weights: ScoringWeights = DEFAULT_WEIGHTS,
) -> str:
    variety = len(you.distinct_resources()) >= 2

    if role is Role.PROSPECTOR:
        bits = ["Prospector gives you an extra doubloon, improving early buying power for key buildings."]
        if you.money <= weights.prospector_low_money:
            bits.append("Because your money is low, the extra coin is especially attractive.")
        if is_early(context, weights):
            bits.append("This early in the round the best plantations are still on offer, so money can usually wait.")
        return " ".join(bits)

    opener = _ROLE_OPENERS.get(role)
    if opener is None:
        return "This role is usually lower priority in the opening compared to Settler and Prospector."

    bits = [opener]
    if role is Role.MAYOR and you.owned_buildings:
        bits.append("You already own buildings that colonists could staff.")
    if role in (Role.CRAFTSMAN, Role.TRADER) and variety:
        bits.append("You have more than one crop type, so there is something to produce and sell.")
    return " ".join(bits)


def explain_preference(count: int) -> str:
    return f"You have picked this move yourself {count} time{'s' if count != 1 else ''} this session."
