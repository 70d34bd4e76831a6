"""Applies a chosen role to a player's board and the shared round state."""

from __future__ import annotations

from dataclasses import dataclass

from colony_advisor.catalog import building_cost, canonical_building_name
from colony_advisor.models import PlayerBoard, ResourceType, Role, RoundState, Seat, TakenRole, TurnCounter
from colony_advisor.turns import advance


@dataclass(slots=True)
class MoveOutcome:
    applied: bool
    note: str
    seat: Seat
    role: Role | None = None
    resource: ResourceType | None = None
    building: str | None = None


def _claim_resource(board: PlayerBoard, round_state: RoundState, resource: ResourceType) -> str:
    if resource is ResourceType.QUARRY:
        board.discount_tokens += 1
        round_state.discount_tokens_remaining = max(0, round_state.discount_tokens_remaining - 1)
        return "took a quarry"

    board.extra_resources.append(resource)
    slots = round_state.face_up_resources
    for index, slot in enumerate(slots):
        if slot is resource:
            slots[index] = None
            return f"took {resource.value} from the face-up tiles"
    return f"gained {resource.value} (not among the face-up tiles)"


def _purchase_building(board: PlayerBoard, building: str) -> str:
    if board.owns(building):
        return f"already owns {building}"
    cost = int(building_cost(building).or_zero())
    board.owned_buildings.add(building)
    board.money = max(0, board.money - cost)
    return f"bought {building} for {cost}"


def apply_move(
    board: PlayerBoard,
    round_state: RoundState,
    counter: TurnCounter,
    *,
    seat: Seat,
    role: Role | str | None,
    resource: ResourceType | str | None = None,
    building: str | None = None,
    prospector_income: int = 1,
) -> MoveOutcome:
    """Apply one pick for ``seat``.

    Moves missing the detail their role needs leave every structure untouched and
    come back with ``applied=False``. Legality (role still open, tile still face up)
    is the caller's business.
    """
    parsed_role = Role.parse(role)
    if parsed_role is None:
        return MoveOutcome(applied=False, note=f"unknown role: {role!r}", seat=seat)

    parsed_resource = ResourceType.parse(resource)
    building_name = canonical_building_name(building) if building and building.strip() else None

    if parsed_role is Role.SETTLER and parsed_resource is None:
        return MoveOutcome(applied=False, note="Settler needs a plantation or quarry", seat=seat, role=parsed_role)
    if parsed_role is Role.BUILDER and building_name is None:
        return MoveOutcome(applied=False, note="Builder needs a building", seat=seat, role=parsed_role)

    if parsed_role is Role.SETTLER:
        note = _claim_resource(board, round_state, parsed_resource)
    elif parsed_role is Role.BUILDER:
        note = _purchase_building(board, building_name)
    elif parsed_role is Role.PROSPECTOR:
        board.money += prospector_income
        note = f"gained {prospector_income} doubloon{'s' if prospector_income != 1 else ''}"
    else:
        note = f"took {parsed_role.value}"

    if parsed_role in round_state.available_roles:
        round_state.available_roles.remove(parsed_role)
    round_state.taken_roles.append(TakenRole(by=seat, role=parsed_role))
    advance(counter)

    return MoveOutcome(
        applied=True,
        note=note,
        seat=seat,
        role=parsed_role,
        resource=parsed_resource if parsed_role is Role.SETTLER else None,
        building=building_name if parsed_role is Role.BUILDER else None,
    )
