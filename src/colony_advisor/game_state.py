"""Builds :class:`GameState` snapshots from the JSON payload the front-end collects."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from colony_advisor.catalog import canonical_building_name
from colony_advisor.models import GameState, PlayerBoard, ResourceType, Role, RoundState, Seat, TakenRole

_OPPONENT_ALIASES = {"opp", "opponent", "them"}


class StateContractError(ValueError):
    """Raised when a state payload does not have the expected shape."""


class _Payload(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class BoardPayload(_Payload):
    starting_plantation: str = Field(alias="startingPlantation")
    extra_plantations: list[str] = Field(default_factory=list, alias="extraPlantations")
    quarries: int = 0
    buildings: list[str] = Field(default_factory=list)
    doubloons: int = 0

    def to_board(self) -> PlayerBoard:
        starting = ResourceType.parse(self.starting_plantation) or ResourceType.UNKNOWN
        extras = [parsed for parsed in map(ResourceType.parse, self.extra_plantations) if parsed is not None]
        return PlayerBoard(
            starting_resource=starting,
            extra_resources=extras,
            discount_tokens=max(0, self.quarries),
            owned_buildings={canonical_building_name(name) for name in self.buildings if name.strip()},
            money=max(0, self.doubloons),
        )


class OpponentPayload(BoardPayload):
    last_role: str | None = Field(default=None, alias="lastRole")


class TakenRolePayload(_Payload):
    by: str
    role: str


class RoundPayload(_Payload):
    available_roles: list[str] = Field(default_factory=list, alias="availableRoles")
    taken_roles: list[TakenRolePayload] = Field(default_factory=list, alias="takenRoles")
    face_up_plantations: list[str | None] = Field(default_factory=list, alias="faceUpPlantations")
    quarries_remaining: int = Field(default=0, alias="quarriesRemaining")

    def to_round_state(self) -> RoundState:
        roles: list[Role] = []
        for raw in self.available_roles:
            role = Role.parse(raw)
            if role is not None and role not in roles:
                roles.append(role)

        taken: list[TakenRole] = []
        for entry in self.taken_roles:
            role = Role.parse(entry.role)
            if role is None:
                continue
            seat = Seat.OPPONENT if entry.by.strip().lower() in _OPPONENT_ALIASES else Seat.YOU
            taken.append(TakenRole(by=seat, role=role))

        return RoundState(
            available_roles=roles,
            face_up_resources=[ResourceType.parse(slot) for slot in self.face_up_plantations],
            discount_tokens_remaining=max(0, self.quarries_remaining),
            taken_roles=taken,
        )


class StatePayload(_Payload):
    you: BoardPayload
    opponent: OpponentPayload
    round_state: RoundPayload = Field(alias="roundState")
    turn_number: int = Field(default=1, alias="turnNumber")

    def to_game_state(self) -> GameState:
        return GameState(
            you=self.you.to_board(),
            opponent=self.opponent.to_board(),
            round_state=self.round_state.to_round_state(),
            turn_number=self.turn_number,
            opponent_last_role=Role.parse(self.opponent.last_role) if self.opponent.last_role else None,
        )


def parse_state_payload(payload: dict[str, Any]) -> GameState:
    try:
        return StatePayload.model_validate(payload).to_game_state()
    except ValidationError as exc:
        raise StateContractError(f"Invalid game state payload: {exc}") from exc


def load_state_file(path: str | Path) -> GameState:
    target = Path(path).expanduser()
    if not target.exists():
        raise StateContractError(f"State file does not exist: {target}")
    try:
        text = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise StateContractError(f"State file cannot be read as UTF-8 text: {target}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise StateContractError(f"State file is not valid JSON: {target}") from exc
    if not isinstance(payload, dict):
        raise StateContractError("State file must contain a JSON object")
    return parse_state_payload(payload)


def _board_payload(board: PlayerBoard) -> dict[str, Any]:
    return {
        "startingPlantation": board.starting_resource.value,
        "extraPlantations": [resource.value for resource in board.extra_resources],
        "quarries": board.discount_tokens,
        "buildings": sorted(board.owned_buildings),
        "doubloons": board.money,
    }


def state_to_payload(state: GameState) -> dict[str, Any]:
    """Inverse of :func:`parse_state_payload`, used for status output."""
    round_state = state.round_state
    return {
        "you": _board_payload(state.you),
        "opponent": {
            **_board_payload(state.opponent),
            "lastRole": state.opponent_last_role.value if state.opponent_last_role else None,
        },
        "roundState": {
            "availableRoles": [role.value for role in round_state.available_roles],
            "takenRoles": [
                {"by": "opp" if taken.by is Seat.OPPONENT else "you", "role": taken.role.value}
                for taken in round_state.taken_roles
            ],
            "faceUpPlantations": [slot.value if slot else "None" for slot in round_state.face_up_resources],
            "quarriesRemaining": round_state.discount_tokens_remaining,
        },
        "turnNumber": state.turn_number,
    }
