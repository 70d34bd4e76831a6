from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

_EMPTY_SLOT_NAMES = {"", "none", "empty", "-"}


class ResourceType(str, Enum):
    CORN = "Corn"
    INDIGO = "Indigo"
    SUGAR = "Sugar"
    TOBACCO = "Tobacco"
    COFFEE = "Coffee"
    QUARRY = "Quarry"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, raw: ResourceType | str | None) -> ResourceType | None:
        """Resolve a tile name; ``None`` for an empty slot, ``UNKNOWN`` for anything unrecognised."""
        if raw is None or isinstance(raw, ResourceType):
            return raw
        text = raw.strip().lower()
        if text in _EMPTY_SLOT_NAMES:
            return None
        for member in cls:
            if member.value.lower() == text:
                return member
        return cls.UNKNOWN


class Role(str, Enum):
    SETTLER = "Settler"
    BUILDER = "Builder"
    PROSPECTOR = "Prospector"
    MAYOR = "Mayor"
    CRAFTSMAN = "Craftsman"
    TRADER = "Trader"
    CAPTAIN = "Captain"

    @classmethod
    def parse(cls, raw: Role | str | None) -> Role | None:
        if raw is None or isinstance(raw, Role):
            return raw
        text = raw.strip().lower()
        for member in cls:
            if member.value.lower() == text:
                return member
        return None


class Seat(str, Enum):
    YOU = "you"
    OPPONENT = "opponent"

    @property
    def other(self) -> Seat:
        return Seat.OPPONENT if self is Seat.YOU else Seat.YOU


class TurnOrder(str, Enum):
    FIRST_PLAYER = "FirstPlayer"
    SECOND_PLAYER = "SecondPlayer"


ALL_ROLES: tuple[Role, ...] = tuple(Role)


@dataclass(slots=True)
class PlayerBoard:
    starting_resource: ResourceType
    extra_resources: list[ResourceType] = field(default_factory=list)
    discount_tokens: int = 0
    owned_buildings: set[str] = field(default_factory=set)
    money: int = 0

    def holdings(self) -> list[ResourceType]:
        return [self.starting_resource, *self.extra_resources]

    def distinct_resources(self) -> set[ResourceType]:
        return set(self.holdings())

    def count_extra(self, resource: ResourceType) -> int:
        return sum(1 for held in self.extra_resources if held is resource)

    def owns(self, building: str) -> bool:
        return building in self.owned_buildings


@dataclass(slots=True)
class TakenRole:
    by: Seat
    role: Role


@dataclass(slots=True)
class RoundState:
    available_roles: list[Role] = field(default_factory=lambda: list(ALL_ROLES))
    face_up_resources: list[ResourceType | None] = field(default_factory=list)
    discount_tokens_remaining: int = 0
    taken_roles: list[TakenRole] = field(default_factory=list)

    def is_available(self, role: Role) -> bool:
        return role in self.available_roles


ROUND_COMPLETE = 7


@dataclass(slots=True)
class TurnCounter:
    turn_in_round: int = 1
    round_number: int = 1

    @property
    def round_complete(self) -> bool:
        return self.turn_in_round >= ROUND_COMPLETE


@dataclass(slots=True)
class GameState:
    """Everything the recommendation engine reads for one decision point."""

    you: PlayerBoard
    opponent: PlayerBoard
    round_state: RoundState
    turn_number: int = 1
    opponent_last_role: Role | None = None
