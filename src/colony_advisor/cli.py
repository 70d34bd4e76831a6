"""Text command parsing and a sync facade over the advisor session."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from colony_advisor.game_state import state_to_payload
from colony_advisor.models import Role, Seat
from colony_advisor.planning import ActionKind, Recommendation
from colony_advisor.session import AdvisorSession

_SEAT_WORDS = {"me": Seat.YOU, "you": Seat.YOU, "i": Seat.YOU, "opp": Seat.OPPONENT, "opponent": Seat.OPPONENT}
_MOVE_RE = re.compile(r"^(?P<seat>me|you|i|opp|opponent)\s+(?P<role>[a-z]+)(?:\s+(?P<item>.+))?$", re.IGNORECASE)
_INDEX_RE = re.compile(r"^(?P<verb>take|affirm)\s+(?P<index>\d+)$", re.IGNORECASE)
_RECOMMEND_RE = re.compile(r"^(?:recommend|advise|r)(?:\s+(?P<limit>\d+))?$", re.IGNORECASE)
_TILES_RE = re.compile(r"^(?P<verb>tiles|round)(?:\s+(?P<tiles>.+))?$", re.IGNORECASE)
_MONEY_RE = re.compile(r"^money\s+(?P<seat>me|you|i|opp|opponent)\s+(?P<amount>-?\d+)$", re.IGNORECASE)


class CommandType(str, Enum):
    RECOMMEND = "recommend"
    TAKE = "take"
    AFFIRM = "affirm"
    MOVE = "move"
    TILES = "tiles"
    ROUND = "round"
    MONEY = "money"
    STATUS = "status"
    HISTORY = "history"
    SWAP = "swap"
    RESET = "reset"
    QUIT = "quit"
    UNKNOWN = "unknown"


@dataclass(slots=True)
class MoveCommand:
    type: CommandType
    raw: str
    seat: Seat | None = None
    role: str | None = None
    item: str | None = None
    index: int | None = None
    amount: int | None = None
    tiles: list[str] = field(default_factory=list)


class MoveCommandParser:
    """Turns one line of player input into a :class:`MoveCommand`."""

    _KEYWORDS = {
        "status": CommandType.STATUS,
        "history": CommandType.HISTORY,
        "swap": CommandType.SWAP,
        "reset": CommandType.RESET,
        "quit": CommandType.QUIT,
        "exit": CommandType.QUIT,
        "stop": CommandType.QUIT,
    }

    def parse(self, text: str) -> MoveCommand:
        line = " ".join(text.strip().split())
        lowered = line.lower()

        if lowered in self._KEYWORDS:
            return MoveCommand(type=self._KEYWORDS[lowered], raw=line)

        if match := _RECOMMEND_RE.match(line):
            limit = match.group("limit")
            return MoveCommand(type=CommandType.RECOMMEND, raw=line, index=int(limit) if limit else None)

        if match := _INDEX_RE.match(line):
            verb = CommandType.TAKE if match.group("verb").lower() == "take" else CommandType.AFFIRM
            return MoveCommand(type=verb, raw=line, index=int(match.group("index")))

        if match := _MONEY_RE.match(line):
            return MoveCommand(
                type=CommandType.MONEY,
                raw=line,
                seat=_SEAT_WORDS[match.group("seat").lower()],
                amount=int(match.group("amount")),
            )

        if match := _TILES_RE.match(line):
            verb = CommandType.TILES if match.group("verb").lower() == "tiles" else CommandType.ROUND
            tiles = (match.group("tiles") or "").replace(",", " ").split()
            return MoveCommand(type=verb, raw=line, tiles=tiles)

        if match := _MOVE_RE.match(line):
            return MoveCommand(
                type=CommandType.MOVE,
                raw=line,
                seat=_SEAT_WORDS[match.group("seat").lower()],
                role=match.group("role"),
                item=match.group("item"),
            )

        return MoveCommand(type=CommandType.UNKNOWN, raw=line)


class CliSessionHandler:
    """Sync-friendly facade that executes parsed commands against a session."""

    def __init__(self, session: AdvisorSession, parser: MoveCommandParser | None = None) -> None:
        self._session = session
        self._parser = parser or MoveCommandParser()
        self._last: list[Recommendation] = []

    @property
    def session(self) -> AdvisorSession:
        return self._session

    def handle(self, text: str) -> dict[str, Any]:
        command = self._parser.parse(text)
        handler = getattr(self, f"_handle_{command.type.value}")
        return handler(command)

    def recommend(self, limit: int | None = None) -> list[dict[str, Any]]:
        self._last = self._session.recommend(limit or self._session.settings.display_count)
        return [recommendation.to_payload() for recommendation in self._last]

    def _handle_recommend(self, command: MoveCommand) -> dict[str, Any]:
        return {"whose_turn": self._whose_turn(), "recommendations": self.recommend(command.index)}

    def _handle_take(self, command: MoveCommand) -> dict[str, Any]:
        recommendation = self._pick(command.index)
        if recommendation is None:
            return {"error": f"No recommendation #{command.index}; run 'recommend' first."}
        if recommendation.kind is ActionKind.NO_BUILDING:
            return {"error": "Nothing affordable to build; pick another move or use 'me builder <building>'."}
        outcome = self._session.apply_recommendation(recommendation)
        return self._after_move(outcome.applied, outcome.note)

    def _handle_affirm(self, command: MoveCommand) -> dict[str, Any]:
        recommendation = self._pick(command.index)
        if recommendation is None:
            return {"error": f"No recommendation #{command.index}; run 'recommend' first."}
        if recommendation.kind is ActionKind.NO_BUILDING:
            return {"error": "Nothing affordable to build; pick another move or use 'me builder <building>'."}
        outcome = self._session.affirm(recommendation)
        return self._after_move(outcome.applied, outcome.note)

    def _handle_move(self, command: MoveCommand) -> dict[str, Any]:
        role = Role.parse(command.role)
        if role is None:
            return {"error": f"Unknown role: {command.role}"}
        resource = command.item if role is Role.SETTLER else None
        building = command.item if role is Role.BUILDER else None
        if command.seat is Seat.OPPONENT:
            outcome = self._session.apply_opponent_role(role, resource, building)
        else:
            outcome = self._session.apply_chosen_move(role, resource, building)
        return self._after_move(outcome.applied, outcome.note)

    def _handle_tiles(self, command: MoveCommand) -> dict[str, Any]:
        self._session.set_face_up(command.tiles)
        return self._handle_status(command)

    def _handle_round(self, command: MoveCommand) -> dict[str, Any]:
        self._session.start_round(command.tiles)
        self._last = []
        return self._handle_status(command)

    def _handle_money(self, command: MoveCommand) -> dict[str, Any]:
        self._session.set_money(command.seat, command.amount)
        return self._handle_status(command)

    def _handle_status(self, command: MoveCommand) -> dict[str, Any]:
        counter = self._session.counter
        return {
            "round": counter.round_number,
            "turn_in_round": counter.turn_in_round,
            "whose_turn": self._whose_turn(),
            "turn_order": {seat.value: self._session.turn_order(seat).value for seat in Seat},
            "preferences": [
                {"category": key.category, "plantation": key.resource, "building": key.building, "count": count}
                for key, count in self._session.preferences.items()
            ],
            "state": state_to_payload(self._session.snapshot()),
        }

    def _handle_history(self, command: MoveCommand) -> dict[str, Any]:
        return {
            "history": [
                {
                    "round": record.round_number,
                    "turn": record.turn_in_round,
                    "by": record.seat.value,
                    "role": record.role.value,
                    "note": record.note,
                }
                for record in self._session.history()
            ]
        }

    def _handle_swap(self, command: MoveCommand) -> dict[str, Any]:
        first = self._session.swap_first_player()
        self._last = []
        return {"first_player": first.value, "reset": True}

    def _handle_reset(self, command: MoveCommand) -> dict[str, Any]:
        self._session.reset()
        self._last = []
        return {"reset": True}

    def _handle_quit(self, command: MoveCommand) -> dict[str, Any]:
        return {"quit": True}

    def _handle_unknown(self, command: MoveCommand) -> dict[str, Any]:
        return {"error": f"Unrecognised command: {command.raw!r}"}

    def _pick(self, index: int | None) -> Recommendation | None:
        if index is None or index < 1 or index > len(self._last):
            return None
        return self._last[index - 1]

    def _after_move(self, applied: bool, note: str) -> dict[str, Any]:
        self._last = []
        return {
            "applied": applied,
            "note": note,
            "turn_in_round": self._session.counter.turn_in_round,
            "whose_turn": self._whose_turn(),
        }

    def _whose_turn(self) -> str | None:
        seat = self._session.whose_turn()
        return seat.value if seat is not None else None
