"""Session orchestration: board tracking, turn order and advice for one game."""

from __future__ import annotations

import copy
import logging
from collections import deque
from dataclasses import dataclass
from typing import Iterable

from colony_advisor.config import Settings
from colony_advisor.models import (
    ALL_ROLES,
    GameState,
    PlayerBoard,
    ResourceType,
    Role,
    RoundState,
    Seat,
    TurnCounter,
    TurnOrder,
)
from colony_advisor.planning import HeuristicRecommendationEngine, Recommendation, RecommendationEngine
from colony_advisor.preferences import PreferenceKey, PreferenceMemory
from colony_advisor.telemetry import Telemetry
from colony_advisor.tracker import MoveOutcome, apply_move
from colony_advisor.turns import acting_seat, turn_order_of


@dataclass(slots=True)
class MoveRecord:
    round_number: int
    turn_in_round: int
    seat: Seat
    role: Role
    resource: ResourceType | None
    building: str | None
    note: str


class AdvisorSession:
    """Owns every piece of mutable state for one played-through game.

    Each public method is one read-modify-write cycle; nothing here is shared
    between sessions.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        engine: RecommendationEngine | None = None,
        telemetry: Telemetry | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._engine = engine or HeuristicRecommendationEngine(preference_weight=self._settings.preference_weight)
        self._telemetry = telemetry
        self._logger = logger or logging.getLogger("colony_advisor.session")
        self._first_player = Seat.YOU if self._settings.you_go_first else Seat.OPPONENT
        self._preferences = PreferenceMemory()
        self._history: deque[MoveRecord] = deque(maxlen=self._settings.history_limit)
        self._boards: dict[Seat, PlayerBoard] = {}
        self._round = RoundState()
        self._counter = TurnCounter()
        self._opponent_last_role: Role | None = None
        self._initialise()

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def you(self) -> PlayerBoard:
        return self._boards[Seat.YOU]

    @property
    def opponent(self) -> PlayerBoard:
        return self._boards[Seat.OPPONENT]

    @property
    def round_state(self) -> RoundState:
        return self._round

    @property
    def counter(self) -> TurnCounter:
        return self._counter

    @property
    def preferences(self) -> PreferenceMemory:
        return self._preferences

    @property
    def first_player(self) -> Seat:
        return self._first_player

    def board(self, seat: Seat) -> PlayerBoard:
        return self._boards[seat]

    def turn_order(self, seat: Seat) -> TurnOrder:
        return turn_order_of(seat, self._first_player)

    def whose_turn(self) -> Seat | None:
        """Seat due to pick next, or ``None`` once all six picks are made."""
        return acting_seat(self._first_player, self._counter.turn_in_round)

    def snapshot(self) -> GameState:
        """Detached copy of the current state, safe to hand to callers."""
        return GameState(
            you=copy.deepcopy(self.you),
            opponent=copy.deepcopy(self.opponent),
            round_state=copy.deepcopy(self._round),
            turn_number=self._counter.turn_in_round,
            opponent_last_role=self._opponent_last_role,
        )

    def recommend(self, limit: int | None = None) -> list[Recommendation]:
        if self._counter.round_complete:
            self._logger.info("round_complete_no_advice", extra={"round_number": self._counter.round_number})
            return []
        recommendations = self._engine.suggest(self.snapshot(), self._preferences)
        return recommendations if limit is None else recommendations[:limit]

    def apply_chosen_move(
        self,
        role: Role | str,
        resource: ResourceType | str | None = None,
        building: str | None = None,
    ) -> MoveOutcome:
        return self._apply(Seat.YOU, role, resource, building)

    def apply_opponent_role(
        self,
        role: Role | str,
        gain: ResourceType | str | None = None,
        building: str | None = None,
    ) -> MoveOutcome:
        outcome = self._apply(Seat.OPPONENT, role, gain, building)
        if outcome.applied:
            self._opponent_last_role = outcome.role
        return outcome

    def apply_recommendation(self, recommendation: Recommendation) -> MoveOutcome:
        return self.apply_chosen_move(recommendation.role, recommendation.resource, recommendation.building)

    def record_affirmed_preference(
        self,
        role: Role | str,
        resource: ResourceType | str | None = None,
        building: str | None = None,
    ) -> int:
        key = PreferenceKey.for_move(role, resource, building)
        count = self._preferences.record(key)
        self._logger.info(
            "preference_affirmed",
            extra={"category": key.category, "resource": key.resource, "building": key.building, "count": count},
        )
        return count

    def affirm(self, recommendation: Recommendation) -> MoveOutcome:
        """Play ``recommendation`` and, if it went through, remember it as the player's own choice."""
        outcome = self.apply_recommendation(recommendation)
        if outcome.applied:
            self.record_affirmed_preference(recommendation.role, recommendation.resource, recommendation.building)
        return outcome

    def set_face_up(self, tiles: Iterable[ResourceType | str | None]) -> None:
        self._round.face_up_resources = [ResourceType.parse(tile) for tile in tiles]

    def set_money(self, seat: Seat, amount: int) -> None:
        self._boards[seat].money = max(0, amount)

    def start_round(
        self,
        tiles: Iterable[ResourceType | str | None],
        roles: Iterable[Role | str] | None = None,
    ) -> None:
        """Begin the next round: fresh tiles, every role open again, turn 1."""
        self._counter.round_number += 1
        self._counter.turn_in_round = 1
        self._round.taken_roles.clear()
        self._round.available_roles = self._parse_roles(roles)
        self.set_face_up(tiles)
        self._opponent_last_role = None
        self._emit("round_started", {"round_number": self._counter.round_number})

    def swap_first_player(self) -> Seat:
        self._first_player = self._first_player.other
        self.reset()
        return self._first_player

    def reset(self) -> None:
        self._initialise()
        self._emit("session_reset", {"first_player": self._first_player.value})

    def history(self, limit: int = 20) -> list[MoveRecord]:
        return list(self._history)[:limit]

    def _initialise(self) -> None:
        settings = self._settings
        self._boards = {
            Seat.YOU: self._fresh_board(settings.you_starting_resource),
            Seat.OPPONENT: self._fresh_board(settings.opponent_starting_resource),
        }
        self._round = RoundState(
            available_roles=list(ALL_ROLES),
            face_up_resources=[None] * settings.face_up_slots,
            discount_tokens_remaining=settings.quarry_pool,
        )
        self._counter = TurnCounter()
        self._opponent_last_role = None
        self._preferences.clear()
        self._history.clear()

    def _fresh_board(self, starting: str) -> PlayerBoard:
        resource = ResourceType.parse(starting) or ResourceType.UNKNOWN
        return PlayerBoard(starting_resource=resource, money=self._settings.starting_money)

    @staticmethod
    def _parse_roles(roles: Iterable[Role | str] | None) -> list[Role]:
        if roles is None:
            return list(ALL_ROLES)
        parsed: list[Role] = []
        for raw in roles:
            role = Role.parse(raw)
            if role is not None and role not in parsed:
                parsed.append(role)
        return parsed

    def _apply(
        self,
        seat: Seat,
        role: Role | str,
        resource: ResourceType | str | None,
        building: str | None,
    ) -> MoveOutcome:
        turn_before = self._counter.turn_in_round
        outcome = apply_move(
            self._boards[seat],
            self._round,
            self._counter,
            seat=seat,
            role=role,
            resource=resource,
            building=building,
            prospector_income=self._settings.prospector_income,
        )
        if not outcome.applied:
            self._logger.warning("move_ignored", extra={"seat": seat.value, "role": str(role), "note": outcome.note})
            return outcome

        self._history.appendleft(
            MoveRecord(
                round_number=self._counter.round_number,
                turn_in_round=turn_before,
                seat=seat,
                role=outcome.role,
                resource=outcome.resource,
                building=outcome.building,
                note=outcome.note,
            )
        )
        self._emit(
            "move_applied",
            {
                "seat": seat.value,
                "role": outcome.role.value,
                "note": outcome.note,
                "turn_in_round": self._counter.turn_in_round,
            },
        )
        return outcome

    def _emit(self, event_name: str, payload: dict) -> None:
        self._logger.debug(event_name, extra=payload)
        if self._telemetry is not None:
            self._telemetry.emit(event_name, payload)
