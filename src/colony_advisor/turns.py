"""Turn order within a round: who picks next and how the counter advances."""

from __future__ import annotations

from colony_advisor.models import ROUND_COMPLETE, Seat, TurnCounter, TurnOrder


def turn_order_of(seat: Seat, first_player: Seat) -> TurnOrder:
    return TurnOrder.FIRST_PLAYER if seat is first_player else TurnOrder.SECOND_PLAYER


def order_for_turn(turn_in_round: int) -> TurnOrder | None:
    """First player owns turns 1, 3 and 5; second player owns 2, 4 and 6."""
    if turn_in_round < 1 or turn_in_round >= ROUND_COMPLETE:
        return None
    return TurnOrder.FIRST_PLAYER if turn_in_round % 2 == 1 else TurnOrder.SECOND_PLAYER


def acting_seat(first_player: Seat, turn_in_round: int) -> Seat | None:
    order = order_for_turn(turn_in_round)
    if order is None:
        return None
    return first_player if order is TurnOrder.FIRST_PLAYER else first_player.other


def advance(counter: TurnCounter) -> TurnCounter:
    """Move to the next pick; stays on the complete sentinel once reached."""
    counter.turn_in_round = min(counter.turn_in_round + 1, ROUND_COMPLETE)
    return counter
