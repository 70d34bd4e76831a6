from colony_advisor.cli import CliSessionHandler, CommandType, MoveCommandParser
from colony_advisor.config import Settings
from colony_advisor.models import ResourceType, Seat
from colony_advisor.session import AdvisorSession


def _handler() -> CliSessionHandler:
    return CliSessionHandler(AdvisorSession(settings=Settings(_env_file=None)))


def test_parser_recognises_commands() -> None:
    parser = MoveCommandParser()

    move = parser.parse("opp builder  Small Market")
    assert move.type is CommandType.MOVE
    assert move.seat is Seat.OPPONENT
    assert move.role == "builder"
    assert move.item == "Small Market"

    assert parser.parse("recommend 3").index == 3
    assert parser.parse("affirm 2").type is CommandType.AFFIRM
    assert parser.parse("round Corn, Sugar Quarry").tiles == ["Corn", "Sugar", "Quarry"]
    assert parser.parse("money opp 4").amount == 4
    assert parser.parse("EXIT").type is CommandType.QUIT
    assert parser.parse("dance").type is CommandType.UNKNOWN


def test_recommend_then_take() -> None:
    handler = _handler()
    handler.handle("tiles Corn Sugar Coffee")

    response = handler.handle("recommend")
    assert response["whose_turn"] == "you"
    assert len(response["recommendations"]) == 5

    taken = handler.handle("take 1")
    assert taken["applied"] is True
    assert taken["whose_turn"] == "opponent"

    assert "error" in handler.handle("take 1")


def test_manual_moves_and_affirm() -> None:
    handler = _handler()
    handler.handle("tiles Corn Sugar Coffee")

    response = handler.handle("opp settler corn")
    assert response["applied"] is True
    assert handler.session.opponent.extra_resources == [ResourceType.CORN]

    handler.handle("recommend 10")
    handler.handle("affirm 1")
    assert len(handler.session.preferences) == 1

    assert handler.handle("me builder")["applied"] is False
    assert "error" in handler.handle("me governor")


def test_status_history_and_reset() -> None:
    handler = _handler()
    handler.handle("me mayor")

    assert handler.handle("history")["history"][0]["role"] == "Mayor"
    assert handler.handle("money me 9")["state"]["you"]["doubloons"] == 9

    status = handler.handle("round Sugar Indigo Tobacco")
    assert status["round"] == 2
    assert status["state"]["roundState"]["faceUpPlantations"] == ["Sugar", "Indigo", "Tobacco"]

    assert handler.handle("swap")["first_player"] == "opponent"
    assert handler.handle("status")["round"] == 1
    assert handler.handle("reset") == {"reset": True}


def test_nothing_to_build_cannot_be_taken_or_affirmed() -> None:
    handler = CliSessionHandler(AdvisorSession(settings=Settings(_env_file=None, starting_money=0)))
    listed = handler.handle("recommend 20")["recommendations"]
    index = next(i for i, rec in enumerate(listed, start=1) if rec["title"].startswith("Take Builder ("))

    assert "error" in handler.handle(f"affirm {index}")
    assert "error" in handler.handle(f"take {index}")
    assert len(handler.session.preferences) == 0
    assert handler.session.counter.turn_in_round == 1


def test_status_shows_turn_order_and_preferences() -> None:
    handler = _handler()
    handler.handle("tiles Corn Sugar Coffee")
    handler.handle("recommend")
    handler.handle("affirm 1")

    status = handler.handle("status")
    assert status["turn_order"] == {"you": "FirstPlayer", "opponent": "SecondPlayer"}
    assert status["preferences"][0]["count"] == 1
