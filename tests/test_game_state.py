import json
from pathlib import Path

import pytest

from colony_advisor.game_state import StateContractError, load_state_file, parse_state_payload, state_to_payload
from colony_advisor.models import ResourceType, Role, Seat

SAMPLE = {
    "you": {"startingPlantation": "Indigo", "extraPlantations": [], "buildings": [], "doubloons": 3},
    "opponent": {
        "startingPlantation": "Corn",
        "extraPlantations": ["Sugar"],
        "buildings": ["small market"],
        "doubloons": 2,
        "lastRole": "Prospector",
    },
    "roundState": {
        "availableRoles": ["Settler", "Builder", "Mayor", "Mayor", "Governor"],
        "takenRoles": [{"by": "opp", "role": "Prospector"}],
        "faceUpPlantations": ["Corn", "None", "Coffee"],
        "quarriesRemaining": 4,
    },
    "turnNumber": 2,
}


def test_parses_front_end_payload() -> None:
    state = parse_state_payload(SAMPLE)

    assert state.you.starting_resource is ResourceType.INDIGO
    assert state.opponent.extra_resources == [ResourceType.SUGAR]
    assert state.opponent.owned_buildings == {"Small Market"}
    assert state.opponent_last_role is Role.PROSPECTOR
    assert state.round_state.available_roles == [Role.SETTLER, Role.BUILDER, Role.MAYOR]
    assert state.round_state.face_up_resources == [ResourceType.CORN, None, ResourceType.COFFEE]
    assert state.round_state.taken_roles[0].by is Seat.OPPONENT
    assert state.round_state.discount_tokens_remaining == 4
    assert state.turn_number == 2


def test_missing_optional_fields_take_defaults() -> None:
    state = parse_state_payload(
        {
            "you": {"startingPlantation": "Indigo", "doubloons": -2},
            "opponent": {"startingPlantation": "Corn"},
            "roundState": {"availableRoles": ["Settler"]},
        }
    )

    assert state.you.money == 0
    assert state.you.discount_tokens == 0
    assert state.round_state.face_up_resources == []
    assert state.turn_number == 1


def test_invalid_payload_raises_contract_error() -> None:
    with pytest.raises(StateContractError):
        parse_state_payload({"you": {}, "opponent": {"startingPlantation": "Corn"}, "roundState": {}})


def test_payload_round_trip() -> None:
    state = parse_state_payload(SAMPLE)
    assert parse_state_payload(state_to_payload(state)) == state


def test_load_state_file(tmp_path: Path) -> None:
    path = tmp_path / "state.json"
    path.write_text(json.dumps(SAMPLE), encoding="utf-8")
    assert load_state_file(path).turn_number == 2

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(StateContractError):
        load_state_file(broken)

    with pytest.raises(StateContractError, match="does not exist"):
        load_state_file(tmp_path / "missing.json")

    not_utf8 = tmp_path / "binary.json"
    not_utf8.write_bytes(b"\xff\xfe{}")
    with pytest.raises(StateContractError, match="UTF-8"):
        load_state_file(not_utf8)

    with pytest.raises(StateContractError):
        load_state_file(tmp_path)
