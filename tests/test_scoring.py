import pytest

from colony_advisor.catalog import RESOURCE_BASE_VALUES, building_spec
from colony_advisor.models import PlayerBoard, ResourceType, Role
from colony_advisor.planning.scoring import (
    NEVER_RECOMMEND,
    ScoringContext,
    score_building_choice,
    score_no_building,
    score_plantation_choice,
    score_quarry_choice,
    score_role,
)

CORN = ResourceType.CORN
INDIGO = ResourceType.INDIGO
SUGAR = ResourceType.SUGAR


def _board(start=INDIGO, extras=(), tokens=0, buildings=(), money=3) -> PlayerBoard:
    return PlayerBoard(
        starting_resource=start,
        extra_resources=list(extras),
        discount_tokens=tokens,
        owned_buildings=set(buildings),
        money=money,
    )


def _ctx(turn: int) -> ScoringContext:
    return ScoringContext(turn_number=turn)


@pytest.mark.parametrize(
    ("resource", "you", "opponent", "turn", "expected"),
    [
        (CORN, _board(start=CORN), _board(start=INDIGO), 1, 3.0 + 0.8 + 0.5),
        (INDIGO, _board(start=INDIGO), _board(start=CORN), 3, 2.6 + 0.5),
        (SUGAR, _board(start=INDIGO), _board(start=CORN), 1, 2.2 + 0.4 + 0.5),
        (CORN, _board(start=INDIGO), _board(start=CORN), 5, 3.0 + 0.4 + 0.4),
        (SUGAR, _board(start=INDIGO, extras=[SUGAR]), _board(start=CORN), 4, 2.2),
    ],
)
def test_plantation_score_matches_formula(resource, you, opponent, turn, expected) -> None:
    assert score_plantation_choice(resource, you, opponent, _ctx(turn)) == pytest.approx(expected)


@pytest.mark.parametrize("resource", list(RESOURCE_BASE_VALUES))
def test_plantation_score_never_below_base_value(resource) -> None:
    you = _board(start=ResourceType.COFFEE, extras=[resource])
    opponent = _board(start=ResourceType.TOBACCO)
    score = score_plantation_choice(resource, you, opponent, _ctx(6))
    assert score >= RESOURCE_BASE_VALUES[resource]


def test_weak_starting_match_scores_less_than_strong_match() -> None:
    weak = score_plantation_choice(INDIGO, _board(start=INDIGO), _board(start=SUGAR), _ctx(4))
    strong = score_plantation_choice(CORN, _board(start=CORN), _board(start=SUGAR), _ctx(4))
    assert weak - 2.6 == pytest.approx(0.5)
    assert strong - 3.0 == pytest.approx(0.8)


def test_untabulated_resource_is_scored_on_fit_alone() -> None:
    score = score_plantation_choice(ResourceType.UNKNOWN, _board(), _board(start=CORN), _ctx(4))
    assert score == pytest.approx(0.4)


def test_scenario_a_matching_corn_beats_denying_indigo() -> None:
    you = _board(start=CORN)
    opponent = _board(start=INDIGO)
    corn = score_plantation_choice(CORN, you, opponent, _ctx(1))
    indigo = score_plantation_choice(INDIGO, you, opponent, _ctx(1))
    assert corn > indigo


def test_scenario_b_first_quarry_early_beats_third_quarry_late() -> None:
    opponent = _board(start=CORN)
    fresh = score_quarry_choice(_board(tokens=0), opponent, _ctx(2))
    stacked = score_quarry_choice(_board(tokens=2), opponent, _ctx(5))
    assert fresh == pytest.approx(3.2 + 0.5 + 0.8)
    assert stacked == pytest.approx(3.2)
    assert fresh > stacked


def test_quarry_value_strictly_decreases_with_each_token() -> None:
    opponent = _board(start=CORN)
    scores = [score_quarry_choice(_board(tokens=owned), opponent, _ctx(5)) for owned in range(6)]
    assert scores == sorted(scores, reverse=True)
    assert len(set(scores)) == len(scores)


def test_owned_building_is_never_recommended() -> None:
    spec = building_spec("Small Market")
    you = _board(buildings=["Small Market"], money=10)
    assert score_building_choice(spec, you, _board(start=CORN), _ctx(3)) == NEVER_RECOMMEND


@pytest.mark.parametrize(
    ("name", "you", "turn", "expected"),
    [
        ("Small Indigo Plant", _board(start=INDIGO), 3, 2.0 + 0.6 - 0.15),
        ("Small Indigo Plant", _board(start=INDIGO, extras=[INDIGO, INDIGO]), 3, 2.0 + 1.0 + 0.3 - 0.15),
        ("Small Sugar Mill", _board(start=INDIGO), 3, 1.8 - 0.3),
        ("Small Market", _board(start=INDIGO, extras=[CORN], tokens=1), 3, 1.6 + 0.7 + 0.25 - 0.15),
        ("Small Market", _board(start=INDIGO), 3, 1.6 - 0.15),
        ("Hacienda", _board(start=INDIGO), 1, 1.4 + 0.5 - 0.3),
        ("Hacienda", _board(start=INDIGO), 3, 1.4 - 0.3),
    ],
)
def test_building_score_matches_formula(name, you, turn, expected) -> None:
    spec = building_spec(name)
    assert score_building_choice(spec, you, _board(start=CORN), _ctx(turn)) == pytest.approx(expected)


def test_no_building_score_is_low() -> None:
    assert score_no_building(_board(money=0), _board(start=CORN), _ctx(1)) == pytest.approx(0.1)


@pytest.mark.parametrize(
    ("role", "you", "turn", "expected"),
    [
        (Role.PROSPECTOR, _board(money=2), 1, 2.0 + 0.7 - 0.2),
        (Role.PROSPECTOR, _board(money=5), 3, 2.0),
        (Role.MAYOR, _board(), 3, 0.6),
        (Role.MAYOR, _board(buildings=["Hacienda"]), 3, 1.0),
        (Role.CRAFTSMAN, _board(), 3, 0.4),
        (Role.CRAFTSMAN, _board(extras=[CORN]), 3, 0.7),
        (Role.TRADER, _board(), 3, 0.3),
        (Role.TRADER, _board(extras=[SUGAR]), 3, 0.5),
        (Role.CAPTAIN, _board(extras=[SUGAR]), 3, 0.2),
    ],
)
def test_role_scores(role, you, turn, expected) -> None:
    assert score_role(role, you, _board(start=CORN), _ctx(turn)) == pytest.approx(expected)
