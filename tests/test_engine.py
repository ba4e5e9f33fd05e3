import pytest

from conftest import DEFAULT_RATINGS, build_snapshot
from swisspairing.config import EngineConfig
from swisspairing.engine import SwissPairingEngine
from swisspairing.exceptions import (
    DuplicateResultException,
    InsufficientPlayersException,
    InvalidResultException,
    InvalidRoundException,
    ResultNotFoundException,
    RoundNotReadyException,
    TournamentCompleteException,
)
from swisspairing.models.tournament import (
    FloatDirection,
    GameResult,
    PairingGap,
    RegistrationStatus,
    RoundState,
)

FOUR = {k: DEFAULT_RATINGS[k] for k in (1, 2, 3, 4)}
FIVE = {k: DEFAULT_RATINGS[k] for k in (1, 2, 3, 4, 5)}


# ========== generate_next_round ==========


def test_first_round(engine):
    new_round = engine.generate_next_round(build_snapshot(FOUR))
    assert new_round.round_number == 1
    assert new_round.pairs == [(1, 3), (2, 4)]
    assert [b.board_number for b in new_round.boards] == [1, 2]
    assert new_round.gaps == ()
    assert new_round.floaters == {}


def test_first_round_alternating_colours():
    engine = SwissPairingEngine(EngineConfig(alternate_first_round_colors=True))
    new_round = engine.generate_next_round(build_snapshot(FOUR))
    assert new_round.pairs == [(1, 3), (4, 2)]


def test_second_round_example(engine):
    snapshot = build_snapshot(FOUR, rounds=[[(1, 3, "1-0"), (2, 4, "1-0")]])
    new_round = engine.generate_next_round(snapshot)
    assert new_round.round_number == 2
    # 1 and 2 both had white; the higher rated player alternates
    assert new_round.pairs == [(2, 1), (3, 4)]


def test_odd_number_of_players_gets_a_bye(engine):
    new_round = engine.generate_next_round(build_snapshot(FIVE))
    assert new_round.bye == PairingGap(
        registration_id=5, round_number=1, score=1.0, is_bye=True
    )
    assert len(new_round.boards) == 2


def test_bye_score_is_configurable():
    engine = SwissPairingEngine(EngineConfig(bye_score=0.5))
    assert engine.generate_next_round(build_snapshot(FIVE)).bye.score == 0.5


def test_round_not_ready_lists_pending_boards(engine):
    snapshot = build_snapshot(FOUR, rounds=[[(1, 3, "1-0"), (2, 4, None)]])
    with pytest.raises(RoundNotReadyException) as exc_info:
        engine.generate_next_round(snapshot)
    assert exc_info.value.pending_boards == [2]
    assert exc_info.value.code == "RoundNotReady"


def test_tournament_complete(engine):
    snapshot = build_snapshot(
        FOUR,
        rounds=[[(1, 3, "1-0"), (2, 4, "1-0")], [(2, 1, "0-1"), (3, 4, "1-0")]],
        num_rounds=2,
    )
    with pytest.raises(TournamentCompleteException):
        engine.generate_next_round(snapshot)


def test_pending_results_are_reported_before_completion(engine):
    snapshot = build_snapshot(
        FOUR,
        rounds=[[(1, 3, "1-0"), (2, 4, "1-0")], [(2, 1, None), (3, 4, "1-0")]],
        num_rounds=2,
    )
    with pytest.raises(RoundNotReadyException):
        engine.generate_next_round(snapshot)


def test_insufficient_players(engine):
    snapshot = build_snapshot(
        FOUR,
        statuses={
            2: RegistrationStatus.WITHDRAWN,
            3: RegistrationStatus.WITHDRAWN,
            4: RegistrationStatus.WITHDRAWN,
        },
    )
    with pytest.raises(InsufficientPlayersException) as exc_info:
        engine.generate_next_round(snapshot)
    assert exc_info.value.active_count == 1


def test_pending_results_are_reported_before_player_count(engine):
    snapshot = build_snapshot(
        FOUR,
        rounds=[[(1, 3, None), (2, 4, "1-0")]],
        statuses={
            2: RegistrationStatus.WITHDRAWN,
            3: RegistrationStatus.WITHDRAWN,
            4: RegistrationStatus.WITHDRAWN,
        },
    )
    with pytest.raises(RoundNotReadyException):
        engine.generate_next_round(snapshot)


def test_withdrawn_registration_gets_absence_gap(engine):
    snapshot = build_snapshot(
        FIVE,
        rounds=[[(1, 4, "1-0"), (2, 5, "1/2-1/2")]],
        byes={1: 3},
        statuses={5: RegistrationStatus.WITHDRAWN},
        absence_scores={5: 0.5},
    )
    new_round = engine.generate_next_round(snapshot)
    assert new_round.bye is None
    assert new_round.gaps == (
        PairingGap(registration_id=5, round_number=2, score=0.5, is_bye=False),
    )
    paired = sorted(reg_id for pair in new_round.pairs for reg_id in pair)
    assert paired == [1, 2, 3, 4]


def test_late_joiner_enters_the_lowest_group(engine):
    ratings = {**FOUR, 5: 1750}
    registrations = {5: RegistrationStatus.LATE_JOINED}
    round_one = build_snapshot(ratings, statuses=registrations, joined={5: 2})
    first = engine.generate_next_round(round_one)
    assert sorted(reg_id for pair in first.pairs for reg_id in pair) == [1, 2, 3, 4]

    snapshot = build_snapshot(
        ratings,
        rounds=[[(1, 3, "1-0"), (2, 4, "1-0")]],
        statuses=registrations,
        joined={5: 2},
    )
    new_round = engine.generate_next_round(snapshot)
    assert new_round.bye_id == 4
    assert {frozenset(pair) for pair in new_round.pairs} == {
        frozenset({1, 2}),
        frozenset({3, 5}),
    }


def test_floaters_are_reported(engine):
    snapshot = build_snapshot(
        DEFAULT_RATINGS,
        rounds=[[(1, 4, "1-0"), (2, 5, "1-0"), (3, 6, "1/2-1/2")]],
    )
    new_round = engine.generate_next_round(snapshot)
    assert new_round.floaters == {
        3: FloatDirection.DOWN,
        4: FloatDirection.UP,
        5: FloatDirection.UP,
        6: FloatDirection.DOWN,
    }
    assert [frozenset(pair) for pair in new_round.pairs] == [
        frozenset({1, 2}),
        frozenset({3, 4}),
        frozenset({5, 6}),
    ]


def test_generation_does_not_mutate_the_snapshot(engine):
    snapshot = build_snapshot(FOUR, rounds=[[(1, 3, "1-0"), (2, 4, "1-0")]])
    before = snapshot.to_dict()
    engine.generate_next_round(snapshot)
    assert snapshot.to_dict() == before
    assert snapshot.round_state() is RoundState.ROUND_COMPLETE


# ========== apply_result ==========


def _open_round():
    return build_snapshot(FOUR, rounds=[[(1, 3, None), (2, 4, None)]])


def test_apply_result_returns_delta(engine):
    delta = engine.apply_result(_open_round(), 1, "1-0")
    assert delta.pairing_id == 1
    assert delta.round_number == 1
    assert delta.result is GameResult.WHITE_WIN
    assert delta.score_changes == {1: 1.0, 3: 0.0}
    assert delta.totals == {1: 1.0, 3: 0.0}
    assert not delta.round_complete


def test_last_result_completes_the_round(engine):
    snapshot = build_snapshot(FOUR, rounds=[[(1, 3, "1-0"), (2, 4, None)]])
    delta = engine.apply_result(snapshot, 2, GameResult.DRAW)
    assert delta.round_complete
    assert delta.totals == {2: 0.5, 4: 0.5}


def test_unknown_pairing(engine):
    with pytest.raises(ResultNotFoundException):
        engine.apply_result(_open_round(), 99, "1-0")


@pytest.mark.parametrize("result", ["*", "3-1"])
def test_invalid_results(engine, result):
    with pytest.raises(InvalidResultException):
        engine.apply_result(_open_round(), 1, result)


def test_result_for_a_closed_round(engine):
    snapshot = build_snapshot(
        FOUR, rounds=[[(1, 3, "1-0"), (2, 4, "1-0")], [(2, 1, None), (3, 4, None)]]
    )
    with pytest.raises(InvalidRoundException):
        engine.apply_result(snapshot, 1, "0-1")


def test_duplicate_result_needs_overwrite(engine):
    snapshot = build_snapshot(FOUR, rounds=[[(1, 3, "1-0"), (2, 4, None)]])
    with pytest.raises(DuplicateResultException):
        engine.apply_result(snapshot, 1, "0-1")

    delta = engine.apply_result(snapshot, 1, "0-1", overwrite=True)
    assert delta.score_changes == {1: -1.0, 3: 1.0}
    assert delta.totals == {1: 0.0, 3: 1.0}
