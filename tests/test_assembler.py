import pytest

from swisspairing.config import EngineConfig
from swisspairing.exceptions import InvariantViolationException
from swisspairing.models.tournament import (
    Board,
    FloatDirection,
    PairingGap,
    PairingHistory,
    Registration,
    Round,
)
from swisspairing.pairing import PairingOutcome, PlayerStanding, RoundAssembler
from swisspairing.pairing.assembler import board_order_key, float_directions


def _standing(reg_id, rating, score=0.0):
    registration = Registration(
        id=reg_id, player_id=reg_id, name=f"Player {reg_id}", rating=rating
    )
    return PlayerStanding(registration=registration, score=score)


def _bye(reg_id, round_number=1):
    return PairingGap(
        registration_id=reg_id, round_number=round_number, score=1.0, is_bye=True
    )


def test_boards_ordered_by_score_then_rating():
    low = (_standing(5, 2400, 0.0), _standing(6, 2300, 0.0))
    top = (_standing(1, 1500, 1.0), _standing(2, 1400, 1.0))
    middle = (_standing(3, 1900, 1.0), _standing(4, 1800, 0.0))
    assert sorted([low, middle, top], key=board_order_key) == [top, middle, low]


def test_float_directions():
    pairs = [
        (_standing(1, 2000, 1.0), _standing(2, 1900, 0.5)),
        (_standing(3, 1800, 0.5), _standing(4, 1700, 0.5)),
    ]
    assert float_directions(pairs) == {
        1: FloatDirection.DOWN,
        2: FloatDirection.UP,
    }


def test_assemble_numbers_boards_and_keeps_gaps():
    players = [_standing(i, 2000 - 100 * i) for i in range(1, 6)]
    outcome = PairingOutcome(
        pairs=[(players[1], players[3]), (players[0], players[2])], bye=players[4]
    )
    new_round = RoundAssembler(EngineConfig()).assemble(
        1, outcome, [_bye(5)], [], [1, 2, 3, 4, 5], PairingHistory()
    )
    assert new_round.pairs == [(1, 3), (2, 4)]
    assert new_round.bye_id == 5


def _validate(new_round, participants, history=None):
    RoundAssembler(EngineConfig()).validate(
        new_round, participants, history or PairingHistory()
    )


def test_valid_round_passes():
    _validate(
        Round(round_number=1, boards=(Board(1, 1, 2), Board(2, 3, 4))), [1, 2, 3, 4]
    )


@pytest.mark.parametrize(
    "new_round, participants",
    [
        # registration twice
        (Round(round_number=1, boards=(Board(1, 1, 2), Board(2, 2, 3))), [1, 2, 3]),
        # missing participant
        (Round(round_number=1, boards=(Board(1, 1, 2),)), [1, 2, 3, 4]),
        # unexpected registration
        (Round(round_number=1, boards=(Board(1, 1, 2), Board(2, 3, 4))), [1, 2, 3]),
        # two byes
        (
            Round(round_number=1, boards=(Board(1, 1, 2),), gaps=(_bye(3), _bye(4))),
            [1, 2, 3, 4],
        ),
        # bye for a paired registration
        (Round(round_number=1, boards=(Board(1, 1, 2),), gaps=(_bye(2),)), [1, 2]),
        # board numbers with a hole
        (Round(round_number=1, boards=(Board(1, 1, 2), Board(3, 3, 4))), [1, 2, 3, 4]),
        # self pairing
        (Round(round_number=1, boards=(Board(1, 1, 1),)), [1]),
    ],
)
def test_invariant_violations(new_round, participants):
    with pytest.raises(InvariantViolationException):
        _validate(new_round, participants)


def test_rematch_is_an_invariant_violation():
    history = PairingHistory()
    history.add_pairing(1, 2)
    with pytest.raises(InvariantViolationException):
        _validate(
            Round(round_number=2, boards=(Board(1, 2, 1), Board(2, 3, 4))),
            [1, 2, 3, 4],
            history,
        )
