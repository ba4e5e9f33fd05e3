import pytest

from swisspairing.exceptions import InvalidResultException
from swisspairing.models.tournament import GameResult


@pytest.mark.parametrize(
    "notation, expected",
    [
        ("1-0", GameResult.WHITE_WIN),
        ("1 - 0", GameResult.WHITE_WIN),
        ("0-1", GameResult.BLACK_WIN),
        ("1/2-1/2", GameResult.DRAW),
        ("½-½", GameResult.DRAW),
        ("=-=", GameResult.DRAW),
        ("+/-", GameResult.WHITE_FORFEIT_WIN),
        ("0-1 FF", GameResult.BLACK_FORFEIT_WIN),
        ("-/-", GameResult.DOUBLE_FORFEIT),
        ("black-forfeit-win", GameResult.BLACK_FORFEIT_WIN),
        ("*", GameResult.ONGOING),
        (None, GameResult.ONGOING),
    ],
)
def test_from_str_accepts_common_notations(notation, expected):
    assert GameResult.from_str(notation) is expected


def test_unknown_notation_is_rejected():
    with pytest.raises(InvalidResultException):
        GameResult.from_str("2-0")


def test_forfeits_score_like_decisive_games():
    assert GameResult.WHITE_FORFEIT_WIN.points == GameResult.WHITE_WIN.points
    assert GameResult.BLACK_FORFEIT_WIN.points == (0.0, 1.0)
    assert GameResult.DOUBLE_FORFEIT.points == (0.0, 0.0)
    assert GameResult.DRAW.points == (0.5, 0.5)


def test_forfeit_and_decided_flags():
    assert GameResult.DOUBLE_FORFEIT.is_forfeit
    assert not GameResult.DRAW.is_forfeit
    assert not GameResult.ONGOING.is_decided
    assert GameResult.BLACK_WIN.is_decided


def test_slug_and_string_form():
    assert GameResult.WHITE_FORFEIT_WIN.slug == "white-forfeit-win"
    assert str(GameResult.DRAW) == "1/2-1/2"
