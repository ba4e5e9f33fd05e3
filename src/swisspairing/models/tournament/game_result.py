"""Game result of a single board."""

# Swiss Pairing
# Copyright (C) 2025  Gambit Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

from enum import Enum
from typing import Optional, Tuple

from swisspairing.constants import (
    DRAW_SCORE,
    LOSS_SCORE,
    RESULT_BLACK_FORFEIT_WIN,
    RESULT_BLACK_WIN,
    RESULT_DOUBLE_FORFEIT,
    RESULT_DRAW,
    RESULT_ONGOING,
    RESULT_WHITE_FORFEIT_WIN,
    RESULT_WHITE_WIN,
    WIN_SCORE,
)
from swisspairing.exceptions import InvalidResultException


class GameResult(Enum):
    """Outcome of a board, stored in the canonical notation of its value.

    Forfeits score exactly like the matching decisive result; a double
    forfeit scores zero for both sides.
    """

    ONGOING = RESULT_ONGOING
    WHITE_WIN = RESULT_WHITE_WIN
    DRAW = RESULT_DRAW
    BLACK_WIN = RESULT_BLACK_WIN
    WHITE_FORFEIT_WIN = RESULT_WHITE_FORFEIT_WIN
    BLACK_FORFEIT_WIN = RESULT_BLACK_FORFEIT_WIN
    DOUBLE_FORFEIT = RESULT_DOUBLE_FORFEIT

    @classmethod
    def from_str(cls, value: Optional[str]) -> "GameResult":
        """Parse any accepted notation of a result.

        Accepts the canonical values, spaced variants ("1 - 0"), draw
        notations ("1/2-1/2", "½-½", "=-=", "0.5-0.5"), forfeit notations
        ("+/-", "-/+", "-/-", "0-0") and the kebab-case names used by
        the caller ("white-win", "black-forfeit-win", ...).

        Raises
        ------
        InvalidResultException
            If the value is not a known notation.
        """
        if value is None:
            return cls.ONGOING
        key = " ".join(value.strip().lower().split())
        compact = key.replace(" ", "")
        result = _NOTATIONS.get(key) or _NOTATIONS.get(compact)
        if result is None:
            raise InvalidResultException(f"Unknown game result notation: {value!r}")
        return result

    @property
    def is_decided(self) -> bool:
        """Whether the board has a submitted result."""
        return self is not GameResult.ONGOING

    @property
    def is_forfeit(self) -> bool:
        """Whether at least one side forfeited (the game was not played)."""
        return self in (
            GameResult.WHITE_FORFEIT_WIN,
            GameResult.BLACK_FORFEIT_WIN,
            GameResult.DOUBLE_FORFEIT,
        )

    @property
    def points(self) -> Tuple[float, float]:
        """(white points, black points) credited by this result."""
        return _POINTS[self]

    @property
    def slug(self) -> str:
        """Kebab-case name, e.g. ``white-forfeit-win``."""
        return self.name.lower().replace("_", "-")

    def __str__(self) -> str:
        return self.value


_POINTS = {
    GameResult.ONGOING: (LOSS_SCORE, LOSS_SCORE),
    GameResult.WHITE_WIN: (WIN_SCORE, LOSS_SCORE),
    GameResult.DRAW: (DRAW_SCORE, DRAW_SCORE),
    GameResult.BLACK_WIN: (LOSS_SCORE, WIN_SCORE),
    GameResult.WHITE_FORFEIT_WIN: (WIN_SCORE, LOSS_SCORE),
    GameResult.BLACK_FORFEIT_WIN: (LOSS_SCORE, WIN_SCORE),
    GameResult.DOUBLE_FORFEIT: (LOSS_SCORE, LOSS_SCORE),
}

_NOTATIONS = {
    "*": GameResult.ONGOING,
    "ongoing": GameResult.ONGOING,
    "1-0": GameResult.WHITE_WIN,
    "white-win": GameResult.WHITE_WIN,
    "1/2-1/2": GameResult.DRAW,
    "½-½": GameResult.DRAW,
    "=-=": GameResult.DRAW,
    "0.5-0.5": GameResult.DRAW,
    "draw": GameResult.DRAW,
    "0-1": GameResult.BLACK_WIN,
    "black-win": GameResult.BLACK_WIN,
    "1-0ff": GameResult.WHITE_FORFEIT_WIN,
    "1-0 ff": GameResult.WHITE_FORFEIT_WIN,
    "+/-": GameResult.WHITE_FORFEIT_WIN,
    "white-forfeit-win": GameResult.WHITE_FORFEIT_WIN,
    "0-1ff": GameResult.BLACK_FORFEIT_WIN,
    "0-1 ff": GameResult.BLACK_FORFEIT_WIN,
    "-/+": GameResult.BLACK_FORFEIT_WIN,
    "black-forfeit-win": GameResult.BLACK_FORFEIT_WIN,
    "0-0": GameResult.DOUBLE_FORFEIT,
    "0-0ff": GameResult.DOUBLE_FORFEIT,
    "0-0 ff": GameResult.DOUBLE_FORFEIT,
    "-/-": GameResult.DOUBLE_FORFEIT,
    "double-forfeit": GameResult.DOUBLE_FORFEIT,
}
