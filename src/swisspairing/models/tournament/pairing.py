"""Persisted pairing records: played boards and gaps (byes and absences)."""

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

from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from swisspairing.exceptions import SnapshotException
from swisspairing.models.tournament.game_result import GameResult


@dataclass(frozen=True)
class Pairing:
    """One board of one round, as recorded by the store.

    Attributes
    ----------
    id : int
        Store identifier, the handle results are submitted against.
    round_number : int
        Round number (1-indexed).
    board_number : int
        Board number within the round (1-indexed).
    white_id, black_id : int
        Registration ids, never equal.
    result : GameResult
        ``GameResult.ONGOING`` until a result is submitted.
    pgn : str or None
        Optional game record.
    """

    id: int
    round_number: int
    board_number: int
    white_id: int
    black_id: int
    result: GameResult = GameResult.ONGOING
    pgn: Optional[str] = None

    def __post_init__(self) -> None:
        if self.white_id == self.black_id:
            raise SnapshotException(
                f"Pairing {self.id} pairs registration {self.white_id} with itself"
            )

    @property
    def players(self) -> frozenset:
        """Unordered pair of registration ids."""
        return frozenset({self.white_id, self.black_id})

    def with_result(self, result: GameResult) -> "Pairing":
        """Return a copy carrying ``result``."""
        return replace(self, result=result)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing to dictionary."""
        return {
            "id": self.id,
            "round_number": self.round_number,
            "board_number": self.board_number,
            "white_id": self.white_id,
            "black_id": self.black_id,
            "result": None if self.result is GameResult.ONGOING else self.result.value,
            "pgn": self.pgn,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pairing":
        """Deserialize pairing from dictionary."""
        return cls(
            id=int(data["id"]),
            round_number=int(data["round_number"]),
            board_number=int(data["board_number"]),
            white_id=int(data["white_id"]),
            black_id=int(data["black_id"]),
            result=GameResult.from_str(data.get("result")),
            pgn=data.get("pgn"),
        )


@dataclass(frozen=True)
class PairingGap:
    """A registration's non-pairing in a round and the score it is credited.

    ``is_bye`` marks pairing-allocated byes; other gaps record absences
    (withdrawn players, requested half-point byes).
    """

    registration_id: int
    round_number: int
    score: float
    is_bye: bool

    def to_dict(self) -> Dict[str, Any]:
        """Serialize gap to dictionary."""
        return {
            "registration_id": self.registration_id,
            "round_number": self.round_number,
            "score": self.score,
            "is_bye": self.is_bye,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingGap":
        """Deserialize gap from dictionary."""
        return cls(
            registration_id=int(data["registration_id"]),
            round_number=int(data["round_number"]),
            score=float(data.get("score", 0.0)),
            is_bye=bool(data.get("is_bye", False)),
        )
