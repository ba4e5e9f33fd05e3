"""Data model for a generated round and for result updates."""

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

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from swisspairing.models.tournament.game_result import GameResult
from swisspairing.models.tournament.pairing import PairingGap


class FloatDirection(Enum):
    """Direction a registration floated in a round."""

    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class Board:
    """One proposed board of a new round."""

    board_number: int
    white_id: int
    black_id: int

    def to_dict(self) -> Dict[str, Any]:
        """Serialize board to dictionary."""
        return {
            "board_number": self.board_number,
            "white_id": self.white_id,
            "black_id": self.black_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Board":
        """Deserialize board from dictionary."""
        return cls(
            board_number=int(data["board_number"]),
            white_id=int(data["white_id"]),
            black_id=int(data["black_id"]),
        )


@dataclass(frozen=True)
class Round:
    """A proposed round returned by the engine, to be persisted by the caller.

    Attributes
    ----------
    round_number : int
        Round number (1-indexed).
    boards : tuple of Board
        Boards ordered by board number.
    gaps : tuple of PairingGap
        The bye (at most one) followed by absence records of withdrawn
        registrations.
    floaters : dict of int to FloatDirection
        Registrations paired outside their score group this round.
    """

    round_number: int
    boards: Tuple[Board, ...] = ()
    gaps: Tuple[PairingGap, ...] = ()
    floaters: Dict[int, FloatDirection] = field(default_factory=dict)

    @property
    def bye(self) -> Optional[PairingGap]:
        """The bye gap of this round, if any."""
        for gap in self.gaps:
            if gap.is_bye:
                return gap
        return None

    @property
    def bye_id(self) -> Optional[int]:
        bye = self.bye
        return bye.registration_id if bye else None

    @property
    def pairs(self) -> List[Tuple[int, int]]:
        """(white_id, black_id) of every board in board order."""
        return [(b.white_id, b.black_id) for b in self.boards]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round to dictionary."""
        return {
            "round_number": self.round_number,
            "boards": [b.to_dict() for b in self.boards],
            "gaps": [g.to_dict() for g in self.gaps],
            "floaters": {
                str(reg_id): self.floaters[reg_id].value
                for reg_id in sorted(self.floaters)
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round from dictionary."""
        return cls(
            round_number=int(data["round_number"]),
            boards=tuple(Board.from_dict(b) for b in data.get("boards", [])),
            gaps=tuple(PairingGap.from_dict(g) for g in data.get("gaps", [])),
            floaters={
                int(k): FloatDirection(v) for k, v in data.get("floaters", {}).items()
            },
        )


@dataclass(frozen=True)
class StandingsDelta:
    """Effect of recording one result.

    ``score_changes`` holds the points each registration gains or loses, relative
    to the previously recorded result (an ongoing board counts as zero), and
    ``totals`` the new cumulative scores of both players.
    """

    pairing_id: int
    round_number: int
    result: GameResult
    score_changes: Dict[int, float]
    totals: Dict[int, float]
    round_complete: bool

    def to_dict(self) -> Dict[str, Any]:
        """Serialize delta to dictionary."""
        return {
            "pairing_id": self.pairing_id,
            "round_number": self.round_number,
            "result": self.result.value,
            "score_changes": {str(k): v for k, v in self.score_changes.items()},
            "totals": {str(k): v for k, v in self.totals.items()},
            "round_complete": self.round_complete,
        }
