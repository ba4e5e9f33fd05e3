"""Standings calculator: replays the pairing log into per-registration state."""

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
from typing import Dict, List, Optional, Set, Tuple

from swisspairing.constants import SCORE_EPSILON
from swisspairing.models.tournament import (
    FloatDirection,
    Registration,
    TournamentSnapshot,
)
from swisspairing.type_hints import BLACK, WHITE
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


@dataclass
class PlayerStanding:
    """Pairing-relevant state of one registration before the next round.

    Attributes
    ----------
    registration : Registration
        The registration snapshot (id and rating used for pairing).
    score : float
        Sum of game points and gap credits.
    colors : list of str
        Colours of games actually played, in round order. Forfeits are
        not played and leave no colour.
    opponents : set of int
        Registrations met on a board, forfeits included.
    byes : int
        Pairing-allocated byes received.
    upfloats, downfloats : int
        Times paired against a higher (lower) scored opponent.
    last_float : FloatDirection or None
        Float direction of the latest round the registration was paired in.
    """

    registration: Registration
    score: float = 0.0
    colors: List[str] = field(default_factory=list)
    opponents: Set[int] = field(default_factory=set)
    byes: int = 0
    upfloats: int = 0
    downfloats: int = 0
    last_float: Optional[FloatDirection] = None

    @property
    def id(self) -> int:
        return self.registration.id

    @property
    def rating(self) -> int:
        return self.registration.rating

    @property
    def whites(self) -> int:
        return self.colors.count(WHITE)

    @property
    def blacks(self) -> int:
        return self.colors.count(BLACK)

    @property
    def color_difference(self) -> int:
        """Whites minus blacks."""
        return self.whites - self.blacks

    @property
    def last_color(self) -> Optional[str]:
        return self.colors[-1] if self.colors else None

    @property
    def color_streak(self) -> Tuple[Optional[str], int]:
        """(colour, length) of the trailing run of identical colours."""
        if not self.colors:
            return None, 0
        last = self.colors[-1]
        length = 0
        for color in reversed(self.colors):
            if color != last:
                break
            length += 1
        return last, length

    def __repr__(self) -> str:
        return (
            f"PlayerStanding(id={self.id}, score={self.score}, "
            f"rating={self.rating}, colors={''.join(c[0] for c in self.colors)})"
        )


class StandingsCalculator:
    """Derives every registration's standing from a tournament snapshot.

    Rounds are replayed in order so floats can be derived from the scores
    both players had before each round, instead of the stored counter.
    Registrations that joined late simply have no records for the rounds
    before they joined; missing records are never treated as absences.
    """

    def calculate(
        self, snapshot: TournamentSnapshot, through_round: Optional[int] = None
    ) -> Dict[int, PlayerStanding]:
        """Return the standing of every registration after ``through_round``.

        Args:
            snapshot: The tournament snapshot
            through_round: Last round to include, defaults to the current round

        Returns:
            Dictionary of registration id -> PlayerStanding, withdrawn
            registrations included
        """
        last_round = snapshot.current_round if through_round is None else through_round
        standings = {
            registration.id: PlayerStanding(registration=registration)
            for registration in snapshot.registrations
        }
        for round_number in range(1, last_round + 1):
            self._replay_round(snapshot, round_number, standings)
        logger.debug(
            "Calculated standings of %d registrations through round %d",
            len(standings),
            last_round,
        )
        return standings

    def _replay_round(
        self,
        snapshot: TournamentSnapshot,
        round_number: int,
        standings: Dict[int, PlayerStanding],
    ) -> None:
        before = {reg_id: standing.score for reg_id, standing in standings.items()}

        for pairing in snapshot.pairings_in_round(round_number):
            white = standings[pairing.white_id]
            black = standings[pairing.black_id]
            white.opponents.add(black.id)
            black.opponents.add(white.id)
            if not pairing.result.is_forfeit:
                white.colors.append(WHITE)
                black.colors.append(BLACK)

            _record_float(white, before[white.id], before[black.id])
            _record_float(black, before[black.id], before[white.id])

            white_points, black_points = pairing.result.points
            white.score += white_points
            black.score += black_points

        for gap in snapshot.gaps_in_round(round_number):
            standing = standings[gap.registration_id]
            standing.score += gap.score
            if gap.is_bye:
                standing.byes += 1


def _record_float(
    standing: PlayerStanding, own_score: float, opponent_score: float
) -> None:
    if own_score > opponent_score + SCORE_EPSILON:
        standing.downfloats += 1
        standing.last_float = FloatDirection.DOWN
    elif own_score < opponent_score - SCORE_EPSILON:
        standing.upfloats += 1
        standing.last_float = FloatDirection.UP
    else:
        standing.last_float = None
