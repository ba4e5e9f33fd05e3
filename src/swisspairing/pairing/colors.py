"""Colour allocation for produced pairs."""

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

from typing import List, Tuple

from swisspairing.constants import MAX_COLOR_STREAK
from swisspairing.pairing.standings import PlayerStanding
from swisspairing.type_hints import BLACK, WHITE, other_colour
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


def _streak_after(player: PlayerStanding, color: str) -> int:
    """Length of the trailing same-colour run once ``color`` is played."""
    last, length = player.color_streak
    return length + 1 if last == color else 1


def _difference_after(player: PlayerStanding, color: str) -> int:
    return player.color_difference + (1 if color == WHITE else -1)


def _assignment_cost(
    white: PlayerStanding, black: PlayerStanding
) -> Tuple[int, int, int]:
    """Cost of giving ``white`` white and ``black`` black, lower is better.

    Compared in order: players pushed beyond the allowed colour streak,
    the larger colour imbalance, the summed colour imbalance.
    """
    streak_violations = sum(
        1
        for player, color in ((white, WHITE), (black, BLACK))
        if _streak_after(player, color) > MAX_COLOR_STREAK
    )
    imbalances = [
        abs(_difference_after(white, WHITE)),
        abs(_difference_after(black, BLACK)),
    ]
    return streak_violations, max(imbalances), sum(imbalances)


def _higher_rated(
    p1: PlayerStanding, p2: PlayerStanding
) -> Tuple[PlayerStanding, PlayerStanding]:
    if (-p1.rating, p1.id) <= (-p2.rating, p2.id):
        return p1, p2
    return p2, p1


class ColorAllocator:
    """Assigns white and black to a pair of players.

    Both assignments are scored by :func:`_assignment_cost`; when they tie
    the player with fewer whites gets white, then the higher-rated player
    alternates from their last game, then the lower registration id gets
    white.
    """

    def allocate(
        self, p1: PlayerStanding, p2: PlayerStanding
    ) -> Tuple[PlayerStanding, PlayerStanding]:
        """Return (white, black)."""
        cost_p1_white = _assignment_cost(p1, p2)
        cost_p2_white = _assignment_cost(p2, p1)
        if cost_p1_white != cost_p2_white:
            return (p1, p2) if cost_p1_white < cost_p2_white else (p2, p1)

        if p1.whites != p2.whites:
            return (p1, p2) if p1.whites < p2.whites else (p2, p1)

        higher, lower = _higher_rated(p1, p2)
        for player in (higher, lower):
            if player.last_color is not None:
                wanted = other_colour(player.last_color)
                opponent = lower if player is higher else higher
                return (player, opponent) if wanted == WHITE else (opponent, player)

        return (p1, p2) if p1.id < p2.id else (p2, p1)

    def allocate_first_round(
        self, pairs: List[Tuple[PlayerStanding, PlayerStanding]], initial_color: str
    ) -> List[Tuple[PlayerStanding, PlayerStanding]]:
        """Alternate colours by board for a first round.

        The higher-rated player of board 1 gets ``initial_color``, the
        higher-rated player of board 2 the other colour, and so on.
        ``pairs`` must already be in board order.
        """
        colored = []
        for index, (p1, p2) in enumerate(pairs):
            higher, lower = _higher_rated(p1, p2)
            color = initial_color if index % 2 == 0 else other_colour(initial_color)
            colored.append((higher, lower) if color == WHITE else (lower, higher))
        logger.debug(
            "Alternated first round colours over %d boards starting with %s",
            len(pairs),
            initial_color,
        )
        return colored
