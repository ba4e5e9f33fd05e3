"""Score-group builder."""

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
from typing import Dict, Iterable, List

from swisspairing.pairing.standings import PlayerStanding


@dataclass
class ScoreGroup:
    """Players sharing one score, ordered by rating descending then id."""

    score: float
    players: List[PlayerStanding] = field(default_factory=list)

    @property
    def ids(self) -> List[int]:
        return [p.id for p in self.players]

    def __len__(self) -> int:
        return len(self.players)


def pairing_order_key(player: PlayerStanding):
    """Rating descending, registration id ascending."""
    return (-player.rating, player.id)


def build_score_groups(players: Iterable[PlayerStanding]) -> List[ScoreGroup]:
    """Partition players into score groups, highest score first.

    Players are grouped by exact score (scores are sums of half points, so
    no rounding is involved) and ordered within a group by
    :func:`pairing_order_key`, which makes the grouping deterministic.
    """
    by_score: Dict[float, List[PlayerStanding]] = {}
    for player in players:
        by_score.setdefault(player.score, []).append(player)
    return [
        ScoreGroup(score=score, players=sorted(by_score[score], key=pairing_order_key))
        for score in sorted(by_score, reverse=True)
    ]
