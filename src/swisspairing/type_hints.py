"""Type hints used in Swiss Pairing."""

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

from typing import Dict, List, Literal, Optional, Tuple

# Chess color string constants (for runtime use)
WHITE = "White"
BLACK = "Black"

# Chess color type aliases (for type hints)
W = Literal["White"]
B = Literal["Black"]
# Basically, white or black
Colour = Literal["White", "Black"]

# Registrations are referred to by their stable integer id
RegistrationId = int
# (white_id, black_id) of one board
MatchPairing = Tuple[RegistrationId, RegistrationId]
# All pairings for one round
RoundSchedule = Tuple[MatchPairing, ...]
# Unordered pairs of registrations that already met
PreviousMatches = set
# registration id -> score change caused by a result
ScoreChanges = Dict[RegistrationId, float]
MaybeId = Optional[RegistrationId]
IdList = List[RegistrationId]


def other_colour(colour: str) -> str:
    """Return the opposite colour."""
    return BLACK if colour == WHITE else WHITE

#  LocalWords:  MatchPairing RoundSchedule
