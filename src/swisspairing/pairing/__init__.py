"""Swiss pairing core: standings, score groups, pairing, colours, byes and assembly."""

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

from swisspairing.pairing.assembler import RoundAssembler
from swisspairing.pairing.byes import ByeResolver
from swisspairing.pairing.colors import ColorAllocator
from swisspairing.pairing.dutch_swiss import (
    DutchSwissPairer,
    PairingOutcome,
    create_dutch_swiss_pairings,
)
from swisspairing.pairing.score_groups import ScoreGroup, build_score_groups
from swisspairing.pairing.standings import PlayerStanding, StandingsCalculator

__all__ = [
    "ByeResolver",
    "ColorAllocator",
    "DutchSwissPairer",
    "PairingOutcome",
    "PlayerStanding",
    "RoundAssembler",
    "ScoreGroup",
    "StandingsCalculator",
    "build_score_groups",
    "create_dutch_swiss_pairings",
]
