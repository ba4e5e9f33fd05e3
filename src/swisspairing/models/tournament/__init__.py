"""Tournament records handed to and returned by the pairing engine."""

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

from swisspairing.models.tournament.game_result import GameResult
from swisspairing.models.tournament.pairing import Pairing, PairingGap
from swisspairing.models.tournament.pairing_history import PairingHistory
from swisspairing.models.tournament.registration import (
    Registration,
    RegistrationStatus,
)
from swisspairing.models.tournament.round_data import (
    Board,
    FloatDirection,
    Round,
    StandingsDelta,
)
from swisspairing.models.tournament.snapshot import RoundState, TournamentSnapshot
from swisspairing.models.tournament.tournament_config import TournamentInfo, parse_date

__all__ = [
    "Board",
    "FloatDirection",
    "GameResult",
    "Pairing",
    "PairingGap",
    "PairingHistory",
    "Registration",
    "RegistrationStatus",
    "Round",
    "RoundState",
    "StandingsDelta",
    "TournamentInfo",
    "TournamentSnapshot",
    "parse_date",
]
