"""Record of which registrations have already met."""

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
from typing import Any, Dict, Iterable, Set

from swisspairing.models.tournament.pairing import Pairing


@dataclass
class PairingHistory:
    """
    Tracks historical pairings to prevent repeat matches.

    Attributes
    ----------
    previous_matches : set of frozenset of int
        Set containing frozensets of registration id pairs representing
        boards that have already been paired, forfeits included.
    """

    previous_matches: Set[frozenset] = field(default_factory=set)

    @classmethod
    def from_pairings(cls, pairings: Iterable[Pairing]) -> "PairingHistory":
        """Build the history of every pairing in ``pairings``."""
        history = cls()
        for pairing in pairings:
            history.add_pairing(pairing.white_id, pairing.black_id)
        return history

    def add_pairing(self, player1_id: int, player2_id: int) -> None:
        """Record that two registrations have been paired."""
        self.previous_matches.add(frozenset({player1_id, player2_id}))

    def have_played(self, player1_id: int, player2_id: int) -> bool:
        """Check if two registrations have previously been paired."""
        return frozenset({player1_id, player2_id}) in self.previous_matches

    def __len__(self) -> int:
        return len(self.previous_matches)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize pairing history to dictionary."""
        return {
            "previous_matches": sorted(sorted(pair) for pair in self.previous_matches),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PairingHistory":
        """Deserialize pairing history from dictionary."""
        return cls(
            previous_matches=set(
                frozenset(map(int, pair)) for pair in data.get("previous_matches", [])
            ),
        )
