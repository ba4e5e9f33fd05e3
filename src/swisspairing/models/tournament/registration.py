"""A player's participation in one tournament."""

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

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from swisspairing.exceptions import InvalidPlayerDataException


class RegistrationStatus(Enum):
    """Participation status fed to the engine by the caller."""

    ACTIVE = "active"
    WITHDRAWN = "withdrawn"
    LATE_JOINED = "late-joined"

    @classmethod
    def from_str(cls, value: str) -> "RegistrationStatus":
        """Parse a status; "inactive" is accepted as an alias of withdrawn."""
        key = value.strip().lower().replace("_", "-")
        if key == "inactive":
            return cls.WITHDRAWN
        try:
            return cls(key)
        except ValueError as exc:
            raise InvalidPlayerDataException(
                f"Invalid registration status: `{value}`, possible values are: "
                "active, withdrawn and late-joined"
            ) from exc


@dataclass(frozen=True)
class Registration:
    """Snapshot of a registration as handed to the engine.

    Attributes
    ----------
    id : int
        Registration id, the identity the engine pairs on.
    player_id : int
        Canonical player id.
    name : str
        Display name copied from the player.
    rating : int
        Rating snapshot taken at registration time, used for all pairing
        decisions so history stays reproducible.
    status : RegistrationStatus
        Only active (and late-joined, once joined) registrations are paired.
    floats : int
        Stored float counter. Informational only; the engine replays the
        pairing history instead of trusting it.
    joined_round : int
        First round the registration takes part in.
    """

    id: int
    player_id: int
    name: str
    rating: int
    status: RegistrationStatus = RegistrationStatus.ACTIVE
    floats: int = 0
    joined_round: int = 1

    def participates_in(self, round_number: int) -> bool:
        """Whether this registration must be paired or given a bye in a round."""
        if self.status is RegistrationStatus.WITHDRAWN:
            return False
        return self.joined_round <= round_number

    def existed_in(self, round_number: int) -> bool:
        """Whether the registration was part of the tournament in ``round_number``."""
        return self.joined_round <= round_number

    def to_dict(self) -> Dict[str, Any]:
        """Serialize registration to dictionary."""
        return {
            "id": self.id,
            "player_id": self.player_id,
            "name": self.name,
            "rating": self.rating,
            "status": self.status.value,
            "floats": self.floats,
            "joined_round": self.joined_round,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Registration":
        """Deserialize registration from dictionary."""
        return cls(
            id=int(data["id"]),
            player_id=int(data.get("player_id", data["id"])),
            name=data.get("name", f"#{data['id']}"),
            rating=int(data.get("rating") or 0),
            status=RegistrationStatus.from_str(data.get("status", "active")),
            floats=int(data.get("floats", 0)),
            joined_round=int(data.get("joined_round", 1)),
        )
