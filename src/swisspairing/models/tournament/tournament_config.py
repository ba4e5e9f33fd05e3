"""TournamentInfo data class."""

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
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional, Union

from dateutil import parser as date_parser

from swisspairing.constants import TIME_CATEGORIES, TIME_STANDARD
from swisspairing.exceptions import InvalidConfigurationException, SnapshotException
from swisspairing.utils.validation import validate_num_rounds_strict

DateLike = Union[date, datetime, str, int, float, None]


def parse_date(value: DateLike) -> Optional[date]:
    """Parse a date from an ISO or free-form string, a unix timestamp or a date.

    Raises
    ------
    InvalidConfigurationException
        If a string cannot be understood as a date.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc).date()
    try:
        return date_parser.parse(value).date()
    except (ValueError, OverflowError) as exc:
        raise InvalidConfigurationException(f"Invalid date: {value!r}") from exc


@dataclass(frozen=True)
class TournamentInfo:
    """Tournament metadata handed to the engine.

    Attributes
    ----------
    id : int
        Tournament identifier.
    name : str
        Tournament name.
    num_rounds : int
        Number of rounds in the tournament, between 2 and 30.
    current_round : int
        Number of rounds generated so far (0 before the first round).
    time_category : str
        "standard", "rapid" or "blitz"; selects registration ratings.
    federation : str
        Organizing federation.
    owner_id : int or None
        Id of the user who created the tournament.
    start_date, end_date : date or None
        Tournament dates.
    url : str or None
        Public page of the tournament.
    """

    id: int
    name: str
    num_rounds: int
    current_round: int = 0
    time_category: str = TIME_STANDARD
    federation: str = ""
    owner_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    url: Optional[str] = None

    def __post_init__(self) -> None:
        validate_num_rounds_strict(self.num_rounds)
        if self.time_category not in TIME_CATEGORIES:
            raise InvalidConfigurationException(
                f"Time category `{self.time_category}` is not valid, "
                "possible values are: blitz, rapid and standard"
            )
        if not 0 <= self.current_round <= self.num_rounds:
            raise SnapshotException(
                f"Current round {self.current_round} is outside 0..{self.num_rounds}"
            )

    @property
    def next_round(self) -> int:
        """Number of the round that would be generated next."""
        return self.current_round + 1

    @property
    def is_finished(self) -> bool:
        """Whether every scheduled round has been generated."""
        return self.current_round >= self.num_rounds

    def to_dict(self) -> Dict[str, Any]:
        """Serialize tournament info to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "num_rounds": self.num_rounds,
            "current_round": self.current_round,
            "time_category": self.time_category,
            "federation": self.federation,
            "owner_id": self.owner_id,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentInfo":
        """Deserialize tournament info from dictionary."""
        return cls(
            id=int(data.get("id", 0)),
            name=data.get("name", "Untitled Tournament"),
            num_rounds=int(data["num_rounds"]),
            current_round=int(data.get("current_round", 0)),
            time_category=str(data.get("time_category", TIME_STANDARD)).strip().lower(),
            federation=data.get("federation", ""),
            owner_id=data.get("owner_id"),
            start_date=parse_date(data.get("start_date")),
            end_date=parse_date(data.get("end_date")),
            url=data.get("url"),
        )
