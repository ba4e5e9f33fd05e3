"""A chess player known to the system, shared read-only across tournaments."""

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

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any, Dict, Optional

from swisspairing.constants import TIME_BLITZ, TIME_CATEGORIES, TIME_RAPID
from swisspairing.exceptions import InvalidPlayerDataException
from swisspairing.utils.validation import validate_fide_id, validate_rating


class Title(IntEnum):
    """Chess titles, ordered from weakest to strongest."""

    UNTITLED = 0
    WNM = 1
    WCM = 2
    WFM = 3
    NM = 4
    CM = 5
    WIM = 6
    FM = 7
    WGM = 8
    IM = 9
    GM = 10

    @classmethod
    def from_str(cls, value: Optional[str]) -> "Title":
        """Parse a title abbreviation or its full name, case-insensitively.

        Unknown or empty values give ``Title.UNTITLED``.
        """
        if not value:
            return cls.UNTITLED
        key = value.strip().lower()
        if key.upper() in cls.__members__ and key != "untitled":
            return cls[key.upper()]
        return _TITLE_NAMES.get(key, cls.UNTITLED)

    def __str__(self) -> str:
        return "" if self is Title.UNTITLED else self.name


_TITLE_NAMES = {
    "woman national master": Title.WNM,
    "woman candidate master": Title.WCM,
    "woman fide master": Title.WFM,
    "national master": Title.NM,
    "candidate master": Title.CM,
    "woman international master": Title.WIM,
    "fide master": Title.FM,
    "woman grandmaster": Title.WGM,
    "international master": Title.IM,
    "grandmaster": Title.GM,
}


@dataclass(frozen=True)
class Player:
    """
    Canonical player identity, imported once and shared by all tournaments.

    The pairing engine never reads a player's live rating: registrations carry
    a rating snapshot taken at registration time (see :meth:`rating_for`).

    Attributes
    ----------
    id : int
        Internal identifier.
    name : str
        Display name, conventionally "Last, First".
    title : Title
        Chess title, ``Title.UNTITLED`` when none.
    federation : str or None
        Federation code (e.g. "ESP").
    fide_id : int or None
        External FIDE identifier.
    rating_standard, rating_rapid, rating_blitz : int or None
        Ratings per time category.
    """

    id: int
    name: str
    title: Title = Title.UNTITLED
    federation: Optional[str] = None
    fide_id: Optional[int] = None
    rating_standard: Optional[int] = None
    rating_rapid: Optional[int] = None
    rating_blitz: Optional[int] = None

    def rating_for(self, time_category: str) -> int:
        """Return the rating used for a tournament of ``time_category``.

        Missing ratings count as 0 so unrated players seed last.
        """
        category = time_category.strip().lower()
        if category not in TIME_CATEGORIES:
            raise InvalidPlayerDataException(
                f"Time category `{time_category}` is not valid, "
                "possible values are: blitz, rapid and standard"
            )
        if category == TIME_RAPID:
            rating = self.rating_rapid
        elif category == TIME_BLITZ:
            rating = self.rating_blitz
        else:
            rating = self.rating_standard
        return rating or 0

    def with_ratings(
        self,
        standard: Optional[int] = None,
        rapid: Optional[int] = None,
        blitz: Optional[int] = None,
    ) -> "Player":
        """Return a copy with refreshed ratings; ``None`` keeps the current value."""
        return replace(
            self,
            rating_standard=standard if standard is not None else self.rating_standard,
            rating_rapid=rapid if rapid is not None else self.rating_rapid,
            rating_blitz=blitz if blitz is not None else self.rating_blitz,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize player to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "title": str(self.title),
            "federation": self.federation,
            "fide_id": self.fide_id,
            "rating_standard": self.rating_standard,
            "rating_rapid": self.rating_rapid,
            "rating_blitz": self.rating_blitz,
        }

    @classmethod
    def from_dict(cls, player_data: Dict[str, Any]) -> "Player":
        """Create a Player from serialized data, validating ratings and FIDE id.

        Raises
        ------
        InvalidPlayerDataException
            If a rating or the FIDE id is malformed.
        """
        ratings = {}
        for key in ("rating_standard", "rating_rapid", "rating_blitz"):
            result = validate_rating(player_data.get(key))
            if not result:
                raise InvalidPlayerDataException(
                    f"{player_data.get('name', '?')}: {result.error_message}"
                )
            ratings[key] = (
                int(result.sanitized_value) if result.sanitized_value else None
            )

        fide_result = validate_fide_id(player_data.get("fide_id"))
        if not fide_result:
            raise InvalidPlayerDataException(fide_result.error_message)

        return cls(
            id=int(player_data["id"]),
            name=player_data["name"],
            title=Title.from_str(player_data.get("title")),
            federation=player_data.get("federation"),
            fide_id=(
                int(fide_result.sanitized_value)
                if fide_result.sanitized_value
                else None
            ),
            **ratings,
        )

    def __str__(self) -> str:
        title = f"{self.title} " if self.title is not Title.UNTITLED else ""
        return f"{title}{self.name}"

#  LocalWords:  FIDE
