"""Bye and gap resolver."""

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

from typing import Dict, Iterable, List

from swisspairing.constants import BYE_SCORE
from swisspairing.models.tournament import (
    PairingGap,
    RegistrationStatus,
    TournamentSnapshot,
)
from swisspairing.pairing.standings import PlayerStanding
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


def bye_priority_key(player: PlayerStanding):
    """Lowest score first, then lowest rating, then highest registration id."""
    return (player.score, player.rating, -player.id)


class ByeResolver:
    """Chooses bye recipients and records gaps.

    Players with the fewest byes so far come first, so nobody gets a second
    bye while a player without one could take it and leave a pairable round.
    """

    def __init__(self, bye_score: float = BYE_SCORE):
        self.bye_score = bye_score

    def candidates(self, players: Iterable[PlayerStanding]) -> List[PlayerStanding]:
        """Eligible bye recipients, best candidate first."""
        tiers = self.candidate_tiers(players)
        return tiers[0] if tiers else []

    def candidate_tiers(
        self, players: Iterable[PlayerStanding]
    ) -> List[List[PlayerStanding]]:
        """Bye recipients grouped by byes received, fewest byes first.

        A later tier is only tried when no recipient of an earlier one
        leaves the remaining players pairable without a rematch.
        """
        by_count: Dict[int, List[PlayerStanding]] = {}
        for player in players:
            by_count.setdefault(player.byes, []).append(player)
        tiers = [
            sorted(by_count[count], key=bye_priority_key)
            for count in sorted(by_count)
        ]
        for count, tier in zip(sorted(by_count), tiers):
            logger.debug(
                "Bye candidates (%d with %d bye(s)): %s",
                len(tier),
                count,
                [p.id for p in tier],
            )
        return tiers

    def bye_gap(self, registration_id: int, round_number: int) -> PairingGap:
        """Gap record crediting a pairing-allocated bye."""
        return PairingGap(
            registration_id=registration_id,
            round_number=round_number,
            score=self.bye_score,
            is_bye=True,
        )

    def absence_gaps(
        self, snapshot: TournamentSnapshot, round_number: int
    ) -> List[PairingGap]:
        """Gap records of withdrawn registrations for ``round_number``.

        Each is credited ``snapshot.absence_scores`` (0 when missing).
        Registrations that had not joined yet by ``round_number`` get none.
        """
        gaps = []
        for registration in snapshot.registrations:
            if registration.status is not RegistrationStatus.WITHDRAWN:
                continue
            if not registration.existed_in(round_number):
                continue
            gaps.append(
                PairingGap(
                    registration_id=registration.id,
                    round_number=round_number,
                    score=float(snapshot.absence_scores.get(registration.id, 0.0)),
                    is_bye=False,
                )
            )
        return sorted(gaps, key=lambda g: g.registration_id)
