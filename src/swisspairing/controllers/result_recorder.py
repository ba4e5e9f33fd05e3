"""Result recording for stored tournaments."""

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

from typing import Dict, Optional, Union

from swisspairing.controllers.locks import TournamentLocks
from swisspairing.controllers.store import InMemoryTournamentStore
from swisspairing.engine import SwissPairingEngine
from swisspairing.exceptions import ResultException
from swisspairing.models.tournament import GameResult, StandingsDelta
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


class ResultRecorder:
    """Handles recording and validating match results.

    This class is responsible for:
    - Validating results at the boundary before they are stored
    - Preventing duplicate result recording
    - Reporting when a round becomes complete
    """

    def __init__(
        self,
        store: InMemoryTournamentStore,
        engine: Optional[SwissPairingEngine] = None,
        locks: Optional[TournamentLocks] = None,
    ):
        self.store = store
        self.engine = engine or SwissPairingEngine()
        self.locks = locks or TournamentLocks()

    def record_result(
        self,
        tournament_id: int,
        pairing_id: int,
        result: Union[GameResult, str],
        overwrite: bool = False,
    ) -> StandingsDelta:
        """Validate and store the result of one pairing.

        Args:
            tournament_id: Tournament of the pairing
            pairing_id: Pairing to score
            result: Result or result notation
            overwrite: Replace an existing result

        Returns:
            The standings delta, ``round_complete`` telling whether this was
            the last missing result of the round

        Raises:
            ResultException: If the result is rejected
        """
        with self.locks.hold(tournament_id):
            snapshot = self.store.snapshot(tournament_id)
            delta = self.engine.apply_result(snapshot, pairing_id, result, overwrite)
            self.store.save_result(tournament_id, pairing_id, delta.result)
        if delta.round_complete:
            logger.info(
                "Tournament %d: round %d is complete", tournament_id, delta.round_number
            )
        return delta

    def record_round_results(
        self, tournament_id: int, results: Dict[int, Union[GameResult, str]]
    ) -> bool:
        """Record results for several pairings.

        Args:
            tournament_id: Tournament of the pairings
            results: Dictionary of pairing id -> result

        Returns:
            True if all results recorded successfully, False if any was rejected
        """
        success = True
        for pairing_id in sorted(results):
            try:
                self.record_result(tournament_id, pairing_id, results[pairing_id])
            except ResultException as exc:
                logger.error(
                    "Tournament %d: result for pairing %d rejected (%s): %s",
                    tournament_id,
                    pairing_id,
                    exc.code,
                    exc,
                )
                success = False
        return success

    def undo_round_results(self, tournament_id: int) -> int:
        """Reset every result of the current round to ongoing.

        Returns:
            Number of results cleared
        """
        with self.locks.hold(tournament_id):
            snapshot = self.store.snapshot(tournament_id)
            cleared = 0
            for pairing in snapshot.pairings_in_round(snapshot.current_round):
                if pairing.result.is_decided:
                    self.store.save_result(tournament_id, pairing.id, GameResult.ONGOING)
                    cleared += 1
        logger.info(
            "Tournament %d: cleared %d result(s) of round %d",
            tournament_id,
            cleared,
            snapshot.current_round,
        )
        return cleared
