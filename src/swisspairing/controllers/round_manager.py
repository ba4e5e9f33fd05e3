"""Round progression for stored tournaments."""

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

from typing import List, Optional

from swisspairing.controllers.locks import TournamentLocks
from swisspairing.controllers.store import InMemoryTournamentStore
from swisspairing.engine import SwissPairingEngine
from swisspairing.models.tournament import Pairing, Round, RoundState
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


class RoundManager:
    """Manages round progression and pairing generation for tournaments.

    This class is responsible for:
    - Serializing round generation per tournament
    - Re-reading the latest state before deciding a round can be generated
    - Persisting a generated round in a single store operation
    - Undoing a round that has no results yet
    """

    def __init__(
        self,
        store: InMemoryTournamentStore,
        engine: Optional[SwissPairingEngine] = None,
        locks: Optional[TournamentLocks] = None,
    ):
        """Initialize the round manager.

        Args:
            store: Store holding the tournaments
            engine: Pairing engine, a default one when omitted
            locks: Per-tournament locks shared with the result recorder
        """
        self.store = store
        self.engine = engine or SwissPairingEngine()
        self.locks = locks or TournamentLocks()

    def current_round_number(self, tournament_id: int) -> int:
        """Number of rounds generated so far (0 before round 1)."""
        return self.store.tournament(tournament_id).current_round

    def round_state(self, tournament_id: int) -> RoundState:
        return self.engine.round_state(self.store.snapshot(tournament_id))

    def create_next_round(self, tournament_id: int) -> Round:
        """Generate and persist the next round of a tournament.

        The snapshot is read under the tournament lock, so a concurrent call
        waits and then sees the round this call persisted.

        Returns:
            The generated round

        Raises:
            RoundGenerationException: Propagated from the engine; nothing is
                persisted in that case
        """
        with self.locks.hold(tournament_id):
            snapshot = self.store.snapshot(tournament_id)
            logger.info(
                "Creating round %d of tournament %d",
                snapshot.tournament.next_round,
                tournament_id,
            )
            new_round = self.engine.generate_next_round(snapshot)
            self.store.save_round(tournament_id, new_round)
            return new_round

    def get_round_pairings(self, tournament_id: int, round_number: int) -> List[Pairing]:
        """Stored pairings of a round, ordered by board."""
        return self.store.round_pairings(tournament_id, round_number)

    def undo_last_round(self, tournament_id: int) -> bool:
        """Remove the last round if none of its results was recorded.

        Returns:
            True if successful, False if no rounds or a result exists
        """
        with self.locks.hold(tournament_id):
            snapshot = self.store.snapshot(tournament_id)
            round_number = snapshot.current_round
            if round_number == 0:
                logger.warning("Cannot undo: tournament %d has no rounds", tournament_id)
                return False
            if snapshot.round_state() is not RoundState.PAIRING_GENERATED:
                logger.warning(
                    "Cannot undo round %d of tournament %d: results were recorded",
                    round_number,
                    tournament_id,
                )
                return False
            self.store.delete_last_round(tournament_id)
            logger.info("Undid round %d of tournament %d", round_number, tournament_id)
            return True
