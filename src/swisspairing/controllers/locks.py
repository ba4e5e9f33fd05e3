"""Per-tournament locks serializing round generation and result recording."""

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

import threading
from contextlib import contextmanager
from typing import Dict, Iterator

from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


class TournamentLocks:
    """Hands out one re-entrant lock per tournament.

    Round generation and result recording hold the tournament's lock for
    their whole read-decide-write sequence, so two requests never compute
    from the same stale snapshot. Different tournaments never block each
    other.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.RLock] = {}

    def get(self, tournament_id: int) -> threading.RLock:
        """Return the lock of ``tournament_id``, creating it on first use."""
        with self._guard:
            lock = self._locks.get(tournament_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[tournament_id] = lock
            return lock

    @contextmanager
    def hold(self, tournament_id: int) -> Iterator[None]:
        """Context manager holding the lock of ``tournament_id``."""
        lock = self.get(tournament_id)
        with lock:
            logger.debug("Acquired lock of tournament %s", tournament_id)
            yield
