"""In-memory reference store for tournaments, registrations, pairings and gaps."""

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
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

from swisspairing.exceptions import (
    DuplicatePlayerException,
    PlayerNotFoundException,
    ResultNotFoundException,
    TournamentNotFoundException,
    TournamentStateException,
)
from swisspairing.models.player import Player
from swisspairing.models.tournament import (
    GameResult,
    Pairing,
    PairingGap,
    Registration,
    RegistrationStatus,
    Round,
    TournamentInfo,
    TournamentSnapshot,
)
from swisspairing.utils import setup_logger
from swisspairing.utils.validation import validate_score

logger = setup_logger(__name__)


@dataclass
class _TournamentRecord:
    info: TournamentInfo
    registrations: Dict[int, Registration] = field(default_factory=dict)
    pairings: Dict[int, Pairing] = field(default_factory=dict)
    gaps: List[PairingGap] = field(default_factory=list)
    absence_scores: Dict[int, float] = field(default_factory=dict)
    # round number -> registrations whose floats counter the round bumped
    round_floaters: Dict[int, List[int]] = field(default_factory=dict)


class InMemoryTournamentStore:
    """Thread-safe in-memory store playing the role of the external database.

    The store only persists what it is given; every pairing decision comes
    from :class:`swisspairing.engine.SwissPairingEngine`. Individual
    operations are atomic, but a read followed by a write is not: callers
    that decide on a snapshot must hold the tournament's lock from
    :class:`TournamentLocks`.
    """

    def __init__(self):
        self._mutex = threading.Lock()
        self._players: Dict[int, Player] = {}
        self._tournaments: Dict[int, _TournamentRecord] = {}
        self._next_tournament_id = 1
        self._next_registration_id = 1
        self._next_pairing_id = 1

    # ========== Players ==========

    def add_player(self, player: Player) -> Player:
        """Add or refresh a canonical player."""
        with self._mutex:
            self._players[player.id] = player
        return player

    def get_player(self, player_id: int) -> Player:
        with self._mutex:
            player = self._players.get(player_id)
        if player is None:
            raise PlayerNotFoundException(f"Player {player_id} not found")
        return player

    # ========== Tournaments ==========

    def create_tournament(
        self, name: str, num_rounds: int, time_category: str = "standard", **metadata
    ) -> TournamentInfo:
        """Create a tournament and return its metadata."""
        with self._mutex:
            info = TournamentInfo(
                id=self._next_tournament_id,
                name=name,
                num_rounds=num_rounds,
                time_category=time_category.strip().lower(),
                **metadata,
            )
            self._tournaments[info.id] = _TournamentRecord(info=info)
            self._next_tournament_id += 1
        logger.info("Created tournament %d: %s (%d rounds)", info.id, name, num_rounds)
        return info

    def _record(self, tournament_id: int) -> _TournamentRecord:
        record = self._tournaments.get(tournament_id)
        if record is None:
            raise TournamentNotFoundException(f"Tournament {tournament_id} not found")
        return record

    def tournament(self, tournament_id: int) -> TournamentInfo:
        with self._mutex:
            return self._record(tournament_id).info

    def snapshot(self, tournament_id: int) -> TournamentSnapshot:
        """Return a consistent immutable snapshot of a tournament."""
        with self._mutex:
            record = self._record(tournament_id)
            return TournamentSnapshot(
                tournament=record.info,
                registrations=tuple(
                    record.registrations[reg_id]
                    for reg_id in sorted(record.registrations)
                ),
                pairings=tuple(
                    record.pairings[pairing_id] for pairing_id in sorted(record.pairings)
                ),
                gaps=tuple(record.gaps),
                absence_scores=dict(record.absence_scores),
            )

    # ========== Registrations ==========

    def register(self, tournament_id: int, player_id: int) -> Registration:
        """Register a player, snapshotting the rating of the tournament's category.

        Registrations made after round 1 was generated are late joiners that
        take part from the next round on.

        Raises
        ------
        DuplicatePlayerException
            If the player is already registered in the tournament.
        """
        player = self.get_player(player_id)
        with self._mutex:
            record = self._record(tournament_id)
            if any(r.player_id == player_id for r in record.registrations.values()):
                raise DuplicatePlayerException(
                    f"Player {player_id} is already registered in tournament "
                    f"{tournament_id}"
                )
            started = record.info.current_round > 0
            registration = Registration(
                id=self._next_registration_id,
                player_id=player.id,
                name=player.name,
                rating=player.rating_for(record.info.time_category),
                status=(
                    RegistrationStatus.LATE_JOINED
                    if started
                    else RegistrationStatus.ACTIVE
                ),
                joined_round=record.info.next_round if started else 1,
            )
            record.registrations[registration.id] = registration
            self._next_registration_id += 1
        logger.info(
            "Registered %s in tournament %d as registration %d (%s)",
            player.name,
            tournament_id,
            registration.id,
            registration.status.value,
        )
        return registration

    def set_status(
        self, tournament_id: int, registration_id: int, status: RegistrationStatus
    ) -> Registration:
        """Change a registration's status (withdraw, reactivate)."""
        with self._mutex:
            record = self._record(tournament_id)
            registration = record.registrations.get(registration_id)
            if registration is None:
                raise PlayerNotFoundException(
                    f"Registration {registration_id} not found in tournament "
                    f"{tournament_id}"
                )
            registration = replace(registration, status=status)
            record.registrations[registration_id] = registration
        logger.info(
            "Tournament %d: registration %d is now %s",
            tournament_id,
            registration_id,
            status.value,
        )
        return registration

    def set_absence_score(
        self, tournament_id: int, registration_id: int, score: float
    ) -> None:
        """Score credited to a withdrawn registration for each round it misses."""
        result = validate_score(score)
        if not result:
            raise TournamentStateException(result.error_message)
        with self._mutex:
            record = self._record(tournament_id)
            if registration_id not in record.registrations:
                raise PlayerNotFoundException(
                    f"Registration {registration_id} not found in tournament "
                    f"{tournament_id}"
                )
            record.absence_scores[registration_id] = float(score)

    # ========== Rounds ==========

    def save_round(self, tournament_id: int, new_round: Round) -> List[Pairing]:
        """Persist a generated round atomically and return its pairings.

        Assigns pairing ids, records the gaps, bumps ``current_round`` and
        the ``floats`` counter of every floater.

        Raises
        ------
        TournamentStateException
            If ``new_round`` is not the tournament's next round.
        """
        with self._mutex:
            record = self._record(tournament_id)
            if new_round.round_number != record.info.next_round:
                raise TournamentStateException(
                    f"Tournament {tournament_id} expects round "
                    f"{record.info.next_round}, got round {new_round.round_number}"
                )
            pairings = []
            for board in new_round.boards:
                pairing = Pairing(
                    id=self._next_pairing_id,
                    round_number=new_round.round_number,
                    board_number=board.board_number,
                    white_id=board.white_id,
                    black_id=board.black_id,
                )
                self._next_pairing_id += 1
                record.pairings[pairing.id] = pairing
                pairings.append(pairing)
            record.gaps.extend(new_round.gaps)
            record.round_floaters[new_round.round_number] = list(new_round.floaters)
            for reg_id in new_round.floaters:
                registration = record.registrations[reg_id]
                record.registrations[reg_id] = replace(
                    registration, floats=registration.floats + 1
                )
            record.info = replace(record.info, current_round=new_round.round_number)
        logger.info(
            "Tournament %d: saved round %d (%d pairings, %d gaps)",
            tournament_id,
            new_round.round_number,
            len(pairings),
            len(new_round.gaps),
        )
        return pairings

    def round_pairings(self, tournament_id: int, round_number: int) -> List[Pairing]:
        """Pairings of one round ordered by board number."""
        with self._mutex:
            record = self._record(tournament_id)
            return sorted(
                (p for p in record.pairings.values() if p.round_number == round_number),
                key=lambda p: p.board_number,
            )

    def save_result(
        self, tournament_id: int, pairing_id: int, result: GameResult
    ) -> Pairing:
        """Store the result of a pairing."""
        with self._mutex:
            record = self._record(tournament_id)
            pairing = record.pairings.get(pairing_id)
            if pairing is None:
                raise ResultNotFoundException(f"Pairing {pairing_id} not found")
            pairing = pairing.with_result(result)
            record.pairings[pairing_id] = pairing
        return pairing

    def delete_last_round(self, tournament_id: int) -> int:
        """Remove every record of the latest round and return its number."""
        with self._mutex:
            record = self._record(tournament_id)
            round_number = record.info.current_round
            if round_number == 0:
                raise TournamentStateException(
                    f"Tournament {tournament_id} has no round to delete"
                )
            record.pairings = {
                pairing_id: pairing
                for pairing_id, pairing in record.pairings.items()
                if pairing.round_number != round_number
            }
            record.gaps = [g for g in record.gaps if g.round_number != round_number]
            for reg_id in record.round_floaters.pop(round_number, []):
                registration = record.registrations[reg_id]
                record.registrations[reg_id] = replace(
                    registration, floats=max(0, registration.floats - 1)
                )
            record.info = replace(record.info, current_round=round_number - 1)
        return round_number
