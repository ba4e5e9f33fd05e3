"""Immutable tournament snapshot, the sole input of the pairing engine."""

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
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from swisspairing.exceptions import SnapshotException
from swisspairing.models.tournament.pairing import Pairing, PairingGap
from swisspairing.models.tournament.registration import Registration
from swisspairing.models.tournament.tournament_config import TournamentInfo


class RoundState(Enum):
    """Lifecycle of the tournament's current round."""

    NOT_STARTED = "not-started"
    PAIRING_GENERATED = "pairing-generated"
    RESULTS_PENDING = "results-pending"
    ROUND_COMPLETE = "round-complete"


@dataclass(frozen=True)
class TournamentSnapshot:
    """Consistent, read-only view of a tournament passed by value to the engine.

    Attributes
    ----------
    tournament : TournamentInfo
        Tournament metadata, including ``current_round``.
    registrations : tuple of Registration
        Every registration of the tournament, whatever its status.
    pairings : tuple of Pairing
        Every board of every generated round, with results.
    gaps : tuple of PairingGap
        Every bye and absence record of every generated round.
    absence_scores : dict of int to float
        Score to credit a withdrawn registration in the next round
        (0.0 when missing).
    """

    tournament: TournamentInfo
    registrations: Tuple[Registration, ...] = ()
    pairings: Tuple[Pairing, ...] = ()
    gaps: Tuple[PairingGap, ...] = ()
    absence_scores: Dict[int, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # accept lists from callers but keep the snapshot immutable
        object.__setattr__(self, "registrations", tuple(self.registrations))
        object.__setattr__(self, "pairings", tuple(self.pairings))
        object.__setattr__(self, "gaps", tuple(self.gaps))
        self.validate()

    # ========== Lookups ==========

    @property
    def current_round(self) -> int:
        return self.tournament.current_round

    def registration(self, registration_id: int) -> Registration:
        """Return the registration with ``registration_id``."""
        for registration in self.registrations:
            if registration.id == registration_id:
                return registration
        raise SnapshotException(f"Unknown registration id: {registration_id}")

    def find_pairing(self, pairing_id: int) -> Optional[Pairing]:
        """Return the pairing with ``pairing_id`` or None."""
        for pairing in self.pairings:
            if pairing.id == pairing_id:
                return pairing
        return None

    def pairings_in_round(self, round_number: int) -> List[Pairing]:
        """Boards of ``round_number`` ordered by board number."""
        return sorted(
            (p for p in self.pairings if p.round_number == round_number),
            key=lambda p: p.board_number,
        )

    def gaps_in_round(self, round_number: int) -> List[PairingGap]:
        """Gap records of ``round_number`` ordered by registration id."""
        return sorted(
            (g for g in self.gaps if g.round_number == round_number),
            key=lambda g: g.registration_id,
        )

    def participants(self, round_number: int) -> List[Registration]:
        """Registrations that must be paired or given a bye in ``round_number``."""
        return sorted(
            (r for r in self.registrations if r.participates_in(round_number)),
            key=lambda r: r.id,
        )

    # ========== Round state ==========

    def pending_boards(self, round_number: int) -> List[int]:
        """Board numbers of ``round_number`` still waiting for a result."""
        return [
            p.board_number
            for p in self.pairings_in_round(round_number)
            if not p.result.is_decided
        ]

    def round_state(self) -> RoundState:
        """State of the current round.

        ``not-started`` before round 1; afterwards it depends on how many
        boards of the current round carry a result.
        """
        if self.current_round == 0:
            return RoundState.NOT_STARTED
        boards = self.pairings_in_round(self.current_round)
        pending = self.pending_boards(self.current_round)
        if boards and len(pending) == len(boards):
            return RoundState.PAIRING_GENERATED
        if pending:
            return RoundState.RESULTS_PENDING
        return RoundState.ROUND_COMPLETE

    # ========== Consistency ==========

    def validate(self) -> None:
        """Check references and round numbers of every record.

        Raises
        ------
        SnapshotException
            If a record refers to an unknown registration, lies outside the
            generated rounds, or a registration appears twice in a round.
        """
        known_ids = set()
        for registration in self.registrations:
            if registration.id in known_ids:
                raise SnapshotException(
                    f"Duplicate registration id: {registration.id}"
                )
            known_ids.add(registration.id)

        seen_pairing_ids = set()
        seen_per_round: Dict[int, set] = {}
        for pairing in self.pairings:
            if pairing.id in seen_pairing_ids:
                raise SnapshotException(f"Duplicate pairing id: {pairing.id}")
            seen_pairing_ids.add(pairing.id)
            self._check_round(pairing.round_number, f"Pairing {pairing.id}")
            for registration_id in (pairing.white_id, pairing.black_id):
                self._check_known(registration_id, known_ids)
                self._check_once(registration_id, pairing.round_number, seen_per_round)

        for gap in self.gaps:
            self._check_round(
                gap.round_number, f"Gap of registration {gap.registration_id}"
            )
            self._check_known(gap.registration_id, known_ids)
            self._check_once(gap.registration_id, gap.round_number, seen_per_round)

        for registration_id in self.absence_scores:
            self._check_known(registration_id, known_ids)

    def _check_round(self, round_number: int, what: str) -> None:
        if not 1 <= round_number <= self.current_round:
            raise SnapshotException(
                f"{what} belongs to round {round_number}, but only "
                f"{self.current_round} round(s) were generated"
            )

    @staticmethod
    def _check_known(registration_id: int, known_ids: set) -> None:
        if registration_id not in known_ids:
            raise SnapshotException(f"Unknown registration id: {registration_id}")

    @staticmethod
    def _check_once(
        registration_id: int, round_number: int, seen_per_round: Dict[int, set]
    ) -> None:
        seen = seen_per_round.setdefault(round_number, set())
        if registration_id in seen:
            raise SnapshotException(
                f"Registration {registration_id} appears twice in round {round_number}"
            )
        seen.add(registration_id)

    # ========== Serialization ==========

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the snapshot to dictionary."""
        return {
            "tournament": self.tournament.to_dict(),
            "registrations": [r.to_dict() for r in self.registrations],
            "pairings": [p.to_dict() for p in self.pairings],
            "gaps": [g.to_dict() for g in self.gaps],
            "absence_scores": {str(k): v for k, v in self.absence_scores.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TournamentSnapshot":
        """Deserialize the snapshot from dictionary."""
        return cls(
            tournament=TournamentInfo.from_dict(data["tournament"]),
            registrations=tuple(
                Registration.from_dict(r) for r in data.get("registrations", [])
            ),
            pairings=tuple(Pairing.from_dict(p) for p in data.get("pairings", [])),
            gaps=tuple(PairingGap.from_dict(g) for g in data.get("gaps", [])),
            absence_scores={
                int(k): float(v) for k, v in data.get("absence_scores", {}).items()
            },
        )
