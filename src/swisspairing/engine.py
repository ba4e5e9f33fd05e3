"""Swiss pairing engine: the two operations exposed to the caller."""

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

from typing import Optional, Union

from swisspairing.config import EngineConfig
from swisspairing.constants import MIN_ACTIVE_PLAYERS
from swisspairing.exceptions import (
    DuplicateResultException,
    InsufficientPlayersException,
    InvalidResultException,
    InvalidRoundException,
    ResultNotFoundException,
    RoundNotReadyException,
    TournamentCompleteException,
)
from swisspairing.models.tournament import (
    GameResult,
    PairingHistory,
    Round,
    RoundState,
    StandingsDelta,
    TournamentSnapshot,
)
from swisspairing.pairing import (
    ByeResolver,
    ColorAllocator,
    RoundAssembler,
    StandingsCalculator,
    create_dutch_swiss_pairings,
)
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


class SwissPairingEngine:
    """Stateless Swiss pairing engine.

    Every call receives an immutable :class:`TournamentSnapshot` and returns
    a value; nothing is persisted or cached between calls. Callers must
    serialize ``generate_next_round`` per tournament (see
    :class:`swisspairing.controllers.RoundManager`).
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.standings_calculator = StandingsCalculator()
        self.bye_resolver = ByeResolver(self.config.bye_score)
        self.assembler = RoundAssembler(self.config, ColorAllocator())

    def round_state(self, snapshot: TournamentSnapshot) -> RoundState:
        """State of the snapshot's current round."""
        return snapshot.round_state()

    def generate_next_round(self, snapshot: TournamentSnapshot) -> Round:
        """Produce the next round of the tournament.

        Args:
            snapshot: Consistent tournament state, including every pairing,
                result and gap so far

        Returns:
            The proposed round (boards, bye and absence gaps, floaters)

        Raises:
            RoundNotReadyException: The current round has boards without a result
            TournamentCompleteException: Every scheduled round was generated
            InsufficientPlayersException: Fewer than two registrations can play
            PairingInfeasibleException: No rematch-free pairing was found
            InvariantViolationException: The assembled round is inconsistent
        """
        info = snapshot.tournament
        if snapshot.round_state() in (
            RoundState.PAIRING_GENERATED,
            RoundState.RESULTS_PENDING,
        ):
            pending = snapshot.pending_boards(info.current_round)
            logger.warning(
                "Tournament %s: round %d has %d pending board(s)",
                info.id,
                info.current_round,
                len(pending),
            )
            raise RoundNotReadyException(info.current_round, pending)
        if info.is_finished:
            logger.warning("Tournament %s: all rounds generated", info.id)
            raise TournamentCompleteException(info.num_rounds)

        round_number = info.next_round
        participants = snapshot.participants(round_number)
        if len(participants) < MIN_ACTIVE_PLAYERS:
            logger.warning(
                "Tournament %s: only %d registration(s) can play round %d",
                info.id,
                len(participants),
                round_number,
            )
            raise InsufficientPlayersException(len(participants))

        standings = self.standings_calculator.calculate(snapshot)
        players = [standings[registration.id] for registration in participants]
        history = PairingHistory.from_pairings(snapshot.pairings)

        outcome = create_dutch_swiss_pairings(
            players, history, self.bye_resolver, self.config
        )
        bye_gaps = (
            [self.bye_resolver.bye_gap(outcome.bye.id, round_number)]
            if outcome.bye is not None
            else []
        )
        absence_gaps = self.bye_resolver.absence_gaps(snapshot, round_number)
        new_round = self.assembler.assemble(
            round_number,
            outcome,
            bye_gaps,
            absence_gaps,
            [registration.id for registration in participants],
            history,
        )
        logger.info(
            "Tournament %s: generated round %d with %d board(s)",
            info.id,
            round_number,
            len(new_round.boards),
        )
        return new_round

    def apply_result(
        self,
        snapshot: TournamentSnapshot,
        pairing_id: int,
        result: Union[GameResult, str],
        overwrite: bool = False,
    ) -> StandingsDelta:
        """Score a result for one pairing of the current round.

        Args:
            snapshot: Tournament state before the result is recorded
            pairing_id: Pairing the result belongs to
            result: A decided result, or any notation accepted by
                :meth:`GameResult.from_str`
            overwrite: Allow replacing an already recorded result

        Raises:
            ResultNotFoundException: Unknown pairing
            InvalidResultException: The result is unknown or ongoing
            InvalidRoundException: The pairing is not in the current round
            DuplicateResultException: The pairing already has a result
        """
        if not isinstance(result, GameResult):
            result = GameResult.from_str(result)
        pairing = snapshot.find_pairing(pairing_id)
        if pairing is None:
            raise ResultNotFoundException(f"Pairing {pairing_id} not found")
        if not result.is_decided:
            raise InvalidResultException(
                f"Pairing {pairing_id}: a result cannot be reset to ongoing"
            )
        if pairing.round_number != snapshot.current_round:
            raise InvalidRoundException(
                f"Pairing {pairing_id} belongs to round {pairing.round_number}, "
                f"results are accepted for round {snapshot.current_round} only"
            )
        if pairing.result.is_decided and not overwrite:
            raise DuplicateResultException(
                f"Pairing {pairing_id} already has result {pairing.result}"
            )

        old_white, old_black = pairing.result.points
        new_white, new_black = result.points
        score_changes = {
            pairing.white_id: new_white - old_white,
            pairing.black_id: new_black - old_black,
        }
        standings = self.standings_calculator.calculate(snapshot)
        totals = {
            reg_id: standings[reg_id].score + change
            for reg_id, change in score_changes.items()
        }
        round_complete = all(
            other.result.is_decided
            for other in snapshot.pairings_in_round(pairing.round_number)
            if other.id != pairing.id
        )
        logger.info(
            "Tournament %s: pairing %d (round %d, board %d) scored %s",
            snapshot.tournament.id,
            pairing.id,
            pairing.round_number,
            pairing.board_number,
            result,
        )
        return StandingsDelta(
            pairing_id=pairing.id,
            round_number=pairing.round_number,
            result=result,
            score_changes=score_changes,
            totals=totals,
            round_complete=round_complete,
        )
