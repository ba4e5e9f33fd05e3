"""Round assembler: board order, colours and global invariants."""

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

from typing import Dict, List, Optional, Sequence

from swisspairing.config import EngineConfig
from swisspairing.constants import SCORE_EPSILON
from swisspairing.exceptions import InvariantViolationException
from swisspairing.models.tournament import (
    Board,
    FloatDirection,
    PairingGap,
    PairingHistory,
    Round,
)
from swisspairing.pairing.colors import ColorAllocator
from swisspairing.pairing.dutch_swiss import Pair, PairingOutcome
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


def board_order_key(pair: Pair):
    """Combined score descending, then the higher rating in the pair, then ids."""
    p1, p2 = pair
    return (
        -(p1.score + p2.score),
        -max(p1.rating, p2.rating),
        min(p1.id, p2.id),
    )


def float_directions(pairs: Sequence[Pair]) -> Dict[int, FloatDirection]:
    """Registrations paired against an opponent with a different score."""
    floaters: Dict[int, FloatDirection] = {}
    for p1, p2 in pairs:
        if abs(p1.score - p2.score) <= SCORE_EPSILON:
            continue
        higher, lower = (p1, p2) if p1.score > p2.score else (p2, p1)
        floaters[higher.id] = FloatDirection.DOWN
        floaters[lower.id] = FloatDirection.UP
    return {reg_id: floaters[reg_id] for reg_id in sorted(floaters)}


class RoundAssembler:
    """Turns a pairing outcome into a validated :class:`Round`."""

    def __init__(self, config: EngineConfig, allocator: Optional[ColorAllocator] = None):
        self.config = config
        self.allocator = allocator or ColorAllocator()

    def assemble(
        self,
        round_number: int,
        outcome: PairingOutcome,
        bye_gaps: List[PairingGap],
        absence_gaps: List[PairingGap],
        participant_ids: Sequence[int],
        history: PairingHistory,
    ) -> Round:
        """Order boards, allocate colours and validate the round.

        Raises
        ------
        InvariantViolationException
            If the round pairs a registration twice, omits a participant,
            includes a non-participant or repeats a historical pairing.
        """
        ordered = sorted(outcome.pairs, key=board_order_key)
        if round_number == 1 and self.config.alternate_first_round_colors:
            colored = self.allocator.allocate_first_round(
                ordered, self.config.initial_color
            )
        else:
            colored = [self.allocator.allocate(p1, p2) for p1, p2 in ordered]

        boards = tuple(
            Board(board_number=number, white_id=white.id, black_id=black.id)
            for number, (white, black) in enumerate(colored, start=1)
        )
        new_round = Round(
            round_number=round_number,
            boards=boards,
            gaps=tuple(bye_gaps) + tuple(absence_gaps),
            floaters=float_directions(outcome.pairs),
        )
        self.validate(new_round, participant_ids, history)
        logger.info(
            "Assembled round %d: %d board(s), bye: %s",
            round_number,
            len(boards),
            new_round.bye_id,
        )
        return new_round

    def validate(
        self, new_round: Round, participant_ids: Sequence[int], history: PairingHistory
    ) -> None:
        """Check the global invariants of an assembled round."""
        seen: Dict[int, str] = {}

        def place(registration_id: int, where: str) -> None:
            if registration_id in seen:
                self._violation(
                    f"Registration {registration_id} appears on {seen[registration_id]} "
                    f"and on {where} of round {new_round.round_number}"
                )
            seen[registration_id] = where

        for board in new_round.boards:
            where = f"board {board.board_number}"
            if board.white_id == board.black_id:
                self._violation(f"Registration {board.white_id} paired with itself")
            if history.have_played(board.white_id, board.black_id):
                self._violation(
                    f"Rematch between {board.white_id} and {board.black_id} "
                    f"on board {board.board_number}"
                )
            place(board.white_id, where)
            place(board.black_id, where)

        byes = [gap for gap in new_round.gaps if gap.is_bye]
        if len(byes) > 1:
            self._violation(f"Round {new_round.round_number} has {len(byes)} byes")
        for gap in byes:
            place(gap.registration_id, "the bye")

        expected = set(participant_ids)
        placed = set(seen)
        missing = sorted(expected - placed)
        unexpected = sorted(placed - expected)
        if missing:
            self._violation(f"Registrations {missing} are neither paired nor bye'd")
        if unexpected:
            self._violation(f"Registrations {unexpected} do not take part in the round")

        numbers = [board.board_number for board in new_round.boards]
        if numbers != list(range(1, len(numbers) + 1)):
            self._violation(f"Board numbers are not consecutive: {numbers}")

    @staticmethod
    def _violation(message: str) -> None:
        logger.error("Invariant violation: %s", message)
        raise InvariantViolationException(message)
