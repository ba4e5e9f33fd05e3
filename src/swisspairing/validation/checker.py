"""Pairing history checker: validates a whole tournament history."""

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
from typing import Dict, FrozenSet, List, Optional, Set

from swisspairing.constants import MAX_COLOR_STREAK
from swisspairing.models.tournament import (
    RegistrationStatus,
    TournamentSnapshot,
)
from swisspairing.pairing.standings import PlayerStanding, StandingsCalculator
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)


class CriterionStatus(Enum):
    """Status of a criterion check."""

    COMPLIANT = "COMPLIANT"
    VIOLATION = "VIOLATION"
    NOT_APPLICABLE = "NOT_APPLICABLE"


class ViolationType(Enum):
    """Types of criterion violations."""

    ABSOLUTE = "ABSOLUTE"  # H1-H4: must not happen
    QUALITY = "QUALITY"  # Q1-Q2: should be minimized


@dataclass
class CriterionResult:
    """Result of checking a single criterion in one round."""

    criterion: str
    status: CriterionStatus
    violation_type: Optional[ViolationType] = None
    description: str = ""
    details: Dict[str, object] = field(default_factory=dict)

    @property
    def criterion_id(self) -> str:
        """Extract criterion ID from criterion string."""
        return self.criterion.split(":")[0].strip()


@dataclass
class ValidationReport:
    """Complete validation report for a tournament history."""

    total_criteria: int
    compliant_count: int
    violations: List[CriterionResult]
    overall_status: CriterionStatus
    summary: str
    quality_warnings: List[CriterionResult] = field(default_factory=list)

    @property
    def compliance_percentage(self) -> float:
        """Calculate compliance percentage."""
        if self.total_criteria == 0:
            return 100.0
        return (self.compliant_count / self.total_criteria) * 100.0

    @property
    def is_valid(self) -> bool:
        return not self.violations


def _compliant(criterion: str, description: str) -> CriterionResult:
    return CriterionResult(
        criterion=criterion, status=CriterionStatus.COMPLIANT, description=description
    )


def _violation(
    criterion: str, violation_type: ViolationType, description: str, **details
) -> CriterionResult:
    return CriterionResult(
        criterion=criterion,
        status=CriterionStatus.VIOLATION,
        violation_type=violation_type,
        description=description,
        details=dict(details),
    )


def _can_pair_without_rematch(
    reg_ids: Set[int], before: Dict[int, PlayerStanding]
) -> bool:
    """Whether ``reg_ids`` split into pairs that have never met."""
    failed: Set[FrozenSet[int]] = set()

    def search(remaining: FrozenSet[int]) -> bool:
        if not remaining:
            return True
        if remaining in failed:
            return False
        first = min(remaining)
        for other in sorted(remaining - {first}):
            if other in before[first].opponents:
                continue
            if search(remaining - {first, other}):
                return True
        failed.add(remaining)
        return False

    return len(reg_ids) % 2 == 0 and search(frozenset(reg_ids))


class HistoryChecker:
    """Checks every generated round of a snapshot.

    Absolute criteria:
    - H1: no two registrations meet more than once
    - H2: every active registration appears exactly once per round
    - H3: at most one bye per round, and only with an odd number of players
    - H4: no repeat bye while a player with fewer byes could take it

    Quality criteria (reported as warnings):
    - Q1: no colour streak longer than two
    - Q2: the bye goes to a player of the lowest score among eligible players
    """

    def __init__(self):
        self.calculator = StandingsCalculator()

    def check(self, snapshot: TournamentSnapshot) -> ValidationReport:
        """Validate the full history of ``snapshot``."""
        logger.info(
            "Checking %d round(s) of tournament %s",
            snapshot.current_round,
            snapshot.tournament.id,
        )
        if snapshot.current_round == 0:
            return ValidationReport(
                total_criteria=0,
                compliant_count=0,
                violations=[],
                overall_status=CriterionStatus.NOT_APPLICABLE,
                summary="No rounds to validate",
            )

        results: List[CriterionResult] = []
        previous_matches: Set[frozenset] = set()
        for round_number in range(1, snapshot.current_round + 1):
            before = self.calculator.calculate(snapshot, through_round=round_number - 1)
            after = self.calculator.calculate(snapshot, through_round=round_number)
            round_results = [
                self._check_h1_no_repeats(snapshot, round_number, previous_matches),
                self._check_h2_completeness(snapshot, round_number),
                self._check_h3_single_bye(snapshot, round_number),
                self._check_h4_bye_fairness(snapshot, round_number, before),
                self._check_q1_color_streaks(snapshot, round_number, after),
                self._check_q2_bye_score(snapshot, round_number, before),
            ]
            for result in round_results:
                result.details["round"] = round_number
            results.extend(round_results)
            for pairing in snapshot.pairings_in_round(round_number):
                previous_matches.add(pairing.players)

        violations = [
            r
            for r in results
            if r.status is CriterionStatus.VIOLATION
            and r.violation_type is ViolationType.ABSOLUTE
        ]
        warnings = [
            r
            for r in results
            if r.status is CriterionStatus.VIOLATION
            and r.violation_type is ViolationType.QUALITY
        ]
        applicable = [
            r for r in results if r.status is not CriterionStatus.NOT_APPLICABLE
        ]
        compliant = [r for r in applicable if r.status is CriterionStatus.COMPLIANT]

        if violations or warnings:
            ids = sorted({r.criterion_id for r in violations + warnings})
            summary = (
                f"History validation complete - {len(violations)} absolute "
                f"violations, {len(warnings)} quality warnings ({' '.join(ids)})"
            )
        else:
            summary = "History validation complete"
        if violations:
            logger.warning(summary)
        return ValidationReport(
            total_criteria=len(applicable),
            compliant_count=len(compliant),
            violations=violations,
            overall_status=(
                CriterionStatus.VIOLATION if violations else CriterionStatus.COMPLIANT
            ),
            summary=summary,
            quality_warnings=warnings,
        )

    # ========== Absolute criteria ==========

    def _check_h1_no_repeats(
        self, snapshot: TournamentSnapshot, round_number: int, previous: Set[frozenset]
    ) -> CriterionResult:
        """H1: Registrations shall not meet more than once."""
        seen = set(previous)
        for pairing in snapshot.pairings_in_round(round_number):
            if pairing.players in seen:
                return _violation(
                    "H1",
                    ViolationType.ABSOLUTE,
                    f"Repeat pairing: {pairing.white_id} vs {pairing.black_id}",
                    players=sorted(pairing.players),
                )
            seen.add(pairing.players)
        return _compliant("H1", "No repeat pairings found")

    def _check_h2_completeness(
        self, snapshot: TournamentSnapshot, round_number: int
    ) -> CriterionResult:
        """H2: Every active registration is paired, bye'd or absent exactly once."""
        appearances: Dict[int, int] = {}
        for pairing in snapshot.pairings_in_round(round_number):
            for reg_id in (pairing.white_id, pairing.black_id):
                appearances[reg_id] = appearances.get(reg_id, 0) + 1
        for gap in snapshot.gaps_in_round(round_number):
            appearances[gap.registration_id] = appearances.get(gap.registration_id, 0) + 1

        duplicated = sorted(reg_id for reg_id, count in appearances.items() if count > 1)
        missing = sorted(
            r.id
            for r in snapshot.registrations
            if r.status is not RegistrationStatus.WITHDRAWN
            and r.existed_in(round_number)
            and r.id not in appearances
        )
        early = sorted(
            r.id
            for r in snapshot.registrations
            if not r.existed_in(round_number) and r.id in appearances
        )
        if duplicated or missing or early:
            return _violation(
                "H2",
                ViolationType.ABSOLUTE,
                "Registrations omitted or duplicated",
                duplicated=duplicated,
                missing=missing,
                before_joining=early,
            )
        return _compliant("H2", "Every registration appears exactly once")

    def _check_h3_single_bye(
        self, snapshot: TournamentSnapshot, round_number: int
    ) -> CriterionResult:
        """H3: At most one bye, given only when the player count is odd."""
        byes = [g for g in snapshot.gaps_in_round(round_number) if g.is_bye]
        players = 2 * len(snapshot.pairings_in_round(round_number)) + len(byes)
        if len(byes) > 1 or (byes and players % 2 == 0):
            return _violation(
                "H3",
                ViolationType.ABSOLUTE,
                f"{len(byes)} bye(s) for {players} players",
                byes=[g.registration_id for g in byes],
            )
        return _compliant("H3", "Bye count matches player count")

    def _check_h4_bye_fairness(
        self,
        snapshot: TournamentSnapshot,
        round_number: int,
        before: Dict[int, PlayerStanding],
    ) -> CriterionResult:
        """H4: No repeat bye while a paired player with fewer byes could take it.

        A paired player only counts when the others could still have been
        paired without a rematch had that player taken the bye.
        """
        byes = [
            g.registration_id
            for g in snapshot.gaps_in_round(round_number)
            if g.is_bye
        ]
        if not byes:
            return CriterionResult(
                criterion="H4",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No bye assigned in this round",
            )
        bye_id = byes[0]
        paired = {
            reg_id
            for pairing in snapshot.pairings_in_round(round_number)
            for reg_id in (pairing.white_id, pairing.black_id)
        }
        participants = paired | {bye_id}
        bye_count = before[bye_id].byes
        better = sorted(
            reg_id
            for reg_id in paired
            if before[reg_id].byes < bye_count
            and _can_pair_without_rematch(participants - {reg_id}, before)
        )
        if better:
            return _violation(
                "H4",
                ViolationType.ABSOLUTE,
                f"Repeat bye: registration {bye_id}",
                registration_id=bye_id,
                bye_count=bye_count,
                eligible=better,
            )
        return _compliant("H4", f"Bye assignment valid: registration {bye_id}")

    # ========== Quality criteria ==========

    def _check_q1_color_streaks(
        self,
        snapshot: TournamentSnapshot,
        round_number: int,
        after: Dict[int, PlayerStanding],
    ) -> CriterionResult:
        """Q1: No player gets the same colour three times in a row."""
        offenders = []
        for pairing in snapshot.pairings_in_round(round_number):
            for reg_id in (pairing.white_id, pairing.black_id):
                _, length = after[reg_id].color_streak
                if length > MAX_COLOR_STREAK:
                    offenders.append(reg_id)
        if offenders:
            return _violation(
                "Q1",
                ViolationType.QUALITY,
                f"Colour streaks longer than {MAX_COLOR_STREAK}",
                players=sorted(set(offenders)),
            )
        return _compliant("Q1", "No long colour streaks")

    def _check_q2_bye_score(
        self,
        snapshot: TournamentSnapshot,
        round_number: int,
        before: Dict[int, PlayerStanding],
    ) -> CriterionResult:
        """Q2: The bye goes to the lowest score among players with as many byes."""
        byes = [
            g.registration_id
            for g in snapshot.gaps_in_round(round_number)
            if g.is_bye
        ]
        if not byes:
            return CriterionResult(
                criterion="Q2",
                status=CriterionStatus.NOT_APPLICABLE,
                description="No bye assigned in this round",
            )
        bye_id = byes[0]
        candidates = [bye_id] + [
            reg_id
            for pairing in snapshot.pairings_in_round(round_number)
            for reg_id in (pairing.white_id, pairing.black_id)
        ]
        tier = before[bye_id].byes
        lowest = min(
            before[reg_id].score for reg_id in candidates if before[reg_id].byes == tier
        )
        if before[bye_id].score > lowest:
            return _violation(
                "Q2",
                ViolationType.QUALITY,
                f"Bye given to registration {bye_id} with score "
                f"{before[bye_id].score}, lowest eligible score is {lowest}",
                registration_id=bye_id,
            )
        return _compliant("Q2", "Bye went to the lowest score")
