"""Dutch Swiss Pairing System Implementation."""

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
from itertools import combinations, islice
from typing import FrozenSet, Iterator, List, Optional, Sequence, Set, Tuple

from swisspairing.config import EngineConfig
from swisspairing.exceptions import PairingInfeasibleException
from swisspairing.models.tournament import FloatDirection, PairingHistory
from swisspairing.pairing.byes import ByeResolver
from swisspairing.pairing.score_groups import (
    ScoreGroup,
    build_score_groups,
    pairing_order_key,
)
from swisspairing.pairing.standings import PlayerStanding
from swisspairing.utils import setup_logger

logger = setup_logger(__name__)

Pair = Tuple[PlayerStanding, PlayerStanding]


class _SearchExhausted(Exception):
    """Raised internally when the backtracking step limit runs out."""


@dataclass
class PairingOutcome:
    """Pairs produced for a round, before colours and board numbers.

    Attributes
    ----------
    pairs : list of tuple of PlayerStanding
        Unordered pairs, higher score group first.
    bye : PlayerStanding or None
        Bye recipient when the number of players is odd.
    relaxed : bool
        Whether two players downfloated into the same group had to be
        paired with each other.
    """

    pairs: List[Pair] = field(default_factory=list)
    bye: Optional[PlayerStanding] = None
    relaxed: bool = False


def _outward(index: int, size: int) -> Iterator[int]:
    """Yield index, index+1, index-1, index+2, ... within range(size)."""
    if 0 <= index < size:
        yield index
    for offset in range(1, size):
        if index + offset < size:
            yield index + offset
        if 0 <= index - offset < size:
            yield index - offset


def _carried_order_key(player: PlayerStanding):
    """Downfloaters enter a group highest score first, then by rating."""
    return (-player.score, -player.rating, player.id)


def _float_preference(
    candidates: Sequence[PlayerStanding], carried_ids: Set[int]
) -> List[PlayerStanding]:
    """Order in which players of a group are chosen to downfloat.

    Residents come first: fewest previous downfloats, then not downfloated
    last round, then lowest rating. Players already carried into the group
    come last, lowest score first.
    """
    residents = [p for p in candidates if p.id not in carried_ids]
    carried = [p for p in candidates if p.id in carried_ids]
    residents.sort(
        key=lambda p: (
            p.downfloats,
            p.last_float is FloatDirection.DOWN,
            p.rating,
            -p.id,
        )
    )
    carried.sort(key=lambda p: (p.score, p.rating, -p.id))
    return residents + carried


def _ids(players: Sequence[PlayerStanding]) -> List[int]:
    return [p.id for p in players]


def create_dutch_swiss_pairings(
    players: Sequence[PlayerStanding],
    history: PairingHistory,
    bye_resolver: ByeResolver,
    config: Optional[EngineConfig] = None,
) -> PairingOutcome:
    """
    Pair a Swiss round with the Dutch system.

    - players: standings of every registration taking part in the round
    - history: every pairing already played in the tournament
    - bye_resolver: chooses the bye candidates when the count is odd
    - config: search bounds

    Returns the unordered pairs and the bye recipient.
    Raises PairingInfeasibleException when no rematch-free pairing is found.
    """
    return DutchSwissPairer(history, config or EngineConfig()).pair(
        players, bye_resolver
    )


class DutchSwissPairer:
    """Bounded backtracking search over score groups.

    Score groups are processed from the highest score down. Each group,
    together with the players downfloated into it, sends the fewest possible
    players further down, pairs the rest upper half against lower half and
    resolves rematches by exchanging partners outward from the natural one.
    When the lower groups cannot absorb a set of downfloaters the search
    backtracks and tries the next set, then a larger one.
    """

    def __init__(self, history: PairingHistory, config: EngineConfig):
        self.history = history
        self.config = config
        self._groups: List[ScoreGroup] = []
        self._strict = True
        self._steps = 0
        self._nodes = 0
        self._failed: Set[Tuple[int, FrozenSet[int]]] = set()
        self._conflicts: List[PlayerStanding] = []
        self._deepest_failure: Tuple[int, List[int]] = (-1, [])

    # ========== Entry point ==========

    def pair(
        self, players: Sequence[PlayerStanding], bye_resolver: ByeResolver
    ) -> PairingOutcome:
        """Pair ``players``, choosing a bye first when their number is odd."""
        players = sorted(players, key=pairing_order_key)
        if len(players) % 2 == 1:
            bye_tiers: List[List[Optional[PlayerStanding]]] = [
                list(tier) for tier in bye_resolver.candidate_tiers(players)
            ]
        else:
            bye_tiers = [[None]]

        for tier_index, bye_candidates in enumerate(bye_tiers):
            if tier_index > 0:
                logger.warning(
                    "No player with %d bye(s) can take the bye without "
                    "forcing a rematch, trying players with %d",
                    bye_tiers[tier_index - 1][0].byes,
                    bye_candidates[0].byes,
                )
            outcome = self._pair_with_byes(players, bye_candidates)
            if outcome is not None:
                return outcome

        index, conflicting = self._deepest_failure
        logger.warning(
            "Pairing infeasible: score group %d could not be paired without a "
            "rematch, players %s",
            index,
            conflicting,
        )
        raise PairingInfeasibleException(
            "No pairing without a rematch could be found for players "
            f"{conflicting}",
            conflicting,
        )

    def _pair_with_byes(
        self,
        players: List[PlayerStanding],
        bye_candidates: List[Optional[PlayerStanding]],
    ) -> Optional[PairingOutcome]:
        """Strict then relaxed pass over one tier of bye candidates."""
        for strict in (True, False):
            if not strict:
                logger.warning(
                    "No pairing keeps downfloaters apart, allowing players "
                    "downfloated into the same group to meet"
                )
            for bye in bye_candidates:
                rest = [p for p in players if bye is None or p.id != bye.id]
                pairs = self._pair_all(rest, strict)
                if pairs is not None:
                    if bye is not None:
                        logger.debug("Bye assigned to registration %d", bye.id)
                    return PairingOutcome(pairs=pairs, bye=bye, relaxed=not strict)
                if bye is not None:
                    logger.debug(
                        "No valid pairing with a bye for registration %d", bye.id
                    )
        return None

    def _pair_all(
        self, players: List[PlayerStanding], strict: bool
    ) -> Optional[List[Pair]]:
        self._groups = build_score_groups(players)
        self._strict = strict
        self._steps = 0
        self._failed = set()
        try:
            return self._pair_groups(0, [])
        except _SearchExhausted:
            logger.warning(
                "Backtracking limit of %d steps exhausted",
                self.config.max_backtrack_steps,
            )
            return None

    # ========== Score groups ==========

    def _pair_groups(
        self, index: int, carried: List[PlayerStanding]
    ) -> Optional[List[Pair]]:
        """Pair group ``index`` and every lower group, or None."""
        state = (index, frozenset(_ids(carried)))
        if state in self._failed:
            return None
        self._steps += 1
        if self._steps > self.config.max_backtrack_steps:
            raise _SearchExhausted()

        if index == len(self._groups):
            return [] if not carried else None

        group = self._groups[index]
        carried = sorted(carried, key=_carried_order_key)
        candidates = carried + group.players
        carried_ids = set(_ids(carried))
        is_last = index == len(self._groups) - 1

        promoted: List[int] = []
        preference = _float_preference(candidates, carried_ids)
        max_floaters = 0 if is_last else len(candidates)
        for count in range(len(candidates) % 2, max_floaters + 1, 2):
            order = [p for p in preference if p.id in promoted]
            order.sort(key=lambda p: promoted.index(p.id))
            order += [p for p in preference if p.id not in promoted]
            options = islice(combinations(order, count), self.config.max_floater_options)
            for floaters in options:
                floater_ids = set(_ids(floaters))
                remaining = [p for p in candidates if p.id not in floater_ids]
                pairs = self._pair_bracket(remaining, carried_ids)
                if pairs is None:
                    for player in self._conflicts:
                        if player.id not in promoted and player.id not in floater_ids:
                            promoted.append(player.id)
                    continue
                rest = self._pair_groups(index + 1, list(floaters))
                if rest is not None:
                    if floaters:
                        logger.debug(
                            "Score group %s: downfloating %s", group.score, _ids(floaters)
                        )
                    return pairs + rest

        self._failed.add(state)
        if index >= self._deepest_failure[0]:
            self._deepest_failure = (index, sorted(_ids(candidates)))
        return None

    # ========== Brackets ==========

    def _compatible(
        self, p1: PlayerStanding, p2: PlayerStanding, carried_ids: Set[int]
    ) -> bool:
        if self.history.have_played(p1.id, p2.id):
            return False
        if self._strict and p1.id in carried_ids and p2.id in carried_ids:
            return False
        return True

    def _pair_bracket(
        self, players: List[PlayerStanding], carried_ids: Set[int]
    ) -> Optional[List[Pair]]:
        """Pair every player of an even-sized bracket, or None.

        ``self._conflicts`` is set to the players blocking a pairing when
        None is returned.
        """
        self._conflicts = []
        if not players:
            return []

        isolated = [
            p
            for p in players
            if not any(
                q.id != p.id and self._compatible(p, q, carried_ids) for q in players
            )
        ]
        if isolated:
            self._conflicts = isolated
            return None

        half = len(players) // 2
        upper, lower = players[:half], players[half:]
        self._nodes = 0
        pairs = self._match_halves(upper, lower, carried_ids)
        if pairs is None:
            self._nodes = 0
            pairs = self._match_any(players, carried_ids)
            if pairs is not None:
                logger.debug(
                    "Paired bracket %s by exchanging players between halves",
                    _ids(players),
                )
        return pairs

    def _match_halves(
        self,
        upper: List[PlayerStanding],
        lower: List[PlayerStanding],
        carried_ids: Set[int],
    ) -> Optional[List[Pair]]:
        """Pair upper[i] with lower[i], exchanging lower players outward on rematches."""
        used = [False] * len(lower)
        chosen: List[int] = []
        deepest = [-1]

        def search(i: int) -> bool:
            if i == len(upper):
                return True
            self._nodes += 1
            if self._nodes > self.config.max_exchange_nodes:
                return False
            for j in _outward(i, len(lower)):
                if used[j] or not self._compatible(upper[i], lower[j], carried_ids):
                    continue
                used[j] = True
                chosen.append(j)
                if search(i + 1):
                    return True
                used[j] = False
                chosen.pop()
            if i > deepest[0]:
                deepest[0] = i
            return False

        if not search(0):
            if deepest[0] >= 0:
                self._conflicts = [upper[deepest[0]]]
            return None

        exchanges = sum(1 for i, j in enumerate(chosen) if i != j)
        if exchanges:
            logger.debug(
                "Resolved rematches in bracket %s with %d exchange(s)",
                _ids(upper + lower),
                exchanges,
            )
        return [(upper[i], lower[j]) for i, j in enumerate(chosen)]

    def _match_any(
        self, players: List[PlayerStanding], carried_ids: Set[int]
    ) -> Optional[List[Pair]]:
        """Pair the bracket without the half boundary.

        The first unpaired player takes the partner closest to the middle of
        the remaining list, searching outward from there.
        """
        pairs: List[Pair] = []

        def search(remaining: List[PlayerStanding]) -> bool:
            if not remaining:
                return True
            self._nodes += 1
            if self._nodes > self.config.max_exchange_nodes:
                return False
            first, rest = remaining[0], remaining[1:]
            for k in _outward(len(remaining) // 2 - 1, len(rest)):
                partner = rest[k]
                if not self._compatible(first, partner, carried_ids):
                    continue
                pairs.append((first, partner))
                if search(rest[:k] + rest[k + 1 :]):
                    return True
                pairs.pop()
            return False

        if search(list(players)):
            return pairs
        return None
