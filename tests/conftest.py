from typing import Dict, List, Optional, Sequence, Tuple

import pytest

from swisspairing.controllers import (
    InMemoryTournamentStore,
    ResultRecorder,
    RoundManager,
    TournamentLocks,
)
from swisspairing.engine import SwissPairingEngine
from swisspairing.models.player import Player
from swisspairing.models.tournament import (
    GameResult,
    Pairing,
    PairingGap,
    Registration,
    RegistrationStatus,
    TournamentInfo,
    TournamentSnapshot,
)

# (white_id, black_id, result notation) of one board
BoardSpec = Tuple[int, int, Optional[str]]

DEFAULT_RATINGS = {1: 2000, 2: 1900, 3: 1800, 4: 1700, 5: 1600, 6: 1500}


def build_snapshot(
    ratings: Dict[int, int],
    rounds: Sequence[Sequence[BoardSpec]] = (),
    byes: Optional[Dict[int, int]] = None,
    num_rounds: int = 5,
    statuses: Optional[Dict[int, RegistrationStatus]] = None,
    joined: Optional[Dict[int, int]] = None,
    absence_scores: Optional[Dict[int, float]] = None,
    extra_gaps: Sequence[PairingGap] = (),
) -> TournamentSnapshot:
    """Snapshot with one registration per rating and the given round history.

    ``byes`` maps round number -> registration given a full point bye.
    """
    statuses = statuses or {}
    joined = joined or {}
    registrations = [
        Registration(
            id=reg_id,
            player_id=reg_id,
            name=f"Player {reg_id}",
            rating=rating,
            status=statuses.get(reg_id, RegistrationStatus.ACTIVE),
            joined_round=joined.get(reg_id, 1),
        )
        for reg_id, rating in sorted(ratings.items())
    ]
    pairings: List[Pairing] = []
    for round_number, boards in enumerate(rounds, start=1):
        for board_number, (white, black, result) in enumerate(boards, start=1):
            pairings.append(
                Pairing(
                    id=len(pairings) + 1,
                    round_number=round_number,
                    board_number=board_number,
                    white_id=white,
                    black_id=black,
                    result=GameResult.from_str(result),
                )
            )
    gaps = [
        PairingGap(registration_id=reg_id, round_number=round_number, score=1.0, is_bye=True)
        for round_number, reg_id in sorted((byes or {}).items())
    ]
    gaps.extend(extra_gaps)
    return TournamentSnapshot(
        tournament=TournamentInfo(
            id=1, name="Test Open", num_rounds=num_rounds, current_round=len(rounds)
        ),
        registrations=registrations,
        pairings=pairings,
        gaps=gaps,
        absence_scores=absence_scores or {},
    )


@pytest.fixture
def engine():
    return SwissPairingEngine()


@pytest.fixture
def store():
    return InMemoryTournamentStore()


@pytest.fixture
def locks():
    return TournamentLocks()


@pytest.fixture
def round_manager(store, engine, locks):
    return RoundManager(store, engine, locks)


@pytest.fixture
def result_recorder(store, engine, locks):
    return ResultRecorder(store, engine, locks)


@pytest.fixture
def tournament(store):
    """A five round tournament with four registered players."""
    info = store.create_tournament("Club Championship", 5)
    for player_id, rating in sorted(DEFAULT_RATINGS.items())[:4]:
        store.add_player(
            Player(id=player_id, name=f"Player {player_id}", rating_standard=rating)
        )
        store.register(info.id, player_id)
    return info
