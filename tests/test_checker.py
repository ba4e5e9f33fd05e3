from conftest import DEFAULT_RATINGS, build_snapshot
from swisspairing.models.tournament import PairingGap
from swisspairing.validation import CriterionStatus, HistoryChecker

FOUR = {k: DEFAULT_RATINGS[k] for k in (1, 2, 3, 4)}
FIVE = {k: DEFAULT_RATINGS[k] for k in (1, 2, 3, 4, 5)}


def _violated(report):
    return sorted({v.criterion_id for v in report.violations})


def test_clean_history_is_valid():
    snapshot = build_snapshot(
        FOUR, rounds=[[(1, 3, "1-0"), (2, 4, "1-0")], [(2, 1, "1/2-1/2"), (3, 4, "0-1")]]
    )
    report = HistoryChecker().check(snapshot)
    assert report.is_valid
    assert report.compliance_percentage == 100.0


def test_no_rounds_is_not_applicable():
    report = HistoryChecker().check(build_snapshot(FOUR))
    assert report.overall_status is CriterionStatus.NOT_APPLICABLE
    assert report.is_valid


def test_repeat_pairing_is_reported():
    snapshot = build_snapshot(
        FOUR, rounds=[[(1, 3, "1-0"), (2, 4, "1-0")], [(3, 1, "1-0"), (2, 4, "1-0")]]
    )
    assert _violated(HistoryChecker().check(snapshot)) == ["H1"]


def test_missing_registration_is_reported():
    snapshot = build_snapshot(FIVE, rounds=[[(1, 3, "1-0"), (2, 4, "1-0")]])
    assert _violated(HistoryChecker().check(snapshot)) == ["H2"]


def test_bye_with_even_player_count_is_reported():
    snapshot = build_snapshot(
        FIVE,
        rounds=[[(1, 3, "1-0")]],
        byes={1: 5},
        extra_gaps=[
            PairingGap(registration_id=2, round_number=1, score=1.0, is_bye=True),
            PairingGap(registration_id=4, round_number=1, score=0.0, is_bye=False),
        ],
    )
    assert "H3" in _violated(HistoryChecker().check(snapshot))


def test_second_bye_is_reported():
    snapshot = build_snapshot(
        FIVE,
        rounds=[[(1, 3, "1-0"), (2, 4, "1-0")], [(1, 2, "1-0"), (3, 4, "1-0")]],
        byes={1: 5, 2: 5},
    )
    report = HistoryChecker().check(snapshot)
    assert _violated(report) == ["H4"]


def test_long_colour_streak_is_a_warning():
    snapshot = build_snapshot(
        FOUR,
        rounds=[
            [(1, 3, "1-0"), (2, 4, "1-0")],
            [(1, 2, "1-0"), (3, 4, "1-0")],
            [(1, 4, "1-0"), (2, 3, "1-0")],
        ],
    )
    report = HistoryChecker().check(snapshot)
    assert report.is_valid
    assert {w.criterion_id for w in report.quality_warnings} == {"Q1"}


def test_second_bye_is_fair_when_nobody_else_could_sit_out():
    snapshot = build_snapshot(
        FIVE,
        rounds=[
            [(1, 4, "1/2-1/2"), (2, 5, "1/2-1/2")],
            [(4, 3, "1/2-1/2"), (5, 1, "1/2-1/2")],
            [(3, 5, "1/2-1/2"), (4, 2, "1/2-1/2")],
            [(1, 2, "1-0"), (4, 5, "0-1")],
        ],
        byes={1: 3, 2: 2, 3: 1, 4: 3},
    )
    assert HistoryChecker().check(snapshot).is_valid
