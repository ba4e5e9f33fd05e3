from conftest import DEFAULT_RATINGS, build_snapshot
from swisspairing.models.tournament import FloatDirection, PairingGap
from swisspairing.pairing import StandingsCalculator
from swisspairing.type_hints import BLACK, WHITE

FOUR = {k: DEFAULT_RATINGS[k] for k in (1, 2, 3, 4)}


def test_scores_colors_and_opponents():
    snapshot = build_snapshot(
        FOUR,
        rounds=[
            [(1, 3, "1-0"), (2, 4, "1/2-1/2")],
            [(4, 1, "0-1"), (3, 2, "0-1")],
        ],
    )
    standings = StandingsCalculator().calculate(snapshot)
    assert standings[1].score == 2.0
    assert standings[2].score == 1.5
    assert standings[4].score == 0.5
    assert standings[3].score == 0.0
    assert standings[1].colors == [WHITE, BLACK]
    assert standings[1].opponents == {3, 4}
    assert standings[2].color_streak == (BLACK, 1)


def test_forfeit_counts_as_meeting_without_color():
    snapshot = build_snapshot(FOUR, rounds=[[(1, 3, "1-0 FF"), (2, 4, "0-0 FF")]])
    standings = StandingsCalculator().calculate(snapshot)
    assert standings[1].score == 1.0
    assert standings[1].colors == []
    assert standings[3].opponents == {1}
    assert standings[2].score == standings[4].score == 0.0


def test_through_round_limits_the_replay():
    snapshot = build_snapshot(
        FOUR,
        rounds=[
            [(1, 3, "1-0"), (2, 4, "1-0")],
            [(1, 2, "1/2-1/2"), (3, 4, "1-0")],
        ],
    )
    standings = StandingsCalculator().calculate(snapshot, through_round=1)
    assert standings[1].score == 1.0
    assert standings[1].colors == [WHITE]


def test_floats_are_derived_from_scores_before_the_round():
    snapshot = build_snapshot(
        FOUR,
        rounds=[
            [(1, 3, "1-0"), (2, 4, "1/2-1/2")],
            [(2, 1, "0-1"), (3, 4, "1-0")],
        ],
    )
    standings = StandingsCalculator().calculate(snapshot)
    # round 2: 1 (1.0) met 2 (0.5), 3 (0.0) met 4 (0.5)
    assert standings[1].downfloats == 1
    assert standings[1].last_float is FloatDirection.DOWN
    assert standings[2].upfloats == 1
    assert standings[3].upfloats == 1
    assert standings[4].downfloats == 1
    assert standings[4].last_float is FloatDirection.DOWN


def test_gaps_add_their_score_and_count_byes():
    ratings = {k: DEFAULT_RATINGS[k] for k in (1, 2, 3, 4, 5)}
    snapshot = build_snapshot(
        ratings,
        rounds=[[(1, 3, "1-0"), (2, 4, "0-1")]],
        byes={1: 5},
    )
    standings = StandingsCalculator().calculate(snapshot)
    assert standings[5].score == 1.0
    assert standings[5].byes == 1
    assert standings[5].colors == []

    half_point = build_snapshot(
        ratings,
        rounds=[[(1, 3, "1-0"), (2, 4, "0-1")]],
        extra_gaps=[
            PairingGap(registration_id=5, round_number=1, score=0.5, is_bye=False)
        ],
    )
    standings = StandingsCalculator().calculate(half_point)
    assert standings[5].score == 0.5
    assert standings[5].byes == 0


def test_late_joiner_has_no_history():
    ratings = {k: DEFAULT_RATINGS[k] for k in (1, 2, 3, 4, 5)}
    snapshot = build_snapshot(
        ratings, rounds=[[(1, 3, "1-0"), (2, 4, "0-1")]], joined={5: 2}
    )
    standings = StandingsCalculator().calculate(snapshot)
    assert standings[5].score == 0.0
    assert standings[5].opponents == set()
