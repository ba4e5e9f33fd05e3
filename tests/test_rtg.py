from swisspairing.testing.rtg import (
    RandomTournamentGenerator,
    RatingDistribution,
    ResultPattern,
    RTGConfig,
    create_normal_tournament,
    create_small_tournament,
)


def test_tournament_respects_absolute_criteria():
    config = RTGConfig(num_players=10, num_rounds=4, seed=123)
    generator = RandomTournamentGenerator(config)
    tournament = generator.generate_complete_tournament()

    assert tournament["stopped"] is None
    assert len(tournament["rounds"]) == generator.config.num_rounds
    assert not tournament["report"].violations


def test_no_duplicate_or_self_pairings():
    config = RTGConfig(
        num_players=20,
        num_rounds=6,
        rating_distribution=RatingDistribution.CLUB,
        result_pattern=ResultPattern.BALANCED,
        seed=321,
    )
    tournament = RandomTournamentGenerator(config).generate_complete_tournament()

    met = set()
    for new_round in tournament["rounds"]:
        seen = set()
        for white, black in new_round.pairs:
            assert white != black
            assert white not in seen and black not in seen
            seen.update((white, black))
            assert frozenset((white, black)) not in met
            met.add(frozenset((white, black)))


def test_withdrawals_and_late_joiners_keep_history_valid():
    generator = create_normal_tournament(num_players=24, seed=7)
    tournament = generator.generate_complete_tournament()

    assert not tournament["report"].violations
    snapshot = tournament["snapshot"]
    assert len(snapshot.registrations) == 26


def test_same_seed_gives_same_tournament():
    first = create_small_tournament(num_players=9, seed=99).generate_complete_tournament()
    second = create_small_tournament(num_players=9, seed=99).generate_complete_tournament()
    assert [r.pairs for r in first["rounds"]] == [r.pairs for r in second["rounds"]]
    assert first["snapshot"].to_dict() == second["snapshot"].to_dict()
