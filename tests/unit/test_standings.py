"""
Tests for standings aggregation and rank assignment.
"""
import itertools
import random

import pytest

from bracketboard.calculation.standings import aggregate, compute_standings, rank
from bracketboard.models.enums import Classification
from bracketboard.models.standing import BracketThresholds, TeamRecord
from conftest import make_match, make_teams


def records_of(standings):
    return {row.team.id: (row.wins, row.losses, row.rank) for row in standings}


class TestAggregate:
    def test_all_teams_start_at_zero(self):
        teams = make_teams(1, 2, 3)
        records = aggregate(teams, [])
        assert records == {1: TeamRecord(), 2: TeamRecord(), 3: TeamRecord()}

    def test_counts_effective_winners(self):
        teams = make_teams(1, 2, 3)
        matches = [
            make_match(1, 2, winner_id=1),
            make_match(2, 3, predicted=3),
            make_match(1, 3),  # undecided, no pick
        ]
        records = aggregate(teams, matches)
        assert (records[1].wins, records[1].losses) == (1, 0)
        assert (records[2].wins, records[2].losses) == (0, 2)
        assert (records[3].wins, records[3].losses) == (1, 0)

    def test_team2_can_win(self):
        records = aggregate(make_teams(1, 2), [make_match(1, 2, winner_id=2)])
        assert records[2].wins == 1
        assert records[1].losses == 1

    def test_unknown_team_is_skipped(self):
        teams = make_teams(1, 2)
        matches = [make_match(1, 99, winner_id=1), make_match(1, 2, winner_id=2)]
        records = aggregate(teams, matches)
        assert records[1] == TeamRecord(wins=0, losses=1)
        assert 99 not in records

    def test_winner_outside_match_is_skipped(self):
        teams = make_teams(1, 2, 3)
        records = aggregate(teams, [make_match(1, 2, winner_id=3)])
        assert all(r == TeamRecord() for r in records.values())

    def test_order_of_matches_does_not_matter(self):
        teams = make_teams(1, 2, 3, 4)
        matches = [
            make_match(1, 2, winner_id=1),
            make_match(3, 4, predicted=4),
            make_match(1, 3, winner_id=3, predicted=None),
            make_match(2, 4, winner_id=2),
        ]
        expected = aggregate(teams, matches)
        for perm in itertools.permutations(matches):
            assert aggregate(teams, list(perm)) == expected

    def test_order_independence_on_random_season(self):
        rng = random.Random(7)
        teams = make_teams(*range(1, 9))
        matches = []
        for a, b in itertools.combinations(range(1, 9), 2):
            choice = rng.choice(["decided", "predicted", "cleared", "open"])
            if choice == "decided":
                matches.append(make_match(a, b, winner_id=rng.choice([a, b])))
            elif choice == "predicted":
                matches.append(make_match(a, b, predicted=rng.choice([a, b])))
            elif choice == "cleared":
                matches.append(make_match(a, b, predicted=None))
            else:
                matches.append(make_match(a, b))
        expected = aggregate(teams, matches)
        for _ in range(20):
            shuffled = matches[:]
            rng.shuffle(shuffled)
            assert aggregate(teams, shuffled) == expected


class TestRank:
    def _rank(self, tallies, thresholds=None):
        teams = make_teams(*range(1, len(tallies) + 1))
        standings = {
            i: TeamRecord(wins=w, losses=l) for i, (w, l) in enumerate(tallies, start=1)
        }
        return rank(standings, {t.id: t for t in teams}, thresholds or BracketThresholds())

    def test_sorted_by_wins_then_losses(self):
        ranked = self._rank([(1, 2), (3, 0), (1, 1), (2, 1)])
        assert [r.team.id for r in ranked] == [2, 4, 3, 1]
        assert [r.rank for r in ranked] == [1, 2, 3, 4]

    def test_ties_share_rank_and_leave_gap(self):
        ranked = self._rank([(2, 0), (2, 0), (1, 1), (0, 2)])
        assert [r.rank for r in ranked] == [1, 1, 3, 4]

    def test_four_way_tie_then_rank_five(self):
        ranked = self._rank([(1, 1)] * 4 + [(0, 2)])
        assert [r.rank for r in ranked] == [1, 1, 1, 1, 5]

    def test_ties_keep_input_order(self):
        ranked = self._rank([(0, 1), (1, 0), (0, 1), (1, 0)])
        assert [r.team.id for r in ranked] == [2, 4, 1, 3]

    def test_same_wins_different_losses_are_not_tied(self):
        ranked = self._rank([(2, 2), (2, 1)])
        assert [(r.team.id, r.rank) for r in ranked] == [(2, 1), (1, 2)]

    def test_classification_boundaries(self):
        # Eight distinct records -> ranks 1..8
        ranked = self._rank([(8 - i, i) for i in range(8)])
        by_rank = {r.rank: r.classification for r in ranked}
        assert by_rank[4] == Classification.WINNERS
        assert by_rank[5] == Classification.LOSERS
        assert by_rank[6] == Classification.LOSERS
        assert by_rank[7] == Classification.ELIMINATED

    def test_classification_follows_rank_not_position(self):
        # Positions 4-6 are tied at rank 4, so all of them make the winners bracket
        ranked = self._rank([(5, 0), (4, 1), (3, 2), (2, 3), (2, 3), (2, 3), (0, 5)])
        assert [r.rank for r in ranked] == [1, 2, 3, 4, 4, 4, 7]
        assert [r.classification for r in ranked[3:6]] == [Classification.WINNERS] * 3
        assert ranked[6].classification == Classification.ELIMINATED

    def test_custom_thresholds(self):
        thresholds = BracketThresholds(winners_max_rank=2, losers_max_rank=3)
        ranked = self._rank([(3, 0), (2, 1), (1, 2), (0, 3)], thresholds)
        assert [r.classification for r in ranked] == [
            Classification.WINNERS,
            Classification.WINNERS,
            Classification.LOSERS,
            Classification.ELIMINATED,
        ]

    def test_unknown_team_in_standings_is_skipped(self):
        teams = {t.id: t for t in make_teams(1, 2)}
        standings = {
            1: TeamRecord(wins=0, losses=1),
            99: TeamRecord(wins=5, losses=0),
            2: TeamRecord(wins=1, losses=0),
        }
        ranked = rank(standings, teams, BracketThresholds())
        assert [(r.team.id, r.rank) for r in ranked] == [(2, 1), (1, 2)]

    def test_thresholds_must_be_ordered(self):
        with pytest.raises(ValueError):
            BracketThresholds(winners_max_rank=5, losers_max_rank=3)


def test_compute_standings_scenario(four_teams, scenario_matches):
    standings = compute_standings(four_teams, scenario_matches, BracketThresholds())
    assert records_of(standings) == {
        1: (1, 0, 1),
        3: (1, 0, 1),
        2: (0, 1, 3),
        4: (0, 1, 3),
    }
    assert [row.team.id for row in standings] == [1, 3, 2, 4]
    assert standings[0].record == "1 - 0"


def test_compute_standings_uses_configured_thresholds(four_teams):
    standings = compute_standings(four_teams, [])
    # Defaults: everyone tied at rank 1
    assert {row.classification for row in standings} == {Classification.WINNERS}
