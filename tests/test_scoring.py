"""Unit tests for score mutators."""

import random

import pytest

from conftest import female, male, team
from partydraft.scoring import (
    average_score,
    format_average_score,
    leaderboard,
    set_player_score,
    update_player_score,
    update_team_score,
)


def get(teams, color):
    return next(t for t in teams if t.color == color)


class TestTeamScore:
    """Tests for update_team_score."""

    def test_adds_delta(self):
        teams = update_team_score([team('Red', score=4)], 'Red', 3)
        assert teams[0].score == 7

    def test_clamped_at_zero(self):
        teams = update_team_score([team('Red', score=4)], 'Red', -10)
        assert teams[0].score == 0

    def test_other_teams_untouched(self):
        teams = update_team_score([team('Red', score=1), team('Blue', score=2)], 'Blue', 5)
        assert [t.score for t in teams] == [1, 7]

    def test_unknown_color_is_noop(self):
        original = [team('Red', score=1)]
        teams = update_team_score(original, 'Purple', 5)
        assert teams[0].score == 1

    def test_input_not_mutated(self):
        original = [team('Red', score=1)]
        update_team_score(original, 'Red', 5)
        assert original[0].score == 1


class TestPlayerScore:
    """Tests for update_player_score."""

    def test_team_moves_by_applied_delta(self):
        """Test p1 on 3 given -100 drops to 0 and the team loses exactly 3."""
        teams = [team('Red', male('p1', score=3), female('p2', score=5), score=8)]
        updated = update_player_score(teams, 'Red', 'p1', -100)
        red = get(updated, 'Red')
        assert red.members[0].score == 0
        assert red.members[1].score == 5
        assert red.score == 5

    def test_positive_delta(self):
        teams = [team('Red', male('p1'))]
        updated = update_player_score(teams, 'Red', 'p1', 4)
        assert get(updated, 'Red').members[0].score == 4
        assert get(updated, 'Red').score == 4

    def test_unknown_player_leaves_scores(self):
        teams = [team('Red', male('p1', score=2), score=2)]
        updated = update_player_score(teams, 'Red', 'ghost', 9)
        assert get(updated, 'Red').score == 2

    def test_wrong_color_leaves_scores(self):
        teams = [team('Red', male('p1', score=2), score=2), team('Blue')]
        updated = update_player_score(teams, 'Blue', 'p1', 9)
        assert get(updated, 'Red').members[0].score == 2

    def test_input_not_mutated(self):
        teams = [team('Red', male('p1', score=2), score=2)]
        update_player_score(teams, 'Red', 'p1', 3)
        assert teams[0].members[0].score == 2
        assert teams[0].score == 2

    @pytest.mark.parametrize('seed', range(20))
    def test_floor_and_consistency(self, seed):
        """Test scores stay >= 0 and the team equals the sum of its members."""
        rng = random.Random(seed)
        teams = [team('Red', *[male(f'p{i}') for i in range(4)])]
        for _ in range(60):
            pid = f'p{rng.randrange(4)}'
            teams = update_player_score(teams, 'Red', pid, rng.randint(-6, 6))
            red = teams[0]
            assert red.score >= 0
            assert all(m.score >= 0 for m in red.members)
            assert red.score == sum(m.score for m in red.members)


class TestSetPlayerScore:
    """Tests for absolute score entry."""

    def test_sets_value_and_syncs_team(self):
        teams = [team('Red', male('p1', score=2), score=2)]
        updated = set_player_score(teams, 'Red', 'p1', 10)
        assert updated[0].members[0].score == 10
        assert updated[0].score == 10

    def test_negative_becomes_zero(self):
        teams = [team('Red', male('p1', score=2), score=2)]
        updated = set_player_score(teams, 'Red', 'p1', -4)
        assert updated[0].members[0].score == 0
        assert updated[0].score == 0

    def test_unknown_player(self):
        teams = [team('Red', male('p1', score=2), score=2)]
        assert set_player_score(teams, 'Red', 'nope', 5) == teams


class TestAverages:
    """Tests for averages and the leaderboard."""

    def test_average_score(self):
        assert average_score(team('Red', male('a'), male('b'), score=5)) == 2.5

    def test_average_empty_team(self):
        assert average_score(team('Red', score=5)) == 0.0

    @pytest.mark.parametrize(
        'value, expected',
        [(4.0, '4'), (2.5, '2.5'), (10 / 3, '3.33'), (2.10, '2.1'), (0, '0'), (float('nan'), '0')],
    )
    def test_format_average_score(self, value, expected):
        assert format_average_score(value) == expected

    def test_leaderboard_by_average(self):
        teams = [
            team('Red', male('a'), male('b'), score=6),  # 3.0
            team('Blue', male('c'), score=4),  # 4.0
            team('Green', male('d'), score=3),  # 3.0
        ]
        ranked = leaderboard(teams)
        assert [(rank, t.color) for rank, t, _ in ranked] == [(1, 'Blue'), (2, 'Red'), (2, 'Green')]

    def test_leaderboard_by_total(self):
        teams = [team('Red', male('a'), male('b'), score=6), team('Blue', male('c'), score=4)]
        ranked = leaderboard(teams, by_total=True)
        assert [t.color for _, t, _ in ranked] == ['Red', 'Blue']
        assert ranked[0][2] == 6.0
