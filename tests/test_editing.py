"""Unit tests for manual team and playing order edits."""

from conftest import female, male, team
from partydraft.editing import (
    insert_matchup,
    move_matchup,
    move_player,
    remove_matchup,
    swap_matchup_slots,
    swap_team_members,
)
from partydraft.models import Matchup, MatchupSlot

RB = ['Red', 'Blue']


def member_ids(teams):
    return {t.color: [m.id for m in t.members] for t in teams}


def rounds(*rows):
    """Build rounds from rows of player ids (None for an empty slot)."""
    return [
        Matchup(
            id=i + 1,
            players=[MatchupSlot(c, male(pid) if pid else None) for c, pid in zip(RB, row)],
        )
        for i, row in enumerate(rows)
    ]


def grid(matchups):
    return [[s.player.id if s.player else None for s in m.players] for m in matchups]


class TestTeamEdits:
    """Tests for member swaps and moves."""

    def test_swap_between_teams_keeps_positions(self):
        teams = [team('Red', male('a'), male('b')), team('Blue', female('c'), female('d'))]
        swapped = swap_team_members(teams, 'b', 'c')
        assert member_ids(swapped) == {'Red': ['a', 'c'], 'Blue': ['b', 'd']}
        assert member_ids(teams) == {'Red': ['a', 'b'], 'Blue': ['c', 'd']}

    def test_swap_within_team(self):
        teams = [team('Red', male('a'), male('b'))]
        assert member_ids(swap_team_members(teams, 'a', 'b')) == {'Red': ['b', 'a']}

    def test_swap_unknown_player_is_noop(self):
        teams = [team('Red', male('a'))]
        assert member_ids(swap_team_members(teams, 'a', 'zz')) == {'Red': ['a']}

    def test_move_player(self):
        teams = [team('Red', male('a'), male('b')), team('Blue', female('c'))]
        moved = move_player(teams, 'a', 'Blue')
        assert member_ids(moved) == {'Red': ['b'], 'Blue': ['c', 'a']}

    def test_move_to_unknown_color_is_noop(self):
        teams = [team('Red', male('a'))]
        assert member_ids(move_player(teams, 'a', 'Purple')) == {'Red': ['a']}


class TestMatchupEdits:
    """Tests for round reordering and cell swaps."""

    def test_move_matchup_renumbers(self):
        matchups = rounds(['a', 'b'], ['c', 'd'], ['e', 'f'])
        moved = move_matchup(matchups, 2, 0)
        assert grid(moved) == [['e', 'f'], ['a', 'b'], ['c', 'd']]
        assert [m.id for m in moved] == [1, 2, 3]

    def test_move_out_of_range_is_noop(self):
        matchups = rounds(['a', 'b'])
        assert move_matchup(matchups, 0, 5) == matchups

    def test_insert_empty_round(self):
        inserted = insert_matchup(rounds(['a', 'b'], ['c', 'd']), 1, RB)
        assert grid(inserted) == [['a', 'b'], [None, None], ['c', 'd']]
        assert [m.id for m in inserted] == [1, 2, 3]

    def test_insert_clamps_index(self):
        inserted = insert_matchup(rounds(['a', 'b']), 99, RB)
        assert grid(inserted)[-1] == [None, None]

    def test_remove_round(self):
        removed = remove_matchup(rounds(['a', 'b'], ['c', 'd']), 0)
        assert grid(removed) == [['c', 'd']]
        assert removed[0].id == 1

    def test_swap_same_color_cells(self):
        matchups = rounds(['a', 'b'], ['c', 'd'])
        swapped = swap_matchup_slots(matchups, 'Blue', 0, 1)
        assert grid(swapped) == [['a', 'd'], ['c', 'b']]
        assert grid(matchups) == [['a', 'b'], ['c', 'd']]

    def test_swap_with_empty_cell(self):
        swapped = swap_matchup_slots(rounds(['a', None], ['c', 'd']), 'Blue', 0, 1)
        assert grid(swapped) == [['a', 'd'], ['c', None]]

    def test_swap_unknown_color_is_noop(self):
        matchups = rounds(['a', 'b'], ['c', 'd'])
        assert grid(swap_matchup_slots(matchups, 'Pink', 0, 1)) == grid(matchups)
