"""Manual edits applied by the shell after the engines have run.

Team edits swap or move members; round edits reorder, insert, remove or swap
cells and always renumber. Unknown ids, colours and indexes leave the input
unchanged (with a warning) rather than raising.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import Optional

from .constants import TEAM_COLORS
from .matchups import renumber_matchups
from .models import Matchup, MatchupSlot, Team

logger = logging.getLogger('partydraft.editing')


def _locate_member(teams: Sequence[Team], player_id: str) -> Optional[tuple[int, int]]:
    for team_index, team in enumerate(teams):
        for member_index, member in enumerate(team.members):
            if member.id == player_id:
                return team_index, member_index
    return None


def swap_team_members(teams: Sequence[Team], first_id: str, second_id: str) -> list[Team]:
    """Exchange two players between (or within) teams, each taking the other's position."""
    first = _locate_member(teams, first_id)
    second = _locate_member(teams, second_id)
    if first is None or second is None:
        logger.warning(f'Cannot swap {first_id} and {second_id}: player not found')
        return list(teams)

    members = [list(t.members) for t in teams]
    (t1, m1), (t2, m2) = first, second
    members[t1][m1], members[t2][m2] = teams[t2].members[m2], teams[t1].members[m1]
    return [replace(team, members=members[i]) for i, team in enumerate(teams)]


def move_player(teams: Sequence[Team], player_id: str, to_color: str) -> list[Team]:
    """Move a player to the end of another team's member list."""
    found = _locate_member(teams, player_id)
    target = next((i for i, t in enumerate(teams) if t.color == to_color), None)
    if found is None or target is None:
        logger.warning(f'Cannot move {player_id} to {to_color}')
        return list(teams)

    team_index, member_index = found
    if team_index == target:
        return list(teams)

    player = teams[team_index].members[member_index]
    updated = []
    for i, team in enumerate(teams):
        if i == team_index:
            team = replace(team, members=[m for m in team.members if m.id != player_id])
        elif i == target:
            team = replace(team, members=[*team.members, player])
        updated.append(team)
    return updated


def move_matchup(matchups: Sequence[Matchup], from_index: int, to_index: int) -> list[Matchup]:
    """Move one round to a new position (0-based) and renumber."""
    if not (0 <= from_index < len(matchups) and 0 <= to_index < len(matchups)):
        logger.warning(f'Cannot move round {from_index} to {to_index} of {len(matchups)}')
        return list(matchups)

    ordered = list(matchups)
    ordered.insert(to_index, ordered.pop(from_index))
    return renumber_matchups(ordered)


def insert_matchup(
    matchups: Sequence[Matchup],
    index: int,
    colors: Sequence[str] = TEAM_COLORS,
) -> list[Matchup]:
    """Insert an empty round at ``index`` (clamped to the list) and renumber."""
    index = max(0, min(index, len(matchups)))
    ordered = list(matchups)
    ordered.insert(index, Matchup(id=0, players=[MatchupSlot(color=c) for c in colors]))
    return renumber_matchups(ordered)


def remove_matchup(matchups: Sequence[Matchup], index: int) -> list[Matchup]:
    """Drop the round at ``index`` and renumber."""
    if not 0 <= index < len(matchups):
        logger.warning(f'Cannot remove round {index} of {len(matchups)}')
        return list(matchups)
    return renumber_matchups([m for i, m in enumerate(matchups) if i != index])


def swap_matchup_slots(
    matchups: Sequence[Matchup],
    color: str,
    first_index: int,
    second_index: int,
) -> list[Matchup]:
    """
    Swap who plays for ``color`` between two rounds.

    Only same-colour cells are swapped, so every player stays on their own team.
    """
    if not (0 <= first_index < len(matchups) and 0 <= second_index < len(matchups)):
        logger.warning(f'Cannot swap rounds {first_index} and {second_index}')
        return list(matchups)

    first_slot = matchups[first_index].slot_for(color)
    second_slot = matchups[second_index].slot_for(color)
    if first_slot is None or second_slot is None:
        logger.warning(f'Color {color} missing from round {first_index} or {second_index}')
        return list(matchups)

    swapped = {first_index: second_slot.player, second_index: first_slot.player}
    updated = []
    for i, matchup in enumerate(matchups):
        if i in swapped:
            slots = [
                MatchupSlot(color=s.color, player=swapped[i]) if s.color == color else s
                for s in matchup.players
            ]
            matchup = replace(matchup, players=slots)
        updated.append(matchup)
    return renumber_matchups(updated)
