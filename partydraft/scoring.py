"""Score updates for teams and players.

Every function returns a new list of teams and leaves its input untouched.
Scores never drop below zero; a player's change moves the team score by the
amount actually applied, so clamping at zero keeps both totals consistent.
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import replace

from .models import Team

logger = logging.getLogger('partydraft.scoring')


def update_team_score(teams: Sequence[Team], color: str, delta: int) -> list[Team]:
    """Add ``delta`` to one team's score, clamped at zero."""
    updated = []
    for team in teams:
        if team.color == color:
            team = replace(team, score=max(0, (team.score or 0) + delta))
        updated.append(team)
    return updated


def update_player_score(
    teams: Sequence[Team],
    color: str,
    player_id: str,
    delta: int,
) -> list[Team]:
    """
    Add ``delta`` to one player's score, clamped at zero.

    The team's score moves by the applied change (new minus old player score),
    not by the requested ``delta``.

    Example:
        A player on 3 points given -100 drops to 0 and the team loses 3.
    """
    updated = []
    for team in teams:
        if team.color != color:
            updated.append(team)
            continue

        team_delta = 0
        members = []
        for member in team.members:
            if member.id == player_id:
                old_score = member.score or 0
                new_score = max(0, old_score + delta)
                team_delta = new_score - old_score
                member = replace(member, score=new_score)
            members.append(member)

        updated.append(
            replace(team, members=members, score=max(0, (team.score or 0) + team_delta))
        )
    return updated


def set_player_score(
    teams: Sequence[Team],
    color: str,
    player_id: str,
    value: int,
) -> list[Team]:
    """Set a player's score outright (keypad entry); negative values become zero."""
    team = next((t for t in teams if t.color == color), None)
    player = next((m for m in team.members if m.id == player_id), None) if team else None
    if player is None:
        logger.warning(f'No player {player_id} on {color}; score unchanged')
        return list(teams)

    delta = max(0, value) - (player.score or 0)
    if delta == 0:
        return list(teams)
    return update_player_score(teams, color, player_id, delta)


def average_score(team: Team) -> float:
    """Team score per member (0 for an empty team)."""
    if not team.members:
        return 0.0
    return (team.score or 0) / len(team.members)


def format_average_score(value: float) -> str:
    """
    Format an average for display: at most two decimals, no trailing zeros.

    Examples:
        4.0 -> "4", 2.5 -> "2.5", 3.3333 -> "3.33"
    """
    if not math.isfinite(value):
        return '0'
    rounded = round(value * 100) / 100
    if rounded == int(rounded):
        return str(int(rounded))
    return f'{rounded:.2f}'.rstrip('0').rstrip('.')


def leaderboard(teams: Sequence[Team], by_total: bool = False) -> list[tuple[int, Team, float]]:
    """
    Rank teams by average score per member (or by total score).

    Returns:
        List of (rank, team, value); tied values share a rank
    """
    def value_of(team: Team) -> float:
        return float(team.score or 0) if by_total else average_score(team)

    ordered = sorted(teams, key=value_of, reverse=True)
    ranked = []
    previous = None
    rank = 0
    for position, team in enumerate(ordered, 1):
        value = value_of(team)
        if value != previous:
            rank = position
            previous = value
        ranked.append((rank, team, value))
    return ranked
