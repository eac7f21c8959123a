"""Invariant checks for teams, allocations and playing orders.

The engines trust their inputs; these checks exist for the shell (and tests)
to catch edits that broke an invariant, e.g. a player dragged onto two teams.
"""

from collections.abc import Sequence

from .models import Matchup, Player, Team


def validate_teams(teams: Sequence[Team]) -> list[str]:
    """
    Validate team membership and scores.

    Checks:
    - Each colour appears once
    - No player is on two teams (or twice on one)
    - No negative team or player scores

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    seen_colors = set()
    for team in teams:
        if team.color in seen_colors:
            errors.append(f'Duplicate team color: {team.color}')
        seen_colors.add(team.color)

    owner: dict[str, str] = {}
    for team in teams:
        for member in team.members:
            if member.id in owner:
                errors.append(
                    f'Player {member.name} ({member.id}) is on {owner[member.id]} and {team.color}'
                )
            else:
                owner[member.id] = team.color
            if member.score < 0:
                errors.append(f'{team.color} player {member.name} has negative score {member.score}')
        if team.score < 0:
            errors.append(f'{team.color} has negative score {team.score}')

    return errors


def validate_allocation(players: Sequence[Player], teams: Sequence[Team]) -> list[str]:
    """
    Check that every roster player was drafted exactly once and nobody else was.

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = validate_teams(teams)

    roster_ids = {p.id for p in players}
    assigned_ids = {m.id for t in teams for m in t.members}

    missing = sorted(roster_ids - assigned_ids)
    if missing:
        errors.append(f'{len(missing)} players not assigned: {", ".join(missing)}')

    unknown = sorted(assigned_ids - roster_ids)
    if unknown:
        errors.append(f'{len(unknown)} assigned players not on roster: {", ".join(unknown)}')

    return errors


def validate_matchups(
    matchups: Sequence[Matchup],
    colors: Sequence[str],
    teams: Sequence[Team] = (),
) -> list[str]:
    """
    Validate a playing order.

    Checks:
    - Ids run 1..n in list order
    - Each round has exactly one slot per colour, in colour order
    - No round is entirely empty (unless it is the only round)
    - When ``teams`` is given, each player plays for their own team

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []
    expected_colors = list(colors)
    team_of = {m.id: t.color for t in teams for m in t.members}

    for index, matchup in enumerate(matchups):
        if matchup.id != index + 1:
            errors.append(f'Round at position {index + 1} has id {matchup.id}')

        round_colors = [slot.color for slot in matchup.players]
        if round_colors != expected_colors:
            errors.append(f'Round {matchup.id} colors {round_colors} != {expected_colors}')

        if matchup.is_empty and len(matchups) > 1:
            errors.append(f'Round {matchup.id} has no players')

        if team_of:
            for slot in matchup.players:
                if slot.player is None:
                    continue
                home = team_of.get(slot.player.id)
                if home != slot.color:
                    errors.append(
                        f'Round {matchup.id}: {slot.player.name} plays for {slot.color} '
                        f'but is on {home or "no team"}'
                    )

    return errors
