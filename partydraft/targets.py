"""Per-team gender targets for the allocation engine."""

from collections.abc import Iterable, Sequence

from .constants import GENDERS, TEAM_COLORS
from .models import Player


def count_genders(players: Iterable[Player]) -> dict[str, int]:
    """Tally non-flexible players by gender (flexible players never count)."""
    counts = {gender: 0 for gender in GENDERS}
    for player in players:
        if player.is_flexible:
            continue
        if player.gender in counts:
            counts[player.gender] += 1
    return counts


def compute_gender_targets(
    players: Iterable[Player],
    colors: Sequence[str] = TEAM_COLORS,
) -> dict[str, dict[str, int]]:
    """
    Compute how many players of each gender every team should receive.

    For each gender the total is split evenly; the first ``total % teams``
    colours (in the given order) take one extra. Per-gender targets therefore
    sum to the gender's total and differ by at most one between teams.

    Args:
        players: Whole roster (assigned and unassigned)
        colors: Team colours in draft order

    Returns:
        Dict of color -> {gender: target}, with an entry for every colour
    """
    colors = list(colors)
    targets: dict[str, dict[str, int]] = {color: {g: 0 for g in GENDERS} for color in colors}
    if not colors:
        return targets

    team_count = len(colors)
    for gender, total in count_genders(players).items():
        base, remainder = divmod(total, team_count)
        for index, color in enumerate(colors):
            targets[color][gender] = base + (1 if index < remainder else 0)

    return targets


def gender_based_size(target: dict[str, int]) -> int:
    """Team size implied by gender targets alone (flexible players excluded)."""
    return sum(target.values())
