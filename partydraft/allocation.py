"""Team allocation: draft the registered roster onto the coloured teams.

The live shell reveals one team at a time, so the engine is exposed as a
``DraftSession`` that yields one ``DraftStep`` per team. ``allocate_teams``
runs a session to completion for callers that only want the final teams.
"""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Optional

from .constants import GENDERS, TEAM_COLORS
from .models import Player, Team
from .targets import compute_gender_targets, count_genders, gender_based_size

logger = logging.getLogger('partydraft.allocation')


@dataclass
class DraftStep:
    """Players drafted onto one team in a single reveal."""
    color: str
    players: list[Player] = field(default_factory=list)
    is_last_team: bool = False


def pick_batch(
    pool: Sequence[Player],
    color: str,
    teams: Sequence[Team],
    all_players: Sequence[Player],
    colors: Sequence[str] = TEAM_COLORS,
    rng: Optional[random.Random] = None,
) -> list[Player]:
    """
    Choose the players for one team's draft.

    Fills the team's per-gender targets from the pool, then tops it up with
    flexible players when its gender-based size falls short of the largest
    team's. Genders with too few players left are simply under-filled.

    Args:
        pool: Unassigned players
        color: Team being drafted
        teams: Current team snapshot (used for already-assigned members)
        all_players: Whole roster, for computing targets
        colors: Team colours in draft order
        rng: Random source (default: fresh unseeded Random)

    Returns:
        Drafted players (order carries no meaning)
    """
    rng = rng or random.Random()
    targets = compute_gender_targets(all_players, colors)
    target = targets.get(color, {g: 0 for g in GENDERS})

    team = next((t for t in teams if t.color == color), None)
    assigned = count_genders(team.members if team else [])
    needed = {g: max(target[g] - assigned[g], 0) for g in GENDERS}

    batch: list[Player] = []
    for gender in GENDERS:
        if not needed[gender]:
            continue
        available = [p for p in pool if not p.is_flexible and p.gender == gender]
        rng.shuffle(available)
        picked = available[:needed[gender]]
        if len(picked) < needed[gender]:
            logger.debug(f'{color}: only {len(picked)} of {needed[gender]} {gender} available')
        batch.extend(picked)

    max_size = max((gender_based_size(t) for t in targets.values()), default=0)
    shortage = max_size - gender_based_size(target)
    flexible = [p for p in pool if p.is_flexible]
    if shortage > 0 and flexible:
        rng.shuffle(flexible)
        batch.extend(flexible[:min(shortage, len(flexible))])

    logger.debug(f'{color}: drafted {len(batch)} (targets {target}, shortage {shortage})')
    return batch


class DraftSession:
    """
    Step-by-step draft over a fixed colour order.

    Each colour is visited once. Colours that already have members (a resumed
    draft) are skipped; the last colour still empty takes the whole remaining
    pool with no balancing.
    """

    def __init__(
        self,
        players: Sequence[Player],
        colors: Sequence[str] = TEAM_COLORS,
        teams: Optional[Sequence[Team]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a draft.

        Args:
            players: Whole roster
            colors: Team colours in draft order
            teams: Existing teams when resuming; missing colours start empty
            rng: Random source (default: fresh unseeded Random)
        """
        self.players = list(players)
        self.colors = list(colors)
        self.rng = rng or random.Random()

        existing = {t.color: t for t in teams or []}
        self.teams = [
            Team(color=c, members=list(existing[c].members), score=existing[c].score)
            if c in existing else Team(color=c)
            for c in self.colors
        ]

        assigned_ids = {m.id for t in self.teams for m in t.members}
        self.pool = [p for p in self.players if p.id not in assigned_ids]
        self._queue = [c for c in self.colors if not self.team(c).members]

    def team(self, color: str) -> Team:
        return next(t for t in self.teams if t.color == color)

    @property
    def is_finished(self) -> bool:
        return not self.pool or not self._queue

    def next_step(self) -> Optional[DraftStep]:
        """
        Draft the next empty team.

        Returns:
            The step just applied, or None when the pool or the queue is exhausted
        """
        if self.is_finished:
            return None

        color = self._queue.pop(0)
        is_last = not self._queue
        if is_last:
            batch = list(self.pool)
        else:
            batch = pick_batch(self.pool, color, self.teams, self.players, self.colors, self.rng)

        drafted_ids = {p.id for p in batch}
        self.team(color).members.extend(batch)
        self.pool = [p for p in self.pool if p.id not in drafted_ids]

        logger.info(f'Drafted {len(batch)} players onto {color}' + (' (last team)' if is_last else ''))
        return DraftStep(color=color, players=batch, is_last_team=is_last)

    def run(self) -> list[Team]:
        """Draft every remaining team and return the final teams."""
        while self.next_step() is not None:
            pass
        return self.teams


def allocate_teams(
    players: Sequence[Player],
    colors: Sequence[str] = TEAM_COLORS,
    rng: Optional[random.Random] = None,
) -> list[Team]:
    """
    Split a roster into teams, one per colour.

    Args:
        players: Whole roster
        colors: Team colours in draft order
        rng: Random source (default: fresh unseeded Random)

    Returns:
        Teams in colour order; every player lands on exactly one team
        (as long as there is at least one colour)
    """
    return DraftSession(players, colors, rng=rng).run()
