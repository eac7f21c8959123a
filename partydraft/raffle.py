"""Lucky draw over everyone on a team, without repeat winners.

A drawn winner stays eligible until the host removes them; removed ids are
kept in ``excluded_ids`` (persisted as ``RaffleState``) so the pool survives
a reload.
"""

import logging
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

from .models import Team
from .schemas import RaffleState

logger = logging.getLogger('partydraft.raffle')


@dataclass(frozen=True)
class RaffleEntry:
    """A player in the draw, tagged with their team colour."""
    id: str
    name: str
    gender: str
    score: int
    team_color: str


class RaffleDraw:
    """No-repeat raffle over team members."""

    def __init__(
        self,
        teams: Sequence[Team],
        excluded_ids: Optional[Iterable[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.entries = [
            RaffleEntry(m.id, m.name, m.gender, m.score, team.color)
            for team in teams
            for m in team.members
        ]
        self.excluded_ids: list[str] = list(dict.fromkeys(excluded_ids or []))
        self.rng = rng or random.Random()
        self.winner: Optional[RaffleEntry] = None

    @classmethod
    def from_state(
        cls,
        teams: Sequence[Team],
        state: RaffleState,
        rng: Optional[random.Random] = None,
    ) -> 'RaffleDraw':
        return cls(teams, state.excluded_ids, rng)

    def to_state(self) -> RaffleState:
        return RaffleState(excluded_ids=list(self.excluded_ids))

    @property
    def eligible(self) -> list[RaffleEntry]:
        excluded = set(self.excluded_ids)
        return [e for e in self.entries if e.id not in excluded]

    @property
    def removed(self) -> list[RaffleEntry]:
        excluded = set(self.excluded_ids)
        return [e for e in self.entries if e.id in excluded]

    def draw(self) -> Optional[RaffleEntry]:
        """Pick a winner uniformly from the eligible pool (None when it is empty)."""
        pool = self.eligible
        if not pool:
            logger.info('Raffle pool is empty')
            self.winner = None
            return None
        self.winner = pool[self.rng.randrange(len(pool))]
        logger.info(f'Raffle winner: {self.winner.name} ({self.winner.team_color})')
        return self.winner

    def remove(self, player_id: Optional[str] = None) -> None:
        """Exclude a player (default: the current winner) from future draws."""
        player_id = player_id or (self.winner.id if self.winner else None)
        if player_id is None:
            return
        if player_id not in self.excluded_ids:
            self.excluded_ids.append(player_id)
        self.winner = None

    def keep(self) -> None:
        """Dismiss the current winner without removing them from the pool."""
        self.winner = None

    def reset(self) -> None:
        """Put everyone back into the pool."""
        self.excluded_ids = []
        self.winner = None
