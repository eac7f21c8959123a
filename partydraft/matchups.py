"""Playing order generation.

Turns finalized teams into an ordered list of rounds. Each round holds at most
one player per team and draws everyone from a single gender row; rows
alternate between the male and female sequences, with non-binary rows last.

Pipeline (each step is a separate function so it can be tested alone):

1. ``find_anchor`` - the first flexible player in colour order becomes the
   anchor: treated as gender-specific and pinned to open Round 1.
2. ``build_team_pools`` - split every team into per-gender pools plus a
   flexible pool.
3. ``compute_slot_policies`` / ``assign_helper_buckets`` - decide which
   helpers go to Round 1, the early row or the late row of their gender.
4. ``order_gender_list`` - lay out each team's per-gender sequence.
5. ``emit_rows`` - walk the sequences row by row, filling gaps from the
   team's flexible queue.
"""

import logging
import random
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Optional

from .constants import (
    EARLY_HELPER_INDEX,
    FEMALE,
    GENDERS,
    HELPER_GENDERS,
    LATE_HELPER_INDEX,
    MALE,
    NON_BINARY,
    TEAM_COLORS,
)
from .models import Matchup, MatchupSlot, Player, Team

logger = logging.getLogger('partydraft.matchups')

# Row index of Round 1 inside the opening gender's sequence
ROUND_ONE_INDEX = 0


@dataclass(frozen=True)
class Anchor:
    """The flexible player pinned to open Round 1 for their team."""
    color: str
    player: Player

    @property
    def gender(self) -> str:
        return self.player.gender


@dataclass
class TeamPools:
    """One team's members split for ordering."""
    color: str
    by_gender: dict[str, list[Player]] = field(
        default_factory=lambda: {g: [] for g in GENDERS}
    )
    flexible: list[Player] = field(default_factory=list)


@dataclass(frozen=True)
class SlotPolicy:
    """
    Helper rows for one gender.

    The start gender (the anchor's) has no early row: its Round-1 row is taken
    by the anchor and one pinned helper, and its second row would be Round 3.
    """
    gender: str
    is_start_gender: bool
    early_index: Optional[int]
    late_index: Optional[int]

    def early_for(self, size: int) -> Optional[int]:
        """Early row for a sequence of ``size`` players, or None."""
        if self.early_index is None or self.early_index >= size:
            return None
        return self.early_index

    def late_for(self, size: int) -> Optional[int]:
        """Late row clamped to ``size``; None when it would collide with an earlier slot."""
        if self.late_index is None or size <= 0:
            return None
        index = min(self.late_index, size - 1)
        if index == self.early_index:
            return None
        if self.is_start_gender and index == ROUND_ONE_INDEX:
            return None
        return index


@dataclass
class HelperBuckets:
    """Pinned helpers keyed by (color, gender)."""
    round_one: dict[tuple[str, str], Player] = field(default_factory=dict)
    early: dict[tuple[str, str], Player] = field(default_factory=dict)
    late: dict[tuple[str, str], Player] = field(default_factory=dict)
    # Genders whose unplaced helpers queue behind every regular player
    helpers_last: set[str] = field(default_factory=set)

    def placed_ids(self) -> set[str]:
        return {
            p.id
            for bucket in (self.round_one, self.early, self.late)
            for p in bucket.values()
        }


class FlexQueue:
    """
    A team's flexible players, consumed front to back through a cursor.

    ``take(gender)`` returns the first unused player of that gender, so a
    flexible player only ever fills a row of their own gender.
    """

    def __init__(self, players: Iterable[Player]):
        self._players = list(players)
        self._used = [False] * len(self._players)

    def __len__(self) -> int:
        return self._used.count(False)

    def _take_at(self, index: int) -> Player:
        self._used[index] = True
        return self._players[index]

    def take(self, gender: str) -> Optional[Player]:
        for index, player in enumerate(self._players):
            if not self._used[index] and player.gender == gender:
                return self._take_at(index)
        return None

    def take_any(self) -> Optional[Player]:
        for index, used in enumerate(self._used):
            if not used:
                return self._take_at(index)
        return None


def _teams_by_color(teams: Iterable[Team]) -> dict[str, Team]:
    by_color: dict[str, Team] = {}
    for team in teams:
        by_color.setdefault(team.color, team)
    return by_color


def find_anchor(teams: Iterable[Team], colors: Sequence[str] = TEAM_COLORS) -> Optional[Anchor]:
    """Return the first flexible player found scanning teams in colour order."""
    by_color = _teams_by_color(teams)
    for color in colors:
        team = by_color.get(color)
        if team is None:
            continue
        for member in team.members:
            if member.is_flexible:
                return Anchor(color=color, player=member)
    return None


def is_helper_candidate(player: Player, anchor: Optional[Anchor]) -> bool:
    """Helpers are gender-specific; flexible status (and anchor status) wins over the flag."""
    if not player.is_helper or player.is_flexible:
        return False
    return anchor is None or player.id != anchor.player.id


def build_team_pools(
    teams: Iterable[Team],
    colors: Sequence[str],
    anchor: Optional[Anchor],
) -> list[TeamPools]:
    """
    Partition each team's members by gender.

    Colours with no team get empty pools. The anchor leaves the flexible pool
    and joins their own gender's pool. Unknown gender codes count as non-binary.
    """
    by_color = _teams_by_color(teams)
    pools = []
    for color in colors:
        pool = TeamPools(color=color)
        team = by_color.get(color)
        for member in team.members if team else []:
            is_anchor = anchor is not None and member.id == anchor.player.id
            if member.is_flexible and not is_anchor:
                pool.flexible.append(member)
            else:
                gender = member.gender if member.gender in pool.by_gender else NON_BINARY
                pool.by_gender[gender].append(member)
        pools.append(pool)
    return pools


def compute_slot_policies(anchor: Optional[Anchor]) -> dict[str, SlotPolicy]:
    """Build the early/late policy for each helper gender."""
    start_gender = anchor.gender if anchor else None
    policies = {}
    for gender in HELPER_GENDERS:
        if gender == start_gender:
            policies[gender] = SlotPolicy(gender, True, None, LATE_HELPER_INDEX)
        else:
            policies[gender] = SlotPolicy(gender, False, EARLY_HELPER_INDEX, LATE_HELPER_INDEX)
    return policies


def _name_key(player: Player) -> tuple[str, str]:
    name = player.name.strip()
    return (name[:1].upper(), name.casefold())


def select_round_one_helper(
    pools: Sequence[TeamPools],
    anchor: Optional[Anchor],
) -> Optional[tuple[str, Player]]:
    """
    Pick the single helper who plays Round 1 alongside the anchor.

    Candidates are helpers of the anchor's gender on other teams only, a
    narrower set than every same-gender helper: the anchor already holds its
    own team's Round-1 slot. The pick is the latest first
    letter (Z to A, case-insensitive), ties broken by the later full name.

    Returns:
        (color, player) or None when there is no anchor or no candidate
    """
    if anchor is None or anchor.gender not in HELPER_GENDERS:
        return None

    best: Optional[tuple[str, Player]] = None
    for pool in pools:
        if pool.color == anchor.color:
            continue
        for player in pool.by_gender.get(anchor.gender, []):
            if not is_helper_candidate(player, anchor):
                continue
            if best is None or _name_key(player) > _name_key(best[1]):
                best = (pool.color, player)
    return best


def _fill_bucket(
    candidates: list[tuple[str, Player]],
    quota: int,
    bucket: dict[tuple[str, str], Player],
    gender: str,
    slot_for_color: dict[str, Optional[int]],
) -> list[tuple[str, Player]]:
    """Assign up to ``quota`` candidates, one per team with a free slot; return the rest."""
    remaining = []
    taken = 0
    for color, player in candidates:
        key = (color, gender)
        if taken < quota and slot_for_color.get(color) is not None and key not in bucket:
            bucket[key] = player
            taken += 1
        else:
            remaining.append((color, player))
    return remaining


def assign_helper_buckets(
    pools: Sequence[TeamPools],
    anchor: Optional[Anchor],
    policies: dict[str, SlotPolicy],
    rng: random.Random,
) -> HelperBuckets:
    """
    Decide which helpers are pinned, and where.

    Start gender: one global Round-1 pick, every other helper steered to the
    late row only. Other genders: up to half the helpers (rounded down) go to
    the late row, the rest to the early row. Each team holds at most one
    helper per row; whoever does not fit plays as a regular.
    """
    buckets = HelperBuckets()

    for gender in HELPER_GENDERS:
        policy = policies[gender]
        sizes = {pool.color: len(pool.by_gender.get(gender, [])) for pool in pools}
        eligible = [
            (pool.color, player)
            for pool in pools
            for player in pool.by_gender.get(gender, [])
            if is_helper_candidate(player, anchor)
        ]
        if not eligible:
            continue

        if policy.is_start_gender:
            pick = select_round_one_helper(pools, anchor)
            if pick is not None:
                color, player = pick
                buckets.round_one[(color, gender)] = player
                buckets.helpers_last.add(gender)
                eligible = [(c, p) for c, p in eligible if p.id != player.id]
            late_quota = len(eligible)
            early_quota = 0
        else:
            late_quota = len(eligible) // 2
            early_quota = len(eligible)

        rng.shuffle(eligible)
        late_slots = {color: policy.late_for(size) for color, size in sizes.items()}
        early_slots = {color: policy.early_for(size) for color, size in sizes.items()}
        remaining = _fill_bucket(eligible, late_quota, buckets.late, gender, late_slots)
        remaining = _fill_bucket(remaining, early_quota, buckets.early, gender, early_slots)

        logger.debug(
            f'{gender} helpers: {len(eligible)} eligible, '
            f'{len(eligible) - len(remaining)} pinned, {len(remaining)} spill over'
        )

    return buckets


def order_gender_list(fixed: dict[int, Player], remainder: Sequence[Player]) -> list[Player]:
    """
    Lay out one team's sequence for one gender.

    Pinned players sit at their indexes; every other position takes the next
    player from ``remainder`` in order.
    """
    ordered: list[Player] = []
    rest = list(remainder)
    index = 0
    while rest or any(i >= index for i in fixed):
        if index in fixed:
            ordered.append(fixed[index])
        elif rest:
            ordered.append(rest.pop(0))
        index += 1
    return ordered


def build_team_order(
    pool: TeamPools,
    gender: str,
    anchor: Optional[Anchor],
    policy: Optional[SlotPolicy],
    buckets: HelperBuckets,
    rng: random.Random,
) -> list[Player]:
    """Pin the anchor and bucketed helpers, shuffle everyone else around them."""
    members = pool.by_gender.get(gender, [])
    key = (pool.color, gender)
    fixed: dict[int, Player] = {}

    if anchor is not None and anchor.color == pool.color and anchor.gender == gender:
        fixed[ROUND_ONE_INDEX] = anchor.player
    if key in buckets.round_one:
        fixed[ROUND_ONE_INDEX] = buckets.round_one[key]
    if policy is not None:
        early_index = policy.early_for(len(members))
        late_index = policy.late_for(len(members))
        if key in buckets.early and early_index is not None:
            fixed[early_index] = buckets.early[key]
        if key in buckets.late and late_index is not None:
            fixed[late_index] = buckets.late[key]

    fixed_ids = {p.id for p in fixed.values()}
    regulars = [p for p in members if p.id not in fixed_ids and not is_helper_candidate(p, anchor)]
    spillover = [p for p in members if p.id not in fixed_ids and is_helper_candidate(p, anchor)]

    if policy is not None and gender in buckets.helpers_last:
        rng.shuffle(regulars)
        rng.shuffle(spillover)
        remainder = regulars + spillover
    else:
        remainder = regulars + spillover
        rng.shuffle(remainder)

    return order_gender_list(fixed, remainder)


def _row(
    colors: Sequence[str],
    orders: dict[str, dict[str, list[Player]]],
    queues: dict[str, FlexQueue],
    gender: str,
    index: int,
) -> list[MatchupSlot]:
    slots = []
    for color in colors:
        sequence = orders[color].get(gender, [])
        if index < len(sequence):
            player = sequence[index]
        else:
            player = queues[color].take(gender)
        slots.append(MatchupSlot(color=color, player=player))
    return slots


def _has_player(slots: Sequence[MatchupSlot]) -> bool:
    return any(slot.player is not None for slot in slots)


def emit_rows(
    colors: Sequence[str],
    orders: dict[str, dict[str, list[Player]]],
    queues: dict[str, FlexQueue],
    first_gender: str = MALE,
) -> list[list[MatchupSlot]]:
    """
    Walk the per-team sequences row by row.

    Male and female rows alternate starting with ``first_gender`` (falling
    back to whichever still has rows), then non-binary rows drain. A
    non-binary ``first_gender`` forces one non-binary row first. Gaps take
    same-gender flexible players; leftover flexible players get extra rows.
    Rows with nobody in them are dropped.
    """
    row_counts = {
        gender: max((len(orders[c].get(gender, [])) for c in colors), default=0)
        for gender in GENDERS
    }
    next_index = {gender: 0 for gender in GENDERS}
    rows: list[list[MatchupSlot]] = []

    def emit(gender: str) -> None:
        slots = _row(colors, orders, queues, gender, next_index[gender])
        next_index[gender] += 1
        if _has_player(slots):
            rows.append(slots)

    if first_gender == NON_BINARY and row_counts[NON_BINARY]:
        emit(NON_BINARY)

    prefer_male = first_gender != FEMALE
    while next_index[MALE] < row_counts[MALE] or next_index[FEMALE] < row_counts[FEMALE]:
        male_left = next_index[MALE] < row_counts[MALE]
        female_left = next_index[FEMALE] < row_counts[FEMALE]
        emit(MALE if (prefer_male and male_left) or not female_left else FEMALE)
        prefer_male = not prefer_male

    while next_index[NON_BINARY] < row_counts[NON_BINARY]:
        emit(NON_BINARY)

    while any(len(queues[c]) for c in colors):
        slots = [MatchupSlot(color=c, player=queues[c].take_any()) for c in colors]
        if _has_player(slots):
            rows.append(slots)

    return rows


def renumber_matchups(matchups: Sequence[Matchup]) -> list[Matchup]:
    """Return copies with dense 1-based ids in list order."""
    return [replace(m, id=index + 1) for index, m in enumerate(matchups)]


def generate_matchups(
    teams: Sequence[Team],
    colors: Sequence[str] = TEAM_COLORS,
    rng: Optional[random.Random] = None,
) -> list[Matchup]:
    """
    Generate the playing order for finalized teams.

    Never raises: missing colours play as empty teams, and with no players at
    all the result is a single round of empty slots.

    Args:
        teams: Finalized teams (read only)
        colors: Colour order for every round's slots
        rng: Random source (default: fresh unseeded Random)

    Returns:
        Rounds with ids 1..n, one slot per colour in ``colors`` order
    """
    rng = rng or random.Random()
    colors = list(colors)

    anchor = find_anchor(teams, colors)
    pools = build_team_pools(teams, colors, anchor)
    policies = compute_slot_policies(anchor)
    buckets = assign_helper_buckets(pools, anchor, policies, rng)

    orders: dict[str, dict[str, list[Player]]] = {}
    queues: dict[str, FlexQueue] = {}
    for pool in pools:
        orders[pool.color] = {
            gender: build_team_order(pool, gender, anchor, policies.get(gender), buckets, rng)
            for gender in GENDERS
        }
        flexible = list(pool.flexible)
        rng.shuffle(flexible)
        queues[pool.color] = FlexQueue(flexible)

    first_gender = anchor.gender if anchor else MALE
    rows = emit_rows(colors, orders, queues, first_gender)
    if not rows:
        rows = [[MatchupSlot(color=c, player=None) for c in colors]]

    if anchor:
        logger.debug(f'Anchor {anchor.player.name} ({anchor.color}) opens with {first_gender}')
    logger.info(f'Generated {len(rows)} rounds for {len(colors)} teams')
    return renumber_matchups([Matchup(id=0, players=row) for row in rows])
