"""JSON import/export in the shell's file formats.

Three shapes are exchanged:

- roster:  ``[Player, ...]``
- results: ``[Team, ...]``
- session: ``{"teams": [...], "matchups": [...]}``
"""

import logging
import uuid
from pathlib import Path
from typing import Any, Callable, Optional

from .models import Matchup, MatchupSlot, Player, Team
from .schemas import (
    MatchupRecord,
    PlayerRecord,
    RaffleState,
    ResultsFile,
    RosterFile,
    SessionFile,
    TeamRecord,
)
from .utils import load_json, load_json_safe, save_json

logger = logging.getLogger('partydraft.json_io')

ROSTER = 'roster'
RESULTS = 'results'
SESSION = 'session'


def detect_file_kind(data: Any) -> Optional[str]:
    """
    Tell roster, results and session files apart.

    Returns:
        'roster', 'results', 'session', or None for anything else
    """
    if isinstance(data, dict) and 'teams' in data:
        return SESSION
    if isinstance(data, list) and data:
        first = data[0]
        if isinstance(first, dict) and 'color' in first and 'members' in first:
            return RESULTS
        return ROSTER
    if isinstance(data, list):
        return ROSTER
    return None


def player_from_record(
    record: PlayerRecord,
    id_factory: Optional[Callable[[], str]] = None,
) -> Player:
    """Build a Player, minting an id when the record has none."""
    if record.id is None:
        player_id = id_factory() if id_factory else str(uuid.uuid4())
    else:
        player_id = record.id
    return Player(
        id=player_id,
        name=record.name,
        gender=record.gender,
        score=record.score,
        no_gender_restriction=record.no_gender_restriction,
        is_helper=record.is_helper,
    )


def team_from_record(record: TeamRecord) -> Team:
    return Team(
        color=record.color,
        members=[player_from_record(m) for m in record.members],
        score=record.score,
        hex=record.hex or '',
    )


def matchup_from_record(record: MatchupRecord) -> Matchup:
    return Matchup(
        id=record.id,
        players=[
            MatchupSlot(
                color=slot.color,
                player=player_from_record(slot.player) if slot.player else None,
            )
            for slot in record.players
        ],
    )


def players_from_records(
    records: list[dict[str, Any]],
    id_factory: Optional[Callable[[], str]] = None,
) -> list[Player]:
    """Validate raw roster dicts (defaults applied) and build players."""
    roster = RosterFile.model_validate(records)
    return [player_from_record(r, id_factory) for r in roster.root]


def load_roster(path: Path | str) -> list[Player]:
    """Load a roster export (``[Player, ...]``)."""
    roster = load_json(path, schema=RosterFile)
    players = [player_from_record(r) for r in roster.root]
    logger.info(f'Loaded {len(players)} players from {path}')
    return players


def save_roster(path: Path | str, players: list[Player]) -> None:
    save_json(path, [p.to_dict() for p in players])


def load_teams(path: Path | str) -> tuple[list[Team], list[Matchup]]:
    """
    Load teams (and the playing order, if present) from a results or session file.

    Returns:
        (teams, matchups); matchups is empty for a bare results file

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is a roster or fails validation
    """
    data = load_json(path)
    kind = detect_file_kind(data)

    if kind == SESSION:
        session = SessionFile.model_validate(data)
        teams = [team_from_record(t) for t in session.teams]
        matchups = [matchup_from_record(m) for m in session.matchups]
    elif kind == RESULTS:
        teams = [team_from_record(t) for t in ResultsFile.model_validate(data).root]
        matchups = []
    else:
        raise ValueError(f'{path} is not a results or session file (detected: {kind})')

    logger.info(f'Loaded {len(teams)} teams and {len(matchups)} rounds from {path}')
    return teams, matchups


def save_results(path: Path | str, teams: list[Team]) -> None:
    """Write a results file (``[Team, ...]``)."""
    save_json(path, [t.to_dict() for t in teams])


def save_session(path: Path | str, teams: list[Team], matchups: list[Matchup]) -> None:
    """Write a session file (``{teams, matchups}``)."""
    save_json(
        path,
        {
            'teams': [t.to_dict() for t in teams],
            'matchups': [m.to_dict() for m in matchups],
        },
    )


def load_raffle_state(path: Path | str) -> RaffleState:
    """Load the raffle's excluded ids; a missing or broken file means a fresh pool."""
    return load_json_safe(path, default=RaffleState(), schema=RaffleState)


def save_raffle_state(path: Path | str, state: RaffleState) -> None:
    save_json(path, state)
