"""Roster parsing: gender codes, marker columns, and ``Name, Gender, Marker`` text."""

import csv
import io
import logging
import uuid
from typing import Any, Callable, Optional

from .constants import FEMALE, MALE, NON_BINARY
from .models import Player

logger = logging.getLogger('partydraft.roster')

_TRUE_WORDS = {'true', 'yes', 'y'}
_FALSE_WORDS = {'false', 'no', 'n'}
_HELPER_WORDS = {'h', 'helper'}


def _normalize(raw: str) -> str:
    return raw.replace('"', '').replace("'", '').strip().lower()


def parse_gender(raw: Any) -> str:
    """
    Map a free-form gender value to a gender code.

    Anything starting with M is Male, anything starting with F is Female
    (so ``Male``, ``m``, ``Female`` and the ``M``/``F`` codes all work).
    ``NB``, ``NonBinary``, blanks and unknown values are NonBinary.
    """
    if not isinstance(raw, str):
        return NON_BINARY
    value = raw.strip().upper()
    if value.startswith('M'):
        return MALE
    if value.startswith('F'):
        return FEMALE
    return NON_BINARY


def parse_no_gender_restriction(raw: Any) -> bool:
    """
    Interpret the "0" marker that flags a flexible player.

    Examples:
        True / 0 / "0" / "o" / "zero" / "yes" -> True
        False / 1 / "1" / "" / "no" / None    -> False
    """
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, (int, float)):
        return raw == 0
    if not isinstance(raw, str):
        return False

    normalized = _normalize(raw)
    if not normalized:
        return False
    if normalized in ('o', 'zero'):
        return True
    try:
        return float(normalized) == 0
    except ValueError:
        pass
    if normalized in _TRUE_WORDS:
        return True
    return False


def parse_helper_marker(raw: Any) -> bool:
    """Interpret the "H" helper marker (also accepts booleans and yes/no words)."""
    if isinstance(raw, bool):
        return raw
    if not isinstance(raw, str):
        return False
    normalized = _normalize(raw)
    return normalized in _HELPER_WORDS or normalized in _TRUE_WORDS


def parse_marker_column(raw: Any) -> tuple[bool, bool]:
    """
    Split a CSV marker cell into (flexible, helper).

    The cell may hold either marker or both, e.g. ``0``, ``H``, ``0H`` or ``0 H``.
    """
    if not isinstance(raw, str):
        return parse_no_gender_restriction(raw), False

    normalized = _normalize(raw).replace(' ', '')
    if normalized in _HELPER_WORDS:
        return False, True
    if normalized.endswith('h') and len(normalized) > 1:
        return parse_no_gender_restriction(normalized[:-1]), True
    return parse_no_gender_restriction(normalized), False


def parse_roster_csv(
    content: str,
    id_factory: Optional[Callable[[], str]] = None,
) -> list[Player]:
    """
    Parse ``Name, Gender, Marker`` lines into players.

    Blank names are skipped; missing genders become NonBinary. A fourth column,
    when present, is read as a separate helper marker.

    Args:
        content: Raw text of the roster file
        id_factory: Callable producing unique ids (default: uuid4 strings)

    Returns:
        Players in file order, all with score 0
    """
    if id_factory is None:
        id_factory = lambda: str(uuid.uuid4())  # noqa: E731

    players = []
    reader = csv.reader(io.StringIO(content), skipinitialspace=True)
    for row in reader:
        cells = [c.strip() for c in row]
        name = cells[0] if cells else ''
        if not name:
            continue

        gender = parse_gender(cells[1]) if len(cells) > 1 and cells[1] else NON_BINARY
        flexible, helper = parse_marker_column(cells[2]) if len(cells) > 2 else (False, False)
        if len(cells) > 3 and cells[3]:
            helper = helper or parse_helper_marker(cells[3])

        players.append(
            Player(
                id=id_factory(),
                name=name,
                gender=gender,
                score=0,
                no_gender_restriction=flexible,
                is_helper=helper,
            )
        )
        logger.debug(f'Line {reader.line_num}: {name} ({gender}) flexible={flexible} helper={helper}')

    logger.info(f'Parsed {len(players)} players from roster text')
    return players
