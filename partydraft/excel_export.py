"""Printable Excel sheets for team lists and the playing order."""

import io
import logging
from collections.abc import Sequence
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill

from .constants import GENDER_LABELS
from .models import Matchup, Team

logger = logging.getLogger('partydraft.excel_export')


def _header_fill(team: Team) -> PatternFill:
    color = (team.hex or '').lstrip('#').upper()
    if len(color) != 6:
        color = 'FFFFFF'
    return PatternFill(start_color=color, end_color=color, fill_type='solid')


def build_workbook(teams: Sequence[Team], matchups: Sequence[Matchup] = ()) -> Workbook:
    """
    Build a workbook with three sheets.

    - ``Teams``: one column per team, header filled with the team colour
    - ``Flat``: one row per player (team, name, gender, score, markers)
    - ``Playing Order``: one row per round, one column per colour
    """
    wb = Workbook()
    ws_teams = wb.active
    ws_teams.title = 'Teams'
    ws_flat = wb.create_sheet('Flat')
    ws_order = wb.create_sheet('Playing Order')

    for col, team in enumerate(teams, 1):
        header = ws_teams.cell(row=1, column=col, value=f'{team.color} ({team.score})')
        header.font = Font(bold=True)
        header.fill = _header_fill(team)
        for row, member in enumerate(team.members, 2):
            ws_teams.cell(row=row, column=col, value=member.name)

    ws_flat.append(['team', 'name', 'gender', 'score', 'flexible', 'helper'])
    for team in teams:
        for member in team.members:
            ws_flat.append([
                team.color,
                member.name,
                GENDER_LABELS.get(member.gender, member.gender),
                member.score,
                'yes' if member.no_gender_restriction else '',
                'yes' if member.is_helper else '',
            ])

    if matchups:
        colors = [slot.color for slot in matchups[0].players]
        ws_order.append(['round', *colors])
        for cell in ws_order[1]:
            cell.font = Font(bold=True)
        for matchup in matchups:
            ws_order.append([
                matchup.id,
                *[slot.player.name if slot.player else '-' for slot in matchup.players],
            ])

    return wb


def export_to_excel_bytes(teams: Sequence[Team], matchups: Sequence[Matchup] = ()) -> bytes:
    """Serialize the workbook to bytes (for download buttons)."""
    bio = io.BytesIO()
    build_workbook(teams, matchups).save(bio)
    bio.seek(0)
    return bio.read()


def export_to_excel(path: Path | str, teams: Sequence[Team], matchups: Sequence[Matchup] = ()) -> None:
    """Write the workbook to ``path``."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    build_workbook(teams, matchups).save(path)
    logger.info(f'Workbook saved to {path}')
