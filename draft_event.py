#!/usr/bin/env python3
"""
Party team draft CLI

Drafts a registered roster onto coloured teams, builds the playing order and
runs the lucky draw, reading and writing the same JSON files as the browser app.

Usage:
    python draft_event.py draft roster.csv --output results.json
    python draft_event.py order results.json --output session.json --xlsx order.xlsx
    python draft_event.py raffle session.json --state raffle.json --remove
"""

import argparse
import logging
import sys
from pathlib import Path

from partydraft import (
    RaffleDraw,
    allocate_teams,
    generate_matchups,
    load_roster,
    load_teams,
    parse_roster_csv,
    save_results,
    save_session,
    validate_allocation,
)
from partydraft.config import get_config
from partydraft.excel_export import export_to_excel
from partydraft.json_io import load_raffle_state, save_raffle_state
from partydraft.logging_config import get_logger, setup_logging

logger = get_logger('cli')


def read_roster(path: Path):
    """Load a roster from .json, or from ``Name, Gender, Marker`` text otherwise."""
    if path.suffix.lower() == '.json':
        return load_roster(path)
    return parse_roster_csv(path.read_text(encoding='utf-8'))


def print_teams(teams) -> None:
    for team in teams:
        names = ', '.join(m.name for m in team.members) or '-'
        print(f"  {team.color:<7} ({len(team.members)}): {names}")


def print_order(matchups) -> None:
    for matchup in matchups:
        cells = [slot.player.name if slot.player else '-' for slot in matchup.players]
        print(f"  {matchup.id:>3}. " + ' | '.join(cells))


def cmd_draft(args, colors) -> int:
    players = read_roster(Path(args.roster))
    teams = allocate_teams(players, colors)

    errors = validate_allocation(players, teams)
    for error in errors:
        logger.warning(error)

    print_teams(teams)
    save_results(args.output, teams)
    print(f"Teams saved to {args.output}")
    return 0


def cmd_order(args, colors) -> int:
    teams, _ = load_teams(args.results)
    matchups = generate_matchups(teams, colors)

    print_order(matchups)
    save_session(args.output, teams, matchups)
    print(f"Playing order saved to {args.output}")

    if args.xlsx:
        export_to_excel(args.xlsx, teams, matchups)
        print(f"Workbook saved to {args.xlsx}")
    return 0


def cmd_raffle(args, colors) -> int:
    teams, _ = load_teams(args.results)
    state_path = Path(args.state)
    raffle = RaffleDraw.from_state(teams, load_raffle_state(state_path))

    if args.reset:
        raffle.reset()
        save_raffle_state(state_path, raffle.to_state())
        print("Raffle pool reset")
        return 0

    winner = raffle.draw()
    if winner is None:
        print("Nobody left in the raffle pool")
        return 1

    print(f"Winner: {winner.name} ({winner.team_color})")
    if args.remove:
        raffle.remove()
        save_raffle_state(state_path, raffle.to_state())
    print(f"{len(raffle.eligible)} still eligible")
    return 0


def main():
    parser = argparse.ArgumentParser(description="Party team draft and playing order")
    parser.add_argument(
        "--config", "-c",
        default=None,
        help="Path to event config JSON (defaults to data/event_config.json)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log engine details",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    draft = subparsers.add_parser("draft", help="Draft a roster onto teams")
    draft.add_argument("roster", help="Roster file (.json or Name, Gender, Marker text)")
    draft.add_argument("--output", "-o", default="results.json", help="Results JSON to write")

    order = subparsers.add_parser("order", help="Generate the playing order")
    order.add_argument("results", help="Results or session JSON")
    order.add_argument("--output", "-o", default="session.json", help="Session JSON to write")
    order.add_argument("--xlsx", default=None, help="Also write a printable workbook")

    raffle = subparsers.add_parser("raffle", help="Draw a raffle winner")
    raffle.add_argument("results", help="Results or session JSON")
    raffle.add_argument("--state", default="raffle.json", help="Raffle state JSON")
    raffle.add_argument("--remove", action="store_true", help="Remove the winner from the pool")
    raffle.add_argument("--reset", action="store_true", help="Put everyone back in the pool")

    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_to_file=False)

    config_path = Path(args.config) if args.config else None
    try:
        config = get_config(config_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Could not load event config: {e}")
        sys.exit(1)

    print(f"{config.event_name}: {', '.join(config.team_colors)}")
    commands = {'draft': cmd_draft, 'order': cmd_order, 'raffle': cmd_raffle}
    try:
        sys.exit(commands[args.command](args, config.team_colors))
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
