from .models import Player, Team, MatchupSlot, Matchup
from .targets import compute_gender_targets
from .allocation import DraftSession, DraftStep, allocate_teams, pick_batch
from .matchups import generate_matchups, renumber_matchups
from .scoring import (
    update_team_score,
    update_player_score,
    set_player_score,
    average_score,
    format_average_score,
    leaderboard,
)
from .editing import (
    swap_team_members,
    move_player,
    move_matchup,
    insert_matchup,
    remove_matchup,
    swap_matchup_slots,
)
from .raffle import RaffleDraw, RaffleEntry
from .roster import parse_roster_csv
from .json_io import (
    load_roster,
    save_roster,
    load_teams,
    save_results,
    save_session,
)
from .validators import validate_teams, validate_allocation, validate_matchups

__all__ = [
    # Models
    'Player',
    'Team',
    'MatchupSlot',
    'Matchup',
    # Engines
    'compute_gender_targets',
    'DraftSession',
    'DraftStep',
    'allocate_teams',
    'pick_batch',
    'generate_matchups',
    'renumber_matchups',
    # Scores
    'update_team_score',
    'update_player_score',
    'set_player_score',
    'average_score',
    'format_average_score',
    'leaderboard',
    # Manual edits
    'swap_team_members',
    'move_player',
    'move_matchup',
    'insert_matchup',
    'remove_matchup',
    'swap_matchup_slots',
    # Raffle
    'RaffleDraw',
    'RaffleEntry',
    # Files
    'parse_roster_csv',
    'load_roster',
    'save_roster',
    'load_teams',
    'save_results',
    'save_session',
    # Validation
    'validate_teams',
    'validate_allocation',
    'validate_matchups',
]
