from .schemas import Player, Fixture
from .models import FixtureEventBundle, PlayerEvents, PlayerScore, ComparisonResult
from .roster import (
    Roster,
    RosterError,
    RosterFull,
    DuplicatePlayer,
    PositionFull,
    NotInRoster,
    RosterManager,
    add_player,
    remove_player,
    set_captain,
    clear_captain,
    position_counts,
    is_position_full,
)
from .rules import ScoringRuleSet, default_rules, merge_rules
from .aggregator import aggregate
from .scoring import compute_points, score_player_events, score_roster
from .ledger import GameweekLedger
from .rival import (
    DecodeError,
    RivalRoster,
    RivalComparator,
    generate_rival_roster,
    encode_roster_code,
    decode_roster_code,
    score_matchup,
)
from .storage import JsonStore, reset_user_data
from .data_loader import load_players, load_fixtures, normalize_position, detect_current_matchday

__all__ = [
    # Records
    'Player',
    'Fixture',
    'FixtureEventBundle',
    'PlayerEvents',
    'PlayerScore',
    'ComparisonResult',
    # Roster
    'Roster',
    'RosterError',
    'RosterFull',
    'DuplicatePlayer',
    'PositionFull',
    'NotInRoster',
    'RosterManager',
    'add_player',
    'remove_player',
    'set_captain',
    'clear_captain',
    'position_counts',
    'is_position_full',
    # Rules and scoring
    'ScoringRuleSet',
    'default_rules',
    'merge_rules',
    'aggregate',
    'compute_points',
    'score_player_events',
    'score_roster',
    'GameweekLedger',
    # Head-to-head
    'DecodeError',
    'RivalRoster',
    'RivalComparator',
    'generate_rival_roster',
    'encode_roster_code',
    'decode_roster_code',
    'score_matchup',
    # Storage and data
    'JsonStore',
    'reset_user_data',
    'load_players',
    'load_fixtures',
    'normalize_position',
    'detect_current_matchday',
]
