"""Constants and mappings for the premfantasy scoring engine."""

# Squad positions, in display order
POSITIONS = ('GK', 'DEF', 'MID', 'FWD')

# Maximum players per position in a squad
POSITION_LIMITS = {
    'GK': 2,
    'DEF': 5,
    'MID': 5,
    'FWD': 3,
}

MAX_SQUAD_SIZE = 15

# Scoring event kinds (keys of the scoring matrix)
EVENT_KINDS = ('goal', 'assist', 'cleanSheet', 'yellowCard', 'redCard', 'appearance')

EVENT_NAMES = {
    'goal': 'Goal',
    'assist': 'Assist',
    'cleanSheet': 'Clean Sheet',
    'yellowCard': 'Yellow Card',
    'redCard': 'Red Card',
    'appearance': 'Appearance',
}

# Bump when DEFAULT_SCORING_RULES changes
RULES_VERSION = 1

DEFAULT_SCORING_RULES = {
    'goal': {'GK': 6, 'DEF': 6, 'MID': 5, 'FWD': 4},
    'assist': {'GK': 3, 'DEF': 3, 'MID': 3, 'FWD': 3},
    'cleanSheet': {'GK': 4, 'DEF': 4, 'MID': 1, 'FWD': 0},
    'yellowCard': {'GK': -1, 'DEF': -1, 'MID': -1, 'FWD': -1},
    'redCard': {'GK': -3, 'DEF': -3, 'MID': -3, 'FWD': -3},
    'appearance': {'GK': 2, 'DEF': 2, 'MID': 2, 'FWD': 2},
}

# Conventional range for a single rule cell (warned on, never rejected)
RULE_VALUE_MIN = -10
RULE_VALUE_MAX = 20

# Fixture statuses reported by the data provider
FIXTURE_STATUSES = ('SCHEDULED', 'TIMED', 'IN_PLAY', 'FINISHED')
STATUS_FINISHED = 'FINISHED'

YELLOW_CARD = 'YELLOW_CARD'
RED_CARD = 'RED_CARD'

# Head-to-head
RESULT_WIN = 'win'
RESULT_DRAW = 'draw'
RESULT_LOSS = 'loss'
H2H_HISTORY_LIMIT = 20
ROSTER_CODE_VERSION = 1
DEFAULT_FRIEND_NAME = 'Friend'

RIVAL_NAME_PREFIXES = [
    'Tactical', 'Strategic', 'Ruthless', 'Cunning', 'Electric',
    'Shadow', 'Iron', 'Golden', 'Phantom', 'Storm',
    'Elite', 'Rogue', 'Apex', 'Neo', 'Cyber',
]

RIVAL_NAME_SUFFIXES = [
    'Manager', 'Boss', 'Gaffer', 'Tactician', 'Mastermind',
    'Coach', 'Strategist', 'General', 'Commander', 'Legend',
]

# Keys of the independently persisted records
STORAGE_KEYS = {
    'SQUAD': 'squad',
    'CAPTAIN': 'captain',
    'RULES': 'scoring_rules',
    'SCORES': 'scores',
    'OPPONENT': 'h2h_opponent',
    'RECORD': 'h2h_record',
    'HISTORY': 'h2h_history',
}
