"""Validation functions for rosters, scoring rules, and scoring results."""

from typing import Mapping

from .constants import (
    EVENT_KINDS,
    MAX_SQUAD_SIZE,
    POSITION_LIMITS,
    POSITIONS,
    RULE_VALUE_MAX,
    RULE_VALUE_MIN,
)
from .models import PlayerScore


def validate_roster(roster) -> list[str]:
    """
    Validate that a roster complies with the squad rules.

    Checks:
    - Squad size (max 15)
    - Position limits
    - No duplicate players
    - Captain is a squad member

    Args:
        roster: Roster to validate

    Returns:
        List of validation error messages (empty if valid)
    """
    errors = []

    if len(roster.players) > MAX_SQUAD_SIZE:
        errors.append(f'Squad has {len(roster.players)} players (max {MAX_SQUAD_SIZE})')

    counts: dict[str, int] = {}
    for player in roster.players:
        counts[player.position] = counts.get(player.position, 0) + 1
    for pos, limit in POSITION_LIMITS.items():
        if counts.get(pos, 0) > limit:
            errors.append(f'Squad has {counts[pos]} {pos} players (max {limit})')

    seen = set()
    duplicates = set()
    for player in roster.players:
        if player.id in seen:
            duplicates.add(player.id)
        seen.add(player.id)
    if duplicates:
        errors.append(f'Squad has duplicate players: {", ".join(str(d) for d in sorted(duplicates))}')

    if roster.captain_id is not None and roster.captain_id not in seen:
        errors.append(f'Captain {roster.captain_id} is not in the squad')

    return errors


def validate_rule_value(event: str, position: str, value: int) -> list[str]:
    """Warn when a rule cell falls outside the conventional points range."""
    if RULE_VALUE_MIN <= value <= RULE_VALUE_MAX:
        return []
    return [
        f'{event}/{position} = {value} is outside the usual range '
        f'({RULE_VALUE_MIN} to {RULE_VALUE_MAX})'
    ]


def validate_rules(rules: Mapping[str, Mapping[str, int]]) -> list[str]:
    """
    Check a full scoring matrix.

    Returns:
        Messages for missing cells and out-of-range values (empty if clean)
    """
    warnings = []
    for event in EVENT_KINDS:
        cells = rules.get(event, {})
        for pos in POSITIONS:
            if pos not in cells:
                warnings.append(f'Missing scoring rule {event}/{pos}')
                continue
            warnings.extend(validate_rule_value(event, pos, cells[pos]))
    return warnings


def validate_player_score(score: PlayerScore) -> list[str]:
    """
    Check that a player's score is reasonable and internally consistent.

    Sanity checks:
    - Total points in reasonable range (-20 to 100)
    - Breakdown totals match final score
    """
    warnings = []

    if score.total_points > 100:
        warnings.append(
            f'{score.name} scored {score.total_points} pts (unusually high - check for scoring bug)'
        )
    elif score.total_points < -20:
        warnings.append(
            f'{score.name} scored {score.total_points} pts (unusually low - check for scoring bug)'
        )

    if score.breakdown:
        breakdown_sum = sum(score.breakdown.values())
        if breakdown_sum != score.total_points:
            warnings.append(
                f'{score.name} breakdown sum ({breakdown_sum}) != total ({score.total_points})'
            )

    return warnings


def validate_gameweek_points(gameweek: int, points: Mapping[int, int]) -> list[str]:
    """
    Sanity-check a gameweek's point map before it is stored.

    Args:
        gameweek: Gameweek number
        points: Player id -> points

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    if len(points) > MAX_SQUAD_SIZE:
        warnings.append(f'GW{gameweek} has points for {len(points)} players (max {MAX_SQUAD_SIZE})')

    total = sum(points.values())
    if total < 0:
        warnings.append(f'GW{gameweek} total is {total} pts (negative total - check rules)')

    return warnings
