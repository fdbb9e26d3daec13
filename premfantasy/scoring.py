"""Points calculation for a player's events under a scoring matrix."""

import logging
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .models import FixtureEventBundle, PlayerEvents, PlayerScore
from .rules import RuleMatrix, default_rules
from .validators import validate_player_score

EventsLike = Union[PlayerEvents, Mapping[str, Any]]

logger = logging.getLogger('premfantasy.scoring')


def _as_events(events: EventsLike) -> PlayerEvents:
    if isinstance(events, PlayerEvents):
        return events
    return PlayerEvents.from_mapping(events)


def score_player_events(
    position: str,
    events: EventsLike,
    is_captain: bool = False,
    rules: Optional[RuleMatrix] = None,
) -> Tuple[int, Dict[str, int]]:
    """
    Score one player's events.

    Scoring (values per position from ``rules``):
        - Appearance: always awarded
        - Goals: per goal
        - Assists: per assist
        - Clean sheet: once, if kept
        - Yellow card: once, if any yellow
        - Red card: once, if any red
        - Captain: whole total doubled, penalties included

    Args:
        position: GK, DEF, MID or FWD
        events: PlayerEvents or a mapping with goals/assists/cleanSheet/yellowCard/redCard
        is_captain: Double the total
        rules: Scoring matrix (defaults when omitted)

    Returns:
        Tuple of (points, breakdown); breakdown values sum to points
    """
    rules = rules or default_rules()
    ev = _as_events(events)
    points = 0
    breakdown = {}

    appearance_pts = rules['appearance'][position]
    breakdown['appearance'] = appearance_pts
    points += appearance_pts

    goal_pts = ev.goals * rules['goal'][position]
    if goal_pts:
        breakdown['goals'] = goal_pts
    points += goal_pts

    assist_pts = ev.assists * rules['assist'][position]
    if assist_pts:
        breakdown['assists'] = assist_pts
    points += assist_pts

    if ev.clean_sheet:
        breakdown['clean_sheet'] = rules['cleanSheet'][position]
        points += rules['cleanSheet'][position]

    # Cards are flags: at most one penalty per kind per fixture window
    if ev.yellow_card:
        breakdown['yellow_card'] = rules['yellowCard'][position]
        points += rules['yellowCard'][position]

    if ev.red_card:
        breakdown['red_card'] = rules['redCard'][position]
        points += rules['redCard'][position]

    if is_captain:
        breakdown['captain'] = points
        points *= 2

    return points, breakdown


def compute_points(
    position: str,
    events: EventsLike,
    is_captain: bool = False,
    rules: Optional[RuleMatrix] = None,
) -> int:
    """Points for one player; see score_player_events for the scoring order."""
    points, _ = score_player_events(position, events, is_captain, rules)
    return points


def score_roster(
    roster,
    bundle: FixtureEventBundle,
    rules: Optional[RuleMatrix] = None,
    captain_id: Optional[int] = None,
) -> Dict[int, PlayerScore]:
    """
    Score every player of a roster against one aggregated fixture window.

    A player whose team has no counted fixture scores zero.

    Args:
        roster: Roster to score
        bundle: Output of aggregator.aggregate()
        rules: Scoring matrix (defaults when omitted)
        captain_id: Captain to double; pass roster.captain_id for the roster's own

    Returns:
        Dict mapping player id to PlayerScore
    """
    rules = rules or default_rules()
    results: Dict[int, PlayerScore] = {}

    for player in roster.players:
        events = bundle.events_for(player.id, player.team_id)
        is_captain = player.id == captain_id
        result = PlayerScore(
            player_id=player.id,
            name=player.name,
            position=player.position,
            team=player.team_name,
            events=events,
            is_captain=is_captain,
        )

        if events.appeared:
            result.found_in_stats = True
            result.total_points, result.breakdown = score_player_events(
                player.position, events, is_captain, rules
            )
            for warning in validate_player_score(result):
                logger.warning(warning)
        else:
            result.data_notes.append('No finished fixture for team')

        results[player.id] = result

    return results


def roster_total(scores: Mapping[int, PlayerScore]) -> int:
    return sum(s.total_points for s in scores.values())
