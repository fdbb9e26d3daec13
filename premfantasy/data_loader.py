"""Load players and fixtures from provider JSON exports."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import ValidationError

from .schemas import Fixture, Player
from .utils import load_json

logger = logging.getLogger('premfantasy.data_loader')


def normalize_position(raw: Optional[str]) -> str:
    """
    Map a provider position string to GK, DEF, MID or FWD.

    Examples: 'Goalkeeper' -> GK, 'Centre-Back' -> DEF, 'Right Winger' -> FWD.
    Unknown or missing positions count as MID.
    """
    if not raw:
        return 'MID'
    p = raw.lower()
    if 'goal' in p:
        return 'GK'
    if 'def' in p or 'back' in p:
        return 'DEF'
    if 'mid' in p:
        return 'MID'
    if any(word in p for word in ('att', 'for', 'wing', 'strik')):
        return 'FWD'
    return 'MID'


def players_from_teams_payload(payload: dict[str, Any]) -> list[Player]:
    """
    Flatten a competition teams payload into players.

    Args:
        payload: {'teams': [{'id', 'name', 'shortName', 'crest', 'squad': [...]}]}

    Returns:
        List of Player objects tagged with their team id, name and crest
    """
    players = []

    for team in payload.get('teams') or []:
        team_name = team.get('shortName') or team.get('name')
        for entry in team.get('squad') or []:
            try:
                players.append(
                    Player(
                        id=entry['id'],
                        name=entry.get('name') or '',
                        position=normalize_position(entry.get('position')),
                        team_id=team.get('id'),
                        team_name=team_name,
                        team_crest=team.get('crest'),
                    )
                )
            except (KeyError, ValidationError) as e:
                logger.warning(f'Skipping squad entry in {team_name}: {e}')

    return players


def load_players(path: Path | str) -> list[Player]:
    """
    Load a player pool from JSON.

    Accepts either a teams payload ({'teams': [...]}) or a flat list of
    player records.
    """
    data = load_json(path)
    if isinstance(data, dict) and 'teams' in data:
        players = players_from_teams_payload(data)
    elif isinstance(data, list):
        players = []
        for entry in data:
            try:
                players.append(Player.model_validate(entry))
            except ValidationError as e:
                logger.warning(f'Skipping player entry {entry!r}: {e.error_count()} error(s)')
    else:
        raise ValueError(f'Unrecognised player file layout: {path}')

    logger.info(f'Loaded {len(players)} players from {path}')
    return players


def fixtures_from_payload(data: Any, matchday: Optional[int] = None) -> list[Fixture]:
    """Parse a matches payload ({'matches': [...]}) or a plain list of matches."""
    matches = (data.get('matches') or []) if isinstance(data, dict) else data
    if not isinstance(matches, list):
        raise ValueError('Fixtures must be a list or a {"matches": [...]} payload')

    fixtures = [Fixture.model_validate(m) for m in matches]
    if matchday is not None:
        fixtures = [f for f in fixtures if f.matchday == matchday]
    return fixtures


def load_fixtures(path: Path | str, matchday: Optional[int] = None) -> list[Fixture]:
    """
    Load fixtures from JSON, optionally keeping one matchday.

    Args:
        path: Path to a matches export
        matchday: Only keep fixtures of this matchday

    Returns:
        List of Fixture objects
    """
    fixtures = fixtures_from_payload(load_json(path), matchday)
    logger.info(f'Loaded {len(fixtures)} fixtures from {path}')
    return fixtures


def detect_current_matchday(
    fixtures: list[Fixture],
    now: Optional[datetime] = None,
    fallback: int = 1,
) -> int:
    """
    Pick the matchday whose fixture kicks off closest to ``now``.

    Fixtures without a date or matchday are ignored; ``fallback`` is
    returned when none remain.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    best_matchday = fallback
    best_diff = None

    for fixture in sorted(fixtures, key=lambda f: f.matchday or 0):
        if fixture.utc_date is None or fixture.matchday is None:
            continue
        kickoff = fixture.utc_date
        if kickoff.tzinfo is None:
            kickoff = kickoff.replace(tzinfo=timezone.utc)
        diff = abs((kickoff - now).total_seconds())
        if best_diff is None or diff < best_diff:
            best_diff = diff
            best_matchday = fixture.matchday

    return best_matchday
