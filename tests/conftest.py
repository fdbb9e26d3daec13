"""Shared fixtures for premfantasy tests."""

import pytest

from premfantasy.roster import build_roster
from premfantasy.schemas import Player
from premfantasy.storage import JsonStore


@pytest.fixture
def make_player():
    """Factory for Player records."""

    def _make(pid, position, team_id=1, name=None):
        return Player(
            id=pid,
            name=name or f'Player {pid}',
            position=position,
            team_id=team_id,
            team_name=f'Team {team_id}',
            team_crest=f'https://crests.example/{team_id}.png',
        )

    return _make


@pytest.fixture
def make_fixture():
    """Factory for provider-shaped match dicts."""

    def _make(
        home_id,
        away_id,
        home_goals=0,
        away_goals=0,
        status='FINISHED',
        goals=None,
        bookings=None,
        matchday=1,
        utc_date=None,
    ):
        match = {
            'id': home_id * 1000 + away_id,
            'matchday': matchday,
            'status': status,
            'homeTeam': {'id': home_id, 'name': f'Team {home_id}'},
            'awayTeam': {'id': away_id, 'name': f'Team {away_id}'},
            'score': {'fullTime': {'home': home_goals, 'away': away_goals}},
        }
        if goals is not None:
            match['goals'] = [
                {
                    'scorer': {'id': scorer} if scorer is not None else None,
                    'assist': {'id': assist} if assist is not None else None,
                }
                for scorer, assist in goals
            ]
        if bookings is not None:
            match['bookings'] = [{'player': {'id': pid}, 'card': card} for pid, card in bookings]
        if utc_date is not None:
            match['utcDate'] = utc_date
        return match

    return _make


@pytest.fixture
def store(tmp_path):
    """Empty JsonStore in a temporary directory."""
    return JsonStore(tmp_path / 'state')


@pytest.fixture
def full_squad(make_player):
    """15 players: 2 GK, 5 DEF, 5 MID, 3 FWD split over teams 1 and 2."""
    layout = ['GK'] * 2 + ['DEF'] * 5 + ['MID'] * 5 + ['FWD'] * 3
    return [make_player(i + 1, pos, team_id=1 if i % 2 == 0 else 2) for i, pos in enumerate(layout)]


@pytest.fixture
def full_roster(full_squad):
    return build_roster(full_squad)


@pytest.fixture
def player_pool(make_player):
    """40 players (4 GK, 14 DEF, 14 MID, 8 FWD) across teams 1-4, ids 100+."""
    layout = ['GK'] * 4 + ['DEF'] * 14 + ['MID'] * 14 + ['FWD'] * 8
    return [make_player(100 + i, pos, team_id=(i % 4) + 1) for i, pos in enumerate(layout)]
