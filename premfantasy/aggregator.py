"""Reduce finished fixtures to per-team and per-player event tallies."""

import logging
from typing import Any, Iterable, Mapping, Union

from .constants import RED_CARD, STATUS_FINISHED, YELLOW_CARD
from .models import CardTally, FixtureEventBundle, TeamTally
from .schemas import Fixture

FixtureLike = Union[Fixture, Mapping[str, Any]]

logger = logging.getLogger('premfantasy.aggregator')


def to_fixture(fixture: FixtureLike) -> Fixture:
    """Accept a Fixture model or a raw provider dict."""
    if isinstance(fixture, Fixture):
        return fixture
    return Fixture.model_validate(fixture)


def aggregate(fixtures: Iterable[FixtureLike]) -> FixtureEventBundle:
    """
    Tally goals, assists, cards and goals conceded across finished fixtures.

    Scoring:
        - Conceded goals accrue to both sides (home conceded += away score)
        - One goal per scorer id, one assist per assist id
        - One card per booking, split by card kind

    Fixtures that are not FINISHED are skipped. Missing goal detail or
    bookings contribute nothing rather than erroring.

    Args:
        fixtures: Fixture models or provider match dicts

    Returns:
        FixtureEventBundle keyed by team id and player id
    """
    bundle = FixtureEventBundle()

    for raw in fixtures:
        fixture = to_fixture(raw)
        if fixture.status != STATUS_FINISHED:
            continue

        bundle.fixtures_counted += 1
        home_id = fixture.home_team.id
        away_id = fixture.away_team.id
        home_goals = fixture.home_goals
        away_goals = fixture.away_goals

        home = bundle.team_stats.setdefault(home_id, TeamTally())
        away = bundle.team_stats.setdefault(away_id, TeamTally())
        home.scored += home_goals
        home.conceded += away_goals
        away.scored += away_goals
        away.conceded += home_goals

        for goal in fixture.goals:
            if goal.scorer and goal.scorer.id is not None:
                bundle.player_goals[goal.scorer.id] = bundle.player_goals.get(goal.scorer.id, 0) + 1
            if goal.assist and goal.assist.id is not None:
                bundle.player_assists[goal.assist.id] = (
                    bundle.player_assists.get(goal.assist.id, 0) + 1
                )

        for booking in fixture.bookings:
            if not booking.player or booking.player.id is None:
                continue
            cards = bundle.player_cards.setdefault(booking.player.id, CardTally())
            if booking.card == YELLOW_CARD:
                cards.yellow += 1
            elif booking.card == RED_CARD:
                cards.red += 1

    logger.debug(
        f'Aggregated {bundle.fixtures_counted} finished fixtures '
        f'({len(bundle.team_stats)} teams, {len(bundle.player_goals)} scorers)'
    )
    return bundle
