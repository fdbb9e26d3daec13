"""Tabular gameweek and season summaries built with polars."""

from typing import Mapping, Optional

import polars as pl

from .models import PlayerScore

GAMEWEEK_SCHEMA = {
    'player_id': pl.Int64,
    'name': pl.Utf8,
    'position': pl.Utf8,
    'team': pl.Utf8,
    'goals': pl.Int64,
    'assists': pl.Int64,
    'clean_sheet': pl.Boolean,
    'yellow_card': pl.Boolean,
    'red_card': pl.Boolean,
    'captain': pl.Boolean,
    'points': pl.Int64,
}

SEASON_SCHEMA = {
    'gameweek': pl.Int64,
    'points': pl.Int64,
}


def gameweek_table(scores: Mapping[int, PlayerScore]) -> pl.DataFrame:
    """One row per player, best score first."""
    rows = [
        {
            'player_id': s.player_id,
            'name': s.name,
            'position': s.position,
            'team': s.team,
            'goals': s.events.goals,
            'assists': s.events.assists,
            'clean_sheet': s.events.clean_sheet,
            'yellow_card': s.events.yellow_card,
            'red_card': s.events.red_card,
            'captain': s.is_captain,
            'points': s.total_points,
        }
        for s in scores.values()
    ]
    return pl.DataFrame(rows, schema=GAMEWEEK_SCHEMA).sort(
        ['points', 'name'], descending=[True, False]
    )


def season_table(ledger, max_gameweek: Optional[int] = None) -> pl.DataFrame:
    """
    Points per stored gameweek with a running total.

    Args:
        ledger: GameweekLedger to read from
        max_gameweek: Last gameweek to include (all when None)
    """
    rows = [
        {'gameweek': gw, 'points': total}
        for gw, total in ledger.gameweek_totals().items()
        if max_gameweek is None or gw <= max_gameweek
    ]
    return (
        pl.DataFrame(rows, schema=SEASON_SCHEMA)
        .sort('gameweek')
        .with_columns(pl.col('points').cum_sum().alias('cumulative'))
    )


def player_season_table(ledger, roster=None) -> pl.DataFrame:
    """
    Season points per player across every stored gameweek.

    Names and positions come from ``roster`` when given; players no longer
    in the roster keep their points but have no name.
    """
    rows = [
        {'gameweek': gw, 'player_id': pid, 'points': pts}
        for gw, points in ledger.all_gameweeks().items()
        for pid, pts in points.items()
    ]
    frame = pl.DataFrame(
        rows, schema={'gameweek': pl.Int64, 'player_id': pl.Int64, 'points': pl.Int64}
    )
    totals = frame.group_by('player_id').agg(
        pl.col('points').sum().alias('points'),
        pl.col('gameweek').n_unique().alias('gameweeks'),
    )

    if roster is not None:
        info = pl.DataFrame(
            [{'player_id': p.id, 'name': p.name, 'position': p.position} for p in roster.players],
            schema={'player_id': pl.Int64, 'name': pl.Utf8, 'position': pl.Utf8},
        )
        totals = totals.join(info, on='player_id', how='left')

    return totals.sort(['points', 'player_id'], descending=[True, False])
