"""Unit tests for polars summaries."""

from premfantasy.aggregator import aggregate
from premfantasy.ledger import GameweekLedger
from premfantasy.reports import gameweek_table, player_season_table, season_table
from premfantasy.roster import set_captain
from premfantasy.scoring import score_roster


class TestGameweekTable:
    """Tests for gameweek_table."""

    def test_sorted_by_points(self, full_roster, make_fixture):
        roster = set_captain(full_roster, 13)
        bundle = aggregate([make_fixture(1, 2, 1, 0, goals=[(13, None)])])
        table = gameweek_table(score_roster(roster, bundle, captain_id=13))

        assert table.height == 15
        assert table['player_id'][0] == 13
        assert table['points'][0] == 12
        assert table['captain'][0]
        assert table['points'].sum() == sum(
            s.total_points for s in score_roster(roster, bundle, captain_id=13).values()
        )

    def test_empty(self):
        table = gameweek_table({})
        assert table.height == 0
        assert 'points' in table.columns


class TestSeasonTables:
    """Tests for season_table and player_season_table."""

    def test_cumulative_points(self, store):
        ledger = GameweekLedger(store)
        ledger.store_gameweek(1, {10: 5, 11: 2})
        ledger.store_gameweek(3, {10: 4})
        ledger.store_gameweek(2, {11: 1})

        table = season_table(ledger)
        assert table['gameweek'].to_list() == [1, 2, 3]
        assert table['points'].to_list() == [7, 1, 4]
        assert table['cumulative'].to_list() == [7, 8, 12]
        assert table['cumulative'][-1] == ledger.season_total()

    def test_season_table_max_gameweek(self, store):
        ledger = GameweekLedger(store)
        ledger.store_gameweek(1, {10: 5})
        ledger.store_gameweek(2, {10: 3})
        assert season_table(ledger, max_gameweek=1)['points'].to_list() == [5]

    def test_player_totals(self, store, full_roster):
        ledger = GameweekLedger(store)
        ledger.store_gameweek(1, {1: 6, 13: 10})
        ledger.store_gameweek(2, {1: 2, 99: 3})

        table = player_season_table(ledger, full_roster)
        rows = {row['player_id']: row for row in table.to_dicts()}
        assert rows[13]['points'] == 10
        assert rows[1]['points'] == 8
        assert rows[1]['gameweeks'] == 2
        assert rows[1]['name'] == 'Player 1'
        assert rows[99]['name'] is None
        assert table['player_id'][0] == 13

    def test_player_totals_empty_ledger(self, store):
        assert player_season_table(GameweekLedger(store)).height == 0
