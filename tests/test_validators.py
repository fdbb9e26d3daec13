"""Unit tests for validation functions."""

from premfantasy.models import PlayerScore
from premfantasy.roster import Roster
from premfantasy.rules import default_rules
from premfantasy.validators import (
    validate_gameweek_points,
    validate_player_score,
    validate_roster,
    validate_rules,
)


class TestValidateRoster:
    """Tests for validate_roster."""

    def test_valid_roster(self, full_roster):
        assert validate_roster(full_roster) == []

    def test_detects_hand_built_violations(self, make_player):
        """Test a Roster assembled without add_player is still checked."""
        players = tuple(make_player(i, 'GK') for i in range(1, 4)) + (make_player(1, 'GK'),)
        errors = validate_roster(Roster(players=players, captain_id=50))
        assert any('GK' in e for e in errors)
        assert any('duplicate' in e for e in errors)
        assert any('Captain 50' in e for e in errors)

    def test_oversized_roster(self, make_player):
        players = tuple(make_player(i, 'MID') for i in range(1, 17))
        errors = validate_roster(Roster(players=players))
        assert any('16 players' in e for e in errors)


class TestValidateRules:
    """Tests for validate_rules."""

    def test_defaults_are_clean(self):
        assert validate_rules(default_rules()) == []

    def test_missing_cell(self):
        rules = default_rules()
        del rules['goal']['GK']
        assert validate_rules(rules) == ['Missing scoring rule goal/GK']

    def test_out_of_range_value(self):
        rules = default_rules()
        rules['redCard']['FWD'] = -15
        warnings = validate_rules(rules)
        assert len(warnings) == 1
        assert 'redCard/FWD' in warnings[0]


class TestValidatePlayerScore:
    """Tests for validate_player_score."""

    def test_consistent_score(self):
        score = PlayerScore(
            player_id=1, name='A', position='MID', team=None,
            total_points=7, breakdown={'appearance': 2, 'goals': 5},
        )
        assert validate_player_score(score) == []

    def test_breakdown_mismatch(self):
        score = PlayerScore(
            player_id=1, name='A', position='MID', team=None,
            total_points=9, breakdown={'appearance': 2, 'goals': 5},
        )
        warnings = validate_player_score(score)
        assert any('breakdown sum' in w for w in warnings)

    def test_unusually_high(self):
        score = PlayerScore(player_id=1, name='A', position='FWD', team=None, total_points=150)
        assert any('unusually high' in w for w in validate_player_score(score))


class TestValidateGameweekPoints:
    """Tests for validate_gameweek_points."""

    def test_clean(self):
        assert validate_gameweek_points(1, {1: 5, 2: -1}) == []

    def test_too_many_players(self):
        warnings = validate_gameweek_points(1, {i: 1 for i in range(20)})
        assert any('20 players' in w for w in warnings)

    def test_negative_total(self):
        warnings = validate_gameweek_points(3, {1: -4})
        assert any('negative total' in w for w in warnings)
