"""Unit tests for the scoring rule set."""

import logging

import pytest

from premfantasy.constants import DEFAULT_SCORING_RULES, STORAGE_KEYS
from premfantasy.rules import ScoringRuleSet, default_rules, merge_rules


class TestDefaults:
    """Tests for the default matrix."""

    def test_default_values(self):
        """Test the default matrix matches the published values exactly."""
        rules = default_rules()
        assert rules['goal'] == {'GK': 6, 'DEF': 6, 'MID': 5, 'FWD': 4}
        assert rules['assist'] == {'GK': 3, 'DEF': 3, 'MID': 3, 'FWD': 3}
        assert rules['cleanSheet'] == {'GK': 4, 'DEF': 4, 'MID': 1, 'FWD': 0}
        assert rules['yellowCard'] == {'GK': -1, 'DEF': -1, 'MID': -1, 'FWD': -1}
        assert rules['redCard'] == {'GK': -3, 'DEF': -3, 'MID': -3, 'FWD': -3}
        assert rules['appearance'] == {'GK': 2, 'DEF': 2, 'MID': 2, 'FWD': 2}

    def test_default_rules_is_a_copy(self):
        rules = default_rules()
        rules['goal']['FWD'] = 99
        assert DEFAULT_SCORING_RULES['goal']['FWD'] == 4

    def test_merge_fills_missing_cells(self):
        merged = merge_rules({'goal': {'FWD': 7}})
        assert merged['goal'] == {'GK': 6, 'DEF': 6, 'MID': 5, 'FWD': 7}
        assert merged['appearance'] == {'GK': 2, 'DEF': 2, 'MID': 2, 'FWD': 2}

    def test_merge_without_override(self):
        assert merge_rules(None) == DEFAULT_SCORING_RULES


class TestScoringRuleSet:
    """Tests for update/reset against a store."""

    def test_active_rules_without_override(self, store):
        assert ScoringRuleSet(store).get_active_rules() == DEFAULT_SCORING_RULES
        assert not ScoringRuleSet(store).is_customised()

    def test_update_then_reset(self, store):
        """Test updating FWD goal to 10 then resetting restores 4."""
        rule_set = ScoringRuleSet(store)
        active = rule_set.update_rule('goal', 'FWD', 10)
        assert active['goal']['FWD'] == 10
        assert rule_set.get_active_rules()['goal']['FWD'] == 10

        restored = rule_set.reset_rules()
        assert restored['goal']['FWD'] == 4
        assert rule_set.get_active_rules()['goal']['FWD'] == 4
        assert not store.exists(STORAGE_KEYS['RULES'])

    def test_update_keeps_other_cells(self, store):
        active = ScoringRuleSet(store).update_rule('cleanSheet', 'MID', 2)
        expected = default_rules()
        expected['cleanSheet']['MID'] = 2
        assert active == expected

    def test_override_stores_only_changed_cells(self, store):
        rule_set = ScoringRuleSet(store)
        rule_set.update_rule('goal', 'FWD', 10)
        rule_set.update_rule('redCard', 'GK', -5)
        assert rule_set.get_override() == {'goal': {'FWD': 10}, 'redCard': {'GK': -5}}

    def test_override_visible_to_new_instance(self, store):
        ScoringRuleSet(store).update_rule('assist', 'DEF', 4)
        assert ScoringRuleSet(store).get_active_rules()['assist']['DEF'] == 4

    def test_numeric_string_coerced(self, store):
        active = ScoringRuleSet(store).update_rule('goal', 'MID', '7')
        assert active['goal']['MID'] == 7

    def test_fractional_value_rejected(self, store):
        with pytest.raises(ValueError):
            ScoringRuleSet(store).update_rule('goal', 'MID', 2.5)

    def test_unknown_event_rejected(self, store):
        with pytest.raises(ValueError, match='Unknown scoring event'):
            ScoringRuleSet(store).update_rule('ownGoal', 'DEF', -2)

    def test_unknown_position_rejected(self, store):
        with pytest.raises(ValueError, match='Unknown position'):
            ScoringRuleSet(store).update_rule('goal', 'ST', 4)

    def test_out_of_range_value_accepted_with_warning(self, store, caplog):
        """Test values outside -10..20 are stored but logged."""
        with caplog.at_level(logging.WARNING, logger='premfantasy.rules'):
            active = ScoringRuleSet(store).update_rule('goal', 'FWD', 50)
        assert active['goal']['FWD'] == 50
        assert 'outside the usual range' in caplog.text

    def test_stored_out_of_range_override_logged(self, store, caplog):
        """Test an out-of-range cell in the stored override is applied but logged."""
        store.save(STORAGE_KEYS['RULES'], {'version': 1, 'rules': {'redCard': {'DEF': -40}}})
        with caplog.at_level(logging.WARNING, logger='premfantasy.rules'):
            active = ScoringRuleSet(store).get_active_rules()
        assert active['redCard']['DEF'] == -40
        assert 'redCard' in caplog.text
        assert 'outside the usual range' in caplog.text

    def test_corrupt_override_falls_back_to_defaults(self, store):
        store.save(STORAGE_KEYS['RULES'], {'version': 1, 'rules': {'goal': {'XX': 3}}})
        assert ScoringRuleSet(store).get_active_rules() == DEFAULT_SCORING_RULES
