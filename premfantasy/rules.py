"""Configurable scoring matrix: defaults, user override, reset."""

import copy
import logging
from typing import Any, Dict, Mapping, Optional

from .constants import DEFAULT_SCORING_RULES, EVENT_KINDS, POSITIONS, RULES_VERSION, STORAGE_KEYS
from .schemas import RulesOverride
from .storage import JsonStore
from .validators import validate_rule_value, validate_rules

RuleMatrix = Dict[str, Dict[str, int]]

logger = logging.getLogger('premfantasy.rules')


def default_rules() -> RuleMatrix:
    """Fresh copy of the default scoring matrix."""
    return copy.deepcopy(DEFAULT_SCORING_RULES)


def merge_rules(override: Optional[Mapping[str, Mapping[str, int]]] = None) -> RuleMatrix:
    """Overlay override cells on the defaults so every event/position cell is defined."""
    merged = default_rules()
    for event, cells in (override or {}).items():
        if event not in merged:
            continue
        for position, value in cells.items():
            if position in merged[event]:
                merged[event][position] = int(value)
    return merged


def _coerce_rule_value(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f'Rule value must be an integer, got {value!r}')
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f'Rule value must be an integer, got {value!r}')
        return int(value)
    return int(value)


class ScoringRuleSet:
    """
    The active scoring matrix for a user.

    A persisted override shadows the defaults cell by cell. Values are not
    range-checked here beyond a logged warning; the UI decides whether to clamp.
    """

    def __init__(self, store: JsonStore):
        self.store = store

    def get_override(self) -> RuleMatrix:
        """Raw override cells as stored (possibly partial, possibly empty)."""
        record = self.store.load(STORAGE_KEYS['RULES'], default=None, schema=RulesOverride)
        if record is None:
            return {}
        if record.version != RULES_VERSION:
            logger.warning(
                f'Scoring override was saved against rules v{record.version}, '
                f'current defaults are v{RULES_VERSION}'
            )
        return {event: dict(cells) for event, cells in record.rules.items()}

    def is_customised(self) -> bool:
        return bool(self.get_override())

    def get_active_rules(self) -> RuleMatrix:
        rules = merge_rules(self.get_override())
        for warning in validate_rules(rules):
            logger.warning(warning)
        return rules

    def update_rule(self, event: str, position: str, value: Any) -> RuleMatrix:
        """
        Set a single cell of the override and persist it.

        Args:
            event: Event kind, e.g. 'goal' or 'cleanSheet'
            position: GK, DEF, MID or FWD
            value: Integer points (numeric strings are accepted)

        Returns:
            The new active matrix

        Raises:
            ValueError: Unknown event or position, or a non-integer value
        """
        if event not in EVENT_KINDS:
            raise ValueError(f'Unknown scoring event: {event}')
        if position not in POSITIONS:
            raise ValueError(f'Unknown position: {position}')
        value = _coerce_rule_value(value)

        for warning in validate_rule_value(event, position, value):
            logger.warning(warning)

        override = self.get_override()
        override.setdefault(event, {})[position] = value
        self.store.save(STORAGE_KEYS['RULES'], RulesOverride(rules=override))
        logger.info(f'Scoring rule {event}/{position} set to {value}')
        return merge_rules(override)

    def reset_rules(self) -> RuleMatrix:
        self.store.remove(STORAGE_KEYS['RULES'])
        logger.info('Scoring rules reset to defaults')
        return default_rules()
