"""Per-gameweek point maps and season totals derived from them."""

import logging
from typing import Dict, Iterable, Mapping, Optional

from .aggregator import FixtureLike, aggregate
from .constants import STORAGE_KEYS
from .models import PlayerScore
from .rules import RuleMatrix
from .scoring import score_roster
from .storage import JsonStore
from .validators import validate_gameweek_points

logger = logging.getLogger('premfantasy.ledger')


def check_gameweek(gameweek: int) -> int:
    if isinstance(gameweek, bool) or not isinstance(gameweek, int) or gameweek < 1:
        raise ValueError(f'Gameweek must be a positive integer, got {gameweek!r}')
    return gameweek


class GameweekLedger:
    """
    Stored point maps keyed by gameweek.

    Season totals are always summed from the stored maps; there is no
    running counter. Storing a gameweek again replaces it wholesale, so a
    recompute after roster or rule edits changes the season total.
    """

    def __init__(self, store: JsonStore):
        self.store = store

    def _load_all(self) -> Dict[int, Dict[int, int]]:
        raw = self.store.load(STORAGE_KEYS['SCORES'], default={})
        if not isinstance(raw, dict):
            logger.warning('Stored scores are not a mapping, ignoring them')
            return {}

        ledger: Dict[int, Dict[int, int]] = {}
        for gw_key, points in raw.items():
            try:
                gameweek = int(gw_key)
                ledger[gameweek] = {int(pid): int(pts) for pid, pts in points.items()}
            except (TypeError, ValueError, AttributeError):
                logger.warning(f'Skipping unreadable ledger entry for gameweek {gw_key!r}')
        return ledger

    def _save_all(self, ledger: Mapping[int, Mapping[int, int]]) -> None:
        self.store.save(
            STORAGE_KEYS['SCORES'],
            {
                str(gw): {str(pid): pts for pid, pts in points.items()}
                for gw, points in sorted(ledger.items())
            },
        )

    def all_gameweeks(self) -> Dict[int, Dict[int, int]]:
        return self._load_all()

    def stored_gameweeks(self) -> list[int]:
        return sorted(self._load_all())

    def get_gameweek(self, gameweek: int) -> Dict[int, int]:
        """Stored points for a gameweek, or an empty map if none stored."""
        return self._load_all().get(check_gameweek(gameweek), {})

    def store_gameweek(self, gameweek: int, points: Mapping[int, int]) -> None:
        """Replace the stored map for a gameweek (no merge)."""
        check_gameweek(gameweek)
        for warning in validate_gameweek_points(gameweek, points):
            logger.warning(warning)

        ledger = self._load_all()
        if gameweek in ledger:
            logger.info(f'Replacing stored scores for GW{gameweek}')
        ledger[gameweek] = {int(pid): int(pts) for pid, pts in points.items()}
        self._save_all(ledger)

    def score_gameweek(
        self,
        roster,
        fixtures: Iterable[FixtureLike],
        rules: Optional[RuleMatrix] = None,
    ) -> Dict[int, PlayerScore]:
        """Score a roster for a fixture window without storing anything."""
        bundle = aggregate(fixtures)
        return score_roster(roster, bundle, rules, captain_id=roster.captain_id)

    def score_and_store_gameweek(
        self,
        gameweek: int,
        roster,
        fixtures: Iterable[FixtureLike],
        rules: Optional[RuleMatrix] = None,
    ) -> Dict[int, PlayerScore]:
        """
        Score the roster for a gameweek, persist the points, and return the
        full per-player scores (breakdowns included).

        Args:
            gameweek: Gameweek number (1-based)
            roster: Roster whose captain_id is doubled
            fixtures: Fixtures for the gameweek (only FINISHED ones count)
            rules: Active scoring matrix

        Raises:
            ValueError: gameweek is not a positive integer (nothing is stored)
        """
        check_gameweek(gameweek)
        scores = self.score_gameweek(roster, fixtures, rules)
        points = {pid: score.total_points for pid, score in scores.items()}
        self.store_gameweek(gameweek, points)
        logger.info(f'GW{gameweek} stored: {sum(points.values())} pts over {len(points)} players')
        return scores

    def compute_and_store_gameweek(
        self,
        gameweek: int,
        roster,
        fixtures: Iterable[FixtureLike],
        rules: Optional[RuleMatrix] = None,
    ) -> Dict[int, int]:
        """Like score_and_store_gameweek, returning player id to points only."""
        scores = self.score_and_store_gameweek(gameweek, roster, fixtures, rules)
        return {pid: score.total_points for pid, score in scores.items()}

    def gameweek_totals(self) -> Dict[int, int]:
        return {gw: sum(points.values()) for gw, points in sorted(self._load_all().items())}

    def season_total(self, max_gameweek: Optional[int] = None) -> int:
        """
        Sum stored points over gameweeks 1..max_gameweek.

        Args:
            max_gameweek: Last gameweek to include (all stored gameweeks if None)
        """
        return sum(
            total
            for gw, total in self.gameweek_totals().items()
            if max_gameweek is None or 1 <= gw <= max_gameweek
        )

    def reset(self) -> None:
        self.store.remove(STORAGE_KEYS['SCORES'])
        logger.info('Gameweek ledger cleared')
