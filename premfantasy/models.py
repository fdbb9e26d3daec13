"""Data models for the premfantasy scoring engine."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class TeamTally:
    """Goals scored and conceded by one team across the counted fixtures."""
    scored: int = 0
    conceded: int = 0


@dataclass
class CardTally:
    yellow: int = 0
    red: int = 0


@dataclass
class PlayerEvents:
    """Scoring events for one player in one fixture window."""
    goals: int = 0
    assists: int = 0
    clean_sheet: bool = False
    yellow_card: bool = False
    red_card: bool = False
    appeared: bool = True

    @classmethod
    def from_mapping(cls, events: Mapping[str, Any]) -> 'PlayerEvents':
        """Build from a mapping using either camelCase or snake_case keys."""
        def pick(camel: str, snake: str) -> Any:
            if camel in events:
                return events[camel]
            return events.get(snake)

        return cls(
            goals=int(events.get('goals') or 0),
            assists=int(events.get('assists') or 0),
            clean_sheet=bool(pick('cleanSheet', 'clean_sheet')),
            yellow_card=bool(pick('yellowCard', 'yellow_card')),
            red_card=bool(pick('redCard', 'red_card')),
            appeared=bool(events.get('appeared', True)),
        )


@dataclass
class FixtureEventBundle:
    """
    Per-team and per-player tallies reduced from a set of finished fixtures.

    Keyed by team id / player id for constant-time lookup while scoring.
    """
    team_stats: Dict[int, TeamTally] = field(default_factory=dict)
    player_goals: Dict[int, int] = field(default_factory=dict)
    player_assists: Dict[int, int] = field(default_factory=dict)
    player_cards: Dict[int, CardTally] = field(default_factory=dict)
    fixtures_counted: int = 0

    def events_for(self, player_id: int, team_id: Optional[int]) -> PlayerEvents:
        """
        Derive a player's scoring events.

        Clean sheet means the player's team conceded nothing. A team with no
        recorded fixture gives no appearance and no clean sheet.
        """
        team = self.team_stats.get(team_id) if team_id is not None else None
        cards = self.player_cards.get(player_id, CardTally())
        return PlayerEvents(
            goals=self.player_goals.get(player_id, 0),
            assists=self.player_assists.get(player_id, 0),
            clean_sheet=team is not None and team.conceded == 0,
            yellow_card=cards.yellow > 0,
            red_card=cards.red > 0,
            appeared=team is not None,
        )


@dataclass
class PlayerScore:
    """Container for a player's score breakdown."""
    player_id: int
    name: str
    position: str
    team: Optional[str]
    total_points: int = 0
    breakdown: Dict[str, int] = field(default_factory=dict)
    events: PlayerEvents = field(default_factory=PlayerEvents)
    is_captain: bool = False
    found_in_stats: bool = False
    data_notes: List[str] = field(default_factory=list)


@dataclass
class ComparisonResult:
    """Head-to-head outcome, always from roster A's perspective."""
    score_a: int
    score_b: int
    result: str
