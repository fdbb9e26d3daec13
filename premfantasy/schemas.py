"""Pydantic schemas for external records and persisted JSON data."""

import logging
from datetime import datetime

from pydantic import BaseModel, Field, ValidationError, field_validator

from .constants import (
    EVENT_KINDS,
    H2H_HISTORY_LIMIT,
    POSITIONS,
    ROSTER_CODE_VERSION,
    RULES_VERSION,
)

POSITION_PATTERN = r'^(GK|DEF|MID|FWD)$'

logger = logging.getLogger('premfantasy.schemas')


class Player(BaseModel):
    """Player available for selection. Immutable once loaded."""

    id: int
    name: str = Field(..., min_length=1)
    position: str = Field(..., pattern=POSITION_PATTERN)
    team_id: int | None = Field(default=None, alias='teamId')
    team_name: str | None = Field(default=None, alias='teamName')
    team_crest: str | None = Field(default=None, alias='teamCrest')

    class Config:
        extra = 'ignore'
        frozen = True
        populate_by_name = True


class TeamRef(BaseModel):
    """Team reference inside a fixture."""

    id: int
    name: str | None = None

    class Config:
        extra = 'ignore'


class PersonRef(BaseModel):
    """Player reference inside a goal or booking."""

    id: int | None = None
    name: str | None = None

    class Config:
        extra = 'ignore'


class Goal(BaseModel):
    scorer: PersonRef | None = None
    assist: PersonRef | None = None

    class Config:
        extra = 'ignore'


class Booking(BaseModel):
    player: PersonRef | None = None
    card: str | None = None

    class Config:
        extra = 'ignore'


class FullTimeScore(BaseModel):
    home: int | None = None
    away: int | None = None

    class Config:
        extra = 'ignore'


class Score(BaseModel):
    full_time: FullTimeScore = Field(default_factory=FullTimeScore, alias='fullTime')

    @field_validator('full_time', mode='before')
    @classmethod
    def default_full_time(cls, v):
        """Treat a null full-time score as unknown (0-0)."""
        return {} if v is None else v

    class Config:
        extra = 'ignore'
        populate_by_name = True


class Fixture(BaseModel):
    """
    A single match as delivered by the data provider.

    Only status and the two team ids are required. Score, goal detail and
    bookings are optional and default to empty so partial data never errors.
    """

    id: int | None = None
    matchday: int | None = None
    utc_date: datetime | None = Field(default=None, alias='utcDate')
    status: str = Field(..., min_length=1)
    home_team: TeamRef = Field(..., alias='homeTeam')
    away_team: TeamRef = Field(..., alias='awayTeam')
    score: Score = Field(default_factory=Score)
    goals: list[Goal] = Field(default_factory=list)
    bookings: list[Booking] = Field(default_factory=list)

    @field_validator('score', mode='before')
    @classmethod
    def default_score(cls, v):
        """A missing or unreadable score counts as unknown (0-0)."""
        if v is None:
            return {}
        try:
            return Score.model_validate(v)
        except ValidationError as e:
            logger.warning(f'Ignoring unreadable score {v!r}: {e.error_count()} error(s)')
            return {}

    @field_validator('goals', 'bookings', mode='before')
    @classmethod
    def drop_bad_events(cls, v, info):
        """
        Keep the goal/booking entries that parse and drop the rest.

        Providers send null for fixtures without event detail, and the odd
        entry with a null element or a non-numeric player id.
        """
        if v is None:
            return []
        if not isinstance(v, list):
            logger.warning(f'Ignoring {info.field_name}: expected a list, got {type(v).__name__}')
            return []

        model = Goal if info.field_name == 'goals' else Booking
        kept = []
        for entry in v:
            try:
                kept.append(model.model_validate(entry))
            except ValidationError as e:
                logger.warning(
                    f'Dropping {info.field_name} entry {entry!r}: {e.error_count()} error(s)'
                )
        return kept

    @property
    def home_goals(self) -> int:
        return self.score.full_time.home or 0

    @property
    def away_goals(self) -> int:
        return self.score.full_time.away or 0

    class Config:
        extra = 'ignore'
        populate_by_name = True


def _check_rule_keys(v: dict[str, dict[str, int]]) -> dict[str, dict[str, int]]:
    for event, cells in v.items():
        if event not in EVENT_KINDS:
            raise ValueError(f'Invalid scoring event: {event}')
        for pos in cells:
            if pos not in POSITIONS:
                raise ValueError(f'Invalid position for {event}: {pos}')
    return v


class RulesOverride(BaseModel):
    """Persisted user override of the scoring matrix (may be partial)."""

    version: int = Field(default=RULES_VERSION, ge=1)
    rules: dict[str, dict[str, int]] = Field(default_factory=dict)

    @field_validator('rules')
    @classmethod
    def validate_rule_keys(cls, v):
        """Ensure all events and positions are known."""
        return _check_rule_keys(v)

    class Config:
        extra = 'forbid'


class RosterCodePlayer(BaseModel):
    """Minimal player projection carried in a share code."""

    i: int
    n: str = Field(..., min_length=1)
    p: str = Field(..., pattern=POSITION_PATTERN)
    t: str | None = None
    c: str | None = None
    ti: int | None = None

    class Config:
        extra = 'ignore'


class RosterCodePayload(BaseModel):
    """Decoded share code: manager label, squad, captain, format version."""

    m: str | None = None
    s: list[RosterCodePlayer]
    c: int | None = None
    v: int = ROSTER_CODE_VERSION

    class Config:
        extra = 'ignore'


class RivalRosterFile(BaseModel):
    """Persisted rival roster snapshot."""

    name: str = Field(..., min_length=1)
    squad: list[Player] = Field(default_factory=list)
    captain_id: int | None = None
    is_friend: bool = False
    created_at: str | None = None

    class Config:
        extra = 'forbid'


class H2HRecordFile(BaseModel):
    """Cumulative head-to-head record."""

    wins: int = Field(default=0, ge=0)
    draws: int = Field(default=0, ge=0)
    losses: int = Field(default=0, ge=0)

    class Config:
        extra = 'forbid'


class H2HMatch(BaseModel):
    """One entry of the head-to-head history log."""

    gameweek: int | None = Field(default=None, ge=1)
    rival_name: str
    your_score: int
    opp_score: int
    result: str = Field(..., pattern=r'^(win|draw|loss)$')
    timestamp: str

    class Config:
        extra = 'allow'


class LeagueConfig(BaseModel):
    """League configuration settings."""

    season: int = Field(default=2025, ge=2000, le=2100)
    competition: str = Field(default='PL', min_length=1)
    data_dir: str = 'data/state'
    max_gameweek: int = Field(default=38, ge=1, le=60)
    h2h_history_limit: int = Field(default=H2H_HISTORY_LIMIT, ge=1, le=500)
    log_dir: str = 'logs'

    class Config:
        extra = 'forbid'
