"""Rival rosters, share codes, and head-to-head comparison."""

import base64
import json
import logging
import random
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from pydantic import ValidationError

from .aggregator import FixtureLike, aggregate
from .constants import (
    DEFAULT_FRIEND_NAME,
    H2H_HISTORY_LIMIT,
    MAX_SQUAD_SIZE,
    POSITION_LIMITS,
    RESULT_DRAW,
    RESULT_LOSS,
    RESULT_WIN,
    RIVAL_NAME_PREFIXES,
    RIVAL_NAME_SUFFIXES,
    ROSTER_CODE_VERSION,
    STORAGE_KEYS,
)
from .ledger import check_gameweek
from .models import ComparisonResult
from .roster import Roster, RosterError, build_roster
from .rules import RuleMatrix
from .schemas import (
    H2HMatch,
    H2HRecordFile,
    Player,
    RivalRosterFile,
    RosterCodePayload,
    RosterCodePlayer,
)
from .scoring import roster_total, score_roster
from .storage import JsonStore
from .validators import validate_roster

logger = logging.getLogger('premfantasy.rival')


class DecodeError(ValueError):
    """A share code could not be turned back into a roster."""


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class RivalRoster:
    """A second roster for head-to-head play; its captain is local to it."""
    name: str
    roster: Roster
    is_friend: bool = False
    created_at: Optional[str] = None

    @property
    def players(self) -> Tuple[Player, ...]:
        return self.roster.players

    @property
    def captain_id(self) -> Optional[int]:
        return self.roster.captain_id

    def to_record(self) -> RivalRosterFile:
        return RivalRosterFile(
            name=self.name,
            squad=list(self.roster.players),
            captain_id=self.roster.captain_id,
            is_friend=self.is_friend,
            created_at=self.created_at,
        )

    @classmethod
    def from_record(cls, record: RivalRosterFile) -> 'RivalRoster':
        return cls(
            name=record.name,
            roster=build_roster(record.squad, record.captain_id, strict=False),
            is_friend=record.is_friend,
            created_at=record.created_at,
        )


def generate_rival_name(rng: Optional[random.Random] = None) -> str:
    rng = rng or random.Random()
    return f'{rng.choice(RIVAL_NAME_PREFIXES)} {rng.choice(RIVAL_NAME_SUFFIXES)}'


def generate_rival_roster(
    player_pool: Iterable[Player],
    exclude_ids: Iterable[int] = (),
    rng: Optional[random.Random] = None,
    name: Optional[str] = None,
) -> RivalRoster:
    """
    Build a random rival squad under the usual position limits.

    Excluded ids are removed, the rest shuffled and taken greedily until 15
    players are picked or the pool runs out (a short squad is fine). The
    captain is a random midfielder or forward, else the first pick.

    Args:
        player_pool: Players to choose from
        exclude_ids: Ids already owned by the user
        rng: Source of randomness (seed it for repeatable squads)
        name: Rival manager name (generated when omitted)
    """
    rng = rng or random.Random()
    excluded = set(exclude_ids)
    available = [p for p in player_pool if p.id not in excluded]
    rng.shuffle(available)

    picked: List[Player] = []
    picked_ids = set()
    counts = {pos: 0 for pos in POSITION_LIMITS}

    for player in available:
        if player.id in picked_ids or counts[player.position] >= POSITION_LIMITS[player.position]:
            continue
        picked.append(player)
        picked_ids.add(player.id)
        counts[player.position] += 1
        if len(picked) >= MAX_SQUAD_SIZE:
            break

    candidates = [p for p in picked if p.position in ('MID', 'FWD')]
    if candidates:
        captain_id = rng.choice(candidates).id
    elif picked:
        captain_id = picked[0].id
    else:
        captain_id = None

    rival = RivalRoster(
        name=name or generate_rival_name(rng),
        roster=Roster(players=tuple(picked), captain_id=captain_id),
        is_friend=False,
        created_at=_now_iso(),
    )
    if len(picked) < MAX_SQUAD_SIZE:
        logger.info(f'Player pool only filled {len(picked)}/{MAX_SQUAD_SIZE} rival slots')
    return rival


def encode_roster_code(
    roster: Iterable[Player],
    captain_id: Optional[int],
    label: str = DEFAULT_FRIEND_NAME,
) -> str:
    """
    Encode a squad and captain as a portable share code.

    The code is base64 of compact JSON holding a minimal projection of each
    player (id, name, position, team name, crest, team id).
    """
    payload = RosterCodePayload(
        m=label,
        s=[
            RosterCodePlayer(
                i=p.id, n=p.name, p=p.position, t=p.team_name, c=p.team_crest, ti=p.team_id
            )
            for p in roster
        ],
        c=captain_id,
        v=ROSTER_CODE_VERSION,
    )
    text = json.dumps(payload.model_dump(), separators=(',', ':'), ensure_ascii=False)
    return base64.b64encode(text.encode('utf-8')).decode('ascii')


def decode_roster_code(code: str) -> RivalRoster:
    """
    Decode a share code into a friend's rival roster.

    Raises:
        DecodeError: malformed base64/JSON, wrong payload shape, or a squad
            that breaks the squad rules
    """
    if not isinstance(code, str) or not code.strip():
        raise DecodeError('Share code is empty')

    try:
        data = json.loads(base64.b64decode(code.strip(), validate=True).decode('utf-8'))
    except ValueError as e:
        raise DecodeError('Invalid share code') from e

    try:
        payload = RosterCodePayload.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f'Share code has an unexpected shape: {e.error_count()} problem(s)') from e

    players = [
        Player(id=p.i, name=p.n, position=p.p, team_name=p.t, team_crest=p.c, team_id=p.ti)
        for p in payload.s
    ]
    try:
        roster = build_roster(players, payload.c, strict=True)
    except RosterError as e:
        raise DecodeError(f'Shared squad is not valid: {e.reason}') from e
    errors = validate_roster(roster)
    if errors:
        raise DecodeError(f'Shared squad is not valid: {errors[0]}')

    return RivalRoster(
        name=payload.m or DEFAULT_FRIEND_NAME,
        roster=roster,
        is_friend=True,
        created_at=_now_iso(),
    )


def determine_result(score_a: int, score_b: int) -> str:
    """Result from A's perspective."""
    if score_a > score_b:
        return RESULT_WIN
    if score_a < score_b:
        return RESULT_LOSS
    return RESULT_DRAW


def score_matchup(
    roster_a: Roster,
    captain_a_id: Optional[int],
    roster_b: Roster,
    captain_b_id: Optional[int],
    fixtures: Iterable[FixtureLike],
    rules: Optional[RuleMatrix] = None,
) -> ComparisonResult:
    """
    Score two rosters against the same fixtures.

    Each roster is scored on its own, so swapping A and B swaps the scores
    and inverts a non-draw result.
    """
    bundle = aggregate(fixtures)
    score_a = roster_total(score_roster(roster_a, bundle, rules, captain_a_id))
    score_b = roster_total(score_roster(roster_b, bundle, rules, captain_b_id))
    return ComparisonResult(score_a=score_a, score_b=score_b, result=determine_result(score_a, score_b))


class RivalComparator:
    """
    Owns the rival roster plus the cumulative head-to-head record and history.

    The user's own roster is only ever read.
    """

    def __init__(
        self,
        store: JsonStore,
        rng: Optional[random.Random] = None,
        history_limit: Optional[int] = None,
    ):
        self.store = store
        self.rng = rng or random.Random()
        self.history_limit = history_limit or H2H_HISTORY_LIMIT

    # ---- Opponent ----

    def get_opponent(self) -> Optional[RivalRoster]:
        record = self.store.load(STORAGE_KEYS['OPPONENT'], default=None, schema=RivalRosterFile)
        return RivalRoster.from_record(record) if record else None

    def save_opponent(self, rival: RivalRoster) -> None:
        self.store.save(STORAGE_KEYS['OPPONENT'], rival.to_record())

    def clear_opponent(self) -> None:
        self.store.remove(STORAGE_KEYS['OPPONENT'])

    def generate_opponent(self, player_pool: Iterable[Player], own_roster: Roster) -> RivalRoster:
        """Generate and store a rival that shares no players with ``own_roster``."""
        rival = generate_rival_roster(player_pool, own_roster.player_ids, rng=self.rng)
        self.save_opponent(rival)
        logger.info(f'Generated rival {rival.name} with {len(rival.roster)} players')
        return rival

    def import_friend_roster(self, code: str) -> Tuple[Optional[RivalRoster], Optional[str]]:
        """
        Decode a friend's share code and store it as the opponent.

        Returns:
            Tuple of (rival, error) - exactly one is None
        """
        try:
            rival = decode_roster_code(code)
        except DecodeError as e:
            logger.info(f'Rejected share code: {e}')
            return None, str(e)
        self.save_opponent(rival)
        logger.info(f'Imported {rival.name} with {len(rival.roster)} players')
        return rival, None

    # ---- Record ----

    def get_record(self) -> H2HRecordFile:
        record = self.store.load(STORAGE_KEYS['RECORD'], default=None, schema=H2HRecordFile)
        return record or H2HRecordFile()

    def record_result(self, result: str) -> H2HRecordFile:
        record = self.get_record()
        if result == RESULT_WIN:
            record.wins += 1
        elif result == RESULT_DRAW:
            record.draws += 1
        elif result == RESULT_LOSS:
            record.losses += 1
        else:
            raise ValueError(f'Unknown result: {result}')
        self.store.save(STORAGE_KEYS['RECORD'], record)
        return record

    # ---- History ----

    def get_history(self) -> List[H2HMatch]:
        raw = self.store.load(STORAGE_KEYS['HISTORY'], default=[])
        history = []
        for entry in raw if isinstance(raw, list) else []:
            try:
                history.append(H2HMatch.model_validate(entry))
            except ValidationError:
                logger.warning(f'Skipping malformed history entry: {entry!r}')
        return history

    def add_history_entry(self, match: H2HMatch) -> List[H2HMatch]:
        """Prepend a match, keeping only the most recent ``history_limit`` entries."""
        history = [match] + self.get_history()
        history = history[: self.history_limit]
        self.store.save(STORAGE_KEYS['HISTORY'], [m.model_dump(mode='json') for m in history])
        return history

    # ---- Comparison ----

    def compare_rosters(
        self,
        roster_a: Roster,
        captain_a_id: Optional[int],
        roster_b: Roster,
        captain_b_id: Optional[int],
        fixtures: Iterable[FixtureLike],
        rules: Optional[RuleMatrix] = None,
        gameweek: Optional[int] = None,
        rival_name: Optional[str] = None,
    ) -> ComparisonResult:
        """
        Score both rosters, then record the result and log it to history.

        The history entry is built before anything is saved, so a bad
        gameweek leaves both the record and the history untouched.

        Raises:
            ValueError: gameweek is given but is not a positive integer
        """
        if gameweek is not None:
            check_gameweek(gameweek)
        outcome = score_matchup(roster_a, captain_a_id, roster_b, captain_b_id, fixtures, rules)
        match = H2HMatch(
            gameweek=gameweek,
            rival_name=rival_name or 'Rival',
            your_score=outcome.score_a,
            opp_score=outcome.score_b,
            result=outcome.result,
            timestamp=_now_iso(),
        )
        self.record_result(outcome.result)
        self.add_history_entry(match)
        logger.info(
            f'H2H{f" GW{gameweek}" if gameweek else ""} vs {rival_name or "Rival"}: '
            f'{outcome.score_a}-{outcome.score_b} ({outcome.result})'
        )
        return outcome

    def play_gameweek(
        self,
        gameweek: int,
        roster: Roster,
        fixtures: Iterable[FixtureLike],
        rules: Optional[RuleMatrix] = None,
    ) -> Optional[ComparisonResult]:
        """Compare the user's roster with the stored opponent; None if there is no opponent."""
        opponent = self.get_opponent()
        if opponent is None:
            logger.warning('No rival roster stored - generate or import one first')
            return None
        return self.compare_rosters(
            roster,
            roster.captain_id,
            opponent.roster,
            opponent.captain_id,
            fixtures,
            rules,
            gameweek=gameweek,
            rival_name=opponent.name,
        )

    def reset(self) -> None:
        self.store.remove_all(
            [STORAGE_KEYS['OPPONENT'], STORAGE_KEYS['RECORD'], STORAGE_KEYS['HISTORY']]
        )
        logger.info('Head-to-head state reset')
