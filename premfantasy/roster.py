"""Squad composition rules and the persisted user roster."""

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional, Tuple

from pydantic import ValidationError

from .constants import MAX_SQUAD_SIZE, POSITION_LIMITS, POSITIONS, STORAGE_KEYS
from .schemas import Player
from .storage import JsonStore
from .validators import validate_roster

logger = logging.getLogger('premfantasy.roster')


class RosterError(Exception):
    """A roster mutation was declined. ``reason`` is suitable for display."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class RosterFull(RosterError):
    pass


class DuplicatePlayer(RosterError):
    pass


class PositionFull(RosterError):
    pass


class NotInRoster(RosterError):
    pass


@dataclass(frozen=True)
class Roster:
    """
    Up to 15 unique players with per-position caps and an optional captain.

    Rosters are values: every operation below returns a new Roster and
    leaves its input untouched, so a rejected change can never leave a
    half-applied squad behind.
    """
    players: Tuple[Player, ...] = ()
    captain_id: Optional[int] = None

    def __len__(self) -> int:
        return len(self.players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self.players)

    def __contains__(self, player_id: object) -> bool:
        return any(p.id == player_id for p in self.players)

    @property
    def player_ids(self) -> list[int]:
        return [p.id for p in self.players]

    @property
    def captain(self) -> Optional[Player]:
        return self.get(self.captain_id) if self.captain_id is not None else None

    def get(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None


def position_counts(roster: Roster) -> Dict[str, int]:
    """Count players per position (every position present, zeros included)."""
    counts = {pos: 0 for pos in POSITIONS}
    for player in roster.players:
        counts[player.position] = counts.get(player.position, 0) + 1
    return counts


def is_position_full(roster: Roster, position: str) -> bool:
    return position_counts(roster).get(position, 0) >= POSITION_LIMITS[position]


def is_player_drafted(roster: Roster, player_id: int) -> bool:
    return player_id in roster


def add_player(roster: Roster, player: Player) -> Roster:
    """
    Return a roster with ``player`` appended.

    Raises:
        RosterFull: roster already has 15 players
        DuplicatePlayer: player id already present
        PositionFull: the player's position is at capacity
    """
    if len(roster) >= MAX_SQUAD_SIZE:
        raise RosterFull(f'Squad is full ({len(roster)}/{MAX_SQUAD_SIZE})')

    if player.id in roster:
        raise DuplicatePlayer(f'{player.name} is already in the squad')

    count = position_counts(roster)[player.position]
    limit = POSITION_LIMITS[player.position]
    if count >= limit:
        raise PositionFull(f'{player.position} slots full ({count}/{limit})')

    return replace(roster, players=roster.players + (player,))


def remove_player(roster: Roster, player_id: int) -> Roster:
    """Remove a player if present; releasing the captain clears the captaincy."""
    if player_id not in roster:
        return roster

    players = tuple(p for p in roster.players if p.id != player_id)
    captain_id = None if roster.captain_id == player_id else roster.captain_id
    return Roster(players=players, captain_id=captain_id)


def set_captain(roster: Roster, player_id: int) -> Roster:
    """
    Make ``player_id`` the captain, replacing any previous captain.

    Raises:
        NotInRoster: player is not a current squad member
    """
    if player_id not in roster:
        raise NotInRoster(f'Player {player_id} is not in the squad')
    return replace(roster, captain_id=player_id)


def clear_captain(roster: Roster) -> Roster:
    return replace(roster, captain_id=None)


def build_roster(players, captain_id: Optional[int] = None, strict: bool = True) -> Roster:
    """
    Build a roster by adding ``players`` one at a time.

    With ``strict`` the first rejected player raises; otherwise rejected
    players are skipped with a warning. A captain who is not in the result
    is dropped.
    """
    roster = Roster()
    for player in players:
        try:
            roster = add_player(roster, player)
        except RosterError as e:
            if strict:
                raise
            logger.warning(f'Skipping {player.name} ({player.id}): {e.reason}')

    if captain_id is not None:
        if captain_id in roster:
            roster = set_captain(roster, captain_id)
        else:
            logger.warning(f'Captain {captain_id} is not in the squad, clearing captaincy')
    return roster


class RosterManager:
    """
    The user's roster backed by a JsonStore.

    Squad and captain live in two independent records. Mutations return
    ``(success, reason)`` so callers can show a declined change rather than
    handle an exception.
    """

    def __init__(self, store: JsonStore):
        self.store = store
        self._roster = Roster()
        self.load()

    @property
    def roster(self) -> Roster:
        return self._roster

    def load(self) -> Roster:
        """Load squad and captain, repairing anything that breaks the squad rules."""
        raw_squad = self.store.load(STORAGE_KEYS['SQUAD'], default=[])
        captain_id = self.store.load(STORAGE_KEYS['CAPTAIN'], default=None)

        players = []
        for entry in raw_squad if isinstance(raw_squad, list) else []:
            try:
                players.append(Player.model_validate(entry))
            except ValidationError as e:
                logger.warning(f'Dropping malformed squad entry {entry!r}: {e}')

        if not isinstance(captain_id, int):
            captain_id = None

        self._roster = build_roster(players, captain_id, strict=False)
        for error in validate_roster(self._roster):
            logger.warning(f'Stored squad still breaks the squad rules: {error}')
        logger.debug(f'Loaded squad of {len(self._roster)} players')
        return self._roster

    def save(self) -> None:
        self.store.save(
            STORAGE_KEYS['SQUAD'],
            [p.model_dump(mode='json', by_alias=True) for p in self._roster.players],
        )
        if self._roster.captain_id is None:
            self.store.remove(STORAGE_KEYS['CAPTAIN'])
        else:
            self.store.save(STORAGE_KEYS['CAPTAIN'], self._roster.captain_id)

    def draft_player(self, player: Player) -> Tuple[bool, Optional[str]]:
        try:
            self._roster = add_player(self._roster, player)
        except RosterError as e:
            logger.info(f'Declined draft of {player.name}: {e.reason}')
            return False, e.reason
        self.save()
        logger.info(f'Drafted {player.name} ({player.position})')
        return True, None

    def release_player(self, player_id: int) -> None:
        self._roster = remove_player(self._roster, player_id)
        self.save()

    def make_captain(self, player_id: int) -> Tuple[bool, Optional[str]]:
        try:
            self._roster = set_captain(self._roster, player_id)
        except RosterError as e:
            return False, e.reason
        self.save()
        logger.info(f'Captain set to player {player_id}')
        return True, None

    def clear_captain(self) -> None:
        self._roster = clear_captain(self._roster)
        self.save()

    def reset(self) -> None:
        self._roster = Roster()
        self.store.remove_all([STORAGE_KEYS['SQUAD'], STORAGE_KEYS['CAPTAIN']])
        logger.info('Squad reset')
