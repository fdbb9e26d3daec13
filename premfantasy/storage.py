"""Keyed JSON record storage shared by the roster, rules, ledger and H2H state."""

import logging
from pathlib import Path
from typing import Any, Iterable, TypeVar

from pydantic import BaseModel

from .constants import STORAGE_KEYS
from .utils import load_json_safe, save_json

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('premfantasy.storage')


class JsonStore:
    """
    Small set of independently keyed records, one JSON file per key.

    There is no locking and no cross-record transaction: two writers on the
    same directory simply overwrite each other.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        return self.root / f'{key}.json'

    def exists(self, key: str) -> bool:
        return self.path_for(key).exists()

    def load(self, key: str, default: Any = None, schema: type[T] | None = None) -> Any | T:
        """Load a record, returning default if it is missing or unreadable."""
        return load_json_safe(self.path_for(key), default=default, schema=schema)

    def save(self, key: str, data: Any) -> None:
        save_json(self.path_for(key), data)

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        if path.exists():
            path.unlink()
            logger.debug(f'Removed record: {key}')

    def remove_all(self, keys: Iterable[str]) -> None:
        for key in keys:
            self.remove(key)


def reset_user_data(store: JsonStore) -> None:
    """Discard the user's squad, captain and stored gameweek scores."""
    store.remove_all(
        [STORAGE_KEYS['SQUAD'], STORAGE_KEYS['CAPTAIN'], STORAGE_KEYS['SCORES']]
    )
    logger.info('User squad, captain and scores reset')
