"""JSON file helpers shared by the store, config and data loaders."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('premfantasy.utils')


def load_json(path: Path | str, schema: type[T] | None = None) -> Any | T:
    """
    Read a JSON file, optionally validating it into a pydantic model.

    Args:
        path: File to read
        schema: Model class to validate the decoded document against

    Returns:
        The decoded document, or a ``schema`` instance when one is given

    Raises:
        FileNotFoundError: No file at ``path``
        json.JSONDecodeError: The file is not valid JSON
        ValueError: The document does not match ``schema``

    Example:
        from premfantasy.schemas import LeagueConfig
        config = load_json('data/league_config.json', schema=LeagueConfig)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f'File not found: {path}')

    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        logger.error(f'{path} is not valid JSON ({e.msg}, line {e.lineno})')
        raise

    if schema is None:
        return data

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} does not match {schema.__name__}: {e.error_count()} error(s)')
        raise ValueError(f'{path} does not match {schema.__name__}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write ``data`` as UTF-8 JSON, replacing the file atomically.

    Pydantic models are dumped by alias so stored records keep the
    provider's camelCase keys. Parent directories are created as needed.

    Raises:
        TypeError: ``data`` is not JSON-serializable
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(data, BaseModel):
        data = data.model_dump(mode='json', by_alias=True)
    text = json.dumps(data, indent=indent, ensure_ascii=False)

    # Write beside the target then rename, so readers never see a half-written file
    fd, tmp_name = tempfile.mkstemp(prefix=f'.{path.stem}-', suffix='.tmp', dir=path.parent)
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    logger.debug(f'Wrote {path}')


def load_json_safe(path: Path | str, default: Any = None, schema: type[T] | None = None) -> Any | T:
    """
    Like load_json, but return ``default`` for a missing or unreadable file.

    Example:
        scores = load_json_safe('data/state/scores.json', default={})
    """
    try:
        return load_json(path, schema=schema)
    except FileNotFoundError:
        return default
    except ValueError as e:
        # JSONDecodeError is a ValueError too
        logger.warning(f'Ignoring unreadable file {path}: {e}')
        return default
