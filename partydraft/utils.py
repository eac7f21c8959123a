"""JSON file helpers for roster, results, session and raffle files."""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('partydraft.utils')


def load_json(path: Path | str, schema: type[T] | None = None) -> Any | T:
    """
    Read a JSON file and, when ``schema`` is given, validate it.

    Root models (``RosterFile``, ``ResultsFile``) accept the shell's bare lists.

    Raises:
        FileNotFoundError: Missing file
        json.JSONDecodeError: Not JSON
        ValueError: JSON that does not match ``schema``
    """
    path = Path(path)
    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        data = json.loads(path.read_text(encoding='utf-8'))
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise json.JSONDecodeError(f'Invalid JSON in {path}: {e.msg}', e.doc, e.pos) from e

    if schema is None:
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'{path} does not match {schema.__name__}: {e}')
        raise ValueError(f'{path} does not match {schema.__name__}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """Write ``data`` (plain JSON or a pydantic model, dumped with camelCase aliases)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True)
    path.write_text(json.dumps(data, indent=indent, ensure_ascii=False), encoding='utf-8')
    logger.debug(f'Saved {path}')


def load_json_safe(path: Path | str, default: Any = None, schema: type[T] | None = None) -> Any | T:
    """Like ``load_json``, but fall back to ``default`` for a missing or unreadable file."""
    try:
        return load_json(path, schema=schema)
    except (FileNotFoundError, ValueError) as e:
        logger.warning(f'Using default for {path}: {e}')
        return default
