# bibnet/ingest/loader.py

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError

from bibnet.errors import (
    EmptyInputError,
    InputFileNotFoundError,
    InputReadError,
    InvalidRecordError,
    MalformedJSONError,
)
from bibnet.ingest.normalize import LabelNormalizer
from bibnet.models.record import Record

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _summarize_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into 'field: message; field: message'."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(x) for x in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg', 'invalid')}")
    return "; ".join(parts)


def read_input(path: PathLike) -> str:
    """
    Read the whole input file as UTF-8 text.

    Raises InputFileNotFoundError, InputReadError or EmptyInputError.
    """
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise InputFileNotFoundError(p) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(p, exc) from exc

    if not text.strip():
        raise EmptyInputError(p)
    return text


def parse_records(
    text: str,
    normalizer: Optional[LabelNormalizer] = None,
) -> List[Record]:
    """
    Parse a JSON array of paper objects into Records.

    Every element must be an object with non-empty `authors` and `keywords`
    arrays of strings; `title`, `venue` and `year` are optional. The first
    element that fails is reported with its index and raw content.
    """
    normalizer = normalizer or LabelNormalizer()

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MalformedJSONError(str(exc)) from exc

    if not isinstance(payload, list):
        raise MalformedJSONError(
            f"expected a top-level array of papers, got {type(payload).__name__}"
        )

    records: List[Record] = []
    for index, obj in enumerate(payload):
        if not isinstance(obj, dict):
            raise InvalidRecordError(index, obj, "each paper must be a JSON object")
        try:
            records.append(Record.from_json(obj, normalizer))
        except ValidationError as exc:
            raise InvalidRecordError(index, obj, _summarize_validation_error(exc)) from exc

    return records


def load_records(
    path: PathLike,
    normalizer: Optional[LabelNormalizer] = None,
) -> List[Record]:
    """Read and parse the records file at `path`."""
    records = parse_records(read_input(path), normalizer)
    logger.info("Loaded %d records from %s", len(records), path)
    return records
