# utils/json_parser.py
import json
from typing import Any, List, Sequence

from pydantic import TypeAdapter, ValidationError

from models.interview import Interview
from scheduling.errors import PersistenceReadError
from scheduling.scheduler import find_conflict

_RECORDS = TypeAdapter(List[Interview])


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise PersistenceReadError(f"not valid JSON: {e}") from e


def dump_records(records: Sequence[Interview]) -> str:
    """Serialize the whole collection as a JSON array with ISO 8601 timestamps."""
    return _RECORDS.dump_json(list(records)).decode("utf-8")


def parse_records(text: str) -> List[Interview]:
    """
    Decode a JSON array of interview objects.
    Raises PersistenceReadError if the text is not JSON, not an array,
    any element fails validation, or the collection breaks the schedule
    rules (duplicate ids, empty intervals, same-interviewer overlaps).
    """
    data = _load_json(text)
    if not isinstance(data, list):
        raise PersistenceReadError(f"expected a JSON array, got {type(data).__name__}")
    try:
        records = _RECORDS.validate_python(data)
    except ValidationError as e:
        raise PersistenceReadError(f"invalid interview record: {e.error_count()} error(s)") from e
    _check_schedule(records)
    return records


def _check_schedule(records: List[Interview]) -> None:
    seen = set()
    for i, record in enumerate(records):
        if record.id in seen:
            raise PersistenceReadError(f"duplicate interview id {record.id}")
        seen.add(record.id)
        if record.end <= record.start:
            raise PersistenceReadError(f"interview {record.id} ends before it starts")
        colliding = find_conflict(records[:i], record)
        if colliding is not None:
            raise PersistenceReadError(f"interviews {colliding.id} and {record.id} overlap for {record.interviewer}")
