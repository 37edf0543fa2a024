# scheduling/store.py
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Sequence, Tuple

from models.interview import Interview
from scheduling.errors import PersistenceReadError
from utils.json_parser import dump_records, parse_records

logger = logging.getLogger(__name__)

STORAGE_KEY = "interviews"


class KeyValueBackend(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryBackend:
    """Dict-backed storage; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileBackend:
    """One file per key under `directory`. Writes are atomic renames."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp, self._path(key))
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise


class RecordStore:
    """
    Canonical, ordered interview collection persisted under a single key.

    The whole collection is rewritten on every save. The in-memory sequence
    only changes once the backend write has gone through, so a failed save
    leaves both the durable and the in-memory state untouched.
    """

    def __init__(self, backend: KeyValueBackend, key: str = STORAGE_KEY):
        self._backend = backend
        self._key = key
        self._records: Tuple[Interview, ...] = ()
        self.load()

    def load(self) -> Tuple[Interview, ...]:
        blob = self._backend.get(self._key)
        if blob is None:
            records: Tuple[Interview, ...] = ()
        else:
            try:
                records = tuple(parse_records(blob))
            except PersistenceReadError as e:
                logger.warning("Discarding unreadable interview data under %r: %s", self._key, e)
                records = ()
        self._records = records
        logger.debug("Loaded %d interview(s)", len(records))
        return records

    def save(self, records: Sequence[Interview]) -> Tuple[Interview, ...]:
        records = tuple(records)
        self._backend.set(self._key, dump_records(records))
        self._records = records
        logger.debug("Saved %d interview(s)", len(records))
        return records

    def snapshot(self) -> Tuple[Interview, ...]:
        return self._records

    def find(self, interview_id: int) -> Optional[Interview]:
        return next((r for r in self._records if r.id == interview_id), None)

    def delete(self, interview_id: int) -> Tuple[Interview, ...]:
        remaining = tuple(r for r in self._records if r.id != interview_id)
        if len(remaining) == len(self._records):
            logger.debug("Delete of unknown interview %s ignored", interview_id)
            return self._records
        return self.save(remaining)
