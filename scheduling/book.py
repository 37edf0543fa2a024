# scheduling/book.py
import logging
import threading
import time
from datetime import datetime, timedelta
from typing import Any, Callable, Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from models.decision import Accepted, Conflict, Decision, Mode
from models.interview import Interview
from scheduling.errors import ConflictError, InterviewValidationError
from scheduling.scheduler import propose_change
from scheduling.store import RecordStore

logger = logging.getLogger(__name__)

DEFAULT_SLOT = timedelta(minutes=30)

_INSTANT = TypeAdapter(datetime)


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def _describe(e: ValidationError) -> list:
    out = []
    for err in e.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        out.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return out


class InterviewBook:
    """
    Entry point for every schedule change.

    Each call builds a proposed record, asks the scheduler for a decision
    against the current snapshot, and commits accepted decisions to the
    store in one full rewrite.
    """

    def __init__(
        self,
        store: RecordStore,
        slot_duration: timedelta = DEFAULT_SLOT,
        clock: Callable[[], int] = _epoch_ms,
    ):
        if slot_duration <= timedelta(0):
            raise ValueError("slot_duration must be positive")
        self.store = store
        self.slot_duration = slot_duration
        self._clock = clock
        self._last_id = 0
        self._lock = threading.Lock()

    # ---------- reads ----------

    def list_all(self) -> Tuple[Interview, ...]:
        return self.store.snapshot()

    def get(self, interview_id: int) -> Optional[Interview]:
        return self.store.find(interview_id)

    # ---------- writes ----------
    # writes hold self._lock from snapshot read through save

    def schedule_new(self, candidate, interviewer, start, end, type) -> Interview:
        with self._lock:
            proposed = self._build(
                id=self._next_id(),
                candidate=candidate,
                interviewer=interviewer,
                start=start,
                end=end,
                type=type,
            )
            self._commit(propose_change(self.store.snapshot(), proposed, Mode.CREATE))
        logger.info("Scheduled interview %s for %s", proposed.id, proposed.interviewer)
        return proposed

    def schedule_slot(self, candidate, interviewer, start, type) -> Interview:
        """Schedule a fixed-length slot beginning at `start`."""
        start = self._parse_start(start)
        return self.schedule_new(candidate, interviewer, start, start + self.slot_duration, type)

    def edit_existing(self, interview_id: int, candidate, interviewer, start, end, type) -> Optional[Interview]:
        with self._lock:
            if self.store.find(interview_id) is None:
                logger.debug("Edit of unknown interview %s ignored", interview_id)
                return None
            proposed = self._build(
                id=interview_id,
                candidate=candidate,
                interviewer=interviewer,
                start=start,
                end=end,
                type=type,
            )
            self._commit(propose_change(self.store.snapshot(), proposed, Mode.UPDATE))
        logger.info("Updated interview %s", interview_id)
        return proposed

    def move_or_resize(self, interview_id: int, new_start, new_end) -> Optional[Interview]:
        """Drag/resize: new interval, every other field kept."""
        with self._lock:
            existing = self.store.find(interview_id)
            if existing is None:
                logger.debug("Move of unknown interview %s ignored", interview_id)
                return None
            fields = existing.model_dump()
            fields.update(start=new_start, end=new_end)
            proposed = self._build(**fields)
            self._commit(propose_change(self.store.snapshot(), proposed, Mode.UPDATE))
        logger.info("Moved interview %s to %s-%s", interview_id, proposed.start, proposed.end)
        return proposed

    def remove(self, interview_id: int) -> Tuple[Interview, ...]:
        with self._lock:
            return self.store.delete(interview_id)

    # ---------- helpers ----------

    def _next_id(self) -> int:
        # time-based, but strictly past anything issued or already stored
        floor = max([self._last_id] + [r.id for r in self.store.snapshot()])
        self._last_id = max(self._clock(), floor + 1)
        return self._last_id

    def _build(self, **fields: Any) -> Interview:
        try:
            return Interview(**fields)
        except ValidationError as e:
            raise InterviewValidationError(_describe(e)) from e

    def _parse_start(self, start) -> datetime:
        try:
            return _INSTANT.validate_python(start)
        except ValidationError as e:
            raise InterviewValidationError([f"start: {msg}" for msg in _describe(e)]) from e

    def _commit(self, decision: Decision) -> None:
        if isinstance(decision, Accepted):
            self.store.save(decision.records)
            return
        if isinstance(decision, Conflict):
            logger.info(
                "Conflict: interview %s overlaps %s for %s",
                decision.proposed.id,
                decision.colliding.id,
                decision.proposed.interviewer,
            )
            raise ConflictError(decision.proposed, decision.colliding)
        raise InterviewValidationError([decision.reason])
