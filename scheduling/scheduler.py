# scheduling/scheduler.py
from datetime import datetime
from typing import Optional, Sequence

from models.decision import Accepted, Conflict, Decision, Invalid, Mode
from models.interview import Interview


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open [start, end) overlap; touching endpoints do not overlap."""
    return a_start < b_end and b_start < a_end


def find_conflict(current: Sequence[Interview], proposed: Interview) -> Optional[Interview]:
    """First record booked for the same interviewer whose interval overlaps `proposed`."""
    for existing in current:
        if existing.interviewer != proposed.interviewer:
            continue
        if existing.id == proposed.id:
            # never compare a record against its own previous version
            continue
        if overlaps(proposed.start, proposed.end, existing.start, existing.end):
            return existing
    return None


def propose_change(current: Sequence[Interview], proposed: Interview, mode: Mode) -> Decision:
    """
    Decide whether `proposed` may be committed on top of `current`.

    Returns Invalid for an empty or inverted interval, Conflict naming the
    first colliding booking, or Accepted with the full resulting sequence.
    Nothing here touches storage.
    """
    if proposed.end <= proposed.start:
        return Invalid(proposed=proposed, reason="end must be after start")

    colliding = find_conflict(current, proposed)
    if colliding is not None:
        return Conflict(proposed=proposed, colliding=colliding)

    if mode is Mode.CREATE:
        records = (*current, proposed)
    else:
        records = tuple(proposed if r.id == proposed.id else r for r in current)
    return Accepted(records=records)
