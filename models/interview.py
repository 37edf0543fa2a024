# models/interview.py

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator


class InterviewType(str, Enum):
    TECHNICAL = "Technical"
    HR = "HR"
    BEHAVIORAL = "Behavioral"


class Interview(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    candidate: str
    interviewer: str  # conflicts are scoped to this
    start: datetime
    end: datetime  # exclusive
    type: InterviewType

    @field_validator("candidate", "interviewer")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be empty")
        return value

    @field_validator("start", "end")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # naive values are taken as UTC so any two instants compare
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def duration(self):
        return self.end - self.start
