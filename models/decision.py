# models/decision.py

from enum import Enum
from typing import Tuple, Union

from pydantic import BaseModel

from models.interview import Interview


class Mode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


class Accepted(BaseModel):
    records: Tuple[Interview, ...]


class Conflict(BaseModel):
    proposed: Interview
    colliding: Interview


class Invalid(BaseModel):
    proposed: Interview
    reason: str


Decision = Union[Accepted, Conflict, Invalid]
