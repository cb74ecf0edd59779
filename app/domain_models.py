from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")

class ErrorKind(str, Enum):
    NORMALIZATION = "normalization"
    VALIDATION = "validation"
    PERSISTENCE = "persistence"

@dataclass
class Ok(Generic[T]):
    value: T

@dataclass
class Err:
    kind: ErrorKind
    message: str

Result = Union[Ok[T], Err]

@dataclass
class IngestOutcome:
    company_info_id: str
    leads_saved: int = 0
    submission_created: bool = False
