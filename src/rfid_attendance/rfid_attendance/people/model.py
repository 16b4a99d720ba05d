from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional, Union

from ..core.enums import PersonRole


@dataclass(frozen=True)
class TeachingAssignment:
    subject: str
    class_name: str
    batch: str


@dataclass(frozen=True)
class Student:
    """Domain entity: enrolled student holding a card."""

    name: str
    class_name: str
    batch: str
    card_id: str

    role = PersonRole.STUDENT


@dataclass(frozen=True)
class Staff:
    """Domain entity: staff member holding a card.

    ``assignments`` is None when no assignment data was loaded for this staff
    member; an empty frozenset means "assigned to nothing".
    """

    name: str
    staff_id: str
    card_id: str
    assignments: Optional[FrozenSet[TeachingAssignment]] = None

    role = PersonRole.STAFF


PersonRecord = Union[Student, Staff]
