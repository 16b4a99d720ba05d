from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional, Sequence

from ..common.validators import same_label
from ..core.constants import BATCH_WILDCARD
from ..core.enums import ScanOutcome
from ..people.model import PersonRecord, Staff, Student
from .index import ScheduleIndex
from .model import ScheduleSlot


@dataclass(frozen=True)
class SlotMatch:
    """Result of slot matching: a slot, or the rejection that applies."""

    slot: Optional[ScheduleSlot]
    outcome: Optional[ScanOutcome] = None

    @property
    def matched(self) -> bool:
        return self.slot is not None


class SlotMatcher:
    """Find the single session slot a person may be recorded against.

    Overlapping eligible slots are resolved first-declared-wins: the slot that
    appears earliest in the timetable is returned, every time.
    """

    def __init__(self, schedule: ScheduleIndex):
        self._schedule = schedule

    def active_slots(self, day: int, at: time) -> tuple[ScheduleSlot, ...]:
        return self._schedule.active_slots(day, at)

    def eligible_slot(self, person: PersonRecord, active: Sequence[ScheduleSlot]) -> Optional[ScheduleSlot]:
        if isinstance(person, Student):
            check = _student_fits
        elif isinstance(person, Staff):
            check = _staff_fits
        else:
            raise TypeError(f"Unsupported person record: {type(person)!r}")

        for slot in active:
            if check(person, slot):
                return slot
        return None

    def match(self, person: PersonRecord, at: datetime) -> SlotMatch:
        active = self.active_slots(at.weekday(), at.time())
        if not active:
            return SlotMatch(slot=None, outcome=ScanOutcome.NO_ACTIVE_SLOT)

        slot = self.eligible_slot(person, active)
        if slot is None:
            outcome = ScanOutcome.STUDENT_NOT_ELIGIBLE if isinstance(person, Student) else ScanOutcome.STAFF_NOT_SCHEDULED
            return SlotMatch(slot=None, outcome=outcome)
        return SlotMatch(slot=slot)


def _batch_fits(slot_batch: str, batch: str) -> bool:
    return same_label(slot_batch, BATCH_WILDCARD) or same_label(slot_batch, batch)


def _student_fits(student: Student, slot: ScheduleSlot) -> bool:
    return same_label(slot.class_name, student.class_name) and _batch_fits(slot.batch, student.batch)


def _staff_fits(staff: Staff, slot: ScheduleSlot) -> bool:
    if not slot.staff_id or not same_label(slot.staff_id, staff.staff_id):
        return False

    # No assignment data: the staff id on the slot is enough.
    if staff.assignments is None:
        return True

    return any(
        same_label(a.subject, slot.subject)
        and same_label(a.class_name, slot.class_name)
        and (_batch_fits(a.batch, slot.batch) or _batch_fits(slot.batch, a.batch))
        for a in staff.assignments
    )
