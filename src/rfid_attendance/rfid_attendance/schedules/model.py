from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from typing import Optional

from ..core.enums import SessionKind


@dataclass(frozen=True)
class ScheduleSlot:
    """One weekly timetable entry.

    ``day`` uses datetime.weekday() numbering (0 = Monday). ``position`` is the
    declaration order in the timetable and decides ties between overlapping
    slots.
    """

    day: int
    start: time
    end: time
    class_name: str
    batch: str
    subject: str
    kind: SessionKind = SessionKind.LECTURE
    staff_id: Optional[str] = None
    position: int = 0

    def contains(self, at: time) -> bool:
        return self.start <= at <= self.end

    def session_key(self, on: date) -> "SessionKey":
        return SessionKey(
            session_date=on,
            start=self.start,
            end=self.end,
            class_name=self.class_name,
            batch=self.batch,
            subject=self.subject,
        )


@dataclass(frozen=True)
class SessionKey:
    """Identity of one scheduled occurrence (a slot on a given calendar date)."""

    session_date: date
    start: time
    end: time
    class_name: str
    batch: str
    subject: str

    def as_string(self) -> str:
        return "|".join(
            [
                self.session_date.isoformat(),
                self.start.strftime("%H:%M:%S"),
                self.end.strftime("%H:%M:%S"),
                self.class_name.strip().upper(),
                self.batch.strip().upper(),
                self.subject.strip().upper(),
            ]
        )
