from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import PersonRole, ScanOutcome, SessionKind


@dataclass(frozen=True)
class ScanEvent:
    """A card read as received by the server (local civil time)."""

    raw_card_id: Optional[str]
    received_at: datetime


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one accepted scan. Never mutated once stored."""

    card_id: str
    scanned_at: datetime
    role: PersonRole
    person_name: str
    class_name: str
    batch: str
    subject: str
    session_key: str
    kind: SessionKind = SessionKind.LECTURE
    staff_id: Optional[str] = None
    attendance_id: Optional[int] = None

    @property
    def scan_date(self) -> date:
        return self.scanned_at.date()

    @property
    def scan_time(self) -> time:
        return self.scanned_at.time()


@dataclass(frozen=True)
class ScanDecision:
    """Terminal result of one scan: the outcome token plus what was stored."""

    outcome: ScanOutcome
    card_id: str = ""
    record: Optional[AttendanceRecord] = None

    @property
    def accepted(self) -> bool:
        return self.outcome == ScanOutcome.SCAN_ACCEPTED
