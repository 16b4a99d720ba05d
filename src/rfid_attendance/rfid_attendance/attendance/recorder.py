from __future__ import annotations

from typing import Sequence

from ..core.enums import ScanOutcome
from ..core.exceptions import StorageError
from ..logging_config import get_logger, log_with_context
from ..people.model import PersonRecord, Staff
from ..schedules.model import ScheduleSlot
from .dedup.base import DedupGuard
from .ledger import ScanSink
from .model import AttendanceRecord, ScanDecision, ScanEvent

logger = get_logger("storage")
ledger_logger = get_logger("ledger")


class AttendanceRecorder:
    """Admit and persist accepted scans.

    The primary write goes through the dedup guard into the durable store.
    Secondary sinks are written only after it lands; their failures are
    logged and never change the outcome.
    """

    def __init__(self, guard: DedupGuard, *, sinks: Sequence[ScanSink] = ()):
        self._guard = guard
        self._sinks = tuple(sinks)

    def build_record(self, event: ScanEvent, person: PersonRecord, slot: ScheduleSlot) -> AttendanceRecord:
        staff_id = person.staff_id if isinstance(person, Staff) else None
        return AttendanceRecord(
            card_id=person.card_id,
            scanned_at=event.received_at,
            role=person.role,
            person_name=person.name,
            staff_id=staff_id,
            class_name=slot.class_name,
            batch=slot.batch,
            subject=slot.subject,
            kind=slot.kind,
            session_key=slot.session_key(event.received_at.date()).as_string(),
        )

    def record(self, event: ScanEvent, person: PersonRecord, slot: ScheduleSlot) -> ScanDecision:
        candidate = self.build_record(event, person, slot)

        try:
            stored = self._guard.admit(candidate)
        except StorageError as e:
            log_with_context(
                logger,
                "ERROR",
                "Attendance store unavailable; scan not recorded",
                context={"card_id": candidate.card_id, "subject": candidate.subject},
                extra_data={"error": str(e)},
            )
            return ScanDecision(outcome=ScanOutcome.ERROR, card_id=candidate.card_id)

        if stored is None:
            return ScanDecision(outcome=ScanOutcome.DUPLICATE_SCAN, card_id=candidate.card_id)

        for sink in self._sinks:
            try:
                sink.append(stored)
            except Exception as e:
                log_with_context(
                    ledger_logger,
                    "WARNING",
                    "Secondary write failed; primary record kept",
                    context={"card_id": stored.card_id, "attendance_id": stored.attendance_id},
                    extra_data={"sink": type(sink).__name__, "error": str(e)},
                )

        return ScanDecision(outcome=ScanOutcome.SCAN_ACCEPTED, card_id=stored.card_id, record=stored)
