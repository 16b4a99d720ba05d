from __future__ import annotations

import time
from datetime import datetime
from typing import Iterable

from ..common.clock import ClockSource
from ..core.constants import DEFAULT_KEEPALIVE_TOKENS
from ..core.enums import ScanOutcome
from ..logging_config import get_logger, log_with_context
from ..reference.service import ReferenceDataService
from .model import ScanDecision, ScanEvent
from .recorder import AttendanceRecorder

logger = get_logger("scan")

_LEVEL_BY_OUTCOME = {
    ScanOutcome.OK: "DEBUG",
    ScanOutcome.NO_CARD: "DEBUG",
    ScanOutcome.UNKNOWN_CARD: "WARNING",
    ScanOutcome.NO_ACTIVE_SLOT: "INFO",
    ScanOutcome.STUDENT_NOT_ELIGIBLE: "INFO",
    ScanOutcome.STAFF_NOT_SCHEDULED: "INFO",
    ScanOutcome.DUPLICATE_SCAN: "INFO",
    ScanOutcome.SCAN_ACCEPTED: "INFO",
    ScanOutcome.ERROR: "ERROR",
}


class ScanService:
    """Scan pipeline: resolve card → match slot → dedup → record.

    ``submit_scan`` never raises; every scan ends in exactly one ScanOutcome.
    """

    def __init__(
        self,
        reference: ReferenceDataService,
        recorder: AttendanceRecorder,
        clock: ClockSource,
        *,
        keepalive_tokens: Iterable[str] = DEFAULT_KEEPALIVE_TOKENS,
    ):
        self._reference = reference
        self._recorder = recorder
        self._clock = clock
        self._keepalive = frozenset(t.strip().upper() for t in keepalive_tokens if t and t.strip())

    def submit_scan(self, raw_card_id: str | None, *, now: datetime | None = None) -> ScanDecision:
        started = time.perf_counter()
        try:
            event = ScanEvent(raw_card_id=raw_card_id, received_at=now or self._clock.now())
            decision = self._process(event)
        except Exception:
            log_with_context(
                logger,
                "ERROR",
                "Scan pipeline failed",
                context={"raw_card_id": raw_card_id},
                exc_info=True,
            )
            decision = ScanDecision(outcome=ScanOutcome.ERROR)

        record = decision.record
        log_with_context(
            logger,
            _LEVEL_BY_OUTCOME.get(decision.outcome, "INFO"),
            f"Scan {decision.outcome.value}",
            context={
                "card_id": decision.card_id,
                "outcome": decision.outcome.value,
                "subject": record.subject if record else None,
                "attendance_id": record.attendance_id if record else None,
            },
            extra_data={"duration_ms": round((time.perf_counter() - started) * 1000, 2)},
        )
        return decision

    def _process(self, event: ScanEvent) -> ScanDecision:
        raw = (event.raw_card_id or "").strip()
        if not raw:
            return ScanDecision(outcome=ScanOutcome.NO_CARD)
        if raw.upper() in self._keepalive:
            return ScanDecision(outcome=ScanOutcome.OK)

        reference = self._reference.current()
        card_id = reference.resolver.normalize(raw)
        if not card_id:
            return ScanDecision(outcome=ScanOutcome.NO_CARD)

        person = reference.resolver.resolve(card_id)
        if person is None:
            return ScanDecision(outcome=ScanOutcome.UNKNOWN_CARD, card_id=card_id)

        match = reference.matcher.match(person, event.received_at)
        if not match.matched:
            return ScanDecision(outcome=match.outcome, card_id=card_id)

        return self._recorder.record(event, person, match.slot)
