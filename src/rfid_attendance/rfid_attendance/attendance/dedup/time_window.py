from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.constants import DEFAULT_DEDUP_WINDOW_MINUTES
from ..model import AttendanceRecord
from ..repository import AttendanceRepository
from .base import DedupGuard


def within_window(prior: datetime, current: datetime, *, window_seconds: int) -> bool:
    """True when ``current`` falls inside the suppression window opened at ``prior``.

    A prior record stamped after ``current`` (clock adjustment) also counts.
    """

    return (current - prior).total_seconds() < window_seconds


class TimeWindowGuard(DedupGuard):
    """Reject a card seen in an accepted scan during the last N minutes."""

    def __init__(self, attendance: AttendanceRepository, *, window_minutes: int = DEFAULT_DEDUP_WINDOW_MINUTES):
        super().__init__(attendance)
        if int(window_minutes) <= 0:
            raise ValueError("window_minutes must be positive")
        self.window_seconds = int(window_minutes) * 60

    def admit(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        def _rule(prior: Optional[AttendanceRecord]) -> bool:
            if prior is None:
                return True
            return not within_window(prior.scanned_at, record.scanned_at, window_seconds=self.window_seconds)

        return self._attendance.insert_with_card_lock(record, admit=_rule)
