from __future__ import annotations

from typing import Optional

from ..model import AttendanceRecord
from .base import DedupGuard


class SessionKeyGuard(DedupGuard):
    """Allow one accepted record per card and scheduled occurrence."""

    def admit(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        return self._attendance.insert_unless_session_taken(record)
