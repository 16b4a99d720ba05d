from __future__ import annotations

from typing import Callable, Optional, Protocol

from .model import AttendanceRecord

AdmitRule = Callable[[Optional[AttendanceRecord]], bool]


class AttendanceRepository(Protocol):
    """Durable store of accepted scans.

    Both insert methods are atomic admission checks: implementations must make
    the lookup and the insert behave as one step against concurrent scans of
    the same card. They return the stored record (with ``attendance_id``) or
    None when the scan was not admitted, and raise StorageError when the store
    cannot be reached in time.
    """

    def latest_for_card(self, card_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert_with_card_lock(self, record: AttendanceRecord, *, admit: AdmitRule) -> Optional[AttendanceRecord]:
        """Under a lock keyed by ``record.card_id``, pass the card's most recent
        record to ``admit`` and insert ``record`` only if it returns True."""

        raise NotImplementedError

    def insert_unless_session_taken(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        """Insert unless a record already exists for (card_id, session_key)."""

        raise NotImplementedError
