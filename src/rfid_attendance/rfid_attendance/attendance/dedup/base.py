from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ..model import AttendanceRecord
from ..repository import AttendanceRepository


class DedupGuard(ABC):
    """Strategy Pattern: decide whether a scan repeats an accepted one.

    ``admit`` is the whole admission check: it consults prior scans and stores
    the record in one atomic repository call. Returns the stored record, or
    None for a duplicate.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    @abstractmethod
    def admit(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        raise NotImplementedError
