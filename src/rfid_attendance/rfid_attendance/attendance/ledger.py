from __future__ import annotations

import csv
import threading
from pathlib import Path
from typing import Protocol

from ..core.constants import LEDGER_FIELDS
from .model import AttendanceRecord


class ScanSink(Protocol):
    """Secondary, best-effort destination for accepted scans."""

    def append(self, record: AttendanceRecord) -> None:
        raise NotImplementedError


class CsvScanLedger:
    """Append-only per-scan CSV ledger (audit trail).

    Derived view only; the database stays the source of truth.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._lock = threading.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def append(self, record: AttendanceRecord) -> None:
        row = {
            "date": record.scan_date.strftime("%Y-%m-%d"),
            "time": record.scan_time.strftime("%H:%M:%S"),
            "role": record.role.value,
            "name": record.person_name,
            "card_id": record.card_id,
            "class": record.class_name,
            "batch": record.batch,
            "subject": record.subject,
        }
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            new_file = not self._path.exists() or self._path.stat().st_size == 0
            with self._path.open("a", newline="", encoding="utf-8") as f:
                writer = csv.DictWriter(f, fieldnames=LEDGER_FIELDS)
                if new_file:
                    writer.writeheader()
                writer.writerow(row)
