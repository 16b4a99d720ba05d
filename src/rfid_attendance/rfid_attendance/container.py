from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.dedup.base import DedupGuard
from .attendance.dedup.factory import DedupGuardFactory
from .attendance.ledger import CsvScanLedger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.recorder import AttendanceRecorder
from .attendance.repository import AttendanceRepository
from .attendance.service import ScanService
from .common.card_ids import CardNormalizer
from .common.clock import ClockSource, InstitutionClock
from .core.constants import (
    DEFAULT_DEDUP_WINDOW_MINUTES,
    DEFAULT_KEEPALIVE_TOKENS,
    DEFAULT_STORE_TIMEOUT_SECONDS,
    DEFAULT_TIMEZONE,
)
from .database.connection import DatabaseConnection, DBConfig
from .reference.loader import CsvReferenceLoader
from .reference.service import ReferenceDataService


@dataclass(frozen=True)
class Container:
    attendance_repo: AttendanceRepository
    reference_service: ReferenceDataService
    clock: ClockSource
    dedup_guard: DedupGuard
    recorder: AttendanceRecorder
    scan_service: ScanService
    ledger: Optional[CsvScanLedger] = None
    admin_token: str = ""


def assemble(
    *,
    attendance_repo: AttendanceRepository,
    reference_service: ReferenceDataService,
    clock: ClockSource,
    dedup_policy: str = "time_window",
    dedup_window_minutes: int = DEFAULT_DEDUP_WINDOW_MINUTES,
    ledger: Optional[CsvScanLedger] = None,
    keepalive_tokens=DEFAULT_KEEPALIVE_TOKENS,
    admin_token: str = "",
) -> Container:
    """Wire the scan pipeline around an already built repository and reference service."""

    guard = DedupGuardFactory(window_minutes=dedup_window_minutes).for_policy(dedup_policy, attendance_repo)
    recorder = AttendanceRecorder(guard, sinks=[ledger] if ledger else [])
    scan_service = ScanService(reference_service, recorder, clock, keepalive_tokens=keepalive_tokens)

    return Container(
        attendance_repo=attendance_repo,
        reference_service=reference_service,
        clock=clock,
        dedup_guard=guard,
        recorder=recorder,
        scan_service=scan_service,
        ledger=ledger,
        admin_token=admin_token,
    )


def build_container(*, settings: Any) -> Container:
    timeout = int(getattr(settings, "STORE_TIMEOUT_SECONDS", DEFAULT_STORE_TIMEOUT_SECONDS))
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(settings.DB_CONFIG, timeout_seconds=timeout))

    normalizer = CardNormalizer(
        digits_only=bool(getattr(settings, "CARD_DIGITS_ONLY", False)),
        strip_leading_zeros=bool(getattr(settings, "CARD_STRIP_LEADING_ZEROS", False)),
    )
    reference_service = ReferenceDataService(
        CsvReferenceLoader(getattr(settings, "REFERENCE_DIR", "data/reference")),
        normalizer=normalizer,
    )
    reference_service.reload()

    ledger_path = getattr(settings, "LEDGER_PATH", "")

    return assemble(
        attendance_repo=MySQLAttendanceRepository(conn),
        reference_service=reference_service,
        clock=InstitutionClock(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)),
        dedup_policy=getattr(settings, "DEDUP_POLICY", "time_window"),
        dedup_window_minutes=int(getattr(settings, "DEDUP_WINDOW_MINUTES", DEFAULT_DEDUP_WINDOW_MINUTES)),
        ledger=CsvScanLedger(ledger_path) if ledger_path else None,
        keepalive_tokens=getattr(settings, "KEEPALIVE_TOKENS", DEFAULT_KEEPALIVE_TOKENS),
        admin_token=str(getattr(settings, "ADMIN_TOKEN", "") or ""),
    )
