from __future__ import annotations

import csv
from datetime import datetime, time, timedelta

from rfid_attendance.attendance.ledger import CsvScanLedger
from rfid_attendance.core.enums import PersonRole, ScanOutcome
from rfid_attendance.core.exceptions import StorageError
from rfid_attendance.reference.loader import ReferenceRows

from tests.fakes import MONDAY, InMemoryAttendance

AT_0930 = datetime.combine(MONDAY, time(9, 30))


class BrokenStore(InMemoryAttendance):
    def insert_with_card_lock(self, record, *, admit):
        raise StorageError("connection timed out")

    def insert_unless_session_taken(self, record):
        raise StorageError("connection timed out")


class BrokenSink:
    def append(self, record):
        raise OSError("disk full")


def test_registered_student_in_slot_is_accepted(build_pipeline):
    container, repo = build_pipeline()

    decision = container.scan_service.submit_scan("A1B2")

    assert decision.outcome == ScanOutcome.SCAN_ACCEPTED
    assert len(repo.records) == 1
    record = repo.records[0]
    assert record.subject == "Math"
    assert record.role == PersonRole.STUDENT
    assert record.card_id == "A1B2"
    assert record.scanned_at == AT_0930
    assert record.attendance_id == decision.record.attendance_id


def test_unregistered_card(build_pipeline):
    container, repo = build_pipeline()
    assert container.scan_service.submit_scan("ZZZZ").outcome == ScanOutcome.UNKNOWN_CARD
    assert repo.records == []


def test_missing_card_and_keepalive(build_pipeline):
    container, repo = build_pipeline()
    service = container.scan_service

    assert service.submit_scan(None).outcome == ScanOutcome.NO_CARD
    assert service.submit_scan("   ").outcome == ScanOutcome.NO_CARD
    assert service.submit_scan("ping").outcome == ScanOutcome.OK
    assert repo.records == []


def test_keepalive_reply_is_distinct_from_accepted_scan(build_pipeline):
    container, repo = build_pipeline()
    service = container.scan_service

    assert ScanOutcome.OK.value != ScanOutcome.SCAN_ACCEPTED.value
    assert service.submit_scan("PING").outcome == ScanOutcome.OK
    assert repo.records == []
    assert service.submit_scan("A1B2").outcome == ScanOutcome.SCAN_ACCEPTED
    assert len(repo.records) == 1


def test_staff_not_scheduled_vs_no_active_slot(build_pipeline):
    container, repo = build_pipeline()
    assert container.scan_service.submit_scan("CAFE").outcome == ScanOutcome.STAFF_NOT_SCHEDULED

    container, repo = build_pipeline(now=datetime.combine(MONDAY, time(14, 0)))
    assert container.scan_service.submit_scan("CAFE").outcome == ScanOutcome.NO_ACTIVE_SLOT
    assert repo.records == []


def test_scheduled_staff_is_accepted(build_pipeline):
    container, repo = build_pipeline()
    decision = container.scan_service.submit_scan("f00d")
    assert decision.outcome == ScanOutcome.SCAN_ACCEPTED
    assert repo.records[0].staff_id == "T01"
    assert repo.records[0].role == PersonRole.STAFF


def test_student_in_other_batch_is_not_eligible(build_pipeline):
    container, repo = build_pipeline()
    assert container.scan_service.submit_scan("R2D2").outcome == ScanOutcome.STUDENT_NOT_ELIGIBLE


def test_repeat_scan_is_duplicate(build_pipeline):
    container, repo = build_pipeline()
    service = container.scan_service

    assert service.submit_scan("A1B2").outcome == ScanOutcome.SCAN_ACCEPTED
    assert service.submit_scan("a1b2", now=AT_0930 + timedelta(seconds=599)).outcome == ScanOutcome.DUPLICATE_SCAN
    assert service.submit_scan("A1B2", now=AT_0930 + timedelta(seconds=601)).outcome == ScanOutcome.SCAN_ACCEPTED
    assert len(repo.records) == 2


def test_session_policy_once_per_slot(build_pipeline):
    container, repo = build_pipeline(policy="session_key")
    service = container.scan_service

    assert service.submit_scan("A1B2", now=datetime.combine(MONDAY, time(9, 1))).outcome == ScanOutcome.SCAN_ACCEPTED
    assert service.submit_scan("A1B2", now=datetime.combine(MONDAY, time(9, 59))).outcome == ScanOutcome.DUPLICATE_SCAN
    assert service.submit_scan("A1B2", now=datetime.combine(MONDAY, time(10, 5))).outcome == ScanOutcome.SCAN_ACCEPTED
    assert [r.subject for r in repo.records] == ["Math", "English"]


def test_storage_failure_answers_error(build_pipeline):
    container, repo = build_pipeline(repo=BrokenStore())
    assert container.scan_service.submit_scan("A1B2").outcome == ScanOutcome.ERROR
    assert repo.records == []


def test_unexpected_failure_never_escapes(build_pipeline):
    container, _ = build_pipeline()
    container.reference_service._current = None
    assert container.scan_service.submit_scan("A1B2").outcome == ScanOutcome.ERROR


def test_ledger_receives_accepted_scans(build_pipeline, tmp_path):
    ledger = CsvScanLedger(tmp_path / "ledger" / "scans.csv")
    container, _ = build_pipeline(ledger=ledger)

    container.scan_service.submit_scan("A1B2")
    container.scan_service.submit_scan("ZZZZ")

    with ledger.path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert rows == [
        {
            "date": "2024-01-01",
            "time": "09:30:00",
            "role": "STUDENT",
            "name": "Asha",
            "card_id": "A1B2",
            "class": "10A",
            "batch": "B1",
            "subject": "Math",
        }
    ]


def test_ledger_failure_keeps_accepted_scan(build_pipeline):
    container, repo = build_pipeline()
    container.recorder._sinks = (BrokenSink(),)

    assert container.scan_service.submit_scan("A1B2").outcome == ScanOutcome.SCAN_ACCEPTED
    assert len(repo.records) == 1


def test_empty_timetable(build_pipeline, reference_rows):
    rows = ReferenceRows(students=reference_rows.students, staff=reference_rows.staff, slots=[])
    container, _ = build_pipeline(rows=rows)
    assert container.scan_service.submit_scan("A1B2").outcome == ScanOutcome.NO_ACTIVE_SLOT
