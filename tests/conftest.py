from __future__ import annotations

from datetime import datetime, time

import pytest

from rfid_attendance.common.card_ids import CardNormalizer
from rfid_attendance.common.clock import FixedClock
from rfid_attendance.container import assemble
from rfid_attendance.people.model import Staff, Student, TeachingAssignment
from rfid_attendance.reference.loader import ReferenceRows
from rfid_attendance.reference.service import ReferenceDataService
from tests.fakes import MONDAY, InMemoryAttendance, StaticLoader, slot


@pytest.fixture
def reference_rows() -> ReferenceRows:
    return ReferenceRows(
        students=[
            Student(name="Asha", class_name="10A", batch="B1", card_id="A1B2"),
            Student(name="Rahul", class_name="10A", batch="B2", card_id="R2D2"),
        ],
        staff=[
            Staff(
                name="Priya",
                staff_id="T01",
                card_id="F00D",
                assignments=frozenset({TeachingAssignment(subject="Math", class_name="10A", batch="ALL")}),
            ),
            Staff(name="Joseph", staff_id="T02", card_id="BEEF", assignments=None),
            Staff(name="Idle", staff_id="T09", card_id="CAFE", assignments=None),
        ],
        slots=[
            slot(0, time(9, 0), time(10, 0), "10A", "B1", "Math", staff_id="T01", position=0),
            slot(0, time(10, 0, 1), time(11, 0), "10A", "ALL", "English", staff_id="T02", position=1),
        ],
    )


@pytest.fixture
def build_pipeline(reference_rows):
    """Factory: (container, repo) wired with in-memory storage and a fixed clock."""

    def _build(*, policy="time_window", rows=None, ledger=None, repo=None, now=None, normalizer=None):
        repo = repo if repo is not None else InMemoryAttendance()
        reference = ReferenceDataService(StaticLoader(rows or reference_rows), normalizer=normalizer or CardNormalizer())
        reference.reload()
        container = assemble(
            attendance_repo=repo,
            reference_service=reference,
            clock=FixedClock(now or datetime.combine(MONDAY, time(9, 30))),
            dedup_policy=policy,
            ledger=ledger,
            admin_token="secret",
        )
        return container, repo

    return _build
