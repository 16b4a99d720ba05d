from __future__ import annotations

from datetime import time
from pathlib import Path

import pytest

from rfid_attendance.common.card_ids import CardNormalizer
from rfid_attendance.core.enums import SessionKind
from rfid_attendance.core.exceptions import ConfigurationError, ValidationError
from rfid_attendance.people.model import Staff, Student
from rfid_attendance.reference.loader import CsvReferenceLoader
from rfid_attendance.reference.service import ReferenceDataService


def _write(directory: Path, name: str, text: str) -> None:
    (directory / name).write_text(text.lstrip(), encoding="utf-8")


@pytest.fixture
def reference_dir(tmp_path: Path) -> Path:
    _write(tmp_path, "students.csv", """
name,class,batch,card_id
Asha,10A,B1,A1B2
Meera,11B,,c9d8
""")
    _write(tmp_path, "staff.csv", """
staff_id,name,card_id
T01,Priya,F00D
T02,Joseph,BEEF
""")
    _write(tmp_path, "assignments.csv", """
staff_id,subject,class,batch
t01,Math,10A,ALL
""")
    _write(tmp_path, "timetable.csv", """
day,start,end,class,batch,subject,kind,staff_id
Monday,09:00,10:00,10A,B1,Math,LECTURE,T01

Mon,10:00:01,11:00,10A,ALL,Lab,practical,T02
""")
    return tmp_path


def test_loads_all_files(reference_dir):
    rows = CsvReferenceLoader(reference_dir).load()

    assert rows.students[1] == Student(name="Meera", class_name="11B", batch="ALL", card_id="c9d8")
    priya, joseph = rows.staff
    assert isinstance(priya, Staff)
    assert {(a.subject, a.class_name, a.batch) for a in priya.assignments} == {("Math", "10A", "ALL")}
    # listed in staff.csv but absent from assignments.csv
    assert joseph.assignments is None

    assert [s.position for s in rows.slots] == [0, 1]
    lab = rows.slots[1]
    assert lab.day == 0
    assert lab.start == time(10, 0, 1)
    assert lab.kind == SessionKind.PRACTICAL


def test_missing_assignments_file_means_no_assignment_data(reference_dir):
    (reference_dir / "assignments.csv").unlink()
    rows = CsvReferenceLoader(reference_dir).load()
    assert all(s.assignments is None for s in rows.staff)


def test_bad_time_names_file_and_line(reference_dir):
    _write(reference_dir, "timetable.csv", """
day,start,end,class,batch,subject,kind,staff_id
Monday,09:00,10:00,10A,B1,Math,LECTURE,T01
Monday,9h,10:00,10A,B1,Math,LECTURE,T01
""")
    with pytest.raises(ValidationError, match="timetable.csv:3"):
        CsvReferenceLoader(reference_dir).load()


def test_slot_ending_before_start_is_rejected(reference_dir):
    _write(reference_dir, "timetable.csv", """
day,start,end,class,batch,subject,kind,staff_id
Monday,10:00,09:00,10A,B1,Math,LECTURE,T01
""")
    with pytest.raises(ValidationError):
        CsvReferenceLoader(reference_dir).load()


def test_missing_required_file(tmp_path):
    with pytest.raises(ValidationError, match="students.csv"):
        CsvReferenceLoader(tmp_path).load()


def test_service_builds_snapshot(reference_dir):
    service = ReferenceDataService(CsvReferenceLoader(reference_dir))
    with pytest.raises(ConfigurationError):
        service.current()

    snapshot = service.reload()
    assert service.current() is snapshot
    assert snapshot.summary() == {"students": 2, "staff": 2, "slots": 2, "ambiguous_cards": 0}
    assert isinstance(snapshot.resolver.resolve("C9D8"), Student)


def test_service_keeps_previous_snapshot_on_collision(reference_dir):
    service = ReferenceDataService(CsvReferenceLoader(reference_dir), normalizer=CardNormalizer())
    first = service.reload()

    _write(reference_dir, "students.csv", """
name,class,batch,card_id
Asha,10A,B1,A1B2
Ravi,10A,B2,a1b2
""")
    with pytest.raises(ConfigurationError):
        service.reload()
    assert service.current() is first


def test_oversized_roster_value_names_file_and_line(reference_dir):
    _write(reference_dir, "students.csv", f"""
name,class,batch,card_id
Asha,10A,B1,A1B2
Meera,11B,,{"C" * 65}
""")
    with pytest.raises(ValidationError, match="students.csv:3: card_id"):
        CsvReferenceLoader(reference_dir).load()


def test_oversized_timetable_label_is_rejected(reference_dir):
    _write(reference_dir, "timetable.csv", f"""
day,start,end,class,batch,subject,kind,staff_id
Monday,09:00,10:00,10A,{"B" * 33},Math,LECTURE,T01
""")
    with pytest.raises(ValidationError, match="timetable.csv:2: batch"):
        CsvReferenceLoader(reference_dir).load()


def test_labels_at_column_width_are_accepted(reference_dir):
    _write(reference_dir, "timetable.csv", f"""
day,start,end,class,batch,subject,kind,staff_id
Monday,09:00,10:00,{"C" * 64},{"B" * 32},{"S" * 150},LECTURE,T01
""")
    (slot,) = CsvReferenceLoader(reference_dir).load().slots
    assert len(slot.subject) == 150


def test_sample_reference_data_resolves_with_default_normalizer():
    sample = Path(__file__).resolve().parents[2] / "data" / "reference"
    service = ReferenceDataService(CsvReferenceLoader(sample), normalizer=CardNormalizer())

    snapshot = service.reload()

    assert snapshot.summary()["ambiguous_cards"] == 0
    for student in CsvReferenceLoader(sample).load().students:
        assert " " not in student.card_id
        assert snapshot.resolver.resolve(student.card_id).name == student.name
