from __future__ import annotations

import pytest

from rfid_attendance.common.card_ids import CardNormalizer
from rfid_attendance.core.exceptions import ConfigurationError
from rfid_attendance.people.directory import Directory
from rfid_attendance.people.model import Staff, Student
from rfid_attendance.people.resolver import IdentityResolver


def _directory(students=(), staff=(), normalizer=None) -> Directory:
    return Directory.build(students=list(students), staff=list(staff), normalizer=normalizer)


def test_resolve_student_by_any_raw_format():
    directory = _directory(students=[Student(name="Asha", class_name="10A", batch="B1", card_id=" a1b2 ")])
    resolver = IdentityResolver(directory)

    person = resolver.resolve("A1B2")
    assert isinstance(person, Student)
    assert person.card_id == "A1B2"
    assert resolver.resolve("  a1b2") == person


def test_resolve_staff_after_students():
    directory = _directory(
        students=[Student(name="Asha", class_name="10A", batch="B1", card_id="A1B2")],
        staff=[Staff(name="Priya", staff_id="T01", card_id="F00D")],
    )
    person = IdentityResolver(directory).resolve("f00d")
    assert isinstance(person, Staff)
    assert person.staff_id == "T01"


def test_unknown_card_is_none_every_time():
    resolver = IdentityResolver(_directory(students=[Student(name="Asha", class_name="10A", batch="B1", card_id="A1B2")]))
    assert resolver.resolve("ZZZZ") is None
    assert resolver.resolve("ZZZZ") is None
    assert resolver.resolve("") is None
    assert resolver.resolve(None) is None


def test_duplicate_after_normalization_is_configuration_error():
    normalizer = CardNormalizer(digits_only=True, strip_leading_zeros=True)
    with pytest.raises(ConfigurationError):
        _directory(
            students=[
                Student(name="Asha", class_name="10A", batch="B1", card_id="0045-2231"),
                Student(name="Rahul", class_name="10A", batch="B2", card_id="452231"),
            ],
            normalizer=normalizer,
        )


def test_empty_card_is_configuration_error():
    with pytest.raises(ConfigurationError):
        _directory(staff=[Staff(name="Priya", staff_id="T01", card_id="   ")])


def test_student_and_staff_collision_is_reported_and_prefers_student(caplog):
    directory = _directory(
        students=[Student(name="Asha", class_name="10A", batch="B1", card_id="A1B2")],
        staff=[Staff(name="Priya", staff_id="T01", card_id="a1b2")],
    )
    assert directory.ambiguous_cards == frozenset({"A1B2"})

    resolver = IdentityResolver(directory)
    for _ in range(3):
        assert isinstance(resolver.resolve("A1B2"), Student)
    assert any("Ambiguous card" in r.getMessage() for r in caplog.records)


def test_counts():
    directory = _directory(
        students=[Student(name="Asha", class_name="10A", batch="B1", card_id="A1B2")],
        staff=[Staff(name="Priya", staff_id="T01", card_id="F00D"), Staff(name="Joseph", staff_id="T02", card_id="BEEF")],
    )
    assert directory.student_count == 1
    assert directory.staff_count == 2
