from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from ..common.datetime_utils import parse_clock_time, parse_weekday
from ..common.validators import require_max_length, require_non_empty
from ..core.constants import BATCH_WILDCARD, REFERENCE_FIELD_MAX_LENGTHS
from ..core.enums import SessionKind
from ..core.exceptions import ValidationError
from ..people.model import Staff, Student, TeachingAssignment
from ..schedules.model import ScheduleSlot

STUDENTS_FILE = "students.csv"
STAFF_FILE = "staff.csv"
ASSIGNMENTS_FILE = "assignments.csv"
TIMETABLE_FILE = "timetable.csv"


@dataclass(frozen=True)
class ReferenceRows:
    students: list[Student]
    staff: list[Staff]
    slots: list[ScheduleSlot]


class CsvReferenceLoader:
    """Read roster and timetable CSV exports from one directory.

    Expected files (header row required):
      students.csv     name,class,batch,card_id
      staff.csv        staff_id,name,card_id
      assignments.csv  staff_id,subject,class,batch   (optional)
      timetable.csv    day,start,end,class,batch,subject,kind,staff_id
    """

    def __init__(self, reference_dir: str | Path):
        self._dir = Path(reference_dir)

    def load(self) -> ReferenceRows:
        students = [
            Student(
                name=_required(row, "name", where),
                class_name=_required(row, "class", where),
                batch=_optional(row, "batch", where) or BATCH_WILDCARD,
                card_id=_required(row, "card_id", where),
            )
            for where, row in self._rows(STUDENTS_FILE)
        ]

        assignments = self._load_assignments()
        staff = []
        for where, row in self._rows(STAFF_FILE):
            staff_id = _required(row, "staff_id", where)
            staff.append(
                Staff(
                    name=_required(row, "name", where),
                    staff_id=staff_id,
                    card_id=_required(row, "card_id", where),
                    assignments=assignments.get(staff_id.upper()) if assignments is not None else None,
                )
            )

        slots = []
        for position, (where, row) in enumerate(self._rows(TIMETABLE_FILE)):
            try:
                day = parse_weekday(row.get("day") or "")
                start = parse_clock_time(row.get("start") or "")
                end = parse_clock_time(row.get("end") or "")
            except ValueError as e:
                raise ValidationError(f"{where}: {e}") from e
            if start > end:
                raise ValidationError(f"{where}: slot ends before it starts")
            slots.append(
                ScheduleSlot(
                    day=day,
                    start=start,
                    end=end,
                    class_name=_required(row, "class", where),
                    batch=_optional(row, "batch", where) or BATCH_WILDCARD,
                    subject=_required(row, "subject", where),
                    kind=SessionKind.parse(row.get("kind")),
                    staff_id=_optional(row, "staff_id", where),
                    position=position,
                )
            )

        return ReferenceRows(students=students, staff=staff, slots=slots)

    def _load_assignments(self) -> Optional[dict[str, frozenset[TeachingAssignment]]]:
        if not (self._dir / ASSIGNMENTS_FILE).exists():
            return None

        grouped: dict[str, set[TeachingAssignment]] = {}
        for where, row in self._rows(ASSIGNMENTS_FILE):
            staff_id = _required(row, "staff_id", where)
            grouped.setdefault(staff_id.upper(), set()).add(
                TeachingAssignment(
                    subject=_required(row, "subject", where),
                    class_name=_required(row, "class", where),
                    batch=_optional(row, "batch", where) or BATCH_WILDCARD,
                )
            )
        return {k: frozenset(v) for k, v in grouped.items()}

    def _rows(self, filename: str) -> Iterator[tuple[str, dict]]:
        path = self._dir / filename
        if not path.exists():
            raise ValidationError(f"Missing reference file: {path}")

        with path.open("r", newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            for row in reader:
                if not any((v or "").strip() for v in row.values() if isinstance(v, str)):
                    continue
                yield f"{filename}:{reader.line_num}", {(k or "").strip().lower(): v for k, v in row.items()}


def _required(row: dict, key: str, where: str) -> str:
    value = require_non_empty(row.get(key), f"{where}: {key}")
    return require_max_length(value, REFERENCE_FIELD_MAX_LENGTHS[key], f"{where}: {key}")


def _optional(row: dict, key: str, where: str) -> Optional[str]:
    value = (row.get(key) or "").strip()
    if not value:
        return None
    return require_max_length(value, REFERENCE_FIELD_MAX_LENGTHS[key], f"{where}: {key}")
