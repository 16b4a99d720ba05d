"""Validate roster/timetable CSVs before pointing the server at them.

Usage: python scripts/check_reference.py [REFERENCE_DIR]
"""

from __future__ import annotations

import importlib
import sys

from config import get_settings_module

from rfid_attendance.common.card_ids import CardNormalizer
from rfid_attendance.common.datetime_utils import weekday_name
from rfid_attendance.core.exceptions import DomainError
from rfid_attendance.reference.loader import CsvReferenceLoader
from rfid_attendance.reference.service import ReferenceDataService


def main(argv: list[str]) -> int:
    settings = importlib.import_module(get_settings_module())
    reference_dir = argv[1] if len(argv) > 1 else settings.REFERENCE_DIR
    normalizer = CardNormalizer(
        digits_only=bool(getattr(settings, "CARD_DIGITS_ONLY", False)),
        strip_leading_zeros=bool(getattr(settings, "CARD_STRIP_LEADING_ZEROS", False)),
    )

    try:
        snapshot = ReferenceDataService(CsvReferenceLoader(reference_dir), normalizer=normalizer).reload()
    except DomainError as e:
        print(f"INVALID: {e}")
        return 1

    summary = snapshot.summary()
    print(f"OK: {reference_dir} -> " + ", ".join(f"{k}={v}" for k, v in summary.items()))
    for day in range(7):
        slots = snapshot.schedule.for_day(day)
        if slots:
            print(f"  {weekday_name(day)}: {len(slots)} slot(s)")
    for card_id in sorted(snapshot.directory.ambiguous_cards):
        print(f"  WARNING: card {card_id} is enrolled as both student and staff")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
