from __future__ import annotations

from enum import Enum


class PersonRole(str, Enum):
    """Role of a card holder in the directory."""

    STUDENT = "STUDENT"
    STAFF = "STAFF"


class SessionKind(str, Enum):
    LECTURE = "LECTURE"
    PRACTICAL = "PRACTICAL"
    OTHER = "OTHER"

    @classmethod
    def parse(cls, value: str | None) -> "SessionKind":
        if not value or not value.strip():
            return cls.LECTURE
        try:
            return cls(value.strip().upper())
        except ValueError:
            return cls.OTHER


class DedupPolicy(str, Enum):
    """How repeated scans of the same card are suppressed."""

    TIME_WINDOW = "time_window"
    SESSION_KEY = "session_key"


class ScanOutcome(str, Enum):
    """Closed set of tokens answered to reader devices, one per scan.

    ``OK`` is not an acceptance: it answers keep-alive input that was not
    processed, and reader firmware must treat it as "not processed". A recorded
    scan always answers ``SCAN_ACCEPTED``.
    """

    SCAN_ACCEPTED = "SCAN_ACCEPTED"
    UNKNOWN_CARD = "UNKNOWN_CARD"
    NO_ACTIVE_SLOT = "NO_ACTIVE_SLOT"
    STUDENT_NOT_ELIGIBLE = "STUDENT_NOT_ELIGIBLE"
    STAFF_NOT_SCHEDULED = "STAFF_NOT_SCHEDULED"
    DUPLICATE_SCAN = "DUPLICATE_SCAN"
    NO_CARD = "NO_CARD"
    ERROR = "ERROR"
    # keep-alive / sentinel input: not processed, not an error
    OK = "OK"
