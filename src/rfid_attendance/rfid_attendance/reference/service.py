from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional, Protocol

from ..common.card_ids import CardNormalizer
from ..core.exceptions import ConfigurationError, DomainError
from ..logging_config import get_logger, log_with_context
from ..people.directory import Directory
from ..people.resolver import IdentityResolver
from ..schedules.index import ScheduleIndex
from ..schedules.matcher import SlotMatcher
from .loader import ReferenceRows

logger = get_logger("directory")


class ReferenceLoader(Protocol):
    def load(self) -> ReferenceRows:
        raise NotImplementedError


@dataclass(frozen=True)
class ReferenceData:
    """Immutable snapshot of roster and timetable shared by all requests."""

    directory: Directory
    schedule: ScheduleIndex
    resolver: IdentityResolver
    matcher: SlotMatcher

    @classmethod
    def build(cls, rows: ReferenceRows, *, normalizer: CardNormalizer) -> "ReferenceData":
        directory = Directory.build(students=rows.students, staff=rows.staff, normalizer=normalizer)
        schedule = ScheduleIndex(rows.slots)
        return cls(
            directory=directory,
            schedule=schedule,
            resolver=IdentityResolver(directory),
            matcher=SlotMatcher(schedule),
        )

    def summary(self) -> dict:
        return {
            "students": self.directory.student_count,
            "staff": self.directory.staff_count,
            "slots": len(self.schedule),
            "ambiguous_cards": len(self.directory.ambiguous_cards),
        }


class ReferenceDataService:
    """Owns the current reference snapshot; rebuilt only through reload()."""

    def __init__(self, loader: ReferenceLoader, *, normalizer: CardNormalizer | None = None):
        self._loader = loader
        self._normalizer = normalizer or CardNormalizer()
        self._lock = threading.Lock()
        self._current: Optional[ReferenceData] = None

    def current(self) -> ReferenceData:
        snapshot = self._current
        if snapshot is None:
            raise ConfigurationError("Reference data has not been loaded")
        return snapshot

    def reload(self) -> ReferenceData:
        """Build a fresh snapshot and swap it in.

        On failure the previous snapshot stays active and the error propagates.
        """

        with self._lock:
            try:
                snapshot = ReferenceData.build(self._loader.load(), normalizer=self._normalizer)
            except DomainError as e:
                log_with_context(logger, "ERROR", "Reference data rejected", extra_data={"error": str(e)})
                raise
            self._current = snapshot

        log_with_context(logger, "INFO", "Reference data loaded", extra_data=snapshot.summary())
        return snapshot
