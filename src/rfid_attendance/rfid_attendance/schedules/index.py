from __future__ import annotations

from datetime import time
from types import MappingProxyType
from typing import Iterable, Sequence

from ..core.exceptions import ConfigurationError
from .model import ScheduleSlot


class ScheduleIndex:
    """Immutable timetable indexed by weekday, keeping declaration order."""

    def __init__(self, slots: Iterable[ScheduleSlot]):
        by_day: dict[int, list[ScheduleSlot]] = {}
        count = 0
        for slot in sorted(slots, key=lambda s: s.position):
            if not 0 <= slot.day <= 6:
                raise ConfigurationError(f"Slot day out of range: {slot.day!r}")
            if slot.start > slot.end:
                raise ConfigurationError(
                    f"Slot {slot.subject!r} for {slot.class_name!r} ends before it starts"
                )
            by_day.setdefault(slot.day, []).append(slot)
            count += 1
        self._by_day = MappingProxyType({day: tuple(items) for day, items in by_day.items()})
        self._count = count

    def __len__(self) -> int:
        return self._count

    def for_day(self, day: int) -> Sequence[ScheduleSlot]:
        return self._by_day.get(day, ())

    def active_slots(self, day: int, at: time) -> tuple[ScheduleSlot, ...]:
        """Slots of ``day`` whose window contains ``at`` (both ends inclusive)."""

        return tuple(slot for slot in self.for_day(day) if slot.contains(at))
