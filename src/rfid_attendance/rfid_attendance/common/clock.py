from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ConfigurationError


class ClockSource(Protocol):
    def now(self) -> datetime:
        """Current naive datetime in the institution's civil time."""

        raise NotImplementedError


class InstitutionClock:
    """Wall clock pinned to the institution's time zone, not the host's.

    Returned datetimes are naive so they compare directly with schedule times
    and with DATETIME columns in the store.
    """

    def __init__(self, tz_name: str):
        try:
            self._tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown time zone: {tz_name!r}") from e
        self.tz_name = tz_name

    def now(self) -> datetime:
        return datetime.now(self._tz).replace(tzinfo=None, microsecond=0)


@dataclass
class FixedClock:
    """Clock that always answers the same instant (replay, tests)."""

    instant: datetime

    def now(self) -> datetime:
        return self.instant
