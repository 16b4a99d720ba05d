from __future__ import annotations

from dataclasses import dataclass

from ...core.constants import DEFAULT_DEDUP_WINDOW_MINUTES
from ...core.enums import DedupPolicy
from ...core.exceptions import ConfigurationError
from ..repository import AttendanceRepository
from .base import DedupGuard
from .session_key import SessionKeyGuard
from .time_window import TimeWindowGuard


@dataclass
class DedupGuardFactory:
    """Factory Pattern: pick the dedup strategy configured for the deployment."""

    window_minutes: int = DEFAULT_DEDUP_WINDOW_MINUTES

    def for_policy(self, policy: DedupPolicy | str, attendance: AttendanceRepository) -> DedupGuard:
        try:
            policy = DedupPolicy(policy)
        except ValueError as e:
            raise ConfigurationError(f"Unknown dedup policy: {policy!r}") from e

        if policy == DedupPolicy.SESSION_KEY:
            return SessionKeyGuard(attendance)
        return TimeWindowGuard(attendance, window_minutes=self.window_minutes)
