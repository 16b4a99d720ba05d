from __future__ import annotations

from typing import Optional

from ..logging_config import get_logger, log_with_context
from .directory import Directory
from .model import PersonRecord

logger = get_logger("directory")


class IdentityResolver:
    """Map a scanned card identifier to a person via the Directory."""

    def __init__(self, directory: Directory):
        self._directory = directory

    def normalize(self, raw_card_id: str | None) -> str:
        return self._directory.normalizer.normalize(raw_card_id)

    def resolve(self, raw_card_id: str | None) -> Optional[PersonRecord]:
        """Return the card holder, or None when the card is unknown.

        Students are consulted before staff. A card enrolled in both sets is
        reported on every resolution and always resolves to the student.
        """

        card_id = self.normalize(raw_card_id)
        if not card_id:
            return None

        student = self._directory.student(card_id)
        if student is not None:
            if card_id in self._directory.ambiguous_cards:
                log_with_context(
                    logger,
                    "WARNING",
                    "Ambiguous card resolved as student",
                    context={"card_id": card_id},
                )
            return student

        return self._directory.staff(card_id)
