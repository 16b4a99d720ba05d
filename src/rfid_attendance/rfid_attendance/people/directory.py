from __future__ import annotations

from dataclasses import replace
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from ..common.card_ids import CardNormalizer
from ..core.exceptions import ConfigurationError
from ..logging_config import get_logger, log_with_context
from .model import Staff, Student

logger = get_logger("directory")


class Directory:
    """Immutable lookup of card holders by normalized card identifier.

    Built once from reference data. Stored records carry the normalized card
    identifier, whatever raw format the roster used.
    """

    def __init__(
        self,
        *,
        normalizer: CardNormalizer,
        students: Mapping[str, Student],
        staff: Mapping[str, Staff],
    ):
        self.normalizer = normalizer
        self._students = MappingProxyType(dict(students))
        self._staff = MappingProxyType(dict(staff))
        self.ambiguous_cards = frozenset(self._students.keys() & self._staff.keys())

    @classmethod
    def build(
        cls,
        *,
        students: Iterable[Student],
        staff: Iterable[Staff],
        normalizer: CardNormalizer | None = None,
    ) -> "Directory":
        normalizer = normalizer or CardNormalizer()
        by_student = _index(students, normalizer, role_label="student")
        by_staff = _index(staff, normalizer, role_label="staff")

        directory = cls(normalizer=normalizer, students=by_student, staff=by_staff)
        for card_id in sorted(directory.ambiguous_cards):
            log_with_context(
                logger,
                "ERROR",
                "Card enrolled both as student and staff; resolving as student",
                context={"card_id": card_id},
                extra_data={
                    "student": by_student[card_id].name,
                    "staff_id": by_staff[card_id].staff_id,
                },
            )
        return directory

    def student(self, card_id: str) -> Optional[Student]:
        return self._students.get(card_id)

    def staff(self, card_id: str) -> Optional[Staff]:
        return self._staff.get(card_id)

    @property
    def student_count(self) -> int:
        return len(self._students)

    @property
    def staff_count(self) -> int:
        return len(self._staff)


def _index(records, normalizer: CardNormalizer, *, role_label: str) -> dict:
    out: dict = {}
    for record in records:
        card_id = normalizer.normalize(record.card_id)
        if not card_id:
            raise ConfigurationError(f"{role_label} {record.name!r} has an empty card identifier")
        if card_id in out:
            raise ConfigurationError(
                f"Duplicate {role_label} card identifier {card_id!r}: "
                f"{out[card_id].name!r} and {record.name!r}"
            )
        out[card_id] = replace(record, card_id=card_id)
    logger.debug("indexed %d %s cards", len(out), role_label)
    return out
