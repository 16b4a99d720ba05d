from __future__ import annotations

import re
from dataclasses import dataclass

_NON_DIGITS = re.compile(r"\D+")


@dataclass(frozen=True)
class CardNormalizer:
    """Canonical form of a card identifier.

    The same instance must be used for directory construction, incoming scans
    and dedup keys; readers and roster exports disagree on case, padding and
    prefixes for the same physical card.
    """

    digits_only: bool = False
    strip_leading_zeros: bool = False

    def normalize(self, raw: str | None) -> str:
        if raw is None:
            return ""
        value = str(raw).strip().upper()
        if self.digits_only:
            value = _NON_DIGITS.sub("", value)
        if self.strip_leading_zeros:
            # keep a lone "0" rather than collapsing it to empty
            value = value.lstrip("0") or ("0" if value else "")
        return value

    __call__ = normalize
