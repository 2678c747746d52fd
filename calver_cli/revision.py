"""CalVer revision identifiers: ``YY.MM.REV[.HOTFIX]``.

A revision is parsed positionally from a dotted string. Missing trailing
fields stay ``None`` and fields that are not numbers coerce to 0, so
``Revision.parse("24.xx.1")`` is ``24.00.1`` rather than an error.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

FIELD_COUNT = 4
YEAR_BASE = 2000

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+(?:_\d+)*)")


class RevisionError(ValueError):
    pass


def _lenient_int(raw: str) -> int:
    m = _LEADING_INT_RE.match(raw)
    if not m:
        return 0
    return int(m.group(1).replace("_", ""))


def _split_fields(text: str) -> list[str]:
    parts = str(text).split(".")
    while parts and parts[-1] == "":
        parts.pop()
    return parts[:FIELD_COUNT]


def _pad2(value: int | None) -> str:
    return f"{0 if value is None else value:02d}"


def format_fields(
    year: int | None,
    month: int | None,
    revision_count: int | None = None,
    hotfix_number: int | None = None,
) -> str:
    """Render fields as ``YY.MM.REV.HOTFIX`` with trailing null fields dropped.

    Only trailing separators are stripped; a null revision count followed by
    a hotfix number keeps its empty slot (``24.03..1``).
    """
    tail = ["" if v is None else str(v) for v in (revision_count, hotfix_number)]
    return ".".join([_pad2(year), _pad2(month), *tail]).rstrip(".")


@dataclass(frozen=True)
class Revision:
    year: int | None
    month: int | None
    revision_count: int | None = None
    hotfix_number: int | None = None

    @classmethod
    def parse(cls, text: str) -> "Revision":
        fields: list[int | None] = [_lenient_int(p) for p in _split_fields(text)]
        fields.extend([None] * (FIELD_COUNT - len(fields)))
        return cls(*fields)

    @classmethod
    def for_date(cls, day: date) -> "Revision":
        """First revision of the month containing ``day``."""
        return cls.parse(day.strftime("%y.%m.1"))

    def to_string(self) -> str:
        return format_fields(self.year, self.month, self.revision_count, self.hotfix_number)

    def __str__(self) -> str:
        return self.to_string()

    def _derive(
        self,
        year: int | None,
        month: int | None,
        revision_count: int | None,
        hotfix_number: int | None = None,
    ) -> "Revision":
        return Revision.parse(format_fields(year, month, revision_count, hotfix_number))

    def next_version(self) -> "Revision":
        # drops any hotfix; use hotfix() for the next hotfix iteration
        count = 1 if self.revision_count is None else self.revision_count + 1
        return self._derive(self.year, self.month, count)

    def hotfix(self) -> "Revision":
        number = 1 if self.hotfix_number is None else self.hotfix_number + 1
        return self._derive(self.year, self.month, self.revision_count, number)

    def is_hotfix(self) -> bool:
        return self.hotfix_number is not None

    def month_start(self) -> "Revision":
        """First revision of the calendar month after this one."""
        if self.month is None or not 1 <= self.month <= 12:
            raise RevisionError(f"cannot compute month start for {self}: month must be 1..12")
        months = (YEAR_BASE + (self.year or 0)) * 12 + self.month
        year, month_index = divmod(months, 12)
        return self._derive((year - YEAR_BASE) % 100, month_index + 1, 1)

    def current_month(self) -> str:
        return format_fields(self.year, self.month)

    def parent_branch(self, force_hotfix: bool = False) -> str:
        """Branch a new branch derived from this revision should fork from.

        Hotfixes fork from their release branch ``YY.MM.REV``; everything
        else forks from the monthly development branch ``YY.MM``.
        """
        if force_hotfix or self.is_hotfix():
            return format_fields(self.year, self.month, self.revision_count)
        return self.current_month()
