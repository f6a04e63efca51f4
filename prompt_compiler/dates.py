"""Best-effort scanning of free-text period strings such as ``Aug 2021 - Jul 2023``."""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple

MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")
ONGOING_MARKERS = ("present", "current", "now", "today", "ongoing")

_YEAR_RE = re.compile(r"\d{4}")
_MONTH_RE = re.compile(r"(" + "|".join(MONTHS) + r")", re.IGNORECASE)


@dataclass(frozen=True)
class ParsedDate:
    year: int
    month: Optional[int] = None

    def label(self) -> str:
        if self.month is None:
            return str(self.year)
        return f"{MONTHS[self.month - 1].title()} {self.year}"


def split_period(period: Optional[str]) -> Tuple[str, str]:
    """Split on the first dash into a start and end label.

    The end label defaults to ``Present`` when empty. This is not a calendar
    parser: anything unusual is returned verbatim.
    """

    text = (period or "").strip()
    if not text:
        return "Not specified", "Present"
    start, sep, end = text.partition("-")
    if not sep:
        return text, "Present"
    return start.strip() or "Not specified", end.strip() or "Present"


def parse_date_point(text: Optional[str]) -> Optional[ParsedDate]:
    """Return the first 4-digit year plus an optional month, or ``None``."""

    if not text:
        return None
    year_match = _YEAR_RE.search(text)
    if year_match is None:
        return None
    month_match = _MONTH_RE.search(text)
    month = MONTHS.index(month_match.group(1).lower()) + 1 if month_match else None
    return ParsedDate(year=int(year_match.group(0)), month=month)


def is_ongoing(text: Optional[str]) -> bool:
    value = (text or "").strip().lower()
    return not value or any(marker in value for marker in ONGOING_MARKERS)


def parse_period(period: Optional[str]) -> Tuple[Optional[ParsedDate], Optional[ParsedDate]]:
    """Parse both ends of a period.

    The end is ``None`` (ongoing) when it is missing, says ``Present`` or
    carries no year, mirroring ``split_period`` defaulting the end label.
    """

    text = (period or "").strip()
    if not text:
        return None, None
    start_text, sep, end_text = text.partition("-")
    start = parse_date_point(start_text)
    if not sep or is_ongoing(end_text):
        return start, None
    return start, parse_date_point(end_text)


__all__ = ["MONTHS", "ParsedDate", "is_ongoing", "parse_date_point", "parse_period", "split_period"]
