"""Employment gap detection over work-experience periods."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Sequence

from portfolio.models import WorkExperienceEntry

from .dates import ParsedDate, parse_period

GAP_MONTH_THRESHOLD = 3


@dataclass(frozen=True)
class _Span:
    label: str
    start: ParsedDate
    end: Optional[ParsedDate]  # None while ongoing

    def end_year(self, current_year: int) -> int:
        return self.end.year if self.end is not None else current_year

    def end_month(self) -> int:
        if self.end is None:
            return 13  # ongoing sorts after any month of the current year
        return self.end.month or 0


@dataclass(frozen=True)
class EmploymentGap:
    before: str
    after: str
    ended: ParsedDate
    started: ParsedDate
    months: int

    def describe(self) -> str:
        return (
            f"Gap of ~{self.months} months between {self.before} (ended {self.ended.label()}) "
            f"and {self.after} (started {self.started.label()})"
        )


def _spans(work: Sequence[WorkExperienceEntry]) -> List[_Span]:
    spans: List[_Span] = []
    for entry in work:
        start, end = parse_period(entry.period)
        if start is None:
            continue
        spans.append(_Span(label=entry.label, start=start, end=end))
    return spans


def _months_between(ended: ParsedDate, started: ParsedDate) -> Optional[int]:
    if ended.month is None or started.month is None:
        return None
    return (started.year - ended.year) * 12 + (started.month - ended.month)


def find_gaps(work: Sequence[WorkExperienceEntry], *, today: Optional[date] = None) -> List[EmploymentGap]:
    current_year = (today or date.today()).year
    spans = sorted(
        _spans(work),
        key=lambda span: (span.end_year(current_year), span.end_month()),
        reverse=True,
    )
    gaps: List[EmploymentGap] = []
    for newer, older in zip(spans, spans[1:]):
        if older.end is None:
            continue
        year_delta = newer.start.year - older.end.year
        months = _months_between(older.end, newer.start)
        if year_delta > 1:
            gaps.append(
                EmploymentGap(
                    before=older.label,
                    after=newer.label,
                    ended=older.end,
                    started=newer.start,
                    months=months if months is not None else year_delta * 12,
                )
            )
        elif year_delta == 1 and months is not None and months > GAP_MONTH_THRESHOLD:
            gaps.append(
                EmploymentGap(
                    before=older.label,
                    after=newer.label,
                    ended=older.end,
                    started=newer.start,
                    months=months,
                )
            )
    return gaps


def detect_gaps(work: Sequence[WorkExperienceEntry], *, today: Optional[date] = None) -> List[str]:
    """Human-readable gap announcements, newest first; advisory only."""

    return [gap.describe() for gap in find_gaps(work, today=today)]


__all__ = ["EmploymentGap", "GAP_MONTH_THRESHOLD", "detect_gaps", "find_gaps"]
