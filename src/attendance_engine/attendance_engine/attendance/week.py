from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from ..core.constants import DAYS_PER_WEEK, MAX_WEEK_OFFSET, MIN_WEEK_OFFSET


@dataclass(frozen=True)
class WeekWindow:
    """Monday-to-Sunday span identified by an offset from the current week."""

    week_offset: int
    start: date
    end: date

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def days(self) -> list[date]:
        return [self.start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def _sunday_based_index(day: date) -> int:
    # date.weekday() is Monday=0..Sunday=6; the window arithmetic counts from Sunday=0.
    return (day.weekday() + 1) % 7


def resolve_week_window(reference_date: date, week_offset: int = 0) -> WeekWindow:
    """Week containing ``reference_date`` shifted by ``week_offset`` weeks.

    The reference is moved first; the Monday is then found from the moved day,
    so a Sunday rolls back six days instead of forward one.
    """
    week_offset = int(week_offset)
    adjusted = reference_date + timedelta(days=week_offset * DAYS_PER_WEEK)

    index = _sunday_based_index(adjusted)
    to_monday = -6 if index == 0 else 1 - index

    start = adjusted + timedelta(days=to_monday)
    return WeekWindow(week_offset=week_offset, start=start, end=start + timedelta(days=DAYS_PER_WEEK - 1))


def clamp_week_offset(week_offset: int, *, weeks_back: int = -MIN_WEEK_OFFSET) -> int:
    return max(-int(weeks_back), min(MAX_WEEK_OFFSET, int(week_offset)))


def previous_week(week_offset: int, *, weeks_back: int = -MIN_WEEK_OFFSET) -> int:
    return clamp_week_offset(week_offset - 1, weeks_back=weeks_back)


def next_week(week_offset: int, *, weeks_back: int = -MIN_WEEK_OFFSET) -> int:
    return clamp_week_offset(week_offset + 1, weeks_back=weeks_back)


def current_week() -> int:
    return MAX_WEEK_OFFSET


def format_week_range(window: WeekWindow) -> str:
    """E.g. ``Jun 10 - Jun 16``."""

    def _fmt(day: date) -> str:
        return f"{day.strftime('%b')} {day.day}"

    return f"{_fmt(window.start)} - {_fmt(window.end)}"
