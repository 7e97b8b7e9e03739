from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta

from spendio.domain.enums import DateFilterType
from spendio.domain.models.filters import DateFilter, Interval


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def parse_day(value: str | None) -> date | None:
    text = str(value or "").strip()
    if not text:
        return None
    try:
        return datetime.strptime(text[:10], "%Y-%m-%d").date()
    except ValueError:
        return None


def parse_month(month: str) -> tuple[int, int]:
    text = str(month or "").strip()
    try:
        parsed = datetime.strptime(text, "%Y-%m")
    except ValueError as exc:
        raise ValueError(f"month must be YYYY-MM, got {month!r}") from exc
    return parsed.year, parsed.month


def format_month(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def current_month(now: datetime | None = None) -> str:
    moment = now or datetime.now()
    return format_month(moment.year, moment.month)


def previous_month(month: str) -> str:
    year, mon = parse_month(month)
    if mon == 1:
        return format_month(year - 1, 12)
    return format_month(year, mon - 1)


def days_in_month(month: str) -> int:
    year, mon = parse_month(month)
    return calendar.monthrange(year, mon)[1]


def month_interval(month: str) -> Interval:
    year, mon = parse_month(month)
    last_day = calendar.monthrange(year, mon)[1]
    return Interval(
        start=start_of_day(date(year, mon, 1)),
        end=end_of_day(date(year, mon, last_day)),
    )


def resolve_interval(date_filter: DateFilter | None, now: datetime | None = None) -> Interval | None:
    """Map a filter descriptor to a closed local-time interval; ``None`` means unfiltered."""
    if date_filter is None:
        return None
    today = (now or datetime.now()).date()
    kind = DateFilterType(date_filter.type)

    if kind is DateFilterType.TODAY:
        return Interval(start_of_day(today), end_of_day(today))
    if kind is DateFilterType.WEEK:
        monday = today - timedelta(days=today.weekday())
        return Interval(start_of_day(monday), end_of_day(monday + timedelta(days=6)))
    if kind is DateFilterType.MONTH:
        return month_interval(format_month(today.year, today.month))
    if kind is DateFilterType.YEAR:
        return Interval(start_of_day(date(today.year, 1, 1)), end_of_day(date(today.year, 12, 31)))
    if kind is DateFilterType.CUSTOM:
        start = parse_day(date_filter.start_date)
        end = parse_day(date_filter.end_date)
        if start is None or end is None:
            return None
        return Interval(start_of_day(start), end_of_day(end))
    return None


def in_interval(day: str, interval: Interval | None) -> bool:
    """Whether a ``YYYY-MM-DD`` record date falls in the window. Unparseable dates never match a window."""
    if interval is None:
        return True
    parsed = parse_day(day)
    if parsed is None:
        return False
    return interval.contains(start_of_day(parsed))


def each_day(start: date, end: date) -> list[date]:
    days: list[date] = []
    cursor = start
    while cursor <= end:
        days.append(cursor)
        cursor += timedelta(days=1)
    return days
