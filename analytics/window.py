"""
Reporting window resolution.

A request names its window either explicitly (start / end) or through a
preset such as ``last_30_days`` that ends at ``now``. ``now`` is an explicit
argument so that repeated calls with the same inputs give the same window.
"""

from datetime import date, datetime, time, timedelta
from typing import Any

from analytics.exceptions import AnalyticsConfigurationError
from models.analytics import ReportingWindow
from models.enums import DateRangePreset
from models.inventory import parse_timestamp

DATE_RANGE_PRESETS: dict[DateRangePreset, timedelta] = {
    DateRangePreset.LAST_7_DAYS: timedelta(days=7),
    DateRangePreset.LAST_30_DAYS: timedelta(days=30),
    DateRangePreset.LAST_90_DAYS: timedelta(days=90),
    DateRangePreset.LAST_YEAR: timedelta(days=365),
}


def _is_calendar_date(value: Any) -> bool:
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    if isinstance(value, str):
        try:
            date.fromisoformat(value.strip())
        except ValueError:
            return False
        return True
    return False


def _as_bound(value: Any, end_of_day: bool) -> datetime:
    """Normalize a window bound. A bare calendar date covers its whole day."""
    try:
        moment = parse_timestamp(value)
    except ValueError as e:
        raise AnalyticsConfigurationError(f"Invalid reporting window bound: {e}") from e
    if end_of_day and _is_calendar_date(value):
        moment = datetime.combine(moment.date(), time.max)
    return moment


def preset_length(date_range: str | DateRangePreset) -> timedelta:
    try:
        preset = DateRangePreset(date_range)
    except ValueError as e:
        valid = ", ".join(p.value for p in DateRangePreset)
        raise AnalyticsConfigurationError(f"Unknown date range '{date_range}'. Expected one of: {valid}") from e
    return DATE_RANGE_PRESETS[preset]


def resolve_window(
    window_start: Any = None,
    window_end: Any = None,
    date_range: str | DateRangePreset = DateRangePreset.LAST_30_DAYS,
    now: datetime | None = None,
) -> ReportingWindow:
    """
    Resolve the inclusive reporting window for a request.

    Missing bounds are filled from the preset: the end defaults to ``now``
    (or the current time when ``now`` is omitted) and the start to
    ``end - preset``.

    Raises:
        AnalyticsConfigurationError: On an unparseable bound, an unknown
            preset, or a start later than the end.
    """
    if window_end is not None:
        end = _as_bound(window_end, end_of_day=True)
    else:
        end = _as_bound(now if now is not None else datetime.now(), end_of_day=False)

    if window_start is not None:
        start = _as_bound(window_start, end_of_day=False)
    else:
        start = end - preset_length(date_range)

    if start > end:
        raise AnalyticsConfigurationError(f"Reporting window start {start.isoformat()} is after end {end.isoformat()}")
    return ReportingWindow(start=start, end=end)
