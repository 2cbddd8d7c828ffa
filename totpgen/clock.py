"""Wall clock and conversions between time values and integer microseconds."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from fractions import Fraction
from typing import Callable, Union

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_MICROSECOND = timedelta(microseconds=1)

Clock = Callable[[], datetime]
TimeLike = Union[datetime, int, float]
DurationLike = Union[timedelta, int, float]


def system_clock() -> datetime:
    """Current wall-clock time as an aware UTC datetime."""

    return datetime.now(timezone.utc)


def _seconds_to_micros(value: Union[int, float]) -> int:
    # exact, truncated toward zero; a float just below a boundary stays below it
    if isinstance(value, int):
        return value * 1_000_000
    return int(Fraction(value) * 1_000_000)


def to_unix_micros(t: TimeLike) -> int:
    """Microseconds since the Unix epoch.

    Naive datetimes are taken as local time, the same way ``datetime.timestamp``
    reads them. Numbers are Unix seconds and never go through ``datetime``, so
    they are not limited to years 1..9999.
    """

    if isinstance(t, datetime):
        if t.tzinfo is None:
            t = t.astimezone()
        return (t - UNIX_EPOCH) // _MICROSECOND
    if isinstance(t, (int, float)) and not isinstance(t, bool):
        return _seconds_to_micros(t)
    raise TypeError(f"expected datetime or Unix seconds, got {type(t).__name__}")


def to_micros(d: DurationLike) -> int:
    """Length of a duration (timedelta or seconds) in microseconds."""

    if isinstance(d, timedelta):
        return d // _MICROSECOND
    if isinstance(d, (int, float)) and not isinstance(d, bool):
        return _seconds_to_micros(d)
    raise TypeError(f"expected timedelta or seconds, got {type(d).__name__}")
