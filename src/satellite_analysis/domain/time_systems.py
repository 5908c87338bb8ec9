# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Julian Date utilities.

All epochs handled by the library are UTC Julian Dates. UT1−UTC and
leap-second corrections are not applied.
"""
import math
from datetime import datetime, timedelta, timezone

JD_J2000: float = 2451545.0
SECONDS_PER_DAY: float = 86400.0

_J2000 = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def date_to_jd(
    year: int,
    month: int,
    day: int,
    hour: int = 0,
    minute: int = 0,
    second: float = 0.0,
) -> float:
    """Convert a Gregorian calendar date (UTC) to Julian Date.

    Uses the standard algorithm (Meeus, Astronomical Algorithms, Ch. 7).
    """
    d = day + hour / 24.0 + minute / 1440.0 + second / SECONDS_PER_DAY

    y, m = year, month
    if m <= 2:
        y -= 1
        m += 12

    A = y // 100
    B = 2 - A + A // 4

    return (math.floor(365.25 * (y + 4716))
            + math.floor(30.6001 * (m + 1))
            + d + B - 1524.5)


def datetime_to_jd(dt: datetime) -> float:
    """Convert a datetime to Julian Date. Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return date_to_jd(
        dt.year, dt.month, dt.day, dt.hour, dt.minute,
        dt.second + dt.microsecond / 1e6,
    )


def jd_to_datetime(jd: float) -> datetime:
    """Convert a Julian Date to an aware UTC datetime, rounded to the millisecond."""
    milliseconds = round((jd - JD_J2000) * SECONDS_PER_DAY * 1000.0)
    return _J2000 + timedelta(milliseconds=milliseconds)


def julian_centuries_j2000(jd: float) -> float:
    """Julian centuries since J2000.0."""
    return (jd - JD_J2000) / 36525.0
