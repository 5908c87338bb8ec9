# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for Julian Date utilities."""
from datetime import datetime, timedelta, timezone

import pytest


class TestDateToJd:

    def test_j2000(self):
        from satellite_analysis.domain.time_systems import JD_J2000, date_to_jd

        assert date_to_jd(2000, 1, 1, 12) == JD_J2000

    def test_meeus_example(self):
        """Meeus Example 7.a: 1957 October 4.81 → JD 2436116.31."""
        from satellite_analysis.domain.time_systems import date_to_jd

        assert date_to_jd(1957, 10, 4, 19, 26, 24) == pytest.approx(2436116.31, abs=1e-6)

    def test_january_uses_previous_year(self):
        from satellite_analysis.domain.time_systems import date_to_jd

        assert date_to_jd(2021, 1, 1) - date_to_jd(2020, 12, 31) == pytest.approx(1.0)

    def test_datetime_naive_is_utc(self):
        from satellite_analysis.domain.time_systems import datetime_to_jd

        naive = datetime(2024, 1, 1, 6, 0, 0)
        aware = datetime(2024, 1, 1, 6, 0, 0, tzinfo=timezone.utc)
        assert datetime_to_jd(naive) == datetime_to_jd(aware)

    def test_datetime_other_timezone(self):
        from satellite_analysis.domain.time_systems import datetime_to_jd

        cet = timezone(timedelta(hours=1))
        assert datetime_to_jd(datetime(2024, 1, 1, 1, 0, tzinfo=cet)) == pytest.approx(
            datetime_to_jd(datetime(2024, 1, 1, 0, 0, tzinfo=timezone.utc))
        )


class TestJdToDatetime:

    def test_j2000(self):
        from satellite_analysis.domain.time_systems import jd_to_datetime

        assert jd_to_datetime(2451545.0) == datetime(2000, 1, 1, 12, tzinfo=timezone.utc)

    def test_millisecond_rounding(self):
        from satellite_analysis.domain.time_systems import date_to_jd, jd_to_datetime

        dt = jd_to_datetime(date_to_jd(2021, 1, 1, 10, 20, 3.1634))
        assert dt.microsecond % 1000 == 0
        assert dt == datetime(2021, 1, 1, 10, 20, 3, 163000, tzinfo=timezone.utc)

    def test_midnight_exact(self):
        from satellite_analysis.domain.time_systems import date_to_jd, jd_to_datetime

        assert jd_to_datetime(date_to_jd(2021, 1, 1)) == datetime(2021, 1, 1, tzinfo=timezone.utc)

    def test_julian_centuries(self):
        from satellite_analysis.domain.time_systems import julian_centuries_j2000

        assert julian_centuries_j2000(2451545.0 + 36525.0) == pytest.approx(1.0)
