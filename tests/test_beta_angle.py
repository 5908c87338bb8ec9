# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the beta angle."""
import math

import numpy as np
import pytest


# ── Helpers ──────────────────────────────────────────────────────────

def _raan_local_time(jd, local_time_h):
    """RAAN placing the node at ``local_time_h`` of apparent solar time."""
    from satellite_analysis.domain.solar import sun_position_mod

    s = sun_position_mod(jd)
    return math.atan2(s[1], s[0]) + (local_time_h - 12) * math.pi / 12


_A = 7130.982e3
_E = 0.001111
_I = math.radians(98.405)


class TestBetaAngle:

    def test_sun_synchronous_reference(self):
        from satellite_analysis.domain.beta_angle import beta_angle
        from satellite_analysis.domain.time_systems import date_to_jd

        jd0 = date_to_jd(2021, 1, 1)
        beta = beta_angle(jd0, _A, _E, _I, _raan_local_time(jd0, 22.5), 5)
        expected = [0.43291, 0.43481, 0.43669, 0.43854, 0.44037]
        np.testing.assert_allclose(beta, expected, atol=2e-3)

    def test_opposite_node_is_negative(self):
        from satellite_analysis.domain.beta_angle import beta_angle
        from satellite_analysis.domain.time_systems import date_to_jd

        jd0 = date_to_jd(2021, 1, 1)
        beta = beta_angle(jd0, _A, _E, _I, _raan_local_time(jd0, 22.5) + math.pi, 5)
        expected = [-0.31068, -0.31295, -0.31524, -0.31755, -0.31987]
        np.testing.assert_allclose(beta, expected, atol=2e-3)

    def test_noon_midnight_orbit_near_zero(self):
        from satellite_analysis.domain.beta_angle import beta_angle
        from satellite_analysis.domain.time_systems import date_to_jd

        jd0 = date_to_jd(2021, 3, 20)
        beta = beta_angle(jd0, _A, _E, math.pi / 2, _raan_local_time(jd0, 12.0), 1, perturbation="J0")
        assert abs(beta[0]) < math.radians(1.5)

    def test_length_and_bounds(self):
        from satellite_analysis.domain.beta_angle import beta_angle
        from satellite_analysis.domain.time_systems import date_to_jd

        beta = beta_angle(date_to_jd(2021, 1, 1), _A, _E, _I, 0.3, 30)
        assert beta.shape == (30,)
        assert np.all(np.abs(beta) <= math.pi / 2)

    def test_orbit_normal_unit(self):
        from satellite_analysis.domain.beta_angle import orbit_normal

        n = orbit_normal(_I, 1.3)
        assert np.linalg.norm(n) == pytest.approx(1.0)
        assert n[2] == pytest.approx(math.cos(_I))

    @pytest.mark.parametrize("days", [0, -5])
    def test_invalid_days(self, days):
        from satellite_analysis.domain.beta_angle import beta_angle

        with pytest.raises(ValueError):
            beta_angle(2459215.5, _A, _E, _I, 0.0, days)
