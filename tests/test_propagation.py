# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for the analytical J2 propagator."""
import copy
import math
from datetime import datetime, timezone

import numpy as np
import pytest


def _elements(**overrides):
    from satellite_analysis.domain.propagation import KeplerianElements

    values = dict(
        epoch=2459215.5,
        semi_major_axis=7130.982e3,
        eccentricity=0.001111,
        inclination=math.radians(98.405),
        raan=1.0,
        arg_perigee=math.radians(90),
        true_anomaly=0.0,
    )
    values.update(overrides)
    return KeplerianElements(**values)


class TestKeplerianElements:

    def test_from_datetime(self):
        from satellite_analysis.domain.propagation import KeplerianElements

        el = KeplerianElements.from_datetime(
            datetime(2021, 1, 1, tzinfo=timezone.utc),
            semi_major_axis=7.0e6, eccentricity=0.0, inclination=0.0,
            raan=0.0, arg_perigee=0.0, true_anomaly=0.0,
        )
        assert el.epoch == 2459215.5

    def test_frozen(self):
        el = _elements()
        with pytest.raises(AttributeError):
            el.eccentricity = 0.1


class TestJ2Propagator:

    def test_initial_state(self):
        from satellite_analysis.domain.orbital_mechanics import kepler_to_cartesian
        from satellite_analysis.domain.propagation import J2Propagator

        el = _elements()
        r, v = J2Propagator(el).propagate(0.0)
        r0, v0 = kepler_to_cartesian(
            el.semi_major_axis, el.eccentricity, el.inclination,
            el.raan, el.arg_perigee, el.true_anomaly,
        )
        np.testing.assert_allclose(r, r0, atol=1e-6)
        np.testing.assert_allclose(v, v0, atol=1e-9)

    def test_returns_to_latitude_after_nodal_period(self):
        from satellite_analysis.domain.orbital_mechanics import orbital_period
        from satellite_analysis.domain.propagation import J2Propagator

        el = _elements(eccentricity=0.0, arg_perigee=0.0, true_anomaly=0.5)
        orbp = J2Propagator(el)
        r0, _ = orbp.propagate(0.0)
        r1, _ = orbp.propagate(orbital_period(el.semi_major_axis, 0.0, el.inclination))
        assert r1[2] == pytest.approx(r0[2], abs=1.0)

    def test_raan_drifts_at_secular_rate(self):
        from satellite_analysis.domain.orbital_mechanics import raan_time_derivative
        from satellite_analysis.domain.propagation import J2Propagator

        el = _elements()
        orbp = J2Propagator(el)
        orbp.propagate(86400.0)
        expected = el.raan + 86400.0 * raan_time_derivative(
            el.semi_major_axis, el.eccentricity, el.inclination,
        )
        assert orbp.mean_elements.raan == pytest.approx(expected % (2 * math.pi))

    def test_mean_elements_epoch_advances(self):
        from satellite_analysis.domain.propagation import J2Propagator

        orbp = J2Propagator(_elements())
        orbp.propagate(43200.0)
        assert orbp.epoch == 2459215.5
        assert orbp.mean_elements.epoch == pytest.approx(2459216.0)

    def test_deepcopy_is_independent(self):
        from satellite_analysis.domain.propagation import J2Propagator

        orbp = J2Propagator(_elements())
        clone = copy.deepcopy(orbp)
        clone.propagate(5000.0)
        assert orbp.mean_elements.true_anomaly == 0.0
        r_a, _ = orbp.propagate(5000.0)
        r_b, _ = clone.propagate(5000.0)
        np.testing.assert_array_equal(r_a, r_b)

    def test_returned_arrays_are_copies(self):
        from satellite_analysis.domain.propagation import J2Propagator

        orbp = J2Propagator(_elements())
        r, _ = orbp.propagate(10.0)
        r[0] = 0.0
        r2, _ = orbp.propagate(10.0)
        assert r2[0] != 0.0

    def test_invalid_orbit(self):
        from satellite_analysis.domain.propagation import J2Propagator

        with pytest.raises(ValueError):
            J2Propagator(_elements(semi_major_axis=-1.0))

    def test_is_orbit_propagator(self):
        from satellite_analysis.domain.propagation import J2Propagator
        from satellite_analysis.ports import OrbitPropagator

        assert isinstance(J2Propagator(_elements()), OrbitPropagator)
