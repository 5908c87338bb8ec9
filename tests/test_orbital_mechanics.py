# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for orbital mechanics functions."""
import ast
import math

import numpy as np
import pytest


class TestOrbitalConstants:

    def test_frozen(self):
        from satellite_analysis.domain.orbital_mechanics import OrbitalConstants

        with pytest.raises(AttributeError):
            OrbitalConstants.MU_EARTH = 1.0

    def test_sun_synchronous_rate(self):
        from satellite_analysis.domain.orbital_mechanics import OrbitalConstants

        deg_per_day = math.degrees(OrbitalConstants.EARTH_ORBIT_MEAN_MOTION) * 86400
        assert deg_per_day == pytest.approx(0.9856, abs=1e-4)


class TestPerturbation:

    def test_names(self):
        from satellite_analysis.domain.orbital_mechanics import Perturbation, resolve_perturbation

        assert resolve_perturbation("J2") is Perturbation.J2
        assert resolve_perturbation(":J0") is Perturbation.J0
        assert resolve_perturbation(Perturbation.J2) is Perturbation.J2

    def test_unsupported(self):
        from satellite_analysis.domain.orbital_mechanics import resolve_perturbation

        with pytest.raises(ValueError):
            resolve_perturbation("J4")


# ── Keplerian conversions ────────────────────────────────────────────

class TestKeplerToCartesian:

    def test_circular_equatorial(self):
        from satellite_analysis.domain.orbital_mechanics import OrbitalConstants, kepler_to_cartesian

        a = 7.0e6
        r, v = kepler_to_cartesian(a, 0.0, 0.0, 0.0, 0.0, 0.0)
        np.testing.assert_allclose(r, [a, 0.0, 0.0])
        np.testing.assert_allclose(v, [0.0, math.sqrt(OrbitalConstants.MU_EARTH / a), 0.0])

    def test_vis_viva(self):
        from satellite_analysis.domain.orbital_mechanics import OrbitalConstants, kepler_to_cartesian

        mu = OrbitalConstants.MU_EARTH
        a = 8.0e6
        r, v = kepler_to_cartesian(a, 0.2, 0.9, 1.2, 0.4, 2.1)
        energy = np.dot(v, v) / 2 - mu / np.linalg.norm(r)
        assert energy == pytest.approx(-mu / (2 * a), rel=1e-12)

    def test_polar_ascending_node_velocity_north(self):
        from satellite_analysis.domain.orbital_mechanics import kepler_to_cartesian

        r, v = kepler_to_cartesian(7.0e6, 0.0, math.pi / 2, 0.0, 0.0, 0.0)
        assert r[2] == pytest.approx(0.0, abs=1e-6)
        assert v[2] > 0


class TestAnomalies:

    def test_kepler_equation(self):
        from satellite_analysis.domain.orbital_mechanics import mean_to_true_anomaly

        e, M = 0.3, 1.1
        nu = mean_to_true_anomaly(e, M)
        E = 2 * math.atan(math.sqrt((1 - e) / (1 + e)) * math.tan(nu / 2))
        assert E - e * math.sin(E) == pytest.approx(M, abs=1e-12)

    def test_high_eccentricity(self):
        from satellite_analysis.domain.orbital_mechanics import mean_to_true_anomaly, true_to_mean_anomaly

        nu = mean_to_true_anomaly(0.9, 0.05)
        assert true_to_mean_anomaly(0.9, nu) == pytest.approx(0.05, abs=1e-10)

    def test_circular_identity(self):
        from satellite_analysis.domain.orbital_mechanics import mean_to_true_anomaly

        assert mean_to_true_anomaly(0.0, 2.5) == pytest.approx(2.5)


# ── Secular rates ────────────────────────────────────────────────────

class TestSecularRates:

    def test_sun_synchronous_raan_rate(self):
        from satellite_analysis.domain.orbital_mechanics import OrbitalConstants, raan_time_derivative

        rate = raan_time_derivative(7130.982e3, 0.0, math.radians(98.41))
        assert rate == pytest.approx(OrbitalConstants.EARTH_ORBIT_MEAN_MOTION, rel=1e-3)

    def test_unperturbed_raan_rate_zero(self):
        from satellite_analysis.domain.orbital_mechanics import Perturbation, raan_time_derivative

        assert raan_time_derivative(7.0e6, 0.0, 1.0, Perturbation.J0) == 0.0

    def test_unperturbed_period(self):
        from satellite_analysis.domain.orbital_mechanics import OrbitalConstants, orbital_period

        a = 7.0e6
        expected = 2 * math.pi * math.sqrt(a**3 / OrbitalConstants.MU_EARTH)
        assert orbital_period(a, 0.0, 1.0, "J0") == pytest.approx(expected)

    def test_j2_period_shorter_for_low_inclination(self):
        from satellite_analysis.domain.orbital_mechanics import orbital_period

        assert orbital_period(7.0e6, 0.0, 0.1) < orbital_period(7.0e6, 0.0, 0.1, "J0")

    def test_critical_inclination_freezes_perigee(self):
        from satellite_analysis.domain.orbital_mechanics import j2_secular_rates

        i_crit = math.asin(math.sqrt(4 / 5))
        _, _, arg_perigee_rate = j2_secular_rates(2.0e7, 0.7, i_crit)
        assert arg_perigee_rate == pytest.approx(0.0, abs=1e-20)

    def test_invalid_elements(self):
        from satellite_analysis.domain.orbital_mechanics import orbital_period

        with pytest.raises(ValueError):
            orbital_period(7.0e6, 1.0, 1.0)
        with pytest.raises(ValueError):
            orbital_period(-7.0e6, 0.0, 1.0, "J0")


# ── Domain purity ────────────────────────────────────────────────────

class TestDomainPurity:

    def test_domain_imports_only_stdlib_numpy_and_domain(self):
        import pathlib

        import satellite_analysis

        allowed = {
            'math', 'dataclasses', 'typing', 'abc', 'enum', '__future__', 'datetime',
            'copy', 'logging', 'os', 'concurrent', 'fractions', 'numpy',
        }
        domain = pathlib.Path(satellite_analysis.__file__).parent / 'domain'
        for path in sorted(domain.glob('*.py')):
            tree = ast.parse(path.read_text())
            for node in ast.walk(tree):
                if isinstance(node, ast.Import):
                    for alias in node.names:
                        root = alias.name.split('.')[0]
                        if root not in allowed and root != 'satellite_analysis':
                            assert False, f"{path.name}: disallowed import '{alias.name}'"
                if isinstance(node, ast.ImportFrom):
                    if node.module and node.level == 0:
                        root = node.module.split('.')[0]
                        if root not in allowed and root != 'satellite_analysis':
                            assert False, f"{path.name}: disallowed import from '{node.module}'"

    def test_module_loggers_share_one_name(self):
        import pathlib

        import satellite_analysis

        package = pathlib.Path(satellite_analysis.__file__).parent
        for path in sorted(package.rglob('*.py')):
            tree = ast.parse(path.read_text())
            for node in ast.walk(tree):
                if not isinstance(node, ast.Assign):
                    continue
                value = node.value
                if (isinstance(value, ast.Call)
                        and isinstance(value.func, ast.Attribute)
                        and value.func.attr == 'getLogger'):
                    names = [t.id for t in node.targets if isinstance(t, ast.Name)]
                    assert names == ['_log'], f"{path.name}: logger bound to {names}"
