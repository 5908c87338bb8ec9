# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for adjacent ground track spacing."""
import math

import pytest


class TestAdjacentTrackDistance:

    def test_polar_unperturbed_is_equator_arc(self):
        """For a polar orbit the spacing is the equator arc swept in one orbit."""
        from satellite_analysis.domain.ground_repeating_orbits import (
            ground_repeating_orbit_adjacent_track_distance,
        )
        from satellite_analysis.domain.orbital_mechanics import OrbitalConstants, orbital_period

        a = 7.0e6
        period = orbital_period(a, 0.0, math.pi / 2, "J0")
        expected = period * OrbitalConstants.EARTH_ROTATION_RATE * OrbitalConstants.R_EARTH_EQUATORIAL
        distance = ground_repeating_orbit_adjacent_track_distance(
            a, 0.0, math.pi / 2, 1, perturbation="J0",
        )
        assert distance == pytest.approx(expected, rel=1e-12)

    def test_cycle_divides_spacing(self):
        from satellite_analysis.domain.ground_repeating_orbits import (
            ground_repeating_orbit_adjacent_track_distance,
        )

        one = ground_repeating_orbit_adjacent_track_distance(7.0e6, 0.0, math.pi / 2, 1, perturbation="J0")
        five = ground_repeating_orbit_adjacent_track_distance(7.0e6, 0.0, math.pi / 2, 5, perturbation="J0")
        assert five == pytest.approx(one / 5, rel=1e-12)

    def test_sun_synchronous_reference(self):
        from satellite_analysis.domain.ground_repeating_orbits import (
            ground_repeating_orbit_adjacent_track_distance,
        )
        from satellite_analysis.domain.sun_synchronous import sun_sync_orbit_from_angular_velocity

        a, i, _ = sun_sync_orbit_from_angular_velocity(2 * math.pi * 14.4 / 86400)
        distance = ground_repeating_orbit_adjacent_track_distance(a, 0.0, i, 5)
        assert distance == pytest.approx(550.597e3, abs=1.0)

    def test_inclined_track_closer_than_equator_arc(self):
        from satellite_analysis.domain.ground_repeating_orbits import (
            ground_repeating_orbit_adjacent_track_distance,
        )

        polar = ground_repeating_orbit_adjacent_track_distance(7.0e6, 0.0, math.pi / 2, 3, perturbation="J0")
        inclined = ground_repeating_orbit_adjacent_track_distance(
            7.0e6, 0.0, math.radians(60), 3, perturbation="J0",
        )
        assert inclined < polar

    def test_invalid_cycle(self):
        from satellite_analysis.domain.ground_repeating_orbits import (
            ground_repeating_orbit_adjacent_track_distance,
        )

        with pytest.raises(ValueError):
            ground_repeating_orbit_adjacent_track_distance(7.0e6, 0.0, 1.7, 0)


class TestAdjacentTrackAngle:

    def test_sun_synchronous_reference(self):
        from satellite_analysis.domain.ground_repeating_orbits import (
            ground_repeating_orbit_adjacent_track_angle,
        )
        from satellite_analysis.domain.sun_synchronous import sun_sync_orbit_from_angular_velocity

        a, i, _ = sun_sync_orbit_from_angular_velocity(2 * math.pi * 14.4 / 86400)
        angle = ground_repeating_orbit_adjacent_track_angle(a, 0.0, i, 5)
        assert math.degrees(angle) == pytest.approx(39.872, abs=1e-3)

    def test_angle_exceeds_central_angle(self):
        """Seen from the satellite the tracks subtend more than at the Earth's centre."""
        from satellite_analysis.domain.ground_repeating_orbits import (
            ground_repeating_orbit_adjacent_track_angle,
            ground_repeating_orbit_adjacent_track_distance,
        )
        from satellite_analysis.domain.orbital_mechanics import OrbitalConstants

        args = (7.0e6, 0.0, math.radians(98), 7)
        central = ground_repeating_orbit_adjacent_track_distance(*args) / OrbitalConstants.R_EARTH_EQUATORIAL
        assert ground_repeating_orbit_adjacent_track_angle(*args) > central

    def test_invalid_perturbation(self):
        from satellite_analysis.domain.ground_repeating_orbits import (
            ground_repeating_orbit_adjacent_track_angle,
        )

        with pytest.raises(ValueError):
            ground_repeating_orbit_adjacent_track_angle(7.0e6, 0.0, 1.7, 1, perturbation="J4")
