# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Sun-synchronous orbit design.

A Sun-synchronous orbit has a secular RAAN rate equal to the Earth's
mean motion around the Sun. With J2 only (Kozai 1959):

    dΩ/dt = −3/2 · J2 · (R₀/p)² · n̄ · cos i
    n̄     = n₀ · (1 + 3/4 · J2 · (R₀/p)² · √(1−e²) · (2 − 3 sin²i))

The solvers work on the normalized variable x = √(R₀/a) with the
residues expressed in °/day (RAAN rate) and °/min (angular velocity),
and report whether Newton-Raphson converged.

References:
    Kozai, Y. (1959). The Motion of a Close Earth Satellite.
    The Astronomical Journal, 64(1274), 367-377.
"""
import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from math import gcd
from typing import Sequence

import numpy as np

from satellite_analysis.domain.ground_repeating_orbits import (
    ground_repeating_orbit_adjacent_track_angle,
    ground_repeating_orbit_adjacent_track_distance,
)
from satellite_analysis.domain.orbital_mechanics import (
    OrbitalConstants,
    orbital_angular_velocity,
)
from satellite_analysis.domain.solar import equation_of_time, sun_position_mod

_log = logging.getLogger(__name__)

_RAD_S_TO_DEG_DAY = 86400 * 180 / math.pi
_RAD_S_TO_DEG_MIN = 60 * 180 / math.pi
_SQRT_EPS = math.sqrt(np.finfo(float).eps)


def _check_eccentricity(e: float) -> None:
    if not 0 <= e < 1:
        raise ValueError(f"The eccentricity must be within the interval [0, 1), got {e}")


def sun_sync_orbit_semi_major_axis(
    i_rad: float,
    e: float = 0.0,
    *,
    max_iterations: int = 30,
    tolerance: float | None = None,
) -> tuple[float, bool]:
    """
    Semi-major axis (m) of the Sun-synchronous orbit with inclination ``i_rad``.

    Returns:
        (a, converged)

    Raises:
        ValueError: If e is outside [0, 1) or the inclination is prograde
            (no Sun-synchronous solution).
    """
    _check_eccentricity(e)
    c = OrbitalConstants
    tol = _SQRT_EPS if tolerance is None else tolerance

    R0 = c.R_EARTH_EQUATORIAL
    beta_sq = 1 - e**2
    beta = math.sqrt(beta_sq)
    sin_i, cos_i = math.sin(i_rad), math.cos(i_rad)

    k1 = -1.5 * c.J2_EARTH * math.sqrt(c.MU_EARTH) * cos_i / (math.sqrt(R0**3) * beta_sq**2)
    k2 = 0.75 * c.J2_EARTH * (2 - 3 * sin_i**2) / (beta_sq * beta)
    if k1 < 0:
        raise ValueError(
            "It is not possible to find a Sun-synchronous orbit with the selected "
            f"parameters (i = {math.degrees(i_rad)}°, e = {e})."
        )
    k1 *= _RAD_S_TO_DEG_DAY

    raan_rate = c.EARTH_ORBIT_MEAN_MOTION * _RAD_S_TO_DEG_DAY
    x = (raan_rate / k1) ** (1 / 7)

    f1 = 10 * tol
    iteration = 1
    converged = True
    while abs(f1) > tol:
        x4 = x**4
        x6 = x**6
        f1 = raan_rate - k1 * (1 + k2 * x4) * x6 * x
        _log.debug("Iteration #%d: a = %s km, residue = %s °/day",
                   iteration, R0 / (x * x) / 1000, f1)

        x -= f1 / (-k1 * (7 + 11 * k2 * x4) * x6)

        if iteration >= max_iterations:
            converged = False
            break
        iteration += 1

    if not converged:
        _log.warning(
            "The Sun-synchronous semi-major axis did not converge (residue: %s °/day)", f1,
        )

    a = R0 / (x * x)
    if a * (1 - e) < R0:
        _log.warning("The orbit is not valid because the perigee is inside the Earth.")
    return a, converged


def sun_sync_orbit_inclination(
    a: float,
    e: float = 0.0,
    *,
    max_iterations: int = 30,
    tolerance: float | None = None,
) -> tuple[float, bool]:
    """
    Inclination (rad) of the Sun-synchronous orbit with semi-major axis ``a`` (m).

    Returns:
        (i, converged)

    Raises:
        ValueError: If e is outside [0, 1), the perigee is below the
            Earth's surface, or no inclination satisfies the condition.
    """
    _check_eccentricity(e)
    c = OrbitalConstants
    R0 = c.R_EARTH_EQUATORIAL
    if a * (1 - e) <= R0:
        raise ValueError("The perigee must be larger than the Earth's radius.")
    tol = _SQRT_EPS if tolerance is None else tolerance

    beta_sq = 1 - e**2
    n0 = math.sqrt(c.MU_EARTH / a**3)
    p = a * beta_sq
    k1 = -1.5 * c.J2_EARTH * (R0 / p) ** 2 * n0 * _RAD_S_TO_DEG_DAY
    k2 = 0.75 * c.J2_EARTH * (R0 / p) ** 2 * math.sqrt(beta_sq)

    # dΩ/dt = A·cos³i + B·cos i once sin²i is written as 1 − cos²i.
    A = 3 * k1 * k2
    B = k1 * (1 - k2)
    raan_rate = c.EARTH_ORBIT_MEAN_MOTION * _RAD_S_TO_DEG_DAY

    cos_i = raan_rate / k1
    f1 = 10 * tol
    iteration = 1
    converged = True
    while abs(f1) > tol:
        f1 = raan_rate - A * cos_i**3 - B * cos_i
        _log.debug("Iteration #%d: cos(i) = %s, residue = %s °/day",
                   iteration, cos_i, f1)

        cos_i -= f1 / (-3 * A * cos_i**2 - B)

        if iteration >= max_iterations:
            converged = False
            break
        iteration += 1

    if not converged:
        _log.warning(
            "The Sun-synchronous inclination did not converge (residue: %s °/day)", f1,
        )

    if abs(cos_i) > 1:
        raise ValueError(
            "It is not possible to find a Sun-synchronous orbit with the selected "
            f"parameters (a = {a / 1000} km, e = {e})."
        )
    return math.acos(cos_i), converged


def sun_sync_orbit_from_angular_velocity(
    angular_velocity: float,
    e: float = 0.0,
    *,
    max_iterations: int = 30,
    tolerance: tuple[float, float] | None = None,
    no_warnings: bool = False,
) -> tuple[float, float, bool]:
    """
    Semi-major axis (m) and inclination (rad) of the Sun-synchronous orbit
    whose nodal angular velocity (n̄ + dω/dt) equals ``angular_velocity`` (rad/s).

    Solves both conditions simultaneously with a 2-D Newton-Raphson.

    Returns:
        (a, i, converged)

    Raises:
        ValueError: If the angular velocity is not positive, e is outside
            [0, 1) or the solution has no valid inclination.
    """
    if angular_velocity <= 0:
        raise ValueError("The angular velocity must be greater than 0.")
    _check_eccentricity(e)
    c = OrbitalConstants
    tol1, tol2 = (_SQRT_EPS, _SQRT_EPS) if tolerance is None else tolerance

    R0 = c.R_EARTH_EQUATORIAL
    J2 = c.J2_EARTH
    beta_sq = 1 - e**2
    beta = math.sqrt(beta_sq)
    beta3 = beta_sq * beta
    beta4 = beta_sq * beta_sq

    k5 = math.sqrt(c.MU_EARTH / R0**3)
    k1 = -1.5 * J2 * k5 / beta4
    k2 = 0.75 * J2 / beta3
    k4 = -k1 / 2
    k3 = k4 * beta
    k6 = (0.75 * J2 / beta4) ** 2 * k5 * beta

    k1 *= _RAD_S_TO_DEG_DAY
    k3 *= _RAD_S_TO_DEG_MIN
    k4 *= _RAD_S_TO_DEG_MIN
    k5 *= _RAD_S_TO_DEG_MIN
    k6 *= _RAD_S_TO_DEG_MIN

    raan_rate = c.EARTH_ORBIT_MEAN_MOTION * _RAD_S_TO_DEG_DAY
    target = angular_velocity * _RAD_S_TO_DEG_MIN

    x = (target / k5) ** (1 / 3)
    cos_i = -raan_rate / x**7 / k1

    f1 = 10 * tol1
    f2 = 10 * tol2
    iteration = 1
    converged = True
    while abs(f1) > tol1 or abs(f2) > tol2:
        x2 = x * x
        x3 = x2 * x
        x4 = x2 * x2
        x6 = x3 * x3
        x7 = x4 * x3
        x8 = x4 * x4
        cos2 = cos_i * cos_i

        c1 = 3 * cos2 - 1
        c2 = 5 * cos2 - 1
        c3 = c1 * c2
        c4 = k3 * c1 + k4 * c2

        f1 = raan_rate - k1 * cos_i * x7 * (1 + k2 * c1 * x4)
        f2 = target - (k5 + c4 * x4 + k6 * c3 * x8) * x3
        _log.debug(
            "Iteration #%d: a = %s km, i = %s °, residues = (%s °/day, %s °/min)",
            iteration, R0 / x2 / 1000,
            math.degrees(math.acos(cos_i)) if abs(cos_i) <= 1 else "INVALID",
            f1, f2,
        )

        jacobian = np.array([
            [-k1 * (7 * cos_i + 11 * k2 * (3 * cos2 - 1) * cos_i * x4) * x6,
             -k1 * (1 + k2 * (9 * cos2 - 1) * x4) * x7],
            [-(3 * k5 + 7 * c4 * x4 + 11 * k6 * c3 * x8) * x2,
             -((6 * k3 + 10 * k4) * cos_i + k6 * (-16 * cos_i + 60 * cos2 * cos_i) * x4) * x7],
        ])
        dx, dcos = np.linalg.solve(jacobian, np.array([f1, f2]))
        x -= float(dx)
        cos_i -= float(dcos)

        if iteration >= max_iterations:
            converged = False
            break
        iteration += 1

    if abs(cos_i) > 1:
        raise ValueError(
            "It is not possible to find a Sun-synchronous orbit with the selected "
            f"parameters (angular velocity = {angular_velocity} rad/s, e = {e})."
        )

    a = R0 / (x * x)
    i = math.acos(cos_i)

    if a * (1 - e) < R0 and not no_warnings:
        _log.warning("The orbit is not valid because the perigee is inside the Earth.")
    if not converged and not no_warnings:
        _log.warning(
            "The Sun-synchronous orbit did not converge (residues: %s °/day, %s °/min)",
            f1, f2,
        )
    return a, i, converged


# ── Local time of the nodes ──────────────────────────────────────────

def ltan_to_raan(ltan_hours: float, jd: float) -> float:
    """
    RAAN (rad, [0, 2π)) giving a local time of the ascending node ``ltan_hours``.

    The mean Sun right ascension is the apparent one plus the equation of time.
    """
    s = sun_position_mod(jd)
    sun_ra = math.atan2(s[1], s[0])
    raan = sun_ra + equation_of_time(jd) + (ltan_hours - 12) * math.pi / 12
    return raan % (2 * math.pi)


def ltdn_to_raan(ltdn_hours: float, jd: float) -> float:
    """RAAN (rad) giving a local time of the descending node ``ltdn_hours``."""
    return ltan_to_raan((ltdn_hours + 12) % 24, jd)


# ── Sun-synchronous, ground-repeating orbits ─────────────────────────

@dataclass(frozen=True)
class SunSyncRepeatingOrbit:
    """A Sun-synchronous orbit that repeats its ground track (SI units)."""
    semi_major_axis: float          # m
    altitude: float                 # m, a − R₀
    inclination: float              # rad
    period: float                   # s, nodal
    rev_per_day: Fraction
    adjacent_track_distance: float  # m, at the equator
    adjacent_track_angle: float     # rad, seen from the satellite

    @property
    def rev_per_day_label(self) -> str:
        """Revolutions per day as ``"14"`` or ``"14 + 2/5"``."""
        whole = self.rev_per_day.numerator // self.rev_per_day.denominator
        fraction = self.rev_per_day - whole
        if fraction == 0:
            return str(whole)
        return f"{whole} + {fraction.numerator}/{fraction.denominator}"


def design_sun_sync_ground_repeating_orbit(
    minimum_repetition: int,
    maximum_repetition: int,
    *,
    e: float = 0.0,
    int_rev_per_day: Sequence[int] = (13, 14, 15, 16, 17),
    minimum_altitude: float | None = None,
    maximum_altitude: float | None = None,
) -> list[SunSyncRepeatingOrbit]:
    """
    List the Sun-synchronous orbits whose ground track repeats every
    ``minimum_repetition`` to ``maximum_repetition`` days.

    For each repetition period D and each irreducible fraction k/D, the
    orbits making N + k/D revolutions per day, N in ``int_rev_per_day``,
    are solved for. Orbits that do not converge or whose perigee is below
    the surface are skipped.

    Returns:
        Orbits sorted by semi-major axis, filtered by the altitude bounds (m).

    Raises:
        ValueError: If the repetition bounds are not positive or out of
            order, or e is outside [0, 1).
    """
    if minimum_repetition <= 0:
        raise ValueError("The minimum repetition must be greater than 0.")
    if maximum_repetition <= 0:
        raise ValueError("The maximum repetition must be greater than 0.")
    if maximum_repetition < minimum_repetition:
        raise ValueError(
            "The minimum repetition must be smaller or equal than the maximum repetition."
        )
    _check_eccentricity(e)

    R0 = OrbitalConstants.R_EARTH_EQUATORIAL
    orbits = []
    for den in range(minimum_repetition, maximum_repetition + 1):
        for num in range(den):
            if gcd(num, den) != 1:
                continue
            for whole in int_rev_per_day:
                rev_per_day = whole + Fraction(num, den)
                n = float(rev_per_day) * 2 * math.pi / 86400
                a, i, converged = sun_sync_orbit_from_angular_velocity(
                    n, e, no_warnings=True,
                )
                if not converged or a * (1 - e) <= R0:
                    continue

                period = 2 * math.pi / orbital_angular_velocity(a, e, i)
                cycle = 1 if num == 0 else den
                altitude = a - R0
                if minimum_altitude is not None and altitude < minimum_altitude:
                    continue
                if maximum_altitude is not None and altitude > maximum_altitude:
                    continue

                orbits.append(SunSyncRepeatingOrbit(
                    semi_major_axis=a,
                    altitude=altitude,
                    inclination=i,
                    period=period,
                    rev_per_day=rev_per_day,
                    adjacent_track_distance=ground_repeating_orbit_adjacent_track_distance(
                        a, e, i, cycle,
                    ),
                    adjacent_track_angle=ground_repeating_orbit_adjacent_track_angle(
                        a, e, i, cycle,
                    ),
                ))

    orbits.sort(key=lambda orbit: orbit.semi_major_axis)
    return orbits
