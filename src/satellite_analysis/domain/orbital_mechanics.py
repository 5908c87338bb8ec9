# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital mechanics functions.

Keplerian element conversions and the secular J2 rates shared by the
propagator, the Sun-synchronous solvers and the ground-repeating geometry.
"""
import math
from dataclasses import dataclass
from enum import Enum

import numpy as np


@dataclass(frozen=True)
class _OrbitalConstants:
    """Earth and Sun constants (EGM2008 / WGS84 values)."""
    MU_EARTH: float = 3.986004418e14            # m³/s² — gravitational parameter
    R_EARTH_EQUATORIAL: float = 6_378_137.0     # m — WGS84 semi-major axis
    FLATTENING: float = 1.0 / 298.257223563     # WGS84 flattening
    E_SQUARED: float = 6.69437999014e-3         # first eccentricity squared
    J2_EARTH: float = 0.0010826261738522227     # EGM2008 J2
    EARTH_ROTATION_RATE: float = 7.292115146706979e-5  # rad/s — sidereal
    EARTH_ORBIT_MEAN_MOTION: float = 2 * math.pi / 31_556_926  # rad/s
    SUN_RADIUS: float = 6.957e8                 # m — nominal solar radius
    AU: float = 1.495978707e11                  # m


OrbitalConstants: _OrbitalConstants = _OrbitalConstants()


class Perturbation(Enum):
    """Secular perturbation model used for the mean rates."""
    J0 = "J0"
    J2 = "J2"


def resolve_perturbation(perturbation) -> Perturbation:
    """Accept a Perturbation or its name ('J0', 'J2'); reject anything else."""
    if isinstance(perturbation, Perturbation):
        return perturbation
    try:
        return Perturbation(str(perturbation).lstrip(":").upper())
    except ValueError:
        raise ValueError(
            f"Unsupported perturbation model: {perturbation!r} (use J0 or J2)"
        ) from None


def _check_elements(a: float, e: float) -> None:
    if a <= 0:
        raise ValueError(f"Semi-major axis must be positive, got {a}")
    if not 0 <= e < 1:
        raise ValueError(f"Eccentricity must be within [0, 1), got {e}")


def kepler_to_cartesian(
    a: float,
    e: float,
    i_rad: float,
    raan_rad: float,
    arg_perigee_rad: float,
    true_anomaly_rad: float,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Convert Keplerian orbital elements to inertial position/velocity.

    Args:
        a: Semi-major axis (m)
        e: Eccentricity
        i_rad: Inclination (radians)
        raan_rad: Right ascension of the ascending node (radians)
        arg_perigee_rad: Argument of perigee (radians)
        true_anomaly_rad: True anomaly (radians)

    Returns:
        (position [x,y,z] in m, velocity [vx,vy,vz] in m/s) as numpy arrays.
    """
    mu = OrbitalConstants.MU_EARTH

    cos_nu = math.cos(true_anomaly_rad)
    sin_nu = math.sin(true_anomaly_rad)

    p = a * (1 - e**2)
    r = p / (1 + e * cos_nu)

    p_factor = math.sqrt(mu / p)
    pos_pqw = np.array([r * cos_nu, r * sin_nu, 0.0])
    vel_pqw = np.array([-p_factor * sin_nu, p_factor * (e + cos_nu), 0.0])

    cO, sO = math.cos(raan_rad), math.sin(raan_rad)
    co, so = math.cos(arg_perigee_rad), math.sin(arg_perigee_rad)
    ci, si = math.cos(i_rad), math.sin(i_rad)

    rotation = np.array([
        [cO * co - sO * so * ci, -cO * so - sO * co * ci, sO * si],
        [sO * co + cO * so * ci, -sO * so + cO * co * ci, -cO * si],
        [so * si, co * si, ci],
    ])

    return rotation @ pos_pqw, rotation @ vel_pqw


def mean_to_true_anomaly(
    e: float,
    mean_anomaly_rad: float,
    tolerance: float = 1e-14,
    max_iterations: int = 50,
) -> float:
    """
    Solve Kepler's equation M = E − e·sin(E) and return the true anomaly.

    Newton-Raphson on the eccentric anomaly, started from E₀ = M for
    near-circular orbits and E₀ = π for e ≥ 0.8.
    """
    M = math.remainder(mean_anomaly_rad, 2 * math.pi)
    E = math.pi if e >= 0.8 else M
    for _ in range(max_iterations):
        delta = (E - e * math.sin(E) - M) / (1 - e * math.cos(E))
        E -= delta
        if abs(delta) < tolerance:
            break

    half = E / 2
    nu = 2 * math.atan2(math.sqrt(1 + e) * math.sin(half),
                        math.sqrt(1 - e) * math.cos(half))
    return nu % (2 * math.pi)


def true_to_mean_anomaly(e: float, true_anomaly_rad: float) -> float:
    """Mean anomaly (radians, [0, 2π)) for a true anomaly."""
    half = true_anomaly_rad / 2
    E = 2 * math.atan2(math.sqrt(1 - e) * math.sin(half),
                       math.sqrt(1 + e) * math.cos(half))
    return (E - e * math.sin(E)) % (2 * math.pi)


def j2_secular_rates(a: float, e: float, i_rad: float) -> tuple[float, float, float]:
    """
    Secular J2 rates (Kozai mean theory, first order).

    Returns:
        (n̄, dΩ/dt, dω/dt) in rad/s, where n̄ is the perturbed mean motion:
            n̄     = n₀ · (1 + 3/4 · J2 · (R₀/p)² · √(1-e²) · (2 − 3 sin²i))
            dΩ/dt = −3/2 · J2 · (R₀/p)² · n̄ · cos i
            dω/dt = +3/4 · J2 · (R₀/p)² · n̄ · (4 − 5 sin²i)
    """
    c = OrbitalConstants
    _check_elements(a, e)
    beta_sq = 1 - e**2
    n0 = math.sqrt(c.MU_EARTH / a**3)
    p = a * beta_sq
    k = c.J2_EARTH * (c.R_EARTH_EQUATORIAL / p) ** 2
    sin_i_sq = math.sin(i_rad) ** 2

    n_bar = n0 * (1 + 0.75 * k * math.sqrt(beta_sq) * (2 - 3 * sin_i_sq))
    raan_rate = -1.5 * k * n_bar * math.cos(i_rad)
    arg_perigee_rate = 0.75 * k * n_bar * (4 - 5 * sin_i_sq)
    return n_bar, raan_rate, arg_perigee_rate


def raan_time_derivative(
    a: float,
    e: float,
    i_rad: float,
    perturbation: Perturbation = Perturbation.J2,
) -> float:
    """RAAN secular rate (rad/s). Zero for the unperturbed model."""
    if resolve_perturbation(perturbation) is Perturbation.J0:
        _check_elements(a, e)
        return 0.0
    return j2_secular_rates(a, e, i_rad)[1]


def orbital_angular_velocity(
    a: float,
    e: float,
    i_rad: float,
    perturbation: Perturbation = Perturbation.J2,
) -> float:
    """
    Angular velocity along the orbit measured between node crossings (rad/s).

    Unperturbed: the Keplerian mean motion. With J2: n̄ + dω/dt.
    """
    if resolve_perturbation(perturbation) is Perturbation.J0:
        _check_elements(a, e)
        return math.sqrt(OrbitalConstants.MU_EARTH / a**3)
    n_bar, _, arg_perigee_rate = j2_secular_rates(a, e, i_rad)
    return n_bar + arg_perigee_rate


def orbital_period(
    a: float,
    e: float,
    i_rad: float,
    perturbation: Perturbation = Perturbation.J2,
) -> float:
    """Nodal period in seconds."""
    return 2 * math.pi / orbital_angular_velocity(a, e, i_rad, perturbation)
