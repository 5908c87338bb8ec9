# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Beta angle: elevation of the Sun above the orbit plane.

The orbit normal is built from the inclination and the RAAN advanced by
its secular rate; the Sun vector is rotated from MOD to TOD.
"""
import math

import numpy as np

from satellite_analysis.domain.coordinate_frames import mod_to_tod_matrix
from satellite_analysis.domain.orbital_mechanics import (
    Perturbation,
    raan_time_derivative,
)
from satellite_analysis.domain.solar import sun_position_mod
from satellite_analysis.domain.time_systems import SECONDS_PER_DAY


def orbit_normal(i_rad: float, raan_rad: float) -> np.ndarray:
    """Unit angular-momentum vector of an orbit."""
    si = math.sin(i_rad)
    return np.array([si * math.sin(raan_rad), -si * math.cos(raan_rad), math.cos(i_rad)])


def beta_angle(
    jd0: float,
    a: float,
    e: float,
    i_rad: float,
    raan_rad: float,
    days: int,
    *,
    perturbation: Perturbation = Perturbation.J2,
) -> np.ndarray:
    """
    Beta angle (rad) for each of the days 1..``days`` after ``jd0``.

    Positive when the Sun is on the side of the orbit normal.

    Args:
        jd0: Epoch (UTC Julian Date) at which ``raan_rad`` is given.
        a: Semi-major axis (m).
        e: Eccentricity.
        i_rad: Inclination (rad), TOD.
        raan_rad: RAAN at the epoch (rad), TOD.
        days: Number of days to compute.
        perturbation: Model for the RAAN drift (J0 or J2).

    Raises:
        ValueError: If days is not positive.
    """
    if days <= 0:
        raise ValueError(f"The number of days must be positive, got {days}")

    raan_per_day = SECONDS_PER_DAY * raan_time_derivative(a, e, i_rad, perturbation)
    mod_to_tod = mod_to_tod_matrix(jd0)

    beta = np.empty(days)
    for d in range(1, days + 1):
        normal = orbit_normal(i_rad, raan_rad + raan_per_day * d)
        sun = mod_to_tod @ sun_position_mod(jd0 + d)
        cos_angle = float(np.dot(normal, sun / np.linalg.norm(sun)))
        beta[d - 1] = math.pi / 2 - math.acos(max(-1.0, min(1.0, cos_angle)))
    return beta
