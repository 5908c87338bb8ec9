# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Analytical solar ephemeris.

Low-precision Sun position using Meeus "Astronomical Algorithms" Ch. 25 /
Vallado simplified algorithm. Accuracy ~1 arcminute, sufficient for
eclipse, beta angle and local-time computations. Positions are referred
to the mean equator and equinox of date (MOD).
"""
import math
from dataclasses import dataclass

import numpy as np

from satellite_analysis.domain.coordinate_frames import (
    mean_obliquity,
    nutation_angles,
)
from satellite_analysis.domain.orbital_mechanics import OrbitalConstants
from satellite_analysis.domain.time_systems import julian_centuries_j2000


@dataclass(frozen=True)
class SunPosition:
    """Sun position at a given epoch."""
    position_mod_m: tuple[float, float, float]
    right_ascension_rad: float
    declination_rad: float
    distance_m: float


def sun_position(jd: float) -> SunPosition:
    """Low-precision solar ephemeris at a UTC Julian Date."""
    T = julian_centuries_j2000(jd)

    # Mean anomaly (degrees)
    M_deg = (357.5291 + 35999.0503 * T) % 360.0
    M_rad = math.radians(M_deg)

    # Ecliptic longitude (degrees)
    L_deg = (280.4665 + 36000.7698 * T + 1.9146 * math.sin(M_rad)
             + 0.0200 * math.sin(2.0 * M_rad)) % 360.0
    L_rad = math.radians(L_deg)

    eps_rad = math.radians(23.4393 - 0.01300 * T)

    ra_rad = math.atan2(math.cos(eps_rad) * math.sin(L_rad), math.cos(L_rad))
    dec_rad = math.asin(math.sin(eps_rad) * math.sin(L_rad))

    r_au = 1.00014 - 0.01671 * math.cos(M_rad) - 0.00014 * math.cos(2.0 * M_rad)
    distance_m = r_au * OrbitalConstants.AU

    cos_dec = math.cos(dec_rad)
    position = (
        distance_m * cos_dec * math.cos(ra_rad),
        distance_m * cos_dec * math.sin(ra_rad),
        distance_m * math.sin(dec_rad),
    )

    return SunPosition(
        position_mod_m=position,
        right_ascension_rad=ra_rad,
        declination_rad=dec_rad,
        distance_m=distance_m,
    )


def sun_position_mod(jd: float) -> np.ndarray:
    """Sun position vector (m) in the MOD frame."""
    return np.array(sun_position(jd).position_mod_m)


def equation_of_time(jd: float) -> float:
    """
    Equation of time (apparent minus mean solar time) in radians.

    Meeus Eq. 28.3: E = L₀ − 0.0057183° − α + Δψ·cos(ε), wrapped to (−π, π].

    α comes from the low-precision Sun position, so E is accurate to about
    2′ (6e-4 rad, 8 s of time). RAANs set from a local time of the node,
    and the ground-track longitudes that follow from them, carry the same
    offset.
    """
    T = julian_centuries_j2000(jd)
    L0 = math.radians((280.46646 + 36000.76983 * T + 0.0003032 * T**2) % 360.0)
    dpsi, deps = nutation_angles(jd)
    eps = mean_obliquity(jd) + deps
    alpha = sun_position(jd).right_ascension_rad

    eot = L0 - math.radians(0.0057183) - alpha + dpsi * math.cos(eps)
    return math.remainder(eot, 2 * math.pi)
