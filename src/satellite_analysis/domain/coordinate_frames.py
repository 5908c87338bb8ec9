# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Coordinate frame conversions.

Reference frames:
    MOD  — Mean of Date (mean equator and equinox of date)
    TOD  — True of Date (nutation applied)
    TEME — True Equator, Mean Equinox (SGP4 output frame)
    PEF  — Pseudo-Earth Fixed (TOD/TEME rotated by sidereal time; no
           polar motion, so it is used directly as the Earth-fixed frame)
    Geodetic — Latitude, Longitude, Altitude (WGS84 ellipsoid)

Sidereal time follows IAU-1982. Nutation uses the dominant terms of the
IAU-1980 series (Meeus, Astronomical Algorithms, Table 22.A), good to
roughly 0.5 arcsecond.

All angles are radians, all distances metres, all epochs UTC Julian
Dates (UT1 ≈ UTC, TT ≈ UTC at this accuracy).
"""
import math

import numpy as np

from satellite_analysis.domain.orbital_mechanics import OrbitalConstants
from satellite_analysis.domain.time_systems import (
    SECONDS_PER_DAY,
    julian_centuries_j2000,
)

_ARCSEC_TO_RAD: float = math.pi / (180.0 * 3600.0)

# Dominant IAU-1980 nutation terms.
# (D, M, M', F, Ω multipliers), Δψ (sin coeff, T rate), Δε (cos coeff, T rate)
# in units of 0.0001 arcsecond.
_NUTATION_TERMS: tuple[tuple[tuple[int, int, int, int, int], float, float, float, float], ...] = (
    ((0, 0, 0, 0, 1), -171996.0, -174.2, 92025.0, 8.9),
    ((-2, 0, 0, 2, 2), -13187.0, -1.6, 5736.0, -3.1),
    ((0, 0, 0, 2, 2), -2274.0, -0.2, 977.0, -0.5),
    ((0, 0, 0, 0, 2), 2062.0, 0.2, -895.0, 0.5),
    ((0, 1, 0, 0, 0), 1426.0, -3.4, 54.0, -0.1),
    ((0, 0, 1, 0, 0), 712.0, 0.1, -7.0, 0.0),
    ((-2, 1, 0, 2, 2), -517.0, 1.2, 224.0, -0.6),
    ((0, 0, 0, 2, 1), -386.0, -0.4, 200.0, 0.0),
    ((0, 0, 1, 2, 2), -301.0, 0.0, 129.0, -0.1),
    ((-2, -1, 0, 2, 2), 217.0, -0.5, -95.0, 0.3),
    ((-2, 0, 1, 0, 0), -158.0, 0.0, 0.0, 0.0),
    ((-2, 0, 0, 2, 1), 129.0, 0.1, -70.0, 0.0),
    ((0, 0, -1, 2, 2), 123.0, 0.0, -53.0, 0.0),
    ((2, 0, 0, 0, 0), 63.0, 0.0, 0.0, 0.0),
    ((0, 0, 1, 0, 1), 63.0, 0.1, -33.0, 0.0),
    ((2, 0, -1, 2, 2), -59.0, 0.0, 26.0, 0.0),
    ((0, 0, -1, 0, 1), -58.0, -0.1, 32.0, 0.0),
    ((0, 0, 1, 2, 1), -51.0, 0.0, 27.0, 0.0),
)


# --------------------------------------------------------------------------- #
# Rotation matrices (passive / frame rotations)
# --------------------------------------------------------------------------- #

def _r1(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[1.0, 0.0, 0.0], [0.0, c, s], [0.0, -s, c]])


def _r3(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, s, 0.0], [-s, c, 0.0], [0.0, 0.0, 1.0]])


# --------------------------------------------------------------------------- #
# Sidereal time and nutation
# --------------------------------------------------------------------------- #

def gmst(jd: float) -> float:
    """
    Greenwich Mean Sidereal Time (IAU-1982) in radians, in [0, 2π).

        θ = 67310.54841 s + (876600 h + 8640184.812866 s)·T
            + 0.093104 s·T² − 6.2e-6 s·T³
    """
    t = julian_centuries_j2000(jd)
    seconds = (67310.54841
               + (876600.0 * 3600.0 + 8640184.812866) * t
               + 0.093104 * t**2
               - 6.2e-6 * t**3)
    return (seconds % SECONDS_PER_DAY) / SECONDS_PER_DAY * 2 * math.pi


def mean_obliquity(jd: float) -> float:
    """Mean obliquity of the ecliptic (IAU-1980) in radians."""
    t = julian_centuries_j2000(jd)
    eps_arcsec = 84381.448 - 46.8150 * t - 0.00059 * t**2 + 0.001813 * t**3
    return eps_arcsec * _ARCSEC_TO_RAD


def nutation_angles(jd: float) -> tuple[float, float]:
    """
    Nutation in longitude and obliquity (Δψ, Δε) in radians.

    Fundamental arguments from Meeus Ch. 22; only the largest terms of
    the series are summed.
    """
    t = julian_centuries_j2000(jd)
    args = (
        math.radians((297.85036 + 445267.111480 * t) % 360.0),   # D
        math.radians((357.52772 + 35999.050340 * t) % 360.0),    # M (Sun)
        math.radians((134.96298 + 477198.867398 * t) % 360.0),   # M' (Moon)
        math.radians((93.27191 + 483202.017538 * t) % 360.0),    # F
        math.radians((125.04452 - 1934.136261 * t) % 360.0),     # Ω
    )

    dpsi = 0.0
    deps = 0.0
    for multipliers, s0, s1, c0, c1 in _NUTATION_TERMS:
        arg = sum(k * x for k, x in zip(multipliers, args))
        dpsi += (s0 + s1 * t) * math.sin(arg)
        deps += (c0 + c1 * t) * math.cos(arg)

    unit = 1e-4 * _ARCSEC_TO_RAD
    return dpsi * unit, deps * unit


def equation_of_equinoxes(jd: float) -> float:
    """Equation of the equinoxes Δψ·cos(ε) in radians."""
    dpsi, deps = nutation_angles(jd)
    return dpsi * math.cos(mean_obliquity(jd) + deps)


def gast(jd: float) -> float:
    """Greenwich Apparent Sidereal Time in radians, in [0, 2π)."""
    return (gmst(jd) + equation_of_equinoxes(jd)) % (2 * math.pi)


# --------------------------------------------------------------------------- #
# Inertial → Earth-fixed converters
# --------------------------------------------------------------------------- #

def mod_to_tod_matrix(jd: float) -> np.ndarray:
    """Nutation matrix N = R1(−ε) · R3(−Δψ) · R1(ε₀) taking MOD to TOD."""
    eps0 = mean_obliquity(jd)
    dpsi, deps = nutation_angles(jd)
    return _r1(-(eps0 + deps)) @ _r3(-dpsi) @ _r1(eps0)


def r_mod_to_tod(r_mod, jd: float) -> np.ndarray:
    """Rotate a MOD vector into TOD."""
    return mod_to_tod_matrix(jd) @ np.asarray(r_mod, dtype=float)


def r_tod_to_pef(r_tod, jd: float) -> np.ndarray:
    """Rotate a TOD vector into PEF by the apparent sidereal time."""
    return _r3(gast(jd)) @ np.asarray(r_tod, dtype=float)


def r_teme_to_pef(r_teme, jd: float) -> np.ndarray:
    """Rotate a TEME vector into PEF by the mean sidereal time."""
    return _r3(gmst(jd)) @ np.asarray(r_teme, dtype=float)


# --------------------------------------------------------------------------- #
# Geodetic conversions (WGS84)
# --------------------------------------------------------------------------- #

def geodetic_to_ecef(lat_rad: float, lon_rad: float, alt_m: float) -> np.ndarray:
    """
    Convert geodetic coordinates to an Earth-fixed position (WGS84).

    Returns:
        numpy array (x, y, z) in meters.
    """
    c = OrbitalConstants
    a = c.R_EARTH_EQUATORIAL
    e2 = c.E_SQUARED

    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)

    n = a / math.sqrt(1.0 - e2 * sin_lat**2)

    return np.array([
        (n + alt_m) * cos_lat * math.cos(lon_rad),
        (n + alt_m) * cos_lat * math.sin(lon_rad),
        (n * (1.0 - e2) + alt_m) * sin_lat,
    ])


def ecef_to_geodetic(r_ecef) -> tuple[float, float, float]:
    """
    Convert an Earth-fixed position to geodetic coordinates (WGS84).

    Uses the iterative Bowring method for latitude convergence.

    Returns:
        (latitude_rad, longitude_rad, altitude_m)
        Latitude in [-π/2, π/2], longitude in (-π, π].
    """
    c = OrbitalConstants
    a = c.R_EARTH_EQUATORIAL
    e2 = c.E_SQUARED
    b = a * (1.0 - c.FLATTENING)

    x, y, z = (float(v) for v in r_ecef)
    p = math.hypot(x, y)

    lon_rad = math.atan2(y, x)
    lat_rad = math.atan2(z, p * (1.0 - e2))

    for _ in range(10):
        sin_lat = math.sin(lat_rad)
        n = a / math.sqrt(1.0 - e2 * sin_lat**2)
        lat_rad = math.atan2(z + e2 * n * sin_lat, p)

    sin_lat = math.sin(lat_rad)
    cos_lat = math.cos(lat_rad)
    n = a / math.sqrt(1.0 - e2 * sin_lat**2)

    if abs(cos_lat) > 1e-10:
        alt = p / cos_lat - n
    else:
        alt = abs(z) - b

    return lat_rad, lon_rad, alt


def ecef_to_ned_matrix(lat_rad: float, lon_rad: float) -> np.ndarray:
    """
    Rotation from Earth-fixed axes to the local North-East-Down frame.

    The down axis is the negative ellipsoid normal at the given geodetic
    latitude, not the geocentric radius direction.
    """
    sin_lat, cos_lat = math.sin(lat_rad), math.cos(lat_rad)
    sin_lon, cos_lon = math.sin(lon_rad), math.cos(lon_rad)
    return np.array([
        [-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat],
        [-sin_lon, cos_lon, 0.0],
        [-cos_lat * cos_lon, -cos_lat * sin_lon, -sin_lat],
    ])
