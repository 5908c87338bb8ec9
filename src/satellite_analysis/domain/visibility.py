# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Ground facility visibility.

Elevation of a satellite seen from a ground facility, computed in the
facility's local North-East-Down frame on the WGS84 ellipsoid, and the
reduction of several facilities into a single visible/not-visible value.
"""
import math
from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

import numpy as np

from satellite_analysis.domain.coordinate_frames import (
    ecef_to_geodetic,
    ecef_to_ned_matrix,
    geodetic_to_ecef,
)
from satellite_analysis.domain.crossing import find_crossing

Reduction = Callable[[Sequence[bool]], bool]


@dataclass(frozen=True)
class GroundFacility:
    """A ground facility on the WGS84 ellipsoid."""
    latitude_rad: float
    longitude_rad: float
    altitude_m: float = 0.0


def as_facility(value) -> GroundFacility:
    """Accept a GroundFacility or a (latitude [rad], longitude [rad], altitude [m]) triple."""
    if isinstance(value, GroundFacility):
        return value
    lat, lon, alt = value
    return GroundFacility(float(lat), float(lon), float(alt))


def as_facilities(value) -> list[GroundFacility]:
    """Normalize one facility or a sequence of facilities to a list."""
    if isinstance(value, GroundFacility):
        return [value]
    items = list(value)
    if len(items) == 3 and all(isinstance(v, (int, float)) for v in items):
        return [as_facility(items)]
    return [as_facility(v) for v in items]


@dataclass(frozen=True)
class FacilityFrame:
    """Earth-fixed position of a facility and its ECEF → NED rotation."""
    position: np.ndarray
    ecef_to_ned: np.ndarray

    @classmethod
    def from_facility(cls, facility: GroundFacility) -> "FacilityFrame":
        return cls(
            position=geodetic_to_ecef(
                facility.latitude_rad, facility.longitude_rad, facility.altitude_m,
            ),
            ecef_to_ned=ecef_to_ned_matrix(facility.latitude_rad, facility.longitude_rad),
        )


def elevation_angle(sat_ecef, frame: FacilityFrame) -> float:
    """
    Elevation (rad) of a satellite above the facility's local horizon.

    The line of sight is rotated into NED; the elevation is π/2 minus its
    angle from the local vertical, so the ellipsoid normal defines "up".
    """
    r_ned = frame.ecef_to_ned @ (np.asarray(sat_ecef, dtype=float) - frame.position)
    distance = float(np.linalg.norm(r_ned))
    cos_zenith = max(-1.0, min(1.0, -float(r_ned[2]) / distance))
    return math.pi / 2 - math.acos(cos_zenith)


def is_ground_facility_visible(
    sat_ecef,
    frame: FacilityFrame,
    minimum_elevation: float,
) -> bool:
    """True if the satellite is strictly above ``minimum_elevation``."""
    return elevation_angle(sat_ecef, frame) > minimum_elevation


def is_visible(
    sat_ecef,
    frames: Iterable[FacilityFrame],
    minimum_elevation: float,
    reduction: Reduction = any,
) -> bool:
    """Reduce the per-facility visibility flags to one value (default: any)."""
    flags = [is_ground_facility_visible(sat_ecef, f, minimum_elevation) for f in frames]
    return bool(reduction(flags))


def ground_facility_visibility_circle(
    facility,
    satellite_distance: float,
    *,
    minimum_elevation: float = math.radians(10),
    azimuth_step: float = math.radians(0.1),
) -> np.ndarray:
    """
    Ground footprint of the region from which a facility sees a satellite.

    For each azimuth the great-circle direction from the Earth's centre is
    swept away from the facility until a satellite at ``satellite_distance``
    along it drops to ``minimum_elevation``; the sub-satellite point of that
    edge is reported.

    Args:
        facility: GroundFacility or (lat [rad], lon [rad], alt [m]).
        satellite_distance: Distance of the satellite from the Earth's centre (m).
        minimum_elevation: Minimum elevation seen from the facility (rad).
        azimuth_step: Azimuth increment (rad).

    Returns:
        (N+1, 2) array of (latitude, longitude) in radians, azimuth
        increasing clockwise from north, the first point repeated at the end.

    Raises:
        ValueError: If the satellite would be inside the facility's radius or
            azimuth_step is not positive.
    """
    if azimuth_step <= 0:
        raise ValueError(f"azimuth_step must be positive, got {azimuth_step}")

    site = as_facility(facility)
    frame = FacilityFrame.from_facility(site)
    r_site = float(np.linalg.norm(frame.position))
    if satellite_distance <= r_site:
        raise ValueError(
            f"Satellite distance {satellite_distance} m must exceed the "
            f"facility geocentric radius {r_site:.1f} m"
        )

    up = frame.position / r_site
    east = np.array([-math.sin(site.longitude_rad), math.cos(site.longitude_rad), 0.0])
    north = np.cross(up, east)

    def _direction(psi: float, azimuth: float) -> np.ndarray:
        along = math.cos(azimuth) * north + math.sin(azimuth) * east
        return math.cos(psi) * up + math.sin(psi) * along

    def _seen(psi: float, azimuth: float) -> bool:
        sat = satellite_distance * _direction(psi, azimuth)
        return is_ground_facility_visible(sat, frame, minimum_elevation)

    points = []
    for azimuth in np.arange(0.0, 2 * math.pi, azimuth_step):
        psi = find_crossing(_seen, 0.0, math.pi, True, False, float(azimuth),
                            tolerance=1e-10)
        lat, lon, _ = ecef_to_geodetic(satellite_distance * _direction(psi, azimuth))
        points.append((lat, lon))

    points.append(points[0])
    return np.array(points)
