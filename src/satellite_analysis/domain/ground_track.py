# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Ground track computation from an orbit propagator.

Samples the propagator at a fixed step, converts each position to the
Earth-fixed frame and then to geodetic latitude/longitude. The track can
be restricted to its ascending or descending halves, and NaN separators
mark discontinuities so the points can be drawn as a polyline.
"""
import math
from enum import Enum

from satellite_analysis.domain.coordinate_frames import ecef_to_geodetic, r_teme_to_pef
from satellite_analysis.domain.orbital_mechanics import orbital_angular_velocity
from satellite_analysis.domain.time_systems import SECONDS_PER_DAY
from satellite_analysis.ports import FrameConverter, OrbitPropagator

_NAN_POINT = (math.nan, math.nan)


class TrackType(Enum):
    ALL = "all"
    ASCENDING = "ascending"
    DESCENDING = "descending"


def ground_track(
    propagator: OrbitPropagator,
    *,
    duration: float = 86400.0,
    initial_time: float = 0.0,
    step: float | None = None,
    frame_converter: FrameConverter = r_teme_to_pef,
    track_types: TrackType = TrackType.ALL,
    add_nans: bool = True,
) -> list[tuple[float, float]]:
    """
    Compute the ground track of a satellite.

    Args:
        propagator: OrbitPropagator; it is advanced in place.
        duration: Time span (s) after ``initial_time``.
        initial_time: First sample, seconds after the propagator epoch.
        step: Sampling step (s). Default: the time to travel 1° of orbit.
        frame_converter: Inertial → Earth-fixed conversion.
        track_types: Keep all points, or only ascending/descending ones.
        add_nans: Insert (nan, nan) where latitude jumps by more than π/2
            or longitude by more than π between kept points.

    Returns:
        List of (latitude, longitude) tuples in radians.

    Raises:
        ValueError: If step is zero or negative.
    """
    if step is None:
        el = propagator.mean_elements
        angular_velocity = orbital_angular_velocity(
            el.semi_major_axis, el.eccentricity, el.inclination,
        )
        step = math.radians(1) / angular_velocity
    if step <= 0:
        raise ValueError(f"Step must be positive, got {step}")

    epoch = propagator.epoch
    track_types = TrackType(track_types)

    def _lat_lon(t: float) -> tuple[float, float]:
        r_inertial, _ = propagator.propagate(t)
        lat, lon, _ = ecef_to_geodetic(frame_converter(r_inertial, epoch + t / SECONDS_PER_DAY))
        return lat, lon

    end = initial_time + duration
    times = []
    k = 0
    while initial_time + k * step <= end:
        times.append(initial_time + k * step)
        k += 1

    points: list[tuple[float, float]] = []
    if not times:
        return points

    previous = _lat_lon(times[0])
    for t in times[1:]:
        current = _lat_lon(t)
        direction = TrackType.ASCENDING if current[0] > previous[0] else TrackType.DESCENDING

        if track_types is not TrackType.ALL and track_types is not direction:
            previous = current
            continue

        if not points:
            points.append(previous)

        if add_nans:
            last_lat, last_lon = points[-1]
            if abs(current[0] - last_lat) > math.pi / 2 or abs(current[1] - last_lon) > math.pi:
                points.append(_NAN_POINT)

        points.append(current)
        previous = current

    return points
