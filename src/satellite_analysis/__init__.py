# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Satellite Analysis

Mission analysis for Earth-orbiting satellites: ground facility access
and gap intervals (scanned concurrently over time chunks), eclipse time
per orbit, beta angle, frozen orbits, Sun-synchronous and
ground-repeating orbit design, and ground tracks. Includes an analytical
J2 propagator and an optional SGP4 adapter.
"""

from satellite_analysis.domain.orbital_mechanics import (
    OrbitalConstants,
    Perturbation,
    kepler_to_cartesian,
    mean_to_true_anomaly,
    true_to_mean_anomaly,
    raan_time_derivative,
    orbital_angular_velocity,
    orbital_period,
)
from satellite_analysis.domain.time_systems import (
    date_to_jd,
    datetime_to_jd,
    jd_to_datetime,
)
from satellite_analysis.domain.coordinate_frames import (
    gmst,
    gast,
    r_mod_to_tod,
    r_tod_to_pef,
    r_teme_to_pef,
    geodetic_to_ecef,
    ecef_to_geodetic,
)
from satellite_analysis.domain.solar import (
    SunPosition,
    sun_position,
    sun_position_mod,
    equation_of_time,
)
from satellite_analysis.domain.propagation import (
    KeplerianElements,
    J2Propagator,
)
from satellite_analysis.domain.crossing import find_crossing
from satellite_analysis.domain.visibility import (
    GroundFacility,
    elevation_angle,
    is_ground_facility_visible,
    ground_facility_visibility_circle,
)
from satellite_analysis.domain.interval_table import (
    DurationUnit,
    IntervalKind,
    IntervalRow,
    IntervalTable,
)
from satellite_analysis.domain.ground_facility_access import (
    ground_facility_access_intervals,
    ground_facility_accesses,
    ground_facility_gaps,
)
from satellite_analysis.domain.lighting import (
    LightingCondition,
    lighting_condition,
)
from satellite_analysis.domain.eclipse_time import (
    EclipseTimeRow,
    EclipseTimeSummary,
    eclipse_time_summary,
)
from satellite_analysis.domain.beta_angle import beta_angle
from satellite_analysis.domain.frozen_orbits import (
    ZonalGravityModel,
    EGM96,
    frozen_orbit,
)
from satellite_analysis.domain.sun_synchronous import (
    sun_sync_orbit_semi_major_axis,
    sun_sync_orbit_inclination,
    sun_sync_orbit_from_angular_velocity,
    ltan_to_raan,
    ltdn_to_raan,
    SunSyncRepeatingOrbit,
    design_sun_sync_ground_repeating_orbit,
)
from satellite_analysis.domain.ground_repeating_orbits import (
    ground_repeating_orbit_adjacent_track_distance,
    ground_repeating_orbit_adjacent_track_angle,
)
from satellite_analysis.domain.ground_track import (
    TrackType,
    ground_track,
)
from satellite_analysis.ports import FrameConverter, OrbitPropagator

__version__ = "0.1.0"

__all__ = [
    "OrbitalConstants",
    "Perturbation",
    "kepler_to_cartesian",
    "mean_to_true_anomaly",
    "true_to_mean_anomaly",
    "raan_time_derivative",
    "orbital_angular_velocity",
    "orbital_period",
    "date_to_jd",
    "datetime_to_jd",
    "jd_to_datetime",
    "gmst",
    "gast",
    "r_mod_to_tod",
    "r_tod_to_pef",
    "r_teme_to_pef",
    "geodetic_to_ecef",
    "ecef_to_geodetic",
    "SunPosition",
    "sun_position",
    "sun_position_mod",
    "equation_of_time",
    "KeplerianElements",
    "J2Propagator",
    "find_crossing",
    "GroundFacility",
    "elevation_angle",
    "is_ground_facility_visible",
    "ground_facility_visibility_circle",
    "DurationUnit",
    "IntervalKind",
    "IntervalRow",
    "IntervalTable",
    "ground_facility_access_intervals",
    "ground_facility_accesses",
    "ground_facility_gaps",
    "LightingCondition",
    "lighting_condition",
    "EclipseTimeRow",
    "EclipseTimeSummary",
    "eclipse_time_summary",
    "beta_angle",
    "ZonalGravityModel",
    "EGM96",
    "frozen_orbit",
    "sun_sync_orbit_semi_major_axis",
    "sun_sync_orbit_inclination",
    "sun_sync_orbit_from_angular_velocity",
    "ltan_to_raan",
    "ltdn_to_raan",
    "SunSyncRepeatingOrbit",
    "design_sun_sync_ground_repeating_orbit",
    "ground_repeating_orbit_adjacent_track_distance",
    "ground_repeating_orbit_adjacent_track_angle",
    "TrackType",
    "ground_track",
    "FrameConverter",
    "OrbitPropagator",
]
