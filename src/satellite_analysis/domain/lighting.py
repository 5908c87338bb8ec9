# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Satellite lighting condition with a conical Earth shadow.

Longo & Rickman (1995) geometry: the Earth is a sphere of equatorial
radius, the Sun a sphere of nominal solar radius. Positions must be in
the same inertial frame.
"""
import math
from enum import Enum

import numpy as np

from satellite_analysis.domain.orbital_mechanics import OrbitalConstants


class LightingCondition(Enum):
    """Illumination state of a satellite."""
    SUNLIGHT = "sunlight"
    PENUMBRA = "penumbra"
    UMBRA = "umbra"


def lighting_condition(r_sat, s_sun) -> LightingCondition:
    """
    Classify the illumination of a satellite.

    Args:
        r_sat: Satellite position (m).
        s_sun: Sun position (m), same frame as r_sat.

    Returns:
        LightingCondition.
    """
    R0 = OrbitalConstants.R_EARTH_EQUATORIAL
    Rs = OrbitalConstants.SUN_RADIUS

    r = np.asarray(r_sat, dtype=float)
    s = np.asarray(s_sun, dtype=float)
    norm_s = float(np.linalg.norm(s))

    # Projection of the satellite position on the Sun direction.
    along = float(np.dot(r, s)) / norm_s
    if along >= 0:
        return LightingCondition.SUNLIGHT

    off_axis = float(np.linalg.norm(r - along * s / norm_s))
    depth = -along

    # Penumbra cone vertex sits between Earth and Sun, umbra cone vertex behind Earth.
    xp = R0 * norm_s / (Rs + R0)
    penumbra_radius = (xp + depth) * math.tan(math.asin(R0 / xp))
    if off_axis > penumbra_radius:
        return LightingCondition.SUNLIGHT

    xu = R0 * norm_s / (Rs - R0)
    umbra_radius = (xu - depth) * math.tan(math.asin(R0 / xu))
    if off_axis < umbra_radius:
        return LightingCondition.UMBRA
    return LightingCondition.PENUMBRA
