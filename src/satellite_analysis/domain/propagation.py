# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Analytical Keplerian + J2 secular propagation.

The propagator returns positions in the inertial frame the elements are
expressed in (TOD for the reference scenarios), leaving the Earth-fixed
conversion to a FrameConverter.
"""
import math
from dataclasses import dataclass, replace
from datetime import datetime

import numpy as np

from satellite_analysis.domain.orbital_mechanics import (
    j2_secular_rates,
    kepler_to_cartesian,
    mean_to_true_anomaly,
    true_to_mean_anomaly,
)
from satellite_analysis.domain.time_systems import (
    SECONDS_PER_DAY,
    datetime_to_jd,
)
from satellite_analysis.ports import OrbitPropagator


@dataclass(frozen=True)
class KeplerianElements:
    """Osculating or mean Keplerian elements at an epoch (UTC Julian Date)."""
    epoch: float
    semi_major_axis: float      # m
    eccentricity: float
    inclination: float          # rad
    raan: float                 # rad
    arg_perigee: float          # rad
    true_anomaly: float         # rad

    @classmethod
    def from_datetime(cls, epoch: datetime, **elements) -> "KeplerianElements":
        return cls(epoch=datetime_to_jd(epoch), **elements)


class J2Propagator(OrbitPropagator):
    """
    Mean-element propagator with first-order secular J2 rates.

    Semi-major axis, eccentricity and inclination stay constant; RAAN,
    argument of perigee and mean anomaly drift linearly (Kozai). The last
    propagated state is kept on the instance.
    """

    def __init__(self, elements: KeplerianElements) -> None:
        a = elements.semi_major_axis
        e = elements.eccentricity
        if a * (1 - e) <= 0:
            raise ValueError(f"Invalid orbit: a={a}, e={e}")

        self._elements0 = elements
        self._mean_anomaly0 = true_to_mean_anomaly(e, elements.true_anomaly)
        self._n_bar, self._raan_rate, self._arg_perigee_rate = j2_secular_rates(
            a, e, elements.inclination,
        )

        self._elements = elements
        self._t = 0.0
        self._r, self._v = kepler_to_cartesian(
            a, e, elements.inclination, elements.raan,
            elements.arg_perigee, elements.true_anomaly,
        )

    @property
    def epoch(self) -> float:
        return self._elements0.epoch

    @property
    def mean_elements(self) -> KeplerianElements:
        return self._elements

    @property
    def mean_motion(self) -> float:
        """Perturbed mean motion n̄ (rad/s)."""
        return self._n_bar

    def propagate(self, t: float) -> tuple[np.ndarray, np.ndarray]:
        el = self._elements0
        two_pi = 2 * math.pi

        mean_anomaly = (self._mean_anomaly0 + self._n_bar * t) % two_pi
        raan = (el.raan + self._raan_rate * t) % two_pi
        arg_perigee = (el.arg_perigee + self._arg_perigee_rate * t) % two_pi
        true_anomaly = mean_to_true_anomaly(el.eccentricity, mean_anomaly)

        self._r, self._v = kepler_to_cartesian(
            el.semi_major_axis, el.eccentricity, el.inclination,
            raan, arg_perigee, true_anomaly,
        )
        self._t = t
        self._elements = replace(
            el,
            epoch=el.epoch + t / SECONDS_PER_DAY,
            raan=raan,
            arg_perigee=arg_perigee,
            true_anomaly=true_anomaly,
        )
        return self._r.copy(), self._v.copy()
