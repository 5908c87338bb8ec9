# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
SGP4 adapter: propagates two-line element sets through the OrbitPropagator port.

External dependency (sgp4) is confined to this layer. TLE mean elements
are SGP4-specific, NOT pure Keplerian; positions come out in TEME and
are converted to metres, so they pair with ``r_teme_to_pef``.
"""
import logging

import numpy as np

from satellite_analysis.domain.orbital_mechanics import OrbitalConstants, mean_to_true_anomaly
from satellite_analysis.domain.propagation import KeplerianElements
from satellite_analysis.ports import OrbitPropagator

_log = logging.getLogger(__name__)

_KM = 1000.0


def _require_sgp4():
    """Import sgp4 lazily; raise clear error if not installed."""
    try:
        from sgp4.api import Satrec, WGS72
    except ImportError:
        raise ImportError(
            "sgp4 is required for TLE propagation. "
            "Install with: pip install satellite-analysis[live]"
        ) from None
    return Satrec, WGS72


class Sgp4Propagator(OrbitPropagator):
    """OrbitPropagator backed by ``sgp4.api.Satrec``."""

    def __init__(self, line1: str, line2: str) -> None:
        Satrec, WGS72 = _require_sgp4()
        self._lines = (line1, line2)
        self._satrec = Satrec.twoline2rv(line1, line2, WGS72)
        self._epoch = self._satrec.jdsatepoch + self._satrec.jdsatepochF
        _log.debug("Loaded TLE for catalog number %s (epoch JD %.8f)",
                   self._satrec.satnum, self._epoch)

    @classmethod
    def from_tle(cls, line1: str, line2: str) -> "Sgp4Propagator":
        return cls(line1.strip(), line2.strip())

    def __deepcopy__(self, memo):
        # Satrec is a C object; rebuild it from the element set.
        clone = type(self)(*self._lines)
        memo[id(self)] = clone
        return clone

    @property
    def epoch(self) -> float:
        return self._epoch

    @property
    def mean_elements(self) -> KeplerianElements:
        """SGP4 mean elements at the TLE epoch."""
        sat = self._satrec
        n = sat.no_kozai / 60.0  # rad/min -> rad/s
        a = (OrbitalConstants.MU_EARTH / n**2) ** (1.0 / 3.0)
        e = sat.ecco
        return KeplerianElements(
            epoch=self._epoch,
            semi_major_axis=a,
            eccentricity=e,
            inclination=sat.inclo,
            raan=sat.nodeo,
            arg_perigee=sat.argpo,
            true_anomaly=mean_to_true_anomaly(e, sat.mo),
        )

    def propagate(self, t: float) -> tuple[np.ndarray, np.ndarray]:
        sat = self._satrec
        error, r_km, v_km_s = sat.sgp4(sat.jdsatepoch, sat.jdsatepochF + t / 86400.0)
        if error != 0:
            raise RuntimeError(
                f"SGP4 propagation failed at t={t} s with error code {error}"
            )
        return np.array(r_km) * _KM, np.array(v_km_s) * _KM
