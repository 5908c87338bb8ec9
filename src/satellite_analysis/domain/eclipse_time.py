# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Eclipse time per orbit.

For each day of the analysis, one nodal period starting at that day is
scanned and the time spent in sunlight, penumbra and umbra is summed.
Transitions are refined with ``find_crossing``. The Sun is held at its
position at the start of the day.
"""
import copy
from dataclasses import dataclass
from datetime import datetime

import numpy as np

from satellite_analysis.domain.crossing import find_crossing
from satellite_analysis.domain.interval_table import (
    DurationUnit,
    resolve_duration_unit,
)
from satellite_analysis.domain.lighting import LightingCondition, lighting_condition
from satellite_analysis.domain.orbital_mechanics import orbital_period
from satellite_analysis.domain.solar import sun_position_mod
from satellite_analysis.domain.time_systems import SECONDS_PER_DAY, jd_to_datetime
from satellite_analysis.ports import OrbitPropagator

ECLIPSE_TIME_DESCRIPTION = "Eclipse time PER ORBIT computed at each day."


@dataclass(frozen=True)
class EclipseTimeRow:
    """Time in each lighting condition during one orbit starting at ``date``."""
    date: datetime
    sunlight: float
    penumbra: float
    umbra: float


@dataclass(frozen=True)
class EclipseTimeSummary:
    """Daily eclipse times in ``unit``."""
    rows: tuple[EclipseTimeRow, ...]
    unit: DurationUnit
    description: str = ECLIPSE_TIME_DESCRIPTION

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __getitem__(self, index: int) -> EclipseTimeRow:
        return self.rows[index]

    @property
    def sunlight(self) -> np.ndarray:
        return np.array([row.sunlight for row in self.rows])

    @property
    def penumbra(self) -> np.ndarray:
        return np.array([row.penumbra for row in self.rows])

    @property
    def umbra(self) -> np.ndarray:
        return np.array([row.umbra for row in self.rows])


def eclipse_time_summary(
    propagator: OrbitPropagator,
    *,
    num_days: int = 365,
    step: float | None = None,
    unit="s",
) -> EclipseTimeSummary:
    """
    Compute the sunlight, penumbra and umbra time per orbit for each day.

    Args:
        propagator: OrbitPropagator in an inertial frame; a deep copy is used.
        num_days: Number of days to analyse, starting at the epoch.
        step: Sampling step (s). Default: half a degree of the orbit.
        unit: Unit of the output times (``"s"``, ``"m"``, ``"h"``); unknown
            values fall back to seconds.

    Returns:
        EclipseTimeSummary with one row per day.

    Raises:
        ValueError: If num_days < 1 or step is not positive.
    """
    if num_days < 1:
        raise ValueError(f"num_days must be at least 1, got {num_days}")
    if step is not None and step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    resolved = resolve_duration_unit(unit)
    orbp = copy.deepcopy(propagator)
    jd0 = orbp.epoch
    elements = orbp.mean_elements
    period = orbital_period(
        elements.semi_major_axis, elements.eccentricity, elements.inclination,
    )
    step0 = min(period * 0.5 / 360.0 if step is None else float(step), period)

    rows = []
    for day in range(num_days):
        sun = sun_position_mod(jd0 + day)
        offset = day * SECONDS_PER_DAY

        def condition(t: float) -> LightingCondition:
            r, _ = orbp.propagate(offset + t)
            return lighting_condition(r, sun)

        def same_condition(t: float, reference: LightingCondition) -> bool:
            return condition(t) == reference

        totals = {c: 0.0 for c in LightingCondition}
        old = condition(0.0)
        dt = step0
        t_k = dt
        while True:
            new = condition(t_k)
            if new != old:
                t_prev = t_k - dt
                t_c = find_crossing(same_condition, t_prev, t_k, True, False, old)
                totals[old] += t_c - t_prev
                totals[new] += t_k - t_c
            else:
                totals[new] += dt
            old = new

            if abs(t_k - period) < 1e-3:
                break
            if t_k + dt > period:
                dt = period - t_k
            t_k += dt

        rows.append(EclipseTimeRow(
            date=jd_to_datetime(jd0 + day),
            sunlight=totals[LightingCondition.SUNLIGHT] / resolved.seconds,
            penumbra=totals[LightingCondition.PENUMBRA] / resolved.seconds,
            umbra=totals[LightingCondition.UMBRA] / resolved.seconds,
        ))

    return EclipseTimeSummary(rows=tuple(rows), unit=resolved)
