# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for orbit propagation and frame conversion.

The analysis routines only see these contracts; the analytical J2
propagator and the SGP4 adapter implement them.
"""
from abc import ABC, abstractmethod
from typing import Callable

import numpy as np

# (inertial position [m], UTC Julian Date) -> Earth-fixed position [m].
# Called concurrently from scan tasks, so it must not keep shared state.
FrameConverter = Callable[[np.ndarray, float], np.ndarray]


class OrbitPropagator(ABC):
    """Port for propagators evaluated at offsets from their epoch.

    Implementations may cache the last computed state, so one instance
    must not be shared between threads. Callers running concurrent scans
    give each task its own ``copy.deepcopy`` of the propagator.
    """

    @property
    @abstractmethod
    def epoch(self) -> float:
        """Epoch of the orbit as a UTC Julian Date."""
        ...

    @property
    @abstractmethod
    def mean_elements(self):
        """Mean Keplerian elements at the last propagated instant."""
        ...

    @abstractmethod
    def propagate(self, t: float) -> tuple[np.ndarray, np.ndarray]:
        """Position (m) and velocity (m/s) at ``t`` seconds after the epoch."""
        ...
