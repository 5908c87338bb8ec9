# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Adapters for external propagation libraries.

External dependencies (sgp4) are confined to this layer and imported
lazily, so importing the package never requires them.
"""
from satellite_analysis.adapters.sgp4_propagator import Sgp4Propagator

__all__ = ["Sgp4Propagator"]
