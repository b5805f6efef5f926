"""
Gravity Simulator - a direct N-body gravitational dynamics engine.

Features:
- Newtonian pairwise gravity with a singular-distance cutoff
- Multiple integrators (Euler, Verlet, RK4)
- Inelastic collision merging
- Orbit stabilization heuristics
- Bounded orbital path history
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from gravity_sim.physics.simulator import Simulator
from gravity_sim.physics.body import Body, BodyType
from gravity_sim.utils.config import SimulationConfig

__all__ = [
    "Simulator",
    "Body",
    "BodyType",
    "SimulationConfig",
]
