"""Physics engine for N-body simulations."""

from gravity_sim.physics.body import Body, BodyType, bodies_from_records, bodies_to_records
from gravity_sim.physics.collisions import detect_collisions, merge_collisions
from gravity_sim.physics.stabilizer import enforce_safe_distances, stabilize_orbits
from gravity_sim.physics.simulator import Simulator, merge, stabilize, step

__all__ = [
    "Body",
    "BodyType",
    "bodies_from_records",
    "bodies_to_records",
    "detect_collisions",
    "merge_collisions",
    "enforce_safe_distances",
    "stabilize_orbits",
    "Simulator",
    "merge",
    "stabilize",
    "step",
]
