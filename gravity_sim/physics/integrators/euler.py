"""Euler method integrator (baseline, O(h) accuracy)."""

from typing import Tuple
import numpy as np
from gravity_sim.physics.integrators.base import AccelerationFn, Integrator


class EulerIntegrator(Integrator):
    """Explicit (forward) Euler method - simple first-order integrator.
    
    Fast but drifts in energy over long runs. Good for baseline comparisons.
    """
    
    @property
    def name(self) -> str:
        return "euler"
    
    @property
    def order(self) -> int:
        return 1
    
    def _advance(self, positions, velocities, accelerate: AccelerationFn, dt: float) -> Tuple[np.ndarray, np.ndarray]:
        """Euler step: v_new = v + a*dt, r_new = r + v*dt.
        
        The position update uses the velocity from the start of the step.
        """
        accelerations = accelerate(positions)
        new_velocities = velocities + accelerations * dt
        new_positions = positions + velocities * dt
        return new_positions, new_velocities
