"""Velocity Verlet integrator (better energy conservation, O(h²) accuracy)."""

from typing import Tuple
import numpy as np
from gravity_sim.physics.integrators.base import AccelerationFn, Integrator


class VerletIntegrator(Integrator):
    """Velocity Verlet integrator - second-order, symplectic.
    
    Canonical Velocity Verlet algorithm:
    1. x_new = x + v*dt + 0.5*a_old*dt^2
    2. (recompute forces to get a_new)
    3. v_new = v + 0.5*(a_old + a_new)*dt
    
    This is implemented as:
    - half_step(): computes x_new and v_half = v + 0.5*a_old*dt
    - complete_step(): computes v_new = v_half + 0.5*a_new*dt
    
    Better energy conservation than Euler. Default choice.
    """
    
    @property
    def name(self) -> str:
        return "verlet"
    
    @property
    def order(self) -> int:
        return 2
    
    @property
    def force_evaluations(self) -> int:
        return 2
    
    def half_step(self, positions, velocities, accelerations, dt: float) -> Tuple[np.ndarray, np.ndarray]:
        """Velocity Verlet step (first half).
        
        Args:
            positions: Current positions (n, 3)
            velocities: Current velocities (n, 3)
            accelerations: Accelerations at current positions (n, 3)
            dt: Time step
            
        Returns:
            Tuple of (new_positions, v_half)
        """
        new_positions = positions + velocities * dt + accelerations * (0.5 * dt * dt)
        v_half = velocities + accelerations * (0.5 * dt)
        return new_positions, v_half
    
    def complete_step(self, v_half, accelerations_new, dt: float) -> np.ndarray:
        """Velocity Verlet step (second half).
        
        Computes v_new = v_half + 0.5*a_new*dt, which gives
        v_new = v_old + 0.5*(a_old + a_new)*dt.
        """
        return v_half + accelerations_new * (0.5 * dt)
    
    def _advance(self, positions, velocities, accelerate: AccelerationFn, dt: float) -> Tuple[np.ndarray, np.ndarray]:
        accelerations = accelerate(positions)
        new_positions, v_half = self.half_step(positions, velocities, accelerations, dt)
        # Forces at the new positions, from the same post-drift snapshot
        accelerations_new = accelerate(new_positions)
        new_velocities = self.complete_step(v_half, accelerations_new, dt)
        return new_positions, new_velocities
