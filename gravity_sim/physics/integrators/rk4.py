"""Runge-Kutta 4th order integrator (high accuracy, O(h⁴))."""

from typing import Tuple
import numpy as np
from gravity_sim.physics.integrators.base import AccelerationFn, Integrator


class RK4Integrator(Integrator):
    """Runge-Kutta 4th order method - high accuracy integrator.
    
    Most accurate but four force passes per step. Good for high-precision runs.
    """
    
    @property
    def name(self) -> str:
        return "rk4"
    
    @property
    def order(self) -> int:
        return 4
    
    @property
    def force_evaluations(self) -> int:
        return 4
    
    def _advance(self, positions, velocities, accelerate: AccelerationFn, dt: float) -> Tuple[np.ndarray, np.ndarray]:
        """RK4 step using the standard 4-stage method.
        
        For a system dr/dt = v, dv/dt = a(r):
        k1_r = v                  k1_v = a(r)
        k2_r = v + k1_v*dt/2      k2_v = a(r + k1_r*dt/2)
        k3_r = v + k2_v*dt/2      k3_v = a(r + k2_r*dt/2)
        k4_r = v + k3_v*dt        k4_v = a(r + k3_r*dt)
        
        r_new = r + (k1_r + 2*k2_r + 2*k3_r + k4_r)*dt/6
        v_new = v + (k1_v + 2*k2_v + 2*k3_v + k4_v)*dt/6
        
        Pinned bodies have zero velocity and zero acceleration, so every
        stage leaves them in place.
        """
        half_dt = dt / 2
        
        k1_r = velocities
        k1_v = accelerate(positions)
        
        k2_r = velocities + k1_v * half_dt
        k2_v = accelerate(positions + k1_r * half_dt)
        
        k3_r = velocities + k2_v * half_dt
        k3_v = accelerate(positions + k2_r * half_dt)
        
        k4_r = velocities + k3_v * dt
        k4_v = accelerate(positions + k3_r * dt)
        
        new_positions = positions + (k1_r + 2 * k2_r + 2 * k3_r + k4_r) * (dt / 6)
        new_velocities = velocities + (k1_v + 2 * k2_v + 2 * k3_v + k4_v) * (dt / 6)
        return new_positions, new_velocities
