"""Energy and momentum diagnostics for N-body simulations."""

from typing import Sequence, Tuple

import numpy as np

from gravity_sim.physics.body import Body
from gravity_sim.physics.constants import GRAVITATIONAL_CONSTANT, MIN_DISTANCE_SQUARED


class Diagnostics:
    """Compute conserved quantities consistent with the force law."""
    
    def __init__(self, G: float = GRAVITATIONAL_CONSTANT):
        self.G = G
    
    def compute_energies(self, bodies: Sequence[Body]) -> Tuple[float, float, float]:
        """Compute kinetic, potential, and total energy.
        
        U = -G * Σ_{i<j} m_i * m_j / r_ij, skipping pairs closer than the
        force law's singular cutoff (they exert no force either).
        
        Args:
            bodies: Body snapshot
            
        Returns:
            Tuple of (kinetic_energy, potential_energy, total_energy)
        """
        if not bodies:
            return 0.0, 0.0, 0.0
        positions = np.array([b.position for b in bodies])
        velocities = np.array([b.velocity for b in bodies])
        masses = np.array([b.mass for b in bodies])
        
        # Kinetic energy: K = 0.5 * Σ m_i * v_i^2
        K = 0.5 * np.sum(masses * np.sum(velocities ** 2, axis=1))
        
        U = 0.0
        n = len(bodies)
        for i in range(n):
            for j in range(i + 1, n):
                r_sq = np.sum((positions[j] - positions[i]) ** 2)
                if r_sq < MIN_DISTANCE_SQUARED:
                    continue
                U -= self.G * masses[i] * masses[j] / np.sqrt(r_sq)
        
        return float(K), float(U), float(K + U)
    
    def total_momentum(self, bodies: Sequence[Body]) -> np.ndarray:
        return np.sum([b.mass * b.velocity for b in bodies], axis=0) if bodies else np.zeros(3)
    
    def angular_momentum(self, bodies: Sequence[Body]) -> np.ndarray:
        """Total angular momentum about the origin, L = Σ r × m v."""
        if not bodies:
            return np.zeros(3)
        return np.sum([np.cross(b.position, b.mass * b.velocity) for b in bodies], axis=0)
    
    def center_of_mass(self, bodies: Sequence[Body]) -> np.ndarray:
        if not bodies:
            return np.zeros(3)
        masses = np.array([b.mass for b in bodies])
        positions = np.array([b.position for b in bodies])
        return np.sum(masses[:, np.newaxis] * positions, axis=0) / np.sum(masses)
