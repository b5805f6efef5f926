"""Numerical integrators for N-body simulations."""

import logging
from typing import List

from gravity_sim.physics.integrators.base import Integrator
from gravity_sim.physics.integrators.euler import EulerIntegrator
from gravity_sim.physics.integrators.verlet import VerletIntegrator
from gravity_sim.physics.integrators.rk4 import RK4Integrator

logger = logging.getLogger(__name__)

INTEGRATORS = {
    "euler": EulerIntegrator,
    "verlet": VerletIntegrator,
    "rk4": RK4Integrator,
}

DEFAULT_INTEGRATOR = "verlet"


def list_integrators() -> List[str]:
    """Names accepted by get_integrator."""
    return list(INTEGRATORS)


def get_integrator(name: str = DEFAULT_INTEGRATOR, pin_stars: bool = True) -> Integrator:
    """Get an integrator by name.
    
    Args:
        name: 'euler', 'verlet' or 'rk4' (case-insensitive)
        pin_stars: Star pinning policy passed to the integrator
        
    Returns:
        Integrator instance; unknown names fall back to Verlet
    """
    integrator_class = INTEGRATORS.get(str(name).lower())
    if integrator_class is None:
        logger.warning("Unknown integrator %r, falling back to %s", name, DEFAULT_INTEGRATOR)
        integrator_class = INTEGRATORS[DEFAULT_INTEGRATOR]
    return integrator_class(pin_stars=pin_stars)


__all__ = [
    "Integrator",
    "EulerIntegrator",
    "VerletIntegrator",
    "RK4Integrator",
    "get_integrator",
    "list_integrators",
]
