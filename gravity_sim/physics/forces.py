"""Newtonian gravity between bodies, circular-orbit speed and collision merging.

All functions are stateless: results depend only on the bodies passed in
and the gravitational constant.
"""

import math
from dataclasses import replace
from typing import Sequence

import numpy as np

from gravity_sim.physics import vector
from gravity_sim.physics.body import Body
from gravity_sim.physics.constants import MIN_DISTANCE_SQUARED


def gravitational_force(a: Body, b: Body, G: float) -> np.ndarray:
    """Force exerted on body ``a`` by body ``b``.

    F = G * m_a * m_b / d^2, directed from a toward b. Near-coincident bodies
    (squared distance below MIN_DISTANCE_SQUARED) exert no force.

    Args:
        a: Body the force acts on
        b: Attracting body
        G: Gravitational constant

    Returns:
        (3,) force vector in newtons
    """
    displacement = vector.subtract(b.position, a.position)
    distance_sq = vector.magnitude_squared(displacement)
    if distance_sq < MIN_DISTANCE_SQUARED:
        return vector.zero()
    force_magnitude = G * a.mass * b.mass / distance_sq
    return vector.multiply(vector.normalize(displacement), force_magnitude)


def net_force(body: Body, bodies: Sequence[Body], G: float) -> np.ndarray:
    """Sum of gravitational forces on ``body`` from every other body (matched by id)."""
    total = vector.zero()
    for other in bodies:
        if other.id == body.id:
            continue
        total = total + gravitational_force(body, other, G)
    return total


def acceleration(force, mass: float) -> np.ndarray:
    """Newton's second law, a = F / m.

    Raises:
        DivisionByZeroError: If mass is zero
    """
    return vector.divide(force, mass)


def net_acceleration(body: Body, bodies: Sequence[Body], G: float) -> np.ndarray:
    return acceleration(net_force(body, bodies, G), body.mass)


def orbital_velocity(central_mass: float, distance: float, G: float) -> float:
    """Speed of a circular orbit of radius ``distance`` around ``central_mass``."""
    return math.sqrt(G * central_mass / distance)


def escape_velocity(central_mass: float, distance: float, G: float) -> float:
    return math.sqrt(2.0 * G * central_mass / distance)


def are_colliding(a: Body, b: Body) -> bool:
    """True if the spheres overlap (center distance below the sum of radii)."""
    return vector.distance(a.position, b.position) < a.radius + b.radius


def resolve_collision(a: Body, b: Body) -> Body:
    """Perfectly inelastic merge of two bodies.

    The more massive body (``a`` on ties) keeps its identity, metadata and
    position. Mass and momentum are conserved and the radius assumes
    constant density: r = (r_a^3 + r_b^3)^(1/3).

    Args:
        a: First body
        b: Second body

    Returns:
        Merged body
    """
    primary = a if a.mass >= b.mass else b
    total_mass = a.mass + b.mass
    momentum = vector.add(vector.multiply(a.velocity, a.mass), vector.multiply(b.velocity, b.mass))
    new_velocity = vector.divide(momentum, total_mass)
    new_radius = (a.radius ** 3 + b.radius ** 3) ** (1.0 / 3.0)
    return replace(
        primary,
        mass=total_mass,
        radius=new_radius,
        velocity=new_velocity,
    )
