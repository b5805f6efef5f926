"""Corrective heuristics against numerical orbital drift.

Both functions treat the first star in the list as a fixed reference and
return the input unchanged when there are two or fewer bodies or no star.
They never modify the input; changed bodies are new instances.
"""

from typing import List, Optional, Sequence

from gravity_sim.physics import vector
from gravity_sim.physics.body import Body
from gravity_sim.physics.constants import (
    SAFE_DISTANCE_FACTOR,
    STABILIZE_MIN_DISTANCE_FACTOR,
    STABILIZE_SPEED_TOLERANCE,
)
from gravity_sim.physics.forces import orbital_velocity


def find_central_body(bodies: Sequence[Body]) -> Optional[int]:
    """Index of the first star, or None."""
    for index, body in enumerate(bodies):
        if body.is_star:
            return index
    return None


def stabilize_orbits(bodies: Sequence[Body], G: float) -> Sequence[Body]:
    """Rescale orbital speeds that drifted from the circular-orbit speed.

    For each non-star body at least STABILIZE_MIN_DISTANCE_FACTOR x (sum of
    radii) away from the star, the velocity relative to the star is scaled to
    the circular speed at the current distance when the two differ by more
    than STABILIZE_SPEED_TOLERANCE. Direction is preserved.

    Args:
        bodies: Body snapshot
        G: Gravitational constant

    Returns:
        Corrected bodies (the input itself when nothing applies)
    """
    if not bodies or len(bodies) <= 2:
        return bodies
    center_index = find_central_body(bodies)
    if center_index is None:
        return bodies

    star = bodies[center_index]
    result: List[Body] = []
    for index, body in enumerate(bodies):
        if index == center_index:
            result.append(body)
            continue

        relative_position = vector.subtract(body.position, star.position)
        relative_velocity = vector.subtract(body.velocity, star.velocity)
        distance = vector.magnitude(relative_position)
        if distance < (star.radius + body.radius) * STABILIZE_MIN_DISTANCE_FACTOR:
            result.append(body)
            continue

        ideal_speed = orbital_velocity(star.mass, distance, G)
        current_speed = vector.magnitude(relative_velocity)
        if current_speed == 0 or ideal_speed == 0:
            result.append(body)
            continue

        if abs(current_speed - ideal_speed) / ideal_speed > STABILIZE_SPEED_TOLERANCE:
            factor = ideal_speed / current_speed
            velocity = vector.add(star.velocity, vector.multiply(relative_velocity, factor))
            result.append(body.with_state(velocity=velocity))
        else:
            result.append(body)
    return result


def enforce_safe_distances(bodies: Sequence[Body]) -> Sequence[Body]:
    """Push non-star bodies out to SAFE_DISTANCE_FACTOR x star radius.

    Bodies closer than that are moved radially outward to exactly the
    minimum distance. A body sitting on the star's center has no direction
    and is left in place.
    """
    if not bodies or len(bodies) <= 2:
        return bodies
    center_index = find_central_body(bodies)
    if center_index is None:
        return bodies

    star = bodies[center_index]
    min_distance = star.radius * SAFE_DISTANCE_FACTOR
    result: List[Body] = []
    for index, body in enumerate(bodies):
        if index == center_index:
            result.append(body)
            continue
        relative_position = vector.subtract(body.position, star.position)
        distance = vector.magnitude(relative_position)
        if 0 < distance < min_distance:
            position = vector.add(star.position, vector.multiply(relative_position, min_distance / distance))
            result.append(body.with_state(position=position))
        else:
            result.append(body)
    return result
