"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Sequence, Tuple
import logging

import numpy as np

from gravity_sim.errors import ErrorKind, PhysicsErrorEvent, SWITCH_TO_VERLET
from gravity_sim.physics import forces
from gravity_sim.physics.body import Body
from gravity_sim.physics.constants import MAX_POSITION_COMPONENT, MAX_VELOCITY_COMPONENT

logger = logging.getLogger(__name__)

AccelerationFn = Callable[[np.ndarray], np.ndarray]


def clamp_state(position, velocity, previous_position) -> Tuple[np.ndarray, np.ndarray, bool]:
    """Keep a body state finite and within bounds.

    Non-finite velocity components become 0, non-finite position components
    fall back to ``previous_position``; both are then clipped to their
    magnitude bounds.

    Returns:
        Tuple of (position, velocity, adjusted) where adjusted is True if any
        component was replaced or clipped
    """
    finite_v = np.isfinite(velocity)
    new_velocity = np.clip(np.where(finite_v, velocity, 0.0), -MAX_VELOCITY_COMPONENT, MAX_VELOCITY_COMPONENT)
    finite_x = np.isfinite(position)
    new_position = np.clip(np.where(finite_x, position, previous_position), -MAX_POSITION_COMPONENT, MAX_POSITION_COMPONENT)
    adjusted = (
        not finite_v.all()
        or not finite_x.all()
        or not np.array_equal(new_velocity, velocity)
        or not np.array_equal(new_position, position)
    )
    return new_position, new_velocity, adjusted


class Integrator(ABC):
    """Abstract interface for numerical integrators.

    Subclasses implement ``_advance`` on (n, 3) position/velocity arrays;
    ``step`` handles the shared parts of the contract: a single consistent
    snapshot per stage, star pinning, per-body failure isolation and the
    numeric guard. The input bodies are never modified.
    """

    def __init__(self, pin_stars: bool = True):
        """Initialize integrator.

        Args:
            pin_stars: If True, stars keep their position and have zero velocity
        """
        self.pin_stars = pin_stars

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass

    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy (1 for Euler, 2 for Verlet, 4 for RK4)."""
        pass

    @property
    def force_evaluations(self) -> int:
        """Full force passes per step."""
        return 1

    @abstractmethod
    def _advance(self, positions, velocities, accelerate: AccelerationFn, dt: float) -> Tuple[np.ndarray, np.ndarray]:
        """Advance the state arrays by one step.

        Args:
            positions: (n, 3) positions at t
            velocities: (n, 3) velocities at t (zero rows for pinned bodies)
            accelerate: Maps (n, 3) trial positions to (n, 3) accelerations
            dt: Time step

        Returns:
            Tuple of (new_positions, new_velocities)
        """
        pass

    def step(self, bodies: Sequence[Body], dt: float, G: float) -> Tuple[List[Body], List[PhysicsErrorEvent]]:
        """Advance all bodies by one time step.

        Args:
            bodies: Current body snapshot
            dt: Time step (s)
            G: Gravitational constant

        Returns:
            Tuple of (new_bodies, events): new_bodies has the input's length and
            order; events describes bodies that were frozen or clamped
        """
        bodies = list(bodies)
        if not bodies:
            return [], []

        failures: Dict[int, PhysicsErrorEvent] = {}
        for i, body in enumerate(bodies):
            problem = self._invalid_reason(body)
            if problem is not None:
                failures[i] = PhysicsErrorEvent(
                    kind=ErrorKind.CONFIGURATION_INCONSISTENCY,
                    message=f"Body {body.name!r} rejected: {problem}",
                    body_id=body.id,
                    integrator=self.name,
                )
        sources = [i for i in range(len(bodies)) if i not in failures]
        pinned = np.array([self.pin_stars and body.is_star for body in bodies], dtype=bool)

        positions = np.array([body.position for body in bodies], dtype=np.float64)
        velocities = np.array([body.velocity for body in bodies], dtype=np.float64)
        velocities[pinned] = 0.0

        def accelerate(trial_positions: np.ndarray) -> np.ndarray:
            return self._accelerations(bodies, trial_positions, G, sources, pinned, failures)

        with np.errstate(over="ignore", invalid="ignore"):
            new_positions, new_velocities = self._advance(positions, velocities, accelerate, dt)

        return self._finalize(bodies, new_positions, new_velocities, pinned, failures)

    def _accelerations(self, bodies, trial_positions, G, sources, pinned, failures) -> np.ndarray:
        """Accelerations of every body at trial positions (one snapshot)."""
        trial = [body.with_state(position=trial_positions[i]) for i, body in enumerate(bodies)]
        attractors = [trial[i] for i in sources]
        accelerations = np.zeros_like(trial_positions)
        for i in sources:
            if pinned[i] or i in failures:
                continue
            try:
                accelerations[i] = forces.net_acceleration(trial[i], attractors, G)
            except Exception as exc:
                failures[i] = self._failure_event(bodies[i], exc)
        return accelerations

    def _finalize(self, bodies, new_positions, new_velocities, pinned, failures) -> Tuple[List[Body], List[PhysicsErrorEvent]]:
        result = []
        events = []
        for i, body in enumerate(bodies):
            if i in failures:
                result.append(body)
                events.append(failures[i])
                continue
            if pinned[i]:
                result.append(body.with_state(velocity=np.zeros(3)))
                continue
            try:
                position, velocity, adjusted = clamp_state(new_positions[i], new_velocities[i], body.position)
                result.append(body.with_state(position=position, velocity=velocity))
            except Exception as exc:
                result.append(body)
                events.append(self._failure_event(body, exc))
                continue
            if adjusted:
                events.append(PhysicsErrorEvent(
                    kind=ErrorKind.NUMERIC_OVERFLOW,
                    message=f"Clamped non-finite or out-of-range state of {body.name!r}",
                    body_id=body.id,
                    integrator=self.name,
                    suggestion=SWITCH_TO_VERLET,
                ))
        return result, events

    def _failure_event(self, body: Body, exc: Exception) -> PhysicsErrorEvent:
        logger.debug("%s integrator failed on body %r: %s", self.name, body.id, exc)
        if isinstance(exc, ZeroDivisionError):
            kind = ErrorKind.DIVISION_BY_ZERO
            message = f"Division by zero while accelerating {body.name!r}: {exc}"
        else:
            kind = ErrorKind.INTEGRATOR_FAILURE
            message = f"Physics calculation error for {body.name!r}: {exc}"
        return PhysicsErrorEvent(
            kind=kind,
            message=message,
            body_id=body.id,
            integrator=self.name,
            suggestion=SWITCH_TO_VERLET,
        )

    @staticmethod
    def _invalid_reason(body: Body):
        if not (np.isfinite(body.mass) and body.mass > 0):
            return f"mass must be positive, got {body.mass}"
        if not (np.isfinite(body.radius) and body.radius > 0):
            return f"radius must be positive, got {body.radius}"
        if not (np.all(np.isfinite(body.position)) and np.all(np.isfinite(body.velocity))):
            return "non-finite position or velocity"
        return None
