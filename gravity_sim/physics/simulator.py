"""Main simulator controller."""

from typing import Any, Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple, Union
import logging

import numpy as np

from gravity_sim.errors import ErrorKind, ErrorRateLimiter, PhysicsErrorEvent, SWITCH_TO_VERLET
from gravity_sim.physics.body import Body, validate_bodies
from gravity_sim.physics.collisions import merge_collisions
from gravity_sim.physics.constants import BOOTSTRAP_VELOCITY
from gravity_sim.physics.diagnostics import Diagnostics
from gravity_sim.physics.forces import resolve_collision
from gravity_sim.physics.integrators import get_integrator
from gravity_sim.physics.integrators.base import Integrator
from gravity_sim.physics.integrators.verlet import VerletIntegrator
from gravity_sim.physics.paths import OrbitalPathBuffer
from gravity_sim.physics.stabilizer import enforce_safe_distances, stabilize_orbits
from gravity_sim.utils.config import SimulationConfig

logger = logging.getLogger(__name__)

# Step reduction used when retrying a failed integrator with Verlet
FALLBACK_DT_FACTOR = 0.1


class Simulator:
    """Main simulation controller.

    Orchestrates one tick at a time: integration, collision merging, drift
    correction and path recording. Has two states, running and paused; a
    paused simulator leaves its state untouched.
    """

    def __init__(
        self,
        config: Optional[SimulationConfig] = None,
        bodies: Optional[Iterable[Union[Body, Dict[str, Any]]]] = None,
        rate_limiter: Optional[ErrorRateLimiter] = None
    ):
        """Initialize simulator.

        Args:
            config: Simulation configuration (default: SimulationConfig())
            bodies: Optional initial bodies (Body objects or plain records)
            rate_limiter: Limits repeated error reports (default: new ErrorRateLimiter)
        """
        self.config = (config or SimulationConfig()).validate()
        self.integrator: Integrator = get_integrator(self.config.integration_method, self.config.pin_stars)
        self.diagnostics = Diagnostics(self.config.gravitational_constant)
        self.rate_limiter = rate_limiter or ErrorRateLimiter()
        self.paths = OrbitalPathBuffer()

        self._bodies: List[Body] = []
        self.time = 0.0
        self.step_count = 0
        self.paused = False

        # Outcome of the most recent tick
        self.events: List[PhysicsErrorEvent] = []
        self.last_merges: List[Tuple[Hashable, Hashable, Hashable]] = []

        # Callbacks
        self.on_step_callback: Optional[Callable] = None
        self.on_error_callback: Optional[Callable] = None

        if bodies is not None:
            self.load_bodies(bodies)

    @property
    def bodies(self) -> List[Body]:
        return list(self._bodies)

    def load_bodies(self, bodies: Iterable[Union[Body, Dict[str, Any]]]):
        """Replace the body set.

        Validates the bodies, clears path history and resets the clock.

        Args:
            bodies: Body objects or plain records

        Raises:
            ConfigurationError: If a body is invalid or ids repeat
        """
        loaded = [b if isinstance(b, Body) else Body.from_record(b) for b in bodies]
        self._bodies = validate_bodies(loaded)
        self.paths.clear()
        self.time = 0.0
        self.step_count = 0
        self.events = []
        self.last_merges = []
        logger.info("Loaded %d bodies", len(self._bodies))

    def configure(self, **changes):
        """Apply configuration changes between ticks.

        Args:
            **changes: SimulationConfig fields to replace
        """
        old = self.config
        self.config = old.with_changes(**changes)
        if (self.config.integration_method != old.integration_method
                or self.config.pin_stars != old.pin_stars):
            self.integrator = get_integrator(self.config.integration_method, self.config.pin_stars)
        self.diagnostics.G = self.config.gravitational_constant

    def step(self) -> List[Body]:
        """Perform one simulation tick.

        Returns:
            Bodies after the tick (unchanged while paused)
        """
        if self.paused or not self._bodies:
            return self.bodies

        config = self.config
        G = config.gravitational_constant
        dt = config.dt
        tick = self.step_count + 1
        events: List[PhysicsErrorEvent] = []

        bodies = self._integrate(self._bodies, dt, G, events)

        merges = []
        if config.collisions_enabled:
            bodies, merges = merge_collisions(bodies)

        if config.stabilize_interval and tick % config.stabilize_interval == 0:
            bodies = list(stabilize_orbits(bodies, G))
        if config.enforce_safe_distances:
            bodies = list(enforce_safe_distances(bodies))

        if config.orbital_paths_enabled:
            self.paths.record(bodies)
        self.paths.prune(body.id for body in bodies)

        bodies = bootstrap_motion(bodies)

        self._bodies = bodies
        self.time += dt
        self.step_count = tick
        self.events = events
        self.last_merges = merges
        self._publish(events)

        if config.diagnostics_interval and tick % config.diagnostics_interval == 0:
            self._log_stability_table()

        if self.on_step_callback:
            self.on_step_callback(self)
        return self.bodies

    def _integrate(self, bodies: List[Body], dt: float, G: float, events: List[PhysicsErrorEvent]) -> List[Body]:
        """Run the integrator, retrying with a reduced Verlet step if it raises."""
        try:
            new_bodies, step_events = self.integrator.step(bodies, dt, G)
        except Exception as exc:
            events.append(PhysicsErrorEvent(
                kind=ErrorKind.INTEGRATOR_FAILURE,
                message=f"The {self.integrator.name} integrator failed: {exc}",
                integrator=self.integrator.name,
                suggestion=SWITCH_TO_VERLET,
            ))
            if self.integrator.name == "verlet":
                return list(bodies)
            logger.warning("Falling back to verlet integrator with reduced step")
            fallback = VerletIntegrator(pin_stars=self.config.pin_stars)
            try:
                new_bodies, step_events = fallback.step(bodies, dt * FALLBACK_DT_FACTOR, G)
            except Exception as fallback_exc:
                events.append(PhysicsErrorEvent(
                    kind=ErrorKind.INTEGRATOR_FAILURE,
                    message=f"Fallback verlet integrator failed: {fallback_exc}",
                    integrator=fallback.name,
                ))
                return list(bodies)
        events.extend(step_events)
        return new_bodies

    def _publish(self, events: List[PhysicsErrorEvent]):
        """Log and forward events that pass the rate limiter."""
        for event in events:
            if not self.rate_limiter.should_report(event.kind, event.message):
                continue
            logger.warning("[%s] body=%r: %s", event.kind.value, event.body_id, event.message)
            if self.on_error_callback:
                self.on_error_callback(event)

    def _log_stability_table(self):
        """Log K, U, E and total momentum."""
        K, U, E = self.diagnostics.compute_energies(self._bodies)
        p = np.linalg.norm(self.diagnostics.total_momentum(self._bodies))
        logger.debug(
            "[Diag] step=%d t=%.3e K=%.6e U=%.6e E=%.6e |p|=%.6e n=%d",
            self.step_count, self.time, K, U, E, p, len(self._bodies),
        )

    def run(self, n_steps: int) -> List[Body]:
        """Run simulation for specified number of steps (stops early if paused).

        Args:
            n_steps: Number of steps to run
        """
        for _ in range(n_steps):
            if self.paused:
                break
            self.step()
        return self.bodies

    def pause(self):
        """Pause simulation."""
        self.paused = True

    def resume(self):
        """Resume simulation."""
        self.paused = False

    def set_integrator(self, name: str):
        """Select integrator by name ('euler', 'verlet', 'rk4')."""
        self.configure(integration_method=name)

    def get_state(self) -> Dict[str, Any]:
        """Get current simulation state.

        Returns:
            Dict with bodies (plain records), paths, time and step_count
        """
        return {
            "bodies": [body.to_record() for body in self._bodies],
            "paths": {body_id: path.tolist() for body_id, path in self.paths.as_arrays().items()},
            "time": self.time,
            "step_count": self.step_count,
        }

    def get_energy(self) -> float:
        """Get current total energy (kinetic + potential)."""
        return self.diagnostics.compute_energies(self._bodies)[2]


def bootstrap_motion(bodies: Sequence[Body]) -> List[Body]:
    """Give the first non-star body a small velocity if nothing is moving."""
    bodies = list(bodies)
    if not bodies or any(np.any(body.velocity != 0) for body in bodies):
        return bodies
    for index, body in enumerate(bodies):
        if not body.is_star:
            bodies[index] = body.with_state(velocity=BOOTSTRAP_VELOCITY)
            logger.info("All bodies at rest; gave %r an initial velocity", body.id)
            break
    return bodies


def step(bodies: Sequence[Body], config: Optional[SimulationConfig] = None) -> List[Body]:
    """Advance bodies by one integrator step (no collisions, paths or correction).

    Frozen or clamped bodies are logged as warnings; use ``Integrator.step``
    directly to receive the events.

    Args:
        bodies: Body snapshot (not modified)
        config: Simulation configuration (default: SimulationConfig())

    Returns:
        New bodies, same length and order
    """
    config = config or SimulationConfig()
    integrator = get_integrator(config.integration_method, config.pin_stars)
    new_bodies, events = integrator.step(bodies, config.dt, config.gravitational_constant)
    for event in events:
        logger.warning("[%s] body=%r: %s", event.kind.value, event.body_id, event.message)
    return new_bodies


def merge(a: Body, b: Body) -> Body:
    """Merge two colliding bodies (see resolve_collision)."""
    return resolve_collision(a, b)


def stabilize(bodies: Sequence[Body], G: float) -> Sequence[Body]:
    """Correct orbital speed drift (see stabilize_orbits)."""
    return stabilize_orbits(bodies, G)
