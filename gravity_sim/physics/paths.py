"""Bounded trailing history of body positions for path rendering."""

from collections import deque
from typing import Deque, Dict, Hashable, Iterable, List

import numpy as np

from gravity_sim.physics import vector
from gravity_sim.physics.body import Body
from gravity_sim.physics.constants import PATH_MAX_POINTS, PATH_MIN_DISPLACEMENT, PATH_SAMPLE_EVERY


class OrbitalPathBuffer:
    """Per-body deque of past positions, oldest first.

    A position is recorded when the body's path is empty, on every
    ``sample_every``-th observation of that body, or when it moved more
    than ``min_displacement`` since the last recorded sample. Each path
    keeps at most ``max_points`` samples.
    """

    def __init__(
        self,
        max_points: int = PATH_MAX_POINTS,
        sample_every: int = PATH_SAMPLE_EVERY,
        min_displacement: float = PATH_MIN_DISPLACEMENT
    ):
        self.max_points = max_points
        self.sample_every = sample_every
        self.min_displacement = min_displacement
        self._paths: Dict[Hashable, Deque[np.ndarray]] = {}
        self._observations: Dict[Hashable, int] = {}

    def record(self, bodies: Iterable[Body]):
        """Observe the current position of every body."""
        for body in bodies:
            path = self._paths.get(body.id)
            if path is None:
                path = deque(maxlen=self.max_points)
                self._paths[body.id] = path
            count = self._observations.get(body.id, 0)
            self._observations[body.id] = count + 1

            if (
                not path
                or count % self.sample_every == 0
                or vector.distance(path[-1], body.position) > self.min_displacement
            ):
                path.append(body.position.copy())

    def prune(self, active_ids: Iterable[Hashable]):
        """Drop paths of bodies that no longer exist."""
        active = set(active_ids)
        for body_id in list(self._paths):
            if body_id not in active:
                del self._paths[body_id]
                self._observations.pop(body_id, None)

    def clear(self):
        self._paths.clear()
        self._observations.clear()

    def get(self, body_id: Hashable) -> List[np.ndarray]:
        return list(self._paths.get(body_id, ()))

    def as_arrays(self) -> Dict[Hashable, np.ndarray]:
        """Every path as an (m, 3) array, for renderers."""
        return {
            body_id: np.array(path, dtype=np.float64).reshape(-1, 3)
            for body_id, path in self._paths.items()
        }

    def __contains__(self, body_id) -> bool:
        return body_id in self._paths

    def __len__(self) -> int:
        return len(self._paths)
