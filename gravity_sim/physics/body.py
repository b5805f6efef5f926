"""Celestial body data model and plain-record conversion."""

import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Hashable, Iterable, List, Optional

import numpy as np

from gravity_sim.errors import ConfigurationError


class BodyType(str, Enum):
    """Closed set of body kinds."""
    STAR = "star"
    PLANET = "planet"
    MOON = "moon"
    ASTEROID = "asteroid"
    COMET = "comet"
    BLACKHOLE = "blackhole"


REQUIRED_FIELDS = ("id", "name", "type", "mass", "radius", "position", "velocity")
OPTIONAL_FIELDS = ("color", "texture")


def _frozen_vector(data) -> np.ndarray:
    vector = np.array(data, dtype=np.float64).reshape(-1)
    vector.setflags(write=False)
    return vector


@dataclass(frozen=True, eq=False)
class Body:
    """A massive sphere with position and velocity.

    Bodies are immutable: integrators and collision handling build new
    instances with ``with_state`` or ``dataclasses.replace``. ``color`` and
    ``texture`` are rendering metadata carried through untouched.

    Attributes:
        id: Unique identifier, stable across ticks
        name: Display name
        type: Body kind (stars act as fixed anchors by default)
        mass: Mass in kg
        radius: Radius in m
        position: (3,) position in m
        velocity: (3,) velocity in m/s
        color: Optional opaque color value
        texture: Optional opaque texture reference
    """
    id: Hashable
    name: str
    type: BodyType
    mass: float
    radius: float
    position: np.ndarray
    velocity: np.ndarray
    color: Optional[Any] = None
    texture: Optional[Any] = None

    def __post_init__(self):
        object.__setattr__(self, "type", BodyType(self.type))
        object.__setattr__(self, "mass", float(self.mass))
        object.__setattr__(self, "radius", float(self.radius))
        object.__setattr__(self, "position", _frozen_vector(self.position))
        object.__setattr__(self, "velocity", _frozen_vector(self.velocity))

    @property
    def is_star(self) -> bool:
        return self.type is BodyType.STAR

    @property
    def momentum(self) -> np.ndarray:
        return self.mass * self.velocity

    def with_state(self, position=None, velocity=None) -> "Body":
        """Return a copy with a new position and/or velocity."""
        changes = {}
        if position is not None:
            changes["position"] = position
        if velocity is not None:
            changes["velocity"] = velocity
        return replace(self, **changes) if changes else self

    def validate(self) -> "Body":
        """Check physical invariants.

        Returns:
            self, for chaining

        Raises:
            ConfigurationError: If mass/radius are not strictly positive or the
                state vectors are malformed or non-finite
        """
        if self.position.shape != (3,) or self.velocity.shape != (3,):
            raise ConfigurationError(f"Body {self.id!r}: position and velocity must have 3 components")
        if not (math.isfinite(self.mass) and self.mass > 0):
            raise ConfigurationError(f"Body {self.id!r}: mass must be positive, got {self.mass}")
        if not (math.isfinite(self.radius) and self.radius > 0):
            raise ConfigurationError(f"Body {self.id!r}: radius must be positive, got {self.radius}")
        if not (np.all(np.isfinite(self.position)) and np.all(np.isfinite(self.velocity))):
            raise ConfigurationError(f"Body {self.id!r}: position and velocity must be finite")
        return self

    def to_record(self) -> Dict[str, Any]:
        """Convert to the plain record format used by import/export."""
        record = {
            "id": self.id,
            "name": self.name,
            "type": self.type.value,
            "mass": self.mass,
            "radius": self.radius,
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist(),
        }
        for key in OPTIONAL_FIELDS:
            value = getattr(self, key)
            if value is not None:
                record[key] = value
        return record

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "Body":
        """Build a validated body from a plain record.

        Raises:
            ConfigurationError: If a field is missing or invalid
        """
        body_id = record.get("id")
        missing = [key for key in REQUIRED_FIELDS if record.get(key) is None]
        if missing:
            raise ConfigurationError(f"Body {body_id!r} is missing required field(s): {', '.join(missing)}")
        for key in ("position", "velocity"):
            value = record[key]
            if isinstance(value, (str, bytes)) or np.size(value) != 3:
                raise ConfigurationError(f"Body {body_id!r} has an invalid {key} vector")
        try:
            body_type = BodyType(record["type"])
        except ValueError:
            allowed = [t.value for t in BodyType]
            raise ConfigurationError(f"Body {body_id!r} has unknown type {record['type']!r}. Allowed: {allowed}")
        try:
            body = cls(
                id=body_id,
                name=record["name"],
                type=body_type,
                mass=record["mass"],
                radius=record["radius"],
                position=record["position"],
                velocity=record["velocity"],
                color=record.get("color"),
                texture=record.get("texture"),
            )
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"Body {body_id!r} has a non-numeric field: {exc}") from exc
        return body.validate()


def validate_bodies(bodies: Iterable[Body]) -> List[Body]:
    """Validate every body and check that ids are unique."""
    bodies = list(bodies)
    seen = set()
    for body in bodies:
        body.validate()
        if body.id in seen:
            raise ConfigurationError(f"Duplicate body id {body.id!r}")
        seen.add(body.id)
    return bodies


def bodies_from_records(records: Iterable[Dict[str, Any]]) -> List[Body]:
    return validate_bodies(Body.from_record(record) for record in records)


def bodies_to_records(bodies: Iterable[Body]) -> List[Dict[str, Any]]:
    return [body.to_record() for body in bodies]
