"""3-component vector arithmetic on NumPy arrays.

All functions are pure: inputs are never modified and a new float64
array of shape (3,) is returned for vector results.
"""

import numpy as np
from gravity_sim.errors import DivisionByZeroError


def vec3(x=0.0, y=0.0, z=0.0) -> np.ndarray:
    """Build a vector from components."""
    return np.array([x, y, z], dtype=np.float64)


def zero() -> np.ndarray:
    return np.zeros(3, dtype=np.float64)


def as_vector(data) -> np.ndarray:
    """Convert a sequence of 3 numbers to a float64 vector."""
    vector = np.array(data, dtype=np.float64).reshape(-1)
    if vector.shape != (3,):
        raise ValueError(f"Expected 3 components, got {vector.shape[0]}")
    return vector


def add(*vectors) -> np.ndarray:
    """Sum any number of vectors (zero vector when called without arguments)."""
    result = zero()
    for v in vectors:
        result = result + np.asarray(v, dtype=np.float64)
    return result


def subtract(v1, v2) -> np.ndarray:
    return np.subtract(v1, v2, dtype=np.float64)


def multiply(vector, scalar: float) -> np.ndarray:
    return np.multiply(vector, scalar, dtype=np.float64)


def divide(vector, scalar: float) -> np.ndarray:
    """Divide a vector by a scalar.

    Raises:
        DivisionByZeroError: If scalar is exactly zero
    """
    if scalar == 0:
        raise DivisionByZeroError("Cannot divide vector by zero")
    return np.divide(vector, scalar, dtype=np.float64)


def magnitude(vector) -> float:
    return float(np.sqrt(magnitude_squared(vector)))


def magnitude_squared(vector) -> float:
    v = np.asarray(vector, dtype=np.float64)
    return float(np.dot(v, v))


def normalize(vector) -> np.ndarray:
    """Unit vector in the direction of vector; zero vector if its length is 0."""
    length = magnitude(vector)
    if length == 0:
        return zero()
    return divide(vector, length)


def dot(v1, v2) -> float:
    return float(np.dot(v1, v2))


def cross(v1, v2) -> np.ndarray:
    return np.cross(np.asarray(v1, dtype=np.float64), np.asarray(v2, dtype=np.float64))


def distance(p1, p2) -> float:
    return magnitude(subtract(p2, p1))


def distance_squared(p1, p2) -> float:
    return magnitude_squared(subtract(p2, p1))


def lerp(v1, v2, t: float) -> np.ndarray:
    """Linear interpolation: v1 at t=0, v2 at t=1."""
    start = np.asarray(v1, dtype=np.float64)
    return start + (np.asarray(v2, dtype=np.float64) - start) * t


def angle(v1, v2) -> float:
    """Angle between two vectors in radians (0 if either is the zero vector)."""
    mag_product = magnitude(v1) * magnitude(v2)
    if mag_product == 0:
        return 0.0
    # Rounding can push the cosine slightly outside [-1, 1]
    cos_angle = np.clip(dot(v1, v2) / mag_product, -1.0, 1.0)
    return float(np.arccos(cos_angle))
