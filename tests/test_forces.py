"""Tests for the force model."""

import math
import numpy as np
import pytest
from gravity_sim.errors import DivisionByZeroError
from gravity_sim.physics.forces import (
    acceleration, are_colliding, escape_velocity, gravitational_force, net_force,
    orbital_velocity, resolve_collision,
)
from gravity_sim.physics.constants import GRAVITATIONAL_CONSTANT as G
from tests.helpers import make_body


def test_force_magnitude_and_antisymmetry():
    """Test gravitational force magnitude and direction."""
    a = make_body("a", 5.0e24, position=(0.0, 0.0, 0.0))
    b = make_body("b", 7.0e22, position=(3.0e8, 4.0e8, 0.0))
    f_ab = gravitational_force(a, b, G)
    f_ba = gravitational_force(b, a, G)
    
    d = 5.0e8
    expected = G * a.mass * b.mass / d ** 2
    assert np.linalg.norm(f_ab) == pytest.approx(expected, rel=1e-12)
    assert np.allclose(f_ab, -f_ba)
    # Force on a points toward b
    assert np.allclose(f_ab / np.linalg.norm(f_ab), [0.6, 0.8, 0.0])


def test_force_zero_when_coincident():
    """Test coincident bodies exert no force."""
    a = make_body("a", 1.0e20)
    b = make_body("b", 1.0e20, position=(1e-6, 0.0, 0.0))
    assert np.array_equal(gravitational_force(a, b, G), [0, 0, 0])
    c = make_body("c", 1.0e20)
    assert np.array_equal(gravitational_force(a, c, G), [0, 0, 0])


def test_net_force_excludes_self_and_sums():
    """Test net force."""
    center = make_body("c", 1.0)
    left = make_body("l", 1.0, position=(-1.0, 0.0, 0.0))
    right = make_body("r", 1.0, position=(1.0, 0.0, 0.0))
    bodies = [center, left, right]
    
    # Symmetric pull cancels
    assert np.allclose(net_force(center, bodies, 1.0), [0, 0, 0])
    # Left body feels center (d=1) and right (d=2), both toward +x
    assert np.allclose(net_force(left, bodies, 1.0), [1.0 + 0.25, 0.0, 0.0])


def test_acceleration():
    """Test acceleration from force."""
    assert np.allclose(acceleration([10.0, 0.0, -4.0], 2.0), [5.0, 0.0, -2.0])
    with pytest.raises(DivisionByZeroError):
        acceleration([1.0, 0.0, 0.0], 0.0)


def test_orbital_and_escape_velocity():
    """Test orbital and escape velocity."""
    v = orbital_velocity(1.989e30, 1.496e11, G)
    assert v == pytest.approx(29784.0, rel=1e-3)
    assert escape_velocity(1.989e30, 1.496e11, G) == pytest.approx(v * math.sqrt(2))


def test_are_colliding():
    """Test sphere overlap."""
    a = make_body("a", radius=2.0)
    b = make_body("b", radius=2.0, position=(3.0, 0.0, 0.0))
    c = make_body("c", radius=0.5, position=(10.0, 0.0, 0.0))
    assert are_colliding(a, b)
    assert not are_colliding(a, c)
    # Touching exactly is not a collision
    d = make_body("d", radius=1.0, position=(3.0, 0.0, 0.0))
    assert not are_colliding(a, d)


def test_resolve_collision_conserves_mass_and_momentum():
    """Test inelastic merge conservation."""
    a = make_body("a", 3.0, 2.0, (1.0, 0.0, 0.0), (1.0, 2.0, 0.0), color="red", texture="a.png")
    b = make_body("b", 5.0, 3.0, (2.0, 0.0, 0.0), (-1.0, 0.0, 4.0), body_type="moon", color="blue")
    merged = resolve_collision(a, b)
    
    assert merged.mass == a.mass + b.mass
    assert np.allclose(merged.mass * merged.velocity, a.mass * a.velocity + b.mass * b.velocity)
    assert merged.radius == pytest.approx((2.0 ** 3 + 3.0 ** 3) ** (1 / 3))
    # Heavier body's identity, metadata and position
    assert merged.id == "b"
    assert merged.type.value == "moon"
    assert merged.color == "blue"
    assert merged.texture is None
    assert np.array_equal(merged.position, b.position)


def test_resolve_collision_tie_prefers_first_argument():
    """Test equal-mass merge keeps the first body."""
    a = make_body("a", 2.0, position=(0.0, 0.0, 0.0))
    b = make_body("b", 2.0, position=(1.0, 0.0, 0.0))
    assert resolve_collision(a, b).id == "a"
    assert resolve_collision(b, a).id == "b"


def test_collision_scenario_yields_single_body():
    """Test colliding bodies end as one."""
    a = make_body("a", 1.0e20, 5.0e5, (0.0, 0.0, 0.0))
    b = make_body("b", 2.0e20, 7.0e5, (1.0e6, 0.0, 0.0))
    assert are_colliding(a, b)
    merged = resolve_collision(a, b)
    assert merged.mass == 3.0e20
    assert merged.radius == pytest.approx((5.0e5 ** 3 + 7.0e5 ** 3) ** (1 / 3))
