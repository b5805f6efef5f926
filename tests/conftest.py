"""Shared fixtures: a small Sun-Earth-Mars system in SI units."""

import pytest
from tests.helpers import make_body
from gravity_sim.physics.constants import (
    EARTH_MASS, EARTH_RADIUS, MARS_MASS, MARS_RADIUS, SOLAR_MASS, SOLAR_RADIUS,
)


@pytest.fixture
def sun():
    return make_body("sun", SOLAR_MASS, SOLAR_RADIUS, body_type="star", color="#FFB142", texture="sun.jpg")


@pytest.fixture
def earth():
    return make_body("earth", EARTH_MASS, EARTH_RADIUS, (1.496e11, 0.0, 0.0), (0.0, 29780.0, 0.0),
                     color="#1289A7", texture="earth.jpg")


@pytest.fixture
def mars():
    return make_body("mars", MARS_MASS, MARS_RADIUS, (2.279e11, 0.0, 0.0), (0.0, 24070.0, 0.0),
                     color="#D0312D")


@pytest.fixture
def sun_earth_mars(sun, earth, mars):
    return [sun, earth, mars]
