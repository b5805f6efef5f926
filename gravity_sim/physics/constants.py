"""Physical constants (SI units) and engine thresholds."""

GRAVITATIONAL_CONSTANT = 6.67430e-11  # m^3 kg^-1 s^-2
SPEED_OF_LIGHT = 299792458.0  # m/s

ASTRONOMICAL_UNIT = 149.6e9  # m
LIGHT_YEAR = 9.461e15  # m
PARSEC = 3.086e16  # m

SOLAR_MASS = 1.989e30  # kg
EARTH_MASS = 5.972e24
MARS_MASS = 6.39e23
JUPITER_MASS = 1.898e27
MOON_MASS = 7.342e22

SOLAR_RADIUS = 6.9634e8  # m
EARTH_RADIUS = 6.371e6
MARS_RADIUS = 3.3895e6
JUPITER_RADIUS = 6.9911e7
MOON_RADIUS = 1.7374e6

SECONDS_PER_DAY = 86400.0
FRAME_TIME_STEP = 0.016  # one 60 fps frame

# Pairs closer than this (squared distance, m^2) exert no force
MIN_DISTANCE_SQUARED = 1e-10

# Numeric guard bounds applied after every integrator step
MAX_VELOCITY_COMPONENT = 1e10  # m/s
MAX_POSITION_COMPONENT = 1e20  # m

# Orbit stabilizer
STABILIZE_SPEED_TOLERANCE = 0.05
STABILIZE_MIN_DISTANCE_FACTOR = 2.0  # x (star radius + body radius)
SAFE_DISTANCE_FACTOR = 3.0  # x star radius

# Orbital path buffer
PATH_MAX_POINTS = 500
PATH_SAMPLE_EVERY = 10
PATH_MIN_DISPLACEMENT = 1e9  # m

# Velocity given to a non-star body when the whole system is at rest
BOOTSTRAP_VELOCITY = (0.0, 1000.0, 0.0)  # m/s
