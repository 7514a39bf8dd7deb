# World coordinate system: y axis points upwards, lengths in meters.
# Gravity is stored as a non-negative magnitude and acts along -y.
GRAVITY_ACCELERATION = 9.8
DEFAULT_FRICTION = 0.2

FLOOR_Y = 0.0
CEILING_Y = 1.23

# Horizontal/vertical distance within which a dragged mass snags a spring,
# and the horizontal distance past which an attached mass is pulled off.
GRABBING_DISTANCE = 0.1
DROPPING_DISTANCE = 0.1

# Spring parameters
SPRING_CONSTANT_RANGE = (5.0, 15.0)
DEFAULT_SPRING_CONSTANT = 9.0
SPRING_LENGTH_RANGE = (0.1, 0.5)
DEFAULT_SPRING_LENGTH = 0.5
DEFAULT_THICKNESS = 3.0
THICKNESS_SCALE = DEFAULT_THICKNESS / (DEFAULT_SPRING_LENGTH * DEFAULT_SPRING_CONSTANT)
SPRING_RECOIL_MASS = 0.01  # kg, inertia of an empty spring springing back to rest
SPRING_SETTLE_TOLERANCE = 1e-6

# Mass geometry
HEIGHT_RATIO = 2.5
HOOK_HEIGHT_RATIO = 0.75
DENSITY = 80.0
SCALING_FACTOR = 4.0

# Stepping
MAX_DT = 1.0
STEP_FORWARD_DT = 1.0 / 60.0
SLOW_MOTION_FACTOR = 8.0
RETURN_ANIMATION_RATE = 2.0

EPSILON = 1e-9


def cubic_in_out(t: float) -> float:
    """Cubic ease-in-out on [0, 1]."""
    if t < 0.5:
        return 4.0 * t ** 3
    return 1.0 - ((-2.0 * t + 2.0) ** 3) / 2.0


def check_in_range(name: str, value: float, value_range: tuple[float, float]) -> float:
    """Returns `value` if it lies in the closed range, raises ValueError otherwise."""
    low, high = value_range
    if not (low - EPSILON <= value <= high + EPSILON):
        raise ValueError(f"{name} must be within [{low}, {high}], got {value}.")
    return value


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
