import math
from typing import Tuple

from spring_lab.core.utils import EPSILON


def critical_damping(mass: float, spring_constant: float) -> float:
    """Damping coefficient at which m u'' + c u' + k u = 0 stops oscillating."""
    return 2.0 * math.sqrt(spring_constant * mass)


def damped_oscillator_step(offset: float, velocity: float, mass: float,
                           spring_constant: float, damping: float, dt: float) -> Tuple[float, float]:
    """
    Advances the free damped oscillator  m u'' + c u' + k u = 0  by `dt`.

    `offset` is measured from the equilibrium point, so a constant load such as
    gravity is handled by the caller shifting the origin. The closed-form solution
    is used instead of a numerical integrator: with c == 0 the quantity
    0.5*m*v**2 + 0.5*k*u**2 is preserved up to round-off for any dt.

    Args:
        offset: u(0), distance from equilibrium.
        velocity: u'(0).
        mass: Oscillating mass (> 0).
        spring_constant: k (> 0).
        damping: c (>= 0).
        dt: Time to advance.

    Returns:
        (u(dt), u'(dt))
    """
    if dt <= 0.0:
        return offset, velocity

    gamma = damping / (2.0 * mass)
    omega0_squared = spring_constant / mass
    discriminant = gamma * gamma - omega0_squared

    if abs(discriminant) <= EPSILON * max(1.0, omega0_squared):
        # Critically damped: u = e^{-gamma t} (u0 + (v0 + gamma u0) t)
        decay = math.exp(-gamma * dt)
        b = velocity + gamma * offset
        new_offset = decay * (offset + b * dt)
        new_velocity = decay * (velocity - gamma * b * dt)
    elif discriminant < 0.0:
        # Underdamped
        omega_d = math.sqrt(-discriminant)
        decay = math.exp(-gamma * dt)
        cos_term = math.cos(omega_d * dt)
        sin_term = math.sin(omega_d * dt)
        new_offset = decay * (offset * cos_term + (velocity + gamma * offset) / omega_d * sin_term)
        new_velocity = decay * (velocity * cos_term - (omega0_squared * offset + gamma * velocity) / omega_d * sin_term)
    else:
        # Overdamped: two real roots r1 > r2
        root = math.sqrt(discriminant)
        r1 = -gamma + root
        r2 = -gamma - root
        c1 = (velocity - r2 * offset) / (r1 - r2)
        c2 = offset - c1
        e1 = math.exp(r1 * dt)
        e2 = math.exp(r2 * dt)
        new_offset = c1 * e1 + c2 * e2
        new_velocity = r1 * c1 * e1 + r2 * c2 * e2

    return new_offset, new_velocity
