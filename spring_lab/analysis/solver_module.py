import logging
from typing import Callable, Dict

import numpy as np
import sympy

logger = logging.getLogger(__name__)


class SolverModule:
    """
    Symbolic reference solutions for a mass hanging on a damped spring, using SymPy.

    The equation solved is ``m x'' + c x' + k x = -m g`` where ``x`` is the spring
    displacement (negative when stretched). Results are used to check the
    closed-form stepper in `spring_lab.physics.oscillator`.
    """

    def __init__(self):
        self.t = sympy.Symbol('t', real=True)
        self.x = sympy.Function('x')

    @staticmethod
    def _exact(value: float) -> sympy.Expr:
        # Rational coefficients keep dsolve on the exact branch for each damping regime
        return sympy.nsimplify(value, rational=True)

    def equation_of_motion(self, mass: float, spring_constant: float, damping: float,
                           gravity: float) -> sympy.Eq:
        m, k, c, g = (self._exact(v) for v in (mass, spring_constant, damping, gravity))
        x = self.x(self.t)
        return sympy.Eq(m * x.diff(self.t, 2) + c * x.diff(self.t) + k * x, -m * g)

    def equilibrium_displacement(self, mass: float, spring_constant: float, gravity: float) -> float:
        """Solves k x + m g = 0 for the resting displacement."""
        displacement = sympy.Symbol('displacement', real=True)
        solutions = sympy.solve(sympy.Eq(self._exact(spring_constant) * displacement,
                                         -self._exact(mass) * self._exact(gravity)), displacement)
        if len(solutions) != 1:
            raise ValueError(f"Expected a single equilibrium, got {solutions}.")
        return float(solutions[0])

    def solve_displacement(self, mass: float, spring_constant: float, damping: float, gravity: float,
                           initial_displacement: float, initial_velocity: float) -> sympy.Expr:
        """
        Returns x(t) as a SymPy expression in `self.t`.

        Raises:
            ValueError: If mass or spring constant is not positive, or damping is negative.
        """
        if mass <= 0 or spring_constant <= 0:
            raise ValueError("Mass and spring constant must be positive.")
        if damping < 0:
            raise ValueError("Damping must be non-negative.")

        equation = self.equation_of_motion(mass, spring_constant, damping, gravity)
        x = self.x(self.t)
        ics: Dict = {
            self.x(0): self._exact(initial_displacement),
            x.diff(self.t).subs(self.t, 0): self._exact(initial_velocity),
        }
        solution = sympy.dsolve(equation, x, ics=ics)
        logger.debug(f"Reference solution: {solution}")
        return solution.rhs

    def trajectory(self, mass: float, spring_constant: float, damping: float, gravity: float,
                   initial_displacement: float, initial_velocity: float) -> Callable[[np.ndarray], np.ndarray]:
        """
        Numeric form of the reference solution. The returned function maps an array
        of times to an array of (displacement, velocity) rows.
        """
        expression = self.solve_displacement(mass, spring_constant, damping, gravity,
                                              initial_displacement, initial_velocity)
        displacement = sympy.lambdify(self.t, expression, modules="numpy")
        velocity = sympy.lambdify(self.t, expression.diff(self.t), modules="numpy")

        def evaluate(times: np.ndarray) -> np.ndarray:
            times = np.asarray(times, dtype=float)
            x = np.broadcast_to(np.real(displacement(times)), times.shape)
            v = np.broadcast_to(np.real(velocity(times)), times.shape)
            return np.column_stack((x, v))

        return evaluate
