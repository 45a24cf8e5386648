"""Diet Optimizer: tableau simplex for minimum-requirement linear programs."""

from .exceptions import InvalidProblemError
from .lp.simplex import simplex_solve, solve
from .schemas import Constraint, DietProblem, DietSolution, SolveOptions, Variable

__all__ = [
    "Constraint",
    "DietProblem",
    "DietSolution",
    "InvalidProblemError",
    "SolveOptions",
    "Variable",
    "simplex_solve",
    "solve",
]
