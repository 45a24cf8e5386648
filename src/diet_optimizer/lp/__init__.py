"""Tableau simplex engine for minimum-requirement linear programs."""

from .simplex import simplex_solve, solve
from .tableau import Tableau
from .utils import analyze_infeasibility, build_tableau

__all__ = ["simplex_solve", "solve", "Tableau", "analyze_infeasibility", "build_tableau"]
