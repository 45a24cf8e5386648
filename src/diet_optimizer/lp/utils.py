import numpy as np
from typing import Dict, List, Any, Mapping

from .tableau import Tableau, EPSILON
from ..schemas import DietProblem


def build_tableau(problem: DietProblem, tol: float = EPSILON) -> Tableau:
    """
    Seed the simplex tableau for ``problem``: one row per minimum requirement,
    one surplus column per requirement, costs in the objective row.
    """

    return Tableau.from_arrays(
        problem.costs(),
        problem.contribution_matrix(),
        problem.minimums(),
        tol=tol,
    )


def constraint_levels(problem: DietProblem, amounts: Mapping[str, float]) -> Dict[str, float]:
    """Left-hand side of each requirement for the given amounts."""

    x = np.array([amounts.get(var.name, 0.0) for var in problem.variables], dtype=float)
    levels = problem.contribution_matrix() @ x if problem.constraints else np.zeros(0)
    return {cons.name: float(level) for cons, level in zip(problem.constraints, levels)}


def violated_constraints(problem: DietProblem, amounts: Mapping[str, float], tol: float = EPSILON) -> List[str]:
    levels = constraint_levels(problem, amounts)
    return [cons.name for cons in problem.constraints if levels[cons.name] < cons.minimum - tol]


def analyze_infeasibility(problem: DietProblem) -> Dict[str, Any]:
    """Very small IIS-style heuristic: drop each requirement and re-solve."""

    from .simplex import simplex_solve  # local import to avoid cycle
    from ..schemas import SolveOptions

    solution = simplex_solve(problem, SolveOptions())
    if solution.status != "infeasible":
        return {
            "status": solution.status,
            "message": solution.message or "Problem is not infeasible.",
            "conflicting_constraints": [],
            "uncovered_constraints": [],
            "suggestions": [],
        }

    contributions = problem.contribution_matrix()
    uncovered = [
        cons.name
        for idx, cons in enumerate(problem.constraints)
        if cons.minimum > 0 and not np.any(contributions[idx] > 0)
    ]

    conflicts: List[str] = []
    for idx, cons in enumerate(problem.constraints):
        sub_problem = problem.model_copy(deep=True)
        sub_problem.constraints = problem.constraints[:idx] + problem.constraints[idx + 1 :]
        for var in sub_problem.variables:
            var.contributions = var.contributions[:idx] + var.contributions[idx + 1 :]
        sub_solution = simplex_solve(sub_problem, SolveOptions())
        if sub_solution.status != "infeasible":
            conflicts.append(cons.name)

    suggestions = []
    if uncovered:
        suggestions.append("Add a variable that contributes to the uncovered requirements, or lower their minimums.")
    if conflicts:
        suggestions.append("Relax or inspect the conflicting requirements above.")
    if not suggestions:
        suggestions.append("Several requirements are jointly unattainable; consider relaxing minimums.")

    return {
        "status": "infeasible",
        "message": "Detected infeasibility; listed requirements critical to infeasibility.",
        "conflicting_constraints": conflicts,
        "uncovered_constraints": uncovered,
        "suggestions": suggestions,
    }
