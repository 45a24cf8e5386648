from __future__ import annotations

from typing import Dict, Optional

import numpy as np
from scipy.optimize import linprog

from ..schemas import DietProblem, DietSolution, SolveOptions


def solve_with_highs(problem: DietProblem, options: Optional[SolveOptions] = None) -> DietSolution:
    """Solve the same covering LP with SciPy's HiGHS backend, for cross-checking."""
    opts = options or SolveOptions()
    c = problem.costs()
    A = problem.contribution_matrix()
    b = problem.minimums()

    if c.size == 0:
        # linprog rejects an empty objective
        feasible = bool(np.all(b <= opts.tol))
        return DietSolution(
            status="optimal" if feasible else "infeasible",
            feasible=feasible,
            amounts={} if feasible else None,
            total_cost=0.0 if feasible else None,
            shadow_prices={cons.name: 0.0 for cons in problem.constraints} if feasible else None,
            iterations=0,
        )

    res = linprog(
        c,
        A_ub=-A if A.size else None,
        b_ub=-b if b.size else None,
        bounds=[(0.0, None)] * c.size,
        method="highs",
    )

    if not res.success:
        status = _map_status(res.status)
        return DietSolution(
            status=status,
            feasible=False,
            amounts=None,
            total_cost=None,
            shadow_prices=None,
            iterations=int(getattr(res, "nit", 0) or 0),
            message=res.message,
        )

    amounts = {var.name: max(0.0, float(value)) for var, value in zip(problem.variables, res.x)}
    return DietSolution(
        status="optimal",
        feasible=True,
        amounts=amounts,
        total_cost=float(sum(amounts[var.name] * var.cost for var in problem.variables)),
        shadow_prices=_extract_duals(problem, res),
        iterations=int(getattr(res, "nit", 0) or 0),
        message=res.message or "",
    )


def _extract_duals(problem: DietProblem, res) -> Dict[str, float]:
    duals: Dict[str, float] = {}
    ineqlin = getattr(res, "ineqlin", None)
    if ineqlin is None or not problem.constraints:
        return {cons.name: 0.0 for cons in problem.constraints}
    # marginals of the negated (<=) rows are non-positive
    for cons, value in zip(problem.constraints, ineqlin.marginals):
        duals[cons.name] = abs(float(value))
    return duals


def _map_status(code: int) -> str:
    mapping = {
        0: "optimal",
        1: "iteration_limit",
        2: "infeasible",
        3: "unbounded",
    }
    return mapping.get(code, "iteration_limit")
