import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from .tableau import Tableau
from .utils import build_tableau, violated_constraints
from ..exceptions import InvalidProblemError
from ..schemas import Constraint, DietProblem, DietSolution, SolveOptions, TableauSnapshot, Variable

logger = logging.getLogger(__name__)


def simplex_solve(problem: DietProblem, opts: Optional[SolveOptions] = None) -> DietSolution:
    """
    Minimise total cost subject to at-least requirements with a single tableau.

    The objective row is seeded with the (non-negative) costs, so the starting
    basis is dual feasible: dual-simplex pivots first lift every requirement to
    its minimum, then primal pivots handle any remaining negative reduced cost.
    """

    opts = opts or SolveOptions()
    if not opts.allow_negative_costs:
        negative = [var.name for var in problem.variables if var.cost < 0]
        if negative:
            raise InvalidProblemError(
                f"Negative costs are not allowed (variables: {', '.join(negative)})."
            )

    tableau = build_tableau(problem, tol=opts.tol)
    snapshots: List[TableauSnapshot] = []
    logger.debug(
        "Built %dx%d tableau for '%s' (%d variables, %d requirements)",
        tableau.rows,
        tableau.cols,
        problem.name,
        len(problem.variables),
        len(problem.constraints),
    )
    if opts.verbose:
        print("\nInitial Tableau:")
        print(tableau.format())
    if opts.record_snapshots:
        snapshots.append(tableau.snapshot(0))

    status, iterations = _run_simplex(tableau, opts, snapshots)

    if status == "unbounded":
        if opts.verbose:
            print("\nProblem is unbounded!")
        logger.info("Problem '%s' is unbounded after %d pivots", problem.name, iterations)
        return _empty_solution("unbounded", iterations, "Unbounded.", snapshots)
    if status == "infeasible":
        if opts.verbose:
            print("\nProblem is infeasible!")
        logger.info("Problem '%s' is infeasible after %d pivots", problem.name, iterations)
        return _empty_solution("infeasible", iterations, "Infeasible.", snapshots)

    if status == "optimal":
        if opts.verbose:
            print("\nOptimal solution found!")
        logger.info("Problem '%s' solved to optimality in %d pivots", problem.name, iterations)
    else:
        if opts.verbose:
            print("\nIteration limit reached!")
        logger.warning(
            "Problem '%s' hit the iteration limit (%d); returning the current basis",
            problem.name,
            opts.max_iters,
        )

    return _extract_solution(problem, tableau, status, iterations, opts, snapshots)


def solve(
    variables: Sequence[Union[Variable, Mapping[str, Any]]],
    minimums: Sequence[float],
    verbose: bool = False,
    constraint_names: Optional[Sequence[str]] = None,
    options: Optional[SolveOptions] = None,
) -> DietSolution:
    """Solve from raw data; constraint names default to ``c1..cm``."""

    names = list(constraint_names) if constraint_names is not None else [
        f"c{idx + 1}" for idx in range(len(minimums))
    ]
    if len(names) != len(minimums):
        raise InvalidProblemError(
            f"Got {len(names)} constraint names for {len(minimums)} minimums."
        )
    try:
        problem = DietProblem(
            variables=[
                var if isinstance(var, Variable) else Variable.model_validate(var)
                for var in variables
            ],
            constraints=[
                Constraint(name=name, minimum=minimum) for name, minimum in zip(names, minimums)
            ],
        )
    except ValidationError as exc:
        raise InvalidProblemError(str(exc)) from exc

    opts = options or SolveOptions()
    if verbose and not opts.verbose:
        opts = opts.model_copy(update={"verbose": True})
    return simplex_solve(problem, opts)


def _run_simplex(tableau: Tableau, opts: SolveOptions, snapshots: List[TableauSnapshot]) -> tuple:
    iterations = 0

    while True:
        pivot_row = tableau.infeasible_row()
        if pivot_row is not None:
            pivot_col = tableau.dual_pivot_column(pivot_row)
            if pivot_col is None:
                return "infeasible", iterations
        else:
            pivot_col = tableau.pivot_column()
            if pivot_col is None:
                return "optimal", iterations
            pivot_row = tableau.pivot_row(pivot_col)
            if pivot_row is None:
                return "unbounded", iterations

        if iterations >= opts.max_iters:
            return "iteration_limit", iterations

        logger.debug("Pivot %d: row %d, column %d", iterations + 1, pivot_row, pivot_col)
        tableau.pivot(pivot_row, pivot_col)
        iterations += 1

        if opts.verbose:
            print(f"\nIteration {iterations}: Pivot at row {pivot_row}, column {pivot_col}")
            print(tableau.format())
        if opts.record_snapshots:
            snapshots.append(tableau.snapshot(iterations, pivot_row, pivot_col))


def _extract_solution(
    problem: DietProblem,
    tableau: Tableau,
    status: str,
    iterations: int,
    opts: SolveOptions,
    snapshots: List[TableauSnapshot],
) -> DietSolution:
    amounts: Dict[str, float] = {}
    for j, var in enumerate(problem.variables):
        row = tableau.basic_row(j)
        amounts[var.name] = max(0.0, float(tableau.matrix[row, -1])) if row is not None else 0.0

    total_cost = sum(amounts[var.name] * var.cost for var in problem.variables)

    shadow_prices: Dict[str, float] = {}
    for i, cons in enumerate(problem.constraints):
        shadow_prices[cons.name] = abs(float(tableau.objective[tableau.slack_column(i)]))

    if status == "optimal":
        feasible = True
        message = ""
    else:
        violated = violated_constraints(problem, amounts, opts.tol)
        feasible = not violated
        message = f"Hit iteration limit ({opts.max_iters}); solution may not be optimal."
        if violated:
            message += f" Unmet requirements: {', '.join(violated)}."

    return DietSolution(
        status=status,
        feasible=feasible,
        amounts=amounts,
        total_cost=float(total_cost),
        shadow_prices=shadow_prices,
        iterations=iterations,
        message=message,
        snapshots=snapshots,
    )


def _empty_solution(status: str, iterations: int, message: str, snapshots: List[TableauSnapshot]) -> DietSolution:
    return DietSolution(
        status=status,
        feasible=False,
        amounts=None,
        total_cost=None,
        shadow_prices=None,
        iterations=iterations,
        message=message,
        snapshots=snapshots,
    )
