import numpy as np
import pytest

from diet_optimizer.examples import classic_diet_problem
from diet_optimizer.instances import generate_random_problem
from diet_optimizer.lp.reference import solve_with_highs
from diet_optimizer.lp.simplex import simplex_solve
from diet_optimizer.lp.utils import constraint_levels, violated_constraints
from diet_optimizer.schemas import Constraint, DietProblem, SolveOptions, Variable


def assert_locally_optimal(problem: DietProblem, amounts: dict, total_cost: float, delta: float = 1e-3) -> None:
    for var in problem.variables:
        for step in (-delta, delta):
            moved = dict(amounts)
            moved[var.name] = moved[var.name] + step
            if moved[var.name] < 0 or violated_constraints(problem, moved, tol=0.0):
                continue
            cost = sum(moved[v.name] * v.cost for v in problem.variables)
            assert cost >= total_cost - 1e-9


def test_classic_diet_matches_highs():
    problem = classic_diet_problem()
    solution = simplex_solve(problem, SolveOptions())
    reference = solve_with_highs(problem)

    assert solution.status == "optimal"
    assert reference.status == "optimal"
    assert solution.iterations <= 100
    assert solution.total_cost == pytest.approx(reference.total_cost, rel=1e-6)
    assert violated_constraints(problem, solution.amounts) == []
    assert all(amount >= 0.0 for amount in solution.amounts.values())
    assert all(price >= 0.0 for price in solution.shadow_prices.values())


@pytest.mark.parametrize("seed", range(6))
def test_random_problems_match_highs(seed):
    problem = generate_random_problem(5, 3, seed)
    solution = simplex_solve(problem, SolveOptions())
    reference = solve_with_highs(problem)

    assert solution.status == "optimal"
    assert solution.total_cost == pytest.approx(reference.total_cost, rel=1e-6)

    levels = constraint_levels(problem, solution.amounts)
    for cons in problem.constraints:
        assert levels[cons.name] >= cons.minimum - 1e-6
    assert all(amount >= 0.0 for amount in solution.amounts.values())
    assert_locally_optimal(problem, solution.amounts, solution.total_cost)

    # strong duality: the shadow prices value the minimums at the optimal cost
    minimums = problem.minimums()
    prices = np.array([solution.shadow_prices[cons.name] for cons in problem.constraints])
    assert float(prices @ minimums) == pytest.approx(solution.total_cost, rel=1e-6)


def test_highs_reports_infeasible():
    problem = DietProblem(
        variables=[Variable(name="A", cost=1.0, contributions=[0.0])],
        constraints=[Constraint(name="c1", minimum=1.0)],
    )
    assert solve_with_highs(problem).status == "infeasible"
    assert simplex_solve(problem).status == "infeasible"


def test_highs_shadow_prices_match_engine():
    problem = DietProblem(
        variables=[
            Variable(name="x", cost=3.0, contributions=[1.0, 3.0]),
            Variable(name="y", cost=2.0, contributions=[2.0, 1.0]),
        ],
        constraints=[
            Constraint(name="c1", minimum=8.0),
            Constraint(name="c2", minimum=6.0),
        ],
    )
    engine = simplex_solve(problem)
    reference = solve_with_highs(problem)

    for name in ("c1", "c2"):
        assert engine.shadow_prices[name] == pytest.approx(reference.shadow_prices[name], rel=1e-6)
