import math

import pytest
from pydantic import ValidationError

from diet_optimizer.exceptions import InvalidProblemError
from diet_optimizer.lp.simplex import simplex_solve, solve
from diet_optimizer.schemas import Constraint, DietProblem, SolveOptions, Variable


def test_contribution_length_mismatch_rejected_by_model():
    with pytest.raises(ValidationError, match="expected one per constraint"):
        DietProblem(
            variables=[Variable(name="A", cost=1.0, contributions=[1.0])],
            constraints=[
                Constraint(name="c1", minimum=1.0),
                Constraint(name="c2", minimum=1.0),
            ],
        )


def test_problem_array_helpers():
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

    assert problem.costs().tolist() == [3.0, 2.0]
    assert problem.minimums().tolist() == [8.0, 6.0]
    assert problem.contribution_matrix().tolist() == [[1.0, 2.0], [3.0, 1.0]]


def test_solve_wraps_shape_errors():
    with pytest.raises(InvalidProblemError):
        solve([{"name": "A", "cost": 1.0, "contributions": [1.0, 2.0]}], [1.0])


def test_invalid_problem_error_is_value_error():
    with pytest.raises(ValueError):
        solve([{"name": "A", "cost": 1.0, "contributions": []}], [1.0])


def test_negative_minimum_rejected():
    with pytest.raises(InvalidProblemError):
        solve([{"name": "A", "cost": 1.0, "contributions": [1.0]}], [-1.0])


def test_negative_cost_rejected_by_default():
    problem = DietProblem(
        variables=[Variable(name="A", cost=-1.0, contributions=[1.0])],
        constraints=[Constraint(name="c1", minimum=1.0)],
    )
    with pytest.raises(InvalidProblemError, match="A"):
        simplex_solve(problem, SolveOptions())


def test_negative_cost_allowed_on_request():
    problem = DietProblem(
        variables=[Variable(name="A", cost=-1.0, contributions=[1.0])],
        constraints=[Constraint(name="c1", minimum=1.0)],
    )
    solution = simplex_solve(problem, SolveOptions(allow_negative_costs=True))
    assert solution.status == "unbounded"


@pytest.mark.parametrize("bad", [math.nan, math.inf])
def test_non_finite_values_rejected(bad):
    with pytest.raises(ValidationError):
        Variable(name="A", cost=bad, contributions=[1.0])
    with pytest.raises(ValidationError):
        Variable(name="A", cost=1.0, contributions=[bad])
    with pytest.raises(ValidationError):
        Constraint(name="c1", minimum=bad)


def test_duplicate_names_rejected():
    with pytest.raises(ValidationError, match="Duplicate variable"):
        DietProblem(
            variables=[
                Variable(name="A", cost=1.0, contributions=[]),
                Variable(name="A", cost=2.0, contributions=[]),
            ],
        )


def test_constraint_names_must_match_minimums():
    with pytest.raises(InvalidProblemError):
        solve([{"name": "A", "cost": 1.0, "contributions": [1.0]}], [1.0], constraint_names=["a", "b"])


def test_solve_options_bounds():
    with pytest.raises(ValidationError):
        SolveOptions(max_iters=0)
    with pytest.raises(ValidationError):
        SolveOptions(tol=0.0)
