import pytest

from diet_optimizer.examples import classic_diet_problem
from diet_optimizer.schemas import Constraint, DietProblem, SolveOptions, Variable
from diet_optimizer.server import (
    diagnose_infeasibility,
    dual_problem,
    example_problem,
    sensitivity_analysis,
    solve_diet,
)


def make_two_food_problem() -> DietProblem:
    return DietProblem(
        variables=[
            Variable(name="A", cost=1.0, contributions=[2.0]),
            Variable(name="B", cost=3.0, contributions=[1.0]),
        ],
        constraints=[Constraint(name="need", minimum=4.0)],
    )


def test_solve_diet_tool_returns_solution_dict():
    result = solve_diet(make_two_food_problem())

    assert result["status"] == "optimal"
    assert result["total_cost"] == pytest.approx(2.0)
    assert result["amounts"]["A"] == pytest.approx(2.0)


def test_solve_diet_tool_reports_invalid_problem():
    problem = DietProblem(
        variables=[Variable(name="A", cost=-1.0, contributions=[1.0])],
        constraints=[Constraint(name="need", minimum=1.0)],
    )
    result = solve_diet(problem, SolveOptions())
    assert "error" in result
    assert result["solution"] is None


def test_sensitivity_tool():
    result = sensitivity_analysis(make_two_food_problem())

    assert result["status"] == "optimal"
    assert [entry["variable"] for entry in result["sensitivity"]] == ["A"]


def test_dual_problem_tool():
    result = dual_problem(make_two_food_problem())
    assert result["shadow_prices"]["need"] == pytest.approx(0.5)


def test_dual_problem_tool_without_solution():
    problem = DietProblem(
        variables=[Variable(name="A", cost=1.0, contributions=[0.0])],
        constraints=[Constraint(name="need", minimum=1.0)],
    )
    assert "error" in dual_problem(problem)
    assert diagnose_infeasibility(problem)["status"] == "infeasible"


def test_example_problem_round_trips():
    payload = example_problem()
    problem = DietProblem.model_validate(payload)

    assert problem == classic_diet_problem()
    assert len(problem.variables) == 8
    assert len(problem.constraints) == 5
