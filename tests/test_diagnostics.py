from diet_optimizer.lp.utils import analyze_infeasibility
from diet_optimizer.schemas import Constraint, DietProblem, Variable


def make_uncovered_problem() -> DietProblem:
    return DietProblem(
        name="uncovered",
        variables=[
            Variable(name="A", cost=1.0, contributions=[0.0, 1.0]),
            Variable(name="B", cost=2.0, contributions=[0.0, 3.0]),
        ],
        constraints=[
            Constraint(name="vitamin", minimum=5.0),
            Constraint(name="protein", minimum=2.0),
        ],
    )


def test_uncovered_requirement_is_reported():
    report = analyze_infeasibility(make_uncovered_problem())

    assert report["status"] == "infeasible"
    assert report["uncovered_constraints"] == ["vitamin"]
    assert report["conflicting_constraints"] == ["vitamin"]
    assert report["suggestions"]


def test_feasible_problem_is_not_diagnosed():
    problem = make_uncovered_problem()
    problem.constraints[0].minimum = 0.0
    report = analyze_infeasibility(problem)

    assert report["status"] == "optimal"
    assert report["conflicting_constraints"] == []
    assert report["uncovered_constraints"] == []
