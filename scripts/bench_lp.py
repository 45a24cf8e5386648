#!/usr/bin/env python3
import json
import time
from pathlib import Path

from diet_optimizer.examples import classic_diet_problem
from diet_optimizer.instances import generate_random_problem
from diet_optimizer.lp.reference import solve_with_highs
from diet_optimizer.lp.simplex import simplex_solve
from diet_optimizer.schemas import DietProblem, SolveOptions


def load_example(name: str) -> DietProblem:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return DietProblem.model_validate(json.loads(path.read_text()))


def main() -> None:
    opts = SolveOptions()
    cases = [
        ("examples/small_diet.json", load_example("small_diet.json")),
        ("classic-diet", classic_diet_problem()),
    ]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_problem(6, 4, seed)))

    print("name,status,objective,highs_objective,iterations,time_ms")
    for name, problem in cases:
        start = time.perf_counter()
        solution = simplex_solve(problem, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        reference = solve_with_highs(problem, opts)
        print(
            f"{name},{solution.status},{solution.total_cost},{reference.total_cost},"
            f"{solution.iterations},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
