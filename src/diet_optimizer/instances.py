import random
from typing import List, Optional

from .schemas import Constraint, DietProblem, Variable


def generate_random_problem(num_vars: int, num_constraints: int, seed: Optional[int] = None) -> DietProblem:
    """Strictly positive costs and contributions, so every instance is feasible and bounded."""
    rng = random.Random(seed)
    constraints: List[Constraint] = [
        Constraint(name=f"c{j}", minimum=rng.uniform(num_vars * 2.0, num_vars * 6.0))
        for j in range(num_constraints)
    ]
    variables = [
        Variable(
            name=f"x{i}",
            cost=rng.uniform(1.0, 4.0),
            contributions=[rng.uniform(0.5, 5.0) for _ in range(num_constraints)],
        )
        for i in range(num_vars)
    ]
    return DietProblem(
        name="random-diet",
        variables=variables,
        constraints=constraints,
    )
