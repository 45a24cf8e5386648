from __future__ import annotations

from typing import Iterable, List

from .schemas import (
    DietProblem,
    DietSolution,
    DualReport,
    PriceScenario,
    SensitivityEntry,
    ShadowPriceInterpretation,
)

PRICE_STEPS = tuple(range(-50, 51, 10))


def price_sensitivity(
    problem: DietProblem,
    solution: DietSolution,
    steps: Iterable[int] = PRICE_STEPS,
    tol: float = 1e-6,
) -> List[SensitivityEntry]:
    """
    Cost impact of re-pricing each purchased variable by ``steps`` percent,
    holding the optimal amounts fixed. No re-solve is performed.
    """
    if not solution.amounts:
        return []

    steps = list(steps)
    entries: List[SensitivityEntry] = []
    for var in problem.variables:
        quantity = solution.amounts.get(var.name, 0.0)
        if quantity <= tol:
            continue
        scenarios = []
        for pct in steps:
            new_price = var.cost * (1.0 + pct / 100.0)
            scenarios.append(
                PriceScenario(
                    price_change_pct=pct,
                    new_price=new_price,
                    cost_impact=quantity * (new_price - var.cost),
                )
            )
        entries.append(
            SensitivityEntry(
                variable=var.name,
                current_price=var.cost,
                quantity=quantity,
                scenarios=scenarios,
            )
        )
    return entries


def dual_report(problem: DietProblem, solution: DietSolution) -> DualReport:
    if solution.shadow_prices is None:
        raise ValueError(f"No shadow prices available (status: {solution.status}).")

    interpretation = [
        ShadowPriceInterpretation(
            constraint=name,
            shadow_price=price,
            meaning=(
                f"Increasing {name} minimum by 1 unit would increase minimum cost by ${price:.6f}"
            ),
        )
        for name, price in solution.shadow_prices.items()
    ]
    return DualReport(
        primal_variables=[var.name for var in problem.variables],
        primal_constraints=[cons.name for cons in problem.constraints],
        shadow_prices=dict(solution.shadow_prices),
        interpretation=interpretation,
    )
