from __future__ import annotations

from typing import List

from .schemas import DietProblem, DietSolution, SensitivityEntry

RULE = "=" * 40
THIN_RULE = "-" * 40

BANNER = "\n".join(
    [
        "╔════════════════════════════════════════════════════════╗",
        "║  LINEAR PROGRAMMING: DIET OPTIMIZATION CALCULATOR      ║",
        "║  Classic 1945 Operations Research Problem              ║",
        "╚════════════════════════════════════════════════════════╝",
    ]
)


def format_problem(problem: DietProblem) -> str:
    lines = ["Constraints (Minimum Daily Requirements):"]
    for cons in problem.constraints:
        lines.append(f"  {cons.name} >= {cons.minimum:.1f}")
    lines.append("")
    lines.append("Available Foods:")
    for var in problem.variables:
        lines.append(f"  {var.name:<20}: ${var.cost:.2f}")
    return "\n".join(lines)


def format_solution(problem: DietProblem, solution: DietSolution, tol: float = 1e-6) -> str:
    if solution.amounts is None or not solution.feasible:
        text = "No feasible solution found!"
        if solution.message:
            text += f" ({solution.message})"
        return text

    lines: List[str] = [
        RULE,
        "      OPTIMAL DIET SOLUTION",
        RULE,
        "",
        f"Minimum Daily Cost: ${solution.total_cost:.2f}",
    ]
    if solution.status != "optimal":
        lines.append(f"Warning: {solution.message}")
    lines += ["", "Food Quantities:", THIN_RULE]
    for var in problem.variables:
        amount = solution.amounts.get(var.name, 0.0)
        if amount > tol:
            lines.append(f"{var.name:<20}: {amount:8.2f} units (${amount * var.cost:.2f})")

    lines += [
        "",
        RULE,
        "      SHADOW PRICES (Dual Values)",
        RULE,
        "",
        "Marginal value of each constraint:",
        THIN_RULE,
    ]
    for name, price in (solution.shadow_prices or {}).items():
        lines.append(f"{name:<20}: ${price:.6f} per unit")
    return "\n".join(lines)


def format_sensitivity(entries: List[SensitivityEntry]) -> str:
    lines = [RULE, "      SENSITIVITY ANALYSIS", RULE]
    for entry in entries:
        lines.append("")
        lines.append(f"{entry.variable} (Current: ${entry.current_price:.2f}, Quantity: {entry.quantity:.2f})")
        lines.append("Price Change | New Price | Cost Impact")
        lines.append(THIN_RULE)
        for scenario in entry.scenarios:
            lines.append(
                f"{scenario.price_change_pct:4d}%       | ${scenario.new_price:7.2f}  | ${scenario.cost_impact:7.2f}"
            )
    return "\n".join(lines)
