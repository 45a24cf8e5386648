from __future__ import annotations

import os

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .analysis import dual_report, price_sensitivity
from .examples import classic_diet_problem
from .exceptions import InvalidProblemError
from .lp.simplex import simplex_solve
from .lp.utils import analyze_infeasibility
from .schemas import DietProblem, SolveOptions

mcp = FastMCP("Diet Optimizer")


@mcp.tool()
def solve_diet(problem: DietProblem, options: SolveOptions | None = None) -> dict:
    """Find the cheapest amounts meeting every minimum; returns amounts, cost and shadow prices."""
    opts = options or SolveOptions()
    try:
        solution = simplex_solve(problem, opts)
    except InvalidProblemError as e:
        return {"error": f"Invalid problem: {e}", "solution": None}
    return solution.model_dump()


@mcp.tool()
def sensitivity_analysis(problem: DietProblem, options: SolveOptions | None = None) -> dict:
    """Solve, then tabulate the cost impact of -50%..+50% price changes for each purchased item."""
    opts = options or SolveOptions()
    try:
        solution = simplex_solve(problem, opts)
    except InvalidProblemError as e:
        return {"error": f"Invalid problem: {e}", "sensitivity": []}
    entries = price_sensitivity(problem, solution, tol=opts.tol)
    return {
        "status": solution.status,
        "sensitivity": [entry.model_dump() for entry in entries],
    }


@mcp.tool()
def dual_problem(problem: DietProblem) -> dict:
    """Describe the dual of the diet problem and interpret each shadow price."""
    try:
        solution = simplex_solve(problem, SolveOptions())
        return dual_report(problem, solution).model_dump()
    except ValueError as e:
        return {"error": str(e)}


@mcp.tool()
def diagnose_infeasibility(problem: DietProblem) -> dict:
    """Return heuristic infeasibility analysis (requirements whose removal restores feasibility)."""
    try:
        return analyze_infeasibility(problem)
    except InvalidProblemError as e:
        return {"status": "error", "message": str(e)}


@mcp.tool()
def example_problem() -> dict:
    """Return the classic five-nutrient, eight-food diet problem as JSON."""
    return classic_diet_problem().model_dump()


def main() -> None:
    transport = os.environ.get("MCP_TRANSPORT", "stdio")

    if transport == "stdio":
        mcp.run(transport="stdio")
    else:
        port = int(os.environ.get("PORT", "8081"))
        mcp.settings.host = "0.0.0.0"
        mcp.settings.port = port
        mcp.settings.streamable_http_path = "/mcp"
        mcp.settings.transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
            allowed_hosts=["*"],
            allowed_origins=["*"],
        )
        mcp.run(transport="streamable-http")


if __name__ == "__main__":
    main()
