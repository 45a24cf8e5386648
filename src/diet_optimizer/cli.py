import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .analysis import price_sensitivity
from .examples import classic_diet_problem
from .exceptions import InvalidProblemError
from .lp.simplex import simplex_solve
from .report import BANNER, format_problem, format_sensitivity, format_solution
from .schemas import DietProblem, SolveOptions

logger = logging.getLogger(__name__)


def load_problem(path: Path) -> DietProblem:
    return DietProblem.model_validate(json.loads(Path(path).read_text()))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diet-optimizer",
        description="Find the cheapest combination of foods meeting minimum requirements.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Print every simplex tableau")
    parser.add_argument("--problem", type=Path, default=None, help="JSON problem file (defaults to the classic diet)")
    parser.add_argument("--max-iters", type=int, default=None, help="Override the pivot ceiling")
    parser.add_argument("--no-sensitivity", action="store_true", help="Skip the price sensitivity table")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        problem = load_problem(args.problem) if args.problem else classic_diet_problem()
        overrides = {"verbose": args.verbose}
        if args.max_iters is not None:
            overrides["max_iters"] = args.max_iters
        opts = SolveOptions(**overrides)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError, ValidationError) as exc:
        logger.error("Could not load problem: %s", exc)
        print(f"Invalid input: {exc}")
        return 2

    print()
    print(BANNER)
    print()
    print(format_problem(problem))

    try:
        solution = simplex_solve(problem, opts)
    except InvalidProblemError as exc:
        print(f"Invalid input: {exc}")
        return 2

    print()
    print(format_solution(problem, solution))
    if solution.amounts is None:
        return 1

    if solution.feasible and not args.no_sensitivity:
        print()
        print(format_sensitivity(price_sensitivity(problem, solution)))
    print()
    return 0 if solution.status == "optimal" else 1


if __name__ == "__main__":
    raise SystemExit(main())
