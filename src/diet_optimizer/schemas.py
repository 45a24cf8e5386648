from __future__ import annotations

import math
from typing import Dict, List, Literal, Optional

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator

Status = Literal["optimal", "infeasible", "unbounded", "iteration_limit"]


def _require_finite(value: float, label: str) -> float:
    if not math.isfinite(value):
        raise ValueError(f"{label} must be finite, got {value!r}.")
    return value


class Variable(BaseModel):
    name: str
    cost: float
    contributions: List[float] = Field(default_factory=list)

    @field_validator("cost")
    @classmethod
    def _finite_cost(cls, value: float) -> float:
        return _require_finite(value, "cost")

    @field_validator("contributions")
    @classmethod
    def _finite_contributions(cls, values: List[float]) -> List[float]:
        for value in values:
            _require_finite(value, "contribution")
        return values


class Constraint(BaseModel):
    name: str
    minimum: float

    @field_validator("minimum")
    @classmethod
    def _nonnegative_minimum(cls, value: float) -> float:
        _require_finite(value, "minimum")
        if value < 0:
            raise ValueError(f"minimum must be non-negative, got {value}.")
        return value


class DietProblem(BaseModel):
    name: str = "diet"
    variables: List[Variable]
    constraints: List[Constraint] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_shape(self) -> "DietProblem":
        expected = len(self.constraints)
        for var in self.variables:
            if len(var.contributions) != expected:
                raise ValueError(
                    f"Variable '{var.name}' has {len(var.contributions)} contributions; "
                    f"expected one per constraint ({expected})."
                )
        _require_unique([var.name for var in self.variables], "variable")
        _require_unique([cons.name for cons in self.constraints], "constraint")
        return self

    def costs(self) -> np.ndarray:
        return np.array([var.cost for var in self.variables], dtype=float)

    def minimums(self) -> np.ndarray:
        return np.array([cons.minimum for cons in self.constraints], dtype=float)

    def contribution_matrix(self) -> np.ndarray:
        """Constraint-by-variable matrix; entry (i, j) is variable j's contribution to constraint i."""
        m, n = len(self.constraints), len(self.variables)
        if m == 0 or n == 0:
            return np.zeros((m, n), dtype=float)
        return np.array([var.contributions for var in self.variables], dtype=float).T


def _require_unique(names: List[str], label: str) -> None:
    seen = set()
    for name in names:
        if name in seen:
            raise ValueError(f"Duplicate {label} name '{name}'.")
        seen.add(name)


class SolveOptions(BaseModel):
    max_iters: int = Field(default=100, ge=1)
    tol: float = Field(default=1e-6, gt=0)
    verbose: bool = False
    allow_negative_costs: bool = False
    record_snapshots: bool = False


class TableauSnapshot(BaseModel):
    iteration: int
    pivot_row: Optional[int] = None
    pivot_col: Optional[int] = None
    basis: List[int]
    matrix: List[List[float]]


class DietSolution(BaseModel):
    status: Status
    feasible: bool
    amounts: Dict[str, float] | None
    total_cost: Optional[float]
    shadow_prices: Dict[str, float] | None
    iterations: int
    message: str = ""
    snapshots: List[TableauSnapshot] = Field(default_factory=list)


class PriceScenario(BaseModel):
    price_change_pct: int
    new_price: float
    cost_impact: float


class SensitivityEntry(BaseModel):
    variable: str
    current_price: float
    quantity: float
    scenarios: List[PriceScenario]


class ShadowPriceInterpretation(BaseModel):
    constraint: str
    shadow_price: float
    meaning: str


class DualReport(BaseModel):
    primal_objective: str = "Minimize total cost"
    primal_variables: List[str]
    primal_constraints: List[str]
    dual_objective: str = "Maximize value of met requirements"
    shadow_prices: Dict[str, float]
    interpretation: List[ShadowPriceInterpretation]
