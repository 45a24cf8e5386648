from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np

from ..schemas import TableauSnapshot

EPSILON = 1e-6


class Tableau:
    """
    Dense simplex tableau for an at-least (covering) LP.

    Rows 0..m-1 hold the constraints in canonical form, row m is the objective
    (reduced-cost) row. Columns 0..n-1 are the decision variables, n..n+m-1
    the per-constraint surplus columns, and the last column is the RHS.
    ``basis[i]`` is the column currently basic in constraint row ``i``.
    """

    def __init__(self, matrix: np.ndarray, basis: List[int], num_variables: int, tol: float = EPSILON) -> None:
        if matrix.ndim != 2 or matrix.shape[0] != len(basis) + 1:
            raise ValueError("tableau needs exactly one basis entry per constraint row")
        self.matrix = matrix
        self.basis = list(basis)
        self.num_variables = num_variables
        self.tol = tol

    @classmethod
    def from_arrays(
        cls,
        costs: Sequence[float],
        contributions: np.ndarray,
        minimums: Sequence[float],
        tol: float = EPSILON,
    ) -> "Tableau":
        """
        Seed the tableau from raw problem data.

        ``contributions`` is constraint-by-variable. Constraint rows are stored
        negated (``-a_i x + s_i = -b_i``) so the surplus columns form the
        initial basis and the objective row starts at the raw costs.
        """
        c = np.asarray(costs, dtype=float).reshape(-1)
        b = np.asarray(minimums, dtype=float).reshape(-1)
        n, m = c.size, b.size
        A = np.asarray(contributions, dtype=float).reshape(m, n)

        matrix = np.zeros((m + 1, n + m + 1), dtype=float)
        matrix[:m, :n] = -A
        matrix[:m, n : n + m] = np.eye(m)
        matrix[:m, -1] = -b
        matrix[m, :n] = c

        basis = list(range(n, n + m))
        return cls(matrix, basis, n, tol)

    @property
    def rows(self) -> int:
        return self.matrix.shape[0]

    @property
    def cols(self) -> int:
        return self.matrix.shape[1]

    @property
    def num_constraints(self) -> int:
        return self.rows - 1

    @property
    def objective(self) -> np.ndarray:
        return self.matrix[-1]

    @property
    def rhs(self) -> np.ndarray:
        return self.matrix[:-1, -1]

    def slack_column(self, constraint: int) -> int:
        return self.num_variables + constraint

    def pivot_column(self) -> Optional[int]:
        """Most negative objective entry (first on ties); ``None`` means optimal."""
        reduced = self.objective[:-1]
        if reduced.size == 0:
            return None
        col = int(np.argmin(reduced))
        if reduced[col] < 0.0:
            return col
        return None

    def pivot_row(self, pivot_col: int) -> Optional[int]:
        """Minimum-ratio row for the entering column; ``None`` means unbounded."""
        pivot_row: Optional[int] = None
        min_ratio = np.inf
        for i in range(self.num_constraints):
            entry = self.matrix[i, pivot_col]
            if entry > self.tol:
                ratio = max(self.matrix[i, -1], 0.0) / entry
                if ratio < min_ratio:
                    min_ratio = ratio
                    pivot_row = i
        return pivot_row

    def infeasible_row(self) -> Optional[int]:
        """Constraint row with the most negative RHS below ``-tol``, if any."""
        if self.num_constraints == 0:
            return None
        rhs = self.rhs
        row = int(np.argmin(rhs))
        if rhs[row] < -self.tol:
            return row
        return None

    def dual_pivot_column(self, pivot_row: int) -> Optional[int]:
        """
        Dual ratio test on an infeasible row.

        Only negative entries can lift the row's RHS; among them the column with
        the smallest ``objective / -entry`` keeps the objective row non-negative.
        ``None`` means the row can never be satisfied.
        """
        pivot_col: Optional[int] = None
        min_ratio = np.inf
        for j in range(self.cols - 1):
            entry = self.matrix[pivot_row, j]
            if entry < -self.tol:
                ratio = self.objective[j] / -entry
                if ratio < min_ratio:
                    min_ratio = ratio
                    pivot_col = j
        return pivot_col

    def pivot(self, pivot_row: int, pivot_col: int) -> None:
        pivot_value = self.matrix[pivot_row, pivot_col]
        self.matrix[pivot_row, :] /= pivot_value
        factors = self.matrix[:, pivot_col].copy()
        factors[pivot_row] = 0.0
        self.matrix -= np.outer(factors, self.matrix[pivot_row, :])
        # round-off from elimination must not read as a negative reduced cost
        self.matrix[np.abs(self.matrix) < 1e-12] = 0.0
        self.basis[pivot_row] = pivot_col

    def basic_row(self, col: int) -> Optional[int]:
        """
        Row where ``col`` is basic: a 1 in that row and 0 in every other
        constraint row (within ``tol``). Identical columns can both look like
        unit columns, so the basis record decides which one owns the row.
        """
        if col not in self.basis:
            return None
        row = self.basis.index(col)
        column = self.matrix[:-1, col]
        if abs(column[row] - 1.0) >= self.tol:
            return None
        others = np.delete(column, row)
        if np.any(np.abs(others) > self.tol):
            return None
        return row

    def snapshot(self, iteration: int, pivot_row: Optional[int] = None, pivot_col: Optional[int] = None) -> TableauSnapshot:
        return TableauSnapshot(
            iteration=iteration,
            pivot_row=pivot_row,
            pivot_col=pivot_col,
            basis=list(self.basis),
            matrix=self.matrix.tolist(),
        )

    def format(self) -> str:
        lines = ["=== Simplex Tableau ==="]
        for i in range(self.rows):
            line = " ".join(f"{value:8.3f}" for value in self.matrix[i])
            if i < self.num_constraints:
                line += f" | Basis: {self.basis[i]}"
            lines.append(line)
        lines.append("=======================")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Tableau(rows={self.rows}, cols={self.cols}, basis={self.basis})"
