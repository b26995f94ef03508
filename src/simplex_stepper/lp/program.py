from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..errors import InvalidState, Unbounded
from ..schemas import Sense
from .constraint import Constraints
from .linear_function import Coefficient, LinearFunction, Variable

logger = logging.getLogger(__name__)


@dataclass
class LinearProgram:
    """
    One dictionary of the simplex method.

    The objective is kept in maximisation form and expressed in the current
    non-basic variables, so its constant is the objective value at the current
    vertex. ``sense="min"`` records that the user's function was negated.
    Published programs are never pivoted in place; pivot a ``copy()`` instead.
    """

    objective: LinearFunction
    constraints: Constraints
    sense: Sense = "max"

    def pivot(self, name: Variable) -> int:
        row_index = self.constraints.most_restrictive(name)
        if row_index is None:
            raise Unbounded(f"Objective is unbounded: nothing restricts '{name}'")
        row = self.constraints.pivot(row_index, name)
        self.objective = self.objective.substitute(name, row.right)
        logger.debug("objective after %s enters: %s", name, self.objective)
        return row_index

    def entering_variable(self, use_bland_rule: bool = False) -> Optional[Variable]:
        return self.objective.first_entering_variable(
            use_bland_rule, exclude=self.constraints.fixed_gaps
        )

    def is_valid(self) -> bool:
        return self.constraints.is_valid()

    def is_unbounded(self) -> bool:
        return any(
            self.constraints.most_restrictive(name) is None
            for name in self.objective.non_gap_variables()
        )

    def non_gap_variables(self) -> List[Variable]:
        """Every structural variable of the program, alphabetically."""
        names = set(self.objective.non_gap_variables())
        names.update(self.constraints.non_gap_variables())
        return sorted(names)

    def vertex(self) -> Dict[Variable, Coefficient]:
        """Exact coordinates of the current vertex, keyed by structural variable."""
        if not self.is_valid():
            raise InvalidState("Cannot read a vertex from an infeasible dictionary")
        basics = {row.left.single_variable_name(): row.right.constant for row in self.constraints}
        return {name: basics.get(name, Coefficient(0)) for name in self.non_gap_variables()}

    def point(self) -> np.ndarray:
        return np.array([float(value) for value in self.vertex().values()], dtype=float)

    def values(self) -> List[Tuple[Variable, float]]:
        return list(zip(self.non_gap_variables(), self.point().tolist()))

    def objective_value(self) -> Coefficient:
        """Value of the user's objective at the current vertex."""
        value = self.objective.constant
        return -value if self.sense == "min" else value

    def copy(self) -> "LinearProgram":
        return LinearProgram(self.objective, self.constraints.copy(), self.sense)

    def __str__(self) -> str:
        lines = [f"max {self.objective}"]
        if len(self.constraints):
            lines.append(str(self.constraints))
        return "\n".join(lines)
