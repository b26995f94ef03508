from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import numpy as np

from ..errors import AlreadyOptimal, Unbounded
from ..schemas import SimplexSolution, Sense, Status, StepOptions, StepState
from .constraint import Constraints
from .linear_function import LinearFunction, Variable
from .parser import parse_objective
from .program import LinearProgram

logger = logging.getLogger(__name__)


class Simplex:
    """
    Step-by-step simplex run that keeps every dictionary it has produced.

    ``history[0]`` is the starting dictionary and every later entry is exactly
    one pivot away from the one before it. Stepping back only moves the cursor,
    so stepping forward again replays stored dictionaries instead of pivoting.
    Not thread-safe: callers serialise access to one instance.
    """

    def __init__(self, program: LinearProgram) -> None:
        self._history: List[LinearProgram] = [program]
        self._index = 0

    @classmethod
    def from_program(cls, program: LinearProgram) -> "Simplex":
        return cls(program)

    @property
    def index(self) -> int:
        return self._index

    @property
    def frontier(self) -> int:
        return len(self._history) - 1

    @property
    def history(self) -> Tuple[LinearProgram, ...]:
        return tuple(self._history)

    def is_first_step(self) -> bool:
        return self._index == 0

    def is_last_step(self) -> bool:
        return self._index == self.frontier

    def advance(self, use_bland_rule: bool = True) -> LinearProgram:
        """
        Move one step forward and return the new current dictionary.

        Raises AlreadyOptimal when the frontier cannot be improved and Unbounded
        when the entering variable has no restricting row; the cursor does not
        move in either case.
        """

        if not self.is_last_step():
            self._index += 1
            return self.current()

        frontier = self._history[-1]
        entering = frontier.entering_variable(use_bland_rule)
        if entering is None:
            logger.info("step %d is optimal", self._index)
            raise AlreadyOptimal(f"Step {self._index} is already optimal")

        scratch = frontier.copy()
        try:
            scratch.pivot(entering)
        except Unbounded:
            logger.info("step %d is unbounded along %s", self._index, entering)
            raise
        self._history.append(scratch)
        self._index += 1
        logger.debug("step %d computed, %s entered", self._index, entering)
        return scratch

    def retreat(self) -> LinearProgram:
        if not self.is_first_step():
            self._index -= 1
        return self.current()

    def current(self) -> LinearProgram:
        return self._history[self._index]

    def current_point(self) -> np.ndarray:
        return self.current().point()

    def current_values(self) -> List[Tuple[Variable, float]]:
        return self.current().values()

    def run(self, use_bland_rule: bool = True, max_iters: int = 10_000) -> Status:
        """Advance until a terminal condition and report which one was reached."""
        for _ in range(max_iters):
            try:
                self.advance(use_bland_rule)
            except AlreadyOptimal:
                return "optimal"
            except Unbounded:
                return "unbounded"
        if self.is_last_step() and self.current().entering_variable(use_bland_rule) is None:
            return "optimal"
        return "iteration_limit"


def simplex_from_text(objective: str, constraints: str) -> Simplex:
    """Build a Simplex from ``"max x + 2y"`` and a block of constraint lines."""
    sense, function = parse_objective(objective)
    table = Constraints.compile(constraints)
    return start_simplex(sense, function, table)


def start_simplex(sense: Sense, objective: LinearFunction, constraints: Constraints) -> Simplex:
    if sense == "max":
        return constraints.maximize(objective)
    return constraints.minimize(objective)


def solve_simplex(
    sense: Sense,
    objective: LinearFunction,
    constraints: Constraints,
    options: Optional[StepOptions] = None,
) -> SimplexSolution:
    """
    Dictionary simplex from the all-zero vertex, run to completion.
    The origin must satisfy every constraint; there is no Phase I.
    """

    opts = options or StepOptions()
    simplex = start_simplex(sense, objective, constraints)

    if not simplex.current().is_valid():
        return SimplexSolution(
            status="infeasible",
            objective_value=None,
            x=None,
            iterations=0,
            message="Initial dictionary is infeasible; the origin must satisfy every constraint.",
        )

    status = simplex.run(opts.use_bland_rule, opts.max_iters)
    if status == "unbounded":
        return SimplexSolution(
            status="unbounded",
            objective_value=None,
            x=None,
            iterations=simplex.index,
            message="Unbounded.",
        )
    if status == "iteration_limit":
        return SimplexSolution(
            status="iteration_limit",
            objective_value=None,
            x=None,
            iterations=simplex.index,
            message=f"Hit iteration limit after {simplex.index} pivots.",
        )

    program = simplex.current()
    return SimplexSolution(
        status="optimal",
        objective_value=float(program.objective_value()),
        x=dict(program.values()),
        iterations=simplex.index,
        message="",
    )


def solve_text(objective: str, constraints: str, options: Optional[StepOptions] = None) -> SimplexSolution:
    sense, function = parse_objective(objective)
    return solve_simplex(sense, function, Constraints.compile(constraints), options)


def describe(simplex: Simplex, use_bland_rule: bool = True) -> StepState:
    program = simplex.current()
    feasible = program.is_valid()
    entering = program.entering_variable(use_bland_rule)
    return StepState(
        step=simplex.index,
        frontier=simplex.frontier,
        sense=program.sense,
        objective=str(program.objective),
        rows=[f"{row.left} = {row.right}" for row in program.constraints],
        basic_variables=program.constraints.basic_variables(),
        feasible=feasible,
        values=dict(program.values()) if feasible else None,
        objective_value=float(program.objective_value()) if feasible else None,
        entering=entering,
        optimal=feasible and entering is None,
    )
