from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from fractions import Fraction
from typing import TYPE_CHECKING, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from ..errors import ParseError
from .linear_function import LinearFunction, Variable, gap_name, variable_order

if TYPE_CHECKING:
    from .simplex import Simplex

logger = logging.getLogger(__name__)


class Operator(str, Enum):
    EQUAL = "="
    LESS = "<"
    GREATER = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Constraint:
    """
    A relation ``left <operator> right`` between two linear functions.

    User constraints go through ``Constraint.new``, which canonicalises the
    sides once. Tableau rows use the plain constructor: ``left`` is the basic
    variable, ``right`` its definition in terms of non-basic variables, and
    ``operator`` the relation the user originally wrote.
    """

    left: LinearFunction
    operator: Operator
    right: LinearFunction

    @classmethod
    def new(cls, left: LinearFunction, operator: Operator, right: LinearFunction) -> "Constraint":
        operator = Operator(operator)
        if operator is Operator.EQUAL:
            return cls(left - right, operator, LinearFunction.zero())
        if operator is Operator.LESS_EQUAL:
            return cls(-left, operator, right)
        return cls(left, operator, right)

    @classmethod
    def parse(cls, text: str) -> "Constraint":
        from .parser import parse_constraint  # local import to avoid cycle

        return parse_constraint(text)

    def normalize(self, name: Variable) -> "Constraint":
        """Rewrite the row so that ``left`` is exactly ``name``."""
        definition = (self.left - self.right).solve_for(name)
        return Constraint(LinearFunction.variable(name), self.operator, definition)

    def slack(self) -> LinearFunction:
        """
        The amount by which a canonical constraint is satisfied; it must stay
        non-negative, and exactly zero for equalities.
        """

        if self.operator in (Operator.GREATER, Operator.GREATER_EQUAL):
            return self.left - self.right
        if self.operator is Operator.LESS_EQUAL:
            return self.right + self.left
        if self.operator is Operator.LESS:
            return self.right - self.left
        return self.left - self.right

    def __str__(self) -> str:
        return f"{self.left} {self.operator} {self.right}"


class Constraints:
    """Tableau rows of a dictionary, one gap variable per row in input order."""

    def __init__(self, constraints: Iterable[Constraint] = ()) -> None:
        self._rows: List[Constraint] = []
        self._sources: List[Constraint] = []
        self._gaps: List[Variable] = []
        self._fixed: Set[Variable] = set()
        for constraint in constraints:
            self.add_constraint(constraint)

    @classmethod
    def compile(cls, text: str) -> "Constraints":
        from .parser import parse_constraint  # local import to avoid cycle

        constraints = cls()
        for number, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                constraint = parse_constraint(line)
            except ParseError as exc:
                raise ParseError(f"Line {number}: {exc}") from exc
            constraints.add_constraint(constraint)
        return constraints

    def add_constraint(self, constraint: Constraint) -> Variable:
        """Append a canonical constraint as a new row and return its gap variable."""
        gap = gap_name(len(self._rows) + 1)
        definition = constraint.slack()
        for row in self._rows:
            basic = row.left.single_variable_name()
            if basic is not None:
                definition = definition.substitute(basic, row.right)

        self._sources.append(constraint)
        self._gaps.append(gap)
        if constraint.operator is Operator.EQUAL:
            self._fixed.add(gap)
        self._rows.append(Constraint(LinearFunction.variable(gap), constraint.operator, definition))
        return gap

    # views

    @property
    def rows(self) -> Tuple[Constraint, ...]:
        return tuple(self._rows)

    @property
    def sources(self) -> Tuple[Constraint, ...]:
        return tuple(self._sources)

    @property
    def gaps(self) -> Tuple[Variable, ...]:
        return tuple(self._gaps)

    @property
    def fixed_gaps(self) -> FrozenSet[Variable]:
        """Gap variables of equality rows; they must stay at zero and never enter."""
        return frozenset(self._fixed)

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self._rows)

    def __getitem__(self, index: int) -> Constraint:
        return self._rows[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Constraints):
            return NotImplemented
        return (
            self._rows == other._rows
            and self._gaps == other._gaps
            and self._fixed == other._fixed
            and self._sources == other._sources
        )

    def basic_variables(self) -> List[Variable]:
        return [name for name in (row.left.single_variable_name() for row in self._rows) if name]

    def non_gap_variables(self) -> Set[Variable]:
        names: Set[Variable] = set()
        for row in self._rows:
            names.update(row.left.non_gap_variables())
            names.update(row.right.non_gap_variables())
        return names

    def copy(self) -> "Constraints":
        # rows are immutable, so copying the containers is enough
        clone = Constraints()
        clone._rows = list(self._rows)
        clone._sources = list(self._sources)
        clone._gaps = list(self._gaps)
        clone._fixed = set(self._fixed)
        return clone

    # simplex operations

    def most_restrictive(self, name: Variable) -> Optional[int]:
        """
        Minimum-ratio test for increasing ``name``.

        A row restricts ``name`` when raising it pulls the row's basic variable
        towards zero, or when the basic variable is a fixed gap that any change
        would move. The row with the smallest bound wins; ties go to the basic
        variable that comes first in variable order. Returns None when nothing
        restricts ``name``.
        """

        best: Optional[Tuple[Tuple[Fraction, Tuple[int, int, str], int], int]] = None
        for index, row in enumerate(self._rows):
            coef = row.right.coefficient(name)
            basic = row.left.single_variable_name() or ""
            if coef < 0 or (coef != 0 and basic in self._fixed):
                bound = row.right.constant / abs(coef)
                key = (bound, variable_order(basic), index)
                if best is None or key < best[0]:
                    best = (key, index)
        return None if best is None else best[1]

    def pivot(self, row_index: int, name: Variable) -> Constraint:
        """
        Make ``name`` basic in row ``row_index`` and eliminate it from every
        other row. Mutates this tableau and returns the new pivot row.
        """

        leaving = self._rows[row_index].left.single_variable_name()
        row = self._rows[row_index].normalize(name)
        self._rows[row_index] = row
        for index, other in enumerate(self._rows):
            if index != row_index:
                self._rows[index] = replace(other, right=other.right.substitute(name, row.right))
        logger.debug("pivot row %d: %s enters, %s leaves", row_index, name, leaving)
        return row

    def is_valid(self) -> bool:
        """True when the dictionary is a basic feasible solution."""
        for row in self._rows:
            constant = row.right.constant
            if constant < 0:
                return False
            if row.left.single_variable_name() in self._fixed and constant != 0:
                return False
        return True

    def maximize(self, function: LinearFunction) -> "Simplex":
        from .program import LinearProgram  # local import to avoid cycle
        from .simplex import Simplex

        return Simplex(LinearProgram(function, self.copy(), "max"))

    def minimize(self, function: LinearFunction) -> "Simplex":
        from .program import LinearProgram  # local import to avoid cycle
        from .simplex import Simplex

        return Simplex(LinearProgram(-function, self.copy(), "min"))

    def __str__(self) -> str:
        return "\n".join(f"{row.left} = {row.right}" for row in self._rows)

    def __repr__(self) -> str:
        return f"Constraints({[str(row) for row in self._rows]!r})"
