from __future__ import annotations

import math
import numbers
import re
from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from ..errors import DomainError

Variable = str
Coefficient = Fraction
Number = Union[int, float, Fraction, Decimal]

GAP_PREFIX = "_g"
_GAP = re.compile(r"^_g(\d+)$")


def gap_name(index: int) -> Variable:
    """Name of the gap (slack) variable owned by the ``index``-th row, 1-based."""
    return f"{GAP_PREFIX}{index}"


def is_gap(name: Variable) -> bool:
    return _GAP.match(name) is not None


def variable_order(name: Variable) -> Tuple[int, int, str]:
    """
    Total order on variables used by Bland's rule.
    Structural variables come first, alphabetically; gap variables follow by index.
    """

    match = _GAP.match(name)
    if match:
        return (1, int(match.group(1)), name)
    return (0, 0, name)


def to_coefficient(value: Number) -> Coefficient:
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise TypeError("Coefficient must be a number, not bool")
    if isinstance(value, numbers.Integral):
        return Fraction(int(value))
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise DomainError(f"Coefficient must be finite, got {value}")
        return Fraction(value)
    if isinstance(value, numbers.Rational):
        return Fraction(value.numerator, value.denominator)
    if isinstance(value, numbers.Real):
        value = float(value)
        if not math.isfinite(value):
            raise DomainError(f"Coefficient must be finite, got {value}")
        # repr keeps 0.1 as 1/10 instead of its binary expansion
        return Fraction(repr(value))
    raise TypeError(f"Coefficient must be a real number, got {type(value).__name__}")


def format_number(value: Fraction) -> str:
    if value.denominator == 1:
        return str(value.numerator)
    return f"{value.numerator}/{value.denominator}"


def _is_number(value: object) -> bool:
    return isinstance(value, (numbers.Real, Decimal)) and not isinstance(value, bool)


@dataclass(frozen=True)
class LinearFunction:
    """Affine expression ``sum(coef * var) + constant`` with exact coefficients.

    Instances are immutable; every operation returns a new value. Terms with a
    zero coefficient are dropped on construction, so two functions compare equal
    exactly when they have the same non-zero terms and the same constant.
    """

    terms: Dict[Variable, Coefficient] = field(default_factory=dict)
    constant: Coefficient = Fraction(0)

    def __post_init__(self) -> None:
        terms: Dict[Variable, Coefficient] = {}
        for name, coef in self.terms.items():
            coef = to_coefficient(coef)
            if coef != 0:
                terms[name] = coef
        object.__setattr__(self, "terms", terms)
        object.__setattr__(self, "constant", to_coefficient(self.constant))

    @classmethod
    def zero(cls) -> "LinearFunction":
        return cls()

    @classmethod
    def variable(cls, name: Variable, coefficient: Number = 1) -> "LinearFunction":
        return cls({name: coefficient})

    @classmethod
    def constant_of(cls, value: Number) -> "LinearFunction":
        return cls({}, value)

    @classmethod
    def parse(cls, text: str) -> "LinearFunction":
        from .parser import parse_linear_function  # local import to avoid cycle

        return parse_linear_function(text)

    # arithmetic

    def __add__(self, other: object) -> "LinearFunction":
        other = _promote(other)
        if other is NotImplemented:
            return NotImplemented
        terms = dict(self.terms)
        for name, coef in other.terms.items():
            terms[name] = terms.get(name, 0) + coef
        return LinearFunction(terms, self.constant + other.constant)

    def __radd__(self, other: object) -> "LinearFunction":
        promoted = _promote(other)
        if promoted is NotImplemented:
            return NotImplemented
        return promoted + self

    def __sub__(self, other: object) -> "LinearFunction":
        other = _promote(other)
        if other is NotImplemented:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other: object) -> "LinearFunction":
        promoted = _promote(other)
        if promoted is NotImplemented:
            return NotImplemented
        return promoted - self

    def __neg__(self) -> "LinearFunction":
        return LinearFunction({name: -coef for name, coef in self.terms.items()}, -self.constant)

    def __mul__(self, other: object) -> "LinearFunction":
        if not _is_number(other):
            return NotImplemented
        factor = to_coefficient(other)
        return LinearFunction(
            {name: coef * factor for name, coef in self.terms.items()},
            self.constant * factor,
        )

    __rmul__ = __mul__

    def __truediv__(self, other: object) -> "LinearFunction":
        if not _is_number(other):
            return NotImplemented
        divisor = to_coefficient(other)
        return LinearFunction(
            {name: coef / divisor for name, coef in self.terms.items()},
            self.constant / divisor,
        )

    def __hash__(self) -> int:
        return hash((frozenset(self.terms.items()), self.constant))

    # inspection

    def __contains__(self, name: object) -> bool:
        return name in self.terms

    def __len__(self) -> int:
        return len(self.terms)

    def variables(self) -> Iterator[Variable]:
        """Names with a non-zero coefficient, in insertion order. Each call starts over."""
        return (name for name, coef in self.terms.items() if coef != 0)

    def sorted_variables(self) -> List[Variable]:
        return sorted(self.variables(), key=variable_order)

    def non_gap_variables(self) -> List[Variable]:
        return [name for name in self.variables() if not is_gap(name)]

    def coefficient(self, name: Variable) -> Coefficient:
        return self.terms.get(name, Fraction(0))

    def single_variable_name(self) -> Optional[Variable]:
        """The variable this function is exactly equal to, if any (``x``, not ``2x`` or ``x + 1``)."""
        if self.constant == 0 and len(self.terms) == 1:
            ((name, coef),) = self.terms.items()
            if coef == 1:
                return name
        return None

    def evaluate(self, assignment: Mapping[Variable, Number]) -> Coefficient:
        total = self.constant
        for name, coef in self.terms.items():
            total += coef * to_coefficient(assignment.get(name, 0))
        return total

    # simplex primitives

    def solve_for(self, name: Variable) -> "LinearFunction":
        """
        Rearrange ``self = 0`` into ``name = result`` and return ``result``.
        Raises DomainError when ``name`` does not occur in the function.
        """

        coef = self.coefficient(name)
        if coef == 0:
            raise DomainError(f"Cannot solve for '{name}': its coefficient is zero")
        rest = LinearFunction(
            {other: value for other, value in self.terms.items() if other != name},
            self.constant,
        )
        return rest / -coef

    def substitute(self, name: Variable, replacement: "LinearFunction") -> "LinearFunction":
        coef = self.terms.get(name)
        if coef is None:
            return self
        rest = LinearFunction(
            {other: value for other, value in self.terms.items() if other != name},
            self.constant,
        )
        return rest + replacement * coef

    def first_entering_variable(
        self, use_bland_rule: bool = False, exclude: Iterable[Variable] = ()
    ) -> Optional[Variable]:
        """
        Pick a variable whose increase improves the function (positive coefficient).

        Without Bland's rule the first candidate in insertion order wins; with it
        the smallest candidate in ``variable_order`` wins. Returns None when the
        function cannot be improved, i.e. the dictionary is optimal.
        """

        excluded = set(exclude)
        candidates = (
            name for name in self.variables() if self.terms[name] > 0 and name not in excluded
        )
        if use_bland_rule:
            return min(candidates, key=variable_order, default=None)
        return next(candidates, None)

    # display

    def __str__(self) -> str:
        parts: List[str] = []
        if self.constant != 0 or not self.terms:
            parts.append(format_number(self.constant))
        for name in self.sorted_variables():
            coef = self.terms[name]
            magnitude = abs(coef)
            if magnitude == 1:
                term = name
            elif magnitude.denominator == 1:
                term = f"{format_number(magnitude)}{name}"
            else:
                term = f"{format_number(magnitude)} {name}"
            if not parts:
                parts.append(f"-{term}" if coef < 0 else term)
            else:
                parts.append(f"- {term}" if coef < 0 else f"+ {term}")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"LinearFunction({str(self)!r})"


def _promote(value: object):
    if isinstance(value, LinearFunction):
        return value
    if _is_number(value):
        return LinearFunction({}, value)  # type: ignore[arg-type]
    return NotImplemented
