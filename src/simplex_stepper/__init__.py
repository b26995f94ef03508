"""Step-through simplex solver for small linear programs."""

from .errors import AlreadyOptimal, DomainError, InvalidState, ParseError, SimplexError, Unbounded
from .lp import Constraint, Constraints, LinearFunction, LinearProgram, Operator, Simplex
from .schemas import SimplexSolution, StepOptions, StepState

__all__ = [
    "AlreadyOptimal",
    "DomainError",
    "InvalidState",
    "ParseError",
    "SimplexError",
    "Unbounded",
    "Constraint",
    "Constraints",
    "LinearFunction",
    "LinearProgram",
    "Operator",
    "Simplex",
    "SimplexSolution",
    "StepOptions",
    "StepState",
]
