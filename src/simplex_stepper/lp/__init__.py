"""Dictionary (tableau) simplex engine."""

from .linear_function import LinearFunction
from .constraint import Constraint, Constraints, Operator
from .program import LinearProgram
from .simplex import Simplex, describe, simplex_from_text, solve_simplex, solve_text
from .parser import parse_constraint, parse_linear_function, parse_objective, parse_problem

__all__ = [
    "LinearFunction",
    "Constraint",
    "Constraints",
    "Operator",
    "LinearProgram",
    "Simplex",
    "describe",
    "simplex_from_text",
    "solve_simplex",
    "solve_text",
    "parse_constraint",
    "parse_linear_function",
    "parse_objective",
    "parse_problem",
]
