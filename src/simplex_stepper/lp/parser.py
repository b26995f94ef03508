from __future__ import annotations

import re
from fractions import Fraction
from typing import Dict, List, Tuple

from ..errors import ParseError
from ..schemas import Sense
from .constraint import Constraint, Constraints, Operator
from .linear_function import LinearFunction

_OBJECTIVE = re.compile(r"^\s*(maximize|minimize|max|min)\b(.*)$", re.IGNORECASE | re.DOTALL)
_CMP = re.compile(r"<=|>=|=<|=>|==|≤|≥|=|<|>")
_TOKEN = re.compile(
    r"\s*(?:(?P<number>\d+(?:\.\d+)?|\.\d+)|(?P<name>[A-Za-z][A-Za-z0-9_]*)|(?P<symbol>[+\-*]))"
)

_OPERATORS: Dict[str, Operator] = {
    "=": Operator.EQUAL,
    "==": Operator.EQUAL,
    "<": Operator.LESS,
    ">": Operator.GREATER,
    "<=": Operator.LESS_EQUAL,
    "=<": Operator.LESS_EQUAL,
    "≤": Operator.LESS_EQUAL,
    ">=": Operator.GREATER_EQUAL,
    "=>": Operator.GREATER_EQUAL,
    "≥": Operator.GREATER_EQUAL,
}


def parse_linear_function(text: str) -> LinearFunction:
    """
    Parse ``[+|-] c1 v1 [+|-] c2 v2 ... [+|-] const`` into a LinearFunction.
    Coefficients default to 1, an optional ``*`` may separate coefficient and
    variable, repeated variables accumulate and an empty string is zero.
    """

    tokens = _tokenize(text)
    terms: Dict[str, Fraction] = {}
    constant = Fraction(0)
    pos = 0

    while pos < len(tokens):
        kind, value = tokens[pos]
        sign = 1
        if kind == "symbol" and value in "+-":
            sign = -1 if value == "-" else 1
            pos += 1
        elif pos > 0:
            raise ParseError(f"Expected '+' or '-' before '{value}' in '{text.strip()}'")
        if pos == len(tokens):
            raise ParseError(f"Dangling '{value}' at the end of '{text.strip()}'")

        kind, value = tokens[pos]
        if kind == "number":
            coef = Fraction(value) * sign
            pos += 1
            if pos < len(tokens) and tokens[pos] == ("symbol", "*"):
                pos += 1
                if pos == len(tokens) or tokens[pos][0] != "name":
                    raise ParseError(f"Expected a variable after '*' in '{text.strip()}'")
            if pos < len(tokens) and tokens[pos][0] == "name":
                name = tokens[pos][1]
                terms[name] = terms.get(name, 0) + coef
                pos += 1
            else:
                constant += coef
        elif kind == "name":
            terms[value] = terms.get(value, 0) + sign
            pos += 1
        else:
            raise ParseError(f"Unexpected '{value}' in '{text.strip()}'")

    return LinearFunction(terms, constant)


def parse_constraint(text: str) -> Constraint:
    body = text.strip().rstrip(";").strip()
    matches = list(_CMP.finditer(body))
    if len(matches) != 1:
        raise ParseError(f"Constraint '{body}' must contain exactly one comparison operator")
    cmp_match = matches[0]
    left = body[: cmp_match.start()].strip()
    right = body[cmp_match.end() :].strip()
    if not left or not right:
        raise ParseError(f"Constraint '{body}' missing lhs or rhs")
    return Constraint.new(
        parse_linear_function(left),
        _OPERATORS[cmp_match.group(0)],
        parse_linear_function(right),
    )


def parse_objective(text: str) -> Tuple[Sense, LinearFunction]:
    """Split ``"max x + 6y"`` into its command and its function."""
    match = _OBJECTIVE.match(text)
    if not match:
        raise ParseError("Objective must start with 'max' or 'min'")
    command, expr_text = match.groups()
    sense: Sense = "max" if command.lower().startswith("max") else "min"
    return sense, parse_linear_function(expr_text.strip().rstrip(";"))


def parse_problem(text: str) -> Tuple[Sense, LinearFunction, Constraints]:
    """
    Read a whole problem: the first non-blank line is the objective, the rest
    are constraints, one per line. Lines starting with ``#`` are comments.
    """

    lines: List[str] = [
        line for line in text.splitlines() if line.strip() and not line.strip().startswith("#")
    ]
    if not lines:
        raise ParseError("Problem is empty")
    sense, objective = parse_objective(lines[0])
    constraints = Constraints.compile("\n".join(lines[1:]))
    return sense, objective, constraints


def _tokenize(text: str) -> List[Tuple[str, str]]:
    tokens: List[Tuple[str, str]] = []
    body = text.rstrip()
    pos = 0
    while pos < len(body):
        match = _TOKEN.match(body, pos)
        if not match:
            bad = body[pos:].lstrip()[:1]
            raise ParseError(f"Unexpected character '{bad}' in '{text.strip()}'")
        kind = match.lastgroup or ""
        tokens.append((kind, match.group(kind)))
        pos = match.end()
    return tokens
