#!/usr/bin/env python3
import argparse
import json
import random
from pathlib import Path
from typing import Dict, List, Optional


def _expression(coefs: List[int]) -> str:
    parts = []
    for idx, coef in enumerate(coefs):
        term = f"x{idx}" if coef == 1 else f"{coef}x{idx}"
        parts.append(term if not parts else f"+ {term}")
    return " ".join(parts)


def generate_random_lp(num_vars: int, num_constraints: int, seed: Optional[int] = None) -> Dict[str, str]:
    """
    Random maximisation problem whose origin is feasible: every constraint is
    ``sum(a_i x_i) <= b`` with positive ``a_i`` and ``b``, so it is also bounded.
    """

    rng = random.Random(seed)
    lines: List[str] = []
    for _ in range(num_constraints):
        coefs = [rng.randint(1, 9) for _ in range(num_vars)]
        rhs = rng.randint(num_vars * 2, num_vars * 6)
        lines.append(f"{_expression(coefs)} <= {rhs}")
    objective = [rng.randint(1, 5) for _ in range(num_vars)]
    return {
        "objective": f"max {_expression(objective)}",
        "constraints": "\n".join(lines),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random origin-feasible LP instances.")
    parser.add_argument("--vars", type=int, default=3, help="Number of variables")
    parser.add_argument("--constraints", type=int, default=3, help="Number of constraints")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--out", type=Path, default=None, help="Optional output file")
    args = parser.parse_args()

    payload = [
        generate_random_lp(args.vars, args.constraints, (args.seed or 0) + idx)
        for idx in range(args.count)
    ]

    if args.out:
        Path(args.out).write_text(json.dumps(payload, indent=2))
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
