#!/usr/bin/env python3
import time
from pathlib import Path

from simplex_stepper.lp.parser import parse_problem
from simplex_stepper.lp.simplex import solve_simplex, solve_text
from simplex_stepper.schemas import StepOptions
from scripts.generate_instances import generate_random_lp

EXAMPLES = Path(__file__).resolve().parent.parent / "examples"


def main() -> None:
    opts = StepOptions()
    print("name,status,objective,iterations,time_ms")

    for path in sorted(EXAMPLES.glob("*.lp")):
        sense, objective, constraints = parse_problem(path.read_text())
        start = time.perf_counter()
        solution = solve_simplex(sense, objective, constraints, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(
            f"examples/{path.name},{solution.status},{solution.objective_value},{solution.iterations},{elapsed_ms:.2f}"
        )

    for seed in range(3):
        instance = generate_random_lp(4, 4, seed)
        start = time.perf_counter()
        solution = solve_text(instance["objective"], instance["constraints"], opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(
            f"random-{seed},{solution.status},{solution.objective_value},{solution.iterations},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
