from pydantic import BaseModel, Field
from typing import Literal, List, Dict, Optional

Sense = Literal["min", "max"]
Status = Literal["optimal", "infeasible", "unbounded", "iteration_limit"]


class StepOptions(BaseModel):
    use_bland_rule: bool = True
    max_iters: int = Field(default=10_000, ge=1)


class StepState(BaseModel):
    """What the presentation layer needs to draw one dictionary."""

    step: int
    frontier: int
    sense: Sense
    objective: str
    rows: List[str] = Field(default_factory=list)
    basic_variables: List[str] = Field(default_factory=list)
    feasible: bool
    values: Dict[str, float] | None
    objective_value: Optional[float]
    entering: Optional[str]
    optimal: bool


class SimplexSolution(BaseModel):
    status: Status
    objective_value: Optional[float]
    x: Dict[str, float] | None
    iterations: int
    message: str = ""
