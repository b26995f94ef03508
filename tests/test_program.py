from fractions import Fraction

import numpy as np
import pytest

from simplex_stepper.errors import InvalidState, Unbounded
from simplex_stepper.lp.constraint import Constraints
from simplex_stepper.lp.linear_function import LinearFunction
from simplex_stepper.lp.parser import parse_linear_function
from simplex_stepper.lp.program import LinearProgram


def make_program(objective: str = "x + 2y", constraints: str = "x + y <= 2\n x + 2y <= 3") -> LinearProgram:
    return LinearProgram(parse_linear_function(objective), Constraints.compile(constraints))


def test_non_gap_variables():
    assert make_program().non_gap_variables() == ["x", "y"]


def test_point_at_origin():
    program = make_program(constraints="x <= 2\nx + y <= 3")
    np.testing.assert_array_equal(program.point(), [0.0, 0.0])
    assert program.values() == [("x", 0.0), ("y", 0.0)]


def test_pivot_moves_to_adjacent_vertex():
    program = make_program(constraints="x <= 200\n300 - x + 2y >= 0")

    assert program.pivot("x") == 0
    np.testing.assert_array_equal(program.point(), [200.0, 0.0])
    assert program.objective == LinearFunction({"_g1": -1, "y": 2}, 200)
    assert program.objective_value() == 200
    assert program.is_valid()


def test_pivot_without_restricting_row_is_unbounded():
    program = make_program(constraints="x <= 200\n300 - x + 2y >= 0")
    program.pivot("x")

    assert program.is_unbounded()
    with pytest.raises(Unbounded):
        program.pivot("y")


def test_bounded_program_is_not_unbounded():
    assert not make_program().is_unbounded()


def test_point_rejects_infeasible_dictionary():
    program = make_program("x", "x >= 1")
    assert not program.is_valid()
    with pytest.raises(InvalidState):
        program.point()
    with pytest.raises(InvalidState):
        program.values()


def test_entering_variable_skips_fixed_gaps():
    program = make_program("x + y", "x - y = 0\nx <= 4")
    program.objective = LinearFunction({"_g1": 3, "y": 1})
    assert program.entering_variable(use_bland_rule=False) == "y"


def test_objective_value_restores_sign_for_min():
    program = LinearProgram(-parse_linear_function("-x"), Constraints.compile("x <= 3"), "min")
    program.pivot("x")
    assert program.objective_value() == -3


def test_copy_leaves_original_untouched():
    program = make_program()
    scratch = program.copy()
    scratch.pivot("y")

    assert program.objective == parse_linear_function("x + 2y")
    assert program.constraints.basic_variables() == ["_g1", "_g2"]
    assert scratch != program
    assert scratch.objective_value() == Fraction(3)


def test_str():
    assert str(make_program(constraints="x + y <= 2")) == "max x + 2y\n_g1 = 2 - x - y"
