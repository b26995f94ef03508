from fractions import Fraction

import pytest

from simplex_stepper.errors import DomainError
from simplex_stepper.lp.linear_function import LinearFunction, gap_name, is_gap, variable_order


def lf(text: str) -> LinearFunction:
    return LinearFunction.parse(text)


def test_zero_is_additive_identity():
    f = lf("x + 2y - 3")
    assert f + LinearFunction.zero() == f
    assert LinearFunction.zero() == LinearFunction()
    assert str(LinearFunction.zero()) == "0"


def test_arithmetic_merges_and_prunes_terms():
    f = lf("x + 2y + 1")
    g = lf("3x - 2y + 4")

    assert f + g == LinearFunction({"x": 4}, 5)
    assert "y" not in f + g
    assert f - f == LinearFunction.zero()
    assert -f == LinearFunction({"x": -1, "y": -2}, -1)
    assert 2 * f == f * 2 == LinearFunction({"x": 2, "y": 4}, 2)
    assert f / 2 == LinearFunction({"x": Fraction(1, 2), "y": 1}, Fraction(1, 2))
    assert f + 1 == LinearFunction({"x": 1, "y": 2}, 2)
    assert 1 - f == LinearFunction({"x": -1, "y": -2}, 0)


def test_zero_coefficients_are_dropped():
    f = LinearFunction({"x": 0, "y": 1})
    assert f == LinearFunction({"y": 1})
    assert list(f.variables()) == ["y"]
    assert hash(lf("x + y")) == hash(lf("y + x"))


def test_rejects_non_finite_and_non_numeric_coefficients():
    with pytest.raises(DomainError):
        LinearFunction({"x": float("nan")})
    with pytest.raises(DomainError):
        LinearFunction({}, float("inf"))
    with pytest.raises(TypeError):
        LinearFunction({"x": "2"})
    with pytest.raises(TypeError):
        lf("x") * lf("y")


def test_float_coefficients_keep_their_decimal_value():
    assert LinearFunction({"x": 0.1}).coefficient("x") == Fraction(1, 10)
    assert LinearFunction({"x": 0.1}).coefficient("y") == 0


def test_variable_enumeration_orders():
    f = LinearFunction({"z": 1, "x": 1, "_g2": 1, "y": 1})

    assert list(f.variables()) == ["z", "x", "_g2", "y"]
    assert list(f.variables()) == list(f.variables())
    assert f.sorted_variables() == ["x", "y", "z", "_g2"]
    assert f.non_gap_variables() == ["z", "x", "y"]


def test_gap_naming_and_order():
    assert gap_name(4) == "_g4"
    assert is_gap("_g3")
    assert not is_gap("g3")
    assert sorted(["_g10", "_g2", "b", "a"], key=variable_order) == ["a", "b", "_g2", "_g10"]


@pytest.mark.parametrize(
    "text,expected",
    [("x", "x"), ("2x", None), ("x + 1", None), ("x + y", None), ("", None)],
)
def test_single_variable_name(text, expected):
    assert lf(text).single_variable_name() == expected


def test_solve_for_rearranges_around_variable():
    f = lf("2x - 4y + 6")
    assert f.solve_for("x") == lf("2y - 3")
    with pytest.raises(DomainError):
        f.solve_for("z")


def test_substitute_replaces_every_occurrence():
    f = lf("3x + y + 1")
    assert f.substitute("x", lf("2 - y")) == lf("7 - 2y")
    assert f.substitute("z", lf("5")) == f


def test_first_entering_variable():
    f = LinearFunction({"z": 13, "y": -1, "x": 6})

    assert f.first_entering_variable() == "z"
    assert f.first_entering_variable(use_bland_rule=True) == "x"
    assert lf("-x - y + 4").first_entering_variable(True) is None
    assert LinearFunction({"_g1": 5, "z": 7}).first_entering_variable(True) == "z"
    assert LinearFunction({"_g1": 5, "y": 1}).first_entering_variable(False, exclude={"_g1"}) == "y"


def test_evaluate():
    assert lf("x + 6y + 13z").evaluate({"y": 300, "z": 100}) == 3100
    assert lf("x + 1").evaluate({}) == 1


def test_str():
    assert str(lf("x + 6y + 13z")) == "x + 6y + 13z"
    assert str(LinearFunction({"x": -1}, 200)) == "200 - x"
    assert str(LinearFunction({"y": Fraction(-2, 3)})) == "-2/3 y"
    assert repr(lf("x - 1")) == "LinearFunction('-1 + x')"
