from copy import deepcopy

import pytest

from derivator.differentiator import UnsupportedArity, differentiate
from derivator.parser import parse_text
from derivator.simplifier import simplify
from derivator.tree import BinOp, Func, Num, Var, format_expr


def derivative(text, variable=None):
    return differentiate(parse_text(text), variable)


def simplified_derivative(text, variable=None):
    return simplify(derivative(text, variable))[0]


def test_leaves():
    assert derivative("x") == Num(1.0)
    assert derivative("y") == Num(1.0)
    assert derivative("5") == Num(0.0)
    assert derivative("pi") == Num(0.0)


def test_sum_and_difference():
    assert derivative("x + 3") == BinOp("+", Num(1.0), Num(0.0))
    assert derivative("x - 3") == BinOp("-", Num(1.0), Num(0.0))


def test_product_rule():
    d = derivative("x * x")
    assert format_expr(d) == "x * 1 + x * 1"
    assert format_expr(simplify(d)[0]) == "x + x"


def test_quotient_rule():
    d = derivative("1 / x")
    assert format_expr(d) == "(x * 0 - 1 * 1) / x ^ 2"
    expected = BinOp("/", Num(-1.0), BinOp("^", Var("x"), Num(2.0)))
    assert simplify(d)[0] == expected
    assert format_expr(expected) == "-1 / x ^ 2"


def test_power_rule():
    d = derivative("x ^ 2")
    assert d == BinOp(
        "*",
        BinOp("^", Var("x"), Num(2.0)),
        BinOp(
            "+",
            BinOp("*", Num(0.0), Func("ln", [Var("x")])),
            BinOp("/", BinOp("*", Num(2.0), Num(1.0)), Var("x")),
        ),
    )
    assert format_expr(simplify(d)[0]) == "x ^ 2 * 2 / x"


def test_sin():
    d = derivative("sin(x)")
    assert d == BinOp("*", Num(1.0), Func("cos", [Var("x")]))
    assert format_expr(d) == "1 * cos(x)"
    assert simplify(d)[0] == Func("cos", [Var("x")])


@pytest.mark.parametrize(
    "text, expected",
    [
        ("cos(x)", "-1 * sin(x)"),
        ("tan(x)", "sec(x) ^ 2"),
        ("ln(x)", "1 / x"),
        ("-x", "-1"),
        ("f(x)", "f'(x)"),
        ("g(2 * x)", "2 * g'(2 * x)"),
    ],
)
def test_function_rules(text, expected):
    assert format_expr(simplified_derivative(text)) == expected


def test_chain_rule_copies_argument():
    expr = parse_text("sin(x * y)")
    outer = differentiate(expr).right
    assert outer == Func("cos", [BinOp("*", Var("x"), Var("y"))])
    assert outer.args[0] is not expr.args[0]


def test_multiple_arguments_are_unsupported():
    with pytest.raises(UnsupportedArity):
        derivative("f(x, y)")
    with pytest.raises(NotImplementedError):
        differentiate(Func("g", []))


def test_input_is_not_modified():
    expr = parse_text("x * sin(x) / x ^ 2")
    before = deepcopy(expr)
    d = differentiate(expr)
    assert expr == before
    simplify(d)
    assert expr == before


def test_with_respect_to_named_variable():
    assert derivative("y", "x") == Num(0.0)
    assert derivative("x", "x") == Num(1.0)
    assert simplified_derivative("x * y", "x") == Var("y")
    assert simplified_derivative("x * y", "y") == Var("x")
