from __future__ import annotations

from copy import deepcopy
from typing import Callable, Dict, List, Optional

from .tree import NEGATE, BinOp, Const, Expr, Func, Num, Var


class UnsupportedArity(NotImplementedError):
    pass


def _add(left: Expr, right: Expr) -> BinOp:
    return BinOp("+", left, right)


def _sub(left: Expr, right: Expr) -> BinOp:
    return BinOp("-", left, right)


def _mul(left: Expr, right: Expr) -> BinOp:
    return BinOp("*", left, right)


def _div(left: Expr, right: Expr) -> BinOp:
    return BinOp("/", left, right)


def _pow(left: Expr, right: Expr) -> BinOp:
    return BinOp("^", left, right)


# Derivative of the outer function, evaluated at its (copied) argument.
OUTER_DERIVATIVES: Dict[str, Callable[[Expr], Expr]] = {
    NEGATE: lambda arg: Num(-1.0),
    "sin": lambda arg: Func("cos", [arg]),
    "cos": lambda arg: _mul(Num(-1.0), Func("sin", [arg])),
    "tan": lambda arg: _pow(Func("sec", [arg]), Num(2.0)),
    "ln": lambda arg: _div(Num(1.0), arg),
}


def _outer_derivative(name: str, arg: Expr) -> Expr:
    rule = OUTER_DERIVATIVES.get(name)
    if rule is None:
        return Func(name + "'", [arg])
    return rule(arg)


def _function_derivative(name: str, args: List[Expr], variable: Optional[str]) -> Expr:
    if len(args) != 1:
        raise UnsupportedArity(f"Cannot differentiate {name}() with {len(args)} arguments")
    arg = args[0]
    return _mul(differentiate(arg, variable), _outer_derivative(name, deepcopy(arg)))


def _binop_derivative(op: str, left: Expr, right: Expr, variable: Optional[str]) -> Expr:
    def d(expr: Expr) -> Expr:
        return differentiate(expr, variable)

    def c(expr: Expr) -> Expr:
        return deepcopy(expr)

    if op == "+":
        return _add(d(left), d(right))
    if op == "-":
        return _sub(d(left), d(right))
    if op == "*":
        return _add(_mul(c(left), d(right)), _mul(c(right), d(left)))
    if op == "/":
        return _div(
            _sub(_mul(c(right), d(left)), _mul(c(left), d(right))),
            _pow(c(right), Num(2.0)),
        )
    if op == "^":
        return _mul(
            _pow(c(left), c(right)),
            _add(
                _mul(d(right), Func("ln", [c(left)])),
                _div(_mul(c(right), d(left)), c(left)),
            ),
        )
    raise ValueError(f"Unknown operator: {op!r}")


def differentiate(expr: Expr, variable: Optional[str] = None) -> Expr:
    """Return a new tree for the derivative of ``expr``.

    With ``variable`` left as ``None`` every variable is treated as the
    differentiation variable. Otherwise only variables of that name
    differentiate to 1 and the rest are constants.
    """
    if isinstance(expr, (Num, Const)):
        return Num(0.0)
    if isinstance(expr, Var):
        if variable is None or expr.name == variable:
            return Num(1.0)
        return Num(0.0)
    if isinstance(expr, BinOp):
        return _binop_derivative(expr.op, expr.left, expr.right, variable)
    if isinstance(expr, Func):
        return _function_derivative(expr.name, expr.args, variable)
    raise ValueError(f"Unknown expression: {expr!r}")
