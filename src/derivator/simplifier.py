"""Fixed-point simplification by constant folding and identity rules.

Each pass walks the tree bottom-up. Child slots are rewritten in place, so
when an :class:`EvaluationError` aborts a call the caller's tree keeps the
rewrites made before the error. A replacement of the root itself is only
visible through the returned tree.
"""
from __future__ import annotations

import logging
import math
import operator
from typing import Callable, Dict, List, Optional, Tuple

from .config import Config
from .tree import BinOp, Const, Expr, Func, Num, Var

logger = logging.getLogger(__name__)


class EvaluationError(ArithmeticError):
    pass


class DivisionByZero(EvaluationError, ZeroDivisionError):
    pass


class WrongArguments(EvaluationError, TypeError):
    pass


def _divide(a: float, b: float) -> float:
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def _power(a: float, b: float) -> float:
    try:
        result = math.pow(a, b)
    except OverflowError:
        # An odd integral exponent keeps the sign of a negative base.
        if a < 0 and float(b).is_integer() and int(b) % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # Zero to a negative power or a fractional power of a negative base.
        if a == 0:
            if float(b).is_integer() and int(b) % 2 == 1:
                return math.copysign(math.inf, a)
            return math.inf
        return math.nan
    return result


FOLD: Dict[str, Callable[[float, float], float]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": _divide,
    "^": _power,
}


def _is_num(expr: Expr, value: float) -> bool:
    return isinstance(expr, Num) and expr.value == value


def _sin_value(arg: Expr) -> Optional[Expr]:
    if _is_num(arg, 0) or (isinstance(arg, Const) and arg.name == "pi"):
        return Num(0.0)
    return None


def _ln_value(arg: Expr) -> Optional[Expr]:
    if _is_num(arg, 0):
        return Num(0.0)
    if isinstance(arg, Const) and arg.name == "e":
        return Num(1.0)
    return None


SPECIAL_VALUES: Dict[str, Callable[[Expr], Optional[Expr]]] = {
    "sin": _sin_value,
    "ln": _ln_value,
}


def standard_value(name: str, args: List[Expr]) -> Optional[Expr]:
    rule = SPECIAL_VALUES.get(name)
    if rule is None:
        return None
    if len(args) != 1:
        raise WrongArguments(f"{name}() takes exactly one argument ({len(args)} given)")
    return rule(args[0])


def algebra_simplify(expr: BinOp) -> Optional[Expr]:
    left = expr.left
    right = expr.right
    if expr.op in ("+", "-"):
        if _is_num(left, 0):
            return right
        if _is_num(right, 0):
            return left
    elif expr.op == "*":
        if _is_num(left, 1):
            return right
        if _is_num(left, 0):
            return Num(0.0)
        if _is_num(right, 1):
            return left
        if _is_num(right, 0):
            return Num(0.0)
    elif expr.op == "/":
        if _is_num(left, 0):
            return Num(0.0)
        if _is_num(right, 1):
            return left
        if _is_num(right, 0):
            raise DivisionByZero("Division by zero")
    elif expr.op == "^":
        if _is_num(left, 1):
            return Num(1.0)
        if _is_num(right, 0):
            return Num(1.0)
        if _is_num(right, 1):
            return left
    return None


def simplify_once(expr: Expr) -> Tuple[Expr, bool]:
    if isinstance(expr, (Num, Const, Var)):
        return expr, False
    if isinstance(expr, Func):
        changed = False
        for i, arg in enumerate(expr.args):
            expr.args[i], arg_changed = simplify(arg)
            changed = changed or arg_changed
        value = standard_value(expr.name, expr.args)
        if value is not None:
            logger.debug("special value %s(...) -> %s", expr.name, value)
            return value, True
        return expr, changed
    if isinstance(expr, BinOp):
        expr.left, left_changed = simplify(expr.left)
        expr.right, right_changed = simplify(expr.right)
        if isinstance(expr.left, Num) and isinstance(expr.right, Num):
            # Folding runs before the identity rules, so a literal divided
            # by literal zero becomes inf or nan instead of raising.
            return Num(FOLD[expr.op](expr.left.value, expr.right.value)), True
        rewritten = algebra_simplify(expr)
        if rewritten is not None:
            return rewritten, True
        return expr, left_changed or right_changed
    raise ValueError(f"Unknown expression: {expr!r}")


def simplify(expr: Expr, max_passes: Optional[int] = None) -> Tuple[Expr, bool]:
    """Simplify ``expr`` until a pass changes nothing.

    Returns the simplified tree and whether any pass changed it. Raises
    :class:`DivisionByZero` when a non-literal is divided by literal zero and
    :class:`WrongArguments` when ``sin`` or ``ln`` is not called with exactly
    one argument.
    """
    if max_passes is None:
        max_passes = Config.MAX_PASSES
    simplified = False
    for passes in range(1, max_passes + 1):
        expr, changed = simplify_once(expr)
        if not changed:
            logger.debug("fixed point after %d passes", passes)
            return expr, simplified
        simplified = True
    raise EvaluationError(f"No fixed point after {max_passes} passes")
