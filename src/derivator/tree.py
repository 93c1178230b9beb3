from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List


@dataclass
class Num:
    value: float


@dataclass
class Const:
    name: str


@dataclass
class Var:
    name: str


@dataclass
class Func:
    name: str
    args: List["Expr"] = field(default_factory=list)


@dataclass
class BinOp:
    op: str
    left: "Expr"
    right: "Expr"


Expr = Num | Const | Var | Func | BinOp


ADD_OPS = {"+", "-"}
MUL_OPS = {"*", "/"}
POW_OP = "^"
BINARY_OPS = ADD_OPS | MUL_OPS | {POW_OP}

# Print ranks only; parsing precedence lives in the parser.
OP_RANK = {"-": 0, "+": 1, "*": 2, "/": 3, "^": 4}
OP_NAMES = {"-": "Sub", "+": "Add", "*": "Mul", "/": "Div", "^": "Pow"}

NEGATE = "-"
LATEX_FUNCS = {"sin", "cos", "tan", "sec", "ln", "exp", "log"}
LATEX_CONSTS = {"pi": r"\pi", "e": "e"}


def format_number(value: float) -> str:
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def needs_parens(parent_op: str, child: Expr, is_left: bool = False) -> bool:
    """Parenthesize a binary child only when it ranks strictly below its parent.

    Equal ranks are left bare, so ``x - (y + z)`` prints as ``x - y + z``.
    The one exception is a power nested as the base of another power, which
    keeps ``(2 ^ 3) ^ 2`` apart from ``2 ^ 3 ^ 2``.
    """
    if not isinstance(child, BinOp):
        return False
    if is_left and parent_op == POW_OP and child.op == POW_OP:
        return True
    return OP_RANK[parent_op] > OP_RANK[child.op]


def format_expr(expr: Expr) -> str:
    if isinstance(expr, Num):
        return format_number(expr.value)
    if isinstance(expr, (Const, Var)):
        return expr.name
    if isinstance(expr, Func):
        return f"{expr.name}({', '.join(format_expr(arg) for arg in expr.args)})"
    if isinstance(expr, BinOp):
        left = format_expr(expr.left)
        right = format_expr(expr.right)
        if needs_parens(expr.op, expr.left, is_left=True):
            left = f"({left})"
        if needs_parens(expr.op, expr.right):
            right = f"({right})"
        return f"{left} {expr.op} {right}"
    raise ValueError(f"Unknown expression: {expr!r}")


def _indent(lines: List[str], last: bool) -> List[str]:
    head, rest = (" ╰─", "    ") if last else (" ├─", " │  ")
    return [(head if i == 0 else rest) + line for i, line in enumerate(lines)]


def _tree_lines(expr: Expr) -> List[str]:
    if isinstance(expr, (Num, Const, Var)):
        return [format_expr(expr)]
    if isinstance(expr, Func):
        children = expr.args
        lines = [expr.name]
    elif isinstance(expr, BinOp):
        children = [expr.left, expr.right]
        lines = [OP_NAMES[expr.op]]
    else:
        raise ValueError(f"Unknown expression: {expr!r}")
    for i, child in enumerate(children):
        lines.extend(_indent(_tree_lines(child), last=i == len(children) - 1))
    return lines


def format_tree(expr: Expr) -> str:
    """Render ``expr`` as an indented diagram, one node per line."""
    return "\n".join(_tree_lines(expr)) + "\n"


def _latex_func_name(name: str) -> str:
    base = name.rstrip("'")
    primes = name[len(base):]
    if base in LATEX_FUNCS:
        return "\\" + base + primes
    return rf"\operatorname{{{base}}}" + primes


def to_latex(expr: Expr) -> str:
    if isinstance(expr, Num):
        if math.isinf(expr.value):
            return r"-\infty" if expr.value < 0 else r"\infty"
        return format_number(expr.value)
    if isinstance(expr, Const):
        return LATEX_CONSTS.get(expr.name, expr.name)
    if isinstance(expr, Var):
        return expr.name
    if isinstance(expr, Func):
        if expr.name == NEGATE and len(expr.args) == 1:
            inner = to_latex(expr.args[0])
            if isinstance(expr.args[0], BinOp):
                inner = rf"\left({inner}\right)"
            return f"-{inner}"
        args = ", ".join(to_latex(arg) for arg in expr.args)
        return rf"{_latex_func_name(expr.name)}\left({args}\right)"
    if isinstance(expr, BinOp):
        left = to_latex(expr.left)
        right = to_latex(expr.right)
        if expr.op == "/":
            return rf"\frac{{{left}}}{{{right}}}"
        if expr.op == POW_OP:
            if isinstance(expr.left, BinOp) or (isinstance(expr.left, Func) and expr.left.name == NEGATE):
                left = rf"\left({left}\right)"
            return f"{{{left}}}^{{{right}}}"
        if needs_parens(expr.op, expr.left, is_left=True):
            left = rf"\left({left}\right)"
        if needs_parens(expr.op, expr.right) or (expr.op == "-" and isinstance(expr.right, BinOp) and expr.right.op in ADD_OPS):
            right = rf"\left({right}\right)"
        if expr.op == "*":
            return rf"{left} \cdot {right}"
        return f"{left} {expr.op} {right}"
    raise ValueError(f"Unknown expression: {expr!r}")
