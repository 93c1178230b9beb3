from __future__ import annotations

import logging
from copy import deepcopy
from typing import List, NamedTuple, Optional

from .differentiator import differentiate
from .lexer import tokenize
from .parser import parse
from .simplifier import EvaluationError, simplify
from .tree import Expr

logger = logging.getLogger(__name__)

INPUT = "input"
SIMPLIFIED = "simplified"
DERIVATIVE = "derivative"
DERIVATIVE_SIMPLIFIED = "derivative simplified"


class Step(NamedTuple):
    label: str
    expr: Expr


def derive_expr(expr: Expr, variable: Optional[str] = None) -> List[Step]:
    steps: List[Step] = [Step(INPUT, deepcopy(expr))]
    try:
        expr, changed = simplify(expr)
        logger.debug("input simplified (changed=%s)", changed)
        steps.append(Step(SIMPLIFIED, deepcopy(expr)))

        derivative = differentiate(expr, variable)
        steps.append(Step(DERIVATIVE, deepcopy(derivative)))

        derivative, changed = simplify(derivative)
        logger.debug("derivative simplified (changed=%s)", changed)
        steps.append(Step(DERIVATIVE_SIMPLIFIED, derivative))
    except EvaluationError as exc:
        exc.steps = steps
        raise
    return steps


def derive(text: str, variable: Optional[str] = None) -> List[Step]:
    """Run ``text`` through lexing, parsing, simplification and differentiation.

    Lex and parse errors propagate unchanged. An :class:`EvaluationError`
    propagates with a ``steps`` attribute holding the stages produced before it.
    """
    return derive_expr(parse(tokenize(text)), variable)
