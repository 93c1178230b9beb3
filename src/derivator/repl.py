from __future__ import annotations

import logging
import sys
from typing import List, Optional, TextIO

from .config import Config
from .lexer import LexError, tokenize
from .parser import ParseError, parse
from .pipeline import DERIVATIVE, DERIVATIVE_SIMPLIFIED, INPUT, SIMPLIFIED, Step, derive_expr
from .simplifier import EvaluationError
from .tree import format_expr, format_tree

STAGE_MESSAGES = {
    INPUT: "input read as",
    SIMPLIFIED: "input simplified to",
    DERIVATIVE: "derivative calculated",
    DERIVATIVE_SIMPLIFIED: "derivative simplified to",
}


def print_steps(steps: List[Step], out: TextIO) -> None:
    for label, expr in steps:
        print(f"{STAGE_MESSAGES[label]}: {format_expr(expr)}", file=out)
        print(format_tree(expr), file=out)


def run_line(
    line: str,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
    variable: Optional[str] = None,
) -> bool:
    """Handle one line of input; return False when the loop should stop."""
    out = sys.stdout if out is None else out
    err = sys.stderr if err is None else err
    line = line.strip()
    if line.lower() == Config.EXIT_COMMAND:
        print("bye", file=out)
        return False
    if not line:
        return True

    try:
        tokens = tokenize(line)
    except LexError as exc:
        print(f"lex error: {exc}", file=err)
        return True
    print(f"tokens read: {tokens}", file=out)

    try:
        expr = parse(tokens)
    except ParseError as exc:
        print(f"parse error: {type(exc).__name__}: {exc}", file=err)
        return True

    try:
        steps = derive_expr(expr, variable)
        print_steps(steps, out)
    except EvaluationError as exc:
        print_steps(getattr(exc, "steps", []), out)
        print(f"evaluation error: {type(exc).__name__}: {exc}", file=err)
    except RecursionError:
        print("evaluation error: expression nested too deeply", file=err)
    return True


def main() -> None:
    logging.basicConfig(level=Config.LOG_LEVEL, format="[%(name)s] [%(levelname)s] %(message)s")
    while True:
        try:
            line = input(Config.PROMPT)
        except EOFError:
            break
        if not run_line(line, variable=Config.VARIABLE):
            break


if __name__ == "__main__":
    main()
