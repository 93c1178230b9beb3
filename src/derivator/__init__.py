from .differentiator import UnsupportedArity, differentiate
from .lexer import LexError, tokenize
from .parser import (
    EndOfStream,
    MissingParen,
    NestingTooDeep,
    ParseError,
    UnclosedParen,
    UnexpectedOperator,
    UnexpectedTokens,
    parse,
    parse_text,
)
from .pipeline import Step, derive, derive_expr
from .simplifier import DivisionByZero, EvaluationError, WrongArguments, simplify
from .tree import BinOp, Const, Expr, Func, Num, Var, format_expr, format_tree, to_latex

__version__ = "0.1.0"
