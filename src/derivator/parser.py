from __future__ import annotations

import logging
from typing import List, Optional

from .lexer import Token, Tokens, tokenize
from .tree import ADD_OPS, MUL_OPS, NEGATE, POW_OP, BinOp, Const, Expr, Func, Num, Var

logger = logging.getLogger(__name__)


class ParseError(ValueError):
    pass


class EndOfStream(ParseError):
    pass


class UnclosedParen(ParseError):
    pass


class MissingParen(ParseError):
    pass


class UnexpectedOperator(ParseError):
    pass


class UnexpectedTokens(ParseError):
    pass


class NestingTooDeep(ParseError):
    pass


class Parser:
    def __init__(self, tokens: Tokens):
        self.tokens = tokens
        self.pos = 0

    def peek(self) -> Optional[Token]:
        if self.pos >= len(self.tokens):
            return None
        return self.tokens[self.pos]

    def advance(self) -> Token:
        tok = self.peek()
        if tok is None:
            raise EndOfStream("Unexpected end of input")
        self.pos += 1
        return tok

    def accept_op(self, ops: set[str]) -> Optional[str]:
        tok = self.peek()
        if tok and tok[0] == "OP" and tok[1] in ops:
            self.pos += 1
            return tok[1]
        return None

    def expect(self, kind: str) -> Token:
        tok = self.advance()
        if tok[0] != kind:
            raise MissingParen(f"Expected {kind}, got {tok}")
        return tok

    def parse_term(self) -> Expr:
        node = self.parse_factor()
        while True:
            op = self.accept_op(ADD_OPS)
            if op is None:
                return node
            node = BinOp(op, node, self.parse_factor())

    def parse_factor(self) -> Expr:
        node = self.parse_power()
        while True:
            op = self.accept_op(MUL_OPS)
            if op is None:
                return node
            node = BinOp(op, node, self.parse_power())

    def parse_power(self) -> Expr:
        operands: List[Expr] = [self.parse_unary()]
        while self.accept_op({POW_OP}):
            operands.append(self.parse_unary())
        node = operands.pop()
        while operands:
            node = BinOp(POW_OP, operands.pop(), node)
        return node

    def parse_unary(self) -> Expr:
        if self.accept_op({NEGATE}):
            return Func(NEGATE, [self.parse_unary()])
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        kind, value = self.advance()
        if kind == "NUMBER":
            return Num(float(value))
        if kind == "CONST":
            return Const(value)
        if kind == "VAR":
            return Var(value)
        if kind == "FUNC":
            self.expect("LPAREN")
            args = [self.parse_term()]
            while True:
                tok = self.peek()
                if tok is None or tok[0] != "COMMA":
                    break
                self.pos += 1
                args.append(self.parse_term())
            self.expect("RPAREN")
            return Func(value, args)
        if kind == "LPAREN":
            expr = self.parse_term()
            self.expect("RPAREN")
            return expr
        if kind == "RPAREN":
            raise UnclosedParen(f"Missing operand before ')' at token {self.pos - 1}")
        if kind == "OP":
            raise UnexpectedOperator(f"Unexpected operator {value!r} at token {self.pos - 1}")
        raise UnexpectedTokens(f"Unexpected token {(kind, value)} at token {self.pos - 1}")


def parse(tokens: Tokens) -> Expr:
    parser = Parser(tokens)
    try:
        expr = parser.parse_term()
    except RecursionError as exc:
        raise NestingTooDeep("Expression nested too deeply") from exc
    if parser.peek() is not None:
        raise UnexpectedTokens(f"Unexpected trailing input at token {parser.pos}: {parser.peek()}")
    logger.debug("parsed %d tokens", len(tokens))
    return expr


def parse_text(text: str) -> Expr:
    return parse(tokenize(text))
