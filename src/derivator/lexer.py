from __future__ import annotations

import logging
import string
from typing import List, Tuple

Token = Tuple[str, str]
Tokens = List[Token]

logger = logging.getLogger(__name__)

DIGITS = set(string.digits)
LETTERS = set(string.ascii_letters)
OPERATORS = set("+-*/^")
SYMBOLIC_CONSTANTS = {"e", "pi"}
SINGLE_CHAR_TOKENS = {"(": "LPAREN", ")": "RPAREN", ",": "COMMA"}


class LexError(ValueError):
    def __init__(self, message: str, position: int):
        super().__init__(message)
        self.position = position


def tokenize(s: str) -> Tokens:
    tokens: Tokens = []
    i = 0
    while i < len(s):
        ch = s[i]
        if ch.isspace():
            i += 1
            continue
        if ch in DIGITS:
            j = i
            seen_dot = False
            while j < len(s) and (s[j] in DIGITS or s[j] == "."):
                if s[j] == ".":
                    if seen_dot:
                        raise LexError(f"Second decimal point at position {j}", j)
                    seen_dot = True
                j += 1
            tokens.append(("NUMBER", s[i:j]))
            i = j
            continue
        if ch in LETTERS:
            j = i
            while j < len(s) and s[j] in LETTERS:
                j += 1
            name = s[i:j]
            if j < len(s) and s[j] == "(":
                tokens.append(("FUNC", name))
            elif name in SYMBOLIC_CONSTANTS:
                tokens.append(("CONST", name))
            else:
                tokens.append(("VAR", name))
            i = j
            continue
        if ch in SINGLE_CHAR_TOKENS:
            tokens.append((SINGLE_CHAR_TOKENS[ch], ch))
            i += 1
            continue
        if ch in OPERATORS:
            tokens.append(("OP", ch))
            i += 1
            continue
        raise LexError(f"Unexpected character {ch!r} at position {i}", i)
    logger.debug("tokenized %r into %d tokens", s, len(tokens))
    return tokens
