# points24/expr/lexer.py
from __future__ import annotations
import string
from typing import List

from .errors import LexError
from .tokens import UNARY_CONTEXT, IdentToken, NumberToken, SymbolToken, Token

WHITESPACE = " \t\r\n"
DIGITS = frozenset(string.digits)
LETTERS = frozenset(string.ascii_letters)
_PLAIN_SYMBOLS = frozenset("(),!+*/")


def _scan(text: str, start: int, charset) -> int:
    """Index just past the run of `charset` characters beginning at `start`."""
    j = start
    while j < len(text) and text[j] in charset:
        j += 1
    return j


def _minus_starts_number(tokens: List[Token], text: str, i: int) -> bool:
    prev = tokens[-1] if tokens else None
    unary = prev is None or (isinstance(prev, SymbolToken) and prev.char in UNARY_CONTEXT)
    return unary and i + 1 < len(text) and text[i + 1] in DIGITS


def tokenize(text: str) -> List[Token]:
    """
    Split one infix line into tokens.

    A '-' is folded into the following digit run when it opens the line or
    follows one of ( , + - * / and is immediately followed by a digit;
    otherwise it is the binary minus symbol.
    """
    tokens: List[Token] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch in WHITESPACE:
            i += 1
        elif ch in _PLAIN_SYMBOLS:
            tokens.append(SymbolToken(ch))
            i += 1
        elif ch == "-":
            if _minus_starts_number(tokens, text, i):
                j = _scan(text, i + 1, DIGITS)
                tokens.append(NumberToken(text[i:j]))
                i = j
            else:
                tokens.append(SymbolToken(ch))
                i += 1
        elif ch in DIGITS:
            j = _scan(text, i, DIGITS)
            tokens.append(NumberToken(text[i:j]))
            i = j
        elif ch in LETTERS:
            j = _scan(text, i, LETTERS)
            tokens.append(IdentToken(text[i:j]))
            i = j
        else:
            raise LexError(ch, i)
    return tokens
