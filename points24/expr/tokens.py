# points24/expr/tokens.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Union

SYMBOLS = "(),!+-*/"

# a '-' directly after one of these (or at the start) can start a negative literal
UNARY_CONTEXT = "(,+-*/"


@dataclass(frozen=True)
class NumberToken:
    text: str  # decimal digits, optionally with a folded leading '-'


@dataclass(frozen=True)
class SymbolToken:
    char: str


@dataclass(frozen=True)
class IdentToken:
    name: str


Token = Union[NumberToken, SymbolToken, IdentToken]


def token_text(tok: Token) -> str:
    """Source text of a token, used in error messages."""
    if isinstance(tok, NumberToken):
        return tok.text
    if isinstance(tok, SymbolToken):
        return tok.char
    if isinstance(tok, IdentToken):
        return tok.name
    raise TypeError(f"not a token: {tok!r}")


def is_symbol(tok: Token | None, chars: str) -> bool:
    return isinstance(tok, SymbolToken) and tok.char in chars
