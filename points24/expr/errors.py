# points24/expr/errors.py
"""
Errors raised by the expression front end.

Everything derives from ExpressionError so callers that only want
"render or fall back" can catch one class; callers that care can branch
on the concrete kind instead of parsing message text.
"""
from __future__ import annotations
from typing import Optional, Sequence


class ExpressionError(ValueError):
    pass


class LexError(ExpressionError):
    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(f"unexpected char: {char}")


class ExpressionSyntaxError(ExpressionError):
    pass


class ExpectedToken(ExpressionSyntaxError):
    def __init__(self, expected: str, found: Optional[str] = None):
        self.expected = expected
        self.found = found
        if found is None:
            super().__init__(f"expected {expected}")
        else:
            super().__init__(f"expected {expected}, found {found}")


class UnexpectedToken(ExpressionSyntaxError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"unexpected token: {token}")


class UnexpectedEnd(ExpressionSyntaxError):
    def __init__(self):
        super().__init__("unexpected end")


class TrailingTokens(ExpressionSyntaxError):
    def __init__(self, tokens: Sequence[str]):
        self.tokens = tuple(tokens)
        super().__init__(f"extra tokens: {' '.join(self.tokens)}")


class NestingTooDeep(ExpressionSyntaxError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"expression nested deeper than {limit} levels")
