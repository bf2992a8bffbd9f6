# points24/expr/__init__.py
from .errors import (
    ExpectedToken,
    ExpressionError,
    ExpressionSyntaxError,
    LexError,
    NestingTooDeep,
    TrailingTokens,
    UnexpectedEnd,
    UnexpectedToken,
)
from .latex import escape_text, infix_to_latex, precedence, render, try_infix_to_latex
from .lexer import tokenize
from .nodes import BinaryOp, Call, Factorial, Node, NumberLiteral
from .parser import Parser, parse, parse_expression
from .tokens import IdentToken, NumberToken, SymbolToken, Token

__all__ = [
    "tokenize", "parse", "parse_expression", "Parser", "render", "precedence",
    "infix_to_latex", "try_infix_to_latex", "escape_text",
    "Token", "NumberToken", "SymbolToken", "IdentToken",
    "Node", "NumberLiteral", "BinaryOp", "Factorial", "Call",
    "ExpressionError", "LexError", "ExpressionSyntaxError",
    "ExpectedToken", "UnexpectedToken", "UnexpectedEnd", "TrailingTokens",
    "NestingTooDeep",
]
