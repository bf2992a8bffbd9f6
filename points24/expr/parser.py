# points24/expr/parser.py
"""
Recursive-descent parser for solver infix lines.

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := primary ('!')*
    primary    := NUMBER
                | IDENT '(' [ expression (',' expression)* ] ')'
                | '(' expression ')'

Binary tiers are left-associative. The whole token sequence must be
consumed; anything left over is a TrailingTokens error. Groups and call
arguments may nest at most MAX_DEPTH levels.
"""
from __future__ import annotations
from typing import List, Optional, Sequence

from .errors import ExpectedToken, NestingTooDeep, TrailingTokens, UnexpectedEnd, UnexpectedToken
from .lexer import tokenize
from .nodes import BinaryOp, Call, Factorial, Node, NumberLiteral
from .tokens import IdentToken, NumberToken, SymbolToken, Token, is_symbol, token_text

MAX_DEPTH = 100


class Parser:
    """Parser state: the token tuple and the current position."""

    def __init__(self, tokens: Sequence[Token], max_depth: int = MAX_DEPTH):
        self.tokens = tuple(tokens)
        self.pos = 0
        self.depth = 0
        self.max_depth = max_depth

    # ---------------- token navigation ----------------
    def peek(self) -> Optional[Token]:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def match(self, char: str) -> bool:
        if is_symbol(self.peek(), char):
            self.pos += 1
            return True
        return False

    def expect(self, char: str) -> None:
        if not self.match(char):
            tok = self.peek()
            raise ExpectedToken(char, token_text(tok) if tok is not None else None)

    # ---------------- grammar ----------------
    def parse(self) -> Node:
        node = self.expression()
        if self.pos < len(self.tokens):
            raise TrailingTokens([token_text(t) for t in self.tokens[self.pos:]])
        return node

    def expression(self) -> Node:
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise NestingTooDeep(self.max_depth)
            node = self.term()
            while is_symbol(self.peek(), "+-"):
                op = self.advance().char
                node = BinaryOp(op, node, self.term())
            return node
        finally:
            self.depth -= 1

    def term(self) -> Node:
        node = self.factor()
        while is_symbol(self.peek(), "*/"):
            op = self.advance().char
            node = BinaryOp(op, node, self.factor())
        return node

    def factor(self) -> Node:
        node = self.primary()
        while self.match("!"):
            node = Factorial(node)
        return node

    def primary(self) -> Node:
        tok = self.peek()
        if tok is None:
            raise UnexpectedEnd()
        if isinstance(tok, NumberToken):
            self.advance()
            return NumberLiteral(tok.text)
        if isinstance(tok, IdentToken):
            self.advance()
            return Call(tok.name, tuple(self.arguments()))
        if isinstance(tok, SymbolToken) and tok.char == "(":
            self.advance()
            node = self.expression()
            self.expect(")")
            return node
        raise UnexpectedToken(token_text(tok))

    def arguments(self) -> List[Node]:
        self.expect("(")
        args: List[Node] = []
        if self.match(")"):
            return args
        args.append(self.expression())
        while self.match(","):
            args.append(self.expression())
        self.expect(")")
        return args


def parse(tokens: Sequence[Token]) -> Node:
    return Parser(tokens).parse()


def parse_expression(text: str) -> Node:
    """tokenize + parse in one step."""
    return parse(tokenize(text))
