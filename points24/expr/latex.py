# points24/expr/latex.py
"""
AST -> LaTeX markup for KaTeX/MathJax.

Parentheses are only emitted where a child's precedence rank is below
what its parent needs; division renders as \\frac and never wraps.
"""
from __future__ import annotations
import logging

from .errors import ExpressionError
from .nodes import BinaryOp, Call, Factorial, Node, NumberLiteral
from .parser import parse_expression

logger = logging.getLogger(__name__)

# precedence ranks, only used for parenthesization
PREC_ADDITIVE = 1
PREC_MULTIPLICATIVE = 2
PREC_POSTFIX = 3
PREC_ATOM = 4


def precedence(node: Node) -> int:
    if isinstance(node, BinaryOp):
        return PREC_ADDITIVE if node.op in ("+", "-") else PREC_MULTIPLICATIVE
    if isinstance(node, (Factorial, Call)):
        return PREC_POSTFIX
    if isinstance(node, NumberLiteral):
        return PREC_ATOM
    raise TypeError(f"not an expression node: {node!r}")


def _parens(latex: str) -> str:
    return f"\\left({latex}\\right)"


def _wrap_if(child: Node, min_prec: int, all_args: bool) -> str:
    latex = render(child, all_args=all_args)
    return _parens(latex) if precedence(child) < min_prec else latex


def _render_call(node: Call, all_args: bool) -> str:
    args = node.args
    arg = render(args[0], all_args=all_args) if args else ""
    if node.name == "sqrt":
        return f"\\sqrt{{{arg}}}"
    if node.name == "lg":
        return f"\\lg{_parens(arg)}"
    if node.name == "lb":
        return f"\\mathrm{{lb}}{_parens(arg)}"
    if node.name == "log" and len(args) >= 2:
        base = render(args[0], all_args=all_args)
        value = render(args[1], all_args=all_args)
        return f"\\log_{{{base}}}{_parens(value)}"
    if all_args and len(args) > 1:
        arg = ", ".join(render(a, all_args=all_args) for a in args)
    return f"\\operatorname{{{node.name}}}{_parens(arg)}"


def render(node: Node, all_args: bool = False) -> str:
    """
    Render an expression tree as LaTeX.

    Calls other than two-argument ``log`` only show their first argument
    unless ``all_args`` is set.
    """
    if isinstance(node, NumberLiteral):
        return node.text
    if isinstance(node, BinaryOp):
        if node.op == "/":
            num = render(node.left, all_args=all_args)
            den = render(node.right, all_args=all_args)
            return f"\\frac{{{num}}}{{{den}}}"
        if node.op == "*":
            left = _wrap_if(node.left, PREC_MULTIPLICATIVE, all_args)
            right = _wrap_if(node.right, PREC_MULTIPLICATIVE, all_args)
            return f"{left} \\cdot {right}"
        left = _wrap_if(node.left, PREC_ADDITIVE, all_args)
        right = _wrap_if(node.right, PREC_ADDITIVE, all_args)
        return f"{left} {node.op} {right}"
    if isinstance(node, Factorial):
        child = node.operand
        inner = render(child, all_args=all_args)
        if isinstance(child, Factorial) or precedence(child) < PREC_POSTFIX:
            inner = _parens(inner)
        return f"{inner}!"
    if isinstance(node, Call):
        return _render_call(node, all_args)
    raise TypeError(f"not an expression node: {node!r}")


def escape_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("{", "\\{").replace("}", "\\}")


def try_infix_to_latex(text: str, all_args: bool = False):
    """Return (latex, ok); ok is False when the text fallback was used."""
    try:
        return render(parse_expression(text), all_args=all_args), True
    except (ExpressionError, RecursionError) as e:
        # long flat chains (1+1+...+1, 5!!...!) build trees deeper than the
        # nesting limit, so render itself can still run out of stack
        logger.debug("LaTeX fallback for %r: %s", text, e)
        return f"\\text{{{escape_text(text)}}}", False


def infix_to_latex(text: str, all_args: bool = False) -> str:
    """Markup for one solver line; unparsable text comes back as \\text{...}."""
    return try_infix_to_latex(text, all_args=all_args)[0]
