# points24/expr/nodes.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple, Union

BINARY_OPS = ("+", "-", "*", "/")


@dataclass(frozen=True)
class NumberLiteral:
    text: str  # kept verbatim, never evaluated


@dataclass(frozen=True)
class BinaryOp:
    op: str
    left: "Node"
    right: "Node"

    def __post_init__(self):
        if self.op not in BINARY_OPS:
            raise ValueError(f"unknown operator: {self.op}")


@dataclass(frozen=True)
class Factorial:
    operand: "Node"


@dataclass(frozen=True)
class Call:
    name: str
    args: Tuple["Node", ...] = ()


Node = Union[NumberLiteral, BinaryOp, Factorial, Call]
