"""Abstract syntax tree of the calculator language.

Nodes are frozen dataclasses: a parsed line is an immutable strict tree
and two parses of the same line compare equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Operator(Enum):
    """Binary operators, valued by their source symbol."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    POWER = "^"

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True)
class Num:
    """Numeric literal."""

    value: float

    def __str__(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)


@dataclass(frozen=True)
class Variable:
    """Reference to a binding, looked up at evaluation time."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class BinaryOp:
    """Binary operation owning both operand subtrees."""

    operator: Operator
    left: Expression
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator.symbol} {self.right})"


Expression = Union[Num, Variable, BinaryOp]


@dataclass(frozen=True)
class Command:
    """One input line: an optional assignment target and its expression."""

    target: Optional[str]
    expression: Expression

    def __str__(self) -> str:
        if self.target is None:
            return str(self.expression)
        return f"{self.target} = {self.expression}"
