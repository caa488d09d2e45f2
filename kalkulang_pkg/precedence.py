"""Operator-precedence climbing over the flat ``expr`` parse nodes.

An ``expr`` node holds ``atom (OP atom)*``. Climbing folds that sequence
into a binary tree: power binds tighter than multiply/divide, which bind
tighter than add/subtract; power groups to the right, everything else to
the left.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Sequence, Union

from lark import Token, Tree

from .syntax import BinaryOp, Command, Expression, Num, Operator, Variable
from .types import UnexpectedTokenError


class Assoc(Enum):
    LEFT = "left"
    RIGHT = "right"


PRECEDENCE = MappingProxyType(
    {
        Operator.ADD: (1, Assoc.LEFT),
        Operator.SUBTRACT: (1, Assoc.LEFT),
        Operator.MULTIPLY: (2, Assoc.LEFT),
        Operator.DIVIDE: (2, Assoc.LEFT),
        Operator.POWER: (3, Assoc.RIGHT),
    }
)

TERMINAL_OPERATORS = MappingProxyType(
    {
        "ADD": Operator.ADD,
        "SUBTRACT": Operator.SUBTRACT,
        "MULTIPLY": Operator.MULTIPLY,
        "DIVIDE": Operator.DIVIDE,
        "POWER": Operator.POWER,
    }
)

MIN_PRECEDENCE = 1

Node = Union[Tree, Token]


def _operator(node: Node) -> Operator:
    if isinstance(node, Token) and node.type in TERMINAL_OPERATORS:
        return TERMINAL_OPERATORS[node.type]
    raise UnexpectedTokenError(f"Expected an operator, got {node!r}")


def resolve_primary(node: Node) -> Expression:
    """Build the leaf or parenthesised sub-expression for one atom node."""
    if isinstance(node, Tree):
        if node.data == "num":
            return Num(float(node.children[0]))
        if node.data == "var":
            return Variable(str(node.children[0]))
        if node.data == "expr":
            return resolve_expr(node)
    raise UnexpectedTokenError(f"Expected a number, variable or expression, got {node!r}")


def _climb(items: Sequence[Node], pos: int, min_precedence: int) -> tuple[Expression, int]:
    lhs = resolve_primary(items[pos])
    pos += 1
    while pos < len(items):
        operator = _operator(items[pos])
        precedence, assoc = PRECEDENCE[operator]
        if precedence < min_precedence:
            break
        next_min = precedence if assoc is Assoc.RIGHT else precedence + 1
        if pos + 1 >= len(items):
            raise UnexpectedTokenError(f"Operator {operator.symbol!r} has no right operand")
        rhs, pos = _climb(items, pos + 1, next_min)
        lhs = BinaryOp(operator, lhs, rhs)
    return lhs, pos


def resolve_expr(tree: Tree) -> Expression:
    """Fold one ``expr`` parse node into an Expression tree.

    Raises:
        UnexpectedTokenError: If the node is not a well-formed ``expr``
    """
    if not isinstance(tree, Tree) or tree.data != "expr" or not tree.children:
        raise UnexpectedTokenError(f"Expected an expr node, got {tree!r}")
    expression, pos = _climb(tree.children, 0, MIN_PRECEDENCE)
    if pos != len(tree.children):
        raise UnexpectedTokenError(f"Unconsumed node {tree.children[pos]!r}")
    return expression


def resolve_command(tree: Tree) -> Command:
    """Turn a ``command`` parse tree into a Command."""
    if tree.data != "command":
        raise UnexpectedTokenError(f"Expected a command node, got {tree.data!r}")
    children = tree.children
    if len(children) == 2 and isinstance(children[0], Tree) and children[0].data == "target":
        return Command(str(children[0].children[0]), resolve_expr(children[1]))
    if len(children) == 1:
        return Command(None, resolve_expr(children[0]))
    raise UnexpectedTokenError(
        f"Unexpected command shape: {[getattr(c, 'data', c) for c in children]}"
    )
