"""Command grammar of the calculator language.

The ``expr`` rule is deliberately flat: it yields the operand/operator
sequence of one (sub)expression and leaves grouping to
:mod:`kalkulang_pkg.precedence`. The trees it produces match the layered
form::

    command := (identifier "=")? expr
    expr    := term (("+"|"-") term)*
    term    := power (("*"|"/") power)*
    power   := atom ("^" power)?
    atom    := number | identifier | slot | "(" expr ")"
"""

from __future__ import annotations

from functools import lru_cache

from lark import Lark

COMMAND_GRAMMAR = r"""
command: (target "=")? expr

expr: atom (_operator atom)*

?atom: num
     | var
     | "(" expr ")"

_operator: ADD | SUBTRACT | MULTIPLY | DIVIDE | POWER

target: IDENTIFIER
var: IDENTIFIER | SLOT
num: NUMBER

ADD: "+"
SUBTRACT: "-"
MULTIPLY: "*"
DIVIDE: "/"
POWER: "^"

NUMBER: /[0-9]+(\.[0-9]+)?/
IDENTIFIER: /[A-Za-z_][A-Za-z0-9_]*/
SLOT: /\$[0-9]+/

%import common.WS_INLINE
%ignore WS_INLINE
"""

# Terminal names of the operator tokens kept in ``expr`` nodes
OPERATOR_TERMINALS = ("ADD", "SUBTRACT", "MULTIPLY", "DIVIDE", "POWER")


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    """Return the shared LALR parser for :data:`COMMAND_GRAMMAR`."""
    return Lark(COMMAND_GRAMMAR, start="command", parser="lalr")
