"""SymPy rendering of parsed expressions.

Trees are converted without evaluation so the displayed form keeps the
structure the parser produced.
"""

from __future__ import annotations

import re

import sympy as sp

from .syntax import BinaryOp, Expression, Num, Operator, Variable
from .types import UnexpectedTokenError

_SUPERSCRIPTS = {
    "0": "⁰",
    "1": "¹",
    "2": "²",
    "3": "³",
    "4": "⁴",
    "5": "⁵",
    "6": "⁶",
    "7": "⁷",
    "8": "⁸",
    "9": "⁹",
    "-": "⁻",
}


def superscriptify(input_str: str) -> str:
    """Convert numeric string to Unicode superscript characters.

    Args:
        input_str: Input string with digits and '-' (e.g., "123", "-5")

    Returns:
        String with superscript Unicode characters (e.g., "¹²³", "⁻⁵")
    """
    return "".join(_SUPERSCRIPTS.get(char, char) for char in input_str)


def format_superscript(expr_str: str) -> str:
    """Replace Python power notation (**) with Unicode superscripts.

    Args:
        expr_str: Expression string (e.g., "x**2", "x**-3")

    Returns:
        String with superscripts (e.g., "x²", "x⁻³")
    """
    return re.sub(r"\*\*(\-?\d+)(?![\d.])", lambda m: superscriptify(m.group(1)), expr_str)


def _number(value: float) -> sp.Expr:
    if value.is_integer():
        return sp.Integer(int(value))
    return sp.Float(value)


def to_sympy(expression: Expression) -> sp.Expr:
    """Build an unevaluated SymPy expression mirroring the tree.

    Variables become Symbols; subtraction and division are expressed as
    SymPy does internally (``a + (-1)*b`` and ``a * b**-1``).
    """
    if isinstance(expression, Num):
        return _number(expression.value)
    if isinstance(expression, Variable):
        return sp.Symbol(expression.name)
    if isinstance(expression, BinaryOp):
        left = to_sympy(expression.left)
        right = to_sympy(expression.right)
        op = expression.operator
        if op is Operator.ADD:
            return sp.Add(left, right, evaluate=False)
        if op is Operator.SUBTRACT:
            return sp.Add(left, sp.Mul(sp.S.NegativeOne, right, evaluate=False), evaluate=False)
        if op is Operator.MULTIPLY:
            return sp.Mul(left, right, evaluate=False)
        if op is Operator.DIVIDE:
            return sp.Mul(left, sp.Pow(right, sp.S.NegativeOne, evaluate=False), evaluate=False)
        return sp.Pow(left, right, evaluate=False)
    raise UnexpectedTokenError(f"Unsupported expression: {type(expression).__name__}")


def render(expression: Expression) -> str:
    """Render an expression in compact maths notation (e.g. ``x²``)."""
    return format_superscript(sp.sstr(to_sympy(expression), full_prec=False))
