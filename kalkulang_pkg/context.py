"""Evaluation context: variable bindings and anonymous result slots."""

from __future__ import annotations

import operator
from types import MappingProxyType
from typing import Callable, Mapping

import numpy as np

from .config import ANONYMOUS_PREFIX
from .logging_config import get_logger
from .parser import parse_command
from .syntax import BinaryOp, Command, Expression, Num, Operator, Variable
from .types import DivisionByZeroError, UndefinedVariableError, UnexpectedTokenError

logger = get_logger("context")


def _divide(left: float, right: float) -> float:
    if right == 0.0:
        raise DivisionByZeroError(f"Division by zero: {left!r} / {right!r}")
    return left / right


def _power(left: float, right: float) -> float:
    # IEEE pow: overflow gives inf, negative base with fractional exponent gives nan
    with np.errstate(all="ignore"):
        return float(np.power(np.float64(left), np.float64(right)))


_BIN_OPS: Mapping[Operator, Callable[[float, float], float]] = MappingProxyType(
    {
        Operator.ADD: operator.add,
        Operator.SUBTRACT: operator.sub,
        Operator.MULTIPLY: operator.mul,
        Operator.DIVIDE: _divide,
        Operator.POWER: _power,
    }
)


class Context:
    """Calculator session state.

    Holds named bindings and the counter used to name results of commands
    without an explicit target (``$0``, ``$1``, ...). One context belongs to
    one session; it is not safe to share between threads.
    """

    def __init__(self) -> None:
        self._anonymous_counter = 0
        self._variables: dict[str, float] = {}

    @property
    def anonymous_counter(self) -> int:
        """Number of anonymous slot names handed out so far."""
        return self._anonymous_counter

    @property
    def bindings(self) -> Mapping[str, float]:
        """Read-only view of the current bindings."""
        return MappingProxyType(self._variables)

    def get(self, name: str, default: float | None = None) -> float | None:
        return self._variables.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self._variables

    def __len__(self) -> int:
        return len(self._variables)

    def __repr__(self) -> str:
        return (
            f"Context(anonymous_counter={self._anonymous_counter}, "
            f"bindings={self._variables!r})"
        )

    def reset(self) -> None:
        """Forget every binding and restart anonymous naming at ``$0``."""
        self._anonymous_counter = 0
        self._variables.clear()

    def evaluate(self, expression: Expression) -> float:
        """Evaluate an expression against the current bindings.

        Operands are evaluated left before right; the first failure aborts
        the whole expression.

        Raises:
            UndefinedVariableError: If a referenced name is not bound
            DivisionByZeroError: If a divisor evaluates to zero
        """
        if isinstance(expression, Num):
            return expression.value

        if isinstance(expression, Variable):
            if expression.name not in self._variables:
                raise UndefinedVariableError(expression.name)
            return self._variables[expression.name]

        if isinstance(expression, BinaryOp):
            left = self.evaluate(expression.left)
            right = self.evaluate(expression.right)
            return _BIN_OPS[expression.operator](left, right)

        raise UnexpectedTokenError(f"Unsupported expression: {type(expression).__name__}")

    def _binding_name(self, command: Command) -> str:
        if command.target is not None:
            return command.target
        name = f"{ANONYMOUS_PREFIX}{self._anonymous_counter}"
        self._anonymous_counter += 1
        return name

    def apply(self, command: Command) -> tuple[str, float]:
        """Evaluate a command and store its result.

        The result is bound to ``command.target``, or to the next anonymous
        slot when there is no target. The slot number is consumed even if
        evaluation then fails. The new binding is not visible while its own
        expression is evaluated.

        Returns:
            Tuple (binding_name, value)

        Raises:
            EvaluationError: If the expression cannot be evaluated; no
                binding is written in that case
        """
        name = self._binding_name(command)
        value = self.evaluate(command.expression)
        self._variables[name] = value
        logger.debug("Bound %s = %r", name, value)
        return name, value

    def execute(self, line: str) -> tuple[str, float]:
        """Parse one input line and apply it.

        Raises:
            ParseError: If the line is rejected by the parser
            EvaluationError: If the command cannot be evaluated
        """
        return self.apply(parse_command(line))
