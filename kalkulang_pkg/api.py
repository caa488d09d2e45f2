"""Public API for Kalkulang - returns structured objects without printing."""

from __future__ import annotations

from .context import Context
from .logging_config import get_logger
from .parser import parse_command
from .syntax import Command
from .types import EvalResult, EvaluationError, ParseError

logger = get_logger("api")


def parse(line: str) -> Command:
    """Parse one input line into a Command.

    Raises:
        ParseError: If the line is rejected
    """
    return parse_command(line)


def evaluate(line: str, context: Context | None = None) -> EvalResult:
    """Run one calculator command.

    Args:
        line: Command line (e.g., "3 + 5", "v = 3 - 2")
        context: Session context to read and update (a fresh one if omitted)

    Returns:
        EvalResult with the binding name and value, or the error

    Example:
        >>> from kalkulang_pkg.api import evaluate
        >>> from kalkulang_pkg.context import Context
        >>> ctx = Context()
        >>> evaluate("v = 3 - 2", ctx)
        EvalResult(ok=True, name='v', value=1.0)
        >>> evaluate("v + 10", ctx)
        EvalResult(ok=True, name='$0', value=11.0)
    """
    if context is None:
        context = Context()
    try:
        name, value = context.execute(line)
    except (ParseError, EvaluationError) as e:
        logger.info("Rejected %r: %s", line, e)
        return EvalResult(ok=False, error=str(e), error_code=e.code)
    return EvalResult(ok=True, name=name, value=value)


def validate_command(line: str) -> tuple[bool, str | None]:
    """Validate a command without evaluating it.

    Args:
        line: Command line to validate

    Returns:
        Tuple (is_valid, error_message)
    """
    try:
        parse_command(line)
    except ParseError as e:
        return False, str(e)
    return True, None
