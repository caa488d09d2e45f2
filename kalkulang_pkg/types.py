"""Type definitions, result dataclasses and the error hierarchy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class EvalResult:
    """Result of running one calculator command."""

    ok: bool
    name: str | None = None
    value: float | None = None
    error: str | None = None
    error_code: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.name is not None:
            result_dict["name"] = self.name
        if self.value is not None:
            result_dict["value"] = self.value
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        return result_dict

    def __repr__(self) -> str:
        """Return string representation of the result."""
        if not self.ok:
            return f"EvalResult(ok=False, error={self.error!r}, error_code={self.error_code!r})"
        return f"EvalResult(ok=True, name={self.name!r}, value={self.value!r})"


class ParseError(Exception):
    """Raised when an input line is rejected before evaluation."""

    def __init__(self, message: str, code: str = "PARSE_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class CommandSyntaxError(ParseError):
    """Raised when a line does not match the command grammar."""

    def __init__(
        self,
        message: str,
        position: int | None = None,
        token: str | None = None,
        code: str = "SYNTAX_ERROR",
    ):
        self.position = position
        self.token = token
        super().__init__(message, code)


class UnexpectedTokenError(ParseError):
    """Raised when the parse tree holds a node the resolver does not know."""

    def __init__(self, message: str, code: str = "UNEXPECTED_TOKEN"):
        super().__init__(message, code)


class ValidationError(ParseError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code)


class EvaluationError(Exception):
    """Raised when a parsed command cannot be evaluated."""

    def __init__(self, message: str, code: str = "EVALUATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class UndefinedVariableError(EvaluationError):
    """Raised when an expression references an unbound name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Undefined variable: {name}", "UNDEFINED_VARIABLE")


class DivisionByZeroError(EvaluationError):
    """Raised when the right operand of '/' is zero."""

    def __init__(self, message: str = "Division by zero"):
        super().__init__(message, "DIVISION_BY_ZERO")
