"""Kalkulang package: grammar, parser, precedence resolver, evaluation context, and CLI."""

__all__ = [
    "config",
    "grammar",
    "parser",
    "precedence",
    "syntax",
    "context",
    "symbolic",
    "cli",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "evaluate",
    "parse",
    "validate_command",
]
