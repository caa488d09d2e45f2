"""Input parsing module.

This module handles:
- Input validation (length and parenthesis nesting limits)
- Running the command grammar to build a rule-tagged parse tree
- Turning grammar failures into CommandSyntaxError with a position
- Resolving the parse tree into a Command (cached)
"""

from __future__ import annotations

from functools import lru_cache

from lark import Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, UnexpectedToken

from .config import CACHE_SIZE_PARSE, MAX_INPUT_LENGTH, MAX_NESTING_DEPTH
from .grammar import get_parser
from .logging_config import get_logger
from .precedence import resolve_command
from .syntax import Command
from .types import CommandSyntaxError, ValidationError

logger = get_logger("parser")


def nesting_depth(input_str: str) -> int:
    """Return the deepest parenthesis nesting reached in ``input_str``.

    Unbalanced input is not an error here; the grammar reports it.
    """
    depth = 0
    deepest = 0
    for char in input_str:
        if char == "(":
            depth += 1
            deepest = max(deepest, depth)
        elif char == ")":
            depth -= 1
    return deepest


def validate_input(line: str) -> None:
    """Reject lines that exceed the configured input limits."""
    if len(line) > MAX_INPUT_LENGTH:
        raise ValidationError(
            f"Input too long ({len(line)} characters, limit {MAX_INPUT_LENGTH})",
            code="TOO_LONG",
        )
    depth = nesting_depth(line)
    if depth > MAX_NESTING_DEPTH:
        raise ValidationError(
            f"Parentheses nested too deep ({depth} levels, limit {MAX_NESTING_DEPTH})",
            code="TOO_DEEP",
        )


def _syntax_error(line: str, exc: UnexpectedInput) -> CommandSyntaxError:
    if isinstance(exc, UnexpectedCharacters):
        position = exc.pos_in_stream
        return CommandSyntaxError(
            f"Unexpected character {line[position]!r} at position {position}",
            position=position,
            token=line[position],
        )
    if isinstance(exc, UnexpectedToken) and exc.token.type != "$END":
        position = exc.token.start_pos
        return CommandSyntaxError(
            f"Unexpected token {str(exc.token)!r} at position {position}",
            position=position,
            token=str(exc.token),
        )
    return CommandSyntaxError(
        f"Unexpected end of input at position {len(line)}",
        position=len(line),
        token=None,
    )


def build_parse_tree(line: str) -> Tree:
    """Run the command grammar over one line.

    Args:
        line: A single input line

    Returns:
        Lark tree tagged by grammar rule (command, target, expr, var, num)
        with the operator tokens kept inside each ``expr`` node

    Raises:
        ValidationError: If the line exceeds the input limits
        CommandSyntaxError: If the line is empty or does not match the grammar
    """
    validate_input(line)
    if not line.strip():
        raise CommandSyntaxError("Empty input", position=0, token=None)
    try:
        return get_parser().parse(line)
    except UnexpectedInput as exc:
        error = _syntax_error(line, exc)
        logger.debug("Rejected %r: %s", line, error)
        raise error from exc


@lru_cache(maxsize=CACHE_SIZE_PARSE)
def parse_command(line: str) -> Command:
    """Parse one line into a Command.

    Args:
        line: Input line such as ``"x = 1 + 2 * 3"`` or ``"2 ^ 3 ^ 2"``

    Returns:
        Command with optional target and resolved expression tree

    Raises:
        ParseError: If the line is rejected (syntax, limits, or an
            unexpected node in the parse tree)
    """
    command = resolve_command(build_parse_tree(line))
    logger.debug("Parsed %r as %s", line, command)
    return command
