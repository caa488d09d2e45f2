from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from . import config as _config
from .api import evaluate
from .config import VERSION
from .context import Context
from .logging_config import get_logger, setup_logging
from .parser import parse_command
from .symbolic import render
from .types import EvalResult, ParseError

logger = get_logger("cli")


def format_number(val: Any, precision: int | None = None) -> str:
    """Format a numeric value with specified precision.

    Args:
        val: Numeric value to format
        precision: Number of significant digits (default: OUTPUT_PRECISION)

    Returns:
        Formatted string representation of the number
    """
    if precision is None:
        precision = _config.OUTPUT_PRECISION
    try:
        fmt = "{:." + str(int(precision)) + "g}"
        return fmt.format(float(val))
    except (ValueError, TypeError, OverflowError):
        return str(val)


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running Kalkulang health check...")
    print("-" * 50)

    for module_name in ("lark", "sympy", "numpy"):
        try:
            module = __import__(module_name)
            version = getattr(module, "__version__", "unknown")
            print(f"[OK] {module_name} {version} imported successfully")
            checks_passed += 1
        except ImportError as e:
            print(f"[FAIL] {module_name} import failed: {e}")
            checks_failed += 1

    try:
        command = parse_command("x = 2 ^ 3 ^ 2")
        if str(command) == "x = (2 ^ (3 ^ 2))":
            print("[OK] Parsing and precedence work")
            checks_passed += 1
        else:
            print(f"[FAIL] Parsing check failed: got {command}")
            checks_failed += 1
    except ParseError as e:
        print(f"[FAIL] Parsing check failed: {e}")
        checks_failed += 1

    context = Context()
    result = evaluate("1 + 2 * 3", context)
    if result.ok and result.name == "$0" and result.value == 7.0:
        print("[OK] Evaluation works")
        checks_passed += 1
    else:
        print(f"[FAIL] Evaluation check failed: {result}")
        checks_failed += 1

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def print_result_pretty(res: EvalResult, output_format: str = "human") -> None:
    """Print result in specified format.

    Args:
        res: Result of one command
        output_format: "json" for JSON output, "human" for human-readable
    """
    if output_format == "json":
        print(json.dumps(res.to_dict(), ensure_ascii=False))
        return
    if not res.ok:
        print("Error:", res.error)
        return
    print(f"{res.name} = {format_number(res.value)}")


def print_tree(line: str, output_format: str = "human") -> None:
    """Print the resolved tree of one line without evaluating it."""
    try:
        command = parse_command(line)
    except ParseError as e:
        if output_format == "json":
            print(json.dumps({"ok": False, "error": str(e), "error_code": e.code}))
        else:
            print("Error:", e)
        return
    rendered = render(command.expression)
    if command.target is not None:
        rendered = f"{command.target} = {rendered}"
    if output_format == "json":
        print(json.dumps({"ok": True, "tree": str(command), "symbolic": rendered}, ensure_ascii=False))
        return
    print(f"Tree: {command}")
    try:
        print(f"Symbolic: {rendered}")
    except UnicodeEncodeError:
        # Console cannot show superscripts; fall back to plain SymPy notation
        print(f"Symbolic: {rendered.encode('ascii', 'replace').decode('ascii')}")


def print_bindings(context: Context) -> None:
    if not context.bindings:
        print("No bindings.")
        return
    for name, value in context.bindings.items():
        print(f"{name} = {format_number(value)}")


def print_help_text() -> None:
    print(
        """Kalkulang: a small calculator language.

Commands:
  <expr>           Evaluate and bind the result to $0, $1, ...
  <name> = <expr>  Evaluate and bind the result to <name>
  vars             List the current bindings
  tree <line>      Show how a line is grouped, without evaluating it
  reset            Drop all bindings and restart at $0
  help             Show this text
  quit, exit       Leave the calculator

Expressions use numbers (12, 3.5), names (x, rate_2), anonymous slots
($0), parentheses and the operators + - * / ^.
Precedence: ^ binds tightest and groups right; * / bind tighter than + -.
Examples:
  1 + 2 * 3        -> 7
  2 ^ 3 ^ 2        -> 512
  v = 3 - 2
  v + 10           -> 11"""
    )


def repl_loop(output_format: str = "human", show_tree: bool = False) -> None:
    """Interactive REPL loop; one Context lives for the whole session."""
    try:
        import readline  # noqa: F401
    except ImportError:
        # readline not available on Windows - that's fine
        pass

    context = Context()
    print("Kalkulang - type 'help' for commands, 'quit' to exit.")

    while True:
        try:
            raw = input(_config.PROMPT).strip()
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        if not raw:
            continue

        keyword, _, rest = raw.partition(" ")
        keyword = keyword.lower()
        if keyword in ("quit", "exit") and not rest:
            print("Goodbye.")
            break
        if keyword == "help" and not rest:
            print_help_text()
            continue
        if keyword == "vars" and not rest:
            print_bindings(context)
            continue
        if keyword == "reset" and not rest:
            context.reset()
            print("Bindings cleared.")
            continue
        # "tree = 1" and "tree + 1" are commands on a variable named tree
        rest = rest.strip()
        if keyword == "tree" and rest and rest[0] not in "=+-*/^":
            print_tree(rest, output_format=output_format)
            continue

        if show_tree:
            print_tree(raw, output_format=output_format)
        print_result_pretty(evaluate(raw, context), output_format=output_format)


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for Kalkulang CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(prog="kalkulang")
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        action="append",
        help="Evaluate one command and exit (repeat to run several in one session)",
        dest="eval_lines",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "-p", "--precision", type=int, help="Set output precision (significant digits)"
    )
    parser.add_argument(
        "--show-tree",
        action="store_true",
        help="Print how each command is grouped before its result",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=_config.LOG_LEVEL.upper(),
        help="Set logging level",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)
    logger.debug("Kalkulang %s starting with %s", VERSION, vars(args))

    if args.precision and args.precision > 0:
        _config.OUTPUT_PRECISION = int(args.precision)
    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()
    if args.eval_lines:
        context = Context()
        exit_code = 0
        for line in args.eval_lines:
            line = line.strip()
            # Remove ">>>" prompt if present
            if line.startswith(">>>"):
                line = line[3:].strip()
            if args.show_tree:
                print_tree(line, output_format=args.format)
            res = evaluate(line, context)
            print_result_pretty(res, output_format=args.format)
            if not res.ok:
                exit_code = 1
        return exit_code

    repl_loop(output_format=args.format, show_tree=args.show_tree)
    return 0


if __name__ == "__main__":
    sys.exit(main_entry())
