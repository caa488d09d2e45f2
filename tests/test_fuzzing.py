"""Fuzzing tests: random lines against the parser and a reference evaluator."""

import math
import random
import unittest

from sympy.parsing.sympy_parser import (
    convert_xor,
    parse_expr,
    standard_transformations,
)

from kalkulang_pkg.context import Context
from kalkulang_pkg.parser import parse_command
from kalkulang_pkg.types import DivisionByZeroError, EvaluationError, ParseError

REFERENCE_TRANSFORMATIONS = standard_transformations + (convert_xor,)


def reference_value(line):
    """Evaluate an infix line with SymPy ('^' read as power)."""
    return parse_expr(line, transformations=REFERENCE_TRANSFORMATIONS)


def random_integer_expression(rng, depth):
    """Random +, -, *, ^ expression over small integers.

    Depth 3 keeps every intermediate below 2**53, so float evaluation is
    exact and must equal SymPy's integer result.
    """
    if depth == 0 or rng.random() < 0.25:
        if rng.random() < 0.3:
            return f"{rng.randint(0, 9)} ^ {rng.randint(0, 2)}"
        return str(rng.randint(0, 9))
    if rng.random() < 0.2:
        return f"({random_integer_expression(rng, depth - 1)})"
    op = rng.choice(["+", "-", "*"])
    left = random_integer_expression(rng, depth - 1)
    right = random_integer_expression(rng, depth - 1)
    return f"{left} {op} {right}"


class TestReferenceEvaluator(unittest.TestCase):
    """Compare evaluation with SymPy on variable-free expressions."""

    def test_random_integer_expressions(self):
        rng = random.Random(6120)
        for _ in range(300):
            line = random_integer_expression(rng, 3)
            with self.subTest(line=line):
                expected = reference_value(line)
                self.assertEqual(Context().execute(line)[1], float(expected))

    def test_fixed_expressions_with_division(self):
        lines = [
            "1 / 3",
            "7 / 2 / 2",
            "1 - 2 / 4 * 3",
            "(1 + 2) / (3 + 4) ^ 2",
            "2 ^ 3 ^ 2 / 8",
            "10 / 4 - 0.5 * 3",
            "2 ^ 0.5 * 2 ^ 0.5",
            "3.75 * (8 - 2.5) / 1.25",
        ]
        for line in lines:
            with self.subTest(line=line):
                expected = float(reference_value(line))
                self.assertTrue(math.isclose(Context().execute(line)[1], expected, rel_tol=1e-12))

    def test_division_by_zero_matches_reference(self):
        for line in ("1 / 0", "3 / (2 - 2)", "4 / (1 * 0)"):
            with self.subTest(line=line):
                self.assertFalse(reference_value(line).is_finite)
                with self.assertRaises(DivisionByZeroError):
                    Context().execute(line)


class TestParserFuzzing(unittest.TestCase):
    """Fuzz test parser with random inputs."""

    ALPHABET = "0123456789+-*/^()= xy$.#_"

    def test_random_strings_never_crash(self):
        """Random lines either parse or raise ParseError."""
        rng = random.Random(3200)
        for _ in range(500):
            line = "".join(rng.choices(self.ALPHABET, k=rng.randint(0, 30)))
            try:
                parse_command(line)
            except ParseError:
                pass

    def test_random_strings_keep_context_consistent(self):
        """Rejected or failing lines never write a binding."""
        rng = random.Random(4077)
        ctx = Context()
        for _ in range(300):
            line = "".join(rng.choices(self.ALPHABET, k=rng.randint(1, 20)))
            before = dict(ctx.bindings)
            try:
                name, value = ctx.execute(line)
            except (ParseError, EvaluationError):
                self.assertEqual(dict(ctx.bindings), before)
            else:
                stored = ctx.bindings[name]
                self.assertTrue(stored == value or (math.isnan(stored) and math.isnan(value)))

    def test_malformed_expressions(self):
        malformed = ["(((", ")))", "x++y", "x^", "*/x", "", "   ", "x = ", "$", "1..2"]
        for line in malformed:
            with self.subTest(line=line):
                with self.assertRaises(ParseError):
                    parse_command(line)


if __name__ == "__main__":
    unittest.main()
