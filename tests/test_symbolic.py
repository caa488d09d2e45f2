"""Unit tests for SymPy rendering."""

import unittest

import sympy as sp

from kalkulang_pkg.parser import parse_command
from kalkulang_pkg.symbolic import format_superscript, render, to_sympy
from kalkulang_pkg.syntax import Num


def sym(line):
    return to_sympy(parse_command(line).expression)


class TestToSympy(unittest.TestCase):
    def test_structure_evaluates_like_the_tree(self):
        self.assertEqual(sym("1 + 2 * 3").doit(), 7)
        self.assertEqual(sym("2 ^ 3 ^ 2").doit(), 512)
        self.assertEqual(sym("1 - 2 - 3").doit(), -4)
        self.assertEqual(sym("7 / 2").doit(), sp.Rational(7, 2))

    def test_variables_become_symbols(self):
        a, b = sp.symbols("a b")
        self.assertEqual(sym("a - b").doit(), a - b)
        self.assertEqual(sym("a / 4").doit(), a / 4)
        self.assertEqual(sym("$0").name, "$0")

    def test_literals(self):
        self.assertEqual(to_sympy(Num(3.0)), sp.Integer(3))
        self.assertEqual(to_sympy(Num(1.5)), sp.Float(1.5))

    def test_tree_is_left_unevaluated(self):
        self.assertIsInstance(sym("2 ^ 3"), sp.Pow)


class TestRender(unittest.TestCase):
    def test_superscript_exponents(self):
        self.assertEqual(render(parse_command("x ^ 2").expression), "x²")

    def test_format_superscript(self):
        self.assertEqual(format_superscript("x**-3"), "x⁻³")
        self.assertEqual(format_superscript("x**2.5"), "x**2.5")
        self.assertEqual(format_superscript("y"), "y")


if __name__ == "__main__":
    unittest.main()
