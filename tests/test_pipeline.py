"""
End-to-end tests for the infix -> postfix -> number pipeline.

Fully bracketed expressions are checked against SymPy (parsed with
`convert_xor=True` so `^` means power) and mpmath, so the expected values
never come from the code under test.

Run with:

    python -m unittest test_pipeline.py
    # or:  pytest -q
"""
import sys
import os
import unittest

import sympy as sp
from mpmath import mp

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from calc_errors import CalcError, CloseBracketMissing, DivideByZero
from expression_pipeline import ExpressionPipeline, calculate
from postfix_converter import convert
from postfix_solver import solve


mp.dps = 50  # generous precision for all numeric comparisons

BRACKETED = [
    "((2+3)*4)-5",
    "(((10/2)*3)+4)*2",
    "(((8-3)+2)*4)-6",
    "((1.5^2)-(0.25/0.5))",
    "(2^(3^2))",
    "((7/3)*(3/7))",
    "(((0.1+0.2)+0.3)*10)",
    "((144^0.5)/(2^3))",
]


def sympy_value(expr: str) -> float:
    return float(sp.sympify(expr, convert_xor=True).evalf(30))


class PipelineSuite(unittest.TestCase):
    # 1 ──────────────────────────────────────────────────────────────
    def test_round_trip_against_sympy(self):
        for expr in BRACKETED:
            with self.subTest(expr=expr):
                self.assertAlmostEqual(sympy_value(expr), solve(convert(expr)), delta=1e-9)
                self.assertEqual(solve(convert(expr)), calculate(expr))

    def test_reference_value_against_mpmath(self):
        expr = "0.156 * 2 ^ (1 / 2) + (14 * ( 3* 5))/2"
        expected = mp.mpf('0.156') * mp.sqrt(2) + mp.mpf(14 * 15) / 2
        result = calculate(expr)
        self.assertEqual(105.22061731573021, result)
        self.assertAlmostEqual(float(expected), result, delta=1e-12)

    def test_doc_example(self):
        result = calculate("1+2*(3^4-5)^(6+7*8)-9")
        expected = 1 + 2 * mp.power(76, 62) - 9
        self.assertAlmostEqual(1.0, result / float(expected), delta=1e-14)
        self.assertAlmostEqual(8.155915490338936e116, result, delta=1e102)

    # 2 ──────────────────────────────────────────────────────────────
    def test_power_chain_is_left_associative(self):
        # (2^3)^2, not SymPy's 2^(3^2)
        self.assertEqual(64.0, calculate("2^3^2"))
        self.assertEqual(512.0, sympy_value("2^3^2"))

    def test_precedence_without_brackets(self):
        self.assertEqual(14.0, calculate("2 + 3 * 4"))
        self.assertEqual(sympy_value("1+2*3-4/2"), calculate("1+2*3-4/2"))

    # 3 ──────────────────────────────────────────────────────────────
    def test_errors_propagate(self):
        with self.assertRaises(CloseBracketMissing):
            calculate("(1+2")
        with self.assertRaises(DivideByZero):
            calculate("4/(2-2)")
        with self.assertRaises(CalcError):
            calculate("1 +")

    def test_lenient_pipeline(self):
        self.assertEqual(3.0, calculate("1 + 2 = ?", policy='lenient'))

    # 4 ──────────────────────────────────────────────────────────────
    def test_pipeline_traces(self):
        pipeline = ExpressionPipeline()
        self.assertEqual("2 3 4 * +", pipeline.to_postfix("2 + 3 * 4"))
        self.assertIsNone(pipeline.solver)
        self.assertEqual(14.0, pipeline.evaluate("2 + 3 * 4"))

        events = pipeline.traces()
        self.assertEqual('PostfixConverter', events[0]['engine'])
        self.assertEqual('PostfixSolver', events[-1]['engine'])
        self.assertEqual(['solve_done: Result = 14.0'], pipeline.trace_lines(last=1))
        self.assertEqual([], pipeline.trace_lines(last=0))
        self.assertEqual(len(events), len(pipeline.trace_lines()))

    def test_each_evaluation_resets_traces(self):
        pipeline = ExpressionPipeline()
        pipeline.evaluate("1+1")
        first = len(pipeline.traces())
        pipeline.evaluate("1+1")
        self.assertEqual(first, len(pipeline.traces()))


if __name__ == "__main__":
    unittest.main()
