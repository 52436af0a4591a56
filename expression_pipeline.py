"""
Infix -> postfix -> number, in one call.

Usage
-----
    pipeline = ExpressionPipeline()
    value = pipeline.evaluate("0.156 * 2 ^ (1 / 2) + (14 * ( 3* 5))/2")
    for line in pipeline.trace_lines():
        print(line)

or simply ``calculate("2 + 3 * 4")``.
"""
from typing import List, Optional

from postfix_converter import PostfixConverter
from postfix_solver import PostfixSolver
from utils.scan_policy import resolve_policy
from utils.trace_helpers import tail, trace_lines


class ExpressionPipeline:
    def __init__(self, policy: Optional[str] = None):
        self.policy = resolve_policy(policy)
        self.converter: Optional[PostfixConverter] = None
        self.solver: Optional[PostfixSolver] = None

    def to_postfix(self, expr: str) -> str:
        self.converter = PostfixConverter(self.policy)
        self.solver = None
        return self.converter.convert(expr)

    def evaluate(self, expr: str) -> float:
        """
        Master entry: convert *expr* and solve the postfix form.
        Each call replaces the traces of the previous one.
        """
        postfix = self.to_postfix(expr)
        self.solver = PostfixSolver(self.policy)
        return self.solver.solve(postfix)

    # ──────────────────────────────────────────────────────────────
    # trace access
    # ──────────────────────────────────────────────────────────────
    def traces(self) -> List[dict]:
        """Events of the last call, converter first then solver."""
        events: List[dict] = []
        for stage in (self.converter, self.solver):
            if stage is not None:
                events.extend(stage.traceback_info)
        return events

    def trace_lines(self, last: Optional[int] = None) -> List[str]:
        lines: List[str] = []
        for stage in (self.converter, self.solver):
            if stage is not None:
                lines.extend(trace_lines(stage))
        return tail(lines, last)


def calculate(expr: str, *, policy: Optional[str] = None) -> float:
    """solve(convert(expr)) with a shared policy."""
    return ExpressionPipeline(policy).evaluate(expr)
