"""
PostfixSolver: reduce a whitespace separated postfix string to one float.

Numbers are pushed, operators pop `num2` then `num1` and push
`num1 <op> num2`. `^` goes through NumPy's float64 power so invalid real
powers give NaN and overflow gives inf instead of a Python exception or a
complex number, e.g. (-8) ^ 0.5 -> nan.
"""
from typing import List, Optional

import numpy as np

from calc_errors import DivideByZero, InvalidNumber, MissingOperand, UnknownOperator
from priority_rules import OPERATORS
from utils.scan_policy import resolve_policy
from utils.trace_helpers import add_traceback

_NUMBER_CHARS = frozenset('0123456789.')


def _power(num1: float, num2: float) -> float:
    with np.errstate(all='ignore'):
        return float(np.power(np.float64(num1), np.float64(num2)))


def _divide(num1: float, num2: float) -> float:
    if num2 == 0.0:
        raise DivideByZero()
    return num1 / num2


_APPLY = {
    '+': lambda a, b: a + b,
    '-': lambda a, b: a - b,
    '*': lambda a, b: a * b,
    '/': _divide,
    '^': _power,
}


class PostfixSolver:
    """Stack machine for postfix strings; records one trace event per step."""

    def __init__(self, policy: Optional[str] = None):
        self.policy = resolve_policy(policy)
        self.traceback_info: List[dict] = []

    def _add_traceback(self, step: str, info: str):
        add_traceback(self, step, info)

    @staticmethod
    def _is_number(token: str) -> bool:
        return all(c in _NUMBER_CHARS for c in token)

    def _parse_number(self, token: str, pos: int) -> float:
        try:
            value = float(token)
        except ValueError:
            raise InvalidNumber(token=token, position=pos) from None
        self._add_traceback('operand', f'{token} -> {value}')
        return value

    def _apply(self, token: str, stack: List[float], pos: int):
        op = token[0]
        if self.policy == 'strict' and op not in OPERATORS:
            raise UnknownOperator(token=token, position=pos)

        if len(stack) < 2:
            raise MissingOperand(token=token, position=pos)
        num2 = stack.pop()
        num1 = stack.pop()

        fn = _APPLY.get(op)
        if fn is None:
            # lenient: operands are consumed, nothing is pushed
            self._add_traceback('skip', f'{token!r} dropped {num1}, {num2}')
            return
        result = fn(num1, num2)
        stack.append(result)
        self._add_traceback('apply', f'{num1} {op} {num2} = {result}')

    def solve(self, postfix_expr: str) -> float:
        self._add_traceback('solve_start', f'Expr: {postfix_expr!r} ({self.policy})')
        stack: List[float] = []

        for pos, token in enumerate(postfix_expr.split()):
            if self._is_number(token):
                stack.append(self._parse_number(token, pos))
            else:
                self._apply(token, stack, pos)

        if not stack:
            raise MissingOperand()
        if len(stack) > 1 and self.policy == 'strict':
            raise MissingOperand(token=' '.join(str(v) for v in stack))
        result = stack[-1]
        self._add_traceback('solve_done', f'Result = {result}')
        return result


def solve(postfix_expr: str, *, policy: Optional[str] = None) -> float:
    """Evaluate a postfix expression; raises a CalcError on bad input."""
    return PostfixSolver(policy).solve(postfix_expr)
