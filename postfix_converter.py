"""
PostfixConverter: infix text -> space separated postfix (RPN) text.

Shunting-yard with one operator stack and one output buffer. Number
literals are copied character by character as they are scanned (spaces
inside a literal run are dropped), and every literal run is closed with a
single space. That is why nested brackets leave double spaces in the
output, e.g.

    >>> convert("1+2*(3^4-5)^(6+7*8)-9")
    '1 2  3 4 ^ 5 -   6 7 8 * +  ^ * + 9 -'

The spacing is part of the output format; `solve` splits on any
whitespace so it does not care.

Operators of equal priority pop each other, so *every* operator is
left-associative, `^` included: "2^3^2" == (2^3)^2.
"""
from typing import List, Optional

from calc_errors import (
    CloseBracketMissing,
    EmptyOrInvalidExpression,
    OpenBracketMissing,
    UnrecognizedCharacter,
)
from priority_rules import OPERATORS, priority
from utils.scan_policy import resolve_policy
from utils.trace_helpers import add_traceback

# characters swallowed while assembling a literal run
_LITERAL_CHARS = frozenset('0123456789. ')
_SKIP_CHARS = frozenset(' \t\n\r\x0c')


class PostfixConverter:
    """Single-use-per-call converter; keeps step-wise trace events."""

    def __init__(self, policy: Optional[str] = None):
        self.policy = resolve_policy(policy)
        self.traceback_info: List[dict] = []

    # -------------------------------------------------------------- #
    # Trace helper
    # -------------------------------------------------------------- #
    def _add_traceback(self, step: str, info: str):
        add_traceback(self, step, info)

    # -------------------------------------------------------------- #
    # Stack helpers
    # -------------------------------------------------------------- #
    def _pop_to(self, stack: List[str], out: List[str]):
        op = stack.pop()
        out.append(op)
        out.append(' ')
        self._add_traceback('pop', op)

    def _push_operator(self, ch: str, stack: List[str], out: List[str]):
        if not stack or priority(ch) > priority(stack[-1]):
            stack.append(ch)
        else:
            # >= pops equal priority too (left associativity)
            while stack and priority(ch) <= priority(stack[-1]):
                self._pop_to(stack, out)
            stack.append(ch)
        self._add_traceback('push', ch)

    def _close_bracket(self, stack: List[str], out: List[str], pos: int):
        while True:
            if not stack:
                raise OpenBracketMissing(position=pos)
            if stack[-1] == '(':
                break
            self._pop_to(stack, out)
        stack.pop()
        self._add_traceback('bracket', f'closed at {pos}')

    # -------------------------------------------------------------- #
    # convert() entry
    # -------------------------------------------------------------- #
    def convert(self, expr: str) -> str:
        self._add_traceback('convert_start', f'Expr: {expr!r} ({self.policy})')
        stack: List[str] = []
        out: List[str] = []
        open_brackets = 0
        i, n = 0, len(expr)

        while i < n:
            # literal run: digits, dots and spaces
            while i < n and expr[i] in _LITERAL_CHARS:
                if expr[i] != ' ':
                    out.append(expr[i])
                i += 1
            out.append(' ')
            if i >= n:
                break

            ch = expr[i]
            if ch in _SKIP_CHARS:
                i += 1
                continue
            if ch in OPERATORS:
                self._push_operator(ch, stack, out)
            elif ch == '(':
                stack.append(ch)
                open_brackets += 1
                self._add_traceback('bracket', f'opened at {i}')
            elif ch == ')':
                self._close_bracket(stack, out, i)
                open_brackets -= 1
            elif self.policy == 'strict':
                raise UnrecognizedCharacter(token=ch, position=i)
            else:
                self._add_traceback('truncate', f'{ch!r} at {i}')
                break
            i += 1

        while stack:
            self._pop_to(stack, out)

        postfix = ''.join(out).strip()
        if open_brackets > 0:
            raise CloseBracketMissing()
        if not postfix:
            raise EmptyOrInvalidExpression()
        self._add_traceback('convert_done', postfix)
        return postfix


def convert(expr: str, *, policy: Optional[str] = None) -> str:
    """Convert an infix expression to postfix; raises a CalcError on bad input."""
    return PostfixConverter(policy).convert(expr)
