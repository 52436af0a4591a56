"""
Error taxonomy for the converter and the solver.

Every failure is a ``CalcError`` (itself a ``ValueError``) so callers can
catch the whole family at once:

    try:
        value = solve(convert(text))
    except CalcError as e:
        print(f"Error: {e}")

Messages are stable plain-text strings callers may show as-is;
``token`` / ``position`` are appended when known.
"""
from typing import Optional


class CalcError(ValueError):
    message = 'Calculation error'

    def __init__(self, token: Optional[str] = None, position: Optional[int] = None):
        self.token = token
        self.position = position
        super().__init__(self._format())

    def _format(self) -> str:
        text = self.message
        if self.token is not None:
            text += f" {self.token!r}"
        if self.position is not None:
            text += f" at position {self.position}"
        return text


# ---- converter (infix -> postfix) --------------------------------- #
class OpenBracketMissing(CalcError):
    message = 'Syntax error : open bracket missing'


class CloseBracketMissing(CalcError):
    message = 'Syntax error : close bracket missing'


class EmptyOrInvalidExpression(CalcError):
    message = 'Syntax error : wrong input provided'


class UnrecognizedCharacter(CalcError):
    message = 'Syntax error : unrecognized character'


# ---- solver (postfix -> number) ----------------------------------- #
class InvalidNumber(CalcError):
    message = 'Parse error : invalid number'


class MissingOperand(CalcError):
    message = 'Syntax error : wrong value entered'


class DivideByZero(CalcError, ZeroDivisionError):
    message = 'Divide by zero error'


class UnknownOperator(CalcError):
    message = 'Syntax error : unknown operator'
