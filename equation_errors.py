"""Failures raised while turning equation text into a tree.

Exception
 └── EquationError
     ├── InvalidEquation (ValueError)
     │   ├── InvalidOperand
     │   ├── InvalidOperator
     │   ├── EmptyGroup
     │   └── MissingClosingSymbol
     └── InternalError (RuntimeError)

`InvalidEquation` and its subclasses describe bad input. `InternalError`
means the parser itself misbehaved.
"""
from typing import Optional


class EquationError(Exception):
    def __init__(self, position: Optional[int] = None, detail: str = ""):
        self.position = position
        message = type(self).__name__
        if position is not None:
            message += f" at position {position}"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class InvalidEquation(EquationError, ValueError):
    pass


class InvalidOperand(InvalidEquation):
    """Expected a number or a group."""


class InvalidOperator(InvalidEquation):
    """Expected one of + - * / ^."""


class EmptyGroup(InvalidEquation):
    """A pair of brackets with nothing between them."""


class MissingClosingSymbol(InvalidEquation):
    """A group was opened but never closed."""


class InternalError(EquationError, RuntimeError):
    pass
