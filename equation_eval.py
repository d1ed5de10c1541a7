"""Evaluate equation trees.

Arithmetic is done on numpy float64 scalars, so results follow IEEE 754:
``1/0`` is inf, ``0/0`` is nan and so is ``(-1)^0.5``, and nothing raises
(unlike Python floats, which raise ZeroDivisionError or turn complex).
"""
import numpy as np

from equation_parser import build_tree
from equation_tree import fold


def _apply(op, *args):
    return op(*args)


def _reduce(tree):
    if tree is None:
        return np.float64(0.0)
    return fold(tree, np.float64, _apply)


def evaluate_tree(tree):
    """Reduce `tree` to a float; an absent tree is 0.

    >>> evaluate_tree(build_tree("2/(1+1)^3"))
    0.25
    >>> evaluate_tree(build_tree("1/0"))
    inf
    >>> evaluate_tree(None)
    0.0
    """
    with np.errstate(all="ignore"):
        return float(_reduce(tree))


def evaluate(equation):
    """Parse and evaluate `equation`.

    >>> evaluate("3 + 4*3")
    15.0
    """
    return evaluate_tree(build_tree(equation))
