"""Expression trees for arithmetic equations.

A tree is made of two node shapes: `Literal` leaves holding a float, and
`Operator` nodes holding an `Op` and their children. Negation is the only
unary operator; its operand is kept in `right` and `left` stays None.
"""
import re
from typing import Callable, NamedTuple, Optional, Union

import numpy as np


class Op(NamedTuple):
    name: str
    symbol: str
    tier: int  # 0 binds tightest; unary ops are -1 and bind before any tier
    fun: Callable

    def __call__(self, *args):
        return self.fun(*args)

    def __repr__(self):
        return f"op({self.symbol!r})"

    @property
    def unary(self):
        return self.tier < 0


# One precedence tier per line, tightest first; each entry is the numpy ufunc
# name followed by the operator symbol.
OP_TIERS = """
power^
multiply* divide/
add+ subtract-
""".strip()
OPS = {
    o: Op(fun, o, tier, getattr(np, fun))
    for tier, op_group in enumerate(OP_TIERS.split("\n"))
    for [(fun, o)] in map(re.compile(r"^(\w+)(\W)$").findall, op_group.split())
}
TIERS = tuple(
    frozenset(o for o in OPS.values() if o.tier == tier)
    for tier in range(len(OP_TIERS.split("\n")))
)
NEGATE = Op("negative", "~", -1, np.negative)


class Literal(NamedTuple):
    value: float

    def __repr__(self):
        return f"lit({self.value!r})"


class Operator(NamedTuple):
    op: Op
    left: Optional["Node"]
    right: "Node"


Node = Union[Literal, Operator]


def negate(operand: Node) -> Operator:
    return Operator(NEGATE, None, operand)


def binary(symbol: str, left: Node, right: Node) -> Operator:
    return Operator(OPS[symbol], left, right)


def fold(tree: Node, literal: Callable, operator: Callable):
    """Reduce `tree` bottom-up without recursion.

    `literal` is called with each leaf's value and `operator` with each node's
    `Op` followed by its already reduced children (one for a unary op, two
    otherwise). Tree depth is bounded only by memory.

    >>> fold(binary("+", Literal(1.0), negate(Literal(2.0))), str, lambda op, *a: [op.symbol, *a])
    ['+', '1.0', ['~', '2.0']]
    """
    values = []
    pending = [(tree, False)]
    while pending:
        node, expanded = pending.pop()
        if isinstance(node, Literal):
            values.append(literal(node.value))
        elif not expanded:
            pending.append((node, True))
            pending.append((node.right, False))
            if not node.op.unary:
                pending.append((node.left, False))
        elif node.op.unary:
            values.append(operator(node.op, values.pop()))
        else:
            right = values.pop()
            values.append(operator(node.op, values.pop(), right))
    (value,) = values
    return value


def _render(op, *args):
    if op.unary:
        return f"(-{args[0]})"
    return f"({args[0]}{op.symbol}{args[1]})"


def to_infix(tree: Optional[Node]) -> str:
    """Render `tree` with every operator node in its own parentheses.

    Parsing the result gives back `tree`, provided its literals are
    non-negative and print in plain decimal notation.

    >>> to_infix(binary("-", Literal(1.0), negate(Literal(2.5))))
    '(1.0-(-2.5))'
    >>> to_infix(None)
    ''
    """
    if tree is None:
        return ""
    return fold(tree, repr, _render)
