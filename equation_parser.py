"""Parse arithmetic equations such as ``-4^3/5*(2+1)`` into expression trees.

Scanning works on a cursor into the whitespace-free equation text instead of
cutting consumed prefixes off it: each scanner takes the text, a position and
an end bound, and returns what it recognized together with the position just
past it. Group bodies are parsed in place between their brackets, so error
positions always refer to the top-level text.

Precedence is resolved in three tiers, each left-associative, applied in
order: power, then multiplication and division, then addition and
subtraction. A leading minus negates only the operand right after it, before
any tier is collapsed, so ``-4^2`` is ``(-4)^2`` and ``2^3^2`` is ``(2^3)^2``.
"""
import logging
import re

from equation_errors import (
    EmptyGroup,
    InternalError,
    InvalidOperand,
    InvalidOperator,
    MissingClosingSymbol,
)
from equation_tree import OPS, TIERS, Literal, Operator, negate, to_infix

logger = logging.getLogger(__name__)

OPEN_GROUP = "("
CLOSE_GROUP = ")"
NEGATION = "-"

literal_rex = re.compile(r"[0-9]+(?:\.[0-9]*)?")
whitespace_rex = re.compile(r"\s+")


def strip_whitespace(equation):
    return whitespace_rex.sub("", equation)


def _found(text, pos, end):
    return repr(text[pos]) if pos < end else "end of input"


def scan_negation(text, pos, end):
    """Consume a single minus sign at `pos`, if there is one.

    >>> scan_negation("--3", 0, 3)
    (True, 1)
    >>> scan_negation("3", 0, 1)
    (False, 0)
    """
    if text.startswith(NEGATION, pos, end):
        return True, pos + 1
    return False, pos


def scan_literal(text, pos, end):
    """Consume the longest ``digits[.digits]`` prefix at `pos` as a `Literal`.

    >>> scan_literal("12.5+1", 0, 6)
    (lit(12.5), 4)
    """
    if m := literal_rex.match(text, pos, end):
        return Literal(float(m.group())), m.end()
    raise InvalidOperand(
        pos, f"expected a number or group, found {_found(text, pos, end)}"
    )


def scan_operator(text, pos, end):
    """Consume one operator symbol at `pos`.

    >>> scan_operator("^2", 0, 2)
    (op('^'), 1)
    """
    if pos < end and (op := OPS.get(text[pos])):
        return op, pos + 1
    raise InvalidOperator(pos, f"expected an operator, found {_found(text, pos, end)}")


def find_group_end(text, pos, end):
    """Return the index of the bracket that closes the group opened at `pos`.

    >>> find_group_end("(1+(2))*3", 0, 9)
    6
    """
    level = 0
    for i in range(pos, end):
        if text[i] == OPEN_GROUP:
            level += 1
        elif text[i] == CLOSE_GROUP:
            level -= 1
        if level == 0:
            return i
    raise MissingClosingSymbol(pos, f"{level} unclosed group(s)")


def read_operand(text, pos, end):
    """Consume a number at `pos`, or find the extent of the group opened there.

    Gives ``(literal, new_pos)`` for a number and ``(None, close)`` for a
    group, `close` being the index of its closing bracket.
    """
    if text.startswith(OPEN_GROUP, pos, end):
        return None, find_group_end(text, pos, end)
    return scan_literal(text, pos, end)


def collapse_tier(tokens, tier):
    """Fold every operator of `tier` in `tokens` into an `Operator` node.

    Neighbouring operators of the same tier combine left to right; the
    operators of other tiers and their operands are passed through.
    """
    collapsed = tokens[:1]
    for op, rhs in zip(tokens[1::2], tokens[2::2]):
        if op in tier:
            collapsed[-1] = Operator(op, collapsed[-1], rhs)
        else:
            collapsed += [op, rhs]
    return collapsed


def collapse(tokens, pos):
    """Reduce ``[operand, op, operand, ..., operand]`` to a single tree."""
    for tier in TIERS:
        tokens = collapse_tier(tokens, tier)
    if len(tokens) != 1:
        raise InternalError(pos, f"{len(tokens)} tokens left after collapsing")
    return tokens[0]


class _Expr:
    """The part of one (sub)expression scanned so far."""

    def __init__(self, text, start, end):
        self.start = start
        self.end = end
        self.negated, self.pos = scan_negation(text, start, end)
        self.tokens = []

    def add_operand(self, operand):
        if self.negated and not self.tokens:
            operand = negate(operand)
        self.tokens.append(operand)


def build_subtree(text, pos, end, is_group=False):
    """Build the tree for ``text[pos:end]``.

    Groups are parsed without recursion: entering one pushes the enclosing
    expression on a stack, and closing it hands the group's tree to that
    expression as its next operand. Nesting depth is bounded only by memory.
    """
    if pos == end:
        if is_group:
            raise EmptyGroup(pos - 1)
        return None
    enclosing = []
    expr = _Expr(text, pos, end)
    while True:
        operand, pos = read_operand(text, expr.pos, expr.end)
        if operand is None:
            if pos == expr.pos + 1:
                raise EmptyGroup(expr.pos)
            enclosing.append(expr)
            expr = _Expr(text, expr.pos + 1, pos)
            continue
        expr.add_operand(operand)
        # A finished expression is the next operand of the one enclosing it.
        while pos == expr.end:
            tree = collapse(expr.tokens, expr.start)
            if not enclosing:
                return tree
            expr = enclosing.pop()
            pos += 1
            expr.add_operand(tree)
        op, expr.pos = scan_operator(text, pos, expr.end)
        expr.tokens.append(op)


def build_tree(equation):
    """Parse `equation` and return the root of its tree.

    An empty (or all whitespace) equation gives None.

    >>> build_tree("1 + 2*3") == Operator(
    ...     OPS["+"], Literal(1.0), Operator(OPS["*"], Literal(2.0), Literal(3.0))
    ... )
    True
    """
    text = strip_whitespace(equation)
    tree = build_subtree(text, 0, len(text))
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("parsed %r as %r", equation, to_infix(tree))
    return tree
