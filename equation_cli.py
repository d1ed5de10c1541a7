"""Evaluate equations from the command line.

    $ equation-evaluator "2 + 7 * (3 + 1)" "(4+3"
    Result: 30
    Error: Invalid Equation!

Without arguments a single equation is read from a prompt. Every kind of
parse failure gets the same message; run with DEBUG=1 in the environment (or
--debug) to have the actual error logged.
"""
import argparse
import logging
import os
import sys

from equation_errors import EquationError, InternalError
from equation_eval import evaluate

DEBUG = bool(os.getenv("DEBUG", False))

logger = logging.getLogger(__name__)


def format_result(value):
    """
    >>> format_result(30.0)
    '30'
    >>> format_result(-38.4)
    '-38.4'
    >>> format_result(float("nan"))
    'nan'
    """
    return f"{value:g}"


def run(equation, file=None):
    """Print the result of `equation`, or an error; return whether it evaluated."""
    try:
        result = evaluate(equation)
    except InternalError:
        logger.exception("failed to build a tree for %r", equation)
        print("Error: Invalid Equation!", file=file)
        return False
    except EquationError as e:
        logger.debug("rejected %r: %s", equation, e)
        print("Error: Invalid Equation!", file=file)
        return False
    print(f"Result: {format_result(result)}", file=file)
    return True


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="equation-evaluator", description="Evaluate arithmetic equations."
    )
    parser.add_argument(
        "equations", nargs="*", metavar="EQUATION", help="prompted for if omitted"
    )
    parser.add_argument(
        "--debug", action="store_true", default=DEBUG, help="log why input is rejected"
    )
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    equations = args.equations
    if not equations:
        try:
            equations = [input("Enter equation: ")]
        except EOFError:
            return 1
    # Evaluate all of them even after a failure.
    results = [run(equation) for equation in equations]
    return 0 if all(results) else 1


if __name__ == "__main__":
    sys.exit(main())
