"""
Runtime library for lowered MYLANG programs.

These are the host functions an `extern` declaration can bind to besides the
functions of Python's `math` module. Every MYLANG value is a float, so each function
takes and returns floats.
"""

import math
import sys

RUNTIME_FUNCTIONS = ("putchard", "printd")


def putchard(x: float) -> float:
    """Writes the character whose code point is `x` to stdout; returns 0."""
    sys.stdout.write(chr(int(x)))
    sys.stdout.flush()
    return 0.0


def printd(x: float) -> float:
    """Prints `x` followed by a newline; returns 0."""
    print(f"{x:f}")
    return 0.0


def math_function_names() -> frozenset[str]:
    """Names of the callable `math` functions an extern may refer to."""
    return frozenset(
        name
        for name in dir(math)
        if not name.startswith("_") and callable(getattr(math, name))
    )


__all__ = ["RUNTIME_FUNCTIONS", "math_function_names", "printd", "putchard"]
