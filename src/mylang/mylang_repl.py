"""
Interactive read-eval-print loop for MYLANG.

Each input line is parsed into top-level forms. Every form is lowered to Python by a
`PythonEmitter` that lives as long as the session (so functions defined on one line
can be called on the next) and executed in a persistent namespace:

    ready> def add(x y) x+y
    Parsed a function definition.
    ready> add(1, 2)
    Evaluated to 3.0

Syntax errors and lowering errors are reported as `Error: <message>` on stderr and the
session carries on with the next form.
"""

import io
import logging
import sys
import traceback
from typing import Any

from mylang.emitters.py_emitter import LoweringError, PythonEmitter
from mylang.mylang_constants import ANON_EXPR_NAME
from mylang.mylang_parser import ParseResult, Parser

logger = logging.getLogger(__name__)

PROMPT = "ready> "

MESSAGES = {
    "definition": "Parsed a function definition.",
    "extern": "Parsed an extern",
}


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def report_error(message: object) -> None:
    print(f"Error: {message}", file=sys.stderr)


def evaluate(
    result: ParseResult,
    emitter: PythonEmitter,
    env_globals: dict[str, Any],
    verbose: bool = False,
) -> Any:
    """Lowers and executes one successfully parsed form.

    Returns:
        The value of the expression for expression forms, otherwise None.

    Raises:
        LoweringError: If the form cannot be lowered; nothing is executed then.
    """
    assert result.node is not None  # for mypy
    emitter.reset()
    emitter._visit(result.node)
    code = emitter.get_output()
    logger.debug("lowered %s to:\n%s", result.kind, code)
    if verbose:
        print(f"[py] >>>\n{code}")
    exec(code, env_globals)  # nosec B102
    if result.kind == "expression":
        return env_globals[ANON_EXPR_NAME]()
    return None


def run_source(
    src: str,
    emitter: PythonEmitter,
    env_globals: dict[str, Any],
    verbose: bool = False,
) -> int:
    """Parses and evaluates every top-level form of `src`.

    Returns:
        int: The number of forms that failed to parse, lower or run.
    """
    errors = 0
    for result in Parser.from_source(src).parse_forms():
        if not result.ok:
            report_error(result.diagnostic)
            errors += 1
            continue
        try:
            value = evaluate(result, emitter, env_globals, verbose)
        except LoweringError as e:
            report_error(e)
            errors += 1
            continue
        except Exception:
            print_traceback()
            errors += 1
            continue

        if result.kind == "expression":
            print(f"Evaluated to {value}")
        else:
            print(MESSAGES[result.kind])
    return errors


def start_repl(verbose: bool = False) -> None:
    print("MYLANG REPL. Type 'exit' or 'quit' to leave.")
    emitter = PythonEmitter(evaluate_anonymous=False)
    env_globals: dict[str, Any] = {}

    while True:
        try:
            src = input(PROMPT).strip()
            if src in ("exit", "quit"):
                print("Exiting MYLANG REPL.")
                return
            if not src:
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            run_source(src, emitter, env_globals, verbose)
        except (KeyboardInterrupt, EOFError):
            print("\nExiting MYLANG REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
