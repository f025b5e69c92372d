"""
MYLANG CLI Entrypoint.

This module provides the command-line interface for MYLANG source code.
It supports transpilation, execution, token/AST dumps and interactive REPL mode.

Features:
    - Read source from `.my` files or inline strings.
    - Lex, parse, and transpile code into the selected target ('py' or 'my').
    - Report syntax errors as `Error: <message>` and keep going with the next form.
    - Output to console or file.
    - Optionally execute the transpiled Python code.
    - Launch an interactive REPL with optional verbosity.

Example usage:
    mylang fib.my
    mylang -s "def add(x y) x+y; add(1, 2)" -e
    mylang fib.my -t py -o fib.py
    mylang -s "1+2*3" --ast
    mylang --repl --verbose

Functions:
    run_mylang(source: str, is_string: bool = False, target: str = "py", out: Optional[str] = None,
               execute: bool = False, pretty: bool = False, show_tokens: bool = False,
               show_ast: bool = False) -> int:
        Executes the full MYLANG pipeline (lex → parse → transpile → output/exec) and
        returns the number of errors reported.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL, transpile, or execute).
"""

import argparse
import io
import json
import logging
import sys

from mylang.emitters.py_emitter import LoweringError
from mylang.mylang_lexer import CharacterStream, Lexer, tokenize
from mylang.mylang_parser import Parser
from mylang.mylang_transpile import Transpiler

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(level=getattr(logging, level.upper()), format=LOG_FORMAT)


def run_mylang(
    source: str,
    is_string: bool = False,
    target: str = "py",
    out: str | None = None,
    execute: bool = False,
    pretty: bool = False,
    show_tokens: bool = False,
    show_ast: bool = False,
) -> int:
    """
    Run the MYLANG toolchain: lex, parse, transpile, and optionally execute or write output.

    Args:
        source (str): The MYLANG source code or path to a `.my` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path. Defaults to False.
        target (str): Transpilation target ('py' or 'my'). Defaults to 'py'.
        out (str | None): Optional path to write the transpiled output. If None, prints to stdout.
        execute (bool): If True, executes the transpiled code (only valid for Python target). Defaults to False.
        pretty (bool): If True, prints formatted banners and structured output. Defaults to False.
        show_tokens (bool): If True, prints the token stream and stops.
        show_ast (bool): If True, prints the parsed forms as JSON and stops.

    Returns:
        int: The number of syntax, lowering and runtime errors reported.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.my'.
    """
    if not is_string and not source.endswith(".my"):
        raise ValueError("Only .my files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Optional token dump
    if show_tokens:
        for tok in tokenize(source):
            print(f"{tok.line}:{tok.col}\t{tok!r}")
        return 0

    # 3. Parsing
    parser = Parser(Lexer(CharacterStream(source, 0, 1, 1)))
    errors = 0
    ast = []
    for result in parser.parse_forms():
        if result.ok:
            assert result.node is not None  # for mypy
            ast.append(result.node)
        else:
            print(f"Error: {result.diagnostic}", file=sys.stderr)
            errors += 1
    logger.debug("parsed %d forms with %d errors", len(ast), errors)

    if show_ast:
        print(json.dumps([node.to_dict() for node in ast], indent=2))
        return errors

    # 4. Transpiling
    transpiler = Transpiler(target)
    try:
        code = transpiler.transpile(ast)
    except LoweringError as e:
        print(f"Error: {e}", file=sys.stderr)
        return errors + 1

    # 5. Output result
    if pretty:
        banner = "=" * 20
        label = "Transpiled Python" if target in ("py", "python") else "Canonical source"
        print(f"{banner}\n{label}\n{banner}\n{code}\n{banner}\n")
    elif not out:
        print(code)

    # 6. Optional write to file
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(code)
        if pretty:
            print(f"(wrote to {out})")

    # 7. Optional execution
    if execute and target in ("py", "python"):
        buf = io.StringIO()
        old_stdout = sys.stdout
        failure: Exception | None = None
        try:
            sys.stdout = buf
            exec(code, {})  # nosec B102
        except Exception as e:
            logger.debug("execution failed", exc_info=True)
            failure = e
        finally:
            sys.stdout = old_stdout
        if pretty:
            print("<<< OUTPUT >>>")
        print(buf.getvalue().rstrip())
        if failure is not None:
            print(f"Error: {type(failure).__name__}: {failure}", file=sys.stderr)
            errors += 1
    elif execute:
        print(f"Execution not supported for target: {target}", file=sys.stderr)

    return errors


def main() -> None:
    """
    Entry point for the MYLANG CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, runs the full MYLANG toolchain and exits with status 1 if any
      error was reported.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from mylang.mylang_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="mylang")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-t",
        "--target",
        choices=("py", "my"),
        default="py",
        help="Transpile target (default: py)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-e",
        "--exec",
        dest="execute",
        action="store_true",
        help="Exec transpiled Python code",
    )
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show code/output with banners"
    )
    parser.add_argument(
        "--tokens", action="store_true", help="Print the token stream and exit"
    )
    parser.add_argument(
        "--ast", action="store_true", help="Print the parsed forms as JSON and exit"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of transpiling",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    if args.repl or args.source is None:
        from mylang.mylang_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    errors = run_mylang(
        source=args.source,
        is_string=args.string,
        target=args.target,
        out=args.out,
        execute=args.execute,
        pretty=args.pretty,
        show_tokens=args.tokens,
        show_ast=args.ast,
    )
    if errors:
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
