"""
Shared lexical and grammatical tables for the MYLANG front end.

Exports:
    - KEYWORDS: reserved words mapped to their token types.
    - BINOP_PRECEDENCE: binding strength of each binary operator (higher binds tighter).
    - WHITESPACE, ASCII_LETTERS, ASCII_DIGITS, COMMENT_START, LINE_TERMINATORS
    - ANON_EXPR_NAME: name given to the synthetic function wrapping a top-level expression.
"""

KEYWORDS: dict[str, str] = {
    "def": "DEF",
    "extern": "EXTERN",
}

# All operators are left-associative.
BINOP_PRECEDENCE: dict[str, int] = {
    "<": 10,
    ">": 10,
    "+": 20,
    "-": 20,
    "*": 40,
    "/": 40,
}

NO_PRECEDENCE = -1

WHITESPACE = " \t\n\r\v\f"
ASCII_LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
ASCII_DIGITS = "0123456789"
COMMENT_START = "#"
LINE_TERMINATORS = "\n\r"

ANON_EXPR_NAME = "__anon_expr"
# Identifiers cannot start with "_", so generated names never clash with user names.
BUILTINS_ALIAS = "__mylang_builtins"

TOKEN_TYPES = ("EOF", "DEF", "EXTERN", "IDENT", "NUMBER", "SYMBOL")

__all__ = [
    "ANON_EXPR_NAME",
    "ASCII_DIGITS",
    "ASCII_LETTERS",
    "BINOP_PRECEDENCE",
    "BUILTINS_ALIAS",
    "COMMENT_START",
    "KEYWORDS",
    "LINE_TERMINATORS",
    "NO_PRECEDENCE",
    "TOKEN_TYPES",
    "WHITESPACE",
]
