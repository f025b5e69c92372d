"""
Lexical analyzer for the MYLANG programming language.

This module provides core components for converting raw source code into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Pulls characters from a CharacterStream and produces one Token per call.

Features:
    - Skips whitespace and single-line comments (`#`)
    - Recognizes:
        * The keywords `def` and `extern`
        * Identifiers (`[a-zA-Z][a-zA-Z0-9]*`)
        * Numbers (`[0-9.]+`, always converted to float)
        * Any other single character as a SYMBOL token

The lexer never raises: a malformed number such as `1.2.3` is converted using its
longest valid prefix (`1.2`) and a warning is logged.

Example:
    >>> lexer = Lexer(CharacterStream("def f(x) x"))
    >>> lexer.next_token()
    Token(DEF, None)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - parse_number
    - tokenize
"""

import logging
import re
from typing import Any

from mylang.mylang_constants import (
    ASCII_DIGITS,
    ASCII_LETTERS,
    COMMENT_START,
    KEYWORDS,
    LINE_TERMINATORS,
    WHITESPACE,
)

logger = logging.getLogger(__name__)

_NUMBER_PREFIX = re.compile(r"\d+(?:\.\d*)?|\.\d+")


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            Exception: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise Exception(
                f"CharacterStreamError: Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the MYLANG language.

    Attributes:
        type (str): One of 'EOF', 'DEF', 'EXTERN', 'IDENT', 'NUMBER', 'SYMBOL'.
        value (str | float | None): The identifier name, the numeric value, the symbol
            character, or None for payload-free tokens.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(
        self, type_: str, value: str | float | None = None, line: int = 0, col: int = 0
    ):
        self.type = type_
        self.value = value
        self.line = line
        self.col = col

    def is_symbol(self, char: str) -> bool:
        """Returns True if this is the SYMBOL token for `char`."""
        return self.type == "SYMBOL" and self.value == char

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.col))


def is_letter(ch: str) -> bool:
    return ch != "" and ch in ASCII_LETTERS


def is_digit(ch: str) -> bool:
    return ch != "" and ch in ASCII_DIGITS


def parse_number(text: str) -> float:
    """Converts a scanned `[0-9.]+` run to a float the way C's strtod would.

    Only the longest leading prefix that forms a valid decimal is converted; text
    with no such prefix (e.g. "." or "..") yields 0.0.

    Args:
        text (str): The raw characters scanned by the lexer.

    Returns:
        float: The converted value.
    """
    match = _NUMBER_PREFIX.match(text)
    if match is None:
        logger.warning("numeric literal %r has no digits, using 0.0", text)
        return 0.0
    if match.end() != len(text):
        logger.warning(
            "malformed numeric literal %r, using prefix %r", text, match.group()
        )
    return float(match.group())


class Lexer:
    """Lexical analyzer for the MYLANG language.

    The lexer holds the last character read but not yet consumed (`last_char`),
    starting from a blank so the first call skips leading whitespace. Each call to
    `next_token` consumes exactly the characters of one token and reads at most one
    character past it.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        last_char (str): The pending raw character, or "" at end of input.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self.last_char = " "
        self.char_line = stream.line
        self.char_col = stream.column

    def advance(self) -> str:
        """Reads the next raw character into `last_char` and returns it."""
        self.char_line, self.char_col = self.stream.line, self.stream.column
        self.last_char = "" if self.stream.end_of_file() else self.stream.next()
        return self.last_char

    def skip_whitespace(self) -> None:
        while self.last_char != "" and self.last_char in WHITESPACE:
            self.advance()

    def skip_comment(self) -> None:
        """Advances until the end of the current line or the end of input."""
        while self.last_char != "" and self.last_char not in LINE_TERMINATORS:
            self.advance()

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Once the input is exhausted every further call returns an EOF token.
        """
        self.skip_whitespace()
        while self.last_char == COMMENT_START:
            self.skip_comment()
            self.skip_whitespace()

        ch = self.last_char
        line, col = self.char_line, self.char_col

        # 1. Identifier or keyword
        if is_letter(ch):
            ident = ch
            while is_letter(self.advance()) or is_digit(self.last_char):
                ident += self.last_char
            if ident in KEYWORDS:
                return Token(KEYWORDS[ident], None, line, col)
            return Token("IDENT", ident, line, col)

        # 2. Number
        if is_digit(ch) or ch == ".":
            num = ch
            while is_digit(self.advance()) or self.last_char == ".":
                num += self.last_char
            return Token("NUMBER", parse_number(num), line, col)

        # 3. End of input
        if ch == "":
            return Token("EOF", None, line, col)

        # 4. Any other character stands for itself
        self.advance()
        return Token("SYMBOL", ch, line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely; the returned list always ends with the EOF token."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == "EOF":
            break
    return tokens


__all__ = ["CharacterStream", "Lexer", "Token", "parse_number", "tokenize"]
