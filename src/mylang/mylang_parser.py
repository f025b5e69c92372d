"""
MYLANG Language Parser

Parses the token stream produced by `Lexer` into abstract syntax trees (ASTs).

The parser is a recursive-descent engine with a one-token lookahead buffer
(`current_token`). Tokens are pulled from the lexer on demand; nothing is ever pushed
back. Binary expressions are built with operator-precedence climbing driven by a
precedence table (`BINOP_PRECEDENCE` by default).

Grammar
-------
    expression   ::= primary binop_rhs
    primary      ::= number | identifier ['(' (expression (',' expression)*)? ')']
                   | '(' expression ')'
    binop_rhs    ::= (binop primary)*
    prototype    ::= identifier '(' identifier* ')'
    definition   ::= 'def' prototype expression
    extern_decl  ::= 'extern' prototype
    top_level    ::= definition | extern_decl | expression | ';'

Error handling
--------------
A production that cannot match its expected tokens raises `ParseError` before it
builds any node, so a failed sub-production never leaves a partial tree behind. The
top-level entry points (`parse_top_level`, `parse_forms`, `parse`) never raise: they
return a `ParseResult` holding either the node or the `Diagnostic`, and recover by
discarding exactly one token before the next form is attempted.

Entry Points
------------
- `parse_top_level()`: Parse the next top-level form (the driver contract).
- `parse_forms()`: Yield a result for every remaining top-level form.
- `parse()`: Same as `parse_forms()`, collected into a list.
- `parse_expression()`, `parse_definition()`, `parse_extern()`: Single productions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Literal

from mylang.mylang_ast import (
    BinaryOp,
    Call,
    Expr,
    FunctionDef,
    NumberLiteral,
    Prototype,
    VariableRef,
)
from mylang.mylang_constants import ANON_EXPR_NAME, BINOP_PRECEDENCE, NO_PRECEDENCE
from mylang.mylang_lexer import CharacterStream, Lexer, Token

logger = logging.getLogger(__name__)

FormKind = Literal["definition", "extern", "expression"]


@dataclass(frozen=True)
class Diagnostic:
    """A syntax error message and the position of the token that triggered it."""

    message: str
    line: int = 0
    col: int = 0

    def __str__(self) -> str:
        return self.message


class ParseError(SyntaxError):
    """Raised by a production that cannot match its expected token sequence."""

    def __init__(self, diagnostic: Diagnostic) -> None:
        super().__init__(diagnostic.message)
        self.diagnostic = diagnostic


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one top-level form.

    Exactly one of `node` and `diagnostic` is set.

    Attributes:
        kind: Which production was attempted ("definition", "extern" or "expression").
        node: The parsed `FunctionDef` (definitions and wrapped expressions) or
            `Prototype` (externs), or None on failure.
        diagnostic: The syntax error, or None on success.
    """

    kind: FormKind
    node: FunctionDef | Prototype | None = None
    diagnostic: Diagnostic | None = None

    @property
    def ok(self) -> bool:
        return self.diagnostic is None


class Parser:
    """
    MYLANG Parser Class

    Attributes
    ----------
    lexer : Lexer
        The token source.
    current_token : Token
        The one-token lookahead buffer; primed on construction.
    precedence : Mapping[str, int]
        Binding strength of each binary operator character.
    """

    def __init__(
        self, lexer: Lexer, precedence: Mapping[str, int] | None = None
    ) -> None:
        self.lexer = lexer
        self.precedence: Mapping[str, int] = dict(
            BINOP_PRECEDENCE if precedence is None else precedence
        )
        self.current_token: Token = self.lexer.next_token()

    @classmethod
    def from_source(
        cls, source: str, precedence: Mapping[str, int] | None = None
    ) -> Parser:
        return cls(Lexer(CharacterStream(source)), precedence)

    def current(self) -> Token:
        return self.current_token

    def advance(self) -> Token:
        """Reads another token from the lexer into the lookahead buffer."""
        self.current_token = self.lexer.next_token()
        return self.current_token

    def error(self, message: str) -> ParseError:
        tok = self.current_token
        return ParseError(Diagnostic(message, tok.line, tok.col))

    def get_token_precedence(self) -> int:
        """Precedence of the pending binary operator, or -1 if it is not one."""
        tok = self.current_token
        if tok.type != "SYMBOL":
            return NO_PRECEDENCE
        return self.precedence.get(str(tok.value), NO_PRECEDENCE)

    # numberexpr ::= number
    def parse_number_expr(self) -> NumberLiteral:
        tok = self.current_token
        assert isinstance(tok.value, float)  # for mypy
        self.advance()
        return NumberLiteral(tok.value, line=tok.line, col=tok.col)

    # parenexpr ::= '(' expression ')'
    def parse_paren_expr(self) -> Expr:
        self.advance()  # eat (
        expr = self.parse_expression()
        if not self.current_token.is_symbol(")"):
            raise self.error("expected ')'")
        self.advance()  # eat )
        return expr

    def parse_identifier_expr(self) -> VariableRef | Call:
        """
        identifierexpr
            ::= identifier
            ::= identifier '(' expression* ')'
        """
        tok = self.current_token
        name = str(tok.value)
        self.advance()  # eat identifier

        if not self.current_token.is_symbol("("):
            return VariableRef(name, line=tok.line, col=tok.col)

        self.advance()  # eat (
        args: list[Expr] = []
        if not self.current_token.is_symbol(")"):
            while True:
                args.append(self.parse_expression())
                if self.current_token.is_symbol(")"):
                    break
                if not self.current_token.is_symbol(","):
                    raise self.error("Expected ')' or ',' in argument list")
                self.advance()
        self.advance()  # eat )
        return Call(name, tuple(args), line=tok.line, col=tok.col)

    def parse_primary(self) -> Expr:
        tok = self.current_token
        if tok.type == "IDENT":
            return self.parse_identifier_expr()
        if tok.type == "NUMBER":
            return self.parse_number_expr()
        if tok.is_symbol("("):
            return self.parse_paren_expr()
        raise self.error("unknown token when expecting an expression")

    def parse_binop_rhs(self, min_precedence: int, left: Expr) -> Expr:
        """Folds `(binop primary)*` onto `left` by precedence climbing.

        Operators binding at least as tightly as `min_precedence` are consumed. When
        the operator after the right operand binds strictly tighter than the one just
        consumed, the right operand absorbs it first; recursing with the consumed
        precedence + 1 keeps equal-precedence chains left-associative.
        """
        while True:
            tok_prec = self.get_token_precedence()
            if tok_prec < min_precedence:
                return left

            op_tok = self.current_token
            self.advance()  # eat binop
            right = self.parse_primary()

            if tok_prec < self.get_token_precedence():
                right = self.parse_binop_rhs(tok_prec + 1, right)

            left = BinaryOp(
                str(op_tok.value), left, right, line=op_tok.line, col=op_tok.col
            )

    # expression ::= primary binoprhs
    def parse_expression(self) -> Expr:
        left = self.parse_primary()
        return self.parse_binop_rhs(0, left)

    # prototype ::= id '(' id* ')'
    def parse_prototype(self) -> Prototype:
        tok = self.current_token
        if tok.type != "IDENT":
            raise self.error("Expected function name in prototype")
        name = str(tok.value)

        if not self.advance().is_symbol("("):
            raise self.error("Expected '(' in prototype")

        params: list[str] = []
        while self.advance().type == "IDENT":
            params.append(str(self.current_token.value))
        if not self.current_token.is_symbol(")"):
            raise self.error("Expected ')' in prototype")
        self.advance()  # eat )

        return Prototype(name, tuple(params), line=tok.line, col=tok.col)

    # definition ::= 'def' prototype expression
    def parse_definition(self) -> FunctionDef:
        tok = self.current_token
        self.advance()  # eat def
        proto = self.parse_prototype()
        body = self.parse_expression()
        return FunctionDef(proto, body, line=tok.line, col=tok.col)

    # external ::= 'extern' prototype
    def parse_extern(self) -> Prototype:
        self.advance()  # eat extern
        return self.parse_prototype()

    # toplevelexpr ::= expression
    def parse_top_level_expr(self) -> FunctionDef:
        """Parses an expression and wraps it in a nameless zero-argument function."""
        tok = self.current_token
        body = self.parse_expression()
        proto = Prototype(ANON_EXPR_NAME, (), line=tok.line, col=tok.col)
        return FunctionDef(proto, body, line=tok.line, col=tok.col)

    def parse_top_level(self) -> ParseResult | None:
        """
        Parses the next top-level form.

        top ::= definition | external | expression | ';'

        Top-level semicolons are skipped. Returns None once the input is exhausted.
        On a syntax error one token is discarded so the next call can resume.
        """
        while self.current_token.is_symbol(";"):
            self.advance()
        if self.current_token.type == "EOF":
            return None

        kind: FormKind
        if self.current_token.type == "DEF":
            kind = "definition"
        elif self.current_token.type == "EXTERN":
            kind = "extern"
        else:
            kind = "expression"

        try:
            node: FunctionDef | Prototype
            if kind == "definition":
                node = self.parse_definition()
            elif kind == "extern":
                node = self.parse_extern()
            else:
                node = self.parse_top_level_expr()
        except ParseError as e:
            logger.debug(
                "%s failed at line %d, col %d: %s; skipping %r",
                kind,
                e.diagnostic.line,
                e.diagnostic.col,
                e.diagnostic.message,
                self.current_token,
            )
            self.advance()  # skip token for error recovery
            return ParseResult(kind, diagnostic=e.diagnostic)

        logger.debug("parsed %s: %r", kind, node)
        return ParseResult(kind, node=node)

    def parse_forms(self) -> Iterator[ParseResult]:
        while (result := self.parse_top_level()) is not None:
            yield result

    def parse(self) -> list[ParseResult]:
        """Parse every remaining top-level form of the input."""
        return list(self.parse_forms())


__all__ = ["Diagnostic", "ParseError", "ParseResult", "Parser"]
