"""
Defines the abstract syntax tree (AST) node structure for the MYLANG programming language.

Classes:
    ASTNode:
        Base class of every node. Carries the `kind` tag used by emitters for dispatch,
        source position metadata, and `to_dict()` serialization.

    NumberLiteral, VariableRef, BinaryOp, Call:
        Expression variants.

    Prototype, FunctionDef:
        Function signature and function definition.

    ASTDict:
        TypedDict representation for serializing nodes to plain Python dictionaries,
        suitable for JSON output or debugging.

Nodes are frozen dataclasses: they are built once by a parser production and never
mutated afterwards. Sequences (call arguments, parameter names) are stored as tuples.
Each child belongs to exactly one parent, so the result of a parse is always a tree.

Position metadata (`line`, `col`) is informative only and does not take part in
equality, so trees parsed from different layouts of the same program compare equal.

Example:
    node = BinaryOp("+", NumberLiteral(1.0), VariableRef("x"))
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, TypedDict, Union, cast


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an AST node used for serialization.

    Only the keys relevant to the node's kind are present besides `kind`, `line`
    and `col`.
    """

    kind: str
    line: int
    col: int
    value: float
    name: str
    operator: str
    left: "ASTDict"
    right: "ASTDict"
    callee: str
    args: list["ASTDict"]
    params: list[str]
    proto: "ASTDict"
    body: "ASTDict"


def _serialize(value: Any) -> Any:
    if isinstance(value, ASTNode):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


@dataclass(frozen=True)
class ASTNode:
    """Base class for all MYLANG AST nodes."""

    kind: ClassVar[str] = "node"

    line: int = field(default=0, compare=False, repr=False, kw_only=True)
    col: int = field(default=0, compare=False, repr=False, kw_only=True)

    def to_dict(self) -> ASTDict:
        data: dict[str, Any] = {"kind": self.kind, "line": self.line, "col": self.col}
        for f in fields(self):
            if f.name not in ("line", "col"):
                data[f.name] = _serialize(getattr(self, f.name))
        return cast(ASTDict, data)


@dataclass(frozen=True)
class NumberLiteral(ASTNode):
    """Numeric literal such as `1.0`."""

    kind: ClassVar[str] = "number"

    value: float


@dataclass(frozen=True)
class VariableRef(ASTNode):
    """Reference to a variable (a function parameter), like `x`."""

    kind: ClassVar[str] = "variable"

    name: str


@dataclass(frozen=True)
class BinaryOp(ASTNode):
    """Binary operator application with exactly two operands."""

    kind: ClassVar[str] = "binary"

    operator: str
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Call(ASTNode):
    """Function call; argument order is call-site order."""

    kind: ClassVar[str] = "call"

    callee: str
    args: tuple[Expr, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))


@dataclass(frozen=True)
class Prototype(ASTNode):
    """
    The "prototype" of a function: its name and its parameter names, which
    implicitly give the number of arguments it takes.

    Duplicate parameter names are kept as written.
    """

    kind: ClassVar[str] = "prototype"

    name: str
    params: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))

    @property
    def arity(self) -> int:
        return len(self.params)


@dataclass(frozen=True)
class FunctionDef(ASTNode):
    """A function definition: a prototype plus a single body expression."""

    kind: ClassVar[str] = "function"

    proto: Prototype
    body: Expr


Expr = Union[NumberLiteral, VariableRef, BinaryOp, Call]
"""Any node that can appear in expression position."""

EXPRESSION_KINDS = frozenset(
    cls.kind for cls in (NumberLiteral, VariableRef, BinaryOp, Call)
)

__all__ = [
    "ASTDict",
    "ASTNode",
    "BinaryOp",
    "Call",
    "EXPRESSION_KINDS",
    "Expr",
    "FunctionDef",
    "NumberLiteral",
    "Prototype",
    "VariableRef",
]
