"""
Renders MYLANG AST nodes back into canonical MYLANG source text.

The rendering is designed to be read back by the lexer and parser into an equal tree:

    - Numbers use positional notation (the lexer has no exponent syntax).
    - Every binary operation is parenthesized, so precedence never has to be inferred.
    - Each top-level form ends with `;`, so adjacent forms never run together.
    - The anonymous function wrapping a top-level expression is rendered as the bare
      expression.
"""

import math
from decimal import Decimal

from mylang.emitters.base import BaseEmitter
from mylang.mylang_ast import (
    ASTNode,
    BinaryOp,
    Call,
    FunctionDef,
    NumberLiteral,
    Prototype,
    VariableRef,
)
from mylang.mylang_constants import ANON_EXPR_NAME


def format_number(value: float) -> str:
    """Formats a non-negative float without an exponent, e.g. 1e20 -> '100000000000000000000'."""
    if math.isinf(value):
        # Any literal beyond the float range reads back as infinity.
        return "1" + "0" * 400
    return format(Decimal(repr(float(value))), "f")


class SourceEmitter(BaseEmitter):
    """Emits canonical MYLANG source from AST nodes."""

    def emit_prototype(self, node: Prototype) -> None:
        self.lines.append(f"extern {self.render_prototype(node)};")

    def emit_function(self, node: FunctionDef) -> None:
        body = self.emit_expr(node.body)
        if node.proto.name == ANON_EXPR_NAME and not node.proto.params:
            self.lines.append(f"{body};")
        else:
            self.lines.append(f"def {self.render_prototype(node.proto)} {body};")

    def render_prototype(self, node: Prototype) -> str:
        return f"{node.name}({' '.join(node.params)})"

    def emit_expr_number(self, node: NumberLiteral) -> str:
        return format_number(node.value)

    def emit_expr_variable(self, node: VariableRef) -> str:
        return node.name

    def emit_expr_binary(self, node: BinaryOp) -> str:
        return f"({self.emit_expr(node.left)} {node.operator} {self.emit_expr(node.right)})"

    def emit_expr_call(self, node: Call) -> str:
        return f"{node.callee}({', '.join(self.emit_expr(arg) for arg in node.args)})"


def render(node: ASTNode) -> str:
    """Returns the MYLANG text of a single node (expression or top-level form)."""
    emitter = SourceEmitter()
    text = emitter._visit(node)
    return text if text is not None else emitter.get_output()
