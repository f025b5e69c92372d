"""
Common machinery shared by the MYLANG emitters.

An emitter turns AST nodes into text. Top-level nodes (`function`, `prototype`) are
handled by `emit_<kind>` methods that append lines to the buffer; expression nodes are
handled by `emit_expr_<kind>` methods that return the expression text.
"""

from mylang.mylang_ast import EXPRESSION_KINDS, ASTNode


class BaseEmitter:
    """Line buffer, indentation and kind-based dispatch for emitters.

    Attributes:
        lines (list[str]): Accumulated lines of emitted code.
        indent (int): Current indentation level.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "    " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def reset(self) -> None:
        """Drops the buffered output, keeping any other emitter state."""
        self.lines.clear()
        self.indent = 0

    def emit_expr(self, node: ASTNode) -> str:
        """
        Dispatches expression emission based on node kind.

        Raises
        ------
        NotImplementedError
            If no emitter exists for the node kind.
        """
        method = getattr(self, f"emit_expr_{node.kind}", None)
        if not callable(method):
            raise NotImplementedError(f"No expression emitter for kind '{node.kind}'")
        return str(method(node))

    def _visit(self, node: ASTNode) -> str | None:
        """Returns the text of an expression node, or emits a top-level node in place."""
        if node.kind in EXPRESSION_KINDS:
            return self.emit_expr(node)

        meth = getattr(self, f"emit_{node.kind}", None)
        if not meth:
            raise NotImplementedError(
                f"{type(self).__name__}: no emitter for {node.kind}"
            )
        meth(node)
        return None
