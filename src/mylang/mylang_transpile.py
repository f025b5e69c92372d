"""
Provides the `Transpiler` class and emitter interface for lowering MYLANG ASTs into code.

Classes and Features:
    - Emitter (Protocol): Interface for all backend emitters. Requires `__init__` and `get_output`.
    - PythonEmitter: Lowers MYLANG AST nodes to runnable Python code.
    - SourceEmitter: Renders MYLANG AST nodes back to canonical MYLANG source.
    - Transpiler: Uses the appropriate emitter based on the selected target (e.g., "py", "my")
      and dispatches AST nodes to the corresponding `emit_<kind>` methods.

Usage:
    The Transpiler takes a list of AST nodes and returns code in the desired output language.

Example:
    >>> transpiler = Transpiler("py")
    >>> output_code = transpiler.transpile(ast_nodes)

Raises:
    ValueError: If the target language is not supported.
    TypeError: If the AST contains invalid node types.
    NotImplementedError: If the emitter lacks an `emit_*` method for a node kind.
"""

from typing import Protocol

from mylang.emitters.py_emitter import PythonEmitter
from mylang.emitters.source_emitter import SourceEmitter
from mylang.mylang_ast import ASTNode


class Emitter(Protocol):  # pragma: no cover
    """Protocol for all MYLANG emitters.

    Methods:
        __init__(): Initializes the emitter.
        get_output(): Returns the complete emitted code as a string.
    """

    def __init__(self) -> None: ...  # pragma: no cover

    def get_output(self) -> str: ...  # pragma: no cover


EmitterType = type[Emitter]
"""Alias for a concrete Emitter class type."""


class Transpiler:
    """Dispatches MYLANG AST nodes to the appropriate target language emitter.

    Attributes:
        emitter (Emitter): The selected emitter instance for the output target.
    """

    def __init__(self, target: str) -> None:
        """Initializes the transpiler with the desired output target.

        Args:
            target: The desired output language ("py", "my", etc.).

        Raises:
            ValueError: If the target language is not supported.
        """
        emitters: dict[str, EmitterType] = {
            "py": PythonEmitter,
            "python": PythonEmitter,
            "my": SourceEmitter,
            "mylang": SourceEmitter,
            "source": SourceEmitter,
        }
        target = target.lower()
        if target not in emitters:
            raise ValueError(f"Unknown transpilation target: {target!r}")
        self.emitter: Emitter = emitters[target]()

    def transpile(self, ast: list[ASTNode]) -> str:
        """Transpiles a list of AST nodes into source code for the selected target.

        Raises:
            TypeError: If any element in the AST list is not an ASTNode.
        """
        if not all(isinstance(node, ASTNode) for node in ast):
            raise TypeError("All items in AST must be ASTNode instances.")
        for node in ast:
            self._visit(node)
        return self.emitter.get_output()

    def _visit(self, node: ASTNode) -> None:
        """Invokes the appropriate emit method on the emitter for a given AST node.

        Raises:
            NotImplementedError: If the emitter does not support the node kind.
        """
        method_name = f"emit_{node.kind}"
        if hasattr(self.emitter, method_name):
            emit_method = getattr(self.emitter, method_name)
            emit_method(node)
        else:
            raise NotImplementedError(
                f"No emitter method for node kind '{node.kind}' "
                f"(line {node.line}, col {node.col})"
            )
