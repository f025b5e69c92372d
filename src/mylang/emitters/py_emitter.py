"""
Translates MYLANG AST nodes into executable Python code.

This module defines the `PythonEmitter` class, the lowering backend used by the
`Transpiler`. Every MYLANG value is a float, so the generated code only ever deals
with floats.

Lowering rules:
    - `def f(a b) body`  -> `def f(a, b):` / `    return body`
    - `extern f(a)`      -> an import from `math` or `mylang.mylang_runtime` when the
                            name is provided there, otherwise a comment
    - `+ - * /`          -> the Python operators
    - `< >`              -> `(1.0 if a < b else 0.0)`
    - `f(x, y)`          -> `f(x, y)`
    - Identifiers that are Python keywords get a trailing underscore.

The emitter keeps a table of known function signatures across calls, so it can be
reused incrementally (see `reset()`) by the REPL.

With `evaluate_anonymous` set (the default, used for whole scripts) each top-level
expression is followed by a statement printing its value through an aliased
`builtins` import, so a user function named `print` cannot intercept it. The REPL
turns it off and calls the function itself.

Raises:
    - `LoweringError`: Unknown variable, unknown callee, arity mismatch, duplicate
      parameter, invalid operator, or redefinition of a defined function.
    - `NotImplementedError`: If an unrecognized AST kind has no corresponding emitter.
"""

import keyword
import math

from mylang.emitters.base import BaseEmitter
from mylang.mylang_ast import (
    BinaryOp,
    Call,
    FunctionDef,
    NumberLiteral,
    Prototype,
    VariableRef,
)
from mylang.mylang_constants import ANON_EXPR_NAME, BUILTINS_ALIAS
from mylang.mylang_runtime import RUNTIME_FUNCTIONS, math_function_names

ARITHMETIC_OPS = frozenset("+-*/")
COMPARISON_OPS = frozenset("<>")


class LoweringError(Exception):
    """Raised when a well-formed AST cannot be lowered to Python."""


def py_name(name: str) -> str:
    """Maps a MYLANG identifier to a valid Python identifier."""
    if keyword.iskeyword(name) or keyword.issoftkeyword(name):
        return f"{name}_"
    return name


class PythonEmitter(BaseEmitter):
    """Emits Python code from MYLANG AST nodes.

    Attributes:
        lines (list[str]): Accumulated lines of emitted Python code.
        indent (int): Current indentation level for emitted code blocks.
        functions (dict[str, Prototype]): Every function declared or defined so far.
        defined (set[str]): Names of the functions that have a body.
        scope (frozenset[str]): Parameter names visible in the body being emitted.
        evaluate_anonymous (bool): If True, each top-level expression is followed by a
            statement printing its value, so the output runs as a script.
    """

    def __init__(self, evaluate_anonymous: bool = True) -> None:
        super().__init__()
        self.evaluate_anonymous = evaluate_anonymous
        self.functions: dict[str, Prototype] = {}
        self.defined: set[str] = set()
        self.scope: frozenset[str] = frozenset()
        self._math_names = math_function_names()
        self._builtins_imported = False

    def reset(self) -> None:
        super().reset()
        self._builtins_imported = False

    def declare(self, proto: Prototype) -> None:
        """Records a signature, rejecting an arity that differs from an earlier one."""
        existing = self.functions.get(proto.name)
        if existing is not None and existing.arity != proto.arity:
            raise LoweringError("redefinition of function with different # args")
        if len(set(proto.params)) != len(proto.params):
            raise LoweringError(f"duplicate parameter name in {proto.name}")
        self.functions[proto.name] = proto

    def emit_prototype(self, node: Prototype) -> None:
        """Emits an extern declaration, binding it to a host function when one exists."""
        self.declare(node)
        if node.name in self.defined:
            # An import would shadow the body already emitted.
            line = f"# extern {node.name}({', '.join(node.params)})"
        elif node.name in self._math_names:
            line = f"from math import {node.name}"
        elif node.name in RUNTIME_FUNCTIONS:
            line = f"from mylang.mylang_runtime import {node.name}"
        else:
            line = f"# extern {node.name}({', '.join(node.params)})"
        self.lines.append(f"{self.indent_str()}{line}")

    def emit_function(self, node: FunctionDef) -> None:
        """Emits a function definition whose body is a single returned expression."""
        proto = node.proto
        if proto.name in self.defined and proto.name != ANON_EXPR_NAME:
            raise LoweringError("Function cannot be redefined.")

        # Declared before the body is lowered so recursive calls resolve.
        previous = self.functions.get(proto.name)
        self.declare(proto)
        self.scope = frozenset(proto.params)
        try:
            body = self.emit_expr(node.body)
        except LoweringError:
            if previous is None:
                del self.functions[proto.name]
            else:
                self.functions[proto.name] = previous
            raise
        finally:
            self.scope = frozenset()
        self.defined.add(proto.name)

        params = ", ".join(py_name(p) for p in proto.params)
        self.lines.append(f"{self.indent_str()}def {py_name(proto.name)}({params}):")
        self.indent += 1
        self.lines.append(f"{self.indent_str()}return {body}")
        self.indent -= 1
        if proto.name == ANON_EXPR_NAME and self.evaluate_anonymous:
            if not self._builtins_imported:
                self.lines.append(f"import builtins as {BUILTINS_ALIAS}")
                self._builtins_imported = True
            self.lines.append(f"{BUILTINS_ALIAS}.print({ANON_EXPR_NAME}())")

    def emit_expr_number(self, node: NumberLiteral) -> str:
        if math.isinf(node.value):
            return "1e999"
        return repr(float(node.value))

    def emit_expr_variable(self, node: VariableRef) -> str:
        if node.name not in self.scope:
            raise LoweringError(f"Unknown variable name: {node.name}")
        return py_name(node.name)

    def emit_expr_binary(self, node: BinaryOp) -> str:
        left = self.emit_expr(node.left)
        right = self.emit_expr(node.right)
        if node.operator in ARITHMETIC_OPS:
            return f"({left} {node.operator} {right})"
        if node.operator in COMPARISON_OPS:
            return f"(1.0 if {left} {node.operator} {right} else 0.0)"
        raise LoweringError(f"invalid binary operator: {node.operator!r}")

    def emit_expr_call(self, node: Call) -> str:
        proto = self.functions.get(node.callee)
        if proto is None:
            raise LoweringError(f"Unknown function referenced: {node.callee}")
        if proto.arity != len(node.args):
            raise LoweringError("Incorrect # arguments passed")
        args = ", ".join(self.emit_expr(arg) for arg in node.args)
        return f"{py_name(node.callee)}({args})"
