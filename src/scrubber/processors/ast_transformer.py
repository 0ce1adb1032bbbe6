"""AST transformation module for scrubbing string literals.

This module provides the base ASTTransformer infrastructure (error tracking,
transformation counting, structured results) and the LiteralScrubTransformer
that walks Python and Lua syntax trees and hands every string literal to a
ScrubEngine.

Example:
    >>> from scrubber.core.config import ScrubConfig
    >>> from scrubber.core.engine import ScrubEngine
    >>> engine = ScrubEngine(ScrubConfig(matches=(r"[\\u4E00-\\u9FFF]",)))
    >>> tree = ast.parse('print("transform中文")')
    >>> result = LiteralScrubTransformer(engine).transform(tree)
    >>> ast.unparse(result.ast_node)
    "print('transform')"
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from scrubber.processors.literals import (
    LUAPARSER_AVAILABLE,
    LuaStringLiteral,
    PythonStringLiteral,
    TextLiteral,
)
from scrubber.utils.logger import get_logger

if LUAPARSER_AVAILABLE:
    from luaparser import astnodes as lua_nodes

if TYPE_CHECKING:
    from scrubber.core.engine import ScrubEngine

logger = get_logger("scrubber.processors.ast_transformer")

# Python callables whose string arguments name modules to import
PYTHON_IMPORT_FUNCTIONS = frozenset({"__import__", "import_module"})

# Lua functions whose string arguments name modules to load
LUA_IMPORT_FUNCTIONS = frozenset({"require"})

# Longest logged prefix of a rewritten literal
LOG_PREVIEW_LENGTH = 20


@dataclass
class TransformResult:
    """Result of an AST transformation operation.

    Attributes:
        ast_node: The transformed AST node, or None if transformation failed.
        success: Whether the transformation completed successfully.
        transformation_count: Number of AST nodes that were transformed.
        errors: List of error messages describing any transformation failures.

    Example:
        >>> result = transformer.transform(ast_node)
        >>> if result.success:
        ...     print(f"Rewrote {result.transformation_count} literals")
        ... else:
        ...     for error in result.errors:
        ...         print(f"Error: {error}")
    """

    ast_node: Any
    success: bool
    transformation_count: int
    errors: list[str]


class ASTTransformer(ast.NodeTransformer):
    """Base class for AST transformations.

    Extends ast.NodeTransformer with transformation counting, error
    collection and a ``transform`` entry point that never raises.

    Subclasses implement ``visit_*`` methods for the node types they rewrite.

    Attributes:
        transformation_count: Counter tracking the number of nodes transformed.
        errors: List of error messages collected during transformation.
        logger: Logger for recording transformation details.
    """

    def __init__(self) -> None:
        super().__init__()
        self.transformation_count: int = 0
        self.errors: list[str] = []
        self.logger = logger

    def _reset(self) -> None:
        self.transformation_count = 0
        self.errors = []

    def _failure(self, e: Exception) -> TransformResult:
        error_msg = f"Transformation failed: {e.__class__.__name__}: {e}"
        self.logger.error(error_msg, exc_info=True)
        self.errors.append(error_msg)
        return TransformResult(
            ast_node=None,
            success=False,
            transformation_count=self.transformation_count,
            errors=self.errors,
        )

    def transform(self, ast_node: Any) -> TransformResult:
        """Apply this transformer to a Python AST.

        Args:
            ast_node: The AST node to transform (typically an ast.Module).

        Returns:
            A TransformResult with the transformed AST, success status,
            transformation count and any errors. Failures are reported in
            the result, never raised.
        """
        self._reset()

        try:
            ast.fix_missing_locations(ast_node)
            transformed_node = self.visit(ast_node)
            if transformed_node is None:
                raise ValueError("Transformation returned None")
            ast.fix_missing_locations(transformed_node)
        except Exception as e:
            return self._failure(e)

        self.logger.debug(
            f"Transformation completed: {self.transformation_count} nodes transformed"
        )
        return TransformResult(
            ast_node=transformed_node,
            success=True,
            transformation_count=self.transformation_count,
            errors=self.errors,
        )


def _preview(text: str) -> str:
    if len(text) <= LOG_PREVIEW_LENGTH:
        return text
    return f"{text[:LOG_PREVIEW_LENGTH]}..."


class LiteralScrubTransformer(ASTTransformer):
    """Rewrites string literals of Python and Lua ASTs through a ScrubEngine.

    The language is detected from the root node: ``ast.Module`` (or any
    other Python node) is walked as Python, ``luaparser.astnodes.Chunk`` as
    Lua.

    Python:
    - every ``str`` constant is scrubbed, including docstrings and the
      literal chunks of f-strings; chunks left empty are dropped
    - f-string format specs and ``bytes`` constants are left alone
    - arguments of ``__import__()`` and ``import_module()`` are left alone

    Lua:
    - every ``String`` node is scrubbed and re-escaped for its delimiter
    - arguments of ``require`` are left alone

    A literal with no match keeps its original node object.

    Attributes:
        engine: The shared, immutable ScrubEngine.
        language_mode: Language of the last transformed tree.
    """

    def __init__(self, engine: ScrubEngine) -> None:
        super().__init__()
        self.engine = engine
        self.language_mode: str | None = None

    def _scrub(self, literal: TextLiteral, node: Any, line: Any) -> Any:
        """Return the rewritten node for ``literal``, or ``node`` if unchanged."""
        result = self.engine.rewrite(literal.text_content)
        if not result.changed:
            return node

        self.transformation_count += 1
        self.logger.debug(
            f"Scrubbed {len(result.spans)} match(es) in literal at line {line}: "
            f"'{_preview(literal.text_content)}'"
        )
        return literal.with_text_content(result.text)

    # -- Python ---------------------------------------------------------------

    def _is_import_call(self, node: ast.Call) -> bool:
        func = node.func
        if isinstance(func, ast.Name):
            return func.id in PYTHON_IMPORT_FUNCTIONS
        if isinstance(func, ast.Attribute):
            return func.attr == "import_module"
        return False

    def visit_Call(self, node: ast.Call) -> ast.AST:
        if self._is_import_call(node):
            # Module specifiers must keep resolving
            return node
        return self.generic_visit(node)

    def visit_Constant(self, node: ast.Constant) -> ast.AST:
        if not isinstance(node.value, str):
            return node
        return self._scrub(PythonStringLiteral(node), node, getattr(node, "lineno", "?"))

    def visit_JoinedStr(self, node: ast.JoinedStr) -> ast.AST:
        """Scrub the literal chunks of an f-string, keeping its interpolations."""
        new_values: list[ast.expr] = []
        for value in node.values:
            new_value = self.visit(value)
            if isinstance(new_value, ast.Constant) and new_value.value == "":
                continue
            new_values.append(new_value)
        node.values = new_values
        return node

    def visit_FormattedValue(self, node: ast.FormattedValue) -> ast.AST:
        # The format spec is formatting syntax, not program text
        node.value = self.visit(node.value)
        return node

    # -- Lua ------------------------------------------------------------------

    def _is_lua_import_call(self, node: Any) -> bool:
        return (
            isinstance(node, lua_nodes.Call)
            and isinstance(node.func, lua_nodes.Name)
            and node.func.id in LUA_IMPORT_FUNCTIONS
        )

    def _visit_lua_value(self, value: Any) -> Any:
        """Scrub ``value`` if it is a String node, otherwise descend into it."""
        if isinstance(value, lua_nodes.String):
            token = value.first_token
            line = token.line if token is not None else "?"
            return self._scrub(LuaStringLiteral(value), value, line)
        if isinstance(value, lua_nodes.Node):
            self._traverse_lua_ast(value)
        return value

    def _traverse_lua_ast(self, node: Any) -> None:
        """Walk a Lua AST in place, replacing rewritten String nodes."""
        if self._is_lua_import_call(node):
            return

        for attr_name, attr in list(vars(node).items()):
            if attr_name.startswith("_") or attr_name == "comments":
                continue

            if isinstance(attr, list):
                for i, item in enumerate(attr):
                    attr[i] = self._visit_lua_value(item)
            elif isinstance(attr, lua_nodes.Node):
                setattr(node, attr_name, self._visit_lua_value(attr))

    def transform(self, ast_node: Any) -> TransformResult:
        """Scrub every string literal of a Python or Lua AST.

        Args:
            ast_node: ``ast.Module`` (or any Python AST node) or a luaparser
                ``Chunk``. Lua trees are rewritten in place.

        Returns:
            TransformResult; ``transformation_count`` is the number of
            literals rewritten.
        """
        if LUAPARSER_AVAILABLE and isinstance(ast_node, lua_nodes.Node):
            self._reset()
            self.language_mode = "lua"
            try:
                self._traverse_lua_ast(ast_node)
            except Exception as e:
                return self._failure(e)

            self.logger.debug(
                f"Lua literal scrub completed: {self.transformation_count} literals rewritten"
            )
            return TransformResult(
                ast_node=ast_node,
                success=True,
                transformation_count=self.transformation_count,
                errors=self.errors,
            )

        self.language_mode = "python"
        return super().transform(ast_node)
