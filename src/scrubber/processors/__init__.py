"""Public API for source processors with lazy imports.

Processor modules are imported on first attribute access so that Python-only
use never imports luaparser, and so that ``scrubber.core`` can import the
tree walker without an import cycle.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any

_EXPORT_MAP: dict[str, tuple[str, str]] = {
    "PythonProcessor": (
        "scrubber.processors.python_processor",
        "PythonProcessor",
    ),
    "PythonParseResult": (
        "scrubber.processors.python_processor",
        "ParseResult",
    ),
    "PythonGenerateResult": (
        "scrubber.processors.python_processor",
        "GenerateResult",
    ),
    "LuaProcessor": (
        "scrubber.processors.lua_processor",
        "LuaProcessor",
    ),
    "LuaParseResult": (
        "scrubber.processors.lua_processor",
        "ParseResult",
    ),
    "LuaGenerateResult": (
        "scrubber.processors.lua_processor",
        "GenerateResult",
    ),
    "ASTTransformer": (
        "scrubber.processors.ast_transformer",
        "ASTTransformer",
    ),
    "LiteralScrubTransformer": (
        "scrubber.processors.ast_transformer",
        "LiteralScrubTransformer",
    ),
    "TransformResult": (
        "scrubber.processors.ast_transformer",
        "TransformResult",
    ),
    "TextLiteral": (
        "scrubber.processors.literals",
        "TextLiteral",
    ),
    "PythonStringLiteral": (
        "scrubber.processors.literals",
        "PythonStringLiteral",
    ),
    "LuaStringLiteral": (
        "scrubber.processors.literals",
        "LuaStringLiteral",
    ),
}

__all__ = list(_EXPORT_MAP.keys())


def __getattr__(name: str) -> Any:
    """Resolve package exports lazily."""
    target = _EXPORT_MAP.get(name)
    if target is None:
        raise AttributeError(f"module 'scrubber.processors' has no attribute {name!r}")

    module_name, attr_name = target
    module = import_module(module_name)
    value = getattr(module, attr_name)
    globals()[name] = value
    return value
