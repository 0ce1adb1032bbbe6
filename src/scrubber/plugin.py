"""Host-compiler plugin entry point.

A host that already parsed a program calls ``process_transform`` with the
tree and the plugin's raw JSON configuration, and gets the same tree back
with its string literals scrubbed.

Configuration errors and invalid patterns are raised before any literal is
touched; there is no degraded mode.

Example:
    >>> tree = ast.parse('print("transform中文")')
    >>> tree = process_transform(tree, '{"matches": ["[\\\\u4E00-\\\\u9FFF]"]}')
    >>> ast.unparse(tree)
    "print('transform')"
"""

from __future__ import annotations

import ast
from pathlib import Path
from typing import Any

from scrubber.core.config_loader import parse_config_json
from scrubber.core.engine import ScrubEngine
from scrubber.core.errors import ScrubError
from scrubber.utils.logger import get_logger

logger = get_logger("scrubber.plugin")

PLUGIN_NAME = "remove-matched-charset"


def _language_of(program: Any) -> str:
    return "python" if isinstance(program, ast.AST) else "lua"


def process_transform(program: Any, config_json: str | None) -> Any:
    """Scrub ``program`` according to ``config_json``.

    Args:
        program: ``ast.Module`` or luaparser ``Chunk`` produced by the host.
        config_json: The plugin's JSON configuration, or None for defaults.

    Returns:
        The scrubbed tree.

    Raises:
        ConfigurationError: If the configuration is malformed.
        InvalidPatternSyntax: If a pattern does not compile.
        RuntimeError: If the tree could not be traversed.
    """
    try:
        engine = ScrubEngine(parse_config_json(config_json))
    except ScrubError as e:
        logger.error(f"Invalid configuration for {PLUGIN_NAME}: {e}")
        raise

    language = _language_of(program)
    file_path = Path("<program>.py" if language == "python" else "<program>.lua")
    result = engine.apply_transformations(program, language, file_path)
    if not result.success:
        raise RuntimeError(f"{PLUGIN_NAME} failed: {'; '.join(result.errors)}")

    return result.ast_node
