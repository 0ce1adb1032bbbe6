"""Literal scrubbing engine.

This module provides the ScrubEngine class. An engine is built once from a
ScrubConfig: the patterns are compiled at construction and never again, and
the engine is immutable afterwards, so one instance can be shared by any
number of concurrent traversals.

Example:
    >>> from scrubber.core.config import ScrubConfig
    >>> from scrubber.core.engine import ScrubEngine
    >>> engine = ScrubEngine(ScrubConfig(matches=("abc.com|cde.org",), replace_with="*"))
    >>> engine.rewrite("https://abc.com/faker-url").text
    'https://*******/faker-url'
    >>> engine.scrub_source('console = "https://abc.com"', "python")["code"]
    "console = 'https://*******'"
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from scrubber.core.config import ScrubConfig
from scrubber.core.patterns import CompiledPattern, compile_patterns
from scrubber.core.rewriter import RewriteResult, rewrite_literal
from scrubber.processors.ast_transformer import LiteralScrubTransformer, TransformResult
from scrubber.utils.logger import get_logger
from scrubber.utils.path_utils import SUPPORTED_LANGUAGES, detect_language

logger = get_logger("scrubber.core.engine")


class ScrubEngine:
    """Immutable engine that rewrites string literals matching configured patterns.

    Construction compiles every pattern and fails with InvalidPatternSyntax
    on the first invalid one; a constructed engine never fails to rewrite.

    Attributes:
        config: The configuration the engine was built from.
        patterns: Compiled patterns in configured order.
        replace_with: Mask text; empty deletes matches.

    Example:
        >>> engine = ScrubEngine(config)
        >>> result = engine.apply_transformations(tree, "python", Path("main.py"))
        >>> if result.success:
        ...     print(f"Rewrote {result.transformation_count} literals")
    """

    __slots__ = ("_config", "_patterns")

    def __init__(self, config: ScrubConfig) -> None:
        """Compile the configuration's patterns.

        Args:
            config: ScrubConfig with the patterns and replacement text.

        Raises:
            InvalidPatternSyntax: If any pattern fails to compile.
            ConfigurationError: If the configuration has invalid field types.
        """
        config.validate()
        self._config = config
        self._patterns = compile_patterns(config.matches)
        logger.debug(
            f"ScrubEngine initialized with {len(self._patterns)} pattern(s), "
            f"replace_with={config.replace_with!r}"
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> ScrubEngine:
        """Build an engine straight from a decoded configuration document."""
        return cls(ScrubConfig.from_dict(data))

    @property
    def config(self) -> ScrubConfig:
        return self._config

    @property
    def patterns(self) -> tuple[CompiledPattern, ...]:
        return self._patterns

    @property
    def replace_with(self) -> str:
        return self._config.replace_with

    def rewrite(self, text: str) -> RewriteResult:
        """Rewrite one literal's decoded text.

        Returns:
            RewriteResult; ``changed`` is False and ``text`` is the input
            object itself when no pattern matches.
        """
        return rewrite_literal(text, self._patterns, self._config.replace_with)

    def create_transformer(self) -> LiteralScrubTransformer:
        """Return a fresh tree walker bound to this engine.

        Transformers keep per-traversal counters, so each traversal (and
        each thread) uses its own.
        """
        return LiteralScrubTransformer(self)

    def apply_transformations(
        self,
        ast_node: Any,
        language: str,
        file_path: Path,
    ) -> TransformResult:
        """Scrub every literal of an already parsed tree.

        Args:
            ast_node: ``ast.Module`` for Python or luaparser ``Chunk`` for Lua.
            language: ``"python"`` or ``"lua"``.
            file_path: Path of the source file (for logging context).

        Returns:
            TransformResult with the rewritten tree and the number of
            literals changed.
        """
        if language not in SUPPORTED_LANGUAGES:
            error_msg = f"Unsupported language: {language}"
            logger.error(error_msg)
            return TransformResult(
                ast_node=None,
                success=False,
                transformation_count=0,
                errors=[error_msg],
            )

        if not self._patterns:
            logger.debug(f"No patterns configured for {file_path.name}; returning original AST")
            return TransformResult(
                ast_node=ast_node,
                success=True,
                transformation_count=0,
                errors=[],
            )

        result = self.create_transformer().transform(ast_node)

        if not result.success:
            logger.error(
                f"Literal scrub failed on {file_path.name}: {', '.join(result.errors)}"
            )
            return result

        logger.info(
            f"Literal scrub completed for {file_path.name}: "
            f"{result.transformation_count} literal(s) rewritten"
        )
        return result

    def _processor_for(self, language: str) -> Any:
        # Imported lazily so Python-only use does not require luaparser
        if language == "python":
            from scrubber.processors.python_processor import PythonProcessor
            return PythonProcessor()
        from scrubber.processors.lua_processor import LuaProcessor
        return LuaProcessor()

    def _scrub_parsed(self, processor: Any, parse_result: Any, language: str) -> dict[str, Any]:
        if not parse_result.success:
            return {
                "success": False,
                "code": "",
                "stats": {},
                "errors": parse_result.errors,
            }

        result = self.apply_transformations(parse_result.ast_node, language, parse_result.file_path)
        if not result.success:
            return {
                "success": False,
                "code": "",
                "stats": {"transformation_count": result.transformation_count},
                "errors": result.errors,
            }

        gen_result = processor.generate_code(result.ast_node)
        if not gen_result.success:
            return {
                "success": False,
                "code": "",
                "stats": {"transformation_count": result.transformation_count},
                "errors": gen_result.errors,
            }

        return {
            "success": True,
            "code": gen_result.code,
            "stats": {"transformation_count": result.transformation_count},
            "errors": [],
        }

    def scrub_source(self, source_code: str, language: str) -> dict[str, Any]:
        """Parse, scrub and regenerate source code held in memory.

        Args:
            source_code: Python or Lua source.
            language: ``"python"`` or ``"lua"``.

        Returns:
            Dictionary containing:
            - ``success``: Boolean indicating if scrubbing succeeded
            - ``code``: The regenerated code (empty string if failed)
            - ``stats``: Dictionary with ``transformation_count``
            - ``errors``: List of error messages (if any)
        """
        if language not in SUPPORTED_LANGUAGES:
            return {
                "success": False,
                "code": "",
                "stats": {},
                "errors": [f"Unsupported language: {language}"],
            }

        processor = self._processor_for(language)
        return self._scrub_parsed(processor, processor.parse_source(source_code), language)

    def scrub_file(self, file_path: Path | str) -> dict[str, Any]:
        """Parse, scrub and regenerate a source file.

        The language is taken from the file extension (``.py``/``.pyw`` or
        ``.lua``/``.luau``). The file itself is not modified.

        Returns:
            Same dictionary as ``scrub_source``.
        """
        path = Path(file_path)
        language = detect_language(path)
        if language is None:
            error_msg = f"Unsupported file type: {path.name}"
            logger.error(error_msg)
            return {
                "success": False,
                "code": "",
                "stats": {},
                "errors": [error_msg],
            }

        processor = self._processor_for(language)
        return self._scrub_parsed(processor, processor.parse_file(path), language)
