"""Lua front end: source text to luaparser ``Chunk`` and back.

Parsing and printing are delegated to luaparser; this module only wraps
them in result objects so callers never see luaparser's exceptions.

Example:
    >>> processor = LuaProcessor()
    >>> parsed = processor.parse_source('print("hello")')
    >>> processor.generate_code(parsed.ast_node).code
    'print("hello")'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import luaparser.ast
import luaparser.astnodes

from scrubber.utils.logger import get_logger
from scrubber.utils.path_utils import read_source_file

MAX_FILE_SIZE_MB: int = 10

SOURCE_PLACEHOLDER_PATH = Path("<string>.lua")

logger = get_logger("scrubber.processors.lua_processor")


@dataclass
class ParseResult:
    """Outcome of parsing one Lua source.

    Attributes:
        ast_node: Root ``Chunk``; None when parsing failed.
        source_code: The text handed to the parser.
        file_path: Where the text came from (``<string>.lua`` for in-memory source).
        success: False when the source could not be read or parsed.
        errors: Messages describing the failure.
    """

    ast_node: luaparser.astnodes.Chunk | None
    source_code: str
    file_path: Path
    success: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def failed(cls, file_path: Path, source_code: str, error_msg: str) -> ParseResult:
        return cls(
            ast_node=None,
            source_code=source_code,
            file_path=file_path,
            success=False,
            errors=[error_msg],
        )


@dataclass
class GenerateResult:
    """Outcome of printing a Lua tree.

    Attributes:
        code: Printed source; empty on failure.
        success: False when printing raised.
        errors: Messages describing the failure.
    """

    code: str
    success: bool
    errors: list[str] = field(default_factory=list)


class LuaProcessor:
    """Reads, parses and prints Lua for the literal scrubber."""

    language = "lua"

    def __init__(self) -> None:
        self.logger = logger

    def parse_source(self, source_code: str, file_path: Path | str | None = None) -> ParseResult:
        """Parse Lua source text into a Chunk.

        Args:
            source_code: The Lua source to parse.
            file_path: Optional path used in messages.

        Returns:
            ParseResult with the Chunk, or the syntax error in ``errors``.
        """
        path = Path(file_path) if file_path is not None else SOURCE_PLACEHOLDER_PATH

        try:
            chunk = luaparser.ast.parse(source_code)
        except luaparser.ast.SyntaxException as e:
            error_msg = f"Syntax error in {path}: {e}"
            self.logger.error(error_msg)
            return ParseResult.failed(path, source_code, error_msg)
        except Exception as e:
            # The ANTLR runtime raises its own exception types
            error_msg = f"Unexpected error parsing {path}: {e}"
            self.logger.error(error_msg, exc_info=True)
            return ParseResult.failed(path, source_code, error_msg)

        self.logger.debug(f"Parsed Lua source {path}")
        return ParseResult(ast_node=chunk, source_code=source_code, file_path=path, success=True)

    def parse_file(self, file_path: Path | str) -> ParseResult:
        """Read and parse a Lua file.

        Files over MAX_FILE_SIZE_MB, unreadable files and files that are not
        UTF-8 are reported as failures.
        """
        path = Path(file_path)

        try:
            source_code = read_source_file(path, MAX_FILE_SIZE_MB)
        except (OSError, ValueError) as e:
            self.logger.error(str(e))
            return ParseResult.failed(path, "", str(e))

        result = self.parse_source(source_code, path)
        if result.success:
            self.logger.info(f"Parsed Lua file {path}")
        return result

    def generate_code(self, ast_node: luaparser.astnodes.Node) -> GenerateResult:
        """Print a Lua tree back to source with ``luaparser.ast.to_lua_source``."""
        try:
            code = luaparser.ast.to_lua_source(ast_node)
        except RecursionError:
            error_msg = "AST is too deeply nested to generate code (RecursionError)"
            self.logger.error(error_msg)
            return GenerateResult(code="", success=False, errors=[error_msg])
        except Exception as e:
            error_msg = f"Failed to generate Lua code: {e}"
            self.logger.error(error_msg, exc_info=True)
            return GenerateResult(code="", success=False, errors=[error_msg])

        self.logger.debug(f"Generated {len(code)} characters of Lua")
        return GenerateResult(code=code, success=True)

    def validate_syntax(self, code: str) -> tuple[bool, str]:
        """Return ``(True, "")`` if ``code`` parses, else ``(False, message)``."""
        try:
            luaparser.ast.parse(code)
        except luaparser.ast.SyntaxException as e:
            return (False, f"Syntax error: {e}")
        except Exception as e:
            return (False, f"Unexpected error validating syntax: {e}")
        return (True, "")
