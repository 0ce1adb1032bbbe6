"""Python front end: source text to ``ast.Module`` and back.

Example:
    >>> processor = PythonProcessor()
    >>> parsed = processor.parse_source('print("hello")')
    >>> processor.generate_code(parsed.ast_node).code
    "print('hello')"

Note:
    ``ast.unparse`` does not keep comments or the original formatting; the
    scrubbed program is semantically, not textually, identical outside its
    rewritten literals.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from pathlib import Path

from scrubber.utils.logger import get_logger
from scrubber.utils.path_utils import read_source_file

logger = get_logger("scrubber.processors.python_processor")

MAX_FILE_SIZE_MB: int = 10

SOURCE_PLACEHOLDER_PATH = Path("<string>.py")


@dataclass
class ParseResult:
    """Outcome of parsing one Python source.

    Attributes:
        ast_node: Root module; None when parsing failed
        source_code: The text handed to the parser
        file_path: Where the text came from (``<string>.py`` for in-memory source)
        success: False when the source could not be read or parsed
        errors: Messages describing the failure
    """

    ast_node: ast.Module | None
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
    """Outcome of unparsing a Python tree.

    Attributes:
        code: Printed source; empty on failure
        success: False when unparsing raised
        errors: Messages describing the failure
    """

    code: str
    success: bool
    errors: list[str] = field(default_factory=list)


class PythonProcessor:
    """Reads, parses and prints Python for the literal scrubber."""

    language = "python"

    def parse_source(self, source_code: str, file_path: Path | str | None = None) -> ParseResult:
        """Parse Python source text into an ``ast.Module``.

        Args:
            source_code: The Python source to parse
            file_path: Optional path used in messages and as the AST filename

        Returns:
            ParseResult with the module, or the syntax error in ``errors``.
        """
        path = Path(file_path) if file_path is not None else SOURCE_PLACEHOLDER_PATH

        try:
            module = ast.parse(source_code, filename=str(path))
        except SyntaxError as e:
            error_msg = f"Syntax error in {path} at line {e.lineno}, column {e.offset}: {e.msg}"
            logger.error(error_msg)
            return ParseResult.failed(path, source_code, error_msg)
        except ValueError as e:
            # Older interpreters reject null bytes with ValueError
            error_msg = f"Value error parsing {path}: {e}"
            logger.error(error_msg)
            return ParseResult.failed(path, source_code, error_msg)

        logger.debug(f"Parsed Python source {path}")
        return ParseResult(ast_node=module, source_code=source_code, file_path=path, success=True)

    def parse_file(self, file_path: Path | str) -> ParseResult:
        """Read and parse a Python file.

        Files over MAX_FILE_SIZE_MB, unreadable files and files that are not
        UTF-8 are reported as failures rather than raised.
        """
        path = Path(file_path)

        try:
            source_code = read_source_file(path, MAX_FILE_SIZE_MB)
        except (OSError, ValueError) as e:
            logger.error(str(e))
            return ParseResult.failed(path, "", str(e))

        result = self.parse_source(source_code, path)
        if result.success:
            logger.info(f"Parsed Python file {path}")
        return result

    def generate_code(self, ast_node: ast.AST) -> GenerateResult:
        """Print a tree back to source with ``ast.unparse``.

        Missing locations on rewritten nodes are filled in first.
        """
        ast.fix_missing_locations(ast_node)

        try:
            code = ast.unparse(ast_node)
        except ValueError as e:
            error_msg = f"Failed to generate code: {e}"
            logger.error(error_msg)
            return GenerateResult(code="", success=False, errors=[error_msg])
        except RecursionError:
            error_msg = "AST is too deeply nested to generate code (RecursionError)"
            logger.error(error_msg)
            return GenerateResult(code="", success=False, errors=[error_msg])

        logger.debug(f"Generated {len(code)} characters of Python")
        return GenerateResult(code=code, success=True)

    def validate_syntax(self, code: str) -> tuple[bool, str]:
        """Check whether ``code`` is valid Python.

        Returns:
            ``(True, "")`` when it parses, else ``(False, "Line L, column C: msg")``.

        Example:
            >>> PythonProcessor().validate_syntax("x = ")[0]
            False
        """
        try:
            ast.parse(code)
        except SyntaxError as e:
            return (False, f"Line {e.lineno}, column {e.offset}: {e.msg}")
        return (True, "")
