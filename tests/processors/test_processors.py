"""
Tests for the Python and Lua source processors and the lazy package exports.
"""

import ast
from pathlib import Path

import pytest

import scrubber.processors as processors
from scrubber.processors.python_processor import PythonProcessor


class TestPythonProcessor:
    """Test Python parsing and generation."""

    def test_parse_source(self):
        """Valid source parses to a Module."""
        result = PythonProcessor().parse_source('print("hi")')

        assert result.success
        assert isinstance(result.ast_node, ast.Module)
        assert result.file_path == Path("<string>.py")
        assert result.errors == []

    def test_parse_source_syntax_error(self):
        """Syntax errors carry the location."""
        result = PythonProcessor().parse_source("x = (", "broken.py")

        assert not result.success
        assert result.ast_node is None
        assert result.errors[0].startswith("Syntax error in broken.py at line 1")

    def test_parse_file(self, tmp_path):
        """Files are read as UTF-8 and parsed."""
        path = tmp_path / "main.py"
        path.write_text('x = "中"\n', encoding="utf-8")

        result = PythonProcessor().parse_file(path)

        assert result.success
        assert result.source_code == 'x = "中"\n'
        assert result.file_path == path

    def test_parse_file_missing(self, tmp_path):
        """Unreadable files fail with a message."""
        result = PythonProcessor().parse_file(tmp_path / "missing.py")

        assert not result.success
        assert "File not found" in result.errors[0]

    def test_generate_code(self):
        """Trees are printed back to source."""
        tree = ast.parse('x = "a"')
        result = PythonProcessor().generate_code(tree)

        assert result.success
        assert result.code == "x = 'a'"

    def test_validate_syntax(self):
        """validate_syntax reports problems without raising."""
        processor = PythonProcessor()

        assert processor.validate_syntax("x = 1") == (True, "")
        valid, message = processor.validate_syntax("x = ")
        assert not valid
        assert message.startswith("Line 1")


class TestLuaProcessor:
    """Test Lua parsing and generation."""

    @pytest.fixture
    def processor(self):
        pytest.importorskip("luaparser")
        from scrubber.processors.lua_processor import LuaProcessor

        return LuaProcessor()

    def test_parse_source(self, processor):
        """Valid source parses to a Chunk."""
        from luaparser import astnodes

        result = processor.parse_source('print("hi")')

        assert result.success
        assert isinstance(result.ast_node, astnodes.Chunk)
        assert result.file_path == Path("<string>.lua")

    def test_parse_source_syntax_error(self, processor):
        """Syntax errors are reported in the result."""
        result = processor.parse_source("local = = 1", "bad.lua")

        assert not result.success
        assert result.errors[0].startswith("Syntax error in bad.lua")

    def test_generate_round_trip(self, processor):
        """Generated code parses again."""
        parsed = processor.parse_source("local x = 'a'\nprint(x)")
        generated = processor.generate_code(parsed.ast_node)

        assert generated.success
        assert "'a'" in generated.code
        assert processor.validate_syntax(generated.code) == (True, "")

    def test_parse_file(self, processor, tmp_path):
        """Files are read and parsed."""
        path = tmp_path / "init.lua"
        path.write_text('return "中"\n', encoding="utf-8")

        result = processor.parse_file(path)

        assert result.success
        assert result.file_path == path


class TestLazyExports:
    """Test the processors package exports."""

    def test_python_exports(self):
        """Exports resolve to the implementing classes."""
        assert processors.PythonProcessor is PythonProcessor
        assert processors.TransformResult.__name__ == "TransformResult"
        assert processors.PythonStringLiteral.__name__ == "PythonStringLiteral"

    def test_unknown_export(self):
        """Unknown names raise AttributeError."""
        with pytest.raises(AttributeError):
            processors.NotAThing
