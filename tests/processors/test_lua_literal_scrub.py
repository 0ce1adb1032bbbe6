"""
Tests for LiteralScrubTransformer on Lua ASTs.

Tests cover quoted and long-bracket strings, re-escaping for each
delimiter, table fields, require arguments and strings holding bytes
that are not valid UTF-8.
"""

import pytest

from scrubber.core.config import ScrubConfig
from scrubber.core.engine import ScrubEngine
from scrubber.processors.ast_transformer import LiteralScrubTransformer
from scrubber.processors.literals import LUAPARSER_AVAILABLE

pytestmark = pytest.mark.skipif(not LUAPARSER_AVAILABLE, reason="luaparser not installed")

if LUAPARSER_AVAILABLE:
    from luaparser import ast as lua_ast
    from luaparser import astnodes

CJK = "[\\u4E00-\\u9FFF]"


@pytest.fixture
def transformer():
    """Transformer deleting CJK ideographs."""
    return LiteralScrubTransformer(ScrubEngine(ScrubConfig(matches=(CJK,))))


def _scrub(transformer, source):
    result = transformer.transform(lua_ast.parse(source))
    assert result.success, result.errors
    return lua_ast.to_lua_source(result.ast_node), result


class TestLuaStrings:
    """Test scrubbing quoted strings."""

    def test_double_quoted(self, transformer):
        """Double-quoted strings keep their delimiter."""
        code, result = _scrub(transformer, 'print("transform中文")')

        assert '"transform"' in code
        assert result.transformation_count == 1
        assert transformer.language_mode == "lua"

    def test_single_quoted_with_quote(self, transformer):
        """Quotes matching the delimiter are re-escaped."""
        code, _ = _scrub(transformer, "local s = 'it\\'s 中'")
        assert "'it\\'s '" in code

    def test_escapes_reencoded(self, transformer):
        """Control characters are written back as escapes."""
        code, _ = _scrub(transformer, 'local s = "a\\n中\\t"')
        assert '"a\\n\\t"' in code

    def test_unmatched_string_node_kept(self, transformer):
        """Unchanged strings keep their node and raw text."""
        chunk = lua_ast.parse('local s = "keep\\065"')
        node = chunk.body.body[0].values[0]

        result = transformer.transform(chunk)

        assert result.ast_node.body.body[0].values[0] is node
        assert node.raw == "keep\\065"
        assert result.transformation_count == 0

    def test_table_fields(self, transformer):
        """Keys and values of table constructors are scrubbed."""
        code, result = _scrub(transformer, 'local t = {name = "名字x", "值y", ["键z"] = 1}')

        assert "名" not in code
        assert '"x"' in code
        assert '"y"' in code
        assert '"z"' in code
        assert result.transformation_count == 3

    def test_nested_functions(self, transformer):
        """Strings inside function bodies are reached."""
        source = 'local function f()\n  if x then return "错误" end\n  return "ok"\nend'
        code, result = _scrub(transformer, source)

        assert "错误" not in code
        assert '"ok"' in code
        assert result.transformation_count == 1


class TestLongBrackets:
    """Test long-bracket strings."""

    def test_long_bracket_kept(self, transformer):
        """Safe text stays in long brackets."""
        code, _ = _scrub(transformer, "local s = [[line 中]]")
        assert "[[line ]]" in code

    def test_long_bracket_falls_back_to_quotes(self, transformer):
        """Text ending in ']' cannot close a long bracket safely."""
        code, _ = _scrub(transformer, "local s = [[a]中]]")
        assert '"a]"' in code


class TestRequire:
    """Test that module names passed to require are left alone."""

    def test_require_call(self, transformer):
        """Parenthesized require arguments are kept."""
        code, result = _scrub(transformer, 'local m = require("模块")')

        assert "模块" in code
        assert result.transformation_count == 0

    def test_require_string_call(self, transformer):
        """String-call require arguments are kept."""
        code, _ = _scrub(transformer, 'local m = require "模块"\nprint("中")')

        assert "模块" in code
        assert 'print("")' in code


class TestInvalidUtf8:
    """Test strings whose bytes are not valid UTF-8."""

    def test_invalid_bytes_survive(self, transformer):
        """Undecodable bytes are kept and written as decimal escapes."""
        string = astnodes.String(b"\xff\xe4\xb8\xad", "\\255中", astnodes.StringDelimiter.DOUBLE_QUOTE)
        chunk = astnodes.Chunk(astnodes.Block([astnodes.LocalAssign([astnodes.Name("s")], [string])]))

        result = transformer.transform(chunk)

        new_string = result.ast_node.body.body[0].values[0]
        assert result.transformation_count == 1
        assert new_string.s == b"\xff"
        assert new_string.raw == "\\255"

    def test_invalid_bytes_matchable(self):
        """Undecodable bytes can be matched as surrogate escapes."""
        engine = ScrubEngine(ScrubConfig(matches=("[\\udc80-\\udcff]",), replace_with="?"))
        string = astnodes.String(b"a\xffb", "a\\255b", astnodes.StringDelimiter.SINGLE_QUOTE)
        chunk = astnodes.Chunk(astnodes.Block([astnodes.LocalAssign([astnodes.Name("s")], [string])]))

        result = LiteralScrubTransformer(engine).transform(chunk)

        new_string = result.ast_node.body.body[0].values[0]
        assert new_string.s == b"a?b"
        assert new_string.raw == "a?b"
