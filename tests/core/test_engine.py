"""
Tests for ScrubEngine: construction, literal rewriting and the
source/file entry points for Python and Lua.
"""

import ast
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from scrubber.core.config import ScrubConfig
from scrubber.core.engine import ScrubEngine
from scrubber.core.errors import ConfigurationError, InvalidPatternSyntax
from scrubber.processors.ast_transformer import LiteralScrubTransformer

CJK = "[\\u4E00-\\u9FFF]"


@pytest.fixture
def cjk_engine():
    """Engine deleting CJK ideographs."""
    return ScrubEngine(ScrubConfig(matches=(CJK,)))


@pytest.fixture
def url_mask_engine():
    """Engine masking two host names with '*'."""
    return ScrubEngine(ScrubConfig(matches=("abc.com|cde.org",), replace_with="*"))


class TestEngineConstruction:
    """Test engine construction and properties."""

    def test_patterns_compiled_in_order(self):
        """Compiled patterns follow configuration order."""
        engine = ScrubEngine(ScrubConfig(matches=("a", "b"), replace_with="#"))

        assert [p.source for p in engine.patterns] == ["a", "b"]
        assert engine.replace_with == "#"
        assert engine.config.matches == ("a", "b")

    def test_invalid_pattern_fails_fast(self):
        """No engine is built from an invalid pattern."""
        with pytest.raises(InvalidPatternSyntax) as exc_info:
            ScrubEngine(ScrubConfig(matches=("ok", "(")))
        assert exc_info.value.index == 1

    def test_invalid_field_type(self):
        """Field types are validated before compiling."""
        with pytest.raises(ConfigurationError):
            ScrubEngine(ScrubConfig(matches=("ok",), replace_with=None))

    def test_from_dict(self):
        """Engines can be built from decoded documents."""
        engine = ScrubEngine.from_dict({"matches": ["x"], "replace_with": "-"})
        assert engine.rewrite("axb").text == "a-b"

    def test_engine_is_immutable(self, cjk_engine):
        """Engines expose no writable state."""
        with pytest.raises(AttributeError):
            cjk_engine.extra = 1

    def test_create_transformer_is_fresh(self, cjk_engine):
        """Each call returns a new transformer bound to the engine."""
        first = cjk_engine.create_transformer()
        second = cjk_engine.create_transformer()

        assert isinstance(first, LiteralScrubTransformer)
        assert first is not second
        assert first.engine is cjk_engine


class TestRewrite:
    """Test rewriting decoded literal text."""

    def test_mask_cjk(self):
        """Each ideograph becomes one mask character."""
        engine = ScrubEngine(ScrubConfig(matches=(CJK,), replace_with="*"))
        assert engine.rewrite("foo中bar").text == "foo*bar"

    def test_delete_hosts(self):
        """Empty replace_with deletes."""
        engine = ScrubEngine(ScrubConfig(matches=("baidu\\.com|google\\.com",)))
        assert engine.rewrite("see baidu.com now").text == "see  now"

    def test_longer_match_wins(self):
        """The longer of two overlapping matches is replaced."""
        engine = ScrubEngine(ScrubConfig(matches=("ab", "abc"), replace_with="x"))
        assert engine.rewrite("abcd").text == "xxxd"

    def test_noop(self, cjk_engine):
        """Unmatched text is reported unchanged."""
        text = "plain ascii"
        result = cjk_engine.rewrite(text)

        assert not result.changed
        assert result.text is text


class TestApplyTransformations:
    """Test scrubbing parsed trees."""

    def test_python_tree(self, cjk_engine):
        """Python literals are rewritten and counted."""
        tree = ast.parse('print("transform中文")\nx = "ok"')
        result = cjk_engine.apply_transformations(tree, "python", Path("main.py"))

        assert result.success
        assert result.transformation_count == 1
        assert ast.unparse(result.ast_node) == "print('transform')\nx = 'ok'"

    def test_unsupported_language(self, cjk_engine):
        """Unknown languages fail without raising."""
        result = cjk_engine.apply_transformations(ast.parse("x = 1"), "ruby", Path("a.rb"))

        assert not result.success
        assert result.ast_node is None
        assert result.errors == ["Unsupported language: ruby"]

    def test_no_patterns_returns_same_tree(self):
        """An empty pattern set leaves the tree untouched."""
        engine = ScrubEngine(ScrubConfig())
        tree = ast.parse('x = "中文"')
        result = engine.apply_transformations(tree, "python", Path("main.py"))

        assert result.success
        assert result.ast_node is tree
        assert result.transformation_count == 0

    def test_logs_summary(self, cjk_engine, caplog):
        """A completed scrub logs the number of rewritten literals."""
        with caplog.at_level("INFO", logger="scrubber"):
            cjk_engine.apply_transformations(ast.parse('x = "中"'), "python", Path("main.py"))

        assert "Literal scrub completed for main.py: 1 literal(s) rewritten" in caplog.text


class TestScrubSource:
    """Test the in-memory source entry point."""

    def test_python_source(self, url_mask_engine):
        """Masked URLs keep their length."""
        result = url_mask_engine.scrub_source('console = "https://abc.com/faker-url"', "python")

        assert result["success"]
        assert result["code"] == "console = 'https://*******/faker-url'"
        assert result["stats"] == {"transformation_count": 1}
        assert result["errors"] == []

    def test_python_syntax_error(self, cjk_engine):
        """Parse errors are reported, not raised."""
        result = cjk_engine.scrub_source("def broken(:\n", "python")

        assert not result["success"]
        assert result["code"] == ""
        assert result["stats"] == {}
        assert "Syntax error" in result["errors"][0]

    def test_unsupported_language(self, cjk_engine):
        """Unknown languages are rejected."""
        result = cjk_engine.scrub_source("x", "cobol")
        assert result["errors"] == ["Unsupported language: cobol"]

    def test_lua_source(self, cjk_engine):
        """Lua literals are scrubbed too."""
        pytest.importorskip("luaparser")
        result = cjk_engine.scrub_source('local msg = "视频下载错误 code"', "lua")

        assert result["success"]
        assert '" code"' in result["code"]
        assert "视频" not in result["code"]
        assert result["stats"]["transformation_count"] == 1

    def test_lua_syntax_error(self, cjk_engine):
        """Lua parse errors are reported, not raised."""
        pytest.importorskip("luaparser")
        result = cjk_engine.scrub_source("local = = 1", "lua")

        assert not result["success"]
        assert result["errors"]


class TestScrubFile:
    """Test the file entry point."""

    def test_python_file(self, cjk_engine, tmp_path):
        """The file is scrubbed into the result, not in place."""
        path = tmp_path / "main.py"
        original = 'msg = "错误 error"\n'
        path.write_text(original, encoding="utf-8")

        result = cjk_engine.scrub_file(path)

        assert result["success"]
        assert result["code"] == "msg = ' error'"
        assert path.read_text(encoding="utf-8") == original

    def test_lua_file(self, url_mask_engine, tmp_path):
        """Lua files are detected by extension."""
        pytest.importorskip("luaparser")
        path = tmp_path / "init.lua"
        path.write_text("local url = 'https://cde.org/x'\n", encoding="utf-8")

        result = url_mask_engine.scrub_file(path)

        assert result["success"]
        assert "'https://*******/x'" in result["code"]

    def test_unsupported_extension(self, cjk_engine, tmp_path):
        """Unknown extensions are rejected."""
        path = tmp_path / "index.js"
        path.write_text("var a = '中';", encoding="utf-8")

        result = cjk_engine.scrub_file(path)

        assert not result["success"]
        assert result["errors"] == ["Unsupported file type: index.js"]

    def test_missing_file(self, cjk_engine, tmp_path):
        """Missing files are reported in errors."""
        result = cjk_engine.scrub_file(tmp_path / "missing.py")

        assert not result["success"]
        assert "File not found" in result["errors"][0]


class TestConcurrency:
    """Test sharing one engine across threads."""

    def test_shared_engine_across_threads(self):
        """Concurrent scrubs with one engine give independent, correct results."""
        engine = ScrubEngine(ScrubConfig(matches=(CJK,), replace_with="*"))
        sources = [f'v{i} = "{i}中{i}文"' for i in range(32)]

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(lambda src: engine.scrub_source(src, "python"), sources))

        for i, result in enumerate(results):
            assert result["success"]
            assert result["code"] == f"v{i} = '{i}*{i}*'"
            assert result["stats"]["transformation_count"] == 1
