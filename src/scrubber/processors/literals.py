"""Literal adapters: a uniform text view over string nodes of each host AST.

The engine only ever sees decoded text. An adapter exposes that text
through ``text_content`` and builds the replacement node through
``with_text_content``, re-encoding the text for the host language and
carrying the original node's location and quoting over.

Example:
    >>> node = ast.parse('x = "hello"').body[0].value
    >>> literal = PythonStringLiteral(node)
    >>> literal.text_content
    'hello'
    >>> ast.unparse(literal.with_text_content("h*llo"))
    "'h*llo'"
"""

from __future__ import annotations

import ast
import copy
from typing import Any, Protocol

try:
    from luaparser import astnodes as lua_nodes
    LUAPARSER_AVAILABLE = True
except ImportError:
    LUAPARSER_AVAILABLE = False

# Lua bytes that are not valid UTF-8 are decoded to U+DC80..U+DCFF
LUA_TEXT_ENCODING = "utf-8"
LUA_DECODE_ERRORS = "surrogateescape"

_LUA_NAMED_ESCAPES: dict[str, str] = {
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


class TextLiteral(Protocol):
    """Capability shared by every literal the scrubber can rewrite."""

    @property
    def text_content(self) -> str:
        """Decoded text of the literal."""
        ...

    def with_text_content(self, text: str) -> Any:
        """Return a host node equal to the original except for its text."""
        ...


class PythonStringLiteral:
    """Adapter for a ``str`` ``ast.Constant``.

    Covers plain string literals as well as the literal chunks of an
    f-string (the Constant children of ``ast.JoinedStr``). Quoting and
    escaping are left to ``ast.unparse``.
    """

    def __init__(self, node: ast.Constant) -> None:
        self.node = node

    @property
    def text_content(self) -> str:
        return self.node.value

    def with_text_content(self, text: str) -> ast.Constant:
        new_node = ast.Constant(value=text, kind=getattr(self.node, "kind", None))
        return ast.copy_location(new_node, self.node)


def _encode_lua_char(char: str) -> bytes:
    code_point = ord(char)
    if 0xDC80 <= code_point <= 0xDCFF:
        return bytes([code_point - 0xDC00])
    return char.encode(LUA_TEXT_ENCODING, "surrogatepass")


def encode_lua_text(text: str) -> bytes:
    """Encode decoded Lua text back to the byte string Lua sees.

    Inverse of ``decode_lua_bytes``; never fails, even on lone surrogates.
    """
    try:
        return text.encode(LUA_TEXT_ENCODING, LUA_DECODE_ERRORS)
    except UnicodeEncodeError:
        return b"".join(_encode_lua_char(char) for char in text)


def decode_lua_bytes(value: bytes | str | None) -> str:
    """Decode a luaparser string payload, keeping invalid bytes as surrogates."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return value.decode(LUA_TEXT_ENCODING, LUA_DECODE_ERRORS)


def escape_lua_string(text: str, quote: str) -> str:
    """Escape ``text`` for the body of a Lua quoted string.

    Control characters, bytes that are not UTF-8 and surrogates become
    three digit decimal escapes; other characters are written as is.

    Example:
        >>> escape_lua_string('say "hi"\\n', '"')
        'say \\\\"hi\\\\"\\\\n'
    """
    pieces: list[str] = []
    for char in text:
        code_point = ord(char)
        if char in _LUA_NAMED_ESCAPES:
            pieces.append(_LUA_NAMED_ESCAPES[char])
        elif char == quote:
            pieces.append("\\" + char)
        elif 0xD800 <= code_point <= 0xDFFF:
            pieces.extend(f"\\{byte:03d}" for byte in _encode_lua_char(char))
        elif code_point < 0x20 or code_point == 0x7F:
            pieces.append(f"\\{code_point:03d}")
        else:
            pieces.append(char)
    return "".join(pieces)


class LuaStringLiteral:
    """Adapter for a luaparser ``String`` node.

    luaparser keeps the decoded value as bytes in ``s`` and the source body
    (between the delimiters) in ``raw``; the printer writes ``raw`` back
    between the delimiters. Both are rebuilt from the new text.
    """

    def __init__(self, node: Any) -> None:
        self.node = node

    @property
    def text_content(self) -> str:
        return decode_lua_bytes(self.node.s)

    def _long_bracket_safe(self, text: str) -> bool:
        if "]]" in text or "\r" in text or text.endswith("]"):
            return False
        return not any(0xD800 <= ord(char) <= 0xDFFF for char in text)

    def with_text_content(self, text: str) -> Any:
        delimiter = self.node.delimiter
        if delimiter == lua_nodes.StringDelimiter.DOUBLE_SQUARE:
            if self._long_bracket_safe(text):
                raw = text
            else:
                delimiter = lua_nodes.StringDelimiter.DOUBLE_QUOTE
                raw = escape_lua_string(text, '"')
        elif delimiter == lua_nodes.StringDelimiter.SINGLE_QUOTE:
            raw = escape_lua_string(text, "'")
        else:
            raw = escape_lua_string(text, '"')

        # Shallow copy keeps tokens, comments and any parser bookkeeping
        new_node = copy.copy(self.node)
        new_node.s = encode_lua_text(text)
        new_node.raw = raw
        new_node.delimiter = delimiter
        return new_node
