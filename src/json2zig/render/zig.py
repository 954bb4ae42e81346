from __future__ import annotations

import io
from dataclasses import dataclass, fields, replace
from typing import Optional, TextIO

from ..errors import OutputError, RenderError
from ..types import (
    AnyType,
    ArrayType,
    BoolType,
    FloatType,
    IntegerType,
    ObjectType,
    OptionalType,
    StringType,
    Type,
    UnknownType,
)

INDENT = " " * 4

ZIG_KEYWORDS = frozenset({
    "addrspace", "align", "allowzero", "and", "anyframe", "anytype", "asm",
    "async", "await", "break", "callconv", "catch", "comptime", "const",
    "continue", "defer", "else", "enum", "errdefer", "error", "export",
    "extern", "fn", "for", "if", "inline", "linksection", "noalias",
    "noinline", "nosuspend", "opaque", "or", "orelse", "packed", "pub",
    "resume", "return", "struct", "suspend", "switch", "test",
    "threadlocal", "try", "union", "unreachable", "usingnamespace", "var",
    "volatile", "while",
})

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


@dataclass(frozen=True)
class RenderOptions:
    """Spelling of each primitive type in the rendered declaration."""
    string: str = "[]const u8"
    integer: str = "i64"
    float: str = "f64"
    bool: str = "bool"
    any: str = "std.json.Value"
    unknown: str = "UNKNOWN"

    def with_overrides(self, **overrides: Optional[str]) -> RenderOptions:
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unexpected = set(overrides) - known
        if unexpected:
            raise TypeError(f"Unknown render options: {', '.join(sorted(unexpected))}")
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _is_ident_start(char: str) -> bool:
    return char == "_" or ("a" <= char <= "z") or ("A" <= char <= "Z")


def _is_ident_char(char: str) -> bool:
    return _is_ident_start(char) or ("0" <= char <= "9")


def needs_escaping(name: str) -> bool:
    """True when ``name`` cannot be written as a bare Zig identifier."""
    if not name or not _is_ident_start(name[0]):
        return True
    if not all(_is_ident_char(c) for c in name[1:]):
        return True
    return name in ZIG_KEYWORDS


def _escape_string(name: str) -> str:
    out = []
    for char in name:
        if char in _STRING_ESCAPES:
            out.append(_STRING_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            out.append(f"\\x{ord(char):02x}")
        else:
            out.append(char)
    return "".join(out)


def format_identifier(name: str) -> str:
    """Bare identifier when possible, ``@"..."`` otherwise."""
    if needs_escaping(name):
        return f'@"{_escape_string(name)}"'
    return name


class ZigRenderer:
    """Writes a type tree as Zig type syntax in one top-down pass."""

    SEQUENCE_PREFIX = "[]"
    OPTIONAL_PREFIX = "?"

    def __init__(self, options: Optional[RenderOptions] = None):
        self.options = options or RenderOptions()

    def render(self, type_: Type, stream: TextIO) -> None:
        try:
            self._render_type(stream, type_, 0)
        except RecursionError as e:
            raise RenderError("type is nested too deeply to render") from e
        except OSError as e:
            raise OutputError(f"failed to write output: {e}") from e

    def render_declaration(self, type_: Type, name: str, stream: TextIO) -> None:
        try:
            stream.write(f"pub const {format_identifier(name)} = ")
            self._render_type(stream, type_, 0)
            stream.write(";\n")
        except RecursionError as e:
            raise RenderError("type is nested too deeply to render") from e
        except OSError as e:
            raise OutputError(f"failed to write output: {e}") from e

    def _render_type(self, stream: TextIO, type_: Type, indent_level: int) -> None:
        opts = self.options
        if isinstance(type_, UnknownType):
            stream.write(opts.unknown)
        elif isinstance(type_, AnyType):
            stream.write(opts.any)
        elif isinstance(type_, BoolType):
            stream.write(opts.bool)
        elif isinstance(type_, IntegerType):
            stream.write(opts.integer)
        elif isinstance(type_, FloatType):
            stream.write(opts.float)
        elif isinstance(type_, StringType):
            stream.write(opts.string)
        elif isinstance(type_, ArrayType):
            stream.write(self.SEQUENCE_PREFIX)
            self._render_type(stream, type_.child_type, indent_level)
        elif isinstance(type_, OptionalType):
            stream.write(self.OPTIONAL_PREFIX)
            self._render_type(stream, type_.child_type, indent_level)
        elif isinstance(type_, ObjectType):
            stream.write("struct {\n")
            for field in type_.fields:
                stream.write(INDENT * (indent_level + 1))
                stream.write(f"{format_identifier(field.name)}: ")
                self._render_type(stream, field.type, indent_level + 1)
                stream.write(",\n")
            stream.write(INDENT * indent_level)
            stream.write("}")
        else:
            raise RenderError(f"Not a json2zig type: {type_!r}")


def render(type_: Type, options: Optional[RenderOptions] = None) -> str:
    """Render a type tree to a string."""
    buffer = io.StringIO()
    ZigRenderer(options).render(type_, buffer)
    return buffer.getvalue()


def render_declaration(type_: Type, name: str, options: Optional[RenderOptions] = None) -> str:
    """Render ``pub const <name> = <type>;``."""
    buffer = io.StringIO()
    ZigRenderer(options).render_declaration(type_, name, buffer)
    return buffer.getvalue()
