"""
Rendering of inferred types as Zig declarations.
"""

from .zig import (
    RenderOptions,
    ZigRenderer,
    format_identifier,
    needs_escaping,
    render,
    render_declaration,
)

__all__ = [
    "RenderOptions",
    "ZigRenderer",
    "format_identifier",
    "needs_escaping",
    "render",
    "render_declaration",
]
