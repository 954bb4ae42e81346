"""
json2zig - infer Zig type declarations from JSON documents.

Walks a JSON value tree, merges the types found at each structural position
into the smallest type accepting all of them, and renders the result as a
Zig ``struct`` declaration.
"""

from .errors import (
    ConfigError,
    InferenceError,
    Json2ZigError,
    MalformedJsonError,
    OutputError,
    RenderError,
)
from .inference import Parsed, TypeBuilder, infer_type, parse, unify
from .reader import JsonSource, loads, read_document
from .render import RenderOptions, ZigRenderer, render, render_declaration
from .types import (
    AnyType,
    ArrayType,
    BoolType,
    Field,
    FloatType,
    IntegerType,
    ObjectType,
    OptionalType,
    StringType,
    Type,
    UnknownType,
    make_optional,
    to_dict,
)

__version__ = "0.1.0"

__all__ = [
    "AnyType",
    "ArrayType",
    "BoolType",
    "ConfigError",
    "Field",
    "FloatType",
    "InferenceError",
    "IntegerType",
    "Json2ZigError",
    "JsonSource",
    "MalformedJsonError",
    "ObjectType",
    "OptionalType",
    "OutputError",
    "Parsed",
    "RenderError",
    "RenderOptions",
    "StringType",
    "Type",
    "TypeBuilder",
    "UnknownType",
    "ZigRenderer",
    "infer_type",
    "loads",
    "make_optional",
    "parse",
    "read_document",
    "render",
    "render_declaration",
    "to_dict",
    "unify",
    "__version__",
]
