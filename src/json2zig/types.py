"""
Type model for inferred JSON shapes.

Every node is an immutable dataclass, so a child may be shared between
several parents after a merge without copying.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union


@dataclass(frozen=True)
class UnknownType:
    """No information yet. Identity element of unification."""


@dataclass(frozen=True)
class AnyType:
    """Conflicting information. Absorbs everything it is merged with."""


@dataclass(frozen=True)
class BoolType:
    pass


@dataclass(frozen=True)
class IntegerType:
    min: int
    max: int


@dataclass(frozen=True)
class FloatType:
    min: float
    max: float


@dataclass(frozen=True)
class StringType:
    # Lengths are UTF-8 byte counts
    min_len: int
    max_len: int


@dataclass(frozen=True)
class ArrayType:
    min_len: int
    max_len: int
    child_type: "Type"


@dataclass(frozen=True)
class Field:
    name: str
    type: "Type"


@dataclass(frozen=True)
class ObjectType:
    fields: Tuple[Field, ...] = ()

    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get(self, name: str) -> "Type | None":
        for f in self.fields:
            if f.name == name:
                return f.type
        return None


@dataclass(frozen=True)
class OptionalType:
    """A value that may be absent. The child is never another OptionalType."""
    child_type: "Type"


Type = Union[
    UnknownType,
    AnyType,
    BoolType,
    IntegerType,
    FloatType,
    StringType,
    ArrayType,
    ObjectType,
    OptionalType,
]


def make_optional(type_: Type) -> OptionalType:
    """Wrap a type as optional, flattening optional-of-optional."""
    if isinstance(type_, OptionalType):
        return type_
    return OptionalType(type_)


def to_dict(type_: Type) -> Dict[str, Any]:
    """
    Converts a type tree into plain dicts for YAML/JSON dumps.
    Unlike the rendered declaration, this keeps the observed ranges.
    """
    if isinstance(type_, UnknownType):
        return {"type": "unknown"}
    if isinstance(type_, AnyType):
        return {"type": "any"}
    if isinstance(type_, BoolType):
        return {"type": "bool"}
    if isinstance(type_, IntegerType):
        return {"type": "integer", "min": type_.min, "max": type_.max}
    if isinstance(type_, FloatType):
        return {"type": "float", "min": type_.min, "max": type_.max}
    if isinstance(type_, StringType):
        return {"type": "string", "min_len": type_.min_len, "max_len": type_.max_len}
    if isinstance(type_, ArrayType):
        return {
            "type": "array",
            "min_len": type_.min_len,
            "max_len": type_.max_len,
            "items": to_dict(type_.child_type),
        }
    if isinstance(type_, ObjectType):
        return {
            "type": "object",
            "fields": {f.name: to_dict(f.type) for f in type_.fields},
        }
    if isinstance(type_, OptionalType):
        return {"type": "optional", "child": to_dict(type_.child_type)}
    raise TypeError(f"Not a json2zig type: {type_!r}")
