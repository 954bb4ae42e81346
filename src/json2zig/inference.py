"""
Type inference and unification.

A TypeBuilder walks a JSON value tree (as produced by ijson or json.loads)
and merges the types found at the same structural position into the
smallest type that still accepts every observed value.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Iterable, List, Optional

from .errors import InferenceError
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
)

logger = logging.getLogger(__name__)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


@dataclass
class Parsed:
    """Result of a top-level parse: the root type and builder statistics."""
    root: Type
    merges: int = 0


class TypeBuilder:
    """
    Context threaded through inference and unification.
    Holds no types itself; each parse produces an independent tree.
    """

    def __init__(self):
        self.merges = 0

    def parse(self, value: Any) -> Parsed:
        """Infers the type of a whole document."""
        root = self._guarded(self.infer, value)
        logger.debug("Inferred root %s after %d merges", type(root).__name__, self.merges)
        return Parsed(root=root, merges=self.merges)

    def parse_many(self, values: Iterable[Any]) -> Parsed:
        """Infers one type accepting every document in ``values``."""
        root = self._guarded(self.infer_many, values)
        logger.debug("Inferred root %s after %d merges", type(root).__name__, self.merges)
        return Parsed(root=root, merges=self.merges)

    def _guarded(self, func, arg):
        try:
            return func(arg)
        except RecursionError as e:
            raise InferenceError("document is nested too deeply to infer its type") from e

    def infer_many(self, values: Iterable[Any]) -> Type:
        result: Type = UnknownType()
        for value in values:
            result = self.unify(result, self.infer(value))
        return result

    def infer(self, value: Any) -> Type:
        if value is None:
            return OptionalType(UnknownType())

        # bool is a subclass of int
        if isinstance(value, bool):
            return BoolType()

        if isinstance(value, int):
            if INT64_MIN <= value <= INT64_MAX:
                return IntegerType(value, value)
            # Too wide for i64: keep it as the number's text
            length = len(str(value))
            return StringType(length, length)

        if isinstance(value, (float, Decimal)):
            f = float(value)
            return FloatType(f, f)

        if isinstance(value, str):
            length = len(value.encode("utf-8"))
            return StringType(length, length)

        if isinstance(value, (list, tuple)):
            child_type = self.infer_many(value)
            return ArrayType(len(value), len(value), child_type)

        if isinstance(value, dict):
            return ObjectType(tuple(Field(str(k), self.infer(v)) for k, v in value.items()))

        raise InferenceError(f"Unsupported JSON value of type {type(value).__name__}")

    def unify(self, type_a: Type, type_b: Type) -> Type:
        self.merges += 1

        if type(type_a) is type(type_b):
            return self._unify_same(type_a, type_b)

        if isinstance(type_a, UnknownType):
            return type_b
        if isinstance(type_b, UnknownType):
            return type_a
        if isinstance(type_a, AnyType) or isinstance(type_b, AnyType):
            return AnyType()

        if isinstance(type_a, OptionalType):
            return OptionalType(self.unify(type_a.child_type, type_b))
        if isinstance(type_b, OptionalType):
            return OptionalType(self.unify(type_a, type_b.child_type))

        # Integers widen to floats, never the other way round
        if isinstance(type_a, IntegerType) and isinstance(type_b, FloatType):
            return FloatType(min(float(type_a.min), type_b.min), max(float(type_a.max), type_b.max))
        if isinstance(type_a, FloatType) and isinstance(type_b, IntegerType):
            return FloatType(min(type_a.min, float(type_b.min)), max(type_a.max, float(type_b.max)))

        return AnyType()

    def _unify_same(self, type_a: Type, type_b: Type) -> Type:
        if isinstance(type_a, (UnknownType, AnyType, BoolType)):
            return type_a
        if isinstance(type_a, IntegerType):
            return IntegerType(min(type_a.min, type_b.min), max(type_a.max, type_b.max))
        if isinstance(type_a, FloatType):
            return FloatType(min(type_a.min, type_b.min), max(type_a.max, type_b.max))
        if isinstance(type_a, StringType):
            return StringType(min(type_a.min_len, type_b.min_len), max(type_a.max_len, type_b.max_len))
        if isinstance(type_a, ArrayType):
            return ArrayType(
                min(type_a.min_len, type_b.min_len),
                max(type_a.max_len, type_b.max_len),
                self.unify(type_a.child_type, type_b.child_type),
            )
        if isinstance(type_a, ObjectType):
            return self._unify_objects(type_a, type_b)
        if isinstance(type_a, OptionalType):
            return OptionalType(self.unify(type_a.child_type, type_b.child_type))
        raise InferenceError(f"Not a json2zig type: {type_a!r}")

    def _unify_objects(self, type_a: ObjectType, type_b: ObjectType) -> ObjectType:
        """
        Reconciles two field lists by name.

        The result keeps A's order. Fields of B that A lacks are spliced in
        right after the nearest preceding field both sides share; those in
        front of B's first shared field go to the end. A field missing on
        either side becomes optional.
        """
        fields_b = type_b.fields

        b_index = {}
        for i, field in enumerate(fields_b):
            b_index.setdefault(field.name, i)

        a_to_b: List[Optional[int]] = []
        matched_b = set()
        for field in type_a.fields:
            i_b = b_index.get(field.name)
            if i_b is None or i_b in matched_b:
                a_to_b.append(None)
            else:
                a_to_b.append(i_b)
                matched_b.add(i_b)

        fields: List[Field] = []
        for field_a, i_b in zip(type_a.fields, a_to_b):
            if i_b is None:
                fields.append(Field(field_a.name, make_optional(field_a.type)))
                continue

            fields.append(Field(field_a.name, self.unify(field_a.type, fields_b[i_b].type)))
            j = i_b + 1
            while j < len(fields_b) and j not in matched_b:
                fields.append(Field(fields_b[j].name, make_optional(fields_b[j].type)))
                j += 1

        for j, field_b in enumerate(fields_b):
            if j in matched_b:
                break
            fields.append(Field(field_b.name, make_optional(field_b.type)))

        return ObjectType(tuple(fields))


def parse(value: Any) -> Parsed:
    return TypeBuilder().parse(value)


def infer_type(value: Any) -> Type:
    """Infers the type of a single JSON value with a fresh builder."""
    return TypeBuilder().parse(value).root


def unify(type_a: Type, type_b: Type) -> Type:
    """Merges two types into the smallest type accepting values of both."""
    return TypeBuilder().unify(type_a, type_b)
