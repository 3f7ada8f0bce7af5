"""
Custom GraphQL scalars for Thrift types without a GraphQL equivalent.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from graphql import GraphQLScalarType, IntValueNode, StringValueNode, ValueNode

from ..errors import InvalidScalarError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def _coerce_int64(value: Any) -> int:
    # bool is an int subclass, and never a valid i64
    if isinstance(value, bool):
        raise InvalidScalarError(value, f"Int64 cannot represent a boolean: {value!r}")
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        try:
            number = int(value.strip(), 10)
        except ValueError:
            raise InvalidScalarError(value, f"Int64 cannot represent non-integer string: {value!r}") from None
    else:
        raise InvalidScalarError(value, f"Int64 cannot represent value: {value!r}")

    if not INT64_MIN <= number <= INT64_MAX:
        raise InvalidScalarError(value, f"Int64 value out of range: {value!r}")
    return number


def serialize_int64(value: Any) -> str:
    """Serialize as a decimal string, so clients never lose precision."""
    return str(_coerce_int64(value))


def parse_int64_value(value: Any) -> int:
    return _coerce_int64(value)


def parse_int64_literal(node: ValueNode, _variables: Any = None) -> int:
    if isinstance(node, (IntValueNode, StringValueNode)):
        return _coerce_int64(node.value)
    raise InvalidScalarError(node, f"Int64 cannot represent literal of kind {node.kind}")


GraphQLInt64 = GraphQLScalarType(
    name="Int64",
    description="Use string or number",
    serialize=serialize_int64,
    parse_value=parse_int64_value,
    parse_literal=parse_int64_literal,
)


def _plain(value: Any) -> Any:
    """Recursively turn maps and sets into JSON-compatible values."""
    if isinstance(value, Mapping):
        return {str(key): _plain(item) for key, item in value.items()}
    if isinstance(value, (set, frozenset, list, tuple)):
        return [_plain(item) for item in value]
    return value


def serialize_map(value: Any) -> dict:
    if not isinstance(value, Mapping):
        raise InvalidScalarError(value, f"Map cannot represent value: {value!r}")
    return _plain(value)


def serialize_set(value: Any) -> list:
    if not isinstance(value, (set, frozenset, list, tuple)):
        raise InvalidScalarError(value, f"Set cannot represent value: {value!r}")
    return _plain(value)


def parse_map_value(value: Any) -> dict:
    if not isinstance(value, Mapping):
        raise InvalidScalarError(value, f"Map cannot represent value: {value!r}")
    return dict(value)


def parse_set_value(value: Any) -> list:
    if not isinstance(value, (list, tuple)):
        raise InvalidScalarError(value, f"Set cannot represent value: {value!r}")
    return list(value)


# Literals go through graphql-core's default value_from_ast_untyped
GraphQLMap = GraphQLScalarType(
    name="Map",
    description="Use plain object",
    serialize=serialize_map,
    parse_value=parse_map_value,
)

GraphQLSet = GraphQLScalarType(
    name="Set",
    description="Use Array",
    serialize=serialize_set,
    parse_value=parse_set_value,
)
