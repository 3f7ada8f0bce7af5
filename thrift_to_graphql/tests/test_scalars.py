import pytest
from graphql import BooleanValueNode, IntValueNode, StringValueNode

from thrift_to_graphql.compiler import GraphQLInt64, GraphQLMap, GraphQLSet
from thrift_to_graphql.errors import InvalidScalarError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("9223372036854775807", "9223372036854775807"),
        (42, "42"),
        (-9223372036854775808, "-9223372036854775808"),
        ("-7", "-7"),
    ],
)
def test_int64_serialize(value, expected):
    assert GraphQLInt64.serialize(value) == expected


@pytest.mark.parametrize("value", [True, False, 1.5, None, "forty-two", "9223372036854775808", 2**63])
def test_int64_serialize_rejects(value):
    with pytest.raises(InvalidScalarError):
        GraphQLInt64.serialize(value)


def test_int64_parse_value():
    assert GraphQLInt64.parse_value("9223372036854775807") == 9223372036854775807
    assert GraphQLInt64.parse_value(12) == 12
    with pytest.raises(InvalidScalarError):
        GraphQLInt64.parse_value(True)


def test_int64_parse_literal():
    assert GraphQLInt64.parse_literal(IntValueNode(value="42")) == 42
    assert GraphQLInt64.parse_literal(StringValueNode(value="-3")) == -3
    with pytest.raises(InvalidScalarError):
        GraphQLInt64.parse_literal(BooleanValueNode(value=True))


def test_int64_description():
    assert GraphQLInt64.name == "Int64"
    assert GraphQLInt64.description == "Use string or number"


def test_map_serialize_is_recursive():
    value = {1: {"inner": {3, 4}}, "b": [frozenset({"x"})]}
    result = GraphQLMap.serialize(value)
    assert set(result) == {"1", "b"}
    assert sorted(result["1"]["inner"]) == [3, 4]
    assert result["b"] == [["x"]]


def test_set_serialize():
    assert sorted(GraphQLSet.serialize({1, 2, 3})) == [1, 2, 3]
    assert GraphQLSet.serialize([{"a": 1}]) == [{"a": 1}]


def test_map_and_set_reject_wrong_shapes():
    with pytest.raises(InvalidScalarError):
        GraphQLMap.serialize([1, 2])
    with pytest.raises(InvalidScalarError):
        GraphQLSet.serialize("abc")


def test_descriptions():
    assert GraphQLMap.description == "Use plain object"
    assert GraphQLSet.description == "Use Array"
