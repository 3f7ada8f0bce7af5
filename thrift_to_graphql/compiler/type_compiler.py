"""
Type compiler: Thrift AST nodes to graphql-core types.

Named types (structs, enums) are created once per session through the
session cache. Struct fields are built lazily so self-referential and
mutually recursive structs compile without recursing forever.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from graphql import (
    GraphQLArgument,
    GraphQLBoolean,
    GraphQLEnumType,
    GraphQLEnumValue,
    GraphQLField,
    GraphQLFloat,
    GraphQLInputField,
    GraphQLInputObjectType,
    GraphQLInt,
    GraphQLList,
    GraphQLNonNull,
    GraphQLObjectType,
    GraphQLString,
    Undefined,
    get_named_type,
)

from ..errors import UnresolvedIdentifierError, UnsupportedNodeError
from ..idl.nodes import (
    BaseType,
    BooleanLiteral,
    ConstList,
    DoubleConstant,
    EnumDefinition,
    FieldDefinition,
    FunctionDefinition,
    Identifier,
    IntConstant,
    ListType,
    MapType,
    SetType,
    StringLiteral,
    StructDefinition,
    TypedefDefinition,
)
from .resolver import IdentifierResolver
from .scalars import GraphQLInt64, GraphQLMap, GraphQLSet
from .session import CompilationSession, Direction

BASE_TYPES = {
    "byte": GraphQLInt,
    "i8": GraphQLInt,
    "i16": GraphQLInt,
    "i32": GraphQLInt,
    "i64": GraphQLInt64,
    "double": GraphQLFloat,
    "string": GraphQLString,
    "binary": GraphQLString,
    "bool": GraphQLBoolean,
}

PLACEHOLDER_FIELD = "_"
PLACEHOLDER_DESCRIPTION = "This is just a placeholder"

GRAPHQL_INT_MIN = -(2**31)
GRAPHQL_INT_MAX = 2**31 - 1


class TypeCompiler:
    """Compiles type expressions and declarations into GraphQL types."""

    def __init__(self, session: CompilationSession):
        self.session = session
        self.resolver = IdentifierResolver(session.documents)
        # Typedefs being expanded, by (file, name)
        self._expanding: set[tuple[Path, str]] = set()

    def compile(self, node: Any, context_file: Path, direction: Direction) -> Any:
        """
        Compile a node to a GraphQL type.

        Args:
            node: Type expression, field or declaration
            context_file: Canonical path of the file the node appears in
            direction: INPUT for arguments, OUTPUT for results

        Returns:
            A graphql-core type

        Raises:
            UnsupportedNodeError: The node has no GraphQL counterpart
        """
        if isinstance(node, BaseType):
            graphql_type = BASE_TYPES.get(node.type_name)
            if graphql_type is None:
                raise UnsupportedNodeError(node.kind, context_file)
            return graphql_type
        elif isinstance(node, ListType):
            return GraphQLList(self.compile(node.value_type, context_file, direction))
        elif isinstance(node, MapType):
            return GraphQLMap
        elif isinstance(node, SetType):
            return GraphQLSet
        elif isinstance(node, Identifier):
            resolved = self.resolver.resolve(node.value, context_file)
            return self.compile(resolved.declaration, resolved.file, direction)
        elif isinstance(node, FieldDefinition):
            graphql_type = self.compile(node.field_type, context_file, direction)
            if node.requiredness == "required":
                return GraphQLNonNull(graphql_type)
            return graphql_type
        elif isinstance(node, StructDefinition):
            return self._compile_struct(node, context_file, direction)
        elif isinstance(node, EnumDefinition):
            return self._compile_enum(node, context_file)
        elif isinstance(node, TypedefDefinition):
            return self._compile_typedef(node, context_file, direction)
        else:
            raise UnsupportedNodeError(getattr(node, "kind", type(node).__name__), context_file)

    def compile_function(self, file: Path, function: FunctionDefinition, resolve: Callable | None = None) -> GraphQLField:
        """Compile a service function to a root field: arguments INPUT, result OUTPUT."""
        return GraphQLField(
            self.compile(function.return_type, file, Direction.OUTPUT),
            args={argument.name: self._compile_argument(argument, file) for argument in function.fields},
            resolve=resolve,
            description=function.description,
        )

    def _compile_argument(self, argument: FieldDefinition, file: Path) -> GraphQLArgument:
        graphql_type = self.compile(argument, file, Direction.INPUT)
        return GraphQLArgument(
            graphql_type,
            default_value=default_value(argument.default_value, graphql_type),
            description=argument.description,
        )

    def _compile_typedef(self, typedef: TypedefDefinition, file: Path, direction: Direction) -> Any:
        key = (file, typedef.name)
        if key in self._expanding:
            raise UnresolvedIdentifierError(typedef.name, file, "typedef cycle")
        self._expanding.add(key)
        try:
            return self.compile(typedef.definition_type, file, direction)
        finally:
            self._expanding.discard(key)

    # Named types

    def _compile_struct(self, struct: StructDefinition, file: Path, direction: Direction) -> Any:
        def create():
            if direction is Direction.INPUT:
                return GraphQLInputObjectType(
                    self.session.type_name(file, struct.name, is_input=True),
                    fields=lambda: self._input_fields(struct, file),
                    description=struct.description,
                )
            return GraphQLObjectType(
                self.session.type_name(file, struct.name),
                fields=lambda: self._output_fields(struct, file),
                description=struct.description,
            )

        return self.session.get_or_create((file, struct.name, direction), create)

    def _output_fields(self, struct: StructDefinition, file: Path) -> dict[str, GraphQLField]:
        if not struct.fields:
            return {PLACEHOLDER_FIELD: GraphQLField(GraphQLBoolean, description=PLACEHOLDER_DESCRIPTION)}
        return {
            field.name: GraphQLField(self.compile(field, file, Direction.OUTPUT), description=field.description)
            for field in struct.fields
        }

    def _input_fields(self, struct: StructDefinition, file: Path) -> dict[str, GraphQLInputField]:
        if not struct.fields:
            return {PLACEHOLDER_FIELD: GraphQLInputField(GraphQLBoolean, description=PLACEHOLDER_DESCRIPTION)}
        fields = {}
        for field in struct.fields:
            graphql_type = self.compile(field, file, Direction.INPUT)
            fields[field.name] = GraphQLInputField(
                graphql_type,
                default_value=default_value(field.default_value, graphql_type),
                description=field.description,
            )
        return fields

    def _compile_enum(self, enum: EnumDefinition, file: Path) -> Any:
        if self.session.convert_enum_to_int:
            return GraphQLInt

        def create():
            values = {}
            for index, member in enumerate(enum.members):
                value = member.initializer.value if member.initializer is not None else index
                values[member.name] = GraphQLEnumValue(value, description=member.description)
            return GraphQLEnumType(
                self.session.type_name(file, enum.name, is_enum=True),
                values,
                description=enum.description,
            )

        # Enums look the same in both directions
        return self.session.get_or_create((file, enum.name, None), create)


def _constant(node: Any) -> Any:
    if isinstance(node, (IntConstant, DoubleConstant, StringLiteral, BooleanLiteral)):
        return node.value
    if isinstance(node, ConstList):
        elements = [_constant(element) for element in node.elements]
        if any(element is Undefined for element in elements):
            return Undefined
        return elements
    return Undefined


def _fits(value: Any, named_type: Any) -> bool:
    if isinstance(value, list):
        return all(_fits(item, named_type) for item in value)
    if named_type is GraphQLBoolean:
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if named_type is GraphQLInt:
        return isinstance(value, int) and GRAPHQL_INT_MIN <= value <= GRAPHQL_INT_MAX
    if named_type is GraphQLInt64:
        return isinstance(value, int)
    if named_type is GraphQLFloat:
        return isinstance(value, (int, float))
    if named_type is GraphQLString:
        return isinstance(value, str)
    return False


def default_value(node: Any, graphql_type: Any) -> Any:
    """
    GraphQL default of an input field, or Undefined when it has none.

    Only literal constants whose type matches a built-in or Int64 scalar
    are carried; identifier constants, maps and enum-typed defaults are not.
    """
    if node is None:
        return Undefined
    value = _constant(node)
    if value is Undefined:
        return Undefined
    if isinstance(value, list) != _is_list(graphql_type):
        return Undefined
    if not _fits(value, get_named_type(graphql_type)):
        return Undefined
    return value


def _is_list(graphql_type: Any) -> bool:
    if isinstance(graphql_type, GraphQLNonNull):
        graphql_type = graphql_type.of_type
    return isinstance(graphql_type, GraphQLList)
