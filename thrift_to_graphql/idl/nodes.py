"""
AST (Abstract Syntax Tree) node definitions for Thrift IDL.

These nodes represent the parsed structure of one Thrift document before
any include loading or identifier resolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar


class SyntaxType(str, Enum):
    """Kind tag carried by every AST node (used in diagnostics)."""

    THRIFT_DOCUMENT = "ThriftDocument"
    INCLUDE_DEFINITION = "IncludeDefinition"
    CPP_INCLUDE_DEFINITION = "CppIncludeDefinition"
    NAMESPACE_DEFINITION = "NamespaceDefinition"
    CONST_DEFINITION = "ConstDefinition"
    TYPEDEF_DEFINITION = "TypedefDefinition"
    ENUM_DEFINITION = "EnumDefinition"
    ENUM_MEMBER = "EnumMember"
    STRUCT_DEFINITION = "StructDefinition"
    UNION_DEFINITION = "UnionDefinition"
    EXCEPTION_DEFINITION = "ExceptionDefinition"
    SERVICE_DEFINITION = "ServiceDefinition"
    FUNCTION_DEFINITION = "FunctionDefinition"
    FIELD_DEFINITION = "FieldDefinition"
    BASE_TYPE = "BaseType"
    LIST_TYPE = "ListType"
    SET_TYPE = "SetType"
    MAP_TYPE = "MapType"
    VOID_TYPE = "VoidType"
    IDENTIFIER = "Identifier"
    INT_CONSTANT = "IntConstant"
    DOUBLE_CONSTANT = "DoubleConstant"
    STRING_LITERAL = "StringLiteral"
    BOOLEAN_LITERAL = "BooleanLiteral"
    CONST_LIST = "ConstList"
    CONST_MAP = "ConstMap"


@dataclass
class ThriftNode:
    """Base class for all AST nodes."""

    kind: ClassVar[SyntaxType]

    # Source line (1-based, 0 when unknown)
    line: int = 0


# ---------------------------------------------------------------------------
# Type expressions
# ---------------------------------------------------------------------------


@dataclass
class BaseType(ThriftNode):
    """A primitive type keyword (i32, string, ...)."""

    kind: ClassVar[SyntaxType] = SyntaxType.BASE_TYPE

    type_name: str = ""  # bool, byte, i8, i16, i32, i64, double, string or binary


@dataclass
class ListType(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.LIST_TYPE

    value_type: ThriftNode | None = None


@dataclass
class SetType(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.SET_TYPE

    value_type: ThriftNode | None = None


@dataclass
class MapType(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.MAP_TYPE

    key_type: ThriftNode | None = None
    value_type: ThriftNode | None = None


@dataclass
class VoidType(ThriftNode):
    """Return type of a function that returns nothing."""

    kind: ClassVar[SyntaxType] = SyntaxType.VOID_TYPE


@dataclass
class Identifier(ThriftNode):
    """A named reference, either bare (`Foo`) or qualified (`shared.Foo`)."""

    kind: ClassVar[SyntaxType] = SyntaxType.IDENTIFIER

    value: str = ""


# ---------------------------------------------------------------------------
# Constant values
# ---------------------------------------------------------------------------


@dataclass
class IntConstant(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.INT_CONSTANT

    raw: str = ""  # Literal text, e.g. "42", "-7" or "0x1F"
    is_hex: bool = False

    @property
    def value(self) -> int:
        return int(self.raw, 16 if self.is_hex else 10)


@dataclass
class DoubleConstant(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.DOUBLE_CONSTANT

    raw: str = ""

    @property
    def value(self) -> float:
        return float(self.raw)


@dataclass
class StringLiteral(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.STRING_LITERAL

    value: str = ""


@dataclass
class BooleanLiteral(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.BOOLEAN_LITERAL

    value: bool = False


@dataclass
class ConstList(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.CONST_LIST

    elements: list[ThriftNode] = field(default_factory=list)


@dataclass
class ConstMap(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.CONST_MAP

    properties: list[tuple[ThriftNode, ThriftNode]] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Definitions
# ---------------------------------------------------------------------------


@dataclass
class FieldDefinition(ThriftNode):
    """A field of a struct, or an argument / exception of a function."""

    kind: ClassVar[SyntaxType] = SyntaxType.FIELD_DEFINITION

    name: str = ""
    field_id: int | None = None
    requiredness: str | None = None  # "required", "optional" or None
    field_type: ThriftNode | None = None
    default_value: ThriftNode | None = None
    description: str | None = None


@dataclass
class EnumMember(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.ENUM_MEMBER

    name: str = ""
    initializer: IntConstant | None = None
    description: str | None = None


@dataclass
class EnumDefinition(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.ENUM_DEFINITION

    name: str = ""
    members: list[EnumMember] = field(default_factory=list)
    description: str | None = None


@dataclass
class StructDefinition(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.STRUCT_DEFINITION

    name: str = ""
    fields: list[FieldDefinition] = field(default_factory=list)
    description: str | None = None


@dataclass
class UnionDefinition(StructDefinition):
    kind: ClassVar[SyntaxType] = SyntaxType.UNION_DEFINITION


@dataclass
class ExceptionDefinition(StructDefinition):
    kind: ClassVar[SyntaxType] = SyntaxType.EXCEPTION_DEFINITION


@dataclass
class TypedefDefinition(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.TYPEDEF_DEFINITION

    name: str = ""
    definition_type: ThriftNode | None = None
    description: str | None = None


@dataclass
class ConstDefinition(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.CONST_DEFINITION

    name: str = ""
    field_type: ThriftNode | None = None
    initializer: ThriftNode | None = None
    description: str | None = None


@dataclass
class FunctionDefinition(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.FUNCTION_DEFINITION

    name: str = ""
    return_type: ThriftNode | None = None
    fields: list[FieldDefinition] = field(default_factory=list)
    throws: list[FieldDefinition] = field(default_factory=list)
    oneway: bool = False
    description: str | None = None


@dataclass
class ServiceDefinition(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.SERVICE_DEFINITION

    name: str = ""
    extends: str | None = None
    functions: list[FunctionDefinition] = field(default_factory=list)
    description: str | None = None

    def get_function(self, name: str) -> FunctionDefinition | None:
        for function in self.functions:
            if function.name == name:
                return function
        return None


@dataclass
class IncludeDefinition(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.INCLUDE_DEFINITION

    path: str = ""  # As written, relative to the including file


@dataclass
class CppIncludeDefinition(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.CPP_INCLUDE_DEFINITION

    path: str = ""


@dataclass
class NamespaceDefinition(ThriftNode):
    kind: ClassVar[SyntaxType] = SyntaxType.NAMESPACE_DEFINITION

    scope: str = ""  # "*", "py", "java", ...
    name: str = ""


# Declarations that a type identifier may point at
TypeDeclaration = StructDefinition | EnumDefinition | TypedefDefinition


@dataclass
class ThriftDocument(ThriftNode):
    """Root of one parsed Thrift file."""

    kind: ClassVar[SyntaxType] = SyntaxType.THRIFT_DOCUMENT

    body: list[ThriftNode] = field(default_factory=list)

    # Canonical path of the file, set by the loader
    path: Path | None = None

    @property
    def includes(self) -> list[IncludeDefinition]:
        return [statement for statement in self.body if isinstance(statement, IncludeDefinition)]

    @property
    def services(self) -> list[ServiceDefinition]:
        return [statement for statement in self.body if isinstance(statement, ServiceDefinition)]

    def find_declarations(self, name: str) -> list[TypeDeclaration]:
        """Return every type declaration (struct-like, enum, typedef) named `name`."""
        return [
            statement
            for statement in self.body
            if isinstance(statement, TypeDeclaration) and statement.name == name
        ]


@dataclass
class SyntaxIssue:
    """One diagnostic reported by the parser."""

    message: str = ""
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}: {self.message}"


@dataclass
class ThriftErrors:
    """Parse result returned instead of a document when the text is invalid."""

    errors: list[SyntaxIssue] = field(default_factory=list)
