"""
Thrift IDL parser that builds an AST.

Text goes in, a ThriftDocument (or ThriftErrors) comes out. Includes are
not followed here; that is the document loader's job.
"""

from __future__ import annotations

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from .nodes import (
    BaseType,
    BooleanLiteral,
    ConstDefinition,
    ConstList,
    ConstMap,
    CppIncludeDefinition,
    DoubleConstant,
    EnumDefinition,
    EnumMember,
    ExceptionDefinition,
    FieldDefinition,
    FunctionDefinition,
    Identifier,
    IncludeDefinition,
    IntConstant,
    ListType,
    MapType,
    NamespaceDefinition,
    ServiceDefinition,
    SetType,
    StringLiteral,
    StructDefinition,
    SyntaxIssue,
    ThriftDocument,
    ThriftErrors,
    TypedefDefinition,
    UnionDefinition,
    VoidType,
)

GRAMMAR_FILE = "thrift.lark"


def _unquote(token: Token) -> str:
    return str(token)[1:-1]


def _clean_comment(token: Token) -> str:
    """Strip comment markers and leading `*` gutters."""
    text = str(token)
    if text.startswith("/*"):
        body = text[2:-2]
        if body.startswith("*"):
            body = body[1:]
        lines = []
        for line in body.splitlines():
            line = line.strip()
            if line.startswith("*"):
                line = line[1:].strip()
            if line:
                lines.append(line)
        return "\n".join(lines)
    if text.startswith("//"):
        return text[2:].strip()
    return text[1:].strip()


class _CommentIndex:
    """Maps source lines to the comments that describe the node on that line.

    A comment alone on its line is "leading": it belongs to the node that
    opens the next line, if nothing but other leading comments separates
    them. A comment that follows code on the same line is "trailing": it
    belongs to the node that closes that line.
    """

    def __init__(self, text: str, comments: list[Token]):
        self._lines = text.splitlines()
        self._leading: dict[int, Token] = {}  # end_line -> comment
        self._trailing: dict[int, list[Token]] = {}  # line -> comments

        for token in comments:
            if self._before(token.line, token.column).strip():
                self._trailing.setdefault(token.line, []).append(token)
            else:
                self._leading[token.end_line] = token

    def _before(self, line: int, column: int) -> str:
        if line > len(self._lines):
            return ""
        return self._lines[line - 1][: column - 1]

    def _opens_line(self, meta) -> bool:
        return not self._before(meta.line, meta.column).strip()

    def _closes_line(self, meta, comment: Token) -> bool:
        between = self._lines[meta.end_line - 1][meta.end_column - 1 : comment.column - 1]
        return not between.strip(" \t,;")

    def describe(self, meta, trailing: bool = False) -> str | None:
        line = getattr(meta, "line", None)
        if line is None:
            return None

        parts = []
        # Nested nodes sharing a line with their parent never take its comment
        if self._opens_line(meta):
            block = []
            current = line - 1
            while current in self._leading:
                token = self._leading[current]
                block.append(token)
                current = token.line - 1
            parts.extend(_clean_comment(token) for token in reversed(block))

        if trailing:
            parts.extend(
                _clean_comment(token)
                for token in self._trailing.get(meta.end_line, [])
                if self._closes_line(meta, token)
            )

        description = "\n".join(part for part in parts if part)
        return description or None


def _line(meta) -> int:
    return getattr(meta, "line", 0)


@v_args(meta=True)
class _ThriftTransformer(Transformer):
    """Turns the lark parse tree into AST nodes."""

    def __init__(self, comments: _CommentIndex):
        super().__init__()
        self._comments = comments

    # Document and headers

    def start(self, meta, children):
        return ThriftDocument(line=1, body=list(children))

    def include(self, meta, children):
        return IncludeDefinition(line=_line(meta), path=_unquote(children[0]))

    def cpp_include(self, meta, children):
        return CppIncludeDefinition(line=_line(meta), path=_unquote(children[0]))

    def namespace(self, meta, children):
        scope, name = children[0], children[1]
        return NamespaceDefinition(line=_line(meta), scope=str(scope), name=str(name))

    # Definitions

    def const(self, meta, children):
        field_type, name, value = children
        return ConstDefinition(
            line=_line(meta),
            name=str(name),
            field_type=field_type,
            initializer=value,
            description=self._comments.describe(meta),
        )

    def typedef(self, meta, children):
        return TypedefDefinition(
            line=_line(meta),
            name=str(children[1]),
            definition_type=children[0],
            description=self._comments.describe(meta),
        )

    def enum(self, meta, children):
        return EnumDefinition(
            line=_line(meta),
            name=str(children[0]),
            members=[child for child in children[1:] if isinstance(child, EnumMember)],
            description=self._comments.describe(meta),
        )

    def enum_member(self, meta, children):
        return EnumMember(
            line=_line(meta),
            name=str(children[0]),
            initializer=children[1],
            description=self._comments.describe(meta, trailing=True),
        )

    def _struct_like(self, cls, meta, children):
        return cls(
            line=_line(meta),
            name=str(children[0]),
            fields=[child for child in children[1:] if isinstance(child, FieldDefinition)],
            description=self._comments.describe(meta),
        )

    def struct(self, meta, children):
        return self._struct_like(StructDefinition, meta, children)

    def union(self, meta, children):
        return self._struct_like(UnionDefinition, meta, children)

    def exception(self, meta, children):
        return self._struct_like(ExceptionDefinition, meta, children)

    def service(self, meta, children):
        extends = children[1]
        return ServiceDefinition(
            line=_line(meta),
            name=str(children[0]),
            extends=str(extends) if extends is not None else None,
            functions=[child for child in children[2:] if isinstance(child, FunctionDefinition)],
            description=self._comments.describe(meta),
        )

    def function(self, meta, children):
        oneway, return_type, name = children[0], children[1], children[2]
        rest = children[3:]
        throws = next((child for child in rest if isinstance(child, tuple)), ())
        return FunctionDefinition(
            line=_line(meta),
            name=str(name),
            return_type=return_type,
            fields=[child for child in rest if isinstance(child, FieldDefinition)],
            throws=list(throws),
            oneway=oneway is not None,
            description=self._comments.describe(meta, trailing=True),
        )

    def throws(self, meta, children):
        return tuple(children)

    def field(self, meta, children):
        field_id, requiredness, field_type, name, default_value = children[:5]
        return FieldDefinition(
            line=_line(meta),
            name=str(name),
            field_id=field_id,
            requiredness=requiredness,
            field_type=field_type,
            default_value=default_value,
            description=self._comments.describe(meta, trailing=True),
        )

    def field_id(self, meta, children):
        return int(children[0])

    def field_req(self, meta, children):
        return str(children[0])

    # Types

    def void_type(self, meta, children):
        return VoidType(line=_line(meta))

    def identifier(self, meta, children):
        return Identifier(line=_line(meta), value=str(children[0]))

    def base_type(self, meta, children):
        return BaseType(line=_line(meta), type_name=str(children[0]))

    def map_type(self, meta, children):
        return MapType(line=_line(meta), key_type=children[0], value_type=children[1])

    def set_type(self, meta, children):
        return SetType(line=_line(meta), value_type=children[0])

    def list_type(self, meta, children):
        return ListType(line=_line(meta), value_type=children[0])

    # Constants

    def int_constant(self, meta, children):
        token = children[0]
        return IntConstant(line=_line(meta), raw=str(token), is_hex=token.type == "HEX_CONSTANT")

    def double_constant(self, meta, children):
        return DoubleConstant(line=_line(meta), raw=str(children[0]))

    def string_literal(self, meta, children):
        return StringLiteral(line=_line(meta), value=_unquote(children[0]))

    def bool_literal(self, meta, children):
        return BooleanLiteral(line=_line(meta), value=children[0].type == "TRUE")

    def const_list(self, meta, children):
        return ConstList(line=_line(meta), elements=list(children))

    def const_map(self, meta, children):
        return ConstMap(line=_line(meta), properties=list(children))

    def const_map_entry(self, meta, children):
        return (children[0], children[1])

    # Annotations are parsed and dropped

    def annotations(self, meta, children):
        return dict(children)

    def annotation(self, meta, children):
        value = children[1]
        return (str(children[0]), _unquote(value) if value is not None else None)


def _describe_error(error: UnexpectedInput) -> str:
    if isinstance(error, UnexpectedToken):
        expected = ", ".join(sorted(error.expected))
        return f"unexpected token {str(error.token)!r}, expected one of: {expected}"
    if isinstance(error, UnexpectedCharacters):
        return f"unexpected character {error.char!r}"
    if isinstance(error, UnexpectedEOF):
        return "unexpected end of input"
    return str(error)


class ThriftParser:
    """Parses Thrift IDL text into a ThriftDocument.

    One instance can parse many documents, but not concurrently: the
    comment buffer is shared between calls.
    """

    def __init__(self):
        self._comments: list[Token] = []
        self._lark = Lark.open(
            GRAMMAR_FILE,
            rel_to=__file__,
            parser="lalr",
            propagate_positions=True,
            maybe_placeholders=True,
            lexer_callbacks={
                "LINE_COMMENT": self._comments.append,
                "BLOCK_COMMENT": self._comments.append,
            },
        )

    def parse(self, text: str) -> ThriftDocument | ThriftErrors:
        """
        Parse Thrift IDL text.

        Args:
            text: Content of one .thrift file

        Returns:
            ThriftDocument on success, ThriftErrors describing the first
            syntax error otherwise
        """
        self._comments.clear()
        try:
            tree = self._lark.parse(text)
        except UnexpectedInput as e:
            issue = SyntaxIssue(
                message=_describe_error(e),
                line=getattr(e, "line", None) or 0,
                column=getattr(e, "column", None) or 0,
            )
            return ThriftErrors(errors=[issue])

        comments = _CommentIndex(text, list(self._comments))
        return _ThriftTransformer(comments).transform(tree)


def parse(text: str) -> ThriftDocument | ThriftErrors:
    """Parse Thrift IDL text with a fresh parser."""
    return ThriftParser().parse(text)
