"""
Thrift IDL front end: grammar, parser and AST nodes.
"""

from .nodes import ThriftDocument, ThriftErrors, SyntaxIssue, SyntaxType
from .parser import ThriftParser, parse

__all__ = [
    "SyntaxIssue",
    "SyntaxType",
    "ThriftDocument",
    "ThriftErrors",
    "ThriftParser",
    "parse",
]
