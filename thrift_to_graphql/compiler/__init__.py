"""
Thrift to GraphQL compiler.

1. Loader: parse a file and its include closure
2. Resolver: map identifiers to declarations across files
3. Type compiler: declarations to graphql-core types, cached per session
4. Assembler: service functions to the root Query type
"""

from __future__ import annotations

from .assembler import ExposurePolicy, SchemaAssembler, ServiceOperations
from .loader import DocumentLoader
from .resolver import IdentifierResolver, ResolvedIdentifier
from .scalars import GraphQLInt64, GraphQLMap, GraphQLSet
from .session import CompilationSession, Direction
from .type_compiler import TypeCompiler

__all__ = [
    "CompilationSession",
    "Direction",
    "DocumentLoader",
    "ExposurePolicy",
    "GraphQLInt64",
    "GraphQLMap",
    "GraphQLSet",
    "IdentifierResolver",
    "ResolvedIdentifier",
    "SchemaAssembler",
    "ServiceOperations",
    "TypeCompiler",
]
