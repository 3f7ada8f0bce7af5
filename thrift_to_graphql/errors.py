"""
Errors raised while compiling Thrift IDL into a GraphQL schema, and while
serving it.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any


class ThriftGraphQLError(Exception):
    """Base class for every error raised by thrift_to_graphql."""


class ThriftParseError(ThriftGraphQLError):
    """An IDL file failed to parse."""

    def __init__(self, path: Path, errors: list):
        self.path = path
        self.errors = errors
        details = "; ".join(str(error) for error in errors)
        super().__init__(f"Failed to parse {path}: {details}")


class MalformedIdentifierError(ThriftGraphQLError):
    """A dotted identifier does not have exactly two components."""

    def __init__(self, identifier: str, file: Path):
        self.identifier = identifier
        self.file = file
        super().__init__(f"Malformed identifier '{identifier}' in {file}: expected 'namespace.Name'")


class UnresolvedIdentifierError(ThriftGraphQLError):
    """An identifier matches no declaration, or more than one."""

    def __init__(self, identifier: str, file: Path, reason: str):
        self.identifier = identifier
        self.file = file
        self.reason = reason
        super().__init__(f"Cannot resolve '{identifier}' in {file}: {reason}")


class UnsupportedNodeError(ThriftGraphQLError):
    """The type compiler met a node kind it cannot turn into a GraphQL type."""

    def __init__(self, kind: Any, file: Path | None = None):
        self.kind = kind
        self.file = file
        where = f" in {file}" if file is not None else ""
        super().__init__(f"Unsupported node kind {getattr(kind, 'value', kind)}{where}")


class InvalidScalarError(ThriftGraphQLError):
    """A value cannot be serialized or parsed by a custom scalar."""

    def __init__(self, value: Any, message: str = ""):
        self.value = value
        super().__init__(message or f"Invalid scalar value: {value!r}")


class ServiceNotFoundError(ThriftGraphQLError):
    """A configured IDL file declares no service."""

    def __init__(self, file: Path):
        self.file = file
        super().__init__(f"No service declared in {file}")


class RpcClientError(ThriftGraphQLError):
    """The RPC client has no callable for a service method."""

    def __init__(self, service: str, method: str, message: str = ""):
        self.service = service
        self.method = method
        super().__init__(message or f"No RPC client for {service}.{method}")
