"""Thrift to GraphQL

Compiles Thrift IDL services into a graphql-core schema whose root query
fields call the services through a caller-supplied RPC client.
"""

__version__ = "0.3.0"

from .config import (
    HooksConfig,
    MethodConfig,
    ServiceConfig,
    ThriftToGraphQLConfig,
    TypeNameOptions,
)
from .errors import (
    InvalidScalarError,
    MalformedIdentifierError,
    RpcClientError,
    ServiceNotFoundError,
    ThriftGraphQLError,
    ThriftParseError,
    UnresolvedIdentifierError,
    UnsupportedNodeError,
)
from .generator import SchemaGenerator, thrift_to_schema
from .hooks import Hook, RequestExtra, ResponseExtra
from .rpc import ServiceRouting

__all__ = [
    "thrift_to_schema",
    "SchemaGenerator",
    "ThriftToGraphQLConfig",
    "ServiceConfig",
    "MethodConfig",
    "HooksConfig",
    "TypeNameOptions",
    "ServiceRouting",
    "Hook",
    "RequestExtra",
    "ResponseExtra",
    "ThriftGraphQLError",
    "ThriftParseError",
    "MalformedIdentifierError",
    "UnresolvedIdentifierError",
    "UnsupportedNodeError",
    "InvalidScalarError",
    "ServiceNotFoundError",
    "RpcClientError",
]
