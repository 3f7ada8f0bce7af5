"""
Schema assembler: service functions to root `Query` fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from graphql import GraphQLField, GraphQLObjectType, GraphQLSchema, assert_valid_schema

from ..config import MethodConfig, default_query_name
from ..errors import ThriftGraphQLError
from ..idl.nodes import ServiceDefinition
from ..rpc import OperationInvoker
from .type_compiler import TypeCompiler

logger = logging.getLogger(__name__)

QUERY_TYPE_NAME = "Query"
QUERY_TYPE_DESCRIPTION = "The root query"


@dataclass
class ExposurePolicy:
    """Which functions of a service become query fields."""

    strict: bool = True
    methods: dict[str, MethodConfig] = field(default_factory=dict)

    def exposes(self, function_name: str) -> bool:
        return not self.strict or function_name in self.methods

    def method_config(self, function_name: str) -> MethodConfig | None:
        return self.methods.get(function_name)


@dataclass
class ServiceOperations:
    """A service to expose, with the file declaring it."""

    name: str  # Exposed name, the RPC client's service key
    file: Path
    service: ServiceDefinition
    policy: ExposurePolicy = field(default_factory=ExposurePolicy)


class SchemaAssembler:
    """Builds the GraphQL schema of a set of services."""

    def __init__(
        self,
        compiler: TypeCompiler,
        get_query_name: Callable[[str, str], str] = default_query_name,
        invoker: OperationInvoker | None = None,
    ):
        self.compiler = compiler
        self.get_query_name = get_query_name
        self.invoker = invoker or OperationInvoker()

    def assemble(self, services: list[ServiceOperations]) -> GraphQLSchema:
        """
        Build and validate the schema, then seal the session.

        Raises:
            GraphQLError / TypeError: The resulting schema is invalid
        """
        fields = self._query_fields(services)
        query = GraphQLObjectType(QUERY_TYPE_NAME, fields=fields, description=QUERY_TYPE_DESCRIPTION)

        # Building the schema collects every reachable type, forcing all field thunks
        try:
            schema = GraphQLSchema(query=query)
        except TypeError as e:
            # graphql-core wraps errors raised by field thunks
            if isinstance(e.__cause__, ThriftGraphQLError):
                raise e.__cause__ from None
            raise
        assert_valid_schema(schema)

        self.compiler.session.seal()
        return schema

    def _query_fields(self, services: list[ServiceOperations]) -> dict[str, GraphQLField]:
        fields: dict[str, GraphQLField] = {}
        for operations in services:
            for function in operations.service.functions:
                if not operations.policy.exposes(function.name):
                    logger.debug("Skipping %s.%s, not listed in methods", operations.name, function.name)
                    continue

                query_name = self.get_query_name(operations.service.name, function.name)
                if query_name in fields:
                    logger.warning("Duplicate query name %s, %s.%s replaces it", query_name, operations.name, function.name)

                resolve = self.invoker.bind(operations.name, function, operations.policy.method_config(function.name))
                fields[query_name] = self.compiler.compile_function(operations.file, function, resolve)
        return fields
