"""
Schema generator: configuration in, GraphQL schema out.
"""

from __future__ import annotations

import logging
from pathlib import Path

from graphql import GraphQLSchema, print_schema

from .compiler import CompilationSession, ExposurePolicy, SchemaAssembler, ServiceOperations, TypeCompiler
from .config import ThriftToGraphQLConfig
from .errors import ServiceNotFoundError
from .idl.parser import ThriftParser
from .rpc import ClientFactory, OperationInvoker, ServiceRouting
from .utils import canonical_path

logger = logging.getLogger(__name__)


class SchemaGenerator:
    """
    Builds a GraphQL schema from the services of a configuration.

    Each call to generate() uses a fresh compilation session.
    """

    def __init__(
        self,
        config: ThriftToGraphQLConfig,
        create_client: ClientFactory | None = None,
        parser: ThriftParser | None = None,
    ):
        self.config = config
        self.create_client = create_client
        self.parser = parser

    def generate(self) -> GraphQLSchema:
        """
        Generate the schema.

        Raises:
            ThriftParseError, UnresolvedIdentifierError, ...: Compilation failed
            ServiceNotFoundError: A service file declares no service
        """
        session = CompilationSession(
            convert_enum_to_int=self.config.convert_enum_to_int,
            get_type_name=self.config.get_type_name,
            parser=self.parser,
        )

        services = []
        routing = {}
        for name, service_config in self.config.services.items():
            file = canonical_path(Path(self.config.idl_path) / service_config.file)
            session.load([file])

            # Only the first service of a file is exposed
            declarations = session.documents[file].services
            if not declarations:
                raise ServiceNotFoundError(file)

            for method in service_config.methods:
                if declarations[0].get_function(method) is None:
                    logger.warning("Service %s has no function %s listed in methods", name, method)

            policy = ExposurePolicy(strict=self.config.strict, methods=service_config.methods)
            services.append(ServiceOperations(name=name, file=file, service=declarations[0], policy=policy))
            routing[name] = ServiceRouting(filename=str(file), consul=service_config.consul, servers=list(service_config.servers))

        client = self.create_client(routing) if self.create_client is not None else None
        if client is None:
            logger.info("No RPC client factory, resolvers will fail when called")
        invoker = OperationInvoker(client, self.config.global_hooks)

        assembler = SchemaAssembler(TypeCompiler(session), get_query_name=self.config.get_query_name, invoker=invoker)
        schema = assembler.assemble(services)
        logger.info("Built schema for %d service(s), %d document(s) loaded", len(services), len(session.documents))
        return schema

    def generate_sdl(self) -> str:
        """Generate the schema and render it as GraphQL SDL."""
        return print_schema(self.generate())


def thrift_to_schema(config: ThriftToGraphQLConfig, create_client: ClientFactory | None = None) -> GraphQLSchema:
    """Build a GraphQL schema from Thrift services."""
    return SchemaGenerator(config, create_client).generate()
