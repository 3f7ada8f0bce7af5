"""
Configuration for building a GraphQL schema from Thrift services.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from .hooks import Hook


@dataclass
class TypeNameOptions:
    """Input to a type naming function."""

    file: Path | None = None  # File declaring the type
    name: str = ""  # Declared name
    is_input: bool = False
    is_enum: bool = False


def default_type_name(options: TypeNameOptions) -> str:
    """Declared name, with an `Input` suffix for input object types."""
    if options.is_input:
        return f"{options.name}Input"
    return options.name


def default_query_name(service_name: str, function_name: str) -> str:
    return f"{service_name}_{function_name}"


@dataclass
class MethodConfig:
    """Per-method hooks."""

    on_request: Hook | None = None
    on_response: Hook | None = None


@dataclass
class HooksConfig:
    """Hooks applied to every method of every service."""

    on_request: Hook | None = None
    on_response: Hook | None = None


@dataclass
class ServiceConfig:
    """One exposed service."""

    # IDL file declaring the service, relative to idl_path
    file: str = ""

    # Service discovery name, handed to the client factory
    consul: str = ""

    # Static server addresses, handed to the client factory
    servers: list[str] = field(default_factory=list)

    # Methods to expose (all of them are exposed when strict is off)
    methods: dict[str, MethodConfig] = field(default_factory=dict)

    @staticmethod
    def from_dict(d: dict) -> ServiceConfig:
        """Create a service config from a dictionary.

        `methods` may be a list of names or a mapping of name to options.
        """
        # Iterating either form yields the method names
        methods = {name: MethodConfig() for name in d.get("methods", [])}
        return ServiceConfig(
            file=d.get("file", ""),
            consul=d.get("consul", ""),
            servers=list(d.get("servers", [])),
            methods=methods,
        )

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "consul": self.consul,
            "servers": self.servers,
            "methods": sorted(self.methods),
        }


@dataclass
class ThriftToGraphQLConfig:
    """Configuration options for schema generation."""

    # Directory that service files are relative to
    idl_path: str = "."

    # Only expose the methods listed in each service's `methods`
    strict: bool = True

    # Compile every enum to Int instead of a GraphQL enum
    convert_enum_to_int: bool = False

    # Exposed services, keyed by the name given to the client factory
    services: dict[str, ServiceConfig] = field(default_factory=dict)

    # Hooks run for every method
    global_hooks: HooksConfig = field(default_factory=HooksConfig)

    # Root query field naming, (service declaration name, function name) -> name
    get_query_name: Callable[[str, str], str] = default_query_name

    # Named type naming
    get_type_name: Callable[[TypeNameOptions], str] = default_type_name

    # Add generation comment at top of the SDL output
    add_generation_comment: bool = True

    @staticmethod
    def from_dict(d: dict) -> ThriftToGraphQLConfig:
        """Create a config from a dictionary.

        Callables (hooks, naming functions) cannot come from a dictionary
        and keep their defaults.
        """
        config = ThriftToGraphQLConfig()
        for k, v in d.items():
            if k == "services":
                config.services = {name: ServiceConfig.from_dict(service) for name, service in v.items()}
            elif k in ("idl_path", "strict", "convert_enum_to_int", "add_generation_comment"):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "idl_path": self.idl_path,
            "strict": self.strict,
            "convert_enum_to_int": self.convert_enum_to_int,
            "services": {name: service.to_dict() for name, service in self.services.items()},
            "add_generation_comment": self.add_generation_comment,
        }
