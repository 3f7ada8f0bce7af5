"""
Glue between GraphQL resolvers and the RPC client.

The client itself is supplied by the caller: a factory receives the routing
of every exposed service and returns callables per service and method.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from .config import HooksConfig, MethodConfig
from .errors import RpcClientError
from .hooks import Hook, RequestExtra, ResponseExtra
from .idl.nodes import FunctionDefinition

# service name -> function name -> callable(request) -> response | awaitable
RpcClient = Mapping[str, Mapping[str, Callable[[Any], Any]]]


@dataclass
class ServiceRouting:
    """Where a service lives, as handed to the client factory."""

    filename: str = ""  # Canonical path of the IDL file
    consul: str = ""
    servers: list[str] = field(default_factory=list)


ClientFactory = Callable[[dict[str, ServiceRouting]], RpcClient]


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def _run_hook(hook: Hook | None, value: Any, extra: RequestExtra) -> Any:
    if hook is None:
        return value
    return await _resolve(hook(value, extra))


def request_from_args(function: FunctionDefinition, args: dict[str, Any]) -> Any:
    """Value sent to the client: the single argument, or all arguments by name."""
    if len(function.fields) == 1:
        return args.get(function.fields[0].name)
    return args


class OperationInvoker:
    """Builds resolvers that call service methods through the RPC client."""

    def __init__(self, client: RpcClient | None = None, global_hooks: HooksConfig | None = None):
        self.client = client
        self.global_hooks = global_hooks or HooksConfig()

    def bind(self, service_name: str, function: FunctionDefinition, method_config: MethodConfig | None = None):
        """
        Create the resolver of one root query field.

        Args:
            service_name: Exposed service name, the client's first key
            function: Thrift function the field stands for
            method_config: Per-method hooks, if any

        Returns:
            An async GraphQL resolver
        """
        method_config = method_config or MethodConfig()
        method_name = function.name
        global_hooks = self.global_hooks

        async def resolve(source, info, **args):
            context = info.context
            request = request_from_args(function, args)

            extra = RequestExtra(context=context, service=service_name, method=method_name)
            request = await _run_hook(global_hooks.on_request, request, extra)
            request = await _run_hook(method_config.on_request, request, extra)

            call = self._method(service_name, method_name)
            response = await _resolve(call(request))

            extra = ResponseExtra(context=context, service=service_name, method=method_name, request=request)
            response = await _run_hook(global_hooks.on_response, response, extra)
            response = await _run_hook(method_config.on_response, response, extra)
            return response

        return resolve

    def _method(self, service_name: str, method_name: str) -> Callable[[Any], Any]:
        if self.client is None:
            raise RpcClientError(service_name, method_name, "No RPC client configured")
        methods = self.client.get(service_name)
        if methods is None:
            raise RpcClientError(service_name, method_name, f"RPC client has no service {service_name}")
        call = methods.get(method_name)
        if call is None:
            raise RpcClientError(service_name, method_name)
        return call
