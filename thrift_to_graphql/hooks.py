"""
Request/response hooks run around every RPC call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Protocol


@dataclass
class RequestExtra:
    """What a hook knows about the call it is running for."""

    context: Any = None  # GraphQL context value, passed through unchanged
    service: str = ""  # Exposed service name (config key)
    method: str = ""  # Thrift function name


@dataclass
class ResponseExtra(RequestExtra):
    # Request as it was sent to the client, after request hooks
    request: Any = None


class Hook(Protocol):
    """A hook transforms a value and may suspend by returning an awaitable."""

    def __call__(self, value: Any, extra: RequestExtra) -> Any | Awaitable[Any]: ...
