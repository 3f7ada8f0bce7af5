"""
Compilation session: loaded documents, compiled named types and type names.

One session backs one schema build. Nothing is shared between sessions.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Callable, TypeVar

from ..config import TypeNameOptions, default_type_name
from ..idl.nodes import ThriftDocument
from ..idl.parser import ThriftParser
from .loader import DocumentLoader

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Direction(Enum):
    """Whether a struct is compiled as an argument or as a result."""

    INPUT = "input"
    OUTPUT = "output"


# (declaring file, declared name, direction); direction is None for enums
CacheKey = tuple[Path, str, Direction | None]

# Names GraphQL or this package already define
RESERVED_TYPE_NAMES = {
    "Query",
    "Int",
    "Float",
    "String",
    "Boolean",
    "ID",
    "Int64",
    "Map",
    "Set",
}


class CompilationSession:
    """Owns everything a single schema build creates."""

    def __init__(
        self,
        convert_enum_to_int: bool = False,
        get_type_name: Callable[[TypeNameOptions], str] = default_type_name,
        parser: ThriftParser | None = None,
    ):
        self.convert_enum_to_int = convert_enum_to_int
        self.get_type_name = get_type_name
        self.documents: dict[Path, ThriftDocument] = {}
        self._loader = DocumentLoader(parser)
        self._nodes: dict[CacheKey, object] = {}
        self._name_counters: dict[str, int] = {}
        self._used_names: set[str] = set(RESERVED_TYPE_NAMES)
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    def load(self, paths: list[str | Path]) -> dict[Path, ThriftDocument]:
        """Load files (and their includes) into the session."""
        return self._loader.load(paths, self.documents)

    def get_or_create(self, key: CacheKey, factory: Callable[[], T]) -> T:
        """
        Return the node cached under `key`, creating it on first request.

        `factory` must not request `key` again before returning; struct
        factories satisfy this by building their fields lazily.

        Raises:
            RuntimeError: Cache miss on a sealed session
        """
        node = self._nodes.get(key)
        if node is not None:
            return node
        if self._sealed:
            raise RuntimeError(f"Compilation session is sealed, cannot create type for {key[1]} in {key[0]}")
        node = factory()
        self._nodes[key] = node
        return node

    def allocate_name(self, preferred: str) -> str:
        """
        Allocate a unique GraphQL type name.

        Returns `preferred` the first time, then `preferred1`, `preferred2`, ...
        """
        if preferred not in self._used_names:
            self._used_names.add(preferred)
            return preferred

        counter = self._name_counters.get(preferred, 0)
        while True:
            counter += 1
            candidate = f"{preferred}{counter}"
            if candidate not in self._used_names:
                break
        self._name_counters[preferred] = counter
        self._used_names.add(candidate)
        logger.debug("Type name %s is taken, using %s", preferred, candidate)
        return candidate

    def type_name(self, file: Path, name: str, *, is_input: bool = False, is_enum: bool = False) -> str:
        """Allocate the name of a named type declared as `name` in `file`."""
        options = TypeNameOptions(file=file, name=name, is_input=is_input, is_enum=is_enum)
        return self.allocate_name(self.get_type_name(options))

    def seal(self) -> None:
        """Forbid creating new types. Lookups of existing ones still work."""
        self._sealed = True
