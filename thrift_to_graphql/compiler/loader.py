"""
Document loader.

Loads a Thrift file and, transitively, every file it includes.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import ThriftParseError
from ..idl.nodes import SyntaxIssue, ThriftDocument, ThriftErrors
from ..idl.parser import ThriftParser
from ..utils import canonical_path, include_path

logger = logging.getLogger(__name__)


class DocumentLoader:
    """Parses Thrift files and follows their includes."""

    def __init__(self, parser: ThriftParser | None = None):
        self.parser = parser or ThriftParser()

    def load(self, paths: list[str | Path], documents: dict[Path, ThriftDocument] | None = None) -> dict[Path, ThriftDocument]:
        """
        Load files and their include closure.

        Each file is parsed at most once, keyed by canonical path. Include
        cycles and diamonds are fine: a document is recorded before its
        includes are followed.

        Args:
            paths: Files to load
            documents: Already loaded documents, updated in place

        Returns:
            All loaded documents by canonical path

        Raises:
            ThriftParseError: A file failed to parse
            FileNotFoundError: A file or include does not exist
        """
        if documents is None:
            documents = {}
        for path in paths:
            self._load_file(canonical_path(path), documents)
        return documents

    def _load_file(self, path: Path, documents: dict[Path, ThriftDocument]) -> None:
        if path in documents:
            logger.debug("Skipping %s, already loaded", path)
            return

        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise ThriftParseError(path, [SyntaxIssue(message=f"not valid UTF-8: {e.reason} at byte {e.start}")]) from e
        result = self.parser.parse(text)
        if isinstance(result, ThriftErrors):
            raise ThriftParseError(path, result.errors)

        logger.info("Parsed %s", path)
        result.path = path
        documents[path] = result

        for include in result.includes:
            self._load_file(include_path(include.path, path), documents)
