"""
Identifier resolver.

Maps a type identifier, as written in a file, to the declaration it names.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..errors import MalformedIdentifierError, UnresolvedIdentifierError
from ..idl.nodes import ThriftDocument, TypeDeclaration
from ..utils import include_path, include_stem


@dataclass
class ResolvedIdentifier:
    """A resolved identifier."""

    file: Path  # Canonical path of the declaring file
    declaration: TypeDeclaration


class IdentifierResolver:
    """Resolves bare (`Foo`) and qualified (`shared.Foo`) identifiers.

    A qualified identifier's namespace is the file stem of one of the
    context file's includes. Two includes sharing a stem make the namespace
    ambiguous, which is reported as unresolved.
    """

    def __init__(self, documents: dict[Path, ThriftDocument]):
        self.documents = documents

    def resolve(self, reference: str, context_file: Path) -> ResolvedIdentifier:
        """
        Resolve an identifier.

        Args:
            reference: Identifier text
            context_file: Canonical path of the file the identifier appears in

        Returns:
            ResolvedIdentifier with the declaring file and declaration

        Raises:
            MalformedIdentifierError: More than one dot
            UnresolvedIdentifierError: No match, or several matches
        """
        parts = reference.split(".")
        if len(parts) == 1:
            return self._resolve_local(reference, reference, context_file, context_file)
        if len(parts) != 2:
            raise MalformedIdentifierError(reference, context_file)

        namespace, name = parts
        document = self._document(reference, context_file)
        candidates = [include for include in document.includes if include_stem(include.path) == namespace]
        if not candidates:
            raise UnresolvedIdentifierError(reference, context_file, f"no include named '{namespace}'")
        if len(candidates) > 1:
            raise UnresolvedIdentifierError(reference, context_file, f"ambiguous include name '{namespace}'")

        target = include_path(candidates[0].path, context_file)
        return self._resolve_local(reference, name, target, context_file)

    def _document(self, reference: str, file: Path) -> ThriftDocument:
        document = self.documents.get(file)
        if document is None:
            raise UnresolvedIdentifierError(reference, file, f"{file.name} is not loaded")
        return document

    def _resolve_local(self, reference: str, name: str, file: Path, context_file: Path) -> ResolvedIdentifier:
        declarations = self._document(reference, file).find_declarations(name)
        if not declarations:
            raise UnresolvedIdentifierError(reference, context_file, f"no declaration named '{name}' in {file.name}")
        if len(declarations) > 1:
            raise UnresolvedIdentifierError(reference, context_file, f"'{name}' is declared more than once in {file.name}")
        return ResolvedIdentifier(file=file, declaration=declarations[0])
