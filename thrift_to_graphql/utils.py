"""
Utility functions for Thrift to GraphQL compilation.
"""

from pathlib import Path


def canonical_path(path: str | Path) -> Path:
    """Absolute, `..`-normalized, symlink-free form of `path`.

    Used as the identity of a loaded document.
    """
    return Path(path).resolve()


def include_path(include: str, including_file: Path) -> Path:
    """Canonical path of an include, resolved relative to the including file."""
    return canonical_path(including_file.parent / include)


def include_stem(include: str) -> str:
    """Namespace an include is referred to by: its file stem.

    Examples:
        "shared.thrift" -> "shared"
        "../common/types.thrift" -> "types"
    """
    return Path(include).stem
