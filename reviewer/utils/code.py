"""Source code discovery helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from loguru import logger

from reviewer.errors import PathNotFoundError

SOURCE_EXTENSIONS = (".cs",)
EXCLUDED_DIRS = ("bin", "obj", "node_modules", ".git")


def list_source_files(
    root: Path,
    extensions: Iterable[str] = SOURCE_EXTENSIONS,
    excluded_dirs: Iterable[str] = EXCLUDED_DIRS,
) -> List[Path]:
    """Return source files beneath ``root`` in a stable order.

    A file path is passed through when it has one of ``extensions`` and
    dropped otherwise. Build output and version-control directories below
    ``root`` are skipped.
    """

    if not root.exists():
        raise PathNotFoundError(str(root))
    suffixes = tuple(extensions)
    if root.is_file():
        return [root] if root.suffix in suffixes else []

    skipped = set(excluded_dirs)
    files: List[Path] = []
    for path in root.rglob("*"):
        if path.suffix not in suffixes or not path.is_file():
            continue
        if skipped.intersection(path.relative_to(root).parts[:-1]):
            continue
        files.append(path)
    files.sort()
    logger.debug("Discovered {} source files under {}", len(files), root)
    return files


def display_name(path: Path, root: Path) -> str:
    """Name ``path`` relative to the scan root, or by basename when the root is the file."""

    if root.is_file():
        return path.name
    return path.relative_to(root).as_posix()
