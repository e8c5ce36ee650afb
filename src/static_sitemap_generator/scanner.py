from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from .exceptions import BuildDirectoryNotFoundError
from .logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DiscoveredFile:
    # POSIX-style path relative to the scanned root, e.g. "databases/sql/index.html"
    relative_path: str


def scan_files(root: Path, suffix: str = ".html") -> List[DiscoveredFile]:
    """
    Depth-first walk of ``root`` collecting every regular file whose name
    ends with ``suffix``.

    Entries of each directory are visited in sorted name order, so the result
    is stable for a given tree. An explicit stack is used instead of recursion;
    the order is the same as a recursive pre-order walk. Symlinked directories
    are not followed, which also rules out loops.
    """
    root = Path(root)
    if not root.is_dir():
        raise BuildDirectoryNotFoundError(root)

    found: List[DiscoveredFile] = []
    stack: List[Tuple[Path, Tuple[str, ...]]] = _children(root, ())
    dirs_seen = 1

    while stack:
        path, parts = stack.pop()
        if path.is_dir() and not path.is_symlink():
            dirs_seen += 1
            stack.extend(_children(path, parts))
        elif path.is_file() and path.name.endswith(suffix):
            found.append(DiscoveredFile(relative_path="/".join(parts)))

    logger.debug(
        f"Scanned {dirs_seen} directories under {root}, "
        f"found {len(found)} '{suffix}' files"
    )
    return found


def _children(directory: Path, parts: Tuple[str, ...]) -> List[Tuple[Path, Tuple[str, ...]]]:
    # Reversed so that popping from the end yields entries in sorted order
    entries = sorted(directory.iterdir(), key=lambda p: p.name)
    return [(p, parts + (p.name,)) for p in reversed(entries)]
