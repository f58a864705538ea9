from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from repopac.config import MAX_BYTES, DirectoryEntry, EntryKind, FileContent
from repopac.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterator


def exists(path: Path) -> bool:
    """Check whether `path` exists, following symlinks.

    Args:
        path (Path): the path to check

    Returns:
        bool: True if the path exists, False if it does not or cannot be queried
    """
    try:
        return path.exists()
    except (OSError, ValueError):
        return False


def is_directory(path: Path) -> bool:
    """Check whether `path` is a directory, following symlinks.

    Args:
        path (Path): the path to check

    Returns:
        bool: True if the path is a directory, False otherwise or on any OS error
    """
    try:
        return path.is_dir()
    except (OSError, ValueError):
        return False


def is_regular_file(path: Path) -> bool:
    """Check whether `path` is a regular file, following symlinks.

    Args:
        path (Path): the path to check

    Returns:
        bool: True if the path is a regular file, False otherwise or on any OS error
    """
    try:
        return path.is_file()
    except (OSError, ValueError):
        return False


def is_git_repo(directory: Path) -> bool:
    """Tell whether `directory` holds a `.git` directory.

    Only the presence of `.git/` is checked, not the integrity of the repository.
    """
    return is_directory(directory / ".git")


def list_entries(directory: Path) -> list[DirectoryEntry]:
    """List the files and directories directly under `directory`.

    Entries that are neither a regular file nor a directory (sockets, broken
    symlinks, ...) are left out, as are entries whose type cannot be queried.

    Args:
        directory (Path): the directory to list

    Returns:
        list[DirectoryEntry]: the entries sorted by filename, files and directories interleaved
    """
    try:
        with os.scandir(directory) as it:
            raw = list(it)
    except OSError as e:
        logger.warning("Cannot list %s: %s", directory, e)
        return []

    entries: list[DirectoryEntry] = []
    for item in raw:
        try:
            if item.is_dir():
                kind = EntryKind.DIRECTORY
            elif item.is_file():
                kind = EntryKind.FILE
            else:
                continue
        except OSError:
            continue
        entries.append(DirectoryEntry(path=directory / item.name, kind=kind))
    return sorted(entries, key=lambda e: e.name)


def _directory_key(path: Path) -> tuple[int, int] | None:
    try:
        st = path.stat()
    except (OSError, ValueError):
        return None
    return (st.st_dev, st.st_ino)


def walk_entries(
    root: Path,
    depth: int = 0,
    _ancestors: frozenset[tuple[int, int]] = frozenset(),
) -> Iterator[tuple[int, DirectoryEntry]]:
    """Walk `root` depth-first, yielding each entry with its depth.

    Children are visited in filename order and a directory's own entry is
    yielded before its children. A directory that is already one of its own
    ancestors (a symlink cycle) is yielded but not descended into.

    Args:
        root (Path): the directory to walk
        depth (int): the depth assigned to the direct children of `root`

    Yields:
        Iterator[tuple[int, DirectoryEntry]]: `(depth, entry)` pairs in pre-order
    """
    if not is_directory(root):
        return
    key = _directory_key(root)
    if key is None:
        return
    if key in _ancestors:
        logger.warning("Skipping %s: symlink cycle", root)
        return
    ancestors = _ancestors | {key}
    for entry in list_entries(root):
        yield depth, entry
        if entry.is_dir:
            yield from walk_entries(entry.path, depth + 1, ancestors)


def collect_files(root: Path) -> list[Path]:
    """Collect every regular file reachable from `root`.

    Args:
        root (Path): a directory or a regular file

    Returns:
        list[Path]: `[root]` for a regular file, the depth-first sorted flattening
            of all files for a directory, and `[]` for a missing path
    """
    if not exists(root):
        return []
    if is_directory(root):
        return [entry.path for _, entry in walk_entries(root) if not entry.is_dir]
    if is_regular_file(root):
        return [root]
    return []


def print_structure(root: Path, depth: int = 0) -> list[str]:
    """Render the directory tree under `root` as indented lines.

    Each level is indented by two spaces and directories carry a trailing `/`.
    The order matches `collect_files`.

    Args:
        root (Path): the directory to render
        depth (int): the indentation level of the direct children of `root`

    Returns:
        list[str]: one line per entry, without line terminators
    """
    return [
        "  " * level + entry.name + ("/" if entry.is_dir else "")
        for level, entry in walk_entries(root, depth)
    ]


def read_file_head(path: Path, max_bytes: int = MAX_BYTES) -> FileContent:
    """Read a file, keeping at most `max_bytes` bytes.

    Args:
        path (Path): the file to read
        max_bytes (int): the largest size that is read in full

    Returns:
        FileContent: the bytes read and whether they were truncated;
            `readable` is False when the file could not be opened
    """
    try:
        size = path.stat().st_size
    except OSError:
        size = 0

    try:
        with path.open("rb") as f:
            data = f.read() if size <= max_bytes else f.read(max_bytes)
    except OSError as e:
        logger.warning("Could not open file %s: %s", path, e)
        return FileContent(size=size, readable=False)

    return FileContent(data=data, size=size, truncated=size > max_bytes)
