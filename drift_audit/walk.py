"""Lazy directory-tree traversal."""

from __future__ import annotations

import logging
import os
from collections.abc import Collection, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

_DirKey = tuple[int, int]


def iter_files(root: Path, *, skip_dirs: Collection[str] = ()) -> Iterator[Path]:
    """Yield regular files under root depth-first, in name order.

    Directories whose name is in ``skip_dirs`` are not entered. Only directory
    names are matched; a file named like a skipped directory is still yielded.
    Symlinked directories are followed unless they point back at a directory
    already on the current path. Unreadable directories are skipped.
    """
    root_key = _dir_key(root)
    if root_key is None:
        return

    stack = [(_list_entries(root), root_key)]
    ancestors = {root_key}
    while stack:
        entries, key = stack[-1]
        entry = next(entries, None)
        if entry is None:
            stack.pop()
            ancestors.discard(key)
            continue

        if _is_dir(entry):
            if entry.name in skip_dirs:
                continue
            child_key = _dir_key(entry)
            if child_key is None or child_key in ancestors:
                logger.debug("not descending into %s", entry.path)
                continue
            ancestors.add(child_key)
            stack.append((_list_entries(Path(entry.path)), child_key))
        elif _is_file(entry):
            yield Path(entry.path)


def _list_entries(directory: Path) -> Iterator[os.DirEntry[str]]:
    try:
        with os.scandir(directory) as scanner:
            entries = sorted(scanner, key=lambda item: item.name)
    except OSError as exc:
        logger.debug("skipping unreadable directory %s: %s", directory, exc)
        return iter(())
    return iter(entries)


def _dir_key(target: Path | os.DirEntry[str]) -> _DirKey | None:
    try:
        info = target.stat()
    except OSError:
        return None
    return (info.st_dev, info.st_ino)


def _is_dir(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_dir()
    except OSError:
        return False


def _is_file(entry: os.DirEntry[str]) -> bool:
    try:
        return entry.is_file()
    except OSError:
        return False
