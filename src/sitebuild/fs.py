"""
File-system plumbing for assembling the output tree.
"""

import os
import shutil
from pathlib import Path
from typing import Iterable, Iterator, Optional

from loguru import logger


def remove_tree(path: Path) -> None:
    """Remove a directory tree; a missing path is not an error."""
    path = Path(path)
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def walk_files(root: Path, current: Optional[Path] = None) -> Iterator[Path]:
    """
    Yield every file below ``root``, depth first.
    Raises FileNotFoundError if ``root`` does not exist, unlike os.walk which
    silently yields nothing.
    """
    current = Path(current or root)
    with os.scandir(current) as entries:
        for entry in sorted(entries, key=lambda e: e.name):
            if entry.is_dir(follow_symlinks=False):
                yield from walk_files(root, Path(entry.path))
            else:
                yield Path(entry.path)


def _copy_entries(src: Path, dest: Path) -> None:
    for path in walk_files(src):
        target = dest / path.relative_to(src)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, target)


def copy_tree(src: Path, dest: Path, native: bool = True) -> None:
    """
    Replace ``dest`` with a deep copy of ``src``.
    Args:
        src: Directory to copy
        dest: Destination, removed first so no stale files survive
        native: Use shutil.copytree; otherwise copy file by file
    """
    src, dest = Path(src), Path(dest)
    remove_tree(dest)
    dest.mkdir(parents=True, exist_ok=True)
    if native:
        shutil.copytree(src, dest, dirs_exist_ok=True)
    else:
        _copy_entries(src, dest)
    logger.debug(f"Copied tree {src} -> {dest}")


def copy_filtered(src: Path, dest: Path, extensions: Iterable[str]) -> int:
    """
    Copy the files of ``src`` whose extension is allowed, keeping relative paths.
    Args:
        src: Directory to walk
        dest: Destination, removed first
        extensions: Allowed suffixes including the dot, e.g. ".html"
    Returns:
        Number of files copied
    """
    src, dest = Path(src), Path(dest)
    allowed = {ext.lower() for ext in extensions}
    remove_tree(dest)

    copied = 0
    for path in walk_files(src):
        if path.suffix.lower() not in allowed:
            continue
        target = dest / path.relative_to(src)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(path, target)
        copied += 1
    logger.debug(f"Copied {copied} file(s) {src} -> {dest}")
    return copied
