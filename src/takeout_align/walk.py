"""Sorted recursive file traversal.

Entries of each directory are visited in lexical order, and a
subdirectory is descended into where its name falls in that order
(``a/x.yml`` before ``b.yml``), so a pass over the same tree always
processes files in the same sequence. Symlinked directories are not
followed. Scan failures surface as FileOperationError.
"""

import os
from collections.abc import Iterator
from pathlib import Path

from loguru import logger

from .errors import FileOperationError, wrap_os_error
from .paths import split_ext

log = logger.bind(stage="walk")


def _sorted_entries(directory: Path) -> list[os.DirEntry]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as e:
        raise wrap_os_error(directory, "scan", e) from e


def _walk(directory: Path) -> Iterator[Path]:
    for entry in _sorted_entries(directory):
        path = Path(entry.path)
        try:
            is_dir = entry.is_dir(follow_symlinks=False)
        except OSError as e:
            raise wrap_os_error(path, "stat", e) from e
        if is_dir:
            yield from _walk(path)
        else:
            yield path


def iter_files(root: Path, extension: str | None = None) -> Iterator[Path]:
    """Yield every file under root, optionally only those ending in extension.

    The extension match is exact and case-sensitive against the final
    suffix (".json" matches "a.heic.json" but not "a.JSON").
    """
    if not root.is_dir():
        raise FileOperationError(root, "scan", "not a directory")

    log.debug(f"Walking {root} (extension={extension or '*'})")
    for path in _walk(root):
        if extension is not None and split_ext(path.name)[1] != extension:
            continue
        yield path
