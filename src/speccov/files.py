# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Enumerating source files for the coverage filter."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

PathLike = str | os.PathLike[str]


def _as_paths(roots: PathLike | Iterable[PathLike]) -> list[Path]:
    if isinstance(roots, (str, os.PathLike)):
        return [Path(roots)]

    return [Path(root) for root in roots]


def _is_excluded(path: Path, excludes: Iterable[Path]) -> bool:
    return any(path == exclude or exclude in path.parents for exclude in excludes)


def _walk(directory: Path) -> Iterable[Path]:
    for dirpath, _, filenames in os.walk(directory):
        for filename in filenames:
            yield Path(dirpath, filename)


def get_files(
    roots: PathLike | Iterable[PathLike],
    suffix: str = "",
    prefix: str = "",
    exclude: Iterable[PathLike] = (),
) -> list[str]:
    """Get files from provided directories matching given filters.

    Directories are walked recursively and only files whose names start with ``prefix``
    and end with ``suffix`` are kept. Roots pointing at files are kept as they are.
    Roots that don't exist are ignored.

    Args:
        roots: Directory or file, or list of them.
        suffix: Required ending of file names.
        prefix: Required beginning of file names.
        exclude: Files and directories to leave out, including everything under excluded directories.

    Returns:
        Sorted list of unique and absolute file paths.
    """
    excludes: list[Path] = [Path(path).resolve() for path in exclude]
    result: set[str] = set()

    for root in _as_paths(roots):
        if root.is_file():
            candidates: Iterable[Path] = (root,)
        elif root.is_dir():
            candidates = (
                path
                for path in _walk(root)
                if path.name.startswith(prefix) and path.name.endswith(suffix)
            )
        else:
            continue

        for candidate in candidates:
            path: Path = candidate.resolve()

            if not _is_excluded(path, excludes):
                result.add(str(path))

    return sorted(result)
