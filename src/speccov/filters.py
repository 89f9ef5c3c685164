# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Whitelist and blacklist directory specifications."""

from __future__ import annotations

import shlex
from collections.abc import Mapping
from dataclasses import dataclass

from speccov.exceptions import ConfigurationError

DEFAULT_SUFFIX: str = ".py"
"""Source file extension used when a directory spec does not set a suffix."""

DEFAULT_PREFIX: str = ""

DirectoryOption = str | Mapping[str, str]


@dataclass(frozen=True)
class DirectorySpec:
    """Directory with optional filters on file name prefix and suffix."""

    directory: str
    prefix: str = DEFAULT_PREFIX
    suffix: str = DEFAULT_SUFFIX

    @property
    def is_filtered(self) -> bool:
        """True when the spec narrows the directory to files matching a non-default prefix or suffix."""
        return self.prefix != DEFAULT_PREFIX or self.suffix != DEFAULT_SUFFIX


def resolve_directory_spec(option: object) -> DirectorySpec:
    """Resolve single entry of whitelist or blacklist into directory spec.

    Args:
        option: Either a path or a mapping with ``directory`` and optional ``prefix`` and ``suffix`` keys.

    Returns:
        Directory spec with defaults applied for missing filters.

    Raises:
        :exc:`~speccov.exceptions.ConfigurationError`: Option is neither a string nor a mapping,
            or the mapping is missing a non-empty directory.
    """
    if isinstance(option, str):
        option = {"directory": option}

    if not isinstance(option, Mapping):
        raise ConfigurationError(
            "Directory filtering options must be a string or a mapping, "
            f"{type(option).__name__} given instead."
        )

    directory = option.get("directory")

    if not directory:
        raise ConfigurationError("Missing required directory path.")

    prefix = option.get("prefix")
    suffix = option.get("suffix")

    return DirectorySpec(
        directory=str(directory),
        prefix=DEFAULT_PREFIX if prefix is None else str(prefix),
        suffix=DEFAULT_SUFFIX if suffix is None else str(suffix),
    )


def parse_directory_spec(line: str) -> DirectoryOption:
    """Parse directory spec written as a single line in configuration file or command line.

    A line made of ``NAME=VALUE`` tokens (shell syntax) becomes a mapping::

        directory=tests prefix=test_ suffix=.py

    Any other line is kept as a plain directory path.

    Args:
        line: Entry from ``speccov_whitelist`` or ``speccov_blacklist``.

    Returns:
        Plain path or mapping, to be resolved by :func:`resolve_directory_spec`.
    """
    tokens: list[str] = shlex.split(line)

    if not tokens or not all("=" in token for token in tokens):
        return line.strip()

    result: dict[str, str] = {}

    for token in tokens:
        name, _, value = token.partition("=")
        result[name.strip()] = value

    return result
