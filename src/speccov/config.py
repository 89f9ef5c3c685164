# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Coverage options shared by the listener and the report factory."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from speccov.exceptions import ConfigurationError
from speccov.filters import DirectoryOption


def _frozen(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class CoverageOptions:
    """Options of the coverage listener.

    Every field has a default. Use :meth:`merge` to override some of them,
    supplied values replace defaults as a whole, nested values are not merged.
    """

    whitelist: Sequence[DirectoryOption] = ("src", "lib")
    """Directory specs with source files that will be measured."""

    blacklist: Sequence[DirectoryOption] = ("test", "vendor", "spec")
    """Directory specs with source files that will not be measured."""

    whitelist_files: Sequence[str] = ()
    """Additional files that will be measured."""

    blacklist_files: Sequence[str] = ()
    """Additional files that will not be measured."""

    output: Mapping[str, str] = field(
        default_factory=lambda: _frozen({"html": "coverage"})
    )
    """Destination (directory or file) of report per format."""

    format: Sequence[str] = ("html",)
    """Enabled report formats, in order of generation."""

    lower_upper_bound: int = 50
    """Coverage percentage below which text report marks a row as low."""

    high_lower_bound: int = 90
    """Coverage percentage from which text report marks a row as high."""

    show_missing: bool = False
    """Show line numbers of statements that weren't executed in text reports."""

    def __post_init__(self) -> None:
        # Accept lists and dicts from callers, keep instances immutable
        object.__setattr__(self, "whitelist", tuple(self.whitelist))
        object.__setattr__(self, "blacklist", tuple(self.blacklist))
        object.__setattr__(self, "whitelist_files", tuple(self.whitelist_files))
        object.__setattr__(self, "blacklist_files", tuple(self.blacklist_files))
        object.__setattr__(self, "format", tuple(self.format))
        object.__setattr__(self, "output", _frozen(self.output))

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(item.name for item in dataclasses.fields(cls))

    def merge(self, options: Mapping[str, Any]) -> CoverageOptions:
        """Create new options with provided values replacing current ones.

        Args:
            options: New values, keyed by option name.

        Returns:
            New instance of options.

        Raises:
            :exc:`~speccov.exceptions.ConfigurationError`: Unknown option name.
        """
        unknown: list[str] = [name for name in options if name not in self.names()]

        if unknown:
            raise ConfigurationError(
                f"Unknown coverage options: {', '.join(sorted(unknown))}. "
                f"Expecting one of {self.names()}"
            )

        return dataclasses.replace(self, **options)

    def destination(self, name: str, default: str | None = None) -> str | None:
        """Get configured destination of report in given format."""
        return self.output.get(name, default)
