# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Internal speccov plugin called ``speccov_listener``.

It toggles the coverage engine around pytest lifecycle events:

* Session start: resolving whitelist and blacklist into files measured by the engine, start of tracing
* Test setup: attributing measured code to the test
* Test teardown: stopping attribution
* Session finish: end of tracing, rendering enabled coverage reports

All hooks are called last, after other plugins completed own setup and teardown.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from coverage.exceptions import NoDataError
from pytest import ExitCode, Item, Session, hookimpl

from speccov.config import CoverageOptions
from speccov.engine import CoverageEngine
from speccov.files import get_files
from speccov.filters import DirectorySpec, resolve_directory_spec
from speccov.report import Report, ReportKind

_logger = logging.getLogger(__name__)


class IO(Protocol):
    def is_verbose(self) -> bool: ...

    def is_decorated(self) -> bool: ...

    def write_line(self, line: str = "") -> None: ...


def get_example_name(item: Item) -> str:
    """Get identifier of test used as name of coverage context.

    Args:
        item: Test item.

    Returns:
        Identifier in form of ``<module>.<class>::<test>``.
        Class part is empty for tests defined outside of a class.
    """
    cls: type | None = getattr(item, "cls", None)
    spec: str = f"{cls.__module__}.{cls.__qualname__}" if cls else ""

    return f"{spec}::{item.name}"


class CodeCoverageListener:
    """Drive the coverage engine from pytest hooks."""

    def __init__(
        self,
        io: IO,
        engine: CoverageEngine,
        reports: Mapping[str, Report],
        skip_coverage: bool = False,
        options: CoverageOptions | None = None,
    ) -> None:
        """Create new listener.

        Args:
            io: Output used for reports and informational messages.
            engine: Coverage engine measuring executed code.
            reports: Reports keyed by format name, in order of generation.
            skip_coverage: Don't measure anything and don't generate reports.
            options: Coverage options, defaults are used when not provided.
        """
        self._io: IO = io
        self._engine: CoverageEngine = engine
        self._reports: dict[str, Report] = dict(reports)
        self._skip_coverage: bool = skip_coverage
        self._options: CoverageOptions = options or CoverageOptions()

    @property
    def options(self) -> CoverageOptions:
        return self._options

    def set_options(self, options: Mapping[str, Any]) -> None:
        """Override some of the current options, see :py:meth:`CoverageOptions.merge`."""
        self._options = self._options.merge(options)

    def get_excludes(self) -> list[str]:
        """Resolve blacklist into list of excluded files and directories.

        Directory specs filtered by prefix or suffix are expanded to matching files,
        other directories are excluded as a whole.
        """
        excludes: list[str] = list(self._options.blacklist_files)

        for option in self._options.blacklist:
            spec: DirectorySpec = resolve_directory_spec(option)

            if spec.is_filtered:
                for path in get_files(spec.directory, spec.suffix, spec.prefix):
                    if path not in excludes:
                        excludes.append(path)
            else:
                excludes.append(spec.directory)

        return excludes

    def get_includes(self, excludes: list[str]) -> list[str]:
        """Resolve whitelist into list of included files.

        Args:
            excludes: Files and directories left out from whitelisted directories.
        """
        includes: list[str] = []

        for option in self._options.whitelist:
            spec: DirectorySpec = resolve_directory_spec(option)

            includes.extend(
                get_files(
                    [spec.directory, *self._options.whitelist_files],
                    spec.suffix,
                    spec.prefix,
                    excludes,
                )
            )

        return includes

    @hookimpl(trylast=True)
    def pytest_sessionstart(self, session: Session) -> None:
        if self._skip_coverage:
            return

        excludes: list[str] = self.get_excludes()
        _logger.debug("Excluded from coverage: %s", excludes)

        file_filter = self._engine.filter()
        file_filter.clear()
        file_filter.include_files(self.get_includes(excludes))

        self._engine.begin()

    @hookimpl(trylast=True)
    def pytest_runtest_setup(self, item: Item) -> None:
        if self._skip_coverage:
            return

        self._engine.start(get_example_name(item))

    @hookimpl(trylast=True)
    def pytest_runtest_teardown(self, item: Item, nextitem: Item | None) -> None:
        if self._skip_coverage:
            return

        self._engine.stop()

    @hookimpl(trylast=True)
    def pytest_sessionfinish(self, session: Session, exitstatus: int | ExitCode) -> None:
        verbose: bool = self._io.is_verbose()

        if self._skip_coverage:
            if verbose:
                self._io.write_line("Skipping code coverage generation")

            return

        self._engine.end()

        if verbose:
            self._io.write_line()

        for name, report in self._reports.items():
            if verbose:
                self._io.write_line(f"Generating code coverage report in {name} format ...")

            try:
                self._generate(name, report)
            except NoDataError as e:
                _logger.warning("Code coverage report in %s format not generated: %s", name, e)

    def _generate(self, name: str, report: Report) -> None:
        if report.kind is ReportKind.TEXTUAL:
            self._io.write_line(report.process(self._engine.coverage, self._io.is_decorated()))
        else:
            report.process(
                self._engine.coverage,
                self._options.destination(name, report.default_destination),
            )
