# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Coverage engine driven by the coverage listener.

It is a thin layer on top of :py:class:`coverage.Coverage`:

* Files registered in :py:class:`FileFilter` become the ``run:include`` setting
* Tracing runs for the whole session, each test is recorded under own dynamic context
* Files of the filter that never executed are reported as not covered
* Collected data stays in memory unless a data file was requested
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from coverage import Coverage

_logger = logging.getLogger(__name__)


class FileFilter:
    """Ordered set of files that will be measured."""

    def __init__(self) -> None:
        self._files: dict[str, None] = {}

    def include_file(self, path: str) -> None:
        self._files.setdefault(str(path), None)

    def include_files(self, paths: Iterable[str]) -> None:
        for path in paths:
            self.include_file(path)

    def clear(self) -> None:
        self._files.clear()

    def is_empty(self) -> bool:
        return not self._files

    @property
    def files(self) -> tuple[str, ...]:
        return tuple(self._files)


class CoverageEngine:
    """Measure code coverage of a test session, attributed to individual tests."""

    def __init__(
        self,
        coverage: Coverage | None = None,
        *,
        data_file: str | None = None,
        branch: bool = False,
    ) -> None:
        """Create new instance of coverage engine.

        Args:
            coverage: Already created coverage object, new one is created when not provided.
            data_file: Path to coverage data file. Data is kept only in memory when not provided.
            branch: Measure branch coverage in addition to statement coverage.
        """
        if coverage is None:
            coverage = Coverage(data_file=data_file, branch=branch)

        self._coverage: Coverage = coverage
        self._filter = FileFilter()
        self._configured: bool = False
        self._running: bool = False
        self._started: bool = False
        self._warned: bool = False

    @property
    def coverage(self) -> Coverage:
        """Wrapped coverage object, used by reports."""
        return self._coverage

    def filter(self) -> FileFilter:
        return self._filter

    def begin(self) -> None:
        """Start tracing of files in the filter.

        Called once the filter is filled, before tests are collected, so code executed
        while importing measured modules is recorded too.
        """
        if self._filter.is_empty():
            if not self._warned:
                _logger.warning("No files included in coverage filter, nothing will be measured")
                self._warned = True

            return

        if not self._configured:
            # Coverage is reading include patterns only once, when started for the first time
            self._coverage.set_option("run:include", list(self._filter.files))
            self._configured = True

        _logger.debug("Measuring %d files", len(self._filter.files))
        self._coverage.start()
        self._running = True

    def start(self, identifier: str) -> None:
        """Attribute executed lines to provided identifier.

        Args:
            identifier: Name of dynamic context, mostly ``<class>::<test>``.
        """
        if not self._running:
            return

        self._coverage.switch_context(identifier)
        self._started = True
        _logger.debug("Started coverage for %r", identifier)

    def stop(self) -> None:
        """Stop attribution started by the last call of :py:meth:`start`."""
        if not self._started:
            _logger.debug("Coverage was not started, nothing to stop")
            return

        self._coverage.switch_context("")
        self._started = False

    def end(self) -> None:
        """Stop tracing and add files of the filter that never executed to collected data."""
        if self._running:
            self._coverage.stop()
            self._running = False

        if not self._filter.is_empty():
            self._coverage.get_data().touch_files(self._filter.files)
