# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Coverage reports rendered from data collected by :py:class:`coverage.Coverage`.

There are two kinds of reports:

* Textual reports are returning rendered report as string, the listener writes it to the terminal
* Writing reports are writing the rendered report to a destination (file or directory) on their own
"""

from __future__ import annotations

import io
import logging
import re
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import ClassVar

from coverage import Coverage

from speccov._ANSI import ANSI
from speccov.config import CoverageOptions
from speccov.exceptions import ConfigurationError

_logger = logging.getLogger(__name__)

_PERCENT = re.compile(r"\s(\d+(?:\.\d+)?)%")


class ReportKind(Enum):
    TEXTUAL = "textual"
    WRITING = "writing"


class Report(ABC):
    """Base of all coverage reports."""

    name: ClassVar[str]
    kind: ClassVar[ReportKind]


class TextualReport(Report):
    kind = ReportKind.TEXTUAL

    @abstractmethod
    def process(self, coverage: Coverage, decorated: bool = False) -> str:
        """Render report as string.

        Args:
            coverage: Coverage object with collected data.
            decorated: Allow ANSI escape codes in rendered report.

        Returns:
            Rendered report.
        """


class WritingReport(Report):
    kind = ReportKind.WRITING

    default_destination: ClassVar[str]
    """Destination used when none was configured for the report format."""

    @abstractmethod
    def process(self, coverage: Coverage, destination: str | Path) -> None:
        """Render report to provided destination.

        Args:
            coverage: Coverage object with collected data.
            destination: Path to file or directory, depending on report format.
        """


class TextReport(TextualReport):
    """Plain text table, rows are colored by coverage level when decorated."""

    name = "text"
    output_format: ClassVar[str] = "text"

    def __init__(
        self,
        lower_upper_bound: int = 50,
        high_lower_bound: int = 90,
        show_missing: bool = False,
    ) -> None:
        self.lower_upper_bound: int = lower_upper_bound
        self.high_lower_bound: int = high_lower_bound
        self.show_missing: bool = show_missing

    def process(self, coverage: Coverage, decorated: bool = False) -> str:
        buffer = io.StringIO()
        total: float = coverage.report(
            file=buffer,
            show_missing=self.show_missing,
            output_format=self.output_format,
        )
        _logger.debug("Total coverage: %.2f%%", total)
        text: str = buffer.getvalue().rstrip("\n")

        if not decorated:
            return text

        return "\n".join(self._colorize(line) for line in text.splitlines())

    def _colorize(self, line: str) -> str:
        match = _PERCENT.search(line)

        if not match:
            return line

        percent = float(match.group(1))

        if percent < self.lower_upper_bound:
            color: ANSI = ANSI.COLOR_LOW
        elif percent < self.high_lower_bound:
            color = ANSI.COLOR_MEDIUM
        else:
            color = ANSI.COLOR_HIGH

        return f"{color}{line}{ANSI.DEFAULT_FG}"


class MarkdownReport(TextReport):
    """Markdown table, useful for job summaries of CI systems."""

    name = "markdown"
    output_format = "markdown"

    def process(self, coverage: Coverage, decorated: bool = False) -> str:
        # Escape codes would break the markdown table
        return super().process(coverage, decorated=False)


class HtmlReport(WritingReport):
    name = "html"
    default_destination = "coverage"

    def process(self, coverage: Coverage, destination: str | Path) -> None:
        total: float = coverage.html_report(directory=str(destination))
        _logger.debug("HTML report written to %s (%.2f%%)", destination, total)


class XmlReport(WritingReport):
    """Cobertura XML report."""

    name = "xml"
    default_destination = "coverage.xml"

    def process(self, coverage: Coverage, destination: str | Path) -> None:
        total: float = coverage.xml_report(outfile=str(destination))
        _logger.debug("XML report written to %s (%.2f%%)", destination, total)


class JsonReport(WritingReport):
    name = "json"
    default_destination = "coverage.json"

    def process(self, coverage: Coverage, destination: str | Path) -> None:
        total: float = coverage.json_report(outfile=str(destination))
        _logger.debug("JSON report written to %s (%.2f%%)", destination, total)


class LcovReport(WritingReport):
    name = "lcov"
    default_destination = "coverage.lcov"

    def process(self, coverage: Coverage, destination: str | Path) -> None:
        total: float = coverage.lcov_report(outfile=str(destination))
        _logger.debug("LCOV report written to %s (%.2f%%)", destination, total)


REPORTS: dict[str, type[Report]] = {
    report.name: report
    for report in (
        HtmlReport,
        XmlReport,
        JsonReport,
        LcovReport,
        TextReport,
        MarkdownReport,
    )
}
"""Available reports by format name."""


def make_report(name: str, options: CoverageOptions) -> Report:
    """Create report for given format.

    Args:
        name: Name of report format.
        options: Coverage options, textual reports are using thresholds from them.

    Returns:
        New report.

    Raises:
        :exc:`~speccov.exceptions.ConfigurationError`: Unknown report format.
    """
    cls: type[Report] | None = REPORTS.get(name)

    if cls is None:
        raise ConfigurationError(
            f"Unknown coverage report format {name!r}. Expecting one of {(*REPORTS,)}"
        )

    if issubclass(cls, TextReport):
        return cls(
            lower_upper_bound=options.lower_upper_bound,
            high_lower_bound=options.high_lower_bound,
            show_missing=options.show_missing,
        )

    return cls()


def make_reports(options: CoverageOptions) -> dict[str, Report]:
    """Create reports for all enabled formats, keeping their order."""
    return {name: make_report(name, options) for name in options.format}
