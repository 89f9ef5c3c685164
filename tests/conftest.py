# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Configuration and fake collaborators for all tests."""

from __future__ import annotations

from pathlib import Path

from coverage import Coverage
from pytest import fixture

from speccov.engine import FileFilter
from speccov.report import TextualReport, WritingReport

pytest_plugins = ("pytester",)


class FakeIO:
    """Console collecting written lines."""

    def __init__(self, verbose: bool = False, decorated: bool = False) -> None:
        self.verbose: bool = verbose
        self.decorated: bool = decorated
        self.lines: list[str] = []

    def is_verbose(self) -> bool:
        return self.verbose

    def is_decorated(self) -> bool:
        return self.decorated

    def write_line(self, line: str = "") -> None:
        self.lines.append(line)


class FakeEngine:
    """Coverage engine recording calls in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, ...]] = []
        self.coverage: object = object()
        self._filter = FileFilter()

    def filter(self) -> FileFilter:
        self.calls.append(("filter",))
        return self._filter

    def begin(self) -> None:
        self.calls.append(("begin",))

    def start(self, identifier: str) -> None:
        self.calls.append(("start", identifier))

    def stop(self) -> None:
        self.calls.append(("stop",))

    def end(self) -> None:
        self.calls.append(("end",))


class FakeWritingReport(WritingReport):
    name = "fake"
    default_destination = "fake.out"

    def __init__(self) -> None:
        self.calls: list[tuple[object, str | Path]] = []

    def process(self, coverage: Coverage, destination: str | Path) -> None:
        self.calls.append((coverage, destination))


class FakeTextualReport(TextualReport):
    name = "faketext"

    def __init__(self, text: str = "TOTAL 100%") -> None:
        self.text: str = text
        self.calls: list[tuple[object, bool]] = []

    def process(self, coverage: Coverage, decorated: bool = False) -> str:
        self.calls.append((coverage, decorated))
        return self.text


@fixture(name="io")
def io_fixture() -> FakeIO:
    return FakeIO(verbose=True)


@fixture(name="engine")
def engine_fixture() -> FakeEngine:
    return FakeEngine()
