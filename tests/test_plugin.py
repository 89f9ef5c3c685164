# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Test pytest plugin: options, registration of the listener and complete runs."""

from __future__ import annotations

import json
import logging
from logging import Logger, getLogger
from pathlib import Path

from pytest import Config, ExitCode, MonkeyPatch, Pytester, UsageError, fixture, raises

from speccov.console import ConsoleIO
from speccov.listener import CodeCoverageListener
from speccov.plugin import _to_dict, get_options
from speccov.report import HtmlReport, TextReport

SOURCE: str = """
def add(a, b):
    return a + b


def sub(a, b):
    return a - b
"""

TESTS: str = """
from calc import add


def test_add():
    assert add(1, 2) == 3


class TestAdd:
    def test_negative(self):
        assert add(-1, -2) == -3
"""


@fixture(name="project")
def project_fixture(pytester: Pytester) -> Pytester:
    """Project with ``src/calc.py`` module and tests for it."""
    pytester.mkdir("src")
    (pytester.path / "src" / "calc.py").write_text(SOURCE)
    pytester.makepyfile(test_calc=TESTS)
    pytester.makeini("[pytest]\npythonpath = src\n")

    return pytester


def _listener(config: Config) -> CodeCoverageListener | None:
    return config.pluginmanager.get_plugin("speccov_listener")


def test_to_dict() -> None:
    assert _to_dict(["html=build/html", " xml = coverage.xml "]) == {
        "html": "build/html",
        "xml": "coverage.xml",
    }

    with raises(UsageError, match="Invalid value 'html', expecting NAME=VALUE"):
        _to_dict(["html"])


def test_disabled_by_default(pytester: Pytester) -> None:
    config: Config = pytester.parseconfigure()

    assert _listener(config) is None


def test_enabled_with_defaults(pytester: Pytester) -> None:
    config: Config = pytester.parseconfigure("--speccov")
    listener: CodeCoverageListener | None = _listener(config)

    assert listener is not None
    assert listener.options.whitelist == ("src", "lib")
    assert listener.options.blacklist == ("test", "vendor", "spec")
    assert dict(listener.options.output) == {"html": "coverage"}
    assert listener.options.format == ("html",)
    assert isinstance(listener._reports["html"], HtmlReport)


def test_options_from_command_line(pytester: Pytester) -> None:
    config: Config = pytester.parseconfigure(
        "--speccov",
        "--speccov-whitelist",
        "app",
        "directory=lib prefix=mod_",
        "--speccov-format",
        "text",
        "html",
        "--speccov-output",
        "html=build/html",
        "--speccov-lower-upper-bound",
        "40",
    )
    options = get_options(config)

    assert options.whitelist == ("app", {"directory": "lib", "prefix": "mod_"})
    assert options.format == ("text", "html")
    assert dict(options.output) == {"html": "build/html"}
    assert options.lower_upper_bound == 40
    assert options.high_lower_bound == 90

    listener = _listener(config)

    assert listener is not None
    assert list(listener._reports) == ["text", "html"]
    assert isinstance(listener._reports["text"], TextReport)


def test_options_from_configuration_file(pytester: Pytester) -> None:
    pytester.makeini(
        """
        [pytest]
        speccov = true
        speccov_blacklist =
            tests
            directory=src suffix=_spec.py
        speccov_format = xml
        speccov_output = xml=build/coverage.xml
        """
    )
    config: Config = pytester.parseconfigure()
    listener = _listener(config)

    assert listener is not None
    assert listener.options.blacklist == ("tests", {"directory": "src", "suffix": "_spec.py"})
    assert listener.options.format == ("xml",)
    assert dict(listener.options.output) == {"xml": "build/coverage.xml"}


def test_options_from_environment(pytester: Pytester, monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("SPECCOV", "1")
    monkeypatch.setenv("SPECCOV_FORMAT", "json,lcov")

    config: Config = pytester.parseconfigure()
    listener = _listener(config)

    assert listener is not None
    assert listener.options.format == ("json", "lcov")


def test_unknown_format(pytester: Pytester) -> None:
    with raises(UsageError, match="Unknown coverage report format 'clover'"):
        pytester.parseconfigure("--speccov", "--speccov-format", "clover")


def test_html_and_text_reports(project: Pytester) -> None:
    result = project.runpytest_subprocess(
        "--speccov", "--speccov-format", "text", "html", "-v"
    )

    result.assert_outcomes(passed=2)
    result.stdout.fnmatch_lines(
        [
            "Generating code coverage report in text format ...",
            "*src/calc.py*",
            "TOTAL*",
            "Generating code coverage report in html format ...",
        ]
    )
    assert (project.path / "coverage" / "index.html").is_file()


def test_json_report_destination(project: Pytester) -> None:
    result = project.runpytest_subprocess(
        "--speccov",
        "--speccov-format",
        "json",
        "--speccov-output",
        "json=build/coverage.json",
    )

    result.assert_outcomes(passed=2)

    report: Path = project.path / "build" / "coverage.json"

    assert list(json.loads(report.read_text())["files"]) == ["src/calc.py"]


def test_no_coverage(project: Pytester) -> None:
    result = project.runpytest_subprocess("--speccov", "--no-coverage", "-v")

    result.assert_outcomes(passed=2)
    result.stdout.fnmatch_lines(["Skipping code coverage generation"])
    assert not (project.path / "coverage").exists()


def test_invalid_directory_spec(project: Pytester) -> None:
    result = project.runpytest_subprocess(
        "--speccov", "--speccov-whitelist", "suffix=.py"
    )

    assert result.ret == ExitCode.INTERNAL_ERROR
    result.stdout.fnmatch_lines(["INTERNALERROR>*ConfigurationError: Missing required directory path.*"])


def test_console(pytester: Pytester) -> None:
    config: Config = pytester.parseconfigure("-v", "--color=yes")
    io = ConsoleIO(config)

    assert io.is_verbose()
    assert io.is_decorated()

    config = pytester.parseconfigure("--color=no")
    io = ConsoleIO(config)

    assert not io.is_verbose()
    assert not io.is_decorated()


def test_log_level(pytester: Pytester, monkeypatch: MonkeyPatch) -> None:
    logger: Logger = getLogger("speccov")
    monkeypatch.setattr(logger, "level", logging.NOTSET)

    pytester.parseconfigure("--speccov-log-level", "debug")

    assert logger.level == logging.DEBUG


def test_fully_covered_module(pytester: Pytester) -> None:
    """Lines executed while importing the module during collection are measured too."""
    pytester.mkdir("src")
    (pytester.path / "src" / "calc.py").write_text("def add(a, b):\n    return a + b\n")
    pytester.makepyfile(
        test_calc="from calc import add\n\n\ndef test_add():\n    assert add(1, 2) == 3\n"
    )
    pytester.makeini("[pytest]\npythonpath = src\n")

    result = pytester.runpytest_subprocess(
        "--speccov", "--speccov-format", "text", "--speccov-show-missing"
    )

    result.assert_outcomes(passed=1)
    result.stdout.fnmatch_lines(["src/calc.py*2*0*100%*"])


def test_module_not_imported_by_tests(project: Pytester) -> None:
    """Whitelisted module that never executed is reported as not covered."""
    project.makepyfile(test_calc="def test_nothing():\n    pass\n")

    result = project.runpytest_subprocess("--speccov", "--speccov-format", "text", "json")

    assert result.ret == ExitCode.OK
    result.assert_outcomes(passed=1)
    result.stdout.fnmatch_lines(["src/calc.py*0%"])

    report = json.loads((project.path / "coverage.json").read_text())

    assert report["files"]["src/calc.py"]["summary"]["covered_lines"] == 0


def test_nothing_whitelisted(pytester: Pytester) -> None:
    pytester.makepyfile(test_app="def test_app():\n    pass\n")

    result = pytester.runpytest_subprocess("--speccov")

    assert result.ret == ExitCode.OK
    result.assert_outcomes(passed=1)
