# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Pytest plugin measuring code coverage of tests and rendering coverage reports."""

from __future__ import annotations

from collections.abc import Iterable

from pytest import Config, Parser, PytestPluginManager, UsageError, hookimpl

from speccov import _logging, hookspecs
from speccov.config import CoverageOptions
from speccov.console import ConsoleIO
from speccov.engine import CoverageEngine
from speccov.exceptions import ConfigurationError
from speccov.filters import parse_directory_spec
from speccov.listener import CodeCoverageListener
from speccov.option import Option, add_options_to_parser, populate_ini_to_options
from speccov.report import REPORTS, Report, make_reports

_DEFAULTS = CoverageOptions()


def _to_dict(items: Iterable[str]) -> dict[str, str]:
    """Convert list of items into dictionary.

    Args:
        items: List of items in form of ``NAME=VALUE``.

    Returns:
        List of items as dictionary.

    Raises:
        :exc:`pytest.UsageError`: Item without ``=``.
    """
    result: dict[str, str] = {}

    for item in items:
        name, separator, value = item.partition("=")

        if not separator or not name.strip():
            raise UsageError(f"Invalid value {item!r}, expecting NAME=VALUE")

        result[name.strip()] = value.strip()

    return result


_OPTIONS: tuple[Option, ...] = (
    Option(
        "speccov",
        action="store_true",
        description="Measure code coverage of tests and generate coverage reports.",
    ),
    Option(
        "no_coverage",
        action="store_true",
        environment="SPECCOV_NO_COVERAGE",
        description="""
            Skip code coverage even when enabled with --speccov, for example to speed up a local run.
            Nothing is measured and no reports are generated.
        """,
    ),
    Option(
        "speccov_whitelist",
        nargs="*",
        metavar="SPEC",
        default=list(_DEFAULTS.whitelist),
        description="""
            Directories with source files to measure. Each entry is either a path or a list of
            NAME=VALUE tokens with required 'directory' and optional 'prefix' and 'suffix' of file names,
            like 'directory=src suffix=.py'.
        """,
    ),
    Option(
        "speccov_blacklist",
        nargs="*",
        metavar="SPEC",
        default=list(_DEFAULTS.blacklist),
        description="Directories with source files to leave out, in the same format as --speccov-whitelist.",
    ),
    Option(
        "speccov_whitelist_files",
        nargs="*",
        metavar="PATH",
        default=[],
        description="Additional files to measure.",
    ),
    Option(
        "speccov_blacklist_files",
        nargs="*",
        metavar="PATH",
        default=[],
        description="Additional files to leave out.",
    ),
    Option(
        "speccov_format",
        nargs="*",
        metavar="FORMAT",
        default=list(_DEFAULTS.format),
        description=f"Formats of generated coverage reports, one of {(*REPORTS,)}.",
    ),
    Option(
        "speccov_output",
        nargs="*",
        metavar="FORMAT=PATH",
        default=[f"{name}={path}" for name, path in _DEFAULTS.output.items()],
        description="""
            Destination of coverage report per format: a directory for the html format and a file for others.
            Formats without destination are written to coverage.<format>.
        """,
    ),
    Option(
        "speccov_branch",
        action="store_true",
        description="Measure branch coverage in addition to statement coverage.",
    ),
    Option(
        "speccov_show_missing",
        action="store_true",
        description="Show line numbers of statements that weren't executed in text reports.",
    ),
    Option(
        "speccov_lower_upper_bound",
        metavar="PERCENT",
        type=int,
        default=_DEFAULTS.lower_upper_bound,
        description="Coverage below this percentage is marked as low in colored text reports.",
    ),
    Option(
        "speccov_high_lower_bound",
        metavar="PERCENT",
        type=int,
        default=_DEFAULTS.high_lower_bound,
        description="Coverage from this percentage is marked as high in colored text reports.",
    ),
    Option(
        "speccov_log_level",
        choices=("debug", "info", "warning", "error", "critical"),
        description="""
            The default log level of all "speccov" Python loggers. The default is unset, which means that the log
            level is inherited from the root logger.
        """,
    ),
)


def get_options(config: Config) -> CoverageOptions:
    """Build coverage options from command line arguments and configuration files.

    Args:
        config: The pytest configuration object.

    Returns:
        Coverage options.
    """
    option = config.option

    return _DEFAULTS.merge(
        {
            "whitelist": [parse_directory_spec(line) for line in option.speccov_whitelist],
            "blacklist": [parse_directory_spec(line) for line in option.speccov_blacklist],
            "whitelist_files": option.speccov_whitelist_files,
            "blacklist_files": option.speccov_blacklist_files,
            "output": _to_dict(option.speccov_output),
            "format": option.speccov_format,
            "lower_upper_bound": option.speccov_lower_upper_bound,
            "high_lower_bound": option.speccov_high_lower_bound,
            "show_missing": option.speccov_show_missing,
        }
    )


def pytest_addoption(parser: Parser, pluginmanager: PytestPluginManager) -> None:
    add_options_to_parser(parser, "speccov", _OPTIONS)


def pytest_addhooks(pluginmanager: PytestPluginManager) -> None:
    """Called at plugin registration time to add specification of speccov hooks.

    Args:
        pluginmanager: The pytest plugin manager.
    """
    pluginmanager.add_hookspecs(hookspecs)


@hookimpl(trylast=True)
def pytest_speccov_make_engine(config: Config) -> CoverageEngine:
    """Create new in-memory coverage engine.

    Args:
        config: The pytest configuration object.

    Returns:
        New coverage engine.
    """
    return CoverageEngine(branch=config.option.speccov_branch)


@hookimpl(trylast=True)
def pytest_speccov_make_reports(
    config: Config, options: CoverageOptions
) -> dict[str, Report]:
    return make_reports(options)


@hookimpl(tryfirst=True)
def pytest_configure(config: Config) -> None:
    populate_ini_to_options(config, _OPTIONS)
    _logging.configure(config)

    option = config.option

    if not option.speccov:
        return

    try:
        options: CoverageOptions = get_options(config)
        reports: dict[str, Report] = config.hook.pytest_speccov_make_reports(
            config=config, options=options
        )
    except ConfigurationError as e:
        raise UsageError(str(e)) from e

    engine: CoverageEngine = config.hook.pytest_speccov_make_engine(config=config)

    config.pluginmanager.register(
        CodeCoverageListener(
            ConsoleIO(config),
            engine,
            reports,
            skip_coverage=option.no_coverage,
            options=options,
        ),
        "speccov_listener",
    )
