# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Specification of speccov hook functions."""

from __future__ import annotations

from pytest import Config, hookspec

from speccov.config import CoverageOptions
from speccov.engine import CoverageEngine
from speccov.report import Report


@hookspec(firstresult=True)
def pytest_speccov_make_engine(config: Config) -> CoverageEngine | None:
    """Create new instance of :py:class:`speccov.engine.CoverageEngine`.

    .. note::

        Any conftest file can implement this hook. Stops at first non-None result.

    Args:
        config: The pytest configuration object.

    Returns:
        New coverage engine.
    """


@hookspec(firstresult=True)
def pytest_speccov_make_reports(
    config: Config, options: CoverageOptions
) -> dict[str, Report] | None:
    """Create reports for enabled report formats.

    .. note::

        Any conftest file can implement this hook. Stops at first non-None result.

    Args:
        config: The pytest configuration object.
        options: Coverage options with enabled formats.

    Returns:
        Reports keyed by format name, in order of generation.
    """
