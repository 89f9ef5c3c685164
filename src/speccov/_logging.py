# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Everything related with logging."""

from __future__ import annotations

import logging
from logging import getLogger

from pytest import Config

LOGGER_NAME: str = "speccov"


def get_level(name: str) -> int:
    """Get log level based on provided name.

    Args:
        name: Name of log level.

    Returns:
        Integer value of log level.
    """
    return getattr(logging, name.upper(), 0)


def configure(config: Config) -> None:
    """Set level of all "speccov" loggers from ``--speccov-log-level`` option.

    Records are handled by pytest logging plugin (``--log-cli-level``, ``caplog``, ...).
    When the option is unset, the level is inherited from the root logger.
    """
    level: str | None = config.option.speccov_log_level

    if level:
        getLogger(LOGGER_NAME).setLevel(get_level(level))
