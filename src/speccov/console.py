# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Terminal output used by the coverage listener."""

from __future__ import annotations

import sys

from pytest import Config, TerminalReporter


class ConsoleIO:
    """Write lines to the pytest terminal, respecting verbosity and markup settings."""

    def __init__(self, config: Config) -> None:
        """Create new console.

        Args:
            config: The pytest configuration object.
        """
        self._config: Config = config

    @property
    def _reporter(self) -> TerminalReporter | None:
        # Missing when pytest was invoked with -p no:terminal
        return self._config.pluginmanager.get_plugin("terminalreporter")

    def is_verbose(self) -> bool:
        return self._config.get_verbosity() > 0

    def is_decorated(self) -> bool:
        return self._config.get_terminal_writer().hasmarkup

    def write_line(self, line: str = "") -> None:
        reporter: TerminalReporter | None = self._reporter

        if reporter is None:
            sys.stdout.write(line + "\n")
        else:
            reporter.write_line(line)
