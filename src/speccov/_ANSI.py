# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

from enum import StrEnum

_ESCAPE = "\033["


class ANSI(StrEnum):
    """ANSI escape codes for coloring rows of textual coverage reports.

    Use ``DEFAULT_FG`` to reset the coloring to the default foreground color.
    """

    DEFAULT_FG = _ESCAPE + "39m"

    RED_FG = _ESCAPE + "31m"
    GREEN_FG = _ESCAPE + "32m"
    YELLOW_FG = _ESCAPE + "33m"

    COLOR_LOW = RED_FG
    COLOR_MEDIUM = YELLOW_FG
    COLOR_HIGH = GREEN_FG
