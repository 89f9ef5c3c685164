# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Measure code coverage of pytest tests, attributed per test, and render coverage reports.

Enable it with ``pytest --speccov`` or ``speccov = true`` in the pytest configuration file.
"""

from speccov._version import __version__
from speccov.config import CoverageOptions
from speccov.exceptions import ConfigurationError

__all__ = ("ConfigurationError", "CoverageOptions", "__version__")
