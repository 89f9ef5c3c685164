# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause
from __future__ import annotations


class ConfigurationError(ValueError):
    """Invalid coverage configuration, like a directory spec without a directory."""
