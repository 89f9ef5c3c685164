# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Reading ``SPECCOV_*`` environment variables used as option defaults."""

from __future__ import annotations

import os
from collections.abc import Iterable

TRUE: tuple[str, ...] = ("1", "yes", "y", "on", "true", "enable")
"""Values of an environment variable evaluated as True."""

FALSE: tuple[str, ...] = ("0", "no", "n", "off", "false", "disable")
"""Values of an environment variable evaluated as False."""


def as_str(name: str, default: str | None = None) -> str:
    """Get stripped value of environment variable.

    Args:
        name: Name of environment variable.
        default: Value used when the variable is not set or empty.

    Returns:
        Stripped string of environment variable.
    """
    return os.environ.get(name, "").strip() or default or ""


def as_bool(name: str, default: bool | None = None) -> bool:
    """Convert value of environment variable to boolean (case-insensitive).

    Args:
        name: Name of environment variable.
        default: Value used when the variable is not set or empty.

    Returns:
        True for one of :data:`TRUE`, False for one of :data:`FALSE`.

    Raises:
        :exc:`ValueError` in case of an unexpected value.
    """
    envvar: str = as_str(name)
    value: str = envvar.lower()

    if not value:
        return default or False

    if value in TRUE:
        return True

    if value in FALSE:
        return False

    raise ValueError(
        f"Unexpected value {envvar!r} for environment variable: {name!r}. "
        f"Expecting one of {(*TRUE,)} or {(*FALSE,)} (case-insensitive)"
    )


def as_int(name: str, default: int | None = None) -> int:
    return int(as_str(name) or default or 0)


def as_list(
    name: str, default: Iterable[str] | None = None, separator: str = ","
) -> list[str]:
    """Convert value of environment variable to list of strings.

    Directory specs like ``directory=tests suffix=_test.py`` contain spaces,
    so entries are separated by commas only.

    Args:
        name: Name of environment variable.
        default: Value used when the variable is not set or empty.
        separator: Used separator between values.

    Returns:
        List of stripped and non-empty strings.
    """
    items: list[str] = list(filter(None, map(str.strip, as_str(name).split(separator))))

    return list(items or default or ())
