# Copyright speccov contributors
# Licensed under the Revised BSD License, see LICENSE for details.
# SPDX-License-Identifier: BSD-3-Clause

"""Generic option used as command line argument, entry in configuration file and environment variable."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Literal

from pytest import Config, OptionGroup, Parser

from speccov import _env

IniType = Literal["string", "linelist", "bool"]


class Option:
    """Representation of single speccov option that can be set from
    configuration file, environment variable or command line."""

    def __init__(
        self,
        name: str,
        description: str,
        default: object | None = None,
        environment: str | None = None,
        **kwargs: object,
    ) -> None:
        """Create new instance of single option.

        Args:
            name: Name of option, also used as name of entry in configuration file.
            description: Help description of option.
            default: Default value for option.
            environment: Name of environment variable, upper-cased name by default.
            kwargs: Additional name arguments passed to :py:func:`argparse.ArgumentParser.add_argument`.
        """
        self.name: str = name
        self.description: str = description
        self.extra: dict[str, Any] = dict(kwargs)
        self.default: Any = default
        self.environment: str = environment if environment else name.upper()

    @property
    def argument(self) -> str:
        """Command line argument."""
        return "--" + self.name.replace("_", "-")

    def add_to_parser(self, parser: Parser, group: OptionGroup) -> None:
        argument: str = self.argument
        default: Any = self.default
        choices: tuple[str, ...] | None = self.extra.get("choices")
        argtype: type | None = self.extra.get("type")
        action: str | None = self.extra.get("action")
        nargs: str | None = self.extra.get("nargs")
        ini_type: IniType

        # Environment variable set by user overrides default value of option
        if action == "store_true":
            default = _env.as_bool(self.environment, default)
            ini_type = "bool"
        elif nargs:
            default = _env.as_list(self.environment, default)
            ini_type = "linelist"
        elif argtype is int:
            # Stored as string in configuration file, converted in populate_ini_to_options
            default = str(_env.as_int(self.environment, default))
            ini_type = "string"
        elif choices:
            default = _env.as_str(self.environment, default).lower()
            ini_type = "string"

            if default and default not in choices:
                raise ValueError(
                    f"Invalid value '{default}' for environment variable {self.environment}. "
                    f"Expecting one of {(*choices,)}"
                )
        else:
            default = _env.as_str(self.environment, default)
            ini_type = "string"

        # Add option entry to configuration files (pyproject.toml, pytest.ini, ...)
        parser.addini(
            self.name,
            help=f"Default value for {argument}",
            type=ini_type,
            default=default,
        )

        # Command line argument is None when not provided, then value from configuration file is used
        group.addoption(
            argument,
            dest=self.name,
            help=(
                f"{self.description}\n"
                f"Environment variable: {self.environment}\n"
                f"Default: {default}"
            ),
            **self.extra,
        )


def add_options_to_parser(parser: Parser, name: str, options: Iterable[Option]) -> None:
    """Add options to parser.

    Args:
        parser:  Pytest parser.
        name:    Name of group for options.
        options: List of options to be added to parser.
    """
    group: OptionGroup = parser.getgroup(name, description=f"{name} options")

    for option in options:
        option.add_to_parser(parser, group)


def populate_ini_to_options(config: Config, options: Iterable[Option]) -> None:
    """Populate values from configuration files to command line options.

    Args:
        config: The pytest configuration object.
        options: List of options.
    """
    for option in options:
        value: Any = config.getoption(option.name)

        if value is None or value is False:
            value = config.getini(option.name)

            if option.extra.get("type") is int:
                value = int(value)

            setattr(config.option, option.name, value)
