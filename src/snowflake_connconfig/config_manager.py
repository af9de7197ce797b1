#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Callable, Literal, NamedTuple, TypeVar
from warnings import warn

import tomlkit
from tomlkit.items import Table

from .constants import (
    CONFIG_FILE,
    CONNECTIONS_FILE,
    DEFAULT_CONNECTION_NAME,
    ENV_VAR_DEFAULT_CONNECTION_NAME,
)
from .errorcode import ER_INVALID_CONNECTION_NAME
from .errors import (
    ConfigManagerError,
    ConfigSourceError,
    MissingConfigOptionError,
    ProgrammingError,
)

_T = TypeVar("_T")

LOGGER = logging.getLogger(__name__)
READABLE_BY_OTHERS = stat.S_IRGRP | stat.S_IROTH


class ConfigSliceOptions(NamedTuple):
    """Class that defines settings individual configuration files."""

    check_permissions: bool = True
    only_in_slice: bool = False


class ConfigSlice(NamedTuple):
    path: Path
    options: ConfigSliceOptions
    section: str | None


class ConfigOption:
    """ConfigOption represents a flag/setting.

    The class knows how to read the value out of all sources and implements
    order of precedence between them: the environment variable first, then
    the configuration file, then the default if one was given.

    Attributes:
        name: Name of this ConfigOption.
        parse_str: A function that can turn str to the desired type, useful
          for reading value from environmental variable.
        choices: An iterable of all possible values that are allowed for
          this option.
        env_name: Environmental variable value should be read from, if not
          supplied, we'll construct this. False disables reading from
          environmental variable.
        default: Value returned when no source defines the option. The
          sentinel _MISSING makes the option required.
    """

    _MISSING = object()

    def __init__(
        self,
        *,
        name: str,
        parse_str: Callable[[str], _T] | None = None,
        choices: Iterable[Any] | None = None,
        env_name: str | None | Literal[False] = None,
        default: Any = _MISSING,
        _root_manager: ConfigManager,
    ) -> None:
        self.name = name
        self.parse_str = parse_str
        self.choices = choices
        self.env_name = env_name
        self.default = default
        self._root_manager = _root_manager

    def value(self) -> Any:
        """Retrieve a value of option."""
        source = "environment variable"
        loaded_env, value = self._get_env()
        if not loaded_env:
            source = "configuration file"
            try:
                value = self._get_config()
            except MissingConfigOptionError:
                if self.default is ConfigOption._MISSING:
                    raise
                return self.default
        if self.choices and value not in self.choices:
            raise ConfigSourceError(
                f"The value of {self.name} read from "
                f"{source} is not part of {self.choices}"
            )
        return value

    @property
    def default_env_name(self) -> str:
        """The default environmental variable name for this option."""
        return f"SNOWFLAKE_{self.name.upper()}"

    def _get_env(self) -> tuple[bool, Any]:
        """Get value from environment variable if possible.

        Returns whether it was able to load the data and the loaded value
        itself.
        """
        if self.env_name is False:
            return False, None
        env_name = self.env_name if self.env_name is not None else self.default_env_name
        env_var = os.environ.get(env_name)
        if env_var is None:
            return False, None
        loaded_var: Any = env_var
        if env_var and self.parse_str is not None:
            loaded_var = self.parse_str(env_var)
        if isinstance(loaded_var, (Table, tomlkit.TOMLDocument)):
            # If we got a TOML table we probably want it in dictionary form
            return True, loaded_var.unwrap()
        return True, loaded_var

    def _get_config(self) -> Any:
        """Get value from the cached config file."""
        if self._root_manager.conf_file_cache is None:
            self._root_manager.read_config()
        cache = self._root_manager.conf_file_cache
        if self.name not in cache:
            raise MissingConfigOptionError(
                f"Configuration option '{self.name}' is not defined anywhere, "
                "have you forgotten to set it in a configuration file, "
                "or environmental variable?"
            )
        e = cache[self.name]
        if isinstance(e, (Table, tomlkit.TOMLDocument)):
            return e.unwrap()
        return e


class ConfigManager:
    """Read TOML configuration file with managed multi-source precedence.

    The main file is read first, every slice is then read into its own
    section, replacing what the main file had there when the slice asks for
    it. Files readable by group or others, or owned by another user, are
    read with a warning since they may hold passwords.

    Attributes:
        name: The name of the ConfigManager. Used for emitting useful error
          messages.
        file_path: Path to the main TOML file.
        conf_file_cache: Cache to store what we read from the TOML files.
    """

    def __init__(
        self,
        *,
        name: str,
        file_path: Path | None = None,
        _slices: list[ConfigSlice] | None = None,
    ) -> None:
        self.name = name
        self.file_path = file_path
        self._slices = _slices if _slices is not None else list()
        self._options: dict[str, ConfigOption] = dict()
        self.conf_file_cache: tomlkit.TOMLDocument | None = None

    def read_config(self) -> None:
        """Read and cache config file.

        This function should be called if the ConfigManager's cache is outdated,
        for example after pointing file_path somewhere else.
        """
        if self.file_path is None and not self._slices:
            raise ConfigManagerError(
                "ConfigManager is trying to read config file, but it doesn't "
                "have one"
            )
        read_config_file = tomlkit.TOMLDocument()

        sources = list(self._slices)
        if self.file_path is not None:
            sources.insert(0, ConfigSlice(self.file_path, ConfigSliceOptions(), None))
        for filep, sliceoptions, section in sources:
            if not filep.exists():
                continue
            if sliceoptions.only_in_slice and section in read_config_file:
                del read_config_file[section]
            if sliceoptions.check_permissions and _has_unsafe_permissions(filep):
                warn(f"Bad owner or permissions on {str(filep)}", stacklevel=2)
            LOGGER.debug(f"reading configuration file from {str(filep)}")
            try:
                read_config_piece = tomlkit.parse(filep.read_text())
            except Exception as e:
                raise ConfigSourceError(
                    "An unknown error happened while loading " f"'{str(filep)}'"
                ) from e
            if section is None:
                read_config_file = read_config_piece
            else:
                read_config_file[section] = read_config_piece
        self.conf_file_cache = read_config_file

    def add_option(
        self,
        *,
        option_cls: type[ConfigOption] = ConfigOption,
        **kwargs,
    ) -> None:
        """Add a ConfigOption to this ConfigManager."""
        kwargs["_root_manager"] = self
        new_option = option_cls(**kwargs)
        if new_option.name in self._options:
            raise ConfigManagerError(
                f"'{new_option.name}' option conflicts with a child element of '{self.name}'"
            )
        self._options[new_option.name] = new_option

    def __getitem__(self, name: str) -> Any:
        """Get the value of the option with name."""
        if name not in self._options:
            raise ConfigSourceError(
                f"No ConfigOption can be found with the name '{name}'"
            )
        return self._options[name].value()


def _has_unsafe_permissions(filep: Path) -> bool:
    # Same check as openssh does for permissions
    file_stat = filep.stat()
    if file_stat.st_mode & READABLE_BY_OTHERS != 0:
        return True
    # Windows doesn't have getuid, skip checking
    return (
        hasattr(os, "getuid")
        and file_stat.st_uid != 0
        and file_stat.st_uid != os.getuid()
    )


CONFIG_MANAGER = ConfigManager(
    name="CONFIG_MANAGER",
    file_path=CONFIG_FILE,
    _slices=[
        ConfigSlice(  # Optional connections file to read in connections from
            CONNECTIONS_FILE,
            ConfigSliceOptions(
                check_permissions=True,  # connections could live here, check permissions
                only_in_slice=True,
            ),
            "connections",
        ),
    ],
)
CONFIG_MANAGER.add_option(
    name="connections",
    parse_str=tomlkit.parse,
    default=dict(),
)
CONFIG_MANAGER.add_option(
    name="default_connection_name",
    env_name=ENV_VAR_DEFAULT_CONNECTION_NAME,
    default=DEFAULT_CONNECTION_NAME,
)
CONFIG_MANAGER.add_option(
    name="log",
    env_name=False,
    default=dict(),
)


def connections_file_manager(connections_file_path: Path) -> ConfigManager:
    """ConfigManager reading connections out of one explicitly given file."""
    manager = ConfigManager(
        name="CONNECTIONS_FILE_MANAGER",
        _slices=[
            ConfigSlice(
                Path(connections_file_path),
                ConfigSliceOptions(check_permissions=True, only_in_slice=True),
                "connections",
            ),
        ],
    )
    manager.add_option(name="connections", env_name=False, default=dict())
    manager.add_option(
        name="default_connection_name",
        env_name=ENV_VAR_DEFAULT_CONNECTION_NAME,
        default=DEFAULT_CONNECTION_NAME,
    )
    return manager


def _get_default_connection_name(manager: ConfigManager = CONFIG_MANAGER) -> str:
    return manager["default_connection_name"]


def get_connection_options(
    connection_name: str | None = None,
    manager: ConfigManager = CONFIG_MANAGER,
) -> dict[str, Any]:
    """Returns the options of a named connection from the configuration files.

    Args:
        connection_name: Name of the [connections.<name>] table, the default
          connection name is used when omitted.
        manager: ConfigManager to read from.

    Raises:
        ProgrammingError: No connection with that name is defined.
    """
    if connection_name is None:
        connection_name = _get_default_connection_name(manager)
    connections = manager["connections"]
    if connection_name not in connections:
        raise ProgrammingError(
            msg=f"Invalid connection_name '{connection_name}',"
            f" known ones are {list(connections.keys())}",
            errno=ER_INVALID_CONNECTION_NAME,
        )
    LOGGER.debug("loaded options of connection '%s'", connection_name)
    return dict(connections[connection_name])


__all__ = [
    "ConfigOption",
    "ConfigManager",
    "ConfigSlice",
    "ConfigSliceOptions",
    "CONFIG_MANAGER",
    "connections_file_manager",
    "get_connection_options",
]
