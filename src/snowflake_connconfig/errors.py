#!/usr/bin/env python
#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

from __future__ import annotations

from logging import getLogger

from .constants import UTF8
from .errorcode import ER_INTERNAL_ASSERT_FAILED

logger = getLogger(__name__)


class Error(Exception):
    """Base Snowflake exception class."""

    def __init__(
        self,
        msg: str | None = None,
        errno: int | None = None,
        sqlstate: str | None = None,
        done_format_msg: bool | None = None,
    ) -> None:
        super().__init__(msg)
        self.msg = msg
        self.raw_msg = msg
        self.errno = errno or -1
        self.sqlstate = sqlstate or "n/a"

        if not self.msg:
            self.msg = "Unknown error"

        if self.errno != -1 and not done_format_msg:
            if self.sqlstate != "n/a":
                self.msg = f"{self.errno:06d} ({self.sqlstate}): {self.msg}"
            else:
                self.msg = f"{self.errno:06d}: {self.msg}"

    def __repr__(self) -> str:
        return self.__str__()

    def __str__(self) -> str:
        return self.msg

    def __bytes__(self) -> bytes:
        return self.__str__().encode(UTF8)


class InterfaceError(Error):
    """Exception for errors related to the interface."""

    pass


class DatabaseError(Error):
    """Exception for errors related to the database."""

    pass


class InternalError(DatabaseError):
    """Exception for errors internal database errors."""

    pass


class OperationalError(DatabaseError):
    """Exception for errors related to the database's operation."""

    pass


class ProgrammingError(DatabaseError):
    """Exception for errors programming errors."""

    pass


class MissingArgumentError(ProgrammingError):
    """Exception for a required connection option that was not supplied."""

    def __init__(self, msg: str, errno: int, option_name: str | None = None) -> None:
        super().__init__(msg=msg, errno=errno)
        self.option_name = option_name


class InvalidArgumentError(ProgrammingError):
    """Exception for a connection option of the wrong type or value."""

    def __init__(self, msg: str, errno: int, option_name: str | None = None) -> None:
        super().__init__(msg=msg, errno=errno)
        self.option_name = option_name


class InternalAssertionError(InternalError):
    """Exception for broken invariants between trusted internal callers.

    This signals a programming error inside the client, never bad user input.
    """

    def __init__(
        self, msg: str | None = None, errno: int = ER_INTERNAL_ASSERT_FAILED
    ) -> None:
        super().__init__(msg=msg or "Internal assertion failed", errno=errno)


def assert_internal(condition: bool, msg: str | None = None, **kwargs) -> None:
    """Raises InternalAssertionError if condition does not hold."""
    if not condition:
        logger.debug("internal assertion failed: %s", msg)
        raise InternalAssertionError(msg, **kwargs)


class ConfigManagerError(Error):
    """Configuration manager is not set up correctly."""

    pass


class ConfigSourceError(Error):
    """Configuration source could not be loaded or used."""

    pass


class MissingConfigOptionError(ConfigSourceError):
    """A requested configuration option is not defined in any source."""

    pass
