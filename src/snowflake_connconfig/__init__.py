#!/usr/bin/env python
#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#
from __future__ import annotations

import logging
from logging import NullHandler
from typing import Any, Mapping

from typing_extensions import Unpack

from .connection_config import (
    ConnectionConfig,
    ConnectionOptions,
    CredentialState,
)
from .constants import NativeType
from .description import default_client_info
from .errors import (
    ConfigManagerError,
    ConfigSourceError,
    DatabaseError,
    Error,
    InterfaceError,
    InternalAssertionError,
    InternalError,
    InvalidArgumentError,
    MissingArgumentError,
    MissingConfigOptionError,
    OperationalError,
    ProgrammingError,
)
from .log_configuration import EasyLoggingConfigPython
from .parameters import PARAMETER_CATALOG, ParameterDescriptor, ValidatorKind
from .proxy import ProxySettings
from .version import VERSION

logging.getLogger(__name__).addHandler(NullHandler())


def create_config(
    validate_credentials: bool = True,
    qa_mode: bool = False,
    client_info: Mapping[str, Any] | None = None,
    proxy_supported: bool = True,
    **kwargs: Unpack[ConnectionOptions],
) -> ConnectionConfig:
    """Builds a ConnectionConfig out of keyword arguments."""
    return ConnectionConfig(
        kwargs,
        validate_credentials,
        qa_mode,
        client_info,
        proxy_supported=proxy_supported,
    )


SNOWFLAKE_CONNCONFIG_VERSION = ".".join(str(v) for v in VERSION[0:3])
__version__ = SNOWFLAKE_CONNCONFIG_VERSION

__all__ = [
    "ConnectionConfig",
    "ConnectionOptions",
    "CredentialState",
    "create_config",
    "default_client_info",
    # Error handling
    "Error",
    "InterfaceError",
    "DatabaseError",
    "InternalError",
    "OperationalError",
    "ProgrammingError",
    "MissingArgumentError",
    "InvalidArgumentError",
    "InternalAssertionError",
    "ConfigManagerError",
    "ConfigSourceError",
    "MissingConfigOptionError",
    # Building blocks
    "NativeType",
    "ParameterDescriptor",
    "PARAMETER_CATALOG",
    "ProxySettings",
    "ValidatorKind",
    "EasyLoggingConfigPython",
]
