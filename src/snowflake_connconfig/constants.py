#!/usr/bin/env python
#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#
from __future__ import annotations

import json
from enum import Enum, unique
from typing import Any, Sequence

from .sf_dirs import _resolve_config_dir

# String literals
UTF8 = "utf-8"

# Endpoint derivation
SNOWFLAKE_DOMAIN = "snowflakecomputing.com"
# accounts in the default deployment need no region subdomain
DEFAULT_REGION = "us-west-2"
ACCESS_URL_SCHEME = "https"

CONFIG_DIR = _resolve_config_dir()
CONFIG_FILE = CONFIG_DIR / "config.toml"
CONNECTIONS_FILE = CONFIG_DIR / "connections.toml"

ENV_VAR_DEFAULT_CONNECTION_NAME = "SNOWFLAKE_DEFAULT_CONNECTION_NAME"
DEFAULT_CONNECTION_NAME = "default"


@unique
class NativeType(Enum):
    """Native types a result value can be fetched as.

    Connection configurations may ask for any of these to be returned as
    strings instead, see the fetch_as_string option.
    """

    STRING = "String"
    BOOLEAN = "Boolean"
    NUMBER = "Number"
    DATE = "Date"
    JSON = "JSON"
    BUFFER = "Buffer"


NATIVE_TYPE_NAMES = frozenset(t.value for t in NativeType)


def is_native_type_name(type_name: Any) -> bool:
    return isinstance(type_name, str) and type_name in NATIVE_TYPE_NAMES


def find_invalid_native_type(type_names: Sequence[Any]) -> int | None:
    """Returns the index of the first element that is not a native type name."""
    for idx, type_name in enumerate(type_names):
        if not is_native_type_name(type_name):
            return idx
    return None


def render_value(value: Any) -> str:
    """Renders an offending option value for an error message."""
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
