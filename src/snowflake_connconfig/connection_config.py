#!/usr/bin/env python
#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

from __future__ import annotations

import logging
import warnings
from difflib import get_close_matches
from enum import Enum, unique
from os import PathLike
from pathlib import Path
from threading import Lock
from typing import Any, Mapping, TypedDict

from .config_manager import (
    CONFIG_MANAGER,
    connections_file_manager,
    get_connection_options,
)
from .constants import find_invalid_native_type, render_value
from .description import CLIENT_NAME
from .errorcode import (
    ER_CONN_CREATE_INVALID_DATABASE,
    ER_CONN_CREATE_INVALID_FETCH_AS_STRING,
    ER_CONN_CREATE_INVALID_FETCH_AS_STRING_VALUES,
    ER_CONN_CREATE_INVALID_OPTIONS,
    ER_CONN_CREATE_INVALID_ROLE,
    ER_CONN_CREATE_INVALID_SCHEMA,
    ER_CONN_CREATE_INVALID_STREAM_RESULT,
    ER_CONN_CREATE_INVALID_WAREHOUSE,
    ER_CONN_CREATE_MISSING_OPTIONS,
)
from .errors import InvalidArgumentError, MissingArgumentError, assert_internal
from .identity import Identity, validate_identity
from .parameters import (
    PARAMETER_LARGE_RESULT_SET_RETRY_MAX_NUM_RETRIES,
    PARAMETER_LARGE_RESULT_SET_RETRY_MAX_SLEEP_TIME,
    PARAMETER_RESULT_CHUNK_CACHE_SIZE,
    PARAMETER_RESULT_PREFETCH,
    PARAMETER_RESULT_PROCESSING_BATCH_DURATION,
    PARAMETER_RESULT_PROCESSING_BATCH_SIZE,
    PARAMETER_RESULT_STREAM_INTERRUPTS,
    PARAMETER_ROW_STREAM_HIGH_WATER_MARK,
    PARAMETER_SF_RETRY_MAX_NUM_RETRIES,
    PARAMETER_SF_RETRY_MAX_SLEEP_TIME,
    PARAMETER_SF_RETRY_STARTING_SLEEP_TIME,
    PARAMETER_TIMEOUT,
    ParameterRegistry,
    ValidatorKind,
    validate,
)
from .proxy import ProxySettings, resolve_proxy

logger = logging.getLogger(__name__)


class ConnectionOptions(TypedDict, total=False):
    """Options recognized by ConnectionConfig."""

    username: str
    password: str
    account: str
    region: str
    access_url: str
    proxy_host: str
    proxy_port: int
    warehouse: str
    database: str
    schema: str
    role: str
    stream_result: bool
    fetch_as_string: list[str]
    timeout: int
    result_prefetch: int
    result_stream_interrupts: int
    result_chunk_cache_size: int
    result_processing_batch_size: int
    result_processing_batch_duration: int
    row_stream_high_water_mark: int
    large_result_set_retry_max_num_retries: int
    large_result_set_retry_max_sleep_time: int
    sf_retry_max_num_retries: int
    sf_retry_starting_sleep_time: float
    sf_retry_max_sleep_time: float


KNOWN_OPTIONS = frozenset(ConnectionOptions.__annotations__)

# optional string options and the errno raised when they are not strings
_OPTIONAL_STRING_OPTIONS: dict[str, int] = {
    "warehouse": ER_CONN_CREATE_INVALID_WAREHOUSE,
    "database": ER_CONN_CREATE_INVALID_DATABASE,
    "schema": ER_CONN_CREATE_INVALID_SCHEMA,
    "role": ER_CONN_CREATE_INVALID_ROLE,
}


@unique
class CredentialState(Enum):
    CONSTRUCTED = "constructed"
    CLEARED = "cleared"


class ConnectionConfig:
    """Validated configuration of a single connection attempt.

    Everything is validated in the constructor, which either returns a
    complete configuration or raises. Afterwards the only change allowed is
    clear_credentials, which drops the password once it is no longer needed.

    Attributes:
        username: The user name used in the connection.
        password: The password, None once credentials were cleared.
        account: Account name, with any region suffix split off.
        region: Region name if not the default deployment.
        access_url: URL the service is reached at, given or derived.
        proxy: ProxySettings if a proxy is configured, else None.
        warehouse: Warehouse to use once connected.
        database: Database to use once connected.
        schema: Schema to use once connected.
        role: Role to use once connected.
        stream_result: Whether results should be streamed.
        fetch_as_string: Native type names to fetch as strings.
        client_type: Identifier of this client implementation.
        client_version: Version reported by client_info, if given.
        client_environment: Environment reported by client_info, if given.
        timeout: Request timeout in milliseconds.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None,
        validate_credentials: bool = True,
        qa_mode: bool = False,
        client_info: Mapping[str, Any] | None = None,
        *,
        proxy_supported: bool = True,
        validate_default_parameters: bool = False,
    ) -> None:
        """Validates options and builds the configuration.

        Args:
            options: Connection options, see ConnectionOptions.
            validate_credentials: Whether username, password and account are
                required. Without them access_url has to be given.
            qa_mode: Flag handed through to the consumers of the configuration.
            client_info: Mapping with a str version and a mapping environment
                describing the client, passed by trusted internal callers.
            proxy_supported: Whether this client can route its HTTP calls
                through a proxy. If not, proxy options are ignored.
            validate_default_parameters: Warn about unknown option names.

        Raises:
            MissingArgumentError: A required option is absent.
            InvalidArgumentError: An option has the wrong type or value.
            InternalAssertionError: client_info is malformed.
        """
        logger.debug("ConnectionConfig.__init__")
        if validate_credentials is None:
            validate_credentials = True

        if options is None:
            raise MissingArgumentError(
                msg="Connection options must be specified.",
                errno=ER_CONN_CREATE_MISSING_OPTIONS,
            )
        if not isinstance(options, Mapping):
            raise InvalidArgumentError(
                msg="Invalid connection options. The specified value must be a mapping.",
                errno=ER_CONN_CREATE_INVALID_OPTIONS,
            )
        if validate_default_parameters:
            _warn_unknown_options(options)

        identity = validate_identity(options, validate_credentials)
        proxy = resolve_proxy(options, proxy_supported)

        for name, errno in _OPTIONAL_STRING_OPTIONS.items():
            value = options.get(name)
            if value is not None and not isinstance(value, str):
                raise InvalidArgumentError(
                    msg=f"Invalid {name}. The specified value must be a string.",
                    errno=errno,
                    option_name=name,
                )

        stream_result = options.get("stream_result")
        if stream_result is not None and not validate(
            ValidatorKind.BOOLEAN, stream_result
        ):
            raise InvalidArgumentError(
                msg="Invalid stream_result. The specified value must be a boolean.",
                errno=ER_CONN_CREATE_INVALID_STREAM_RESULT,
                option_name="stream_result",
            )

        fetch_as_string = options.get("fetch_as_string")
        if fetch_as_string is not None:
            if not isinstance(fetch_as_string, (list, tuple)):
                raise InvalidArgumentError(
                    msg="Invalid fetch_as_string. The specified value must be a list.",
                    errno=ER_CONN_CREATE_INVALID_FETCH_AS_STRING,
                    option_name="fetch_as_string",
                )
            if not validate(ValidatorKind.ENUMERATED_STRING_ARRAY, fetch_as_string):
                invalid_idx = find_invalid_native_type(fetch_as_string)
                raise InvalidArgumentError(
                    msg="Invalid fetch_as_string value: "
                    f"{render_value(fetch_as_string[invalid_idx])}. "
                    "Only native type names are supported.",
                    errno=ER_CONN_CREATE_INVALID_FETCH_AS_STRING_VALUES,
                    option_name="fetch_as_string",
                )
            fetch_as_string = list(fetch_as_string)

        client_version = None
        client_environment = None
        if client_info is not None:
            assert_internal(
                isinstance(client_info, Mapping), "client_info must be a mapping"
            )
            assert_internal(
                isinstance(client_info.get("version"), str),
                "client_info version must be a string",
            )
            assert_internal(
                isinstance(client_info.get("environment"), Mapping),
                "client_info environment must be a mapping",
            )
            client_version = client_info["version"]
            client_environment = dict(client_info["environment"])

        self._identity: Identity = identity
        self._proxy: ProxySettings | None = proxy
        self._warehouse: str | None = options.get("warehouse")
        self._database: str | None = options.get("database")
        self._schema: str | None = options.get("schema")
        self._role: str | None = options.get("role")
        self._stream_result: bool | None = stream_result
        self._fetch_as_string: list[str] | None = fetch_as_string
        self._qa_mode = bool(qa_mode)
        self._client_version: str | None = client_version
        self._client_environment: dict[str, Any] | None = client_environment
        self._parameters = ParameterRegistry(options)
        self._credential_state = CredentialState.CONSTRUCTED
        self._lock = Lock()

        logger.info(
            "Connection configuration for %s created", self._identity.access_url
        )

    @classmethod
    def from_connection_name(
        cls,
        connection_name: str | None = None,
        connections_file_path: str | PathLike[str] | None = None,
        *,
        validate_credentials: bool = True,
        qa_mode: bool = False,
        client_info: Mapping[str, Any] | None = None,
        proxy_supported: bool = True,
        **overrides: Any,
    ) -> ConnectionConfig:
        """Builds a configuration from a connection defined in the configuration files.

        Args:
            connection_name: Name of the [connections.<name>] table. Falls back
                to the default connection name.
            connections_file_path: TOML file holding the connections, instead
                of the one found in the configuration directory.
            overrides: Options taking precedence over the ones from the file.
        """
        manager = CONFIG_MANAGER
        if connections_file_path is not None:
            manager = connections_file_manager(Path(connections_file_path))
        options = get_connection_options(connection_name, manager)
        options.update(overrides)
        return cls(
            options,
            validate_credentials,
            qa_mode,
            client_info,
            proxy_supported=proxy_supported,
        )

    def __repr__(self) -> str:
        return (
            f"ConnectionConfig(username={self.username!r}, "
            f"account={self.account!r}, access_url={self.access_url!r}, "
            f"credential_state={self._credential_state.value})"
        )

    @property
    def username(self) -> str | None:
        return self._identity.username

    @property
    def password(self) -> str | None:
        with self._lock:
            return self._identity.password

    @property
    def account(self) -> str | None:
        return self._identity.account

    @property
    def region(self) -> str | None:
        return self._identity.region

    @property
    def access_url(self) -> str:
        return self._identity.access_url

    @property
    def proxy(self) -> ProxySettings | None:
        """Proxy hostname and port for when http requests are made."""
        return self._proxy

    @property
    def warehouse(self) -> str | None:
        return self._warehouse

    @property
    def database(self) -> str | None:
        return self._database

    @property
    def schema(self) -> str | None:
        return self._schema

    @property
    def role(self) -> str | None:
        return self._role

    @property
    def stream_result(self) -> bool | None:
        return self._stream_result

    @property
    def fetch_as_string(self) -> list[str] | None:
        if self._fetch_as_string is None:
            return None
        return list(self._fetch_as_string)

    @property
    def client_type(self) -> str:
        return CLIENT_NAME

    @property
    def client_version(self) -> str | None:
        return self._client_version

    @property
    def client_environment(self) -> dict[str, Any] | None:
        """Versions of the runtime components, e.g. python and the OS."""
        if self._client_environment is None:
            return None
        return dict(self._client_environment)

    @property
    def credential_state(self) -> CredentialState:
        return self._credential_state

    def is_qa_mode(self) -> bool:
        return self._qa_mode

    def clear_credentials(self) -> None:
        """Clears all credential-related information.

        Calling this again once cleared does nothing.
        """
        with self._lock:
            if self._credential_state is CredentialState.CLEARED:
                return
            self._identity = self._identity._replace(password=None)
            self._credential_state = CredentialState.CLEARED
        logger.debug("credentials cleared")

    def get_parameter_value(self, name: str) -> Any:
        """Returns the resolved value of a tunable.

        Raises:
            InternalAssertionError: name is not a known parameter.
        """
        return self._parameters.value(name)

    @property
    def parameters(self) -> dict[str, Any]:
        return self._parameters.as_dict()

    @property
    def timeout(self) -> int:
        return self.get_parameter_value(PARAMETER_TIMEOUT)

    @property
    def result_prefetch(self) -> int:
        return self.get_parameter_value(PARAMETER_RESULT_PREFETCH)

    @property
    def result_stream_interrupts(self) -> int:
        return self.get_parameter_value(PARAMETER_RESULT_STREAM_INTERRUPTS)

    @property
    def result_chunk_cache_size(self) -> int:
        return self.get_parameter_value(PARAMETER_RESULT_CHUNK_CACHE_SIZE)

    @property
    def result_processing_batch_size(self) -> int:
        return self.get_parameter_value(PARAMETER_RESULT_PROCESSING_BATCH_SIZE)

    @property
    def result_processing_batch_duration(self) -> int:
        return self.get_parameter_value(PARAMETER_RESULT_PROCESSING_BATCH_DURATION)

    @property
    def row_stream_high_water_mark(self) -> int:
        return self.get_parameter_value(PARAMETER_ROW_STREAM_HIGH_WATER_MARK)

    @property
    def large_result_set_retry_max_num_retries(self) -> int:
        return self.get_parameter_value(
            PARAMETER_LARGE_RESULT_SET_RETRY_MAX_NUM_RETRIES
        )

    @property
    def large_result_set_retry_max_sleep_time(self) -> int:
        return self.get_parameter_value(PARAMETER_LARGE_RESULT_SET_RETRY_MAX_SLEEP_TIME)

    @property
    def sf_retry_max_num_retries(self) -> int:
        return self.get_parameter_value(PARAMETER_SF_RETRY_MAX_NUM_RETRIES)

    @property
    def sf_retry_starting_sleep_time(self) -> float:
        return self.get_parameter_value(PARAMETER_SF_RETRY_STARTING_SLEEP_TIME)

    @property
    def sf_retry_max_sleep_time(self) -> float:
        return self.get_parameter_value(PARAMETER_SF_RETRY_MAX_SLEEP_TIME)


def _warn_unknown_options(options: Mapping[str, Any]) -> None:
    for name in options:
        if name in KNOWN_OPTIONS:
            continue
        close_matches = get_close_matches(name, KNOWN_OPTIONS, n=1, cutoff=0.8)
        guess = close_matches[0] if len(close_matches) > 0 else None
        warnings.warn(
            "'{}' is an unknown connection option{}".format(
                name, f", did you mean '{guess}'?" if guess else ""
            ),
            # Raise warning from where the config was created
            stacklevel=3,
        )


__all__ = [
    "ConnectionConfig",
    "ConnectionOptions",
    "CredentialState",
    "KNOWN_OPTIONS",
]
