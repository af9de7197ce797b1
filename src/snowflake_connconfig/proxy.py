#!/usr/bin/env python
#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

from __future__ import annotations

import logging
from typing import Any, Mapping, NamedTuple

from .errorcode import (
    ER_CONN_CREATE_INVALID_PROXY_HOST,
    ER_CONN_CREATE_INVALID_PROXY_PORT,
    ER_CONN_CREATE_MISSING_PROXY_HOST,
    ER_CONN_CREATE_MISSING_PROXY_PORT,
)
from .errors import InvalidArgumentError, MissingArgumentError

logger = logging.getLogger(__name__)


def get_proxy_url(proxy_host: str | None, proxy_port: int | float | None) -> str | None:
    http_prefix = "http://"
    https_prefix = "https://"

    if proxy_host and proxy_port is not None:
        if proxy_host.startswith(http_prefix):
            host = proxy_host[len(http_prefix) :]
        elif proxy_host.startswith(https_prefix):
            host = proxy_host[len(https_prefix) :]
        else:
            host = proxy_host
        return f"{http_prefix}{host}:{proxy_port}"

    return None


class ProxySettings(NamedTuple):
    host: str
    port: int | float

    @property
    def url(self) -> str | None:
        return get_proxy_url(self.host, self.port)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def resolve_proxy(
    options: Mapping[str, Any], proxy_supported: bool = True
) -> ProxySettings | None:
    """Builds proxy settings out of the proxy_host and proxy_port options.

    Proxying only applies where the client makes its own outbound HTTP calls,
    which callers signal with proxy_supported. Without that capability any
    proxy options are accepted but ignored.
    """
    proxy_host = options.get("proxy_host")
    proxy_port = options.get("proxy_port")

    if proxy_host is None and proxy_port is None:
        return None
    if not proxy_supported:
        logger.debug("proxy is not supported in this context, ignoring proxy options")
        return None

    if proxy_host is None:
        raise MissingArgumentError(
            msg="A proxy_host must be specified when proxy_port is given.",
            errno=ER_CONN_CREATE_MISSING_PROXY_HOST,
            option_name="proxy_host",
        )
    if not isinstance(proxy_host, str):
        raise InvalidArgumentError(
            msg="Invalid proxy_host. The specified value must be a string.",
            errno=ER_CONN_CREATE_INVALID_PROXY_HOST,
            option_name="proxy_host",
        )
    if proxy_port is None:
        raise MissingArgumentError(
            msg="A proxy_port must be specified when proxy_host is given.",
            errno=ER_CONN_CREATE_MISSING_PROXY_PORT,
            option_name="proxy_port",
        )
    if not _is_number(proxy_port):
        raise InvalidArgumentError(
            msg="Invalid proxy_port. The specified value must be a number.",
            errno=ER_CONN_CREATE_INVALID_PROXY_PORT,
            option_name="proxy_port",
        )

    logger.debug("using proxy %s:%s", proxy_host, proxy_port)
    return ProxySettings(host=proxy_host, port=proxy_port)
