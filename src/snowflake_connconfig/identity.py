#!/usr/bin/env python
#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

from __future__ import annotations

import logging
from typing import Any, Mapping, NamedTuple

from .constants import DEFAULT_REGION
from .errorcode import (
    ER_CONN_CREATE_INVALID_ACCESS_URL,
    ER_CONN_CREATE_INVALID_ACCOUNT,
    ER_CONN_CREATE_INVALID_PASSWORD,
    ER_CONN_CREATE_INVALID_REGION,
    ER_CONN_CREATE_INVALID_USERNAME,
    ER_CONN_CREATE_MISSING_ACCESS_URL,
    ER_CONN_CREATE_MISSING_ACCOUNT,
    ER_CONN_CREATE_MISSING_PASSWORD,
    ER_CONN_CREATE_MISSING_USERNAME,
)
from .errors import InvalidArgumentError, MissingArgumentError
from .util_text import construct_access_url, is_valid_access_url, split_account

logger = logging.getLogger(__name__)

# option name -> (errno when missing, errno when not a non-empty string)
_CREDENTIAL_ERRNOS: dict[str, tuple[int, int]] = {
    "username": (ER_CONN_CREATE_MISSING_USERNAME, ER_CONN_CREATE_INVALID_USERNAME),
    "password": (ER_CONN_CREATE_MISSING_PASSWORD, ER_CONN_CREATE_INVALID_PASSWORD),
    "account": (ER_CONN_CREATE_MISSING_ACCOUNT, ER_CONN_CREATE_INVALID_ACCOUNT),
}


class Identity(NamedTuple):
    """Who connects and where to."""

    username: str | None
    password: str | None
    account: str | None
    region: str | None
    access_url: str


def check_required_string(options: Mapping[str, Any], name: str) -> str:
    """Returns options[name], raising if it is absent or not a non-empty string."""
    missing_errno, invalid_errno = _CREDENTIAL_ERRNOS[name]
    value = options.get(name)
    if value is None:
        raise MissingArgumentError(
            msg=f"A value for {name} must be specified.",
            errno=missing_errno,
            option_name=name,
        )
    if not isinstance(value, str) or not value:
        raise InvalidArgumentError(
            msg=f"Invalid {name}. The specified value must be a non-empty string.",
            errno=invalid_errno,
            option_name=name,
        )
    return value


def validate_identity(
    options: Mapping[str, Any], validate_credentials: bool = True
) -> Identity:
    """Validates the identity options and derives the access url if needed.

    Args:
        options: Caller supplied connection options, left unmodified.
        validate_credentials: Whether username, password and account are
            required. When False only access_url is.

    Returns:
        The validated Identity.

    Raises:
        MissingArgumentError: A required option is absent.
        InvalidArgumentError: An option is empty or of the wrong type.
    """
    username = options.get("username")
    password = options.get("password")
    account = options.get("account")
    region = options.get("region")
    access_url = options.get("access_url")

    if validate_credentials:
        username = check_required_string(options, "username")
        password = check_required_string(options, "password")
        account = check_required_string(options, "account")

        account, embedded_region = split_account(account)
        if embedded_region is not None:
            logger.debug(
                "account identifier carries region %s, splitting it off",
                embedded_region,
            )
            region = embedded_region

        # an explicit access url wins over anything derived
        if access_url is None:
            if region is not None:
                if not isinstance(region, str):
                    raise InvalidArgumentError(
                        msg="Invalid region. The specified value must be a string.",
                        errno=ER_CONN_CREATE_INVALID_REGION,
                        option_name="region",
                    )
                if region == DEFAULT_REGION:
                    region = ""
            access_url = construct_access_url(account, region)

    if access_url is None:
        raise MissingArgumentError(
            msg="A value for access_url must be specified.",
            errno=ER_CONN_CREATE_MISSING_ACCESS_URL,
            option_name="access_url",
        )
    if not is_valid_access_url(access_url):
        raise InvalidArgumentError(
            msg="Invalid access_url. The specified value must be an https://<host> URL.",
            errno=ER_CONN_CREATE_INVALID_ACCESS_URL,
            option_name="access_url",
        )

    return Identity(
        username=username,
        password=password,
        account=account,
        region=region,
        access_url=access_url,
    )
