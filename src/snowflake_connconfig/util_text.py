#!/usr/bin/env python
#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

from __future__ import annotations

import logging
from urllib.parse import urlparse

from .constants import ACCESS_URL_SCHEME, DEFAULT_REGION, SNOWFLAKE_DOMAIN

logger = logging.getLogger(__name__)


def split_account(account: str) -> tuple[str, str | None]:
    """Splits a region, cloud or other subdomain off an account identifier.

    Only the first dot counts and only when it is neither the first nor the
    last character, so "abc.eu-central-1" yields ("abc", "eu-central-1") while
    ".abc" and "abc." are returned untouched with no region.
    """
    dot_pos = account.find(".")
    if 0 < dot_pos < len(account) - 1:
        return account[:dot_pos], account[dot_pos + 1 :]
    return account, None


def region_subdomain(region: str | None) -> str:
    if not region or region == DEFAULT_REGION:
        return ""
    return f".{region}"


def construct_hostname(region: str | None, account: str) -> str:
    """Constructs hostname from region and account."""
    return f"{account}{region_subdomain(region)}.{SNOWFLAKE_DOMAIN}"


def construct_access_url(account: str, region: str | None = None) -> str:
    access_url = f"{ACCESS_URL_SCHEME}://{construct_hostname(region, account)}"
    logger.debug("derived access url %s", access_url)
    return access_url


def is_valid_access_url(access_url: object) -> bool:
    """Whether access_url is a non-empty https://<host> URL."""
    if not isinstance(access_url, str) or not access_url:
        return False
    try:
        parsed = urlparse(access_url)
    except ValueError:
        return False
    return parsed.scheme == ACCESS_URL_SCHEME and bool(parsed.hostname)
