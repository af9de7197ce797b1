#!/usr/bin/env python
#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

from __future__ import annotations

# connection configuration
ER_CONN_CREATE_MISSING_OPTIONS = 251101
ER_CONN_CREATE_INVALID_OPTIONS = 251102
ER_CONN_CREATE_MISSING_USERNAME = 251103
ER_CONN_CREATE_INVALID_USERNAME = 251104
ER_CONN_CREATE_MISSING_PASSWORD = 251105
ER_CONN_CREATE_INVALID_PASSWORD = 251106
ER_CONN_CREATE_MISSING_ACCOUNT = 251107
ER_CONN_CREATE_INVALID_ACCOUNT = 251108
ER_CONN_CREATE_MISSING_ACCESS_URL = 251109
ER_CONN_CREATE_INVALID_ACCESS_URL = 251110
ER_CONN_CREATE_INVALID_WAREHOUSE = 251111
ER_CONN_CREATE_INVALID_DATABASE = 251112
ER_CONN_CREATE_INVALID_SCHEMA = 251113
ER_CONN_CREATE_INVALID_ROLE = 251114
ER_CONN_CREATE_MISSING_PROXY_HOST = 251115
ER_CONN_CREATE_INVALID_PROXY_HOST = 251116
ER_CONN_CREATE_MISSING_PROXY_PORT = 251117
ER_CONN_CREATE_INVALID_PROXY_PORT = 251118
ER_CONN_CREATE_INVALID_STREAM_RESULT = 251119
ER_CONN_CREATE_INVALID_FETCH_AS_STRING = 251120
ER_CONN_CREATE_INVALID_FETCH_AS_STRING_VALUES = 251121
ER_CONN_CREATE_INVALID_REGION = 251122

# internal assertions
ER_INTERNAL_ASSERT_FAILED = 251201
ER_UNKNOWN_PARAMETER = 251202

# configuration files
ER_INVALID_CONNECTION_NAME = 251301
