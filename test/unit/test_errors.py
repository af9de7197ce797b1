#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

from __future__ import annotations

import logging

import pytest

from snowflake_connconfig import errors
from snowflake_connconfig.errorcode import (
    ER_CONN_CREATE_MISSING_USERNAME,
    ER_INTERNAL_ASSERT_FAILED,
    ER_UNKNOWN_PARAMETER,
)


def test_message_formatting():
    err = errors.ProgrammingError(msg="Some error happened", errno=123456)
    assert err.msg == "123456: Some error happened"
    assert str(err) == err.msg
    assert repr(err) == err.msg
    assert bytes(err) == b"123456: Some error happened"

    err = errors.ProgrammingError(
        msg="Some error happened", errno=123456, sqlstate="24000"
    )
    assert err.msg == "123456 (24000): Some error happened"


def test_already_formatted_message():
    err = errors.ProgrammingError(
        msg="123456: Some error happened", errno=123456, done_format_msg=True
    )
    assert err.msg == "123456: Some error happened"


def test_defaults():
    err = errors.Error()
    assert err.errno == -1
    assert err.sqlstate == "n/a"
    assert err.msg == "Unknown error"


def test_args():
    assert errors.Error("msg").args == ("msg",)


def test_argument_errors():
    err = errors.MissingArgumentError(
        "A user name must be specified.",
        ER_CONN_CREATE_MISSING_USERNAME,
        option_name="username",
    )
    assert isinstance(err, errors.ProgrammingError)
    assert err.option_name == "username"
    assert err.errno == ER_CONN_CREATE_MISSING_USERNAME
    assert str(err) == "251103: A user name must be specified."
    assert err.raw_msg == "A user name must be specified."

    err = errors.InvalidArgumentError("bad", 251104)
    assert isinstance(err, errors.DatabaseError)
    assert err.option_name is None


def test_assert_internal(caplog):
    caplog.set_level(logging.DEBUG, "snowflake_connconfig")
    errors.assert_internal(True, "never raised")

    with pytest.raises(errors.InternalAssertionError) as err:
        errors.assert_internal(False, "broken")
    assert err.value.errno == ER_INTERNAL_ASSERT_FAILED
    assert isinstance(err.value, errors.InternalError)
    assert "internal assertion failed: broken" in caplog.text

    with pytest.raises(errors.InternalAssertionError) as err:
        errors.assert_internal(False, errno=ER_UNKNOWN_PARAMETER)
    assert err.value.errno == ER_UNKNOWN_PARAMETER
    assert str(err.value) == "251202: Internal assertion failed"
