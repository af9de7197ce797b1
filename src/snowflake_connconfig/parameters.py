#!/usr/bin/env python
#
# Copyright (c) 2012-2023 Snowflake Computing Inc. All rights reserved.
#

"""Tunable connection parameters.

Every tunable the client knows about is declared once in PARAMETER_CATALOG
together with its default, whether callers may override it through the
connection options and how a supplied value is validated. A ParameterRegistry
resolves the final values for one connection configuration.
"""

from __future__ import annotations

import logging
import math
from enum import Enum, unique
from typing import Any, Iterator, Mapping, NamedTuple

from .constants import find_invalid_native_type
from .errorcode import ER_UNKNOWN_PARAMETER
from .errors import assert_internal

logger = logging.getLogger(__name__)

PARAMETER_TIMEOUT = "timeout"
PARAMETER_RESULT_PREFETCH = "result_prefetch"
PARAMETER_RESULT_STREAM_INTERRUPTS = "result_stream_interrupts"
PARAMETER_RESULT_CHUNK_CACHE_SIZE = "result_chunk_cache_size"
PARAMETER_RESULT_PROCESSING_BATCH_SIZE = "result_processing_batch_size"
PARAMETER_RESULT_PROCESSING_BATCH_DURATION = "result_processing_batch_duration"
PARAMETER_ROW_STREAM_HIGH_WATER_MARK = "row_stream_high_water_mark"
PARAMETER_LARGE_RESULT_SET_RETRY_MAX_NUM_RETRIES = (
    "large_result_set_retry_max_num_retries"
)
PARAMETER_LARGE_RESULT_SET_RETRY_MAX_SLEEP_TIME = "large_result_set_retry_max_sleep_time"
PARAMETER_SF_RETRY_MAX_NUM_RETRIES = "sf_retry_max_num_retries"
PARAMETER_SF_RETRY_STARTING_SLEEP_TIME = "sf_retry_starting_sleep_time"
PARAMETER_SF_RETRY_MAX_SLEEP_TIME = "sf_retry_max_sleep_time"


@unique
class ValidatorKind(Enum):
    POSITIVE_INTEGER = "positive_integer"
    NON_NEGATIVE_INTEGER = "non_negative_integer"
    NON_NEGATIVE_NUMBER = "non_negative_number"
    BOOLEAN = "boolean"
    ENUMERATED_STRING_ARRAY = "enumerated_string_array"


def _is_integer(value: Any) -> bool:
    # integral floats such as 5000.0 count
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, int) and not isinstance(value, bool)


def _normalize(kind: ValidatorKind, value: Any) -> Any:
    if isinstance(value, float) and kind in (
        ValidatorKind.POSITIVE_INTEGER,
        ValidatorKind.NON_NEGATIVE_INTEGER,
    ):
        return int(value)
    return value


def _is_number(value: Any) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and not math.isnan(value)
    )


def validate(kind: ValidatorKind, value: Any) -> bool:
    """Returns whether value is acceptable for a validator of the given kind."""
    if kind is ValidatorKind.POSITIVE_INTEGER:
        return _is_integer(value) and value > 0
    if kind is ValidatorKind.NON_NEGATIVE_INTEGER:
        return _is_integer(value) and value >= 0
    if kind is ValidatorKind.NON_NEGATIVE_NUMBER:
        return _is_number(value) and value >= 0
    if kind is ValidatorKind.BOOLEAN:
        return isinstance(value, bool)
    if kind is ValidatorKind.ENUMERATED_STRING_ARRAY:
        return (
            isinstance(value, (list, tuple)) and find_invalid_native_type(value) is None
        )
    raise ValueError(f"unknown validator kind {kind!r}")


class ParameterDescriptor(NamedTuple):
    """Static description of a tunable.

    Attributes:
        name: Option name the value is read from.
        default: Value used unless a valid override is supplied.
        external: Whether callers may override the default.
        validator: Kind of validation a supplied value must pass.
    """

    name: str
    default: Any
    external: bool
    validator: ValidatorKind


PARAMETER_CATALOG: tuple[ParameterDescriptor, ...] = (
    ParameterDescriptor(
        PARAMETER_TIMEOUT, 90 * 1000, True, ValidatorKind.POSITIVE_INTEGER
    ),
    ParameterDescriptor(
        PARAMETER_RESULT_PREFETCH, 2, True, ValidatorKind.POSITIVE_INTEGER
    ),
    ParameterDescriptor(
        PARAMETER_RESULT_STREAM_INTERRUPTS, 3, False, ValidatorKind.POSITIVE_INTEGER
    ),
    # a chunk cache of 1 means no caching, larger caches blow up memory on big
    # result sets
    ParameterDescriptor(
        PARAMETER_RESULT_CHUNK_CACHE_SIZE, 1, False, ValidatorKind.POSITIVE_INTEGER
    ),
    ParameterDescriptor(
        PARAMETER_RESULT_PROCESSING_BATCH_SIZE,
        1000,
        False,
        ValidatorKind.POSITIVE_INTEGER,
    ),
    ParameterDescriptor(
        PARAMETER_RESULT_PROCESSING_BATCH_DURATION,
        100,
        False,
        ValidatorKind.POSITIVE_INTEGER,
    ),
    ParameterDescriptor(
        PARAMETER_ROW_STREAM_HIGH_WATER_MARK, 10, False, ValidatorKind.POSITIVE_INTEGER
    ),
    ParameterDescriptor(
        PARAMETER_LARGE_RESULT_SET_RETRY_MAX_NUM_RETRIES,
        10,
        False,
        ValidatorKind.NON_NEGATIVE_INTEGER,
    ),
    ParameterDescriptor(
        PARAMETER_LARGE_RESULT_SET_RETRY_MAX_SLEEP_TIME,
        16,
        False,
        ValidatorKind.NON_NEGATIVE_INTEGER,
    ),
    ParameterDescriptor(
        PARAMETER_SF_RETRY_MAX_NUM_RETRIES,
        1000,
        False,
        ValidatorKind.NON_NEGATIVE_INTEGER,
    ),
    ParameterDescriptor(
        PARAMETER_SF_RETRY_STARTING_SLEEP_TIME,
        0.25,
        False,
        ValidatorKind.NON_NEGATIVE_NUMBER,
    ),
    ParameterDescriptor(
        PARAMETER_SF_RETRY_MAX_SLEEP_TIME,
        16,
        False,
        ValidatorKind.NON_NEGATIVE_NUMBER,
    ),
)

PARAMETER_NAMES = frozenset(d.name for d in PARAMETER_CATALOG)


class Parameter:
    """A tunable together with the value resolved for one configuration."""

    __slots__ = ("descriptor", "value")

    def __init__(self, descriptor: ParameterDescriptor) -> None:
        self.descriptor = descriptor
        self.value = descriptor.default

    @property
    def name(self) -> str:
        return self.descriptor.name

    def accepts(self, value: Any) -> bool:
        return self.descriptor.external and validate(self.descriptor.validator, value)

    def __repr__(self) -> str:
        return f"Parameter(name={self.name!r}, value={self.value!r})"


class ParameterRegistry:
    """Resolved values of every catalogued parameter.

    Only the catalog is iterated, the options are consulted for the names it
    declares. A supplied value replaces the default when the parameter is
    external and the value passes validation, anything else keeps the
    default without raising.
    """

    def __init__(
        self,
        options: Mapping[str, Any] | None = None,
        catalog: tuple[ParameterDescriptor, ...] = PARAMETER_CATALOG,
    ) -> None:
        self._parameters: dict[str, Parameter] = {
            descriptor.name: Parameter(descriptor) for descriptor in catalog
        }
        if options:
            self._apply_overrides(options)

    def _apply_overrides(self, options: Mapping[str, Any]) -> None:
        for name, parameter in self._parameters.items():
            if name not in options:
                continue
            value = options[name]
            if parameter.accepts(value):
                logger.debug("parameter %s overridden with %r", name, value)
                parameter.value = _normalize(parameter.descriptor.validator, value)
            else:
                logger.debug(
                    "ignoring value %r for parameter %s, keeping default %r",
                    value,
                    name,
                    parameter.value,
                )

    def value(self, name: str) -> Any:
        parameter = self._parameters.get(name)
        assert_internal(
            parameter is not None,
            f"Unknown connection parameter: {name}",
            errno=ER_UNKNOWN_PARAMETER,
        )
        return parameter.value

    def __contains__(self, name: object) -> bool:
        return name in self._parameters

    def __iter__(self) -> Iterator[str]:
        return iter(self._parameters)

    def __len__(self) -> int:
        return len(self._parameters)

    def as_dict(self) -> dict[str, Any]:
        return {name: p.value for name, p in self._parameters.items()}
