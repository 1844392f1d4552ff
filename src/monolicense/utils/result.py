# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

"""Explicit success/failure values used by every fallible stage of a scan.

Stages return a ``Result`` instead of raising so that callers can chain them
with ``map_result``/``flat_map`` and decide recovery on their own.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E")
F = TypeVar("F")


@dataclass(frozen=True)
class Success(Generic[T]):
    data: T

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure(Generic[E]):
    error: E

    @property
    def success(self) -> bool:
        return False


Result = Union[Success[T], Failure[E]]


def success(data: T) -> Success[T]:
    return Success(data)


def failure(error: E) -> Failure[E]:
    return Failure(error)


def is_success(result: "Result[T, E]") -> bool:
    return isinstance(result, Success)


def is_failure(result: "Result[T, E]") -> bool:
    return isinstance(result, Failure)


def map_result(result: "Result[T, E]", fn: Callable[[T], U]) -> "Result[U, E]":
    """Apply ``fn`` to the success value, passing failures through untouched."""
    if isinstance(result, Success):
        return Success(fn(result.data))
    return result


def flat_map(
    result: "Result[T, E]", fn: Callable[[T], "Result[U, E]"]
) -> "Result[U, E]":
    """Chain a stage that itself returns a ``Result``."""
    if isinstance(result, Success):
        return fn(result.data)
    return result


def map_error(result: "Result[T, E]", fn: Callable[[E], F]) -> "Result[T, F]":
    if isinstance(result, Failure):
        return Failure(fn(result.error))
    return result


def unwrap(result: "Result[T, E]") -> T:
    """Return the success value or raise.

    Only meant for call sites that already know the result succeeded.
    """
    if isinstance(result, Success):
        return result.data
    raise ValueError(f"Attempted to unwrap a failure: {result.error!r}")


def unwrap_or(result: "Result[T, E]", default: T) -> T:
    if isinstance(result, Success):
        return result.data
    return default


def collect_all(results: Iterable["Result[T, E]"]) -> "Result[list[T], E]":
    """Combine results into one, stopping at the first failure."""
    values: list[T] = []
    for result in results:
        if isinstance(result, Failure):
            return result
        values.append(result.data)
    return Success(values)
