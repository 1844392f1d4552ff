# SPDX-License-Identifier: Apache-2.0
#
# Unless explicitly stated otherwise all files in this repository are licensed under the Apache License Version 2.0.
#
# This product includes software developed at Datadog (https://www.datadoghq.com/).
# Copyright 2026-present Datadog, Inc.

import pytest

from monolicense.utils.result import (
    Failure,
    Success,
    collect_all,
    failure,
    flat_map,
    is_failure,
    is_success,
    map_error,
    map_result,
    success,
    unwrap,
    unwrap_or,
)


def test_success_and_failure_are_distinguishable() -> None:
    ok = success(1)
    ko = failure("boom")
    assert is_success(ok) and not is_failure(ok)
    assert is_failure(ko) and not is_success(ko)
    assert ok.success is True
    assert ko.success is False


def test_map_result_only_touches_successes() -> None:
    assert map_result(success(2), lambda x: x * 10) == Success(20)
    assert map_result(failure("boom"), lambda x: x * 10) == Failure("boom")


def test_flat_map_chains_stages() -> None:
    def half(value: int) -> Success[int] | Failure[str]:
        return success(value // 2) if value % 2 == 0 else failure("odd")

    assert flat_map(success(8), half) == Success(4)
    assert flat_map(success(3), half) == Failure("odd")
    assert flat_map(failure("earlier"), half) == Failure("earlier")


def test_map_error_only_touches_failures() -> None:
    assert map_error(failure("boom"), str.upper) == Failure("BOOM")
    assert map_error(success(1), str.upper) == Success(1)


def test_unwrap() -> None:
    assert unwrap(success("value")) == "value"
    with pytest.raises(ValueError, match="Attempted to unwrap a failure"):
        unwrap(failure("boom"))


def test_unwrap_or() -> None:
    assert unwrap_or(success(1), 5) == 1
    assert unwrap_or(failure("boom"), 5) == 5


def test_collect_all_returns_first_failure() -> None:
    assert collect_all([success(1), success(2)]) == Success([1, 2])
    assert collect_all([success(1), failure("a"), failure("b")]) == Failure("a")
    assert collect_all([]) == Success([])
