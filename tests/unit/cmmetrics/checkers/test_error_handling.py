#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest

from cmmetrics.checkers.checkresults import ActiveCheckResult, CRIT, OK, UNKNOWN
from cmmetrics.checkers.error_handling import check_result, handle_failure
from cmmetrics.utils.exceptions import (
    CMTimeout,
    EmptyResponseError,
    InternalError,
    JsonDecodeError,
    MalformedJsonError,
    MalformedResponseError,
    NoDataError,
    TransportError,
    UsageError,
)


def test_no_failure() -> None:
    assert check_result(lambda: ActiveCheckResult(OK, "fine"), debug=False) == ActiveCheckResult(
        OK, "fine"
    )


@pytest.mark.parametrize(
    "exc, expected",
    [
        (UsageError("no metrics specified"), ActiveCheckResult(UNKNOWN, "no metrics specified")),
        (MalformedResponseError("bad"), ActiveCheckResult(UNKNOWN, "bad")),
        (
            CMTimeout("Timed out after 10 seconds"),
            ActiveCheckResult(UNKNOWN, "Timed out after 10 seconds"),
        ),
        (CMTimeout(), ActiveCheckResult(UNKNOWN, "Timed out")),
        (InternalError("twice"), ActiveCheckResult(UNKNOWN, "internal error: twice")),
        (TransportError("401"), ActiveCheckResult(CRIT, "401")),
        (EmptyResponseError("blank"), ActiveCheckResult(CRIT, "blank")),
        (MalformedJsonError("no json"), ActiveCheckResult(CRIT, "no json")),
        (JsonDecodeError("decode"), ActiveCheckResult(CRIT, "decode")),
        (NoDataError("nothing"), ActiveCheckResult(CRIT, "nothing")),
    ],
)
def test_handle_failure(exc: Exception, expected: ActiveCheckResult) -> None:
    assert handle_failure(exc, debug=False) == expected
    assert handle_failure(exc, debug=True) == expected


def test_unhandled_exception() -> None:
    assert handle_failure(KeyError("items"), debug=False) == ActiveCheckResult(
        UNKNOWN, "Unhandled exception: KeyError('items')"
    )


def test_unhandled_exception_in_debug_mode() -> None:
    def _fail() -> ActiveCheckResult:
        raise KeyError("items")

    with pytest.raises(KeyError):
        check_result(_fail, debug=True)
