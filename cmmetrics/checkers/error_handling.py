#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Callable

from cmmetrics.checkers.checkresults import ActiveCheckResult, CRIT, UNKNOWN
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

_CRITICAL_ERRORS = (
    TransportError,
    EmptyResponseError,
    MalformedJsonError,
    JsonDecodeError,
    NoDataError,
)


def check_result(callback: Callable[[], ActiveCheckResult], *, debug: bool) -> ActiveCheckResult:
    try:
        return callback()
    except Exception as exc:
        return handle_failure(exc, debug=debug)


def handle_failure(exc: Exception, *, debug: bool) -> ActiveCheckResult:
    if isinstance(exc, CMTimeout):
        return ActiveCheckResult(UNKNOWN, str(exc) or "Timed out")

    if isinstance(exc, _CRITICAL_ERRORS):
        return ActiveCheckResult(CRIT, str(exc))

    if isinstance(exc, InternalError):
        return ActiveCheckResult(UNKNOWN, f"internal error: {exc}")

    if isinstance(exc, (UsageError, MalformedResponseError)):
        return ActiveCheckResult(UNKNOWN, str(exc))

    if debug:
        raise exc
    return ActiveCheckResult(UNKNOWN, f"Unhandled exception: {exc!r}")
