#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""User-defined exceptions of the Cloudera Manager metrics check."""

from collections.abc import Sequence

__all__ = [
    "CMException",
    "CMTimeout",
    "EmptyResponseError",
    "InternalError",
    "JsonDecodeError",
    "MalformedJsonError",
    "MalformedResponseError",
    "MetricsNotFoundError",
    "NoDataError",
    "TransportError",
    "UsageError",
]


# never used directly in the code. Just some wrapper to make all of our
# exceptions handleable with one call
class CMException(Exception):
    pass


class UsageError(CMException):
    """Bad, missing or conflicting command line input.

    Raised before any network call is made.
    """


class TransportError(CMException):
    """The HTTP request failed or was answered with a non-success status."""


class EmptyResponseError(CMException):
    pass


class MalformedJsonError(CMException):
    """The body does not even look like JSON (most likely plain HTTP to a TLS port)."""


class JsonDecodeError(CMException):
    pass


class MalformedResponseError(CMException):
    """A required field is missing from the returned item collection."""


class NoDataError(CMException):
    pass


# The server violated its contract in a way we cannot safely interpret.
# This points to a defect or an unexpected API change, not to a user error.
class InternalError(CMException):
    pass


class CMTimeout(CMException):
    """Raised when the overall check timeout is reached.

    See also:
        `cmmetrics.utils.timeout` has a context manager using it.
    """


class MetricsNotFoundError(CMException):
    """Requested metrics without any result.

    This one is soft: it is never raised but rendered as the prefix of the
    report, and it downgrades the state to UNKNOWN.

    >>> str(MetricsNotFoundError(["dfs_capacity", "write_ios"]))
    'Metrics not found: dfs_capacity,write_ios.'
    """

    def __init__(self, metrics: Sequence[str]) -> None:
        super().__init__(f"Metrics not found: {','.join(metrics)}.")
        self.metrics = tuple(metrics)
