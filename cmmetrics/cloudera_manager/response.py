#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Parse the documents returned by Cloudera Manager

Metric queries return

    {"items": [{"name": "...", "context": "...", "unit": "...", "data": [{"value": 1, ...}]}]}

role listings return

    {"items": [{"name": "..."}]}
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Final

import pydantic

from cmmetrics.utils.exceptions import (
    EmptyResponseError,
    InternalError,
    JsonDecodeError,
    MalformedJsonError,
    MalformedResponseError,
    NoDataError,
    TransportError,
)

_CERTIFICATE_TRUST_FAILURE: Final = re.compile(
    r"Can't verify SSL peers|certificate verify failed", re.IGNORECASE
)
_NO_LETTERS: Final = re.compile(r"[^A-Za-z]*")


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    reason: str
    body: str
    origin: str

    @property
    def ok(self) -> bool:
        return HTTPStatus.OK <= self.status_code < HTTPStatus.MULTIPLE_CHOICES


class Sample(pydantic.BaseModel, frozen=True):
    value: int | float | None = None
    timestamp: str | int | float | None = None


class MetricSeries(pydantic.BaseModel, frozen=True):
    name: str
    context: str | None = None
    unit: str | None = None
    data: Sequence[Sample | None]

    @property
    def latest(self) -> Sample | None:
        # the samples come in chronological order
        return self.data[-1] if self.data else None


class _Role(pydantic.BaseModel, frozen=True):
    name: str


class _ItemCollection(pydantic.BaseModel, frozen=True):
    items: Sequence[Any] = ()


class _CMErrorDescr(pydantic.BaseModel, frozen=True):
    message: str


def certificate_hint(message: str) -> str:
    """
    >>> certificate_hint("[SSL: CERTIFICATE_VERIFY_FAILED] certificate verify failed")
    '. Do you need to use --ssl-CA-path or --tls-noverify?'
    >>> certificate_hint("Unauthorized")
    ''
    """
    if _CERTIFICATE_TRUST_FAILURE.search(message):
        return ". Do you need to use --ssl-CA-path or --tls-noverify?"
    return ""


def _server_message(body: str) -> str | None:
    """The error message Cloudera Manager embeds in the body, if any

    >>> _server_message('{"message": "Bad credentials."}')
    'Bad credentials.'
    >>> _server_message('{"message": "Not a valid role."')
    'Not a valid role.'
    >>> _server_message("<html>Unauthorized</html>") is None
    True
    """
    try:
        return _CMErrorDescr.model_validate_json(body).message
    except pydantic.ValidationError:
        pass
    # truncated or otherwise broken JSON may still carry the message
    if (match := re.search(r'"message"\s*:\s*"(.+?)"', body)) is not None:
        return match.group(1)
    return None


def verify_response(response: RawResponse) -> None:
    if response.ok:
        return
    error = (
        f"failed to query Cloudera Manager at '{response.origin}':"
        f" {response.status_code} {response.reason}"
    )
    if (message := _server_message(response.body)) is not None:
        error += f". Message returned by CM: {message}"
    raise TransportError(error + certificate_hint(response.reason))


def decode_response(response: RawResponse) -> object:
    verify_response(response)

    if not response.body:
        raise EmptyResponseError(f"blank content returned by Cloudera Manager at '{response.origin}'")

    # give a more user friendly message than the JSON decoder would
    if _NO_LETTERS.fullmatch(response.body) and "{" not in response.body:
        raise MalformedJsonError(
            f"invalid json returned by Cloudera Manager at '{response.origin}',"
            " did you try to connect to the SSL port without --tls?"
        )

    try:
        return json.loads(response.body)
    except json.JSONDecodeError as e:
        raise JsonDecodeError(
            f"failed to decode json returned by Cloudera Manager at '{response.origin}': {e}"
        ) from e


def _items(document: object, origin: str) -> Sequence[Any]:
    try:
        return _ItemCollection.model_validate(document).items
    except pydantic.ValidationError as e:
        raise MalformedResponseError(
            f"unexpected document returned by Cloudera Manager at '{origin}',"
            " expected an item collection, run with -vvv to see the json returned"
        ) from e


def parse_roles(response: RawResponse) -> Sequence[str]:
    roles = []
    for item in _items(decode_response(response), response.origin):
        try:
            roles.append(_Role.model_validate(item).name)
        except pydantic.ValidationError as e:
            raise InternalError(
                "no 'name' field returned in item from role listing from Cloudera Manager"
                f" at '{response.origin}', check -vvv to see the output returned by CM"
            ) from e
    return roles


def parse_metric_series(response: RawResponse) -> Sequence[MetricSeries]:
    if not (items := _items(decode_response(response), response.origin)):
        raise NoDataError(f"no matching metrics returned by Cloudera Manager '{response.origin}'")
    return [_parse_series(item, response.origin) for item in items]


def _parse_series(item: object, origin: str) -> MetricSeries:
    try:
        return MetricSeries.model_validate(item)
    except pydantic.ValidationError as e:
        raise MalformedResponseError(
            f"no valid {_failed_fields(e)} returned in item collection from Cloudera Manager"
            f" at '{origin}', run with -vvv to see the (malformed?) json returned"
        ) from e


def _failed_fields(error: pydantic.ValidationError) -> str:
    fields = sorted({str(e["loc"][0]) for e in error.errors() if e["loc"]})
    if not fields:
        return "item"
    return " and ".join(f"'{f}'" for f in fields) + (" field" if len(fields) == 1 else " fields")
