#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import json

import pytest

from tests.unit.cmmetrics.testlib import item, items_body, make_response

from cmmetrics.cloudera_manager.response import (
    decode_response,
    parse_metric_series,
    parse_roles,
    Sample,
)
from cmmetrics.utils.exceptions import (
    EmptyResponseError,
    InternalError,
    JsonDecodeError,
    MalformedJsonError,
    MalformedResponseError,
    NoDataError,
    TransportError,
)


def test_transport_error_carries_status_and_server_message() -> None:
    response = make_response(
        json.dumps({"message": "Bad credentials for user 'nagios'"}),
        status_code=401,
        reason="Unauthorized",
    )
    with pytest.raises(TransportError) as excinfo:
        decode_response(response)
    assert str(excinfo.value) == (
        "failed to query Cloudera Manager at 'http://cm.domain.com:7180': 401 Unauthorized."
        " Message returned by CM: Bad credentials for user 'nagios'"
    )


def test_transport_error_without_server_message() -> None:
    with pytest.raises(TransportError, match=r": 404 Not Found$"):
        decode_response(make_response("", status_code=404, reason="Not Found"))


def test_transport_error_certificate_hint() -> None:
    response = make_response(
        "",
        status_code=500,
        reason="Can't verify SSL peers without knowing which Certificate Authorities to trust",
    )
    with pytest.raises(TransportError, match="Do you need to use --ssl-CA-path or --tls-noverify"):
        decode_response(response)


def test_empty_body() -> None:
    with pytest.raises(EmptyResponseError, match="blank content"):
        decode_response(make_response(""))


@pytest.mark.parametrize("body", ["\x15\x03\x01\x00\x02\x02\n", "[]", "123"])
def test_body_without_letters_and_braces(body: str) -> None:
    with pytest.raises(MalformedJsonError, match="without --tls"):
        decode_response(make_response(body))


@pytest.mark.parametrize("body", ["<html><body>Moved</body></html>", '{"items": ['])
def test_undecodable_body(body: str) -> None:
    with pytest.raises(JsonDecodeError, match="failed to decode json"):
        decode_response(make_response(body))


def test_parse_roles() -> None:
    response = make_response(items_body([{"name": "role-A"}, {"name": "role-B", "type": "X"}]))
    assert parse_roles(response) == ["role-A", "role-B"]


def test_parse_roles_missing_name() -> None:
    with pytest.raises(InternalError, match="no 'name' field"):
        parse_roles(make_response(items_body([{"name": "role-A"}, {"type": "DATANODE"}])))


def test_parse_metric_series() -> None:
    series = parse_metric_series(
        make_response(items_body([item("write_ios", 5, 10, context="disk1", unit="ios")]))
    )
    assert len(series) == 1
    assert series[0].name == "write_ios"
    assert series[0].context == "disk1"
    assert series[0].unit == "ios"
    assert series[0].latest == Sample(value=10, timestamp="2024-03-02T10:00:00.000Z")


def test_latest_of_empty_series() -> None:
    (series,) = parse_metric_series(make_response(items_body([{"name": "a", "data": []}])))
    assert series.latest is None


@pytest.mark.parametrize("body", [items_body([]), json.dumps({})])
def test_no_items(body: str) -> None:
    with pytest.raises(NoDataError, match="no matching metrics"):
        parse_metric_series(make_response(body))


@pytest.mark.parametrize(
    "bad_item, field",
    [
        ({"data": []}, "'name' field"),
        ({"name": "dfs_capacity"}, "'data' field"),
        ({"unit": "bytes"}, "'data' and 'name' fields"),
    ],
)
def test_malformed_items(bad_item: dict[str, object], field: str) -> None:
    with pytest.raises(MalformedResponseError, match=f"no valid {field} returned"):
        parse_metric_series(make_response(items_body([item("dfs_capacity", 1), bad_item])))


def test_document_is_not_an_item_collection() -> None:
    with pytest.raises(MalformedResponseError, match="expected an item collection"):
        parse_metric_series(make_response(json.dumps({"items": 5})))
