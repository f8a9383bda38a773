#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Mapping
from typing import Any

import pytest
import requests

from cmmetrics.cloudera_manager.api import ClouderaManagerAPI, ConnectionSettings
from cmmetrics.cloudera_manager.request import APIRequest
from cmmetrics.cloudera_manager.response import RawResponse
from cmmetrics.utils.exceptions import CMTimeout, TransportError

SETTINGS = ConnectionSettings(
    host="cm.domain.com",
    port=7183,
    use_tls=True,
    verify="/etc/ssl/certs",
    user="nagios",
    password="secret",
    timeout=10,
)


class _FakeResponse:
    def __init__(self, text: str, status_code: int = 200, reason: str = "OK") -> None:
        self.text = text
        self.status_code = status_code
        self.reason = reason


class _RecordingGet:
    def __init__(self, result: _FakeResponse | Exception) -> None:
        self.result = result
        self.calls: list[tuple[str, Mapping[str, Any]]] = []

    def __call__(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append((url, kwargs))
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


@pytest.fixture(name="patch_get")
def fixture_patch_get(monkeypatch: pytest.MonkeyPatch) -> Any:
    def _patch(result: _FakeResponse | Exception) -> _RecordingGet:
        recorder = _RecordingGet(result)
        monkeypatch.setattr(requests.Session, "get", recorder)
        return recorder

    return _patch


def test_url_prefix() -> None:
    assert ClouderaManagerAPI(SETTINGS).url_prefix == "https://cm.domain.com:7183"
    assert (
        ClouderaManagerAPI(
            ConnectionSettings("cm", 7180, False, True, "u", "p", 10)
        ).url_prefix
        == "http://cm:7180"
    )


def test_get(patch_get: Any) -> None:
    recorder = patch_get(_FakeResponse('{"items": []}\n'))
    response = ClouderaManagerAPI(SETTINGS).get(
        APIRequest(
            "clusters/Cluster 1/services/hdfs4/metrics",
            (("metrics", "dfs_capacity"), ("metrics", "dfs_capacity_used")),
        )
    )

    assert response == RawResponse(
        status_code=200, reason="OK", body='{"items": []}', origin="https://cm.domain.com:7183"
    )
    ((url, kwargs),) = recorder.calls
    assert url == "https://cm.domain.com:7183/api/v1/clusters/Cluster%201/services/hdfs4/metrics"
    assert kwargs == {
        "params": [("metrics", "dfs_capacity"), ("metrics", "dfs_capacity_used")],
        "verify": "/etc/ssl/certs",
        "timeout": 10,
    }


def test_session_credentials() -> None:
    api = ClouderaManagerAPI(SETTINGS)
    # pylint: disable=protected-access
    assert api._session.auth == ("nagios", "secret")
    assert api._session.headers["User-Agent"] == "check_cm_metrics"


def test_error_status_is_passed_on(patch_get: Any) -> None:
    patch_get(_FakeResponse("", status_code=401, reason="Unauthorized"))
    response = ClouderaManagerAPI(SETTINGS).get(APIRequest("hosts/node1/metrics"))
    assert (response.status_code, response.reason, response.ok) == (401, "Unauthorized", False)


def test_timeout(patch_get: Any) -> None:
    patch_get(requests.exceptions.ReadTimeout("read timed out"))
    with pytest.raises(CMTimeout, match="Timed out after 10 seconds"):
        ClouderaManagerAPI(SETTINGS).get(APIRequest("hosts/node1/metrics"))


def test_certificate_failure(patch_get: Any) -> None:
    patch_get(requests.exceptions.SSLError("certificate verify failed"))
    with pytest.raises(TransportError, match=r"--ssl-CA-path or --tls-noverify\?$"):
        ClouderaManagerAPI(SETTINGS).get(APIRequest("hosts/node1/metrics"))


def test_connection_failure(patch_get: Any) -> None:
    patch_get(requests.exceptions.ConnectionError("Connection refused"))
    with pytest.raises(
        TransportError,
        match="failed to query Cloudera Manager at 'https://cm.domain.com:7183': Connection refused",
    ):
        ClouderaManagerAPI(SETTINGS).get(APIRequest("hosts/node1/metrics"))
