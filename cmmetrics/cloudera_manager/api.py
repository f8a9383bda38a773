#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""HTTP access to the Cloudera Manager REST API"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final, Protocol
from urllib.parse import quote

import requests
import urllib3

from cmmetrics.cloudera_manager.request import APIRequest
from cmmetrics.cloudera_manager.response import certificate_hint, RawResponse
from cmmetrics.utils.exceptions import CMTimeout, TransportError

LOGGER = logging.getLogger("cmmetrics.api")

# still calling v1 for compatibility with older CM versions,
# everything we need has been available since then
API_PATH: Final = "/api/v1"
DEFAULT_PORT: Final = 7180
DEFAULT_TLS_PORT: Final = 7183
USER_AGENT: Final = "check_cm_metrics"


@dataclass(frozen=True)
class ConnectionSettings:
    host: str
    port: int
    use_tls: bool
    # True: system trust store, str: directory of CA certificates, False: no verification
    verify: bool | str
    user: str
    password: str
    timeout: int

    @property
    def url_prefix(self) -> str:
        return f"{'https' if self.use_tls else 'http'}://{self.host}:{self.port}"


class APIClientProto(Protocol):
    @property
    def url_prefix(self) -> str: ...

    def get(self, request: APIRequest) -> RawResponse: ...


class ClouderaManagerAPI:
    def __init__(self, settings: ConnectionSettings) -> None:
        self._settings = settings
        self._session = requests.Session()
        self._session.auth = (settings.user, settings.password)
        self._session.headers["User-Agent"] = USER_AGENT
        if settings.verify is False:
            urllib3.disable_warnings(category=urllib3.exceptions.InsecureRequestWarning)

    @property
    def url_prefix(self) -> str:
        return self._settings.url_prefix

    def get(self, request: APIRequest) -> RawResponse:
        url = f"{self.url_prefix}{API_PATH}/{quote(request.resource)}"
        LOGGER.info("querying %s", url)
        try:
            # Watch out: we must provide the verify keyword to every individual request call!
            # Else it will be overwritten by the REQUESTS_CA_BUNDLE env variable
            response = self._session.get(
                url,
                params=list(request.params),
                verify=self._settings.verify,
                timeout=self._settings.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise CMTimeout(
                f"Timed out after {self._settings.timeout} seconds"
                f" while querying Cloudera Manager at '{self.url_prefix}'"
            ) from e
        except requests.exceptions.SSLError as e:
            raise TransportError(
                f"failed to query Cloudera Manager at '{self.url_prefix}': {e}{certificate_hint(str(e))}"
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"failed to query Cloudera Manager at '{self.url_prefix}': {e}") from e

        content = response.text.removesuffix("\n")
        LOGGER.debug("returned body:\n\n%s\n", content or "<blank>")
        LOGGER.info("http code: %s", response.status_code)
        LOGGER.info("message: %s", response.reason)
        return RawResponse(
            status_code=response.status_code,
            reason=response.reason or "",
            body=content,
            origin=self.url_prefix,
        )
