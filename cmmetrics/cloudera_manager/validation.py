#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Validators for the command line fields

Every validator returns the cleaned (trimmed) value or raises UsageError.
"""

import re
from typing import Final

from cmmetrics.utils.exceptions import UsageError

_CLUSTER_RE: Final = re.compile(r"[\w\s.-]+")
_NAME_RE: Final = re.compile(r"[\w-]+")
_ROLE_RE: Final = re.compile(r"[\w-]+-\w+-\w+")
_METRIC_RE: Final = re.compile(r"\w+")
_USER_RE: Final = re.compile(r"[\w.@\\-]+")
_HOST_LABEL_RE: Final = re.compile(r"[A-Za-z0-9](?:[A-Za-z0-9_-]{0,61}[A-Za-z0-9])?")


def _validate(value: str, regex: re.Pattern[str], error: str) -> str:
    if not regex.fullmatch(cleaned := value.strip()):
        raise UsageError(error)
    return cleaned


def validate_cluster(cluster: str) -> str:
    """
    >>> validate_cluster("  Cluster 1 - CDH4 ")
    'Cluster 1 - CDH4'
    """
    return _validate(
        cluster,
        _CLUSTER_RE,
        "invalid cluster name given, may only contain alphanumeric, space, dash, dots or underscores",
    )


def validate_service(service: str) -> str:
    return _validate(
        service, _NAME_RE, "invalid service name given, must be alphanumeric with dashes"
    )


def validate_activity(activity: str) -> str:
    return _validate(activity, _NAME_RE, "invalid activity given, must be alphanumeric with dashes")


def validate_nameservice(nameservice: str) -> str:
    return _validate(
        nameservice, _NAME_RE, "invalid nameservice given, must be alphanumeric with dashes"
    )


def validate_role(role: str) -> str:
    """
    >>> validate_role("hdfs4-NAMENODE-73d774cdeca832ac6a648fa305019cef")
    'hdfs4-NAMENODE-73d774cdeca832ac6a648fa305019cef'
    """
    return _validate(
        role,
        _ROLE_RE,
        "invalid role id given, expected in format such as <service>-<role>-<hexid>"
        " (eg hdfs4-NAMENODE-73d774cdeca832ac6a648fa305019cef)."
        " Use --list-roleIds to see available roles + IDs for a given cluster service",
    )


def is_hostname(hostname: str) -> bool:
    """
    >>> is_hostname("datanode1.domain.com")
    True
    >>> is_hostname("-bad-.domain.com")
    False
    """
    if not hostname or len(hostname) > 255:
        return False
    return all(_HOST_LABEL_RE.fullmatch(label) for label in hostname.removesuffix(".").split("."))


def validate_hostname(hostname: str, *, name: str = "host") -> str:
    if not is_hostname(cleaned := hostname.strip()):
        raise UsageError(f"invalid {name} given")
    return cleaned


def validate_host_id(host_id: str) -> str:
    return validate_hostname(host_id, name="host id")


def validate_port(port: int) -> int:
    if not 1 <= port <= 65535:
        raise UsageError(f"invalid port number given, must be between 1 and 65535, got {port}")
    return port


def validate_metric_name(metric: str) -> str:
    return _validate(
        metric,
        _METRIC_RE,
        f"invalid metric '{metric.strip()}' given, must be alphanumeric, may contain underscores",
    )


def validate_user(user: str) -> str:
    """
    >>> validate_user(" admin@EXAMPLE.COM ")
    'admin@EXAMPLE.COM'
    """
    return _validate(
        user,
        _USER_RE,
        "invalid user given, may only contain alphanumeric, dots, dashes, underscores, @ or backslashes",
    )
