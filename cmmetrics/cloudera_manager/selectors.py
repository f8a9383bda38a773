#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""The scope a metric query is made for

Cloudera Manager offers metrics for a cluster service (optionally narrowed
down to an activity, a HDFS nameservice or a single role) or for a host.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from cmmetrics.cloudera_manager.validation import (
    validate_activity,
    validate_cluster,
    validate_host_id,
    validate_nameservice,
    validate_role,
    validate_service,
)
from cmmetrics.utils.exceptions import UsageError

LOGGER = logging.getLogger("cmmetrics.selectors")

USAGE_COMBINATIONS = """must specify the type of metric to be collected using one of the following combinations:

--cluster --service
--cluster --service --activityId
--cluster --service --nameservice
--cluster --service --roleId
--hostId
"""


@dataclass(frozen=True)
class ClusterService:
    cluster: str
    service: str

    @property
    def service_path(self) -> str:
        return f"clusters/{self.cluster}/services/{self.service}"

    @property
    def path(self) -> str:
        return self.service_path

    @property
    def scope_values(self) -> Sequence[str]:
        return (self.cluster, self.service)


@dataclass(frozen=True)
class ClusterServiceActivity(ClusterService):
    activity: str

    @property
    def path(self) -> str:
        return f"{self.service_path}/activities/{self.activity}"

    @property
    def scope_values(self) -> Sequence[str]:
        return (self.cluster, self.service, self.activity)


@dataclass(frozen=True)
class ClusterServiceNameservice(ClusterService):
    nameservice: str

    @property
    def path(self) -> str:
        return f"{self.service_path}/nameservices/{self.nameservice}"

    @property
    def scope_values(self) -> Sequence[str]:
        return (self.cluster, self.service, self.nameservice)


@dataclass(frozen=True)
class ClusterServiceRole(ClusterService):
    role: str

    @property
    def path(self) -> str:
        return f"{self.service_path}/roles/{self.role}"

    @property
    def scope_values(self) -> Sequence[str]:
        return (self.cluster, self.service, self.role)


@dataclass(frozen=True)
class Host:
    host_id: str

    @property
    def path(self) -> str:
        return f"hosts/{self.host_id}"

    @property
    def scope_values(self) -> Sequence[str]:
        return (self.host_id,)


Selector = (
    ClusterService | ClusterServiceActivity | ClusterServiceNameservice | ClusterServiceRole | Host
)


def resolve_selector(
    *,
    cluster: str | None = None,
    service: str | None = None,
    host_id: str | None = None,
    activity: str | None = None,
    nameservice: str | None = None,
    role: str | None = None,
) -> Selector:
    """Validate the scope given on the command line and combine it to a selector

    >>> resolve_selector(cluster="Cluster 1", service="hdfs1", role="hdfs1-NAMENODE-1a2b").path
    'clusters/Cluster 1/services/hdfs1/roles/hdfs1-NAMENODE-1a2b'
    >>> resolve_selector(host_id="datanode1.domain.com").path
    'hosts/datanode1.domain.com'
    """
    sub_scopes = {"activity": activity, "nameservice": nameservice, "role": role}

    if host_id is not None and any(
        v is not None for v in (cluster, service, activity, nameservice, role)
    ):
        raise UsageError(
            "cannot specify both --hostId and --cluster/service/roleId type metrics at the same time"
        )

    if cluster is not None and service is not None:
        cluster = validate_cluster(cluster)
        service = validate_service(service)
        LOGGER.info("cluster: %s", cluster)
        LOGGER.info("service: %s", service)
        return _resolve_sub_scope(ClusterService(cluster, service), **sub_scopes)

    if host_id is not None:
        host_id = validate_host_id(host_id)
        LOGGER.info("hostId: %s", host_id)
        return Host(host_id)

    raise UsageError(USAGE_COMBINATIONS)


def _resolve_sub_scope(
    base: ClusterService,
    *,
    activity: str | None,
    nameservice: str | None,
    role: str | None,
) -> Selector:
    given = [
        option
        for option, value in (("activityId", activity), ("nameservice", nameservice), ("roleId", role))
        if value is not None
    ]
    # at most one sub scope is used, in this order of priority
    if len(given) > 1:
        LOGGER.warning("only --%s is queried, ignoring --%s", given[0], ", --".join(given[1:]))

    if activity is not None:
        activity = validate_activity(activity)
        LOGGER.info("activity: %s", activity)
        return ClusterServiceActivity(base.cluster, base.service, activity)
    if nameservice is not None:
        nameservice = validate_nameservice(nameservice)
        LOGGER.info("nameservice: %s", nameservice)
        return ClusterServiceNameservice(base.cluster, base.service, nameservice)
    if role is not None:
        role = validate_role(role)
        LOGGER.info("roleId: %s", role)
        return ClusterServiceRole(base.cluster, base.service, role)
    return base
