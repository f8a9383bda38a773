#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from cmmetrics.cloudera_manager.selectors import ClusterService, Selector
from cmmetrics.cloudera_manager.validation import validate_metric_name
from cmmetrics.utils.exceptions import UsageError

LOGGER = logging.getLogger("cmmetrics.request")

# None means "all metrics"
RequestedMetrics = tuple[str, ...] | None


@dataclass(frozen=True)
class APIRequest:
    resource: str
    params: Sequence[tuple[str, str]] = ()
    list_roles: bool = False


def parse_metric_names(metrics: str) -> tuple[str, ...]:
    """Split, validate and sort a comma separated list of metric names

    >>> parse_metric_names("dfs_capacity_used, dfs_capacity")
    ('dfs_capacity', 'dfs_capacity_used')
    """
    names = sorted({validate_metric_name(m) for m in metrics.split(",") if m.strip()})
    if not names:
        raise UsageError("no valid metrics given")
    LOGGER.info("metrics: [ %s ]", " ".join(names))
    return tuple(names)


def requested_metrics(
    metrics: str | None, *, all_metrics: bool, list_roles: bool
) -> RequestedMetrics:
    if all_metrics:
        LOGGER.info("metrics: ALL")
        return None
    if list_roles:
        return ()
    if metrics is None:
        raise UsageError("no metrics specified")
    return parse_metric_names(metrics)


def build_request(
    selector: Selector,
    metrics: RequestedMetrics,
    *,
    list_roles: bool = False,
    full_view: bool = False,
) -> APIRequest:
    """
    >>> from cmmetrics.cloudera_manager.selectors import Host
    >>> build_request(Host("node1"), ("cpu_user", "load_1"), full_view=True)
    APIRequest(resource='hosts/node1/metrics', params=(('view', 'full'), ('metrics', 'cpu_user'), ('metrics', 'load_1')), list_roles=False)
    """
    if list_roles:
        if not isinstance(selector, ClusterService):
            raise UsageError("must define cluster and service to be able to list roles")
        return APIRequest(f"{selector.service_path}/roles", list_roles=True)

    params: list[tuple[str, str]] = []
    if full_view:
        params.append(("view", "full"))
    params.extend(("metrics", name) for name in metrics or ())
    return APIRequest(f"{selector.path}/metrics", tuple(params))
