#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

from collections.abc import Sequence

from cmmetrics.checkers.checkresults import ActiveCheckResult, UNKNOWN
from cmmetrics.cloudera_manager.results import MetricResult
from cmmetrics.utils.exceptions import MetricsNotFoundError
from cmmetrics.utils.perfdata import render_metric


def make_report(
    results: Sequence[MetricResult],
    *,
    state: int,
    not_found: MetricsNotFoundError | None = None,
) -> ActiveCheckResult:
    """Summary and performance data render the same key=value[unit] list

    >>> make_report([MetricResult("dfs_capacity", "dfs_capacity", 500)], state=0).as_text()
    'dfs_capacity=500 | dfs_capacity=500'
    """
    metrics = [render_metric(r.key, r.value, r.unit) for r in sorted(results, key=lambda r: r.key)]
    summary = " ".join(metrics)
    if not_found is not None:
        # still show what we got, but the state is UNKNOWN
        summary = f"{not_found} {summary}".rstrip()
        state = UNKNOWN
    return ActiveCheckResult(state=state, summary=summary, metrics=metrics)


def make_role_listing(cluster: str, service: str, roles: Sequence[str]) -> ActiveCheckResult:
    return ActiveCheckResult(
        state=UNKNOWN,
        summary=f"no checks performed, roles available for cluster '{cluster}', service '{service}':",
        details=roles,
    )
