#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import logging
from collections.abc import Sequence

from cmmetrics.checkers.checkresults import OK
from cmmetrics.cloudera_manager.request import RequestedMetrics
from cmmetrics.cloudera_manager.results import MetricResult
from cmmetrics.utils.exceptions import MetricsNotFoundError
from cmmetrics.utils.levels import check_levels, Levels

LOGGER = logging.getLogger("cmmetrics.evaluation")


def find_missing_metrics(
    metrics: RequestedMetrics, results: Sequence[MetricResult]
) -> MetricsNotFoundError | None:
    if not metrics:
        return None
    found = {r.name for r in results}
    if missing := [m for m in metrics if m not in found]:
        return MetricsNotFoundError(missing)
    return None


def representative_value(
    metrics: RequestedMetrics, results: Sequence[MetricResult]
) -> float | None:
    """The value thresholds are applied to

    Only one requested metric is evaluated. Should it yield multiple contextual
    metrics (such as host write_ios per partition), the highest one counts.
    """
    if metrics is None or len(metrics) != 1 or not results:
        return None
    if len(results) == 1:
        return results[0].value
    return max(r.value for r in results)


def evaluate_thresholds(
    metrics: RequestedMetrics,
    results: Sequence[MetricResult],
    *,
    warning: Levels | None,
    critical: Levels | None,
) -> int:
    if warning is None and critical is None:
        return OK
    if (value := representative_value(metrics, results)) is None:
        LOGGER.info("thresholds are only applied if a single metric is requested")
        return OK
    LOGGER.info("checking %s against warning %s, critical %s", value, warning, critical)
    return check_levels(value, warning=warning, critical=critical)
