#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Reduce the returned metric series to one value per result key

A single requested metric may come back as several series of the same name,
e.g. host write_ios per disk. These are told apart by their context, which
usually repeats the selector values already shown by the service (host id,
cluster, service, ...). Only what remains after stripping those becomes part
of the result key:

    name=write_ios, context=datanode1.domain.com:sda  ->  write_ios_sda
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from cmmetrics.cloudera_manager.response import MetricSeries
from cmmetrics.utils.exceptions import InternalError
from cmmetrics.utils.perfdata import normalize_unit

LOGGER = logging.getLogger("cmmetrics.results")


@dataclass(frozen=True)
class MetricResult:
    key: str
    name: str
    value: float
    unit: str | None = None


def needs_context(series: Iterable[MetricSeries]) -> bool:
    """Do we have to tell same named series apart by their context?"""
    seen: set[str] = set()
    disambiguate = False
    for s in series:
        if s.latest is None:
            continue
        if s.name in seen:
            if s.context is None:
                raise InternalError(
                    f"found metric name '{s.name}' twice but no context field,"
                    " unsure how to differentiate!"
                )
            disambiguate = True
        seen.add(s.name)
    return disambiguate


def strip_scope(context: str, scope_values: Iterable[str]) -> str:
    """Remove the selector values (each optionally followed by a colon)

    >>> strip_scope("datanode1.domain.com:sda", ["datanode1.domain.com"])
    'sda'
    >>> strip_scope("hdfs:hdfs1", ["hdfs", "hdfs1"])
    ''
    """
    # longest first, a value may be a substring of another one
    for value in sorted(scope_values, key=len, reverse=True):
        if value:
            context = re.sub(f"{re.escape(value)}:?", "", context)
    return context


def result_key(series: MetricSeries, scope_values: Sequence[str], *, disambiguate: bool) -> str:
    if not disambiguate or series.context is None:
        return series.name
    if suffix := strip_scope(series.context, scope_values):
        return f"{series.name}_{suffix}"
    return series.name


def reduce_series(
    series: Sequence[MetricSeries], scope_values: Sequence[str]
) -> Sequence[MetricResult]:
    """Latest value per result key, sorted by key

    Series resolving to the same key overwrite each other, the last one wins.
    """
    disambiguate = needs_context(series)

    results: dict[str, MetricResult] = {}
    for s in series:
        if (sample := s.latest) is None or sample.value is None:
            continue
        key = result_key(s, scope_values, disambiguate=disambiguate)
        unit = None if s.unit is None else normalize_unit(s.unit)
        results[key] = MetricResult(key=key, name=s.name, value=sample.value, unit=unit)
        LOGGER.info(
            "%-20s \t%-20s \tvalue: %-12s%s",
            s.name,
            key,
            sample.value,
            ""
            if s.unit is None
            else f" \tunit: {s.unit:<10} \tunit castable to perfdata: {'no' if unit is None else 'yes'}",
        )

    return sorted(results.values(), key=lambda r: r.key)
