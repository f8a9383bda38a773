#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Performance data in the monitoring plug-in format: label=value[UOM]"""

from typing import Final

# The units of measurement monitoring cores understand in performance data
PERFDATA_UNITS: Final = ("%", "s", "ms", "us", "B", "KB", "MB", "GB", "TB", "c")

# Unit names as reported by Cloudera Manager
_UNIT_ALIASES: Final = {
    "percent": "%",
    "seconds": "s",
    "milliseconds": "ms",
    "microseconds": "us",
    "bytes": "B",
}


def normalize_unit(unit: str) -> str | None:
    """Cast a unit to a performance data unit, None if that's not possible

    >>> normalize_unit("kb")
    'KB'
    >>> normalize_unit("bytes")
    'B'
    >>> normalize_unit("ios per second") is None
    True
    """
    lowered = unit.strip().lower()
    for perfdata_unit in PERFDATA_UNITS:
        if lowered == perfdata_unit.lower():
            return perfdata_unit
    return _UNIT_ALIASES.get(lowered)


def render_value(value: float) -> str:
    """
    >>> render_value(500)
    '500'
    >>> render_value(500.0)
    '500'
    >>> render_value(0.25)
    '0.25'
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def render_metric(label: str, value: float, unit: str | None = None) -> str:
    """
    >>> render_metric("dfs_capacity_used", 1024, "B")
    'dfs_capacity_used=1024B'
    """
    return f"{label}={render_value(value)}{unit or ''}"
