#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest

from cmmetrics.utils.perfdata import normalize_unit, render_metric


@pytest.mark.parametrize(
    "unit, expected",
    [
        ("%", "%"),
        ("percent", "%"),
        ("s", "s"),
        ("seconds", "s"),
        ("ms", "ms"),
        ("us", "us"),
        ("B", "B"),
        ("bytes", "B"),
        ("mb", "MB"),
        (" TB ", "TB"),
        ("c", "c"),
        ("ios", None),
        ("bytes per second", None),
        ("", None),
    ],
)
def test_normalize_unit(unit: str, expected: str | None) -> None:
    assert normalize_unit(unit) == expected


@pytest.mark.parametrize(
    "label, value, unit, expected",
    [
        ("dfs_capacity", 500, "B", "dfs_capacity=500B"),
        ("cpu_percent", 12.5, "%", "cpu_percent=12.5%"),
        ("write_ios_sda", 3.0, None, "write_ios_sda=3"),
        ("delta", -2, None, "delta=-2"),
    ],
)
def test_render_metric(label: str, value: float, unit: str | None, expected: str) -> None:
    assert render_metric(label, value, unit) == expected
