#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from setuptools import find_packages, setup

setup(
    name="check-cm-metrics",
    version="0.3.1",
    description="Check Hadoop metrics via the Cloudera Manager REST API",
    packages=find_packages(include=["cmmetrics", "cmmetrics.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=["requests", "urllib3", "pydantic>=2"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "check_cm_metrics=cmmetrics.active_checks.check_cm_metrics:main",
        ],
    },
)
