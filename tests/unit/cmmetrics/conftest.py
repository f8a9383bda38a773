#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import logging

import pytest

from cmmetrics.utils.log import logger


@pytest.fixture(autouse=True)
def reset_logger() -> None:
    logger.handlers[:] = []
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
