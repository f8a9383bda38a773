#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import signal
import time

import pytest

from cmmetrics.utils.exceptions import CMTimeout
from cmmetrics.utils.timeout import Timeout


def test_timeout_fires() -> None:
    with pytest.raises(CMTimeout, match="^Timed out after 1 seconds$"):
        with Timeout(1, message="Timed out after 1 seconds"):
            time.sleep(5)


def test_handler_is_restored() -> None:
    previous = signal.getsignal(signal.SIGALRM)
    with Timeout(10, message="never"):
        assert signal.getsignal(signal.SIGALRM) is not previous
    assert signal.getsignal(signal.SIGALRM) == previous
    assert signal.alarm(0) == 0


@pytest.mark.parametrize("seconds", [0, -1])
def test_invalid_timeout(seconds: int) -> None:
    with pytest.raises(ValueError):
        Timeout(seconds, message="never")
