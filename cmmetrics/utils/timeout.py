#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Abort the whole check after a fixed number of seconds

The plug-in has exactly one blocking request. The socket timeout of that
request does not cover slow bodies or DNS, so the overall limit is enforced
with SIGALRM:

    with Timeout(10, message="Timed out after 10 seconds"):
        ...
"""

from __future__ import annotations

import signal
from types import FrameType
from typing import Any, Final, NoReturn

from cmmetrics.utils.exceptions import CMTimeout

__all__ = ["CMTimeout", "Timeout"]


class Timeout:
    def __init__(self, seconds: int, *, message: str) -> None:
        if seconds < 1:
            raise ValueError(f"timeout must be at least one second, got {seconds}")
        self.seconds: Final = seconds
        self.message: Final = message
        self._previous_handler: Any = signal.SIG_DFL

    def _handler(self, signum: int, frame: FrameType | None) -> NoReturn:
        raise CMTimeout(self.message)

    def __enter__(self) -> Timeout:
        # None means the previous handler was not installed from Python
        self._previous_handler = signal.signal(signal.SIGALRM, self._handler) or signal.SIG_DFL
        signal.alarm(self.seconds)
        return self

    def __exit__(self, *exc_info: object) -> None:
        signal.alarm(0)
        signal.signal(signal.SIGALRM, self._previous_handler)
