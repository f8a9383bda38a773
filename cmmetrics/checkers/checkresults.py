#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from typing import Final

__all__ = ["ActiveCheckResult", "service_state_name"]

# Exit codes of monitoring plug-ins
OK: Final = 0
WARN: Final = 1
CRIT: Final = 2
UNKNOWN: Final = 3


def service_state_name(state: int) -> str:
    """
    >>> service_state_name(2)
    'CRITICAL'
    """
    return {OK: "OK", WARN: "WARNING", CRIT: "CRITICAL", UNKNOWN: "UNKNOWN"}.get(state, "UNKNOWN")


@dataclasses.dataclass(frozen=True)
class ActiveCheckResult:
    state: int = OK
    summary: str = ""
    details: Sequence[str] = ()  # Sequence, but not str...
    metrics: Sequence[str] = ()

    def as_text(self) -> str:
        """
        >>> ActiveCheckResult(0, "load=2", (), ("load=2",)).as_text()
        'load=2 | load=2'
        >>> print(ActiveCheckResult(3, "roles:", ("a", "b")).as_text())
        roles:
        a
        b
        """
        return "\n".join(
            (
                " | ".join((self.summary, " ".join(self.metrics)))
                if self.metrics
                else self.summary,
                "".join(f"{line}\n" for line in self.details),
            )
        ).strip()
