#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Warning and critical thresholds as given on the command line

A threshold is either a single number, which is an inclusive upper bound,
or an inclusive range "lower:upper". Either side of a range may be left
empty to make it unbounded:

    90      alert if value > 90
    10:90   alert if value < 10 or value > 90
    10:     alert if value < 10
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"
_LEVELS_RE = re.compile(rf"^(?:(?P<upper>{_NUMBER})|(?P<lo>{_NUMBER})?:(?P<hi>{_NUMBER})?)$")


@dataclass(frozen=True)
class Levels:
    lower: float | None
    upper: float | None

    @classmethod
    def parse(cls, text: str) -> Levels:
        """
        >>> Levels.parse("90")
        Levels(lower=None, upper=90.0)
        >>> Levels.parse(" 10:90 ")
        Levels(lower=10.0, upper=90.0)
        >>> Levels.parse("10:")
        Levels(lower=10.0, upper=None)
        """
        if (match := _LEVELS_RE.match(text.strip())) is None or text.strip() == ":":
            raise ValueError(f"invalid threshold '{text}', expected <upper> or <lower>:<upper>")
        if (upper := match.group("upper")) is not None:
            return cls(None, float(upper))

        lower = None if match.group("lo") is None else float(match.group("lo"))
        upper = None if match.group("hi") is None else float(match.group("hi"))
        if lower is not None and upper is not None and lower > upper:
            raise ValueError(f"invalid threshold '{text}', lower bound is above upper bound")
        return cls(lower, upper)

    def breached(self, value: float) -> bool:
        """
        >>> Levels(None, 90.0).breached(90)
        False
        >>> Levels(10.0, 90.0).breached(9.5)
        True
        """
        if self.lower is not None and value < self.lower:
            return True
        return self.upper is not None and value > self.upper

    def __str__(self) -> str:
        if self.lower is None and self.upper is not None:
            return _render(self.upper)
        return ":".join("" if b is None else _render(b) for b in (self.lower, self.upper))


def _render(bound: float) -> str:
    return str(int(bound)) if bound.is_integer() else str(bound)


def validate_levels(warning: Levels | None, critical: Levels | None) -> None:
    """The warning range has to lie within the critical range

    >>> validate_levels(Levels(None, 80.0), Levels(None, 90.0))
    >>> validate_levels(Levels(None, 95.0), Levels(None, 90.0))
    Traceback (most recent call last):
        ...
    ValueError: warning threshold (95) must not be above critical threshold (90)
    """
    if warning is None or critical is None:
        return
    if warning.upper is not None and critical.upper is not None and warning.upper > critical.upper:
        raise ValueError(
            f"warning threshold ({_render(warning.upper)}) must not be above"
            f" critical threshold ({_render(critical.upper)})"
        )
    if warning.lower is not None and critical.lower is not None and warning.lower < critical.lower:
        raise ValueError(
            f"warning lower threshold ({_render(warning.lower)}) must not be below"
            f" critical lower threshold ({_render(critical.lower)})"
        )


def check_levels(value: float, *, warning: Levels | None, critical: Levels | None) -> int:
    """Return the state for the value: 0 (OK), 1 (WARN) or 2 (CRIT)

    >>> check_levels(95, warning=Levels(None, 80.0), critical=Levels(None, 90.0))
    2
    >>> check_levels(85, warning=Levels(None, 80.0), critical=Levels(None, 90.0))
    1
    >>> check_levels(85, warning=None, critical=None)
    0
    """
    if critical is not None and critical.breached(value):
        return 2
    if warning is not None and warning.breached(value):
        return 1
    return 0
