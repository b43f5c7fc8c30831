#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations


def worst_service_state(*states: int, default: int) -> int:
    """Return the 'worst' aggregation of all states

    Integers encode service states like this:

        0 -> OK
        1 -> WARN
        2 -> CRIT
        3 -> UNKNOWN

    The order of "badness" is OK -> WARN -> UNKNOWN -> CRIT, so this is
    not quite `max`.

    >>> worst_service_state(0, 1, default=0)
    1
    >>> worst_service_state(0, 1, 2, 3, default=0)
    2
    >>> worst_service_state(0, 1, 3, default=0)
    3
    >>> worst_service_state(default=3)
    3

    """
    return 2 if 2 in states else max(states, default=default)


def exceeds(value: float, threshold: int | None) -> bool:
    """Unset thresholds are never exceeded

    >>> exceeds(75, 50)
    True
    >>> exceeds(50, 50)
    False
    >>> exceeds(-3, -4)
    True
    >>> exceeds(10**9, None)
    False

    """
    return threshold is not None and value > threshold
