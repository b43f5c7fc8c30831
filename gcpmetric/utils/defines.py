#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Constants for the Nagios plug-in states."""

from typing import Final

OK: Final = 0
WARN: Final = 1
CRIT: Final = 2
UNKNOWN: Final = 3


def core_state_names() -> dict[int, str]:
    return {
        OK: "OK",
        WARN: "WARNING",
        CRIT: "CRITICAL",
        UNKNOWN: "UNKNOWN",
    }


def service_state_name(state_num: int, deflt: str = "") -> str:
    return core_state_names().get(state_num, deflt)
