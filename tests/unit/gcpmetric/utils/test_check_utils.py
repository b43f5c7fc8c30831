#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest

from gcpmetric.utils.check_utils import exceeds, worst_service_state
from gcpmetric.utils.defines import service_state_name


@pytest.mark.parametrize(
    "states, expected",
    [
        ((0, 0), 0),
        ((0, 1), 1),
        ((1, 3), 3),
        ((3, 2, 1), 2),
    ],
)
def test_worst_service_state(states: tuple[int, ...], expected: int) -> None:
    assert worst_service_state(*states, default=0) == expected


def test_exceeds_is_strict() -> None:
    assert not exceeds(100, 100)
    assert exceeds(100.5, 100)


def test_service_state_name() -> None:
    assert [service_state_name(s) for s in range(4)] == ["OK", "WARNING", "CRITICAL", "UNKNOWN"]
    assert service_state_name(17, "UNKNOWN") == "UNKNOWN"


def test_critical_outranks_unknown() -> None:
    assert worst_service_state(3, 2, default=0) == 2
    assert worst_service_state(1, 3, default=0) == 3
