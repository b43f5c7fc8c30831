#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

import pytest

from gcpmetric.checkengine.checkresults import ActiveCheckResult, perfdata, summarize


def test_as_text_with_metrics() -> None:
    result = ActiveCheckResult(state=0, summary="Value: 75", metrics=["value=75;50;100"])
    assert result.as_text() == "Value: 75 | value=75;50;100"


def test_as_text_replaces_pipes() -> None:
    assert ActiveCheckResult(summary="a | b").as_text() == "a ❘ b"


@pytest.mark.parametrize(
    "state, prefix",
    [(0, "OK: "), (1, "WARNING: "), (2, "CRITICAL: "), (3, "UNKNOWN: ")],
)
def test_as_plugin_output(state: int, prefix: str) -> None:
    assert ActiveCheckResult(state=state, summary="x").as_plugin_output() == f"{prefix}x"


def test_from_subresults_adds_markers() -> None:
    result = ActiveCheckResult.from_subresults(
        ActiveCheckResult(state=0, summary="fine"),
        ActiveCheckResult(state=1, summary="meh"),
        ActiveCheckResult(state=2, summary="bad"),
        ActiveCheckResult(state=3, summary="what"),
    )
    assert result.state == 2
    assert result.summary == "fine, meh(!), bad(!!), what(?)"


def test_summarize_shows_worst_only() -> None:
    result = summarize(
        [
            ActiveCheckResult(state=0, summary="Check succeeded"),
            ActiveCheckResult(state=0, summary="Value: 150", metrics=["value=150;50;100"]),
            ActiveCheckResult(state=1, summary="above warning"),
            ActiveCheckResult(state=2, summary="above critical"),
        ]
    )
    assert result.as_plugin_output() == "CRITICAL: above critical(!!) | value=150;50;100"


def test_summarize_ok() -> None:
    result = summarize(
        [
            ActiveCheckResult(state=0, summary="Check succeeded"),
            ActiveCheckResult(state=0, summary="Value: 10", metrics=["value=10;50;100"]),
        ]
    )
    assert result.as_plugin_output() == "OK: Check succeeded, Value: 10 | value=10;50;100"


def test_summarize_unknown_beats_warning() -> None:
    result = summarize(
        [ActiveCheckResult(state=1, summary="warn"), ActiveCheckResult(state=3, summary="unkn")]
    )
    assert (result.state, result.summary) == (3, "unkn(?)")


def test_perfdata_float() -> None:
    assert perfdata("latency", 0.25, 1, 2) == "latency=0.25;1;2"


def test_perfdata_keeps_precision() -> None:
    assert perfdata("value", 1234567.8, 1000000) == "value=1234567.8;1000000"


def test_perfdata_quotes_label_with_spaces() -> None:
    assert perfdata("queue size", 3, 5) == "'queue size'=3;5"
