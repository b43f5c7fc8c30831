#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Turn the time series returned by the monitoring API into check results

Only the first time series of the response is looked at. With the default
aggregation (mean aligner and mean reducer over exactly one alignment
period) the API returns a single series with a single point. Anything else
usually means the filter matches more than intended.
"""

from __future__ import annotations

import enum
import statistics
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import assert_never

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import monitoring_v3
from google.cloud.monitoring_v3.types import Point, TimeSeries

from gcpmetric.checkengine.checkresults import ActiveCheckResult, perfdata, render_value
from gcpmetric.utils.check_utils import exceeds
from gcpmetric.utils.defines import CRIT, OK, UNKNOWN, WARN
from gcpmetric.utils.log import logger, VERBOSE

__all__ = ["CHECK_SUCCEEDED", "MultiplePointsPolicy", "Thresholds", "evaluate"]

CHECK_SUCCEEDED = ActiveCheckResult(state=OK, summary="Check succeeded")


class MultiplePointsPolicy(enum.Enum):
    UNKNOWN = "unknown"
    FIRST = "first"
    MEAN = "mean"


@dataclass(frozen=True)
class Thresholds:
    warning: int | None = None
    critical: int | None = None


class MalformedResultError(ValueError):
    pass


def evaluate(
    time_series: Iterable[TimeSeries],
    thresholds: Thresholds,
    *,
    policy: MultiplePointsPolicy = MultiplePointsPolicy.UNKNOWN,
    metric_name: str = "value",
) -> list[ActiveCheckResult]:
    """The returned list always starts with the OK result of the check itself.
    Problems are appended to it, nothing is ever removed."""
    return [
        CHECK_SUCCEEDED,
        *_evaluate_first_series(time_series, thresholds, policy, metric_name),
    ]


def _evaluate_first_series(
    time_series: Iterable[TimeSeries],
    thresholds: Thresholds,
    policy: MultiplePointsPolicy,
    metric_name: str,
) -> Iterator[ActiveCheckResult]:
    try:
        first = next(iter(time_series), None)
    except (GoogleAPIError, GoogleAuthError) as e:
        logger.error("Failed to fetch time series: %s", e)
        yield ActiveCheckResult(state=UNKNOWN, summary=f"Failed to perform check: {e}")
        return

    if first is None:
        yield ActiveCheckResult(
            state=UNKNOWN,
            summary="Failed to perform check, No results returned from the monitoring API",
        )
        return

    try:
        value = reduce_points(first.points, policy)
    except MalformedResultError as e:
        yield ActiveCheckResult(state=UNKNOWN, summary=f"Failed to perform check, {e}")
        return

    yield from check_levels(value, thresholds, metric_name)


def reduce_points(points: Sequence[Point], policy: MultiplePointsPolicy) -> float:
    if not points:
        raise MalformedResultError("no points in result")

    if len(points) == 1:
        return point_value(points[0])

    match policy:
        case MultiplePointsPolicy.UNKNOWN:
            logger.error(
                "Response contains %d points, please refine filter and aggregation "
                "params so that only 1 point will return",
                len(points),
            )
            raise MalformedResultError("too many points in result")
        case MultiplePointsPolicy.FIRST:
            # points are returned in reverse time order
            logger.log(VERBOSE, "Using the newest of %d points", len(points))
            return point_value(points[0])
        case MultiplePointsPolicy.MEAN:
            logger.log(VERBOSE, "Averaging %d points", len(points))
            return statistics.fmean(point_value(p) for p in points)
        case _:
            assert_never(policy)


def point_value(point: Point) -> float:
    kind = monitoring_v3.TypedValue.pb(point.value).WhichOneof("value")
    if kind == "int64_value":
        return point.value.int64_value
    if kind == "double_value":
        return point.value.double_value
    raise MalformedResultError(f"unsupported value type: {kind or 'empty'}")


def check_levels(
    value: float, thresholds: Thresholds, metric_name: str
) -> Iterator[ActiveCheckResult]:
    yield ActiveCheckResult(
        state=OK,
        summary=f"Value: {render_value(value)}",
        metrics=[perfdata(metric_name, value, thresholds.warning, thresholds.critical)],
    )

    if exceeds(value, thresholds.warning):
        yield ActiveCheckResult(
            state=WARN,
            summary=f"Result {render_value(value)} is greater than warning threshold "
            f"({thresholds.warning})",
        )

    if exceeds(value, thresholds.critical):
        yield ActiveCheckResult(
            state=CRIT,
            summary=f"Result {render_value(value)} is greater than critical threshold "
            f"({thresholds.critical})",
        )
