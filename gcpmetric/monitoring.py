#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Access to the Google Cloud Monitoring API (formerly known as Stackdriver)"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import cache
from typing import Any, Final, Protocol

from google.cloud import monitoring_v3
from google.cloud.monitoring_v3 import Aggregation as gAggregation
from google.cloud.monitoring_v3.types import TimeSeries

from gcpmetric.utils.log import logger

# Those are enum classes defined in the Aggregation class. Not nice but works
Aligner = gAggregation.Aligner
Reducer = gAggregation.Reducer

CHECK_INTERVAL: Final = 300  # seconds


class ClientProtocol(Protocol):
    @property
    def project(self) -> str: ...

    def list_time_series(
        self, request: monitoring_v3.ListTimeSeriesRequest, timeout: float | None = None
    ) -> Iterable[TimeSeries]: ...


@dataclass(unsafe_hash=True)
class Client:
    """Lazily creates the metric service client

    Without account info the application default credentials are used.
    Clients for the same project with different account info are not equal,
    so they never share a cached metric service client.
    """

    account_info: Mapping[str, str] | None = field(hash=False)
    project: str

    @cache  # pylint: disable=method-cache-max-size-none
    def monitoring(self) -> monitoring_v3.MetricServiceClient:
        if self.account_info is None:
            return monitoring_v3.MetricServiceClient()
        return monitoring_v3.MetricServiceClient.from_service_account_info(dict(self.account_info))

    def list_time_series(
        self, request: monitoring_v3.ListTimeSeriesRequest, timeout: float | None = None
    ) -> Iterable[TimeSeries]:
        kwargs: dict[str, Any] = {} if timeout is None else {"timeout": timeout}
        return self.monitoring().list_time_series(request=request, **kwargs)


def time_interval(now: float, seconds_back: int = CHECK_INTERVAL) -> monitoring_v3.TimeInterval:
    seconds = int(now)
    nanos = int((now - seconds) * 10**9)
    return monitoring_v3.TimeInterval(
        {
            "end_time": {"seconds": seconds, "nanos": nanos},
            "start_time": {"seconds": (seconds - seconds_back), "nanos": nanos},
        }
    )


def build_request(project: str, filter_: str, now: float) -> monitoring_v3.ListTimeSeriesRequest:
    """One mean value of the last check interval, averaged over all matching series"""
    request = monitoring_v3.ListTimeSeriesRequest(
        {
            "name": f"projects/{project}",
            "filter": filter_,
            "interval": time_interval(now),
            "view": monitoring_v3.ListTimeSeriesRequest.TimeSeriesView.FULL,
            "aggregation": monitoring_v3.Aggregation(
                {
                    "alignment_period": {"seconds": CHECK_INTERVAL},
                    "per_series_aligner": Aligner.ALIGN_MEAN,
                    "cross_series_reducer": Reducer.REDUCE_MEAN,
                }
            ),
        }
    )
    logger.debug("Request: %s", request)
    return request
