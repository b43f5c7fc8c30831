#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""check_gcp_metric - Check one metric of the Google Cloud Monitoring API

The metric is selected by a time series filter. The API is asked for the
mean over the last five minutes, averaged over all matching time series,
and the resulting value is compared against the given thresholds:

    check_gcp_metric --project my-project \\
        --filter 'metric.type = "pubsub.googleapis.com/subscription/num_undelivered_messages"' \\
        --warningThreshold 50 --criticalThreshold 100
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from pydantic import BaseModel, ConfigDict, model_validator, ValidationError

from gcpmetric.checkengine.checkresults import ActiveCheckResult, summarize
from gcpmetric.checkengine.evaluation import (
    CHECK_SUCCEEDED,
    evaluate,
    MultiplePointsPolicy,
    Thresholds,
)
from gcpmetric.monitoring import build_request, Client, ClientProtocol
from gcpmetric.utils.defines import UNKNOWN
from gcpmetric.utils.log import logger, setup_logging_handler, verbosity_to_log_level

ClientFactory = Callable[[Mapping[str, str] | None, str], ClientProtocol]


class CheckOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    filter: str
    project: str
    critical_threshold: None | int
    warning_threshold: None | int
    credentials: None | str
    credentials_file: None | Path
    timeout: None | float
    multiple_points: MultiplePointsPolicy
    metric_name: str
    verbose: int
    debug: bool

    @model_validator(mode="after")
    def _check_required(self) -> CheckOptions:
        if not self.filter:
            raise ValueError("Missing filter param")
        if not self.project:
            raise ValueError("Missing project param")
        if self.critical_threshold is None and self.warning_threshold is None:
            raise ValueError(
                "you must provide either criticalThreshold param or warningThreshold param"
            )
        if not self.metric_name or any(c in self.metric_name for c in "='|"):
            raise ValueError("metric name must not be empty or contain any of: = ' |")
        return self

    @property
    def thresholds(self) -> Thresholds:
        return Thresholds(warning=self.warning_threshold, critical=self.critical_threshold)

    def account_info(self) -> None | Mapping[str, str]:
        if self.credentials is not None:
            return json.loads(self.credentials)
        if self.credentials_file is not None:
            return json.loads(self.credentials_file.read_text(encoding="utf-8"))
        return None


def _parse_arguments(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="check_gcp_metric",
        description="Check a metric of the Google Cloud Monitoring API against thresholds.",
    )
    parser.add_argument(
        "--filter",
        type=str,
        default="",
        help="Time series filter, e.g. 'metric.type = \"compute.googleapis.com/instance/uptime\"'",
    )
    parser.add_argument(
        "--project",
        type=str,
        default="",
        help="Name of the Google Cloud project containing the monitored resource",
    )
    parser.add_argument(
        "--criticalThreshold",
        "--critical-threshold",
        dest="critical_threshold",
        type=int,
        default=None,
        metavar="THRESHOLD",
        help="Report CRITICAL if the result is greater than this threshold.",
    )
    parser.add_argument(
        "--warningThreshold",
        "--warning-threshold",
        dest="warning_threshold",
        type=int,
        default=None,
        metavar="THRESHOLD",
        help="Report WARNING if the result is greater than this threshold.",
    )

    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--credentials",
        default=None,
        help="JSON credentials for a service account. "
        "Application default credentials are used if neither this nor --credentials-file is given.",
    )
    group.add_argument(
        "--credentials-file",
        type=Path,
        default=None,
        metavar="FILE",
        help="File containing the JSON credentials for a service account",
    )

    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds for the API call. Defaults to the client library default.",
    )
    parser.add_argument(
        "--multiple-points",
        type=MultiplePointsPolicy,
        choices=MultiplePointsPolicy,
        default=MultiplePointsPolicy.UNKNOWN,
        metavar="POLICY",
        help="What to do if the first time series contains more than one point: "
        "'unknown' reports UNKNOWN (default), 'first' uses the newest point, "
        "'mean' averages all points.",
    )
    parser.add_argument(
        "--metric-name",
        default="value",
        help="Name of the metric in the performance data (default: value). "
        "It must not contain '=', single quotes or '|'.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log to stderr, repeat for more details",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Debug mode: let Python exceptions come through.",
    )
    return parser.parse_args(argv)


def parse_options(argv: Sequence[str]) -> CheckOptions:
    return CheckOptions.model_validate(vars(_parse_arguments(argv)))


def _output_check_result(result: ActiveCheckResult) -> None:
    sys.stdout.write("%s\n" % result.as_plugin_output())


def _failed(reason: str) -> ActiveCheckResult:
    return ActiveCheckResult(state=UNKNOWN, summary=f"Failed to perform check: {reason}")


def check_gcp_metric(
    options: CheckOptions,
    client_factory: ClientFactory,
    now: float,
) -> list[ActiveCheckResult]:
    try:
        client = client_factory(options.account_info(), options.project)
    except (OSError, ValueError, GoogleAuthError) as e:
        logger.error("Failed to create client: %s", e)
        return [CHECK_SUCCEEDED, _failed(str(e))]

    request = build_request(options.project, options.filter, now)
    logger.info("Querying time series of project %s: %s", options.project, options.filter)
    try:
        time_series = client.list_time_series(request, timeout=options.timeout)
    except (GoogleAPIError, GoogleAuthError, ValueError) as e:
        logger.error("Failed to list time series: %s", e)
        return [CHECK_SUCCEEDED, _failed(str(e))]

    return evaluate(
        time_series,
        options.thresholds,
        policy=options.multiple_points,
        metric_name=options.metric_name,
    )


def _check_gcp_metric_main(
    argv: Sequence[str],
    client_factory: ClientFactory,
) -> ActiveCheckResult:
    try:
        options = parse_options(argv)
    except ValidationError as e:
        messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
        sys.stderr.write(f"{messages}\n")
        return ActiveCheckResult(state=UNKNOWN, summary=f"Invalid arguments: {messages}")

    setup_logging_handler(sys.stderr)
    logger.setLevel(verbosity_to_log_level(options.verbose))

    try:
        return summarize(check_gcp_metric(options, client_factory, time.time()))
    except Exception as e:
        if options.debug:
            raise
        logger.exception("Unhandled exception")
        return ActiveCheckResult(state=UNKNOWN, summary=f"Unhandled exception: {e}")


def main(
    argv: Sequence[str] | None = None,
    client_factory: ClientFactory | None = None,
) -> int:
    result = _check_gcp_metric_main(
        sys.argv[1:] if argv is None else argv,
        client_factory or Client,
    )
    _output_check_result(result)
    return result.state


if __name__ == "__main__":
    sys.exit(main())
