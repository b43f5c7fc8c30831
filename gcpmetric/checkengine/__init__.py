#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.
"""Evaluation of time series into check results.

The typical sequence of events is

.. uml::

    actor User
    participant Client
    participant Evaluator

    User -> Client : list_time_series(request)
    Client --> Client : I/O
    Client -> Evaluator : evaluate(TimeSeries, Thresholds)
    Evaluator --> User : [ActiveCheckResult]

"""
