#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from collections.abc import Iterator

import pytest

from gcpmetric.utils import log


@pytest.fixture(autouse=True)
def fixture_reset_logging() -> Iterator[None]:
    """The check attaches a handler to the package logger, don't leak it into other tests"""
    yield
    log.clear_console_logging()
