#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from pathlib import Path

import pytest

# Subdirectories of tests/ which can be selected with -T
test_types = ("unit",)


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register the -T option to pytest"""
    parser.addoption(
        "-T",
        action="store",
        metavar="TYPE",
        default=None,
        help="Run tests of the given TYPE. Available types are: %s" % ", ".join(test_types),
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if (test_type := config.getoption("-T")) is None:
        return
    if test_type not in test_types:
        raise pytest.UsageError(f"Unknown test type: {test_type}")

    type_dir = Path(__file__).parent / "tests" / test_type
    selected = [item for item in items if type_dir in item.path.parents]
    config.hook.pytest_deselected(items=[item for item in items if item not in selected])
    items[:] = selected
