#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from setuptools import find_packages, setup

setup(
    name="check-gcp-metric",
    version="1.0.0",
    description="Nagios compatible active check for metrics of the Google Cloud Monitoring API",
    packages=find_packages(include=["gcpmetric", "gcpmetric.*"]),
    include_package_data=True,
    python_requires=">=3.11",
    install_requires=[
        "google-api-core>=2.11",
        "google-auth>=2.17",
        "google-cloud-monitoring>=2.15",
        "pydantic>=2.0",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "check_gcp_metric=gcpmetric.active_checks.check_gcp_metric:main",
        ],
    },
)
