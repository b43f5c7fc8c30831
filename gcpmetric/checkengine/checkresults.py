#!/usr/bin/env python3
# Copyright (C) 2024 Checkmk GmbH - License: GNU General Public License v2
# This file is part of Checkmk (https://checkmk.com). It is subject to the terms and
# conditions defined in the file COPYING, which is part of this source code package.

from __future__ import annotations

import dataclasses
from collections.abc import Sequence

from gcpmetric.utils.check_utils import worst_service_state
from gcpmetric.utils.defines import service_state_name

__all__ = ["ActiveCheckResult", "perfdata", "render_value", "state_markers", "summarize"]


# Symbolic representations of states in plug-in output
state_markers = ("", "(!)", "(!!)", "(?)")


def render_value(value: float) -> str:
    """Render a metric value without losing precision

    >>> render_value(75)
    '75'
    >>> render_value(60.0)
    '60'
    >>> render_value(1234567.8)
    '1234567.8'
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def perfdata(
    name: str,
    value: float,
    warn: float | None = None,
    crit: float | None = None,
) -> str:
    """Format one entry of Nagios performance data

    Labels containing whitespace are put in single quotes.

    >>> perfdata("value", 75, 50, 100)
    'value=75;50;100'
    >>> perfdata("value", 1.5, None, 3)
    'value=1.5;;3'
    >>> perfdata("value", 7)
    'value=7'
    >>> perfdata("queue size", 7)
    "'queue size'=7"
    """
    label = f"'{name}'" if any(c.isspace() for c in name) else name
    fields = [render_value(value)]
    fields.extend("" if v is None else render_value(v) for v in (warn, crit))
    return f"{label}={';'.join(fields).rstrip(';')}"


@dataclasses.dataclass(frozen=True, kw_only=True)
class ActiveCheckResult:
    state: int = 0
    summary: str = ""
    details: tuple[str, ...] | list[str] = ()  # Sequence, but not str...
    metrics: tuple[str, ...] | list[str] = ()

    def as_text(self) -> str:
        safe_summary = self._replace_pipe(self.summary)
        safe_details = "".join(f"{self._replace_pipe(line)}\n" for line in self.details)
        return "\n".join(
            (
                (
                    " | ".join((safe_summary, " ".join(self.metrics)))
                    if self.metrics
                    else safe_summary
                ),
                safe_details,
            )
        ).strip()

    def as_plugin_output(self) -> str:
        """The text as printed by a Nagios plug-in, prefixed by the state name"""
        return f"{service_state_name(self.state, 'UNKNOWN')}: {self.as_text()}"

    @classmethod
    def from_subresults(cls, *subresults: ActiveCheckResult) -> ActiveCheckResult:
        return cls(
            state=worst_service_state(*(s.state for s in subresults), default=0),
            summary=", ".join(cls._add_marker(s.summary, s.state) for s in subresults if s.summary),
            details=tuple(
                detail
                for s in subresults
                for detail in [
                    *s.details[:-1],
                    *(cls._add_marker(d, s.state) for d in s.details[-1:]),
                ]
            ),
            metrics=tuple(m for s in subresults for m in s.metrics),
        )

    @staticmethod
    def _add_marker(txt: str, state: int) -> str:
        marker = state_markers[state]
        return txt if txt.endswith(marker) else f"{txt}{marker}"

    @staticmethod
    def _replace_pipe(txt: str) -> str:
        """The vertical bar indicates end of service output and start of metrics.
        Replace the ones in the output by a Unicode "Light vertical bar"
        """
        return txt.replace("|", "\u2758")


def summarize(results: Sequence[ActiveCheckResult]) -> ActiveCheckResult:
    """Reduce to the worst state

    Only the texts of the results in the worst state are shown, the metrics
    of all results are kept.
    """
    worst = ActiveCheckResult.from_subresults(*results)
    return dataclasses.replace(
        ActiveCheckResult.from_subresults(*(r for r in results if r.state == worst.state)),
        metrics=worst.metrics,
    )
