"""Export observability — structured events for every step of a run.

All events are frozen dataclasses with nanosecond timestamps, safe for
concurrent production from multiple fetch workers.

Quick Start:
    >>> from prowl.observability import EventLog, ExportCollector
    >>> log = EventLog()
    >>> collector = ExportCollector(log)
    >>> # Pass collector to StaticExporter; inspect log after the run

"""

from prowl.observability.collector import ExportCollector
from prowl.observability.events import (
    BuildEvent,
    ExportEvent,
    ExportFailed,
    PhaseEntered,
    RewriteMissed,
    now_ns,
)
from prowl.observability.log import EventLog

__all__ = [
    "BuildEvent",
    "EventLog",
    "ExportCollector",
    "ExportEvent",
    "ExportFailed",
    "PhaseEntered",
    "RewriteMissed",
    "now_ns",
]
