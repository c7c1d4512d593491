"""Export event model.

Every step of an export run is recorded as a frozen event dataclass with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across fetch workers.

"""

import time
from dataclasses import dataclass

from prowl._types import ExportPhase, FileKind


@dataclass(frozen=True, slots=True)
class PhaseEntered:
    """The exporter moved to a new phase.

    Attributes:
        phase: Phase entered.
        locale: Locale being exported, for the per-locale phases.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    phase: ExportPhase
    locale: str | None
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class BuildEvent:
    """A file was written to the export tree.

    Attributes:
        kind: What was written.
        source: Route, asset path or description.
        target: Output file path.
        locale: Locale of the page, empty for locale-independent files.
        size_bytes: Size of the written file.
        duration_ms: Time taken in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: FileKind
    source: str
    target: str
    locale: str
    size_bytes: int
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RewriteMissed:
    """A sub-path was configured but a page had nothing to rewrite."""

    locale: str
    source: str
    sub_path: str
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ExportFailed:
    """The run stopped on an unrecovered error.

    Attributes:
        phase: Phase the run was in when it failed.
        source: Route or step that failed.
        locale: Locale being exported, if any.
        error: ``repr`` of the exception.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    phase: ExportPhase
    source: str
    locale: str | None
    error: str
    timestamp_ns: int


type ExportEvent = PhaseEntered | BuildEvent | RewriteMissed | ExportFailed


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
