"""Export collector — typed recording helpers over an EventLog.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.
    Safe for concurrent use from fetch workers.

"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prowl.observability.events import (
    BuildEvent,
    ExportFailed,
    PhaseEntered,
    RewriteMissed,
    now_ns,
)
from prowl.observability.log import EventLog

if TYPE_CHECKING:
    from prowl._types import ExportPhase, FileKind


class ExportCollector:
    """Records export events into an EventLog.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_phase(self, phase: ExportPhase, *, locale: str | None = None) -> None:
        """Record a phase transition."""
        self._log.append(PhaseEntered(phase=phase, locale=locale, timestamp_ns=now_ns()))

    def record_build(
        self,
        kind: FileKind,
        source: str,
        target: str,
        *,
        locale: str = "",
        size_bytes: int = 0,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a written file."""
        self._log.append(
            BuildEvent(
                kind=kind,
                source=source,
                target=target,
                locale=locale,
                size_bytes=size_bytes,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_rewrite_miss(self, locale: str, source: str, sub_path: str) -> None:
        """Record a page that had no rewritable references."""
        self._log.append(
            RewriteMissed(
                locale=locale,
                source=source,
                sub_path=sub_path,
                timestamp_ns=now_ns(),
            )
        )

    def record_failure(
        self,
        phase: ExportPhase,
        source: str,
        error: BaseException,
        *,
        locale: str | None = None,
    ) -> None:
        """Record the error that stopped the run."""
        self._log.append(
            ExportFailed(
                phase=phase,
                source=source,
                locale=locale,
                error=repr(error),
                timestamp_ns=now_ns(),
            )
        )
