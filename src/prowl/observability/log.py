"""Event log — the events of recent export runs, held in memory.

The exporter appends from the main thread and from every fetch worker, and
reads its own run back at the end (``query(since_ns=...)``) to report
pages that kept root-relative references.

Thread Safety:
    Appends and queries take the same ``threading.Lock``.

"""

import threading
from collections import deque

from prowl.observability.events import ExportEvent


class EventLog:
    """Bounded, newest-wins event buffer.

    Args:
        max_events: Events kept before the oldest are dropped.

    """

    __slots__ = ("_events", "_lock")

    def __init__(self, max_events: int = 10_000) -> None:
        self._events: deque[ExportEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: ExportEvent) -> None:
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        locale: str | None = None,
        source: str | None = None,
        limit: int | None = None,
    ) -> list[ExportEvent]:
        """Return matching events, newest first.

        Args:
            event_type: Keep only instances of this event class.
            since_ns: Keep only events stamped at or after this time.
            locale: Keep only events for this locale.
            source: Keep only events whose source contains this text.
            limit: Stop after this many matches; ``None`` returns all.

        """
        with self._lock:
            snapshot = tuple(self._events)

        matches: list[ExportEvent] = []
        for event in reversed(snapshot):
            if event.timestamp_ns < since_ns:
                continue
            if event_type is not None and not isinstance(event, event_type):
                continue
            if locale is not None and getattr(event, "locale", None) != locale:
                continue
            if source is not None and source not in getattr(event, "source", ""):
                continue
            matches.append(event)
            if limit is not None and len(matches) >= limit:
                break
        return matches
