"""Progress event publishers.

The pipeline only needs ``publish(event)``; whether events are pushed over a
socket or polled from memory is up to the publisher.
"""

import logging
from collections import defaultdict
from typing import Iterable, Protocol

from models.schemas.progress import ProgressEvent

logger = logging.getLogger(__name__)

MAX_EVENTS_PER_ANALYSIS = 200


class ProgressPublisher(Protocol):
    def publish(self, event: ProgressEvent) -> None: ...


class InMemoryPublisher:
    """Keeps recent events per analysis id for polling clients and tests."""

    def __init__(self, max_events: int = MAX_EVENTS_PER_ANALYSIS) -> None:
        self.max_events = max_events
        self._events: dict[str, list[ProgressEvent]] = defaultdict(list)

    def publish(self, event: ProgressEvent) -> None:
        events = self._events[event.analysis_id]
        events.append(event)
        if len(events) > self.max_events:
            del events[: len(events) - self.max_events]

    def events(self, analysis_id: str) -> list[ProgressEvent]:
        return list(self._events.get(analysis_id, []))

    def clear(self, analysis_id: str | None = None) -> None:
        if analysis_id is None:
            self._events.clear()
        else:
            self._events.pop(analysis_id, None)


class LoggingPublisher:
    def publish(self, event: ProgressEvent) -> None:
        logger.info(
            "Analysis %s run %d: %s step=%s (%d%%)",
            event.analysis_id, event.run, event.status, event.step_name, event.percentage,
        )


class CompositePublisher:
    """Fans each event out to several publishers. One failing does not stop the rest."""

    def __init__(self, publishers: Iterable[ProgressPublisher]) -> None:
        self.publishers = list(publishers)

    def publish(self, event: ProgressEvent) -> None:
        for publisher in self.publishers:
            try:
                publisher.publish(event)
            except Exception as e:
                logger.warning(
                    "Publisher %s failed for analysis %s: %s",
                    type(publisher).__name__, event.analysis_id, e,
                )
