"""
Harvest events: Hooks for observing which entropy sources succeeded.

Ordering guarantees:
- Synchronous emission: Events are emitted from the harvesting thread, in
  declared source order. The local probe's event is emitted as soon as it
  returns; remote probe events follow once every remote has settled or hit
  the deadline
- Best-effort delivery: If the callback raises, the exception is logged and
  the harvest continues
- HARVEST_COMPLETE is always the last event of a harvest
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Callable

logger = logging.getLogger(__name__)


class HarvestEventKind(str, Enum):
    """Types of events emitted by the harvester."""

    PROBE_SUCCEEDED = "probe_succeeded"
    PROBE_FAILED = "probe_failed"
    HARVEST_COMPLETE = "harvest_complete"


@dataclass(frozen=True)
class HarvestEvent:
    """
    An event emitted during entropy harvesting.

    Attributes:
        kind: The type of event.
        source: The source label this event relates to (None for global events).
        timestamp: When the event occurred.
        payload: Event-specific data.
    """

    kind: HarvestEventKind
    source: str | None
    timestamp: datetime
    payload: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def probe_succeeded(cls, source: str, sample: str) -> HarvestEvent:
        """Create a probe_succeeded event."""
        return cls(
            kind=HarvestEventKind.PROBE_SUCCEEDED,
            source=source,
            timestamp=datetime.now(),
            payload={"sample": sample},
        )

    @classmethod
    def probe_failed(cls, source: str, error: str) -> HarvestEvent:
        """Create a probe_failed event."""
        return cls(
            kind=HarvestEventKind.PROBE_FAILED,
            source=source,
            timestamp=datetime.now(),
            payload={"error": error},
        )

    @classmethod
    def harvest_complete(cls, seed: int, sources: list[str]) -> HarvestEvent:
        """Create a harvest_complete event."""
        return cls(
            kind=HarvestEventKind.HARVEST_COMPLETE,
            source=None,
            timestamp=datetime.now(),
            payload={"seed": seed, "sources": sources},
        )


# Type alias for event callbacks
HarvestEventCallback = Callable[[HarvestEvent], None]


def emit_event(callback: HarvestEventCallback | None, event: HarvestEvent) -> None:
    """
    Emit an event to a callback, with best-effort delivery.

    If the callback raises an exception, it is logged and the harvest
    continues.

    Args:
        callback: The event callback (may be None).
        event: The event to emit.
    """
    if callback is None:
        return

    try:
        callback(event)
    except Exception as e:
        logger.warning(f"Event callback failed for {event.kind}: {e}")


class EventEmitter:
    """
    Helper class for emitting harvest events.

    Wraps a callback and provides convenience methods for each event kind.
    """

    def __init__(self, callback: HarvestEventCallback | None = None) -> None:
        self._callback = callback

    def emit(self, event: HarvestEvent) -> None:
        """Emit an event."""
        emit_event(self._callback, event)

    def probe_succeeded(self, source: str, sample: str) -> None:
        """Emit a probe_succeeded event."""
        self.emit(HarvestEvent.probe_succeeded(source, sample))

    def probe_failed(self, source: str, error: str) -> None:
        """Emit a probe_failed event."""
        self.emit(HarvestEvent.probe_failed(source, error))

    def harvest_complete(self, seed: int, sources: list[str]) -> None:
        """Emit a harvest_complete event."""
        self.emit(HarvestEvent.harvest_complete(seed, sources))
