"""Request lifecycle events delivered to a caller-supplied observer.

Observers are passed explicitly in `RequestOptions.observer`; there is no
process-wide handler registry.
"""

import time
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, Field

from stripeclient.common.logging import logger


REQUEST_START = ("stripe", "request", "start")
REQUEST_STOP = ("stripe", "request", "stop")


class TelemetryEvent(BaseModel):
    """One lifecycle event for a single API call."""

    name: tuple[str, str, str]
    measurements: dict[str, int] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)


Observer = Callable[[TelemetryEvent], None]


def emit(observer: Observer | None, event: TelemetryEvent) -> None:
    """Deliver `event`; observer failures are logged and never propagate."""

    if observer is None:
        return
    try:
        observer(event)
    except Exception as exc:
        logger.warning("telemetry observer failed event=%s error=%s", ".".join(event.name), exc)


class RequestSpan:
    """Pairs the `start` and `stop` events of one call; `stop` carries an integer duration."""

    def __init__(self, observer: Observer | None, metadata: dict[str, Any]) -> None:
        self.observer = observer
        self.metadata = metadata
        self._started_ns = 0

    def begin(self) -> None:
        self._started_ns = time.perf_counter_ns()
        emit(
            self.observer,
            TelemetryEvent(
                name=REQUEST_START,
                measurements={"system_time": time.time_ns()},
                metadata=dict(self.metadata),
            ),
        )

    def end(self, **extra: Any) -> int:
        """Emit `stop` and return the elapsed time in nanoseconds."""

        duration = time.perf_counter_ns() - self._started_ns
        emit(
            self.observer,
            TelemetryEvent(
                name=REQUEST_STOP,
                measurements={"duration": duration},
                metadata={**self.metadata, **extra},
            ),
        )
        return duration
