"""Capability contracts for configuration sources and sinks.

Module overview
- Purpose: Defines the small interfaces the operator coordinates: readers
  populate a configuration object, writers persist it, notifiers watch a
  source and announce changes.
- Collaborators: Implemented by dynconfig.adaptors; consumed by
  dynconfig.core.operator.
- Concurrency: ChangeChannel is a thread-safe queue; notifiers publish from
  their own background threads and the operator drains it on its dispatch
  thread. Notifiers never hold a reference to the operator.
"""

import logging
import queue
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ConfigReader(ABC):
    """Populates a configuration object from one origin."""

    @abstractmethod
    def read(self, config: Any) -> None:
        """Mutate config in place with values held by this source."""


class ConfigWriter(ABC):
    """Persists a configuration object to a durable sink."""

    @abstractmethod
    def write(self, config: Any) -> None:
        """Serialize config, replacing any previous content of the sink."""


class ConfigNotifier(ConfigReader):
    """A source that can signal asynchronously that its value changed.

    Reading is delegated to a composed reader so any ConfigReader can be
    turned into a watched source.
    """

    def __init__(self, reader: ConfigReader):
        self.reader = reader
        self.channel: Optional["ChangeChannel"] = None

    def register(self, channel: "ChangeChannel") -> None:
        """Attach the channel change events are published to."""
        self.channel = channel

    @abstractmethod
    def watch(self, stop_event: threading.Event) -> None:
        """Start background monitoring and return immediately.

        Monitoring stops once stop_event is set. Only a failure to begin
        watching is raised; errors while watching are logged.
        """

    def read(self, config: Any) -> None:
        self.reader.read(config)

    def notify(self) -> None:
        if self.channel is None:
            logger.warning(f"{type(self).__name__} detected a change but is not registered")
            return
        self.channel.publish(self)


@dataclass
class ConfigChangeEvent:
    """Emitted after a change-driven update has been applied."""
    source: str
    config: Dict[str, Any]
    read_error: Optional[str] = None
    write_error: Optional[str] = None
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def success(self) -> bool:
        return self.read_error is None and self.write_error is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'source': self.source,
            'config': self.config,
            'read_error': self.read_error,
            'write_error': self.write_error,
            'timestamp': self.timestamp,
            'success': self.success,
        }


class ChangeChannel:
    """FIFO of readers whose source changed."""

    _STOP = object()

    def __init__(self):
        self._queue: "queue.Queue[Any]" = queue.Queue()

    def publish(self, reader: ConfigReader) -> None:
        self._queue.put(reader)

    def get(self, timeout: Optional[float] = None) -> Optional[ConfigReader]:
        """Return the next changed reader, or None on timeout or close."""
        try:
            item = self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
        if item is self._STOP:
            return None
        return item

    def close(self) -> None:
        """Wake up a consumer blocked in get()."""
        self._queue.put(self._STOP)

    def pending(self) -> int:
        return self._queue.qsize()


__all__ = [
    'ConfigReader',
    'ConfigWriter',
    'ConfigNotifier',
    'ConfigChangeEvent',
    'ChangeChannel',
]
