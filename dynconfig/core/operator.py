"""Configuration operator.

Coordinates readers, writers and notifiers around a single caller-owned
configuration object:

- process(): read from every reader in order, persist through every writer,
  then start the notifiers.
- config_changed(): re-read from the one source that changed, persist through
  every writer and log the new state.

All mutation of the configuration object and the writer fan-out happen under
one lock, so change events from several notifiers are applied one at a time.
Notifiers publish to a ChangeChannel that the operator drains on its own
dispatch thread.
"""

import json
import logging
import threading
import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .contracts import (
    ChangeChannel,
    ConfigChangeEvent,
    ConfigNotifier,
    ConfigReader,
    ConfigWriter,
)
from .exceptions import ConfigReadError, ConfigWriteError, NotifierStartError
from .fields import to_document

logger = logging.getLogger(__name__)

ConfigOption = Callable[["Operator"], None]
ChangeListener = Callable[[ConfigChangeEvent], None]


def with_config_reader(reader: ConfigReader) -> ConfigOption:
    """Add a reader; later readers take precedence over earlier ones."""
    def option(operator: "Operator") -> None:
        operator.readers.append(reader)
    return option


def with_config_writer(writer: ConfigWriter) -> ConfigOption:
    """Add a writer."""
    def option(operator: "Operator") -> None:
        operator.writers.append(writer)
    return option


def with_config_notifier(notifier: ConfigNotifier) -> ConfigOption:
    """Add a notifier and register the operator's change channel with it."""
    def option(operator: "Operator") -> None:
        operator.notifiers.append(notifier)
        notifier.register(operator.channel)
    return option


def with_change_listener(listener: ChangeListener) -> ConfigOption:
    """Call listener with a ConfigChangeEvent after each change-driven update."""
    def option(operator: "Operator") -> None:
        operator.listeners.append(listener)
    return option


class Operator:
    """Coordinates configuration readers, writers and notifiers.

    Example:
        >>> config = Config()
        >>> yaml_file = YAMLFileAdaptor("/etc/my_app/config.yaml")
        >>> operator = Operator(
        ...     config,
        ...     with_config_reader(EnvConfigAdaptor("MY_APP")),
        ...     with_config_reader(yaml_file),
        ...     with_config_writer(yaml_file),
        ...     with_config_notifier(FileWatcherAdaptor("/etc/my_app/config.yaml", yaml_file)),
        ... )
        >>> operator.process()
    """

    dispatch_poll_interval = 0.5

    def __init__(self, config: Any, *options: ConfigOption):
        """Initialize operator.

        Args:
            config: Caller-owned configuration object, mutated in place
            *options: Option functions applied in order
        """
        self._config = config

        self.readers: List[ConfigReader] = []
        self.writers: List[ConfigWriter] = []
        self.notifiers: List[ConfigNotifier] = []
        self.listeners: List[ChangeListener] = []

        self.channel = ChangeChannel()

        self._lock = threading.RLock()
        self._stop_event: Optional[threading.Event] = None
        self._dispatcher: Optional[threading.Thread] = None

        # Statistics
        self._change_count = 0
        self._failed_reads = 0
        self._failed_writes = 0
        self._last_change_time: Optional[datetime] = None

        for option in options:
            option(self)

    @property
    def config(self) -> Any:
        return self._config

    def process(self, stop_event: Optional[threading.Event] = None) -> None:
        """Read, persist and start watching.

        Args:
            stop_event: Cancellation signal shared by every notifier; one is
                created when omitted and set by stop()

        Raises:
            ConfigReadError: A reader failed; later readers were not run
            ConfigWriteError: A writer failed; notifiers were not started
            NotifierStartError: A notifier could not start watching
        """
        with self._lock:
            self._read(self._config)
            self._write(self._config)

        if stop_event is None:
            current = self._stop_event
            stop_event = current if current is not None and not current.is_set() else threading.Event()
        self._stop_event = stop_event

        self._start_watchers(stop_event)
        if self.notifiers:
            self._start_dispatcher(stop_event)

        logger.info(
            f"Configuration processed: {len(self.readers)} readers, "
            f"{len(self.writers)} writers, {len(self.notifiers)} notifiers"
        )

    def config_changed(self, reader: ConfigReader) -> None:
        """Re-read from one source, persist through every writer and log the result.

        Errors are logged and never raised.
        """
        source = type(reader).__name__
        read_error: Optional[str] = None
        write_error: Optional[str] = None

        with self._lock:
            try:
                reader.read(self._config)
            except Exception as e:
                read_error = str(e)
                self._failed_reads += 1
                logger.error(f"failed to read config: {e}")

            try:
                self._write(self._config)
            except ConfigWriteError as e:
                write_error = str(e)
                self._failed_writes += 1
                logger.error(f"failed to write config: {e}")

            snapshot = to_document(self._config)
            self._change_count += 1
            self._last_change_time = datetime.now()

        logger.info(f"config changed: {json.dumps(snapshot, default=str)}")

        event = ConfigChangeEvent(
            source=source,
            config=snapshot if isinstance(snapshot, dict) else {'value': snapshot},
            read_error=read_error,
            write_error=write_error,
        )
        for listener in self.listeners:
            try:
                listener(event)
            except Exception as e:
                logger.error(f"Change listener failed: {e}", exc_info=True)

    def stop(self, timeout: float = 2.0) -> None:
        """Cancel watching and wait for the dispatch thread to finish."""
        if self._stop_event is not None:
            self._stop_event.set()
        self.channel.close()

        dispatcher = self._dispatcher
        if dispatcher is not None and dispatcher is not threading.current_thread():
            dispatcher.join(timeout=timeout)
        self._dispatcher = None

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                'readers': len(self.readers),
                'writers': len(self.writers),
                'notifiers': len(self.notifiers),
                'dispatching': self._dispatcher is not None and self._dispatcher.is_alive(),
                'total_changes': self._change_count,
                'failed_reads': self._failed_reads,
                'failed_writes': self._failed_writes,
                'pending_changes': self.channel.pending(),
                'last_change_time': (
                    self._last_change_time.isoformat()
                    if self._last_change_time else None
                ),
            }

    def __enter__(self) -> "Operator":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def _read(self, config: Any) -> None:
        for reader in self.readers:
            logger.debug(f"Reading config with {type(reader).__name__}")
            try:
                reader.read(config)
            except Exception as e:
                raise ConfigReadError(f"config read failed: {e}") from e

    def _write(self, config: Any) -> None:
        for writer in self.writers:
            logger.debug(f"Writing config with {type(writer).__name__}")
            try:
                writer.write(config)
            except Exception as e:
                raise ConfigWriteError(f"config write failed: {e}") from e

    def _start_watchers(self, stop_event: threading.Event) -> None:
        for notifier in self.notifiers:
            try:
                notifier.watch(stop_event)
            except Exception as e:
                raise NotifierStartError(f"failed to start notifier: {e}") from e

    def _start_dispatcher(self, stop_event: threading.Event) -> None:
        if self._dispatcher is not None and self._dispatcher.is_alive():
            return
        self._dispatcher = threading.Thread(
            target=self._dispatch,
            args=(stop_event,),
            daemon=True,
            name="dynconfig-dispatch",
        )
        self._dispatcher.start()

    def _dispatch(self, stop_event: threading.Event) -> None:
        while not stop_event.is_set():
            reader = self.channel.get(timeout=self.dispatch_poll_interval)
            if reader is None or stop_event.is_set():
                continue
            start_time = time.time()
            self.config_changed(reader)
            logger.debug(f"Applied change from {type(reader).__name__} in {time.time() - start_time:.3f}s")
        logger.debug("Dispatch thread stopped")


def new_operator(config: Any, *options: ConfigOption) -> Operator:
    """Create an operator for config with the given options."""
    return Operator(config, *options)


__all__ = [
    'Operator',
    'ConfigOption',
    'ChangeListener',
    'new_operator',
    'with_config_reader',
    'with_config_writer',
    'with_config_notifier',
    'with_change_listener',
]
