"""File watcher notifier.

Monitors a single configuration file with watchdog and publishes a change
event when its content is modified. Events are debounced and compared by
content checksum, so the burst of events produced by one save (and the
operator's own rewrite of an unchanged document) results in at most one
notification.
"""

import hashlib
import logging
import threading
import time
from pathlib import Path
from typing import Optional, Union

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from ..core.contracts import ConfigNotifier, ConfigReader
from ..core.exceptions import WatchStartError

logger = logging.getLogger(__name__)


class FileChangeHandler(FileSystemEventHandler):
    """Forwards modification events for the watched file."""

    def __init__(self, watcher: 'FileWatcherAdaptor'):
        self.watcher = watcher

    def on_modified(self, event) -> None:
        if event.is_directory:
            return
        try:
            self.watcher.file_modified(Path(event.src_path))
        except Exception as e:
            logger.warning(f"file watcher error: {e}", exc_info=True)


class FileWatcherAdaptor(ConfigNotifier):
    """Notifier watching one file; reads through the composed reader."""

    poll_interval = 0.05

    def __init__(
        self,
        path: Union[str, Path],
        reader: ConfigReader,
        debounce_delay: float = 0.5,
    ):
        """Initialize file watcher.

        Args:
            path: File to watch
            reader: Reader used to pull the new value when the file changes
            debounce_delay: Quiet period after the last event before notifying
        """
        super().__init__(reader)
        self.file_path = Path(path)
        self.debounce_delay = debounce_delay

        self._lock = threading.Lock()
        self._observer: Optional[Observer] = None
        self._thread: Optional[threading.Thread] = None
        self._target: Optional[Path] = None
        self._pending_since: Optional[float] = None
        self._last_checksum: Optional[str] = None

    @property
    def watching(self) -> bool:
        return self._observer is not None

    def watch(self, stop_event: threading.Event) -> None:
        if self.channel is None:
            raise WatchStartError(f"failed to watch '{self.file_path}': notifier is not registered")
        if not self.file_path.exists():
            raise WatchStartError(f"failed to watch '{self.file_path}': file does not exist")

        with self._lock:
            if self._observer is not None:
                raise WatchStartError(f"failed to watch '{self.file_path}': already watching")

            self._target = self.file_path.resolve()
            self._last_checksum = self._compute_checksum()
            self._pending_since = None

            observer = Observer()
            try:
                observer.schedule(FileChangeHandler(self), str(self._target.parent), recursive=False)
                observer.start()
            except Exception as e:
                raise WatchStartError(f"failed to watch '{self.file_path}': {e}") from e
            self._observer = observer

        self._thread = threading.Thread(
            target=self._run,
            args=(stop_event,),
            daemon=True,
            name=f"dynconfig-watch-{self.file_path.name}",
        )
        self._thread.start()
        logger.info(f"Started watching file: {self.file_path}")

    def stop(self, timeout: float = 2.0) -> None:
        """Stop the observer; safe to call more than once."""
        with self._lock:
            observer = self._observer
            self._observer = None
        if observer is None:
            return
        observer.stop()
        observer.join(timeout=timeout)
        logger.info(f"Stopped watching file: {self.file_path}")

    def file_modified(self, path: Path) -> None:
        """Record a modification event if it concerns the watched file."""
        if self._target is None or path.resolve() != self._target:
            return
        with self._lock:
            self._pending_since = time.monotonic()

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.poll_interval):
            if not self.watching:
                return
            try:
                self._flush_pending()
            except Exception as e:
                logger.warning(f"file watcher error: {e}", exc_info=True)
        self.stop()

    def _flush_pending(self) -> None:
        with self._lock:
            if self._pending_since is None:
                return
            if time.monotonic() - self._pending_since < self.debounce_delay:
                return
            self._pending_since = None

        checksum = self._compute_checksum()
        if checksum is None:
            logger.warning(f"Config file changed but could not be read: {self.file_path}")
            return

        with self._lock:
            if checksum == self._last_checksum:
                logger.debug(f"No changes detected in {self.file_path}, skipping notification")
                return
            self._last_checksum = checksum

        logger.info(f"Config file changed: {self.file_path}")
        self.notify()

    def _compute_checksum(self) -> Optional[str]:
        try:
            with open(self.file_path, 'rb') as f:
                return hashlib.sha256(f.read()).hexdigest()
        except OSError:
            return None


__all__ = ['FileWatcherAdaptor', 'FileChangeHandler']
