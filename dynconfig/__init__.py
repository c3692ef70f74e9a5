"""dynconfig - dynamic configuration coordinator.

Populates a caller-owned configuration object from environment variables and
files, persists the merged result and re-applies updates when a watched
source changes.
"""

from .core import (
    ChangeChannel, ConfigChangeEvent, ConfigNotifier, ConfigReader, ConfigWriter,
    ConfigReadError, ConfigTypeError, ConfigWriteError, DynConfigError,
    MalformedSourceError, MissingRequiredError, NotifierStartError, Operator,
    SinkWriteError, SourceUnavailableError, WatchStartError, env_field,
    new_operator, with_change_listener, with_config_notifier, with_config_reader,
    with_config_writer,
)
from .adaptors import (
    EnvConfigAdaptor, FileWatcherAdaptor, JSONFileAdaptor, YAMLFileAdaptor,
)

__version__ = "0.1.0"

__all__ = [
    'Operator', 'new_operator',
    'with_config_reader', 'with_config_writer', 'with_config_notifier', 'with_change_listener',
    'ConfigReader', 'ConfigWriter', 'ConfigNotifier', 'ConfigChangeEvent', 'ChangeChannel',
    'EnvConfigAdaptor', 'YAMLFileAdaptor', 'JSONFileAdaptor', 'FileWatcherAdaptor',
    'env_field',
    'DynConfigError', 'SourceUnavailableError', 'MissingRequiredError', 'MalformedSourceError',
    'SinkWriteError', 'WatchStartError', 'ConfigTypeError',
    'ConfigReadError', 'ConfigWriteError', 'NotifierStartError',
]
