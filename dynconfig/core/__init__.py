"""Core Infrastructure

Operator, capability contracts, field helpers and errors.
"""

from .contracts import (
    ChangeChannel, ConfigChangeEvent, ConfigNotifier, ConfigReader, ConfigWriter,
)
from .exceptions import (
    ConfigReadError, ConfigTypeError, ConfigWriteError, DynConfigError,
    MalformedSourceError, MissingRequiredError, NotifierStartError,
    SinkWriteError, SourceUnavailableError, WatchStartError,
)
from .fields import env_field, is_zero
from .operator import (
    Operator, new_operator, with_change_listener, with_config_notifier,
    with_config_reader, with_config_writer,
)

__all__ = [
    'Operator', 'new_operator',
    'with_config_reader', 'with_config_writer', 'with_config_notifier', 'with_change_listener',
    'ConfigReader', 'ConfigWriter', 'ConfigNotifier', 'ConfigChangeEvent', 'ChangeChannel',
    'env_field', 'is_zero',
    'DynConfigError', 'SourceUnavailableError', 'MissingRequiredError', 'MalformedSourceError',
    'SinkWriteError', 'WatchStartError', 'ConfigTypeError',
    'ConfigReadError', 'ConfigWriteError', 'NotifierStartError',
]
