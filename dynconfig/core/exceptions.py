"""Custom exceptions for dynconfig."""


class DynConfigError(Exception):
    """Base exception for dynconfig errors."""
    pass


class SourceUnavailableError(DynConfigError):
    """Configuration origin is missing or cannot be read."""
    pass


class MissingRequiredError(SourceUnavailableError):
    """A required value is absent from its source."""
    pass


class MalformedSourceError(DynConfigError):
    """Configuration source could not be decoded."""
    pass


class SinkWriteError(DynConfigError):
    """Configuration could not be persisted."""
    pass


class WatchStartError(DynConfigError):
    """Change monitoring could not be started."""
    pass


class ConfigTypeError(DynConfigError, TypeError):
    """Configuration object is of an unsupported type."""
    pass


class ConfigReadError(DynConfigError):
    """Read phase of the operator failed."""
    pass


class ConfigWriteError(DynConfigError):
    """Write phase of the operator failed."""
    pass


class NotifierStartError(DynConfigError):
    """A notifier failed to start watching."""
    pass


__all__ = [
    'DynConfigError',
    'SourceUnavailableError',
    'MissingRequiredError',
    'MalformedSourceError',
    'SinkWriteError',
    'WatchStartError',
    'ConfigTypeError',
    'ConfigReadError',
    'ConfigWriteError',
    'NotifierStartError',
]
