"""Adaptors

Environment, file and file-watch implementations of the core contracts.
"""

from .envconfig import EnvConfigAdaptor
from .files import FileAdaptor, JSONFileAdaptor, YAMLFileAdaptor
from .filewatcher import FileWatcherAdaptor

__all__ = [
    'EnvConfigAdaptor',
    'FileAdaptor',
    'YAMLFileAdaptor',
    'JSONFileAdaptor',
    'FileWatcherAdaptor',
]
