"""Shared configuration types and test doubles."""

from tests.fixtures.fakes import (
    AppConfig,
    Config,
    Database,
    FakeNotifier,
    FakeReader,
    FakeWriter,
    Release,
    StringDefaults,
)

__all__ = [
    'AppConfig',
    'Config',
    'Database',
    'FakeNotifier',
    'FakeReader',
    'FakeWriter',
    'Release',
    'StringDefaults',
]
