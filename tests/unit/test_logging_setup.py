"""Unit tests for dynconfig/logging_setup.py."""

import logging
from unittest.mock import patch

from dynconfig.logging_setup import setup_logging


class TestSetupLogging:
    """Test root logger configuration."""

    @patch('logging.basicConfig')
    def test_defaults_to_info(self, mock_basic_config, monkeypatch):
        monkeypatch.delenv("DYNCONFIG_LOG_LEVEL", raising=False)
        setup_logging()
        kwargs = mock_basic_config.call_args.kwargs
        assert kwargs['level'] == logging.INFO
        assert kwargs['format'] == '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        assert len(kwargs['handlers']) == 1

    @patch('logging.basicConfig')
    def test_level_from_environment(self, mock_basic_config, monkeypatch):
        monkeypatch.setenv("DYNCONFIG_LOG_LEVEL", "debug")
        setup_logging()
        assert mock_basic_config.call_args.kwargs['level'] == logging.DEBUG

    @patch('logging.basicConfig')
    def test_explicit_level_and_file(self, mock_basic_config, tmp_path):
        setup_logging("WARNING", log_file=str(tmp_path / "dynconfig.log"))
        kwargs = mock_basic_config.call_args.kwargs
        assert kwargs['level'] == logging.WARNING
        assert isinstance(kwargs['handlers'][1], logging.FileHandler)
        kwargs['handlers'][1].close()
