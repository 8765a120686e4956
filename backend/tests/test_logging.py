"""Tests for core/logging.py - Logging configuration."""
import logging

import pytest

from refscout.core.logging import LOGGER_NAMESPACE, get_logger, setup_logging


class TestGetLogger:
    """Test logger naming."""

    def test_get_logger_returns_logger(self):
        assert isinstance(get_logger("test_module"), logging.Logger)

    def test_package_module_name_is_kept(self):
        """Loggers for package modules keep their __name__."""
        assert get_logger("refscout.services.aggregator").name == "refscout.services.aggregator"

    def test_foreign_name_is_nested_under_namespace(self):
        assert get_logger("my_custom_module").name == "refscout.my_custom_module"
        assert get_logger("__main__").name == "refscout.__main__"

    def test_namespace_itself(self):
        assert get_logger(LOGGER_NAMESPACE).name == "refscout"

    def test_similar_prefix_is_not_mistaken_for_namespace(self):
        assert get_logger("refscoutish").name == "refscout.refscoutish"

    def test_multiple_get_logger_calls_same_name(self):
        """Multiple calls with same name should return same logger."""
        assert get_logger("same_name") is get_logger("same_name")


class TestSetupLogging:
    """Test logging setup."""

    @pytest.fixture(autouse=True)
    def _restore(self):
        yield
        setup_logging()

    def test_sets_root_and_namespace_level(self):
        setup_logging(level="WARNING")

        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger(LOGGER_NAMESPACE).level == logging.WARNING

    def test_level_is_case_insensitive(self):
        setup_logging(level="debug")

        assert logging.getLogger(LOGGER_NAMESPACE).level == logging.DEBUG

    def test_unknown_level_defaults_to_info(self):
        setup_logging(level="chatty")

        assert logging.getLogger().level == logging.INFO

    def test_quiets_client_libraries(self):
        setup_logging(level="DEBUG")

        assert logging.getLogger("httpx").level == logging.WARNING
        assert logging.getLogger("httpcore").level == logging.WARNING
        assert logging.getLogger("openai").level == logging.WARNING

    def test_library_level_and_quiet_list_are_configurable(self):
        setup_logging(library_level="ERROR", quiet=("some.client",))

        assert logging.getLogger("some.client").level == logging.ERROR

    def test_single_handler(self):
        """Repeated setup should not stack handlers."""
        setup_logging()
        setup_logging()

        assert len(logging.getLogger().handlers) == 1
