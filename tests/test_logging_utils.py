"""
Unit Tests for Logging Utilities
"""

import logging
from unittest.mock import patch

from formstamp.logging_utils import attach_callback_handler, configure_logging, detach_callback_handler


class TestCallbackHandler:
    """Tests for the callback log handler."""

    def test_attach_when_package_logger_warns_then_callback_receives_message(self):
        # Arrange
        received = []
        handler = attach_callback_handler(lambda message, level: received.append((message, level)))

        # Act
        try:
            logging.getLogger("formstamp.composer.output.renderer").warning("Asset failed: photoFace")
        finally:
            detach_callback_handler(handler)

        # Assert
        assert received == [("Asset failed: photoFace", "WARNING")]

    def test_detach_when_removed_then_no_more_messages(self):
        received = []
        handler = attach_callback_handler(lambda message, level: received.append(message))
        detach_callback_handler(handler)

        logging.getLogger("formstamp.editor.session").warning("ignored")

        assert received == []

    def test_emit_when_debug_then_reported_as_info(self):
        received = []
        handler = attach_callback_handler(lambda message, level: received.append(level), level=logging.DEBUG)
        logger = logging.getLogger("formstamp.composer.layout.planner")
        previous = logger.level
        logger.setLevel(logging.DEBUG)
        try:
            logger.debug("No value for 'dob', skipping")
        finally:
            logger.setLevel(previous)
            detach_callback_handler(handler)

        assert received == ["INFO"]


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_configure_when_verbose_then_debug_level(self):
        with patch("formstamp.logging_utils.logging.basicConfig") as basic_config:
            configure_logging(verbose=True)
        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
        assert basic_config.call_args.kwargs["force"] is True

    def test_configure_when_default_then_info_level(self):
        with patch("formstamp.logging_utils.logging.basicConfig") as basic_config:
            configure_logging()
        assert basic_config.call_args.kwargs["level"] == logging.INFO
