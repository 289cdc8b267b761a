import io
import logging

from passe.common.logging_utils import setup_logger


def test_setup_logger_writes_formatted_records() -> None:
    logger = logging.getLogger("passe.test.format")
    stream = io.StringIO()
    setup_logger(logger, logging.INFO, stream)
    logger.info("Storing %s", "user.json")
    logger.debug("hidden")
    assert "passe.test.format - INFO - Storing user.json" in stream.getvalue()
    assert "hidden" not in stream.getvalue()


def test_setup_logger_does_not_stack_handlers() -> None:
    logger = logging.getLogger("passe.test.repeat")
    stream = io.StringIO()
    setup_logger(logger, logging.INFO, stream)
    setup_logger(logger, logging.DEBUG, io.StringIO())
    assert len(logger.handlers) == 1
    assert logger.level == logging.DEBUG
    assert logger.handlers[0].level == logging.DEBUG
    logger.debug("now visible")
    assert "now visible" in stream.getvalue()
