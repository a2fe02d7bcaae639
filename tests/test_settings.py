from __future__ import annotations

import io
import logging

import pytest

from minibatch.logs import DEFAULT_FORMAT, ROOT_LOGGER, configure_logging, parse_level
from minibatch.settings import DEFAULT_JOB, Settings


def test_settings_defaults():
    s = Settings.from_env({})

    assert s.log_level == logging.INFO
    assert s.log_format == DEFAULT_FORMAT
    assert s.default_job == DEFAULT_JOB == "myJob"


def test_settings_from_environment():
    s = Settings.from_env(
        {"MINIBATCH_LOG_LEVEL": "debug", "MINIBATCH_LOG_FORMAT": "%(message)s", "MINIBATCH_JOB": "other"}
    )

    assert s.log_level == logging.DEBUG
    assert s.log_format == "%(message)s"
    assert s.default_job == "other"


def test_unknown_level_is_rejected():
    with pytest.raises(ValueError, match="Unknown log level"):
        parse_level("chatty")


@pytest.mark.parametrize(
    "verbose, quiet, expected",
    [(False, False, logging.INFO), (True, False, logging.DEBUG), (False, True, logging.WARNING), (True, True, logging.WARNING)],
)
def test_configure_logging_levels(verbose, quiet, expected):
    logger = configure_logging(verbose=verbose, quiet=quiet, stream=io.StringIO())
    assert logger.level == expected


def test_configure_logging_replaces_handlers():
    buf = io.StringIO()
    configure_logging(fmt="%(message)s", stream=io.StringIO())
    configure_logging(fmt="%(message)s", stream=buf)

    logging.getLogger(f"{ROOT_LOGGER}.test").info("only once")

    assert len(logging.getLogger(ROOT_LOGGER).handlers) == 1
    assert buf.getvalue() == "only once\n"


def test_configured_logger_does_not_duplicate_through_root():
    root_buf = io.StringIO()
    root_handler = logging.StreamHandler(root_buf)
    logging.getLogger().addHandler(root_handler)
    try:
        buf = io.StringIO()
        logger = configure_logging(fmt="%(message)s", stream=buf)
        logging.getLogger(f"{ROOT_LOGGER}.jobs").info("hello")
    finally:
        logging.getLogger().removeHandler(root_handler)

    assert logger.propagate is False
    assert buf.getvalue() == "hello\n"
    assert root_buf.getvalue() == ""
