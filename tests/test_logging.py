import logging

import pytest

from branching.utils.logging import configure_logging, log_calls


def test_log_calls_logs_call_and_result(caplog):
    @log_calls("branching.tests")
    def add(a, b):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="branching.tests"):
        assert add(2, 3) == 5

    messages = [record.getMessage() for record in caplog.records]
    assert any("Calling add" in message for message in messages)
    assert any("add returned 5" in message for message in messages)


def test_log_calls_logs_and_reraises(caplog):
    @log_calls("branching.tests")
    def fail():
        raise ValueError("boom")

    with caplog.at_level(logging.DEBUG, logger="branching.tests"):
        with pytest.raises(ValueError):
            fail()

    assert any(record.levelno == logging.ERROR for record in caplog.records)


def test_configure_logging_sets_level():
    configure_logging("debug")

    assert logging.getLogger("branching").level == logging.DEBUG

    configure_logging(logging.WARNING)
    assert logging.getLogger("branching").level == logging.WARNING


def test_configure_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        configure_logging("chatty")


def test_log_calls_expected_errors_logged_without_traceback(caplog):
    @log_calls("branching.tests", expected=(KeyError,))
    def lookup():
        raise KeyError("missing")

    with caplog.at_level(logging.DEBUG, logger="branching.tests"):
        with pytest.raises(KeyError):
            lookup()

    raised = [record for record in caplog.records if "raised KeyError" in record.getMessage()]
    assert len(raised) == 1
    assert raised[0].levelno == logging.INFO
    assert raised[0].exc_info is None
    assert not [record for record in caplog.records if record.levelno >= logging.ERROR]
