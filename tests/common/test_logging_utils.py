import logging
import pytest
from src.common.logging import log_execution_time, setup_logger

logger = logging.getLogger("tests.timing")

def test_setup_logger_adds_single_handler():
    first = setup_logger("tests.setup")
    second = setup_logger("tests.setup")

    assert first is second
    assert len(first.handlers) == 1

def test_sync_function_timed(caplog):
    @log_execution_time(logger)
    def add(a, b):
        return a + b

    with caplog.at_level(logging.DEBUG, logger="tests.timing"):
        assert add(1, 2) == 3
    assert "add executed in" in caplog.text

def test_sync_failure_logged(caplog):
    @log_execution_time(logger)
    def explode():
        raise ValueError("nope")

    with pytest.raises(ValueError):
        explode()
    assert "explode failed: nope" in caplog.text

@pytest.mark.asyncio
async def test_coroutine_timed(caplog):
    @log_execution_time(logger)
    async def fetch():
        return "done"

    with caplog.at_level(logging.DEBUG, logger="tests.timing"):
        assert await fetch() == "done"
    assert "fetch executed in" in caplog.text
