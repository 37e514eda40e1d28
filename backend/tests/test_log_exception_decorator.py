"""
Tests for the log_exception decorator.

Tests cover:
- Exception logging for sync and async functions
- Prefix formatting with bound call arguments
- Fallbacks when arguments cannot be bound or the prefix cannot be formatted
- Log level and traceback options
"""

import asyncio
import logging

import pytest

from presence.logger import log_exception


class TestBasicExceptionLogging:
    """Test basic exception logging functionality."""

    def test_sync_function_with_prefix(self, caplog):
        @log_exception("SyncOperation")
        def sync_func_with_error():
            raise ValueError("Test error from sync function")

        assert sync_func_with_error() is None
        assert "SyncOperation: ValueError: Test error from sync function" in caplog.text
        assert "ERROR" in caplog.text

    @pytest.mark.asyncio
    async def test_async_function_with_prefix(self, caplog):
        @log_exception("AsyncOperation")
        async def async_func_with_error():
            await asyncio.sleep(0)
            raise ValueError("Test error from async function")

        assert await async_func_with_error() is None
        assert (
            "AsyncOperation: ValueError: Test error from async function" in caplog.text
        )

    def test_function_without_prefix(self, caplog):
        @log_exception()
        def sync_func_no_prefix():
            raise RuntimeError("Error without prefix")

        assert sync_func_no_prefix() is None
        assert "RuntimeError: Error without prefix" in caplog.text

    @pytest.mark.asyncio
    async def test_successful_execution_no_log(self, caplog):
        @log_exception("SuccessfulOp")
        async def async_func_success():
            return "ok"

        assert await async_func_success() == "ok"
        assert caplog.text == ""

    def test_default_return(self, caplog):
        @log_exception("Counting", default_return=0)
        def count():
            raise OSError("disk gone")

        assert count() == 0

    def test_base_exceptions_propagate(self):
        @log_exception("Cancelled")
        def interrupted():
            raise KeyboardInterrupt

        with pytest.raises(KeyboardInterrupt):
            interrupted()


class TestPrefixFormatting:
    """Test prefix substitution with call arguments."""

    def test_arguments_shown_and_substituted(self, caplog):
        @log_exception("Sending {command} to {server_id}")
        def send(server_id: str, command: str = "list"):
            raise RuntimeError("not reachable")

        send("survival")

        assert "[server_id='survival', command='list']" in caplog.text
        assert "Sending list to survival: RuntimeError: not reachable" in caplog.text

    @pytest.mark.asyncio
    async def test_self_attribute_in_prefix(self, caplog):
        class Tail:
            server_id = "creative"

            @log_exception("Error reading logs for {self.server_id}")
            async def read(self):
                raise ValueError("boom")

        await Tail().read()

        assert "Error reading logs for creative: ValueError: boom" in caplog.text
        assert "self=" not in caplog.text

    def test_missing_placeholder_falls_back_to_raw_prefix(self, caplog):
        @log_exception("Handling {missing}")
        def handle(value):
            raise ValueError("bad")

        handle(1)

        assert "Failed to format prefix" in caplog.text
        assert "Handling {missing}: ValueError: bad" in caplog.text

    def test_unbindable_arguments(self, caplog):
        @log_exception("Strict")
        def strict(a):
            raise ValueError("never reached")

        assert strict(1, 2) is None

        assert "Failed to bind arguments for function" in caplog.text
        assert "Strict: TypeError" in caplog.text


class TestLogOptions:
    """Test level and traceback options."""

    def test_custom_level(self, caplog):
        @log_exception("Optional step", level=logging.WARNING)
        def optional():
            raise ValueError("skipped")

        optional()

        record = caplog.records[-1]
        assert record.levelno == logging.WARNING
        assert "Optional step: ValueError: skipped" in record.getMessage()

    def test_traceback_attached_by_default(self, caplog):
        @log_exception("Traced")
        def traced():
            raise ValueError("with trace")

        traced()

        assert caplog.records[-1].exc_info is not None
        assert "Traceback" in caplog.text

    def test_traceback_can_be_omitted(self, caplog):
        @log_exception("Quiet", exc_info=False)
        def quiet():
            raise ValueError("no trace")

        quiet()

        assert not caplog.records[-1].exc_info
        assert "Traceback" not in caplog.text

    def test_record_points_at_caller(self, caplog):
        @log_exception("Located")
        def located():
            raise ValueError("where")

        located()

        assert caplog.records[-1].funcName == "test_record_points_at_caller"
