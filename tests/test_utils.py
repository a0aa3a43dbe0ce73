"""Unit tests for utility modules, logging and errors."""

import io
import json
import sys
import time
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone

from sleekid.clock import format_instant, format_timestamp, now_micros, utc_now
from sleekid.errors import (
    BaseSleekIdError,
    GeneratorNotInitializedError,
    InvalidConfigurationError,
    RandomSourceError,
    tracking_id,
)
from sleekid.log import LogLevel, StructuredLogger, get_logger


class TestTimestamp:
    """Tests for timestamp utilities."""

    def test_format_timestamp_has_microseconds(self):
        """Timestamp includes microseconds."""
        ts = format_timestamp()
        assert "T" in ts and ts.endswith("Z")
        assert len(ts.split(".")[1].rstrip("Z")) == 6

    def test_format_timestamp_fixed(self):
        """A known epoch value formats exactly."""
        assert format_timestamp(1704067200_500000) == "2024-01-01T00:00:00.500000Z"

    def test_now_micros_reasonable_value(self):
        """now_micros returns an int after 2024."""
        micros = now_micros()
        assert isinstance(micros, int)
        assert micros > 1704067200_000000

    def test_utc_now_is_aware(self):
        assert utc_now().tzinfo is not None

    def test_format_instant(self):
        """Decoded id times format to the second; None passes through."""
        assert format_instant(datetime(2024, 2, 3, 4, 5, 6, tzinfo=timezone.utc)) == "2024-02-03T04:05:06Z"
        assert format_instant(None) is None


class TestErrors:
    """Tests for the error hierarchy."""

    def test_tracking_id_sortable(self):
        """Tracking ids sort by creation time."""
        first = tracking_id()
        time.sleep(0.001)
        second = tracking_id()
        assert first.startswith("err_")
        assert len(first) == len(second)
        assert first < second

    def test_tracking_id_unique_in_tight_loop(self):
        """Ids raised back to back never collide."""
        ids = [tracking_id() for _ in range(1000)]
        assert len(set(ids)) == len(ids)

    def test_tracking_id_unique_across_threads(self):
        """Errors built concurrently get distinct ids."""
        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(lambda _: BaseSleekIdError("x").error_id, range(2000)))
        assert len(set(ids)) == len(ids)
    def test_str_includes_tracking_id(self):
        err = BaseSleekIdError("boom", context={"k": "v"})
        assert str(err) == f"[{err.error_id}] boom"
        assert err.context == {"k": "v"}
        assert err.timestamp.endswith("Z")

    def test_invalid_configuration_context(self):
        err = InvalidConfigurationError("bad", field="timestamp_length", value=9)
        assert isinstance(err, ValueError)
        assert err.context == {"field": "timestamp_length", "value": 9}

    def test_random_source_context(self):
        cause = OSError("no entropy")
        err = RandomSourceError("failed", requested=12, cause=cause)
        assert err.requested == 12
        assert err.cause is cause

    def test_not_initialized_is_runtime_error(self):
        assert isinstance(GeneratorNotInitializedError("x"), RuntimeError)


class TestStructuredLogger:
    """Tests for JSON-lines logging."""

    def _records(self, stream):
        return [json.loads(line) for line in stream.getvalue().splitlines()]

    def test_emits_json(self):
        stream = io.StringIO()
        StructuredLogger(LogLevel.DEBUG, stream).info("hello", prefix="usr")
        (record,) = self._records(stream)
        assert record["level"] == "INFO"
        assert record["msg"] == "hello"
        assert record["prefix"] == "usr"

    def test_level_filter(self):
        stream = io.StringIO()
        logger = StructuredLogger(LogLevel.WARN, stream)
        logger.debug("hidden")
        logger.info("hidden")
        logger.warn("shown")
        assert [r["msg"] for r in self._records(stream)] == ["shown"]

    def test_error_carries_error_id(self):
        stream = io.StringIO()
        err = RandomSourceError("failed", requested=4)
        StructuredLogger(LogLevel.INFO, stream).error("Random source failure", error=err)
        (record,) = self._records(stream)
        assert record["error_id"] == err.error_id
        assert "failed" in record["err"]

    def test_bind(self):
        stream = io.StringIO()
        StructuredLogger(LogLevel.INFO, stream).bind(component="sleekid").info("ready")
        assert self._records(stream)[0]["component"] == "sleekid"

    def test_parse_level(self):
        assert LogLevel.parse("warning") is LogLevel.WARN
        assert LogLevel.parse("debug") is LogLevel.DEBUG
        assert LogLevel.parse("nonsense") is LogLevel.INFO
        assert LogLevel.parse(None, LogLevel.ERROR) is LogLevel.ERROR

    def test_configure_replaces_singleton(self):
        stream = io.StringIO()
        try:
            StructuredLogger.configure(LogLevel.ERROR, stream)
            get_logger().warn("hidden")
            get_logger(component="x").error("shown")
            assert [r["msg"] for r in self._records(stream)] == ["shown"]
        finally:
            StructuredLogger.configure()


class TestCrashHandler:
    """Tests for crash handling utilities."""

    def test_configure_sets_path(self):
        """configure() sets crash log path."""
        from utils import crash
        original = crash._crash_log
        crash.configure("/tmp/test_crash.log")
        assert crash._crash_log == "/tmp/test_crash.log"
        crash.configure(original)

    def test_install_crash_handler(self):
        """install_crash_handler sets sys.excepthook."""
        from utils.crash import install_crash_handler, log_crash
        original_hook = sys.excepthook
        install_crash_handler()
        assert sys.excepthook == log_crash
        sys.excepthook = original_hook

    def test_log_crash_writes_record(self, tmp_path, capsys):
        """log_crash appends a JSON record with the error's tracking id."""
        from utils import crash
        original = crash._crash_log
        crash.configure(str(tmp_path / "logs" / "crash.log"))
        try:
            try:
                raise RandomSourceError("no entropy", requested=8)
            except RandomSourceError as exc:
                crash.log_crash(type(exc), exc, exc.__traceback__)
                error_id = exc.error_id
        finally:
            crash.configure(original)
        record = json.loads((tmp_path / "logs" / "crash.log").read_text().splitlines()[0])
        assert record["type"] == "RandomSourceError"
        assert record["error_id"] == error_id
        assert "CRASH" in capsys.readouterr().err

    def test_async_handler_writes_record(self, tmp_path):
        """The event loop handler records exceptions without raising."""
        from utils import crash
        original = crash._crash_log
        crash.configure(str(tmp_path / "crash.log"))
        try:
            crash.create_async_handler()(None, {"exception": ValueError("bad"), "future": "task-1"})
        finally:
            crash.configure(original)
        record = json.loads((tmp_path / "crash.log").read_text())
        assert record["type"] == "ValueError"
        assert record["context"] == {"task": "task-1"}
