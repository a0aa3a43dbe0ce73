"""Last-resort handlers for uncaught exceptions."""

import json
import os
import sys
import traceback

from sleekid.clock import format_timestamp
from sleekid.errors import tracking_id

_crash_log = "logs/crash.log"


def configure(crash_file):
    """Set crash log file path from config."""
    global _crash_log
    _crash_log = crash_file


def _write_crash(record):
    """Append one JSON crash record. Never raises."""
    try:
        log_dir = os.path.dirname(_crash_log)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        with open(_crash_log, "a") as f:
            f.write(json.dumps(record, default=str) + "\n")
    except Exception:
        pass


def _record(exc_name, exc_msg, tb, context=None):
    record = {"id": tracking_id(), "timestamp": format_timestamp(), "type": exc_name, "msg": exc_msg, "traceback": tb}
    if context:
        record["context"] = context
    return record


def log_crash(exc_type, exc_value, exc_tb):
    """sys.excepthook: report to stderr and the crash file. Never raises."""
    record = _record(
        exc_type.__name__ if exc_type else "Unknown",
        str(exc_value) if exc_value else "",
        "".join(traceback.format_exception(exc_type, exc_value, exc_tb)),
    )
    error_id = getattr(exc_value, "error_id", None)
    if error_id:
        record["error_id"] = error_id
    rule = "=" * 60
    sys.stderr.write(f"\n{rule}\nCRASH [{record['id']}] {record['timestamp']}\n{rule}\n")
    sys.stderr.write(f"{record['type']}: {record['msg']}\n{'-' * 60}\n{record['traceback']}{rule}\n\n")
    _write_crash(record)


def create_async_handler(logger=None):
    """Event loop exception handler writing the same crash records."""
    def handler(loop, context):
        exc = context.get("exception")
        record = _record(
            type(exc).__name__ if exc else "AsyncError",
            str(exc) if exc else context.get("message", "Unknown"),
            "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)) if exc else None,
            context={"task": str(context.get("future", "unknown"))},
        )
        if logger:
            logger.error("Async exception", error=record["msg"], crash_id=record["id"], task=record["context"]["task"])
        _write_crash(record)
    return handler


def install_crash_handler():
    """Install global sync exception handler."""
    sys.excepthook = log_crash
