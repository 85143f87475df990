"""
debug_trace.py

Category-tagged trace output for following editor/preview sync events.
Enable by setting the SVGSYNC_TRACE environment variable (e.g. SVGSYNC_TRACE=1).
Set SVGSYNC_TRACE=all to also trace per-paint overlay rebuilds.
"""

import os
import sys
import traceback
from datetime import datetime
from functools import wraps

_env = os.environ.get("SVGSYNC_TRACE", "").strip().lower()

# Tracing is off unless requested through the environment
DEBUG_TRACE = _env not in ("", "0", "false", "no")

# Overlay rebuilds happen on every cursor move; only traced with SVGSYNC_TRACE=all
TRACE_OVERLAY = _env == "all"

# Log file (None for stderr only)
LOG_FILE = os.environ.get("SVGSYNC_TRACE_FILE", "svgsync_debug.log")

_log_file = None


def _get_log_file():
    global _log_file
    if LOG_FILE and _log_file is None:
        try:
            _log_file = open(LOG_FILE, "w", encoding="utf-8")
        except OSError as e:
            print(f"[trace] cannot open {LOG_FILE}: {e}", file=sys.stderr)
            return None
    return _log_file


def trace(msg: str, category: str = "INFO"):
    """Print a trace message with timestamp."""
    if not DEBUG_TRACE:
        return
    if category == "OVERLAY" and not TRACE_OVERLAY:
        return

    timestamp = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    line = f"[{timestamp}] [{category}] {msg}"

    print(line, file=sys.stderr, flush=True)

    log_file = _get_log_file()
    if log_file:
        log_file.write(line + "\n")
        log_file.flush()


def trace_exception(msg: str = "Exception"):
    """Trace the exception currently being handled."""
    if not DEBUG_TRACE:
        return
    trace(f"{msg}: {traceback.format_exc()}", "ERROR")


def trace_call(category: str = "CALL"):
    """Decorator to trace function entry/exit."""
    def decorator(func):
        if not DEBUG_TRACE:
            return func

        @wraps(func)
        def wrapper(*args, **kwargs):
            func_name = func.__qualname__
            trace(f">>> {func_name}", category)
            try:
                result = func(*args, **kwargs)
                trace(f"<<< {func_name}", category)
                return result
            except Exception as e:
                trace(f"!!! {func_name} raised {type(e).__name__}: {e}", "ERROR")
                raise
        return wrapper
    return decorator


def close_log():
    """Close log file."""
    global _log_file
    if _log_file:
        _log_file.close()
        _log_file = None
