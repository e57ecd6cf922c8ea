"""
Unified logging for the asset tools.

Provides console output, optionally mirrored to a log file.
Tracks warnings and errors for an end-of-run summary.

Usage:
    from gm_assets.utils import log, logWarning, logError, logDebug, init_logging, print_summary

    # At start of a command line run:
    init_logging(Path("gm_timeline.log"))

    # Throughout code:
    log("Decoding timelines...")              # Info - section headers, major points
    logWarning("trailing bytes after record") # Output is usable but suspicious
    logError("version mismatch")              # The record could not be processed
    logDebug("moment 3: 2 actions")           # Useful for debugging

    # At end:
    print_summary()  # Shows warning/error counts

Library code (the record codecs) only calls logDebug, which is a no-op until
init_logging has opened a log file.
"""

import sys
import atexit
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Tuple

# ANSI color codes
class Colors:
    YELLOW = '\033[93m'
    RED = '\033[91m'
    GREEN = '\033[92m'
    BOLD = '\033[1m'
    RESET = '\033[0m'


DEFAULT_LOG_NAME = "gm_timeline.log"

# Module state
_log_file = None
_initialized = False
_atexit_registered = False
_warnings: List[str] = []
_errors: List[str] = []


def init_logging(log_path: Optional[Path] = None):
    """
    Start a logging session, mirroring console output to a file.

    Args:
        log_path: Path to log file. Defaults to gm_timeline.log in the
                  current working directory.
    """
    global _log_file, _initialized, _atexit_registered, _warnings, _errors

    if _initialized:
        return

    # Reset tracking lists
    _warnings = []
    _errors = []

    if log_path is None:
        log_path = Path.cwd() / DEFAULT_LOG_NAME

    log_path = Path(log_path)
    _initialized = True

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        _log_file = open(log_path, 'w', encoding='utf-8')

        timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        _log_file.write(f"Run started: {timestamp}\n")
        _log_file.write("=" * 70 + "\n\n")
        _log_file.flush()

    except OSError as e:
        print(f"Warning: Could not open log file {log_path}: {e}", file=sys.stderr)
        _log_file = None

    if not _atexit_registered:
        atexit.register(close_logging)
        _atexit_registered = True


def close_logging():
    """Close the log file and end the session."""
    global _log_file, _initialized

    if _log_file is not None:
        try:
            timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S')
            _log_file.write(f"\n{'=' * 70}\n")
            _log_file.write(f"Run finished: {timestamp}\n")
            _log_file.close()
        except OSError:
            pass
        _log_file = None

    _initialized = False


def print_summary():
    """
    Print a summary of warnings and errors at the end of a run.
    Uses colors for terminal output.
    """
    log("\n" + "=" * 70)
    log("SUMMARY")
    log("=" * 70)

    _print_section("Errors", _errors, Colors.RED)
    _print_section("Warnings", _warnings, Colors.YELLOW)

    print()
    print(_count_label(len(_errors), "Error", Colors.RED), end=" | ")
    print(_count_label(len(_warnings), "Warning", Colors.YELLOW))

    _write_to_file(f"\n{len(_errors)} Error(s) | {len(_warnings)} Warning(s)")


def _print_section(title: str, messages: List[str], color: str):
    if not messages:
        return
    print(f"\n{color}{Colors.BOLD}{title} ({len(messages)}):{Colors.RESET}")
    _write_to_file(f"\n{title} ({len(messages)}):")
    for msg in messages:
        print(f"  {color}- {msg}{Colors.RESET}")
        _write_to_file(f"  - {msg}")


def _count_label(count: int, noun: str, color: str) -> str:
    if not count:
        return f"{Colors.GREEN}0 {noun}s{Colors.RESET}"
    return f"{color}{Colors.BOLD}{count} {noun}(s){Colors.RESET}"


def get_counts() -> Tuple[int, int]:
    """Return (error_count, warning_count)."""
    return len(_errors), len(_warnings)


def _write_to_file(msg: str, end: str = "\n"):
    """Write message to log file."""
    if _log_file is not None:
        try:
            _log_file.write(msg + end)
            _log_file.flush()
        except OSError:
            pass


def log(msg: str = "", end: str = "\n"):
    """
    Log an info message to the console and the log file.
    Use for section headers and major points of a run.
    """
    print(msg, end=end)
    _write_to_file(msg, end)


def logWarning(msg: str, end: str = "\n"):
    """
    Log a warning message. Warnings indicate the output may not be what the
    user expects. Displayed in yellow. Tracked for the end-of-run summary.
    """
    formatted = f"Warning: {msg}"
    print(f"{Colors.YELLOW}{formatted}{Colors.RESET}", end=end)
    _write_to_file(formatted, end)
    _warnings.append(msg)


def logError(msg: str, end: str = "\n"):
    """
    Log an error message. Errors indicate an input could not be processed.
    Displayed in red. Tracked for the end-of-run summary.
    """
    formatted = f"ERROR: {msg}"
    print(f"{Colors.RED}{formatted}{Colors.RESET}", end=end, file=sys.stderr)
    _write_to_file(formatted, end)
    _errors.append(msg)


def logDebug(msg: str, end: str = "\n"):
    """
    Log a debug message. Only written to the log file, never shown in console.
    """
    if _log_file is None:
        return
    _write_to_file(f"[DEBUG] {msg}", end)
