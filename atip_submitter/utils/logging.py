"""Logging utilities"""

import json
from datetime import datetime, timezone

import atip_submitter.config as config

_LEVEL_PREFIX = {
    "INFO": "",
    "WARN": "⚠️ ",
    "ERROR": "❌ ",
}

_run_log_path = config.RUN_LOG_FILE


def start_run_log(path=None):
    """Point the run log at `path` (default latest.log) and clear it"""
    global _run_log_path
    if path is not None:
        _run_log_path = str(path)
    try:
        with open(_run_log_path, "w", encoding="utf-8"):
            pass
    except OSError as e:
        print(f"⚠️ Could not reset run log {_run_log_path}: {e}")


def _write(level, message):
    timestamp = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    try:
        with open(_run_log_path, "a", encoding="utf-8") as f:
            f.write(f"[{timestamp}] [{level}] {message}\n")
    except OSError:
        # Console output still carries the message
        pass

    print(f"{_LEVEL_PREFIX[level]}{message}")


def log_info(message):
    _write("INFO", message)


def log_warn(message):
    _write("WARN", message)


def log_error(message):
    _write("ERROR", message)


def log_result(url, status, reason="", path=None):
    """Log one processed item to the JSONL result history"""
    result = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "url": url,
        "status": status,
    }
    if reason:
        result["reason"] = reason

    try:
        with open(path or config.RESULT_LOG_FILE, "a", encoding="utf-8") as f:
            f.write(json.dumps(result) + "\n")
    except OSError as e:
        log_warn(f"Could not record result for {url}: {e}")

    print(f"[{status}] {url}")
    if reason:
        print(f"  Reason: {reason}")
