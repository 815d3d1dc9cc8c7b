import json  # NDJSON debug log encoding
import os  # env-var lookup
import time  # timestamps for debug logs

DEBUG_LOG_ENV = "HYPERCOMPLEX_DEBUG_LOG"  # path of the NDJSON sink; unset disables logging


def debug_log_path():  # Current sink path, or None when disabled.
    return os.environ.get(DEBUG_LOG_ENV) or None


def dbg(location, message, data=None):  # Append one NDJSON debug log line.
    path = debug_log_path()
    if path is None:
        return
    now_ms = int(time.time() * 1000)
    payload = {
        "id": f"log_{now_ms}_{location}",
        "timestamp": now_ms,
        "location": str(location),
        "message": str(message),
        "data": dict(data or {}),
    }
    with open(path, "a", encoding="utf-8") as f:
        f.write(json.dumps(payload, separators=(",", ":")) + "\n")
