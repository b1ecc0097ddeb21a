# api/infrastructure/log.py
#
# Shared logger with elapsed time, used by the API collaborators and the
# batch generator.
#
# Design decisions:
#   - Single log() function; plain stdout with flush for immediate visibility.
#   - The prefix names the component ("api", "lote") so mixed output stays readable.
#   - Thread-safe: sys.stdout.write of a single string is atomic in CPython.
#   - Callers never pass CPFs or full member records, only ids and URLs.
from __future__ import annotations

import sys
import time

_start = time.monotonic()


def log(message: str, *, component: str = "api") -> None:
    """Write a timestamped log line to stdout."""
    elapsed = time.monotonic() - _start
    minutes, seconds = divmod(int(elapsed), 60)
    sys.stdout.write(f"[{component} {minutes:02d}:{seconds:02d}] {message}\n")
    sys.stdout.flush()
