from __future__ import annotations

"""Explain Mode tracing.

Enabled with ``--explain``; emits one terse line per milestone. Secrets are
never passed in payloads.
"""

import json
import sys
from typing import Any, Dict, TextIO

_ENABLED = False
_STREAM: TextIO | None = None


def enable(flag: bool = True, stream: TextIO | None = None) -> None:
    global _ENABLED, _STREAM
    _ENABLED = bool(flag)
    _STREAM = stream


def enabled() -> bool:
    return _ENABLED


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not _ENABLED:
        return
    out = _STREAM or sys.stdout
    try:
        data = json.dumps(payload or {}, separators=(",", ":"), ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        print(f"[EXPLAIN] {event}", file=out)
        return
    print(f"[EXPLAIN] {event} :: {data}", file=out)
