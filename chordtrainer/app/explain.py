from __future__ import annotations

"""Explain Mode: terse one-line traces of engine decisions.

Enabled with the --explain CLI flag. Each line reads
`[EXPLAIN] event :: {json}`; an optional event filter narrows the output,
e.g. to `match_checked` only.
"""

import json
import sys
from typing import Any, Dict, FrozenSet, Iterable, Optional

_ENABLED = False
_EVENTS: Optional[FrozenSet[str]] = None


def enable(flag: bool = True, events: Iterable[str] | None = None) -> None:
    global _ENABLED, _EVENTS
    _ENABLED = bool(flag)
    _EVENTS = frozenset(events) if events else None


def enabled(event: str | None = None) -> bool:
    if not _ENABLED:
        return False
    return event is None or _EVENTS is None or event in _EVENTS


def trace(event: str, payload: Dict[str, Any] | None = None) -> None:
    if not enabled(event):
        return
    try:
        line = json.dumps(payload or {}, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        line = "{}"
    print(f"[EXPLAIN] {event} :: {line}", file=sys.stderr)
