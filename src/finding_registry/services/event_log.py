"""Simple JSONL event log for finding update notifications."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Mapping

_LOG = logging.getLogger(__name__)

_WARNING_INTERVAL_SECONDS = 60.0
_LAST_WARN: dict[str, float] = {}


def set_warning_interval(seconds: float | None) -> None:
    """Adjust the warning rate limit (tests can set to None for unlimited)."""

    global _WARNING_INTERVAL_SECONDS
    if seconds is None:
        _WARNING_INTERVAL_SECONDS = 0.0
    else:
        _WARNING_INTERVAL_SECONDS = max(seconds, 0.0)


def reset_warning_state() -> None:
    """Reset warning rate-limit tracking (tests only)."""

    _LAST_WARN.clear()


def _should_warn(key: str) -> bool:
    if _WARNING_INTERVAL_SECONDS <= 0:
        return True
    now = time.monotonic()
    last = _LAST_WARN.get(key)
    if last is None or now - last >= _WARNING_INTERVAL_SECONDS:
        _LAST_WARN[key] = now
        return True
    return False


def append_event(
    event: Mapping[str, object], *, log_file: Path, max_bytes: int | None
) -> bool:
    """Append a serialized event line; return False if it could not be written."""

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        if _should_warn("mkdir"):
            _LOG.warning(
                "Unable to create event log directory %s: %s", log_file.parent, exc
            )
        return False

    _rotate_if_needed(log_file, max_bytes)

    line = json.dumps(dict(event), ensure_ascii=False)
    try:
        with log_file.open("a", encoding="utf-8") as fh:
            fh.write(line)
            fh.write("\n")
    except OSError as exc:
        if _should_warn("write"):
            _LOG.warning("Unable to write event to %s: %s", log_file, exc)
        return False
    return True


def read_events(log_file: Path) -> list[dict[str, object]]:
    """Return the events currently in ``log_file`` (rotated files excluded)."""

    if not log_file.exists():
        return []
    with log_file.open("r", encoding="utf-8") as fh:
        return [json.loads(line) for line in fh if line.strip()]


def _rotate_if_needed(path: Path, max_bytes: int | None) -> None:
    if max_bytes is None:
        return
    if not path.exists():
        return

    try:
        size = path.stat().st_size
    except OSError as exc:
        if _should_warn("stat"):
            _LOG.warning("Unable to stat event log %s: %s", path, exc)
        return

    if size < max_bytes:
        return

    backup = path.with_name(path.name + ".1")
    try:
        if backup.exists():
            backup.unlink()
        path.rename(backup)
    except OSError as exc:
        if _should_warn("rotate"):
            _LOG.warning("Unable to rotate event log %s: %s", path, exc)
