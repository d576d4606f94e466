from __future__ import annotations

from datetime import datetime, timedelta, timezone


_ONE_SECOND_US = 1_000_000


def format_uptime(elapsed: timedelta) -> str:
    """Round to the nearest second (halves away from zero) and render as ``1h2m3s``.

    Leading zero units are dropped: ``0s``, ``45s``, ``2m0s``, ``1h0m5s``.
    """

    micros = max(elapsed // timedelta(microseconds=1), 0)
    total = (micros + _ONE_SECOND_US // 2) // _ONE_SECOND_US

    hours, rem = divmod(total, 3600)
    minutes, seconds = divmod(rem, 60)
    if hours:
        return f"{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{minutes}m{seconds}s"
    return f"{seconds}s"


def format_started_at(start_time: datetime) -> str:
    """RFC 3339 with seconds precision, UTC rendered as ``Z``."""

    if start_time.tzinfo is None:
        start_time = start_time.replace(tzinfo=timezone.utc)
    return start_time.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def is_ready(elapsed: timedelta, ready_after_seconds: float) -> bool:
    # Ready at exactly the threshold.
    return elapsed >= timedelta(seconds=ready_after_seconds)
