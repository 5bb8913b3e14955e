"""
Time-window selection of in-scope messages.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import List, Sequence

from app.config import CLOCK_SKEW_TOLERANCE_MS
from app.models import Message
from app.utils import ensure_utc, parse_utc_timestamp

logger = logging.getLogger(__name__)


def apply_time_window(
    messages: Sequence[Message],
    window_minutes: float,
    now: datetime,
) -> List[Message]:
    """
    Keep the messages posted inside the last ``window_minutes``.

    Args:
        messages: Raw batch, in arrival order
        window_minutes: Positive window length in minutes
        now: Reference instant

    Returns:
        Surviving messages in their original relative order. Messages with
        unparseable timestamps or stamped more than the clock-skew tolerance
        after ``now`` are dropped.
    """
    now = ensure_utc(now)
    upper_bound = now + timedelta(milliseconds=CLOCK_SKEW_TOLERANCE_MS)
    try:
        lower_bound = now - timedelta(minutes=window_minutes)
    except OverflowError:
        # window reaches past datetime.min: everything old enough is in scope
        lower_bound = datetime.min.replace(tzinfo=timezone.utc)

    selected: List[Message] = []
    for message in messages:
        published_at = parse_utc_timestamp(message.timestamp)
        if published_at is None:
            continue
        if published_at > upper_bound:
            continue
        if published_at >= lower_bound:
            selected.append(message)

    logger.debug("Time window kept %d of %d messages", len(selected), len(messages))
    return selected
