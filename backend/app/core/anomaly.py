"""
Behavioral anomaly detection over a filtered batch.

Three detectors run over chronologically sorted sequences:

* burst: an author posting more than the limit inside a five minute window;
* alternating: an author whose non-neutral sentiment flips on every message
  for a long run;
* synchronized clusters: three or more messages, from anyone, within four
  seconds of each other.

The sliding windows are monotonic two-pointer scans, linear per sequence.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Dict, List, Sequence, Tuple

from app.config import (
    ALTERNATING_MIN_RUN,
    BURST_MESSAGE_LIMIT,
    BURST_WINDOW_MINUTES,
    SYNC_MIN_MESSAGES,
    SYNC_WINDOW_MS,
)
from app.models import AnomalyFlags, Message, MessageSentiment, SentimentLabel
from app.utils import parse_utc_timestamp

logger = logging.getLogger(__name__)

TimedLabel = Tuple[datetime, SentimentLabel]


def group_by_author(
    messages: Sequence[Message],
    sentiments: Sequence[MessageSentiment],
) -> Dict[str, List[TimedLabel]]:
    """
    Pair each message with its timestamp and label, grouped per author.

    Authors keep their first-appearance order; each group is sorted by time.
    Messages with unparseable timestamps are skipped.
    """
    grouped: Dict[str, List[TimedLabel]] = {}
    for index, message in enumerate(messages):
        published_at = parse_utc_timestamp(message.timestamp)
        if published_at is None:
            continue
        label = sentiments[index].label if index < len(sentiments) else "neutral"
        grouped.setdefault(message.author_id, []).append((published_at, label))

    for entries in grouped.values():
        entries.sort(key=lambda entry: entry[0])
    return grouped


def has_burst(timestamps: Sequence[datetime]) -> bool:
    window = timedelta(minutes=BURST_WINDOW_MINUTES)
    start = 0
    for end in range(len(timestamps)):
        while timestamps[end] - timestamps[start] > window:
            start += 1
        if end - start + 1 > BURST_MESSAGE_LIMIT:
            return True
    return False


def longest_alternating_run(labels: Sequence[SentimentLabel]) -> int:
    if not labels:
        return 0
    run = longest = 1
    for previous, current in zip(labels, labels[1:]):
        run = run + 1 if current != previous else 1
        longest = max(longest, run)
    return longest


def has_alternating_pattern(labels: Sequence[SentimentLabel]) -> bool:
    polar = [label for label in labels if label != "neutral"]
    if len(polar) < ALTERNATING_MIN_RUN:
        return False
    return longest_alternating_run(polar) >= ALTERNATING_MIN_RUN


def find_synchronized_clusters(messages: Sequence[Message]) -> List[str]:
    """
    Find windows of near-simultaneous messages across all authors.

    Args:
        messages: Filtered messages

    Returns:
        Raw timestamp of each qualifying window's earliest message, in the
        order first seen, without duplicates
    """
    candidates = []
    for message in messages:
        published_at = parse_utc_timestamp(message.timestamp)
        if published_at is not None:
            candidates.append((published_at, message.timestamp))
    candidates.sort(key=lambda entry: entry[0])

    window = timedelta(milliseconds=SYNC_WINDOW_MS)
    representatives: Dict[str, None] = {}
    start = 0
    for end in range(len(candidates)):
        while candidates[end][0] - candidates[start][0] > window:
            start += 1
        if end - start + 1 >= SYNC_MIN_MESSAGES:
            representatives.setdefault(candidates[start][1], None)

    return list(representatives)


def detect_anomalies(
    messages: Sequence[Message],
    sentiments: Sequence[MessageSentiment],
) -> AnomalyFlags:
    """
    Run every detector over the filtered batch.

    Args:
        messages: Filtered messages
        sentiments: Per-message sentiments aligned with ``messages``

    Returns:
        AnomalyFlags with flagged authors and cluster representatives
    """
    flags = AnomalyFlags()

    for author_id, entries in group_by_author(messages, sentiments).items():
        if has_burst([published_at for published_at, _ in entries]):
            flags.burst_users.append(author_id)
        if has_alternating_pattern([label for _, label in entries]):
            flags.alternating_users.append(author_id)

    flags.synchronized_clusters = find_synchronized_clusters(messages)

    if flags.burst_users or flags.alternating_users or flags.synchronized_clusters:
        logger.debug(
            "Anomalies: %d burst, %d alternating, %d clusters",
            len(flags.burst_users),
            len(flags.alternating_users),
            len(flags.synchronized_clusters),
        )
    return flags
