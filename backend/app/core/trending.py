"""
Hashtag ranking weighted by recency, sentiment and tag length.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Sequence

from app.config import LONG_HASHTAG_THRESHOLD, MIN_ELAPSED_MINUTES, TRENDING_TOP_N
from app.models import Message, MessageSentiment, TrendingTopic
from app.utils import elapsed_ms, ensure_utc, parse_utc_timestamp

SENTIMENT_MODIFIERS = {"positive": 1.2, "negative": 0.8, "neutral": 1.0}


@dataclass
class _HashtagStats:
    weight: float = 0.0
    frequency: int = 0
    modifier_sum: float = 0.0


def calculate_temporal_weight(published_at: datetime, now: datetime) -> float:
    """Recency multiplier: 1 + 1/minutes elapsed, floored at 0.01 minutes."""
    minutes_since = max(elapsed_ms(published_at, now) / 60_000, MIN_ELAPSED_MINUTES)
    return 1 + 1 / minutes_since


def calculate_length_factor(hashtag: str) -> float:
    """Long tags (body over the threshold) get a log-scaled boost."""
    body_length = len(hashtag) - 1
    if body_length > LONG_HASHTAG_THRESHOLD:
        return math.log10(body_length) / math.log10(LONG_HASHTAG_THRESHOLD)
    return 1.0


def rank_topics(stats: Dict[str, _HashtagStats], limit: int = TRENDING_TOP_N) -> List[TrendingTopic]:
    topics = [
        TrendingTopic(
            hashtag=hashtag,
            weight=entry.weight,
            frequency=entry.frequency,
            sentiment_modifier=entry.modifier_sum / entry.frequency,
        )
        for hashtag, entry in stats.items()
    ]
    # final key is plain codepoint order, not locale collation
    topics.sort(key=lambda t: (-t.weight, -t.frequency, -t.sentiment_modifier, t.hashtag))
    return topics[:limit]


def compute_trending_topics(
    messages: Sequence[Message],
    sentiments: Sequence[MessageSentiment],
    now: datetime,
) -> List[TrendingTopic]:
    """
    Rank hashtags of the filtered batch.

    Args:
        messages: Filtered messages
        sentiments: Per-message sentiments aligned with ``messages``
        now: Reference instant

    Returns:
        Up to five topics ordered by weight, frequency, average sentiment
        modifier (all descending) and hashtag (ascending)
    """
    now = ensure_utc(now)
    stats: Dict[str, _HashtagStats] = {}

    for index, message in enumerate(messages):
        if not message.hashtags:
            continue

        published_at = parse_utc_timestamp(message.timestamp)
        if published_at is None:
            continue

        temporal_weight = calculate_temporal_weight(published_at, now)
        label = sentiments[index].label if index < len(sentiments) else "neutral"
        modifier = SENTIMENT_MODIFIERS.get(label, 1.0)

        for raw_tag in message.hashtags:
            if not isinstance(raw_tag, str) or not raw_tag.startswith("#"):
                continue

            hashtag = raw_tag.lower()
            entry = stats.setdefault(hashtag, _HashtagStats())
            entry.weight += temporal_weight * modifier * calculate_length_factor(hashtag)
            entry.frequency += 1
            entry.modifier_sum += modifier

    return rank_topics(stats)
