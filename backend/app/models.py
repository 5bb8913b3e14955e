"""
File: app/models.py
Internal data structures used during feed analysis.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Tuple


SentimentLabel = Literal["positive", "negative", "neutral"]


@dataclass(frozen=True)
class Message:
    """Unified representation of a feed message once it passed the boundary.

    ``timestamp`` keeps the raw RFC3339 string; cluster representatives are
    reported with it verbatim.
    """

    author_id: str
    content: str
    timestamp: str
    reactions: int = 0
    shares: int = 0
    views: int = 0
    hashtags: Tuple[str, ...] = ()


@dataclass
class MessageSentiment:
    label: SentimentLabel
    score: float
    is_meta: bool = False


@dataclass
class SentimentDistribution:
    positive: float = 0.0
    negative: float = 0.0
    neutral: float = 100.0


@dataclass
class TrendingTopic:
    hashtag: str               # lowercased, keeps the leading "#"
    weight: float
    frequency: int
    sentiment_modifier: float  # average of per-occurrence multipliers


@dataclass
class AnomalyFlags:
    burst_users: List[str] = field(default_factory=list)
    alternating_users: List[str] = field(default_factory=list)
    synchronized_clusters: List[str] = field(default_factory=list)


@dataclass
class MetaFlags:
    operator_presence: bool = False
    disclosure_awareness: bool = False
    signature_pattern: bool = False


@dataclass
class FeedAnalysis:
    """Aggregate result of one analysis run over a filtered batch."""

    sentiment_distribution: SentimentDistribution
    trending_topics: List[TrendingTopic]
    anomalies: AnomalyFlags
    engagement_score: float
    operator_presence: bool
    disclosure_awareness: bool
    signature_pattern: bool


__all__ = [
    "SentimentLabel",
    "Message",
    "MessageSentiment",
    "SentimentDistribution",
    "TrendingTopic",
    "AnomalyFlags",
    "MetaFlags",
    "FeedAnalysis",
]
