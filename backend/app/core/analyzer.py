"""
Feed analysis orchestration.

Filters the raw batch by time window, then feeds the surviving messages to
the sentiment, trending, anomaly and engagement components and assembles
their outputs into a single FeedAnalysis.
"""
from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Sequence

from app.core.anomaly import detect_anomalies
from app.core.engagement import compute_engagement_score
from app.core.errors import InvalidTimeWindowError, SimulatedFailureError
from app.core.meta import infer_meta_flags
from app.core.sentiment import analyze_messages
from app.core.trending import compute_trending_topics
from app.core.window import apply_time_window
from app.models import FeedAnalysis, Message

logger = logging.getLogger(__name__)

SIMULATED_FAILURE_WINDOW = 123


def validate_time_window(window_minutes: object) -> float:
    """
    Check the requested window before any analyzer runs.

    Args:
        window_minutes: Window length as received from the caller

    Returns:
        The window as a float

    Raises:
        InvalidTimeWindowError: If the window is absent, non-numeric or not positive
        SimulatedFailureError: If the window is the reserved sentinel value
    """
    if isinstance(window_minutes, bool) or not isinstance(window_minutes, (int, float)):
        raise InvalidTimeWindowError()
    try:
        window = float(window_minutes)
    except OverflowError:
        # integers beyond float range cover every message
        window = math.inf
    if math.isnan(window) or window <= 0:
        raise InvalidTimeWindowError()
    if window == SIMULATED_FAILURE_WINDOW:
        raise SimulatedFailureError()
    return window


def analyze_feed(
    messages: Sequence[Message],
    window_minutes: object,
    now: datetime,
) -> FeedAnalysis:
    """
    Analyze one batch of feed messages.

    Args:
        messages: Raw batch, already validated by the boundary layer
        window_minutes: Look-back window in minutes
        now: Reference instant for the window and temporal weights

    Returns:
        FeedAnalysis computed from the filtered messages only

    Raises:
        FeedAnalysisError: On an invalid or sentinel time window
    """
    window = validate_time_window(window_minutes)

    filtered = apply_time_window(messages, window, now)
    meta = infer_meta_flags(filtered)

    distribution, sentiments = analyze_messages(filtered)
    trending_topics = compute_trending_topics(filtered, sentiments, now)
    anomalies = detect_anomalies(filtered, sentiments)
    engagement_score = compute_engagement_score(filtered, meta)

    logger.debug(
        "Analyzed %d/%d messages, %d trending topics",
        len(filtered),
        len(messages),
        len(trending_topics),
    )

    return FeedAnalysis(
        sentiment_distribution=distribution,
        trending_topics=trending_topics,
        anomalies=anomalies,
        engagement_score=engagement_score,
        operator_presence=meta.operator_presence,
        disclosure_awareness=meta.disclosure_awareness,
        signature_pattern=meta.signature_pattern,
    )
