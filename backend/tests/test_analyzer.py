"""
Unit tests for the analysis orchestrator.
"""

from __future__ import annotations

import math

import pytest

from app.core import analyzer
from app.core.analyzer import analyze_feed, validate_time_window
from app.core.errors import FeedAnalysisError, InvalidTimeWindowError, SimulatedFailureError


class TestTimeWindowValidation:

    @pytest.mark.parametrize("window", [None, 0, -5, "30", True, float("nan")])
    def test_invalid_windows(self, window, now):
        with pytest.raises(InvalidTimeWindowError) as excinfo:
            analyze_feed([], window, now)
        assert excinfo.value.message == "Invalid time window"

    @pytest.mark.parametrize("window", [123, 123.0])
    def test_sentinel_window(self, window, now):
        with pytest.raises(SimulatedFailureError) as excinfo:
            analyze_feed([], window, now)
        assert str(excinfo.value) == "Simulated error for testing purposes"
        assert isinstance(excinfo.value, FeedAnalysisError)

    def test_failures_skip_every_analyzer(self, monkeypatch, make_message, now):
        def fail(*args, **kwargs):
            raise AssertionError("analyzer should not run")

        for name in ("apply_time_window", "analyze_messages", "compute_engagement_score"):
            monkeypatch.setattr(analyzer, name, fail)

        for window in (0, 123):
            with pytest.raises(FeedAnalysisError):
                analyze_feed([make_message()], window, now)

    def test_huge_integer_window_keeps_every_message(self, make_message, now):
        messages = [
            make_message(content="bom", timestamp="1970-01-01T00:00:00Z"),
            make_message(content="ruim", timestamp="2025-09-10T09:59:00Z"),
        ]
        assert validate_time_window(10**400) == math.inf
        result = analyze_feed(messages, 10**400, now)
        assert result.sentiment_distribution.positive == 50
        assert result.sentiment_distribution.negative == 50


class TestAnalyzeFeed:

    def test_empty_batch(self, now):
        result = analyze_feed([], 30, now)
        distribution = result.sentiment_distribution
        assert (distribution.positive, distribution.negative, distribution.neutral) == (0, 0, 100)
        assert result.trending_topics == []
        assert result.engagement_score == 0.0
        assert not (result.operator_presence or result.disclosure_awareness or result.signature_pattern)

    def test_only_filtered_messages_are_scored(self, make_message, now):
        messages = [
            make_message(author_id="user_mbras_1", content="teste tecnico mbras",
                         timestamp="2025-09-10T08:00:00Z", hashtags=["#old"]),
            make_message(content="adorei", timestamp="2025-09-10T09:55:00Z", hashtags=["#new"]),
        ]
        result = analyze_feed(messages, 30, now)
        assert not result.operator_presence
        assert not result.disclosure_awareness
        assert result.sentiment_distribution.positive == 100
        assert [t.hashtag for t in result.trending_topics] == ["#new"]
        assert result.trending_topics[0].sentiment_modifier == pytest.approx(1.2)

    def test_disclosure_overrides_engagement(self, make_message, now):
        messages = [
            make_message(author_id="user_mbras_1007", content="teste técnico mbras",
                         timestamp="2025-09-10T10:00:00Z", reactions=5, shares=2, views=100),
        ]
        result = analyze_feed(messages, 30, now)
        assert result.operator_presence
        assert result.disclosure_awareness
        assert result.engagement_score == 9.42
        assert result.sentiment_distribution.neutral == 100

    def test_anomalies_use_sentiment_labels(self, make_message, now):
        contents = ["bom", "ruim"] * 5
        messages = [
            make_message(author_id="user_flip", content=content,
                         timestamp=f"2025-09-10T09:{40 + i}:00Z")
            for i, content in enumerate(contents)
        ]
        result = analyze_feed(messages, 30, now)
        assert result.anomalies.alternating_users == ["user_flip"]
        assert result.anomalies.burst_users == []
