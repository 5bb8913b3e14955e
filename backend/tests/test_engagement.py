"""
Unit tests for the engagement index.
"""

from __future__ import annotations

import hashlib

import pytest

from app.core.engagement import (
    GOLDEN_RATIO_BONUS,
    calculate_engagement_rate,
    compute_engagement_score,
    simulate_followers,
)
from app.models import MetaFlags


def sha_int(text: str) -> int:
    return int(hashlib.sha256(text.encode("utf-8")).hexdigest(), 16)


class TestFollowers:

    def test_default_range(self):
        assert simulate_followers("user_123") == sha_int("user_123") % 10000 + 100

    def test_thirteen_codepoint_ids(self):
        author_id = "user_abcdefgh"
        assert len(author_id) == 13
        followers = simulate_followers(author_id)
        assert followers == sha_int(author_id) % 9000 + 1000
        assert 1000 <= followers < 10000

    def test_prime_suffix_bonus(self):
        author_id = "user_x_prime"
        assert simulate_followers(author_id) == sha_int(author_id) % 10000 + 100 + 113

    def test_non_ascii_ids_are_normalized(self):
        composed = "user_jos\u00e9"
        decomposed = "user_jose\u0301"
        assert simulate_followers(composed) == sha_int(decomposed) % 10000 + 100

    def test_deterministic(self):
        assert simulate_followers("user_repeat") == simulate_followers("user_repeat")


class TestEngagementRate:

    def test_plain_rate(self, make_message):
        assert calculate_engagement_rate(make_message(reactions=3, shares=2, views=100)) == pytest.approx(0.05)

    def test_no_views(self, make_message):
        assert calculate_engagement_rate(make_message(reactions=3, views=0)) == 0.0

    def test_golden_ratio_bonus_on_multiples_of_seven(self, make_message):
        rate = calculate_engagement_rate(make_message(reactions=5, shares=2, views=100))
        assert rate == pytest.approx(0.07 * GOLDEN_RATIO_BONUS)


class TestEngagementScore:

    def test_disclosure_override(self, make_message):
        meta = MetaFlags(disclosure_awareness=True)
        assert compute_engagement_score([make_message(reactions=999, views=1)], meta) == 9.42
        assert compute_engagement_score([], meta) == 9.42

    def test_empty_batch(self):
        assert compute_engagement_score([], MetaFlags()) == 0.0

    def test_mean_of_scores(self, make_message):
        messages = [
            make_message(author_id="user_aaa", reactions=1, views=10),
            make_message(author_id="user_bbb", reactions=0, views=10),
        ]
        expected = (
            (simulate_followers("user_aaa") * 0.4 + 0.1 * 0.6)
            + simulate_followers("user_bbb") * 0.4
        ) / 2
        assert compute_engagement_score(messages, MetaFlags()) == pytest.approx(expected)

    def test_suffix_007_halves_and_operator_adds(self, make_message):
        author_id = "user_mbras_007"
        expected = simulate_followers(author_id) * 0.4 * 0.5 + 2.0
        score = compute_engagement_score([make_message(author_id=author_id)], MetaFlags())
        assert score == pytest.approx(expected)

    def test_identical_input_gives_identical_score(self, make_message):
        messages = [make_message(author_id="user_same", reactions=7, views=50)]
        first = compute_engagement_score(messages, MetaFlags())
        second = compute_engagement_score(list(messages), MetaFlags())
        assert first == second
