"""
Lexicon-based sentiment scoring for Portuguese feed messages.

This module tokenizes each message, scores it against closed positive and
negative lexicons with intensifier and negation handling, and aggregates the
per-message labels into a percentage distribution.
"""
from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from app.models import Message, MessageSentiment, SentimentDistribution, SentimentLabel
from app.utils import fold_text, has_operator_marker

# Hashtag tokens are recognised so they can be excluded from scoring
TOKEN_PATTERN = re.compile(r"#?\w+")

META_PHRASE = "teste tecnico mbras"

POSITIVE_WORDS = frozenset({
    "bom", "boa", "otimo", "excelente", "adorei", "adoro", "amei", "gostei",
    "feliz", "incrivel", "maravilhoso", "top", "positivo",
})
NEGATIVE_WORDS = frozenset({
    "ruim", "pessimo", "odiei", "odeio", "horrivel", "triste", "terrivel",
    "negativo", "lento", "pior",
})
INTENSIFIERS = frozenset({"muito", "super", "extremamente", "mega", "hiper", "bem"})
NEGATIONS = frozenset({"nao", "nunca", "jamais", "sem"})

INTENSIFIER_FACTOR = 1.5
NEGATION_SCOPE = 3
OPERATOR_POSITIVE_BOOST = 2.0
LABEL_THRESHOLD = 0.1


def tokenize(content: str) -> List[str]:
    """
    Split content into normalized scoring tokens.

    Args:
        content: Raw message text

    Returns:
        Folded non-hashtag tokens, in order of appearance
    """
    return [
        fold_text(token)
        for token in TOKEN_PATTERN.findall(content)
        if not token.startswith("#")
    ]


def label_for_score(score: float) -> SentimentLabel:
    if score > LABEL_THRESHOLD:
        return "positive"
    if score < -LABEL_THRESHOLD:
        return "negative"
    return "neutral"


def analyze_message(message: Message) -> MessageSentiment:
    """
    Score a single message.

    Intensifiers accumulate until the next polarity word, which is scaled by
    ``1.5 ** pending``. A polarity word up to three tokens after a negation is
    flipped. Positive words written by an operator account count double.

    Args:
        message: Message to score

    Returns:
        MessageSentiment with the averaged score over polarity words
    """
    tokens = tokenize(message.content)
    operator_author = has_operator_marker(message.author_id)

    score_sum = 0.0
    scored_tokens = 0
    pending_intensifiers = 0
    last_negation_index = None

    for index, token in enumerate(tokens):
        if token in INTENSIFIERS:
            pending_intensifiers += 1
            continue

        if token in NEGATIONS:
            last_negation_index = index
            continue

        if token in POSITIVE_WORDS:
            token_score = 1.0
        elif token in NEGATIVE_WORDS:
            token_score = -1.0
        else:
            continue

        if pending_intensifiers:
            token_score *= INTENSIFIER_FACTOR ** pending_intensifiers
            pending_intensifiers = 0

        if last_negation_index is not None and 1 <= index - last_negation_index <= NEGATION_SCOPE:
            token_score = -token_score

        if token_score > 0 and operator_author:
            token_score *= OPERATOR_POSITIVE_BOOST

        score_sum += token_score
        scored_tokens += 1

    score = score_sum / scored_tokens if scored_tokens else 0.0
    return MessageSentiment(
        label=label_for_score(score),
        score=score,
        is_meta=META_PHRASE in fold_text(message.content),
    )


def build_distribution(sentiments: Sequence[MessageSentiment]) -> SentimentDistribution:
    """
    Compute label percentages over non-meta messages.

    Args:
        sentiments: Per-message results

    Returns:
        Distribution summing to 100, or all-neutral when nothing qualifies
    """
    eligible = [s for s in sentiments if not s.is_meta]
    if not eligible:
        return SentimentDistribution(positive=0.0, negative=0.0, neutral=100.0)

    total = len(eligible)
    counts = {"positive": 0, "negative": 0, "neutral": 0}
    for sentiment in eligible:
        counts[sentiment.label] += 1

    return SentimentDistribution(
        positive=counts["positive"] / total * 100,
        negative=counts["negative"] / total * 100,
        neutral=counts["neutral"] / total * 100,
    )


def analyze_messages(
    messages: Sequence[Message],
) -> Tuple[SentimentDistribution, List[MessageSentiment]]:
    """
    Perform sentiment analysis on a filtered batch.

    Args:
        messages: Filtered messages

    Returns:
        Tuple of (distribution, per-message sentiments aligned with ``messages``)
    """
    sentiments = [analyze_message(message) for message in messages]
    return build_distribution(sentiments), sentiments
