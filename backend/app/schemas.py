# app/schemas.py
import re
from typing import Any, List, Optional, Union

from pydantic import BaseModel, NonNegativeInt, StrictFloat, StrictInt, StrictStr, field_validator
from pydantic_core import PydanticCustomError

from app.config import MAX_CONTENT_LENGTH
from app.models import FeedAnalysis, Message
from app.utils import parse_utc_timestamp

USER_ID_PATTERN = re.compile(r"user_[a-z0-9_]{3,}", re.IGNORECASE | re.ASCII)
TIMESTAMP_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?Z")
HASHTAG_PATTERN = re.compile(r"#\w+")

# error types whose message is returned to the client verbatim
CUSTOM_ERROR_TYPES = {"invalid_user_id", "content_too_long", "invalid_timestamp", "invalid_hashtags"}


class FeedMessageIn(BaseModel):
    user_id: StrictStr
    content: StrictStr
    timestamp: StrictStr
    reactions: Optional[NonNegativeInt] = None
    shares: Optional[NonNegativeInt] = None
    views: Optional[NonNegativeInt] = None
    hashtags: Optional[List[StrictStr]] = None

    @field_validator("user_id")
    @classmethod
    def check_user_id(cls, value: str) -> str:
        if not USER_ID_PATTERN.fullmatch(value):
            raise PydanticCustomError("invalid_user_id", "Invalid user_id")
        return value

    @field_validator("content")
    @classmethod
    def check_content(cls, value: str) -> str:
        if len(value) > MAX_CONTENT_LENGTH:
            raise PydanticCustomError(
                "content_too_long", f"Content exceeds {MAX_CONTENT_LENGTH} characters"
            )
        return value

    @field_validator("timestamp")
    @classmethod
    def check_timestamp(cls, value: str) -> str:
        if not TIMESTAMP_PATTERN.fullmatch(value) or parse_utc_timestamp(value) is None:
            raise PydanticCustomError("invalid_timestamp", "Invalid timestamp")
        return value

    @field_validator("hashtags")
    @classmethod
    def check_hashtags(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is not None and not all(HASHTAG_PATTERN.fullmatch(tag) for tag in value):
            raise PydanticCustomError("invalid_hashtags", "Invalid hashtags")
        return value

    def to_message(self) -> Message:
        return Message(
            author_id=self.user_id,
            content=self.content,
            timestamp=self.timestamp,
            reactions=self.reactions or 0,
            shares=self.shares or 0,
            views=self.views or 0,
            hashtags=tuple(self.hashtags or ()),
        )


class AnalyzeFeedRequest(BaseModel):
    messages: List[FeedMessageIn]
    time_window_minutes: Union[StrictInt, StrictFloat]


class SentimentDistributionOut(BaseModel):
    positive: float
    negative: float
    neutral: float


class TrendingTopicOut(BaseModel):
    hashtag: str
    weight: float
    frequency: int
    sentiment_modifier: float


class AnomaliesOut(BaseModel):
    burst_users: list[str]
    alternating_users: list[str]
    synchronized_clusters: list[str]


class FeedAnalysisOut(BaseModel):
    sentiment_distribution: SentimentDistributionOut
    trending_topics: list[TrendingTopicOut]
    anomalies: AnomaliesOut
    engagement_score: float
    mbras_employee: bool
    candidate_awareness: bool
    special_pattern: bool

    @classmethod
    def from_analysis(cls, analysis: FeedAnalysis) -> "FeedAnalysisOut":
        return cls(
            sentiment_distribution=SentimentDistributionOut.model_validate(
                analysis.sentiment_distribution, from_attributes=True
            ),
            trending_topics=[
                TrendingTopicOut.model_validate(topic, from_attributes=True)
                for topic in analysis.trending_topics
            ],
            anomalies=AnomaliesOut.model_validate(analysis.anomalies, from_attributes=True),
            engagement_score=analysis.engagement_score,
            mbras_employee=analysis.operator_presence,
            candidate_awareness=analysis.disclosure_awareness,
            special_pattern=analysis.signature_pattern,
        )


class AnalyzeFeedResponse(BaseModel):
    message: Optional[str] = None
    data: FeedAnalysisOut


class ErrorResponse(BaseModel):
    message: str
    details: Optional[Any] = None
