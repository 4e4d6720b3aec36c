"""Pydantic data models for trend records and snapshots."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    """Base for all serialized models: frozen, camelCase on the wire."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class _KeywordRecord(_Record):
    keyword: str = Field(..., min_length=1, description="Trimmed display keyword")

    @field_validator("keyword")
    @classmethod
    def strip_keyword(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("keyword must not be blank")
        return value


class DailyTrendRecord(_KeywordRecord):
    """A search from the Google daily trends feed."""

    traffic_label: Optional[str] = Field(default=None, description="Formatted traffic, e.g. '200K+'")
    snippet: Optional[str] = Field(default=None, description="Snippet of the top related article")
    article_url: Optional[str] = Field(default=None, description="URL of the top related article")


class RealtimeTrendRecord(_KeywordRecord):
    """A story from the Google realtime trends feed."""

    headline: Optional[str] = Field(default=None, description="Headline of the top article")
    source: Optional[str] = Field(default=None, description="Publisher of the top article")
    article_url: Optional[str] = Field(default=None, description="URL of the top article")


class VideoTrendRecord(_KeywordRecord):
    """A video from the YouTube trending page."""

    channel: Optional[str] = Field(default=None, description="Channel name")
    views_label: Optional[str] = Field(default=None, description="View count label, e.g. '1.2M views'")
    video_url: str = Field(..., min_length=1, description="Watch URL")


class KeywordSource(str, Enum):
    GOOGLE_DAILY = "google-daily"
    GOOGLE_REALTIME = "google-realtime"
    YOUTUBE = "youtube"
    MULTI = "multi"


class UnifiedKeyword(_Record):
    """A deduplicated keyword, possibly merged from several sources."""

    keyword: str
    source: KeywordSource
    details: Optional[str] = None
    url: Optional[str] = None


class TrendSnapshot(_Record):
    """One timestamped aggregation across all sources."""

    generated_at: str = Field(..., description="ISO-8601 generation timestamp")
    keywords: List[UnifiedKeyword] = Field(default_factory=list)
    google_daily: List[DailyTrendRecord] = Field(default_factory=list)
    google_realtime: List[RealtimeTrendRecord] = Field(default_factory=list)
    youtube: List[VideoTrendRecord] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """JSON-ready dict using wire names, with absent optionals omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
