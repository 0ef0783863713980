"""
Pydantic models for API requests and responses.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.exceptions import ValidationError

MISSING_FIELDS_MESSAGE = "YouTube URL, topic, and at least one subtopic are required."


class CamelModel(BaseModel):
    """Serializes to camelCase, accepts either spelling on input."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Provider(str, Enum):
    GROQ = "groq"
    GEMINI = "gemini"

    def __str__(self):
        return str(self.value)


class AnalysisRequest(CamelModel):
    youtube_url: Optional[str] = None
    topic: Optional[str] = None
    custom_subtopics: Optional[List[str]] = None
    provider: Optional[str] = Provider.GROQ.value

    def validate_fields(self) -> "AnalysisRequest":
        """
        Check required fields and return a cleaned copy.

        Subtopics are stripped and blank entries dropped before the
        non-empty check.

        Raises:
            ValidationError: If the URL, topic or every subtopic is missing
        """
        subtopics = [s.strip() for s in self.custom_subtopics or [] if s.strip()]
        youtube_url = (self.youtube_url or "").strip()
        topic = (self.topic or "").strip()

        if not youtube_url or not topic or not subtopics:
            raise ValidationError(MISSING_FIELDS_MESSAGE)

        return self.model_copy(
            update={
                "youtube_url": youtube_url,
                "topic": topic,
                "custom_subtopics": subtopics,
                "provider": (self.provider or Provider.GROQ.value).strip(),
            }
        )


class CoverageItem(CamelModel):
    subtopic: str
    coverage_score: int = Field(ge=0, le=100)
    covered: bool
    evidence: str


class CoverageReport(CamelModel):
    overall_score: int = Field(ge=0, le=100)
    subtopic_analysis: List[CoverageItem]
    summary: str


class VideoInfo(CamelModel):
    model_config = ConfigDict(frozen=True)

    video_id: str
    title: str = ""
    description: str = ""
    channel_title: str = ""
    published_at: str = ""
    thumbnail: str = ""

    @property
    def watch_url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"


class VideoInfoResponse(CamelModel):
    video_id: str
    title: str
    channel_title: str
    published_at: str
    thumbnail: str
    youtube_url: str


class AnalysisResponse(CamelModel):
    success: bool = True
    provider: str
    video_info: VideoInfoResponse
    transcript: str
    subtopics: List[str]
    analysis: CoverageReport


class HealthResponse(CamelModel):
    status: str = "OK"
    message: str = "Server running"
    has_groq_key: bool
    has_gemini_key: bool
    has_youtube_key: bool = Field(alias="hasYouTubeKey")


def to_video_info(video_id: str, data: dict) -> VideoInfo:
    """
    Transform one item of a YouTube ``videos.list`` response into VideoInfo.

    Args:
        video_id: The identifier the item was requested with
        data: Video resource with a nested snippet

    Returns:
        VideoInfo: Formatted video data
    """
    snippet = data.get("snippet", {})

    return VideoInfo(
        video_id=video_id,
        title=snippet.get("title", ""),
        description=snippet.get("description") or "",
        channel_title=snippet.get("channelTitle", ""),
        published_at=snippet.get("publishedAt", ""),
        thumbnail=snippet.get("thumbnails", {}).get("default", {}).get("url", ""),
    )


def to_video_info_response(video: VideoInfo) -> VideoInfoResponse:
    return VideoInfoResponse(
        video_id=video.video_id,
        title=video.title,
        channel_title=video.channel_title,
        published_at=video.published_at,
        thumbnail=video.thumbnail,
        youtube_url=video.watch_url,
    )
