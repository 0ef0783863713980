from app.logger import get_logger
from app.prompts import NO_TRANSCRIPT
from app.services.video_metadata import VideoMetadataFetcher
from ..transcript_types import BaseTranscriptProcessor

logger = get_logger("transcript")


class VideoDescriptionProcessor(BaseTranscriptProcessor):
    """Uses the video description when no transcript can be had."""

    def __init__(self, metadata_fetcher: VideoMetadataFetcher):
        self.metadata_fetcher = metadata_fetcher

    async def fetch_transcript(self, video_id: str) -> str:
        video_info = await self.metadata_fetcher.fetch_metadata(video_id)
        if not video_info.description:
            logger.info(f"No description for video ID: {video_id}")
            return NO_TRANSCRIPT
        return video_info.description
