from typing import List

from app.logger import get_logger
from .transcript_types import BaseTranscriptProcessor

logger = get_logger("transcript")


class TranscriptProcessor(BaseTranscriptProcessor):
    """Tries each source in sequence, then hands off to the fallback.

    Failures of the primary sources are logged and dropped. Errors raised by
    the fallback propagate to the caller.
    """

    def __init__(
        self,
        processors: List[BaseTranscriptProcessor],
        fallback: BaseTranscriptProcessor,
    ):
        self.processors = processors
        self.fallback = fallback

    async def fetch_transcript(self, video_id: str) -> str:
        for processor in self.processors:
            try:
                transcript = await processor.fetch_transcript(video_id)
            except Exception as e:
                logger.warning(f"{processor.__class__.__name__} failed: {str(e)}")
                continue
            if transcript:
                return transcript

        logger.info(
            f"Falling back to {self.fallback.__class__.__name__} for video ID: {video_id}"
        )
        return await self.fallback.fetch_transcript(video_id)
