from abc import ABC, abstractmethod


class BaseTranscriptProcessor(ABC):
    """Abstract base class for transcript sources"""

    @abstractmethod
    async def fetch_transcript(self, video_id: str) -> str:
        """
        Fetch transcript for a given video ID

        Args:
            video_id (str): The YouTube video ID

        Returns:
            str: The transcript text

        Raises:
            TranscriptUnavailableError: If transcript cannot be fetched
        """
        pass
