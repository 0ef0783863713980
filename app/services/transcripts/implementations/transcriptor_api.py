from typing import Optional

import httpx

from app.exceptions import TranscriptUnavailableError
from app.logger import get_logger
from ..transcript_types import BaseTranscriptProcessor

logger = get_logger("transcript")


class TranscriptorApiProcessor(BaseTranscriptProcessor):
    def __init__(
        self,
        api_url: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_url = api_url
        self.timeout = timeout
        self._transport = transport

    async def fetch_transcript(self, video_id: str) -> str:
        try:
            logger.info(f"Making request to {self.api_url} with video ID: {video_id}")
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.get(self.api_url, params={"videoId": video_id})
        except httpx.HTTPError as e:
            logger.error(f"Transcript API HTTP error: {str(e)}")
            raise TranscriptUnavailableError(
                f"HTTP error retrieving transcript: {str(e)}"
            ) from e

        logger.info(f"Response status code: {response.status_code}")
        if response.status_code != 200:
            raise TranscriptUnavailableError(
                f"API request failed with status {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse JSON response: {str(e)}")
            raise TranscriptUnavailableError(f"Invalid JSON response: {str(e)}") from e

        transcript = data.get("transcript") if isinstance(data, dict) else None
        transcript_text = self._to_text(transcript)
        if not transcript_text:
            raise TranscriptUnavailableError("Transcript not available")

        logger.debug(f"Retrieved transcript of {len(transcript_text)} characters")
        return transcript_text

    @staticmethod
    def _to_text(transcript) -> str:
        """Accept a plain string or a list of {"text": ...} segments."""
        if isinstance(transcript, str):
            return transcript.strip()
        if isinstance(transcript, list):
            texts = []
            for segment in transcript:
                text = segment.get("text", "") if isinstance(segment, dict) else segment
                if isinstance(text, str) and text.strip():
                    texts.append(text.strip())
            return " ".join(texts)
        return ""
