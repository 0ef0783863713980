"""
YouTube Data API metadata lookup.
"""

import asyncio

import httplib2
from googleapiclient.discovery import Resource
from googleapiclient.errors import HttpError

from app.exceptions import NotFoundError, UpstreamError
from app.logger import get_logger
from app.models import VideoInfo, to_video_info

logger = get_logger("video_metadata")


class VideoMetadataFetcher:
    def __init__(self, youtube_client: Resource):
        self.client = youtube_client

    async def fetch_metadata(self, video_id: str) -> VideoInfo:
        """
        Fetch title, description, channel, publish date and thumbnail.

        Raises:
            NotFoundError: If no video matches the ID
            UpstreamError: On any transport or HTTP failure
        """
        logger.info(f"Fetching video metadata for video_id: {video_id}")
        request = self.client.videos().list(part="snippet", id=video_id)
        try:
            video_data = await asyncio.to_thread(request.execute)
        except HttpError as e:
            logger.error(f"YouTube API HTTP error: {e.resp.status}")
            raise UpstreamError(
                f"YouTube API request failed with status {e.resp.status}"
            ) from e
        except (httplib2.HttpLib2Error, OSError) as e:
            logger.error(f"YouTube API transport error: {str(e)}")
            raise UpstreamError(f"YouTube API request failed: {str(e)}") from e

        if not video_data.get("items"):
            logger.warning(f"No video found with ID: {video_id}")
            raise NotFoundError("Video not found")

        return to_video_info(video_id, video_data["items"][0])
