from .transcriptor_api import TranscriptorApiProcessor
from .video_description import VideoDescriptionProcessor

__all__ = [
    "TranscriptorApiProcessor",
    "VideoDescriptionProcessor",
]
