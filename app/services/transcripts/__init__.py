from .processor import TranscriptProcessor
from .transcript_types import BaseTranscriptProcessor
from .implementations import (
    TranscriptorApiProcessor,
    VideoDescriptionProcessor,
)

__all__ = [
    "TranscriptProcessor",
    "BaseTranscriptProcessor",
    "TranscriptorApiProcessor",
    "VideoDescriptionProcessor",
]
