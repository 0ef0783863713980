import pytest

from app.models import VideoInfo


class FakeLLMClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def complete(self, messages, max_tokens):
        self.calls.append((messages, max_tokens))
        if self.error is not None:
            raise self.error
        return self.response


class FakeMetadataFetcher:
    def __init__(self, video_info=None, error=None):
        self.video_info = video_info
        self.error = error
        self.calls = []

    async def fetch_metadata(self, video_id):
        self.calls.append(video_id)
        if self.error is not None:
            raise self.error
        return self.video_info


class FakeTranscriptSource:
    def __init__(self, transcript=None, error=None):
        self.transcript = transcript
        self.error = error
        self.calls = []

    async def fetch_transcript(self, video_id):
        self.calls.append(video_id)
        if self.error is not None:
            raise self.error
        return self.transcript


@pytest.fixture
def video_info():
    return VideoInfo(
        video_id="dQw4w9WgXcQ",
        title="Photosynthesis Explained",
        description="How plants turn light into energy.",
        channel_title="Biology Basics",
        published_at="2023-04-01T12:00:00Z",
        thumbnail="https://i.ytimg.com/vi/dQw4w9WgXcQ/default.jpg",
    )
