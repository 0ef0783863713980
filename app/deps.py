import functools
from typing import Annotated

import googleapiclient.discovery
import httplib2
from fastapi import Depends

from app.llm_clients import get_llm_client
from app.provider_config import ProviderConfigLoader
from app.services.coverage_analyzer import CoverageAnalyzer
from app.services.transcripts import (
    TranscriptProcessor,
    TranscriptorApiProcessor,
    VideoDescriptionProcessor,
)
from app.services.video_metadata import VideoMetadataFetcher
from app.settings import AppSettings, settings


def get_settings() -> AppSettings:
    return settings


@functools.lru_cache(maxsize=None)
def _load_provider_configs(config_path: str) -> ProviderConfigLoader:
    return ProviderConfigLoader(config_path)


def get_provider_configs(
    app_settings: Annotated[AppSettings, Depends(get_settings)],
) -> ProviderConfigLoader:
    return _load_provider_configs(app_settings.provider_config_path)


def get_youtube_client(
    app_settings: Annotated[AppSettings, Depends(get_settings)],
) -> googleapiclient.discovery.Resource:
    http = httplib2.Http(timeout=app_settings.request_timeout)

    return googleapiclient.discovery.build(
        "youtube",
        "v3",
        developerKey=app_settings.youtube_api_key,
        http=http,
        cache_discovery=False,
    )


def get_metadata_fetcher(
    client: Annotated[googleapiclient.discovery.Resource, Depends(get_youtube_client)],
) -> VideoMetadataFetcher:
    return VideoMetadataFetcher(client)


def get_transcript_processor(
    app_settings: Annotated[AppSettings, Depends(get_settings)],
    metadata_fetcher: Annotated[VideoMetadataFetcher, Depends(get_metadata_fetcher)],
) -> TranscriptProcessor:
    return TranscriptProcessor(
        processors=[
            TranscriptorApiProcessor(
                app_settings.transcript_api_url, timeout=app_settings.request_timeout
            ),
        ],
        fallback=VideoDescriptionProcessor(metadata_fetcher),
    )


def get_coverage_analyzer(
    app_settings: Annotated[AppSettings, Depends(get_settings)],
    provider_configs: Annotated[ProviderConfigLoader, Depends(get_provider_configs)],
) -> CoverageAnalyzer:
    client_factory = functools.partial(
        get_llm_client, settings=app_settings, provider_configs=provider_configs
    )
    return CoverageAnalyzer(client_factory)


Settings = Annotated[AppSettings, Depends(get_settings)]
MetadataFetcher = Annotated[VideoMetadataFetcher, Depends(get_metadata_fetcher)]
Transcripts = Annotated[TranscriptProcessor, Depends(get_transcript_processor)]
Analyzer = Annotated[CoverageAnalyzer, Depends(get_coverage_analyzer)]
