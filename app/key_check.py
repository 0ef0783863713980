"""
Live credential checks: one minimal call per configured service.
"""

import functools
from typing import Awaitable, Callable, Dict, Optional, Tuple

from app.deps import get_youtube_client
from app.exceptions import CoverageServiceError
from app.llm_clients import BaseLLMClient, get_llm_client
from app.logger import get_logger
from app.provider_config import ProviderConfigLoader
from app.services.video_metadata import VideoMetadataFetcher
from app.settings import AppSettings

logger = get_logger("key_check")

CHECK_VIDEO_ID = "dQw4w9WgXcQ"
CHECK_MAX_TOKENS = 50

KeyCheck = Callable[[], Awaitable[str]]


async def ping_llm(llm_client: BaseLLMClient, name: str) -> str:
    return await llm_client.complete(
        [{"role": "user", "content": f"Hello {name}!"}], max_tokens=CHECK_MAX_TOKENS
    )


async def ping_youtube(metadata_fetcher: VideoMetadataFetcher) -> str:
    video_info = await metadata_fetcher.fetch_metadata(CHECK_VIDEO_ID)
    return video_info.title


def build_key_checks(
    app_settings: AppSettings,
    provider_configs: Optional[ProviderConfigLoader] = None,
    metadata_fetcher: Optional[VideoMetadataFetcher] = None,
) -> Dict[str, KeyCheck]:
    """
    Assemble the Groq, Gemini and YouTube checks from the app's own clients.

    Args:
        app_settings: Settings holding the credentials to check
        provider_configs: Model settings; loaded from the configured path if omitted
        metadata_fetcher: YouTube fetcher; built from the settings if omitted

    Returns:
        Mapping of service name to a zero-argument coroutine function
    """
    if provider_configs is None:
        provider_configs = ProviderConfigLoader(app_settings.provider_config_path)
    if metadata_fetcher is None:
        metadata_fetcher = VideoMetadataFetcher(get_youtube_client(app_settings))

    return {
        "Groq": functools.partial(
            ping_llm, get_llm_client("groq", app_settings, provider_configs), "Groq"
        ),
        "Gemini": functools.partial(
            ping_llm, get_llm_client("gemini", app_settings, provider_configs), "Gemini"
        ),
        "YouTube": functools.partial(ping_youtube, metadata_fetcher),
    }


async def run_key_checks(checks: Dict[str, KeyCheck]) -> Dict[str, Tuple[bool, str]]:
    """Run each check in order; a failure is recorded, not raised."""
    results = {}
    for name, check in checks.items():
        try:
            detail = await check()
        except CoverageServiceError as e:
            logger.warning(f"{name} key check failed: {str(e)}")
            results[name] = (False, str(e))
        else:
            results[name] = (True, detail)
    return results
