"""
LLM provider clients sharing a single ``complete`` contract.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Type

import httpx
from groq import APIError, AsyncGroq

from app.exceptions import ConfigurationError, ProviderError
from app.logger import get_logger
from app.models import Provider
from app.provider_config import ProviderConfig, ProviderConfigLoader
from app.settings import AppSettings

logger = get_logger("llm")

Message = Dict[str, str]


class BaseLLMClient(ABC):
    """Abstract base class for LLM providers"""

    provider: Provider

    def __init__(self, api_key: str, config: ProviderConfig, timeout: float = 30.0):
        self.api_key = api_key
        self.config = config
        self.timeout = timeout

    @abstractmethod
    async def complete(self, messages: List[Message], max_tokens: int) -> str:
        """
        Send an ordered message exchange and return the model's text.

        Args:
            messages: Sequence of {"role", "content"} dicts
            max_tokens: Output token cap

        Returns:
            str: The trimmed completion text

        Raises:
            ProviderError: If the call fails or the response is malformed
        """
        pass

    @classmethod
    @abstractmethod
    def from_settings(
        cls, settings: AppSettings, config: ProviderConfig
    ) -> "BaseLLMClient":
        pass

    def _require_key(self) -> None:
        if not self.api_key:
            raise ProviderError(f"{self.provider.value} API key is not configured")


class GroqChatClient(BaseLLMClient):
    provider = Provider.GROQ

    def __init__(
        self,
        api_key: str,
        config: ProviderConfig,
        timeout: float = 30.0,
        client: Optional[AsyncGroq] = None,
    ):
        super().__init__(api_key, config, timeout)
        self._client = client

    @classmethod
    def from_settings(
        cls, settings: AppSettings, config: ProviderConfig
    ) -> "GroqChatClient":
        return cls(settings.groq_api_key, config, timeout=settings.request_timeout)

    @property
    def client(self) -> AsyncGroq:
        if self._client is None:
            self._client = AsyncGroq(api_key=self.api_key, max_retries=0)
        return self._client

    async def complete(self, messages: List[Message], max_tokens: int) -> str:
        self._require_key()
        logger.info(f"Calling Groq model {self.config.model}")
        options = {}
        if self.config.temperature is not None:
            options["temperature"] = self.config.temperature
        try:
            completion = await asyncio.wait_for(
                self.client.chat.completions.create(
                    messages=messages,
                    model=self.config.model,
                    max_completion_tokens=max_tokens,
                    **options,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.error(f"Groq API call timed out after {self.timeout} seconds")
            raise ProviderError("Groq API call timed out")
        except APIError as e:
            logger.error(f"Groq API error: {str(e)}")
            raise ProviderError(f"Groq API call failed: {str(e)}") from e

        if not completion.choices:
            raise ProviderError("No choices returned from Groq API")

        content = completion.choices[0].message.content
        if not content:
            raise ProviderError("Empty content received from Groq API")
        return content.strip()


class GeminiPromptClient(BaseLLMClient):
    """Single-prompt client: the generateContent API has no chat turns here."""

    provider = Provider.GEMINI

    def __init__(
        self,
        api_key: str,
        config: ProviderConfig,
        timeout: float = 30.0,
        api_base: str = "https://generativelanguage.googleapis.com/v1beta",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(api_key, config, timeout)
        self.api_url = f"{api_base.rstrip('/')}/models/{config.model}:generateContent"
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: AppSettings, config: ProviderConfig
    ) -> "GeminiPromptClient":
        return cls(
            settings.gemini_api_key,
            config,
            timeout=settings.request_timeout,
            api_base=settings.gemini_api_base,
        )

    def _build_payload(self, messages: List[Message], max_tokens: int) -> dict:
        prompt = "\n\n".join(message["content"] for message in messages)
        generation_config = {"maxOutputTokens": max_tokens}
        if self.config.temperature is not None:
            generation_config["temperature"] = self.config.temperature
        return {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": generation_config,
        }

    async def complete(self, messages: List[Message], max_tokens: int) -> str:
        self._require_key()
        logger.info(f"Calling Gemini model {self.config.model}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.api_url,
                    params={"key": self.api_key},
                    json=self._build_payload(messages, max_tokens),
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.error(f"Gemini API transport error: {e.__class__.__name__}")
            raise ProviderError(f"Gemini API call failed: {e.__class__.__name__}") from e

        if response.status_code != 200:
            logger.error(
                f"Gemini API returned status {response.status_code}: {response.text[:500]}"
            )
            raise ProviderError(
                f"Gemini API call failed with status {response.status_code}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError("Invalid JSON response from Gemini API") from e

        candidates = data.get("candidates") if isinstance(data, dict) else None
        if not candidates:
            raise ProviderError("No candidates returned from Gemini API")

        content = candidates[0].get("content") or {}
        parts = content.get("parts")
        if not parts:
            raise ProviderError("No content parts in Gemini response")

        return (parts[0].get("text") or "").strip()


LLM_CLIENTS: Dict[str, Type[BaseLLMClient]] = {
    Provider.GROQ.value: GroqChatClient,
    Provider.GEMINI.value: GeminiPromptClient,
}


def get_llm_client(
    provider: str,
    settings: AppSettings,
    provider_configs: ProviderConfigLoader,
) -> BaseLLMClient:
    """
    Select the client for a provider name.

    Raises:
        ConfigurationError: If the provider name is not recognized
    """
    name = (provider or "").strip().lower()
    client_cls = LLM_CLIENTS.get(name)
    if client_cls is None:
        raise ConfigurationError(f"Unknown provider: {provider}")

    return client_cls.from_settings(settings, provider_configs.get(name))
