import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from app.exceptions import ConfigurationError

logger = logging.getLogger("coverage")


@dataclass(frozen=True)
class ProviderConfig:
    model: str
    temperature: Optional[float] = None


class ProviderConfigLoader:
    def __init__(self, config_path: str = "provider_config.yaml"):
        """Initialize the loader with an optional YAML override file."""
        logger.info(f"Initializing ProviderConfigLoader with config path: {config_path}")
        self.config = self._load_config(config_path)
        logger.debug(f"Loaded provider configuration: {self.config}")

    def _load_config(self, config_path: str) -> Dict[str, Any]:
        """Load the YAML configuration file."""
        try:
            with open(config_path, "r") as file:
                config = yaml.safe_load(file) or {}
                logger.info("Successfully loaded provider configuration file")
        except FileNotFoundError:
            logger.info(
                f"Provider config not found at {config_path}, using default configuration"
            )
            return self._get_default_config()
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading provider config: {str(e)}", exc_info=True)
            logger.info("Falling back to default configuration")
            return self._get_default_config()

        providers = self._get_default_config()["providers"]
        overrides_by_name = config.get("providers") if isinstance(config, dict) else None
        if not isinstance(overrides_by_name, dict):
            logger.warning("Provider config has no providers mapping, using defaults")
            return {"providers": providers}

        for name, overrides in overrides_by_name.items():
            if not isinstance(overrides, dict):
                logger.warning(f"Ignoring non-mapping provider config for: {name}")
                continue
            key = str(name).lower()
            providers[key] = {**providers.get(key, {}), **overrides}
        return {"providers": providers}

    def _get_default_config(self) -> Dict[str, Any]:
        """Return default configuration if YAML file is missing."""
        return {
            "providers": {
                "groq": {
                    "model": "meta-llama/llama-4-scout-17b-16e-instruct",
                    "temperature": None,
                },
                "gemini": {
                    "model": "gemini-2.5-flash",
                    "temperature": 0.1,
                },
            }
        }

    def get(self, provider: str) -> ProviderConfig:
        """
        Get the model settings for a provider.

        Raises:
            ConfigurationError: If the provider has no configuration
        """
        entry = self.config["providers"].get(provider.lower())
        if not entry or not entry.get("model"):
            raise ConfigurationError(f"No model configured for provider: {provider}")

        return ProviderConfig(
            model=entry["model"], temperature=entry.get("temperature")
        )
