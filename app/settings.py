from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    youtube_api_key: str = ""
    groq_api_key: str = ""
    gemini_api_key: str = ""
    host: str = "localhost"
    port: int = 5000
    app_env: str = "production"
    request_timeout: float = 30.0
    transcript_api_url: str = "https://youtube-transcriptor.vercel.app/transcript"
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    provider_config_path: str = "provider_config.yaml"

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=False
    )

    @property
    def is_development(self) -> bool:
        return self.app_env.lower() == "development"


settings = AppSettings()
