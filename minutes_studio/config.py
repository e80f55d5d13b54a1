from functools import lru_cache
from pathlib import Path
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_PROMPT_PATH = str(Path(__file__).resolve().parent / "prompts" / "minutes_system.txt")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parents[1] / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_host: str = "0.0.0.0"
    api_port: int = 8000
    log_level: str = "INFO"
    cors_origins: Annotated[list[str], NoDecode] = ["http://localhost:3000"]

    aws_region: str | None = None
    aws_s3_bucket: str | None = None
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None
    upload_url_expires_seconds: int = 600

    openai_api_key: str | None = None
    openai_text_model: str = "gpt-4o-mini"
    openai_transcribe_model: str = "gpt-4o-transcribe"
    openai_transcribe_fallback_model: str = "whisper-1"
    transcribe_language: str = "ja"
    minutes_prompt_path: str = DEFAULT_PROMPT_PATH

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors(cls, value: str | list[str]) -> list[str]:
        if isinstance(value, str):
            items = [item.strip() for item in value.split(",") if item.strip()]
            default_value = cls.model_fields["cors_origins"].default  # type: ignore[index]
            return items or default_value
        return value

    @field_validator("minutes_prompt_path", mode="before")
    @classmethod
    def default_prompt_path(cls, value: str | None) -> str:
        if value is None or not str(value).strip():
            return DEFAULT_PROMPT_PATH
        return value

    @property
    def storage_configured(self) -> bool:
        return all(
            (self.aws_region, self.aws_s3_bucket, self.aws_access_key_id, self.aws_secret_access_key)
        )

    @property
    def ai_configured(self) -> bool:
        return bool(self.openai_api_key)


@lru_cache
def get_settings() -> Settings:
    return Settings()
