from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    env: str = "development"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    cors_origins: list[str] = ["http://localhost:3000"]
    log_level: str = "INFO"

    # GROQ_API_KEY 우선, OpenAI 호환 키 이름도 허용
    groq_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GROQ_API_KEY", "OPENAI_API_KEY"),
    )
    groq_model: str = "llama3-8b-8192"
    groq_base_url: str = "https://api.groq.com/openai/v1"
    ai_max_tokens: int = 400
    ai_temperature: float = 0.5
    ai_top_p: float = 1.0
    ai_request_timeout_sec: int = 30

    memory_window: int = 5
    memory_scope: Literal["session", "shared"] = "session"
    memory_max_sessions: int = 1000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
