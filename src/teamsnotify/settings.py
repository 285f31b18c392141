from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TeamsSettings(BaseSettings):
    """Teams 웹훅 전송 관련 설정."""

    webhook_url: str = Field(default="", alias="TEAMS_WEBHOOK_URL")
    timeout: float = Field(
        default=5.0,
        alias="TEAMS_TIMEOUT",
        description="요청 타임아웃(초). 요청 단위가 아닌 클라이언트 단위로 적용된다.",
    )
    skip_webhook_url_validation: bool = Field(default=False, alias="TEAMS_SKIP_WEBHOOK_URL_VALIDATION")
    webhook_url_validation_patterns: list[str] = Field(
        default_factory=list,
        alias="TEAMS_WEBHOOK_URL_VALIDATION_PATTERNS",
        description='JSON 배열 (예: ["^https://.*\\\\.domain\\\\.com/.*$"]). 비어 있으면 기본 패턴 사용.',
    )
    debug: bool = Field(default=False, alias="TEAMS_DEBUG")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Settings(BaseSettings):
    """애플리케이션 전역 설정."""

    env: str = Field(default="local", alias="ENV")
    teams: TeamsSettings = Field(default_factory=TeamsSettings)

    model_config = SettingsConfigDict(env_file=".env", env_nested_delimiter="__", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """설정을 캐싱해 로드한다."""
    return Settings()
