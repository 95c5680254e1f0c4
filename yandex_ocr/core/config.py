from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://ocr.api.cloud.yandex.net/ocr/v1"

# Current IAM token shape, see https://yandex.cloud/ru/docs/iam/concepts/authorization/iam-token
DEFAULT_TOKEN_PATTERN = r"t1\.[A-Z0-9a-z_-]+[=]{0,2}\.[A-Z0-9a-z_-]{86}[=]{0,2}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_env: str = "dev"
    log_level: str = "info"

    yandex_api_key: str | None = None
    yandex_folder_id: str | None = None
    yandex_iam_token: str | None = None
    yandex_ocr_base_url: str = DEFAULT_BASE_URL
    yandex_ocr_model: str = "page"
    yandex_ocr_languages: list[str] = ["ru"]
    yandex_token_pattern: str = DEFAULT_TOKEN_PATTERN
    yandex_token_command: str = "yc iam create-token"
    yandex_token_validity_seconds: float = 3 * 60 * 60
    yandex_poll_max_attempts: int = 30
    yandex_poll_delay_seconds: float = 0.6
    yandex_poll_timeout_seconds: float | None = None
    http_timeout_seconds: float = 120.0

    @field_validator("yandex_ocr_languages")
    @classmethod
    def _ensure_languages_not_empty(cls, value: list[str]) -> list[str]:
        cleaned = [code.strip() for code in value if code.strip()]
        if not cleaned:
            raise ValueError("YANDEX_OCR_LANGUAGES must contain at least one language code")
        return cleaned

    @field_validator("yandex_poll_max_attempts")
    @classmethod
    def _ensure_positive_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("YANDEX_POLL_MAX_ATTEMPTS must be at least 1")
        return value

    @field_validator("yandex_token_validity_seconds", "yandex_poll_delay_seconds")
    @classmethod
    def _ensure_not_negative(cls, value: float) -> float:
        if value < 0:
            raise ValueError("Durations must not be negative")
        return value

    @property
    def has_credentials(self) -> bool:
        """True when either an API key or a folder id is configured."""

        return bool(self.yandex_api_key or self.yandex_folder_id)


settings = Settings()
