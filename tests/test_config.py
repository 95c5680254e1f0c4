import pytest
from pydantic import ValidationError

from yandex_ocr.core.config import DEFAULT_BASE_URL, Settings


def test_defaults_match_service_limits() -> None:
    config = Settings(_env_file=None)

    assert config.yandex_ocr_base_url == DEFAULT_BASE_URL
    assert config.yandex_ocr_languages == ["ru"]
    assert config.yandex_token_validity_seconds == 3 * 60 * 60
    assert config.yandex_poll_max_attempts == 30
    assert config.yandex_poll_delay_seconds == 0.6
    assert config.yandex_token_command == "yc iam create-token"


def test_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("YANDEX_FOLDER_ID", "b1gfolder")
    monkeypatch.setenv("YANDEX_OCR_LANGUAGES", '["kk", "ru"]')

    config = Settings(_env_file=None)

    assert config.yandex_folder_id == "b1gfolder"
    assert config.yandex_ocr_languages == ["kk", "ru"]
    assert config.has_credentials is True


def test_rejects_empty_languages() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, yandex_ocr_languages=[" "])


def test_rejects_non_positive_attempts() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, yandex_poll_max_attempts=0)
